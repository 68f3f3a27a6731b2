"""Speaker identity models."""

from pydantic import BaseModel


class SpeakerProfile(BaseModel):
    """Names known for one speaker from each source."""

    linkedin_name: str | None = None
    github_display_name: str | None = None


class NameComparison(BaseModel):
    """Result of cross-checking a LinkedIn name against a GitHub name."""

    match: bool
    warning: str | None = None
