"""Application state held by the session controller."""

from typing import Literal

from pydantic import BaseModel, Field

from talkforge.models.github import GitHubProfile
from talkforge.models.topics import Topic

SpeakerKey = Literal["solo", "speaker1", "speaker2"]
ProgressStep = Literal["idle", "fetching-github", "generating", "complete"]


class SpeakerState(BaseModel):
    """Upload and GitHub lookup state for one speaker."""

    # Uploaded profile
    file_name: str | None = None
    extracted_text: str = ""
    linkedin_name: str = ""
    file_error: str | None = None
    is_validating: bool = False

    # GitHub field
    github_username: str = ""
    gh_loading: bool = False
    gh_error: str | None = None
    gh_profile: GitHubProfile | None = None
    name_warning: str | None = None
    # Bumped on every edit; lookups carrying an older value are discarded
    gh_request_id: int = 0

    @property
    def has_profile(self) -> bool:
        return bool(self.file_name and self.extracted_text)


class CollabSpeakers(BaseModel):
    speaker1: SpeakerState = Field(default_factory=SpeakerState)
    speaker2: SpeakerState = Field(default_factory=SpeakerState)


class AppState(BaseModel):
    """Everything the user has entered plus the outcome of the last run."""

    mode: Literal["solo", "collaboration"] = "solo"
    progress_step: ProgressStep = "idle"
    is_loading: bool = False
    show_results: bool = False
    topics: list[Topic] = Field(default_factory=list)
    error: str | None = None
    event_description: str = ""
    api_key: str = ""
    solo: SpeakerState = Field(default_factory=SpeakerState)
    collab: CollabSpeakers = Field(default_factory=CollabSpeakers)

    def speaker(self, key: SpeakerKey) -> SpeakerState:
        """Look up a speaker slot by key."""
        if key == "solo":
            return self.solo
        if key == "speaker1":
            return self.collab.speaker1
        if key == "speaker2":
            return self.collab.speaker2
        raise KeyError(key)
