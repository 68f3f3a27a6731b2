"""Talk topic models."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

MAX_TOPICS = 6
DEFAULT_DURATION = "45 min"
DEFAULT_AUDIENCE = "Intermediate"


def _coerce_to_str(v: Any) -> str:
    """Coerce LLM output to a trimmed string, treating null as empty."""
    if v is None:
        return ""
    return str(v).strip()


class Topic(BaseModel):
    """A single talk or workshop proposal."""

    title: str
    description: str
    format: Literal["talk", "workshop"] = "talk"
    duration: str = DEFAULT_DURATION
    audience: str = DEFAULT_AUDIENCE

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _coerce_to_str(v)

    @field_validator("format", mode="before")
    @classmethod
    def coerce_format(cls, v: Any) -> str:
        # Anything the model invents besides "workshop" is presented as a talk
        return "workshop" if v == "workshop" else "talk"

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> str:
        return _coerce_to_str(v) or DEFAULT_DURATION

    @field_validator("audience", mode="before")
    @classmethod
    def coerce_audience(cls, v: Any) -> str:
        return _coerce_to_str(v) or DEFAULT_AUDIENCE

    @property
    def format_label(self) -> str:
        return "Workshop" if self.format == "workshop" else "Talk"


class TopicsResponse(BaseModel):
    """Parsed generation output."""

    topics: list[Topic] = Field(default_factory=list)


def normalize_topics(raw: Any) -> list[Topic]:
    """Coerce raw model output into at most six complete topics.

    Entries that are not objects, or that lack a title or description after
    trimming, are dropped.
    """
    if not isinstance(raw, list):
        return []

    topics: list[Topic] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        topic = Topic.model_validate(
            {
                "title": item.get("title"),
                "description": item.get("description"),
                "format": item.get("format"),
                "duration": item.get("duration"),
                "audience": item.get("audience"),
            }
        )
        if topic.title and topic.description:
            topics.append(topic)

    return topics[:MAX_TOPICS]
