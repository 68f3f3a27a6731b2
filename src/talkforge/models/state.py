"""LangGraph state models."""

from typing import Literal, TypedDict

from talkforge.models.github import GitHubData
from talkforge.models.topics import Topic


class SpeakerInput(TypedDict):
    """One speaker's sanitized profile text and optional GitHub handle."""

    linkedin_text: str
    github_username: str | None


class StepTiming(TypedDict):
    """Timing information for a single workflow step."""

    step_name: str
    start_time: float  # Unix timestamp
    end_time: float | None  # Unix timestamp, None if in progress
    duration_seconds: float | None


class TalkForgeState(TypedDict):
    """Main state object for the topic generation workflow."""

    # Input data
    mode: Literal["solo", "collaboration"]
    speakers: list[SpeakerInput]  # One entry in solo mode, two in collaboration
    event_description: str | None

    # Fetched context, aligned with speakers
    github_data: list[GitHubData | None]

    # Output
    topics: list[Topic]

    # Timing information
    step_timings: list[StepTiming]
    current_step_start: float | None
    total_generation_time: float | None

    # Workflow tracking
    current_step: str
    current_step_description: str
    errors: list[str]
