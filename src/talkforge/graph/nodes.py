"""LangGraph node definitions for the topic generation workflow."""

import logging
import time
from collections.abc import Callable

from talkforge.errors import GenerationFailure
from talkforge.models.github import GitHubData
from talkforge.models.state import SpeakerInput, StepTiming, TalkForgeState
from talkforge.processors.sanitizer import sanitize_for_ai
from talkforge.processors.topic_generator import TopicGenerator
from talkforge.processors.validation import (
    validate_event_description_length,
    validate_github_username,
    validate_text_length,
)

logger = logging.getLogger(__name__)

# Step descriptions for progress display
STEP_DESCRIPTIONS = {
    "validate_inputs": "Checking inputs...",
    "fetch_github": "Fetching GitHub data...",
    "generate_topics": "Generating talk topics...",
}


def _start_step(
    step_name: str,
    on_step_start: Callable[[str, str], None] | None = None,
) -> dict:
    """Record step start time and description."""
    description = STEP_DESCRIPTIONS.get(step_name, f"Running {step_name}...")

    if on_step_start:
        try:
            on_step_start(step_name, description)
        except Exception:
            # A display callback must not break the workflow
            logger.debug("Step start callback failed", exc_info=True)

    return {
        "current_step": step_name,
        "current_step_description": description,
        "current_step_start": time.time(),
    }


def _end_step(state: TalkForgeState, step_name: str, updates: dict) -> dict:
    """Record step end time and compute duration."""
    end_time = time.time()
    start_time = updates.get("current_step_start")

    timing = StepTiming(
        step_name=step_name,
        start_time=start_time or end_time,
        end_time=end_time,
        duration_seconds=end_time - start_time if start_time else 0,
    )
    updates["step_timings"] = state.get("step_timings", []) + [timing]
    return updates


def _speaker_prefix(state: TalkForgeState, index: int) -> str:
    return f"Speaker {index + 1}: " if state["mode"] == "collaboration" else ""


def create_nodes(
    generator: TopicGenerator,
    on_step_start: Callable[[str, str], None] | None = None,
) -> dict:
    """Create all workflow nodes around a topic generator.

    Args:
        generator: Generator holding the completion provider and GitHub client.
        on_step_start: Optional callback(step_name, description) fired when a step starts.

    Returns:
        dict: Dictionary of node functions.
    """

    async def validate_inputs(state: TalkForgeState) -> dict:
        """Check lengths and handles, then sanitize text bound for the prompt."""
        step_name = "validate_inputs"
        result = _start_step(step_name, on_step_start)
        errors: list[str] = []

        expected = 2 if state["mode"] == "collaboration" else 1
        speakers = state.get("speakers", [])
        if len(speakers) != expected:
            errors.append(f"Expected {expected} speaker profile(s), got {len(speakers)}")

        for i, speaker in enumerate(speakers):
            prefix = _speaker_prefix(state, i)
            length_check = validate_text_length(speaker["linkedin_text"])
            if not length_check.is_valid:
                errors.append(f"{prefix}{length_check.error}")
            username = (speaker.get("github_username") or "").strip()
            if username:
                username_check = validate_github_username(username)
                if not username_check.is_valid:
                    errors.append(f"{prefix}{username_check.error}")

        event = (state.get("event_description") or "").strip()
        if event:
            event_check = validate_event_description_length(state["event_description"])
            if not event_check.is_valid:
                errors.append(event_check.error)

        result["errors"] = state.get("errors", []) + errors
        if not errors:
            result["speakers"] = [
                SpeakerInput(
                    linkedin_text=sanitize_for_ai(speaker["linkedin_text"]),
                    github_username=(speaker.get("github_username") or "").strip() or None,
                )
                for speaker in speakers
            ]
            result["event_description"] = sanitize_for_ai(event) if event else None

        return _end_step(state, step_name, result)

    async def fetch_github(state: TalkForgeState) -> dict:
        """Fetch GitHub context for each speaker with a handle, one after another."""
        step_name = "fetch_github"
        result = _start_step(step_name, on_step_start)

        github_data: list[GitHubData | None] = []
        for speaker in state["speakers"]:
            github_data.append(await generator.fetch_github_data(speaker.get("github_username")))
        result["github_data"] = github_data

        return _end_step(state, step_name, result)

    async def generate_topics(state: TalkForgeState) -> dict:
        """Ask the completion provider for topics."""
        step_name = "generate_topics"
        result = _start_step(step_name, on_step_start)

        speakers = state["speakers"]
        github_data = state.get("github_data") or [None] * len(speakers)
        event = state.get("event_description")

        try:
            if state["mode"] == "collaboration":
                topics = await generator.generate_collab(
                    [(s["linkedin_text"], s.get("github_username")) for s in speakers],
                    event_description=event,
                    github_data=github_data,
                )
            else:
                topics = await generator.generate_solo(
                    speakers[0]["linkedin_text"],
                    event_description=event,
                    github_data=github_data[0] if github_data[0] is not None else GitHubData(),
                )
            result["topics"] = topics
        except GenerationFailure as e:
            logger.warning(f"Topic generation failed ({e.kind.value})")
            result["errors"] = state.get("errors", []) + [e.message]

        return _end_step(state, step_name, result)

    return {
        "validate_inputs": validate_inputs,
        "fetch_github": fetch_github,
        "generate_topics": generate_topics,
    }
