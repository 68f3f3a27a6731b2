"""Conditional edge functions for LangGraph workflow."""

from typing import Literal

from talkforge.models.state import TalkForgeState


def should_continue_after_validation(
    state: TalkForgeState,
) -> Literal["continue", "error"]:
    """Check if validation passed.

    Args:
        state: Current workflow state.

    Returns:
        "continue" if no errors, "error" otherwise.
    """
    if state.get("errors") and len(state["errors"]) > 0:
        return "error"
    return "continue"


def should_fetch_github(
    state: TalkForgeState,
) -> Literal["fetch", "skip"]:
    """Skip the GitHub step when no speaker gave a handle."""
    if any(speaker.get("github_username") for speaker in state.get("speakers", [])):
        return "fetch"
    return "skip"


def route_after_validation(
    state: TalkForgeState,
) -> Literal["fetch_github", "generate_topics", "error"]:
    """Combine the validation and GitHub checks into one routing decision."""
    if should_continue_after_validation(state) == "error":
        return "error"
    if should_fetch_github(state) == "fetch":
        return "fetch_github"
    return "generate_topics"
