"""State transitions for speaker uploads and GitHub lookups.

Functions here only mutate state and describe the lookups that should follow
as ``LookupEffect`` values; scheduling and network calls belong to the
controller.
"""

from pydantic import BaseModel

from talkforge.models.github import GitHubProfile
from talkforge.processors.identity import compare_names
from talkforge.processors.validation import MIN_LOOKUP_USERNAME_LENGTH, validate_github_username
from talkforge.session.state import AppState, CollabSpeakers, SpeakerKey, SpeakerState

USER_NOT_FOUND_MESSAGE = "GitHub user not found"


class LookupEffect(BaseModel):
    """A GitHub profile lookup to run after ``delay_ms``."""

    speaker_key: SpeakerKey
    username: str
    token: int
    delay_ms: int


def on_github_input(speaker: SpeakerState, value: str) -> None:
    """Record an edit of the GitHub field and invalidate any running lookup."""
    speaker.github_username = value
    speaker.gh_request_id += 1
    speaker.gh_loading = False
    speaker.gh_error = None
    speaker.gh_profile = None
    speaker.name_warning = None


def request_github_lookup(
    speaker: SpeakerState, speaker_key: SpeakerKey, delay_ms: int
) -> list[LookupEffect]:
    """Validate the current handle and describe the lookup to schedule.

    Blank, malformed and too-short handles produce no lookup; each case still
    bumps the request token so a lookup already in flight is discarded.
    """
    speaker.gh_profile = None
    speaker.name_warning = None

    username = speaker.github_username.strip()
    if not username:
        speaker.gh_error = None
        speaker.gh_loading = False
        speaker.gh_request_id += 1
        return []

    validation = validate_github_username(username)
    if not validation.is_valid:
        speaker.gh_error = validation.error
        speaker.gh_loading = False
        speaker.gh_request_id += 1
        return []

    if len(username) < MIN_LOOKUP_USERNAME_LENGTH:
        speaker.gh_error = None
        speaker.gh_loading = False
        speaker.gh_request_id += 1
        return []

    speaker.gh_error = None
    speaker.gh_loading = True
    speaker.gh_request_id += 1
    return [
        LookupEffect(
            speaker_key=speaker_key,
            username=username,
            token=speaker.gh_request_id,
            delay_ms=delay_ms,
        )
    ]


def is_stale(speaker: SpeakerState, effect: LookupEffect) -> bool:
    """A result is stale once the token moved on or the handle was retyped."""
    return (
        effect.token != speaker.gh_request_id
        or effect.username != speaker.github_username.strip()
    )


def _finish_lookup(speaker: SpeakerState, effect: LookupEffect) -> None:
    if effect.token == speaker.gh_request_id:
        speaker.gh_loading = False


def apply_lookup_result(
    speaker: SpeakerState, effect: LookupEffect, profile: GitHubProfile | None
) -> bool:
    """Apply a completed lookup unless it is stale.

    Returns:
        True if the result was applied.
    """
    try:
        if is_stale(speaker, effect):
            return False

        if profile is None:
            speaker.gh_error = USER_NOT_FOUND_MESSAGE
            return True

        speaker.gh_profile = profile
        speaker.gh_error = None
        if speaker.linkedin_name:
            comparison = compare_names(speaker.linkedin_name, profile.name)
            speaker.name_warning = None if comparison.match else comparison.warning
        return True
    finally:
        _finish_lookup(speaker, effect)


def apply_lookup_failure(speaker: SpeakerState, effect: LookupEffect, message: str) -> bool:
    """Record a failed lookup as a field error unless it is stale."""
    try:
        if is_stale(speaker, effect):
            return False
        speaker.gh_error = message
        return True
    finally:
        _finish_lookup(speaker, effect)


def reject_upload(speaker: SpeakerState, error: str) -> None:
    """Drop the uploaded profile and show why."""
    speaker.file_error = error
    speaker.file_name = None
    speaker.extracted_text = ""
    speaker.linkedin_name = ""


def accept_upload(
    speaker: SpeakerState,
    speaker_key: SpeakerKey,
    file_name: str,
    text: str,
    linkedin_name: str | None,
    delay_ms: int,
) -> list[LookupEffect]:
    """Store an accepted profile and re-check an already entered handle."""
    speaker.file_name = file_name
    speaker.extracted_text = text
    speaker.linkedin_name = linkedin_name or ""
    speaker.file_error = None

    if speaker.github_username.strip():
        return request_github_lookup(speaker, speaker_key, delay_ms)
    return []


def remove_upload(speaker: SpeakerState) -> None:
    """Clear the uploaded profile, keeping the GitHub field."""
    speaker.file_name = None
    speaker.extracted_text = ""
    speaker.linkedin_name = ""
    speaker.file_error = None
    speaker.name_warning = None


def clear_uploads(speakers: list[SpeakerState]) -> None:
    """Forget uploaded files after a successful generation."""
    for speaker in speakers:
        speaker.file_name = None
        speaker.extracted_text = ""


def reset_app(state: AppState) -> None:
    """Return to a blank form, keeping the mode and API key."""
    state.progress_step = "idle"
    state.is_loading = False
    state.show_results = False
    state.topics = []
    state.error = None
    state.event_description = ""
    state.solo = SpeakerState()
    state.collab = CollabSpeakers()
