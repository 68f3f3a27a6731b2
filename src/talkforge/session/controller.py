"""Session controller: runs uploads, GitHub lookups and generation on the event loop."""

import asyncio
import logging
from collections.abc import Callable
from typing import Literal

from talkforge.config import get_settings
from talkforge.errors import ExtractionFailure, LookupFailure
from talkforge.extractors.classifier import classify_document
from talkforge.extractors.pdf_text import extract_text_from_pdf
from talkforge.github.client import GitHubClient
from talkforge.graph.workflow import run_topic_generation
from talkforge.llm.base import LLMProvider, ProviderName
from talkforge.models.classification import ClassificationResult
from talkforge.models.state import SpeakerInput
from talkforge.models.topics import Topic
from talkforge.processors.validation import validate_pdf_file
from talkforge.session.state import AppState, ProgressStep, SpeakerKey, SpeakerState
from talkforge.session.updates import (
    LookupEffect,
    accept_upload,
    apply_lookup_failure,
    apply_lookup_result,
    clear_uploads,
    on_github_input,
    reject_upload,
    remove_upload,
    request_github_lookup,
    reset_app,
)

logger = logging.getLogger(__name__)

# Progress step shown once a workflow node has finished
_STEP_AFTER_NODE = {
    "fetch_github": "generating",
    "generate_topics": "complete",
}


class SessionController:
    """Drive an ``AppState`` from user actions.

    Lookups are debounced per speaker with cancellable timers. A lookup that
    has started is never aborted; its result is dropped if the field changed
    in the meantime.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        state: AppState | None = None,
        llm_provider: LLMProvider | None = None,
        github_client: GitHubClient | None = None,
        debounce_ms: int | None = None,
        provider: ProviderName | None = None,
        on_progress: Callable[[str], None] | None = None,
    ):
        settings = get_settings()
        self.state = state or AppState()
        self.llm_provider = llm_provider
        self.provider = provider
        self.on_progress = on_progress
        self.github_client = github_client or GitHubClient(
            api_base=settings.github_api_base,
            user_agent=settings.github_user_agent,
        )
        self.debounce_ms = settings.lookup_debounce_ms if debounce_ms is None else debounce_ms
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task] = set()

    # --- GitHub lookups ---

    def _cancel_timer(self, speaker_key: str) -> None:
        timer = self._timers.pop(speaker_key, None)
        if timer is not None:
            timer.cancel()

    def _run_effects(self, effects: list[LookupEffect]) -> None:
        for effect in effects:
            self._cancel_timer(effect.speaker_key)
            self._timers[effect.speaker_key] = asyncio.get_running_loop().call_later(
                effect.delay_ms / 1000, self._dispatch, effect
            )

    def _dispatch(self, effect: LookupEffect) -> None:
        self._timers.pop(effect.speaker_key, None)
        task = asyncio.ensure_future(self._lookup(effect))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _lookup(self, effect: LookupEffect) -> None:
        speaker = self.state.speaker(effect.speaker_key)
        try:
            profile = await self.github_client.fetch_profile(effect.username)
        except LookupFailure as e:
            if not apply_lookup_failure(speaker, effect, e.message):
                logger.debug(f"Dropped stale lookup failure for {effect.speaker_key}")
            return

        if not apply_lookup_result(speaker, effect, profile):
            logger.debug(f"Dropped stale lookup result for {effect.speaker_key}")

    async def wait_for_lookups(self) -> None:
        """Wait until no lookup is scheduled or running."""
        while self._timers or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks))
            else:
                await asyncio.sleep(0.01)

    def set_github_username(self, speaker_key: SpeakerKey, value: str) -> None:
        """Handle a keystroke in the GitHub field: reset the debounce timer."""
        speaker = self.state.speaker(speaker_key)
        self._cancel_timer(speaker_key)
        on_github_input(speaker, value)
        self._run_effects(request_github_lookup(speaker, speaker_key, self.debounce_ms))

    def commit_github_username(self, speaker_key: SpeakerKey) -> None:
        """Handle the field losing focus: look up right away."""
        speaker = self.state.speaker(speaker_key)
        self._cancel_timer(speaker_key)
        self._run_effects(request_github_lookup(speaker, speaker_key, 0))

    # --- Uploads ---

    async def load_profile_pdf(
        self,
        speaker_key: SpeakerKey,
        file_name: str,
        data: bytes,
        content_type: str | None = "application/pdf",
    ) -> ClassificationResult | None:
        """Validate, read and classify an uploaded PDF.

        Returns:
            The classification, or None if the file never got that far.
        """
        speaker = self.state.speaker(speaker_key)
        file_check = validate_pdf_file(content_type, len(data))
        if not file_check.is_valid:
            reject_upload(speaker, file_check.error)
            return None

        speaker.is_validating = True
        speaker.file_error = None
        try:
            text = await asyncio.to_thread(extract_text_from_pdf, data)
        except ExtractionFailure as e:
            speaker.file_error = e.message
            return None
        finally:
            speaker.is_validating = False

        return self.load_profile_text(speaker_key, file_name, text)

    def load_profile_text(
        self, speaker_key: SpeakerKey, file_name: str, text: str
    ) -> ClassificationResult:
        """Classify already extracted text and store it when accepted."""
        speaker = self.state.speaker(speaker_key)
        result = classify_document(text)
        if not result.accepted:
            logger.info(f"Rejected upload for {speaker_key}")
            reject_upload(speaker, result.rejection_reason)
            return result

        logger.info(f"Accepted upload for {speaker_key} ({len(text)} chars)")
        self._run_effects(
            accept_upload(
                speaker, speaker_key, file_name, text, result.extracted_name, self.debounce_ms
            )
        )
        return result

    def remove_profile(self, speaker_key: SpeakerKey) -> None:
        remove_upload(self.state.speaker(speaker_key))

    # --- Mode and generation ---

    def _set_progress(self, step: ProgressStep) -> None:
        if self.state.progress_step == step:
            return
        self.state.progress_step = step
        if self.on_progress:
            self.on_progress(step)

    def set_mode(self, mode: Literal["solo", "collaboration"]) -> None:
        """Switch mode and start over with a blank form."""
        for key in list(self._timers):
            self._cancel_timer(key)
        self.state.mode = mode
        reset_app(self.state)

    async def generate_solo(self) -> list[Topic] | None:
        """Generate topics for the solo speaker."""
        speaker = self.state.solo
        if not speaker.has_profile or self.state.is_loading:
            return None
        return await self._generate([speaker])

    async def generate_collab(self) -> list[Topic] | None:
        """Generate topics for both collaboration speakers."""
        speakers = [self.state.collab.speaker1, self.state.collab.speaker2]
        if not all(s.has_profile for s in speakers) or self.state.is_loading:
            return None
        return await self._generate(speakers)

    async def _generate(self, speakers: list[SpeakerState]) -> list[Topic] | None:
        state = self.state
        state.is_loading = True
        state.error = None

        def on_progress(step_name: str, description: str, elapsed: float) -> None:
            if step_name == "validate_inputs":
                has_handle = any(s.github_username.strip() for s in speakers)
                self._set_progress("fetching-github" if has_handle else "generating")
            elif step_name in _STEP_AFTER_NODE:
                self._set_progress(_STEP_AFTER_NODE[step_name])
            logger.debug(f"{description} ({elapsed:.1f}s)")

        try:
            result = await run_topic_generation(
                speakers=[
                    SpeakerInput(
                        linkedin_text=s.extracted_text,
                        github_username=s.github_username.strip() or None,
                    )
                    for s in speakers
                ],
                event_description=state.event_description.strip() or None,
                provider=self.provider,
                api_key=state.api_key or None,
                llm_provider=self.llm_provider,
                github_client=self.github_client,
                progress_callback=on_progress,
            )
        finally:
            state.is_loading = False
            self._set_progress("idle")

        if result.get("errors"):
            state.error = result["errors"][0]
            return None

        state.topics = result["topics"]
        state.show_results = True
        clear_uploads(speakers)
        return state.topics
