"""Error taxonomy for TalkForge.

Every error carries a user-facing message. Validation and classification
problems are recoverable and reported next to the input that caused them;
generation failures end the current attempt but leave the inputs untouched.
"""

from enum import Enum


class TalkForgeError(Exception):
    """Base class for all TalkForge errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TalkForgeError):
    """An input failed a local check (file type, size, length, username)."""


class ClassificationRejection(TalkForgeError):
    """Extracted text is not a plausible LinkedIn profile export."""


class ExtractionFailure(TalkForgeError):
    """The PDF text layer could not be read."""

    DEFAULT_MESSAGE = "Failed to read PDF. Please try a different file."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class LookupFailure(TalkForgeError):
    """The GitHub profile lookup failed at the transport level."""

    DEFAULT_MESSAGE = "Failed to fetch GitHub profile"

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class GenerationFailureKind(str, Enum):
    """Why a topic generation attempt failed."""

    INVALID_KEY = "invalid_key"
    BUSY = "busy"
    HTTP = "http"
    SAFETY = "safety"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"
    NO_TOPICS = "no_topics"


class GenerationFailure(TalkForgeError):
    """The completion provider failed or returned unusable output."""

    def __init__(
        self,
        message: str,
        kind: GenerationFailureKind = GenerationFailureKind.HTTP,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def from_status(
        cls, status_code: int, body: str, provider_label: str = "Gemini"
    ) -> "GenerationFailure":
        """Map a non-2xx provider response to a failure."""
        if status_code in (401, 403):
            return cls(
                f"Invalid {provider_label} API key. Please verify and try again.",
                GenerationFailureKind.INVALID_KEY,
                status_code,
            )
        if status_code == 429:
            return cls(
                "Service temporarily busy. Please try again in a moment.",
                GenerationFailureKind.BUSY,
                status_code,
            )
        return cls(
            f"Failed to generate topics. ({status_code}) {body[:160]}",
            GenerationFailureKind.HTTP,
            status_code,
        )
