"""Local input validation.

Validators report problems as values so callers can show them next to the
offending input. Callers that prefer exceptions use
``ValidationResult.raise_for_error``.
"""

import re

from pydantic import BaseModel

from talkforge.config import get_settings
from talkforge.errors import ValidationError

PDF_CONTENT_TYPE = "application/pdf"

GITHUB_USERNAME_MAX_LENGTH = 39
_GITHUB_USERNAME_RE = re.compile(r"^[a-zA-Z\d-]+$")

# Very short handles are still being typed; don't look them up yet
MIN_LOOKUP_USERNAME_LENGTH = 2

MISSING_API_KEY_MESSAGE = "Gemini API key is required. Add it above to continue."


class ValidationResult(BaseModel):
    """Outcome of a single validation check."""

    is_valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)

    def raise_for_error(self) -> None:
        """Raise ValidationError if the check failed."""
        if not self.is_valid:
            raise ValidationError(self.error or "Invalid input")


def validate_pdf_file(
    content_type: str | None, size: int, max_size_mb: int | None = None
) -> ValidationResult:
    """Check the upload's declared type and size."""
    if max_size_mb is None:
        max_size_mb = get_settings().max_pdf_size_mb

    if content_type != PDF_CONTENT_TYPE:
        return ValidationResult.fail("Only PDF files are accepted")
    if size > max_size_mb * 1024 * 1024:
        return ValidationResult.fail(
            f"File size ({size / 1024 / 1024:.1f}MB) exceeds {max_size_mb}MB limit"
        )
    return ValidationResult.ok()


def validate_text_length(
    text: str, max_length: int | None = None, min_length: int | None = None
) -> ValidationResult:
    """Check that profile text fits the prompt budget."""
    settings = get_settings()
    max_length = max_length if max_length is not None else settings.max_profile_text_length
    min_length = min_length if min_length is not None else settings.min_profile_text_length

    if len(text) > max_length:
        return ValidationResult.fail(
            f"Profile text too large ({len(text):,} characters). "
            f"Maximum {max_length:,} characters allowed."
        )
    if len(text.strip()) < min_length:
        return ValidationResult.fail(f"Profile text must be at least {min_length} characters.")
    return ValidationResult.ok()


def validate_event_description_length(
    text: str, max_length: int | None = None
) -> ValidationResult:
    """Check the optional event description length."""
    if max_length is None:
        max_length = get_settings().max_event_description_length

    if len(text) > max_length:
        return ValidationResult.fail(
            f"Event description too long ({len(text):,} characters). "
            f"Maximum {max_length:,} characters allowed."
        )
    return ValidationResult.ok()


def validate_github_username(username: str) -> ValidationResult:
    """Check GitHub's username syntax. A blank username is valid (optional field)."""
    trimmed = username.strip()
    if not trimmed:
        return ValidationResult.ok()

    if len(trimmed) > GITHUB_USERNAME_MAX_LENGTH:
        return ValidationResult.fail("Username must be 39 characters or less")
    if trimmed.startswith("-") or trimmed.endswith("-"):
        return ValidationResult.fail("Username cannot start or end with a hyphen")
    if "--" in trimmed:
        return ValidationResult.fail("Username cannot contain consecutive hyphens")
    if not _GITHUB_USERNAME_RE.match(trimmed):
        return ValidationResult.fail("Username can only contain letters, numbers, and hyphens")
    return ValidationResult.ok()


def validate_api_key(api_key: str | None) -> ValidationResult:
    """Require a non-blank provider API key."""
    if not api_key or not api_key.strip():
        return ValidationResult.fail(MISSING_API_KEY_MESSAGE)
    return ValidationResult.ok()
