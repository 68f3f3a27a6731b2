"""Profile processing: identity checks, sanitizing and validation."""

from talkforge.processors.identity import compare_names
from talkforge.processors.sanitizer import sanitize_for_ai

__all__ = ["compare_names", "sanitize_for_ai"]
