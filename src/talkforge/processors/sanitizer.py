"""Prompt-injection filtering for text embedded in model prompts.

This is a denylist of well-known injection phrasings, not a security
boundary. The system prompts also tell the model to ignore instructions found
in profile text.
"""

import re

FILTER_MARKER = "[filtered]"

INJECTION_PATTERNS = [
    re.compile(r"\bignore\s+(previous|all|above)\s+instructions?\b", re.IGNORECASE),
    re.compile(r"\bsystem\s*:", re.IGNORECASE),
    re.compile(r"\b(you\s+are|you're)\s+(now|a|an)\s+", re.IGNORECASE),
    re.compile(r"\bpretend\s+(you\s+are|to\s+be)", re.IGNORECASE),
    re.compile(r"\bact\s+as\s+(if\s+you\s+are|a|an)", re.IGNORECASE),
    re.compile(r"\bforget\s+(everything|all|your)", re.IGNORECASE),
    re.compile(r"\bnew\s+instructions?:", re.IGNORECASE),
    re.compile(r"\b(override|overwrite)\s+(the\s+)?(system|previous)", re.IGNORECASE),
]


def _filter_once(text: str) -> str:
    for pattern in INJECTION_PATTERNS:
        text = pattern.sub(FILTER_MARKER, text)
    return text


def sanitize_for_ai(text: str | None) -> str:
    """Replace known injection phrases with a marker and trim the result.

    Filtering repeats until the text stops changing, since removing one phrase
    can join its neighbours into another. Every pass deletes letters outside
    the markers, so the loop ends.
    """
    if not text:
        return ""

    previous = None
    while previous != text:
        previous = text
        text = _filter_once(text)
    return text.strip()
