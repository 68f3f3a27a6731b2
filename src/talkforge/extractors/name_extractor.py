"""Best-effort recovery of the profile owner's name from export text.

Three strategies run in priority order, each aimed at a different export
layout:

1. Summary-anchored: modern exports print name, headline and location just
   above the "Summary" label.
2. Structured scan: classic exports put the name among the first lines,
   usually followed by a headline.
3. Header slice: degraded extractions that collapse the header into a single
   run of words before "Contact" or the profile URL.

All three share the same word-shape filter (title-case words or name
particles) and reject role, skill and place words, trading recall for
precision.
"""

import re

from talkforge.models.classification import NameCandidate, NameStrategy

NAME_PARTICLES = frozenset({"de", "del", "da", "dos", "van", "von", "bin", "al", "la", "le"})

_NAME_CHARS_RE = re.compile(r"^[A-Za-z\s\-'.]+$")
_NAME_WORD_RE = re.compile(r"^[A-Z][A-Za-z'.-]*$")
_ACRONYM_RE = re.compile(r"^[A-Z]{2,}$")
_DIGITS_RE = re.compile(r"^\d+$")
_PHONE_RE = re.compile(r"^\+?\d[\d\s\-()]+$")
_CITY_STATE_RE = re.compile(r"[A-Z][a-z]+,\s*[A-Z]")
_WHITESPACE_RE = re.compile(r"\s+")

MIN_NAME_WORDS = 2
MAX_NAME_WORDS = 5
MAX_NAME_LINE_LENGTH = 50

# --- Strategy A: summary-anchored ---

# Name, headline, location and a few wrapped lines sit above "Summary"
SUMMARY_LOOKBACK_LINES = 6

SUMMARY_LOCATION_RE = re.compile(r"india|usa|uk|karnataka|bengaluru|delhi|mumbai")

SUMMARY_ROLE_WORDS = frozenset(
    {
        "developer",
        "relations",
        "manager",
        "engineer",
        "community",
        "professional",
        "program",
        "senior",
        "lead",
        "founder",
    }
)

# --- Strategy B: structured scan ---

STRUCTURED_SEARCH_LIMIT = 80
MIN_STRUCTURED_LINE_LENGTH = 3

SECTION_LABELS = frozenset(
    {
        "contact",
        "top skills",
        "summary",
        "experience",
        "about",
        "languages",
        "education",
        "certifications",
        "skills",
        "recommendations",
        "interests",
        "honors-awards",
        "honors & awards",
        "projects",
        "publications",
    }
)

HARD_REJECT_WORDS = frozenset(
    {
        "hackathon",
        "university",
        "school",
        "engineering",
        "engineer",
        "manager",
        "developer",
        "relations",
        "leadership",
        "founder",
        "technologies",
        "aws",
        "india",
        "bengaluru",
        "karnataka",
        "linkedin",
        "github",
        "copilot",
        "javascript",
        "actions",
        "web",
        "development",
        "problem",
        "solving",
        "scalability",
    }
)

LEXICAL_GATE_SCORE = 2
NAME_SHAPE_SCORE = 2
HARD_REJECT_PENALTY = 5
HEADLINE_NEXT_SCORE = 3
LOCATION_NEXT_SCORE = 1
SUMMARY_NEAR_SCORE = 2
AFTER_SECTION_LABEL_SCORE = 1

# Two title-case words alone also fit skill labels, so a headline or the
# Summary label must back the candidate up
STRONG_CONTEXT_MIN_SCORE = 5
# Classic exports: a clean candidate among the first lines needs no context.
# This can admit a skill label near the top; kept as-is for compatibility.
TOP_OF_DOCUMENT_MIN_SCORE = 4
TOP_OF_DOCUMENT_MAX_INDEX = 4

# --- Strategy C: header slice ---

HEADER_SLICE_DEFAULT_LENGTH = 220
HEADER_SLICE_MAX_TOKENS = 12
HEADER_MARKERS = (" contact ", " linkedin.com/in/")
_HEADER_NOISE_RE = re.compile(r"[|•,]")
_NON_NAME_CHARS_RE = re.compile(r"[^A-Za-z'.-]")
_DIGIT_RE = re.compile(r"\d")

TITLE_STOP_WORDS = frozenset(
    {
        "software",
        "engineer",
        "developer",
        "architect",
        "manager",
        "consultant",
        "specialist",
        "principal",
        "senior",
        "staff",
        "director",
        "founder",
        "cofounder",
        "ceo",
        "cto",
        "vp",
        "president",
        "product",
        "design",
        "analyst",
        "scientist",
        "lead",
        "intern",
        "student",
        "github",
        "copilot",
        "javascript",
        "actions",
        "web",
        "development",
    }
)


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def is_name_word(word: str) -> bool:
    """Check for a capitalised name word or a lowercase name particle."""
    return bool(_NAME_WORD_RE.match(word)) or word.lower() in NAME_PARTICLES


def _has_name_shape(line: str) -> list[str] | None:
    """Return the line's words if it is made of name characters and 2-5 words."""
    if not _NAME_CHARS_RE.match(line):
        return None
    words = line.split()
    if not MIN_NAME_WORDS <= len(words) <= MAX_NAME_WORDS:
        return None
    return words


def _find_summary_index(lines: list[str]) -> int:
    for i, line in enumerate(lines):
        if line.lower() == "summary":
            return i
    return -1


def extract_name_near_summary(lines: list[str]) -> str | None:
    """Strategy A: look just above the first "Summary" label."""
    summary_index = _find_summary_index(lines)
    if summary_index == -1:
        return None

    start = max(0, summary_index - SUMMARY_LOOKBACK_LINES)
    for line in reversed(lines[start:summary_index]):
        lower = line.lower()
        if (
            not line
            or len(line) > MAX_NAME_LINE_LENGTH
            or "," in lower  # location
            or " at " in lower  # headline
            or "|" in lower  # headline
            or "linkedin.com" in lower
            or SUMMARY_LOCATION_RE.search(lower)
        ):
            continue

        words = _has_name_shape(line)
        if words is None:
            continue
        if any(w.lower() in SUMMARY_ROLE_WORDS for w in words):
            continue
        if not all(is_name_word(w) for w in words):
            continue

        return line

    return None


def score_structured_line(lines: list[str], index: int) -> NameCandidate | None:
    """Score one line as a name candidate, or None if it fails the gates."""
    line = lines[index]
    lower = line.lower()

    if len(line) < MIN_STRUCTURED_LINE_LENGTH or len(line) > MAX_NAME_LINE_LENGTH:
        return None
    if lower in SECTION_LABELS:
        return None
    if "@" in lower or "linkedin.com" in lower or "page " in lower:
        return None
    if _DIGITS_RE.match(line) or _PHONE_RE.match(line):
        return None

    words = _has_name_shape(line)
    if words is None:
        return None

    score = LEXICAL_GATE_SCORE

    if not all(is_name_word(w) for w in words):
        return None
    score += NAME_SHAPE_SCORE

    if any(w.lower() in HARD_REJECT_WORDS for w in words):
        score -= HARD_REJECT_PENALTY

    prev_lower = lines[index - 1].lower() if index > 0 else ""
    next_line = lines[index + 1] if index + 1 < len(lines) else ""
    next_lower = next_line.lower()

    strong_context = False
    # A headline usually follows the full name
    if "|" in next_line or " at " in next_lower or " - " in next_line:
        score += HEADLINE_NEXT_SCORE
        strong_context = True
    if "," in next_line and _CITY_STATE_RE.search(next_line):
        score += LOCATION_NEXT_SCORE
    if next_lower == "summary" or (
        index + 2 < len(lines) and lines[index + 2].lower() == "summary"
    ):
        score += SUMMARY_NEAR_SCORE
        strong_context = True
    if prev_lower in SECTION_LABELS:
        score += AFTER_SECTION_LABEL_SCORE

    return NameCandidate(
        text=line,
        score=score,
        source_strategy=NameStrategy.STRUCTURED_SCAN,
        line_index=index,
        strong_context=strong_context,
    )


def best_structured_candidate(lines: list[str]) -> NameCandidate | None:
    """Return the highest-scoring line among the first lines, earliest on ties."""
    best: NameCandidate | None = None
    for i in range(min(len(lines), STRUCTURED_SEARCH_LIMIT)):
        candidate = score_structured_line(lines, i)
        if candidate is not None and (best is None or candidate.score > best.score):
            best = candidate
    return best


def is_confident_structured_candidate(candidate: NameCandidate) -> bool:
    """Check a structured-scan winner against the acceptance thresholds."""
    if candidate.strong_context and candidate.score >= STRONG_CONTEXT_MIN_SCORE:
        return True
    return (
        candidate.score >= TOP_OF_DOCUMENT_MIN_SCORE
        and candidate.line_index <= TOP_OF_DOCUMENT_MAX_INDEX
    )


def extract_name_from_structured_lines(lines: list[str]) -> str | None:
    """Strategy B: score the top lines and accept only a confident winner."""
    best = best_structured_candidate(lines)
    if best is None or not is_confident_structured_candidate(best):
        return None
    return best.text


def header_slice(text: str) -> str:
    """Cut the flattened document before the contact block or profile URL."""
    flattened = _WHITESPACE_RE.sub(" ", text).strip()
    lower = flattened.lower()
    cut_points = [idx for idx in (lower.find(m) for m in HEADER_MARKERS) if idx > 0]
    cutoff = min(cut_points) if cut_points else min(len(flattened), HEADER_SLICE_DEFAULT_LENGTH)
    return flattened[:cutoff].strip()


def extract_name_from_header_slice(header_text: str) -> str | None:
    """Strategy C: take the leading run of name-shaped words."""
    if not header_text:
        return None

    cleaned = _WHITESPACE_RE.sub(" ", _HEADER_NOISE_RE.sub(" ", header_text)).strip()
    tokens = cleaned.split()[:HEADER_SLICE_MAX_TOKENS]

    name_tokens: list[str] = []
    for token in tokens:
        if _DIGIT_RE.search(token):
            break
        plain = _NON_NAME_CHARS_RE.sub("", token)
        if not plain:
            break
        if plain.lower() in TITLE_STOP_WORDS:
            break
        if not (is_name_word(plain) or _ACRONYM_RE.match(plain)):
            break
        name_tokens.append(plain)
        if len(name_tokens) >= MAX_NAME_WORDS:
            break

    if len(name_tokens) < MIN_NAME_WORDS:
        return None
    return " ".join(name_tokens)


def extract_name_candidate(text: str) -> NameCandidate | None:
    """Run the strategy cascade and report which strategy produced the name."""
    lines = split_lines(text)

    name = extract_name_near_summary(lines)
    if name:
        return NameCandidate(text=name, source_strategy=NameStrategy.SUMMARY_ANCHORED)

    best = best_structured_candidate(lines)
    if best is not None and is_confident_structured_candidate(best):
        return best

    name = extract_name_from_header_slice(header_slice(text))
    if name:
        return NameCandidate(text=name, source_strategy=NameStrategy.HEADER_SLICE)

    return None


def extract_name(text: str) -> str | None:
    """Extract the profile owner's display name from export text.

    Args:
        text: Full extracted document text.

    Returns:
        The best name guess, or None when no strategy is confident.
    """
    candidate = extract_name_candidate(text)
    return candidate.text if candidate else None
