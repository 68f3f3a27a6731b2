"""LinkedIn profile export detection.

A layered heuristic: cheap rejection gates run first, then lexical scoring
decides acceptance. The thresholds tolerate exports that lose the profile URL
or the page footer during text extraction while still turning away unrelated
documents.
"""

import logging
import re

from talkforge.errors import ClassificationRejection
from talkforge.extractors.name_extractor import extract_name
from talkforge.models.classification import ClassificationResult

logger = logging.getLogger(__name__)

# Section labels that LinkedIn prints in its PDF export
LINKEDIN_SECTION_HEADERS = (
    "contact",
    "top skills",
    "languages",
    "summary",
    "experience",
    "education",
    "certifications",
    "honors-awards",
    "honors & awards",
    "publications",
    "projects",
    "courses",
    "recommendations",
    "interests",
    "volunteer experience",
)

# Phrases that almost only appear in LinkedIn exports; each counts triple
LINKEDIN_UNIQUE_PATTERNS = (
    "linkedin.com/in/",
    "www.linkedin.com/in/",
    "page 1 of",
    "connections",
    "professional experience",
    "work experience",
)

NON_LINKEDIN_INDICATORS = (
    "invoice",
    "receipt",
    "order confirmation",
    "bank statement",
    "financial statement",
    "contract",
    "agreement",
    "terms and conditions",
    "privacy policy",
    "user manual",
    "instruction guide",
    "research paper",
    "abstract",
    "methodology",
    "bibliography",
    "references cited",
)

PROFILE_URL_MARKER = "linkedin.com/in/"
PAGE_NUMBERING_RE = re.compile(r"page\s+\d+\s+of\s+\d+", re.IGNORECASE)

MIN_TEXT_LENGTH = 200
# One stray word like "agreement" is common in a profile; two is a document type
MAX_NEGATIVE_INDICATORS = 2
UNIQUE_PATTERN_WEIGHT = 3

# Acceptance rule (a): URL + footer + a few sections
STRONG_SECTION_MIN = 3
# Acceptance rule (b): footer survived but URL was lost
FOOTER_ONLY_SECTION_MIN = 5
# Acceptance rule (c): neither survived, rely on sections and patterns
SCORE_ONLY_SECTION_MIN = 4
SCORE_ONLY_TOTAL_MIN = 6

NOT_ENOUGH_TEXT_REASON = (
    "PDF doesn't contain enough text. Please upload a complete LinkedIn profile PDF export."
)
NOT_A_PROFILE_REASON = (
    "This doesn't appear to be a LinkedIn profile. "
    "Please export your profile from LinkedIn (Save as PDF option)."
)
EXPORT_AGAIN_REASON = (
    "This doesn't appear to be a LinkedIn profile PDF. Please go to your LinkedIn profile, "
    "click 'More' -> 'Save to PDF' and upload that file."
)


def count_matches(text_lower: str, phrases: tuple[str, ...]) -> int:
    """Count how many distinct phrases occur in already-lowercased text."""
    return sum(1 for phrase in phrases if phrase in text_lower)


def classify_document(text: str) -> ClassificationResult:
    """Decide whether extracted text is a LinkedIn profile export.

    Args:
        text: Full extracted document text.

    Returns:
        ClassificationResult: accepted with an optional name, or rejected with
        a reason specific to the gate that failed.
    """
    if len(text) < MIN_TEXT_LENGTH:
        logger.info(f"Rejected document: only {len(text)} characters")
        return ClassificationResult.reject(NOT_ENOUGH_TEXT_REASON)

    lower = text.lower()

    negative_matches = count_matches(lower, NON_LINKEDIN_INDICATORS)
    if negative_matches >= MAX_NEGATIVE_INDICATORS:
        logger.info(f"Rejected document: {negative_matches} non-profile indicators")
        return ClassificationResult.reject(NOT_A_PROFILE_REASON)

    section_header_matches = count_matches(lower, LINKEDIN_SECTION_HEADERS)
    total_score = (
        count_matches(lower, LINKEDIN_UNIQUE_PATTERNS) * UNIQUE_PATTERN_WEIGHT
        + section_header_matches
    )
    has_profile_url = PROFILE_URL_MARKER in lower
    has_page_numbering = PAGE_NUMBERING_RE.search(text) is not None

    accepted = (
        (has_profile_url and has_page_numbering and section_header_matches >= STRONG_SECTION_MIN)
        or has_profile_url
        or (section_header_matches >= FOOTER_ONLY_SECTION_MIN and has_page_numbering)
        or (
            section_header_matches >= SCORE_ONLY_SECTION_MIN
            and total_score >= SCORE_ONLY_TOTAL_MIN
        )
    )

    logger.debug(
        f"Profile scoring: sections={section_header_matches} total={total_score} "
        f"url={has_profile_url} paging={has_page_numbering}"
    )

    if not accepted:
        return ClassificationResult.reject(EXPORT_AGAIN_REASON)

    return ClassificationResult.accept(extract_name(text))


def require_linkedin_profile(text: str) -> ClassificationResult:
    """Classify text and raise if it is not a profile export.

    Raises:
        ClassificationRejection: With the reason from the failing gate.
    """
    result = classify_document(text)
    if not result.accepted:
        raise ClassificationRejection(result.rejection_reason)
    return result
