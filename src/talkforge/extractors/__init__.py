"""Profile text extraction, classification and name recovery."""

from talkforge.extractors.classifier import classify_document, require_linkedin_profile
from talkforge.extractors.name_extractor import extract_name
from talkforge.extractors.pdf_text import extract_text_from_pdf, reconstruct_lines

__all__ = [
    "classify_document",
    "extract_name",
    "extract_text_from_pdf",
    "reconstruct_lines",
    "require_linkedin_profile",
]
