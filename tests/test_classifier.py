"""Tests for LinkedIn export classification."""

import pytest

from talkforge.errors import ClassificationRejection
from talkforge.extractors.classifier import (
    EXPORT_AGAIN_REASON,
    NOT_A_PROFILE_REASON,
    NOT_ENOUGH_TEXT_REASON,
    classify_document,
    count_matches,
    require_linkedin_profile,
)

FILLER = (
    "Built data pipelines and mentored engineers across several teams, "
    "focusing on reliability, observability and developer tooling for many years. "
)


class TestClassifyDocument:
    """Tests for the acceptance and rejection gates."""

    def test_accepts_modern_export_and_extracts_name(self, sample_profile_text: str) -> None:
        """URL, page footer and section headers together accept the document."""
        result = classify_document(sample_profile_text)
        assert result.accepted is True
        assert result.extracted_name == "John Smith"
        assert result.rejection_reason is None

    def test_rejects_invoice(self, invoice_text: str) -> None:
        """Two or more non-profile indicators reject the document."""
        result = classify_document(invoice_text)
        assert result.accepted is False
        assert result.rejection_reason == NOT_A_PROFILE_REASON
        assert result.extracted_name is None

    def test_rejects_short_text_regardless_of_content(self) -> None:
        """Text under 200 characters is rejected before scoring."""
        text = "Contact\nwww.linkedin.com/in/jane\nSummary\nExperience\nPage 1 of 1"
        result = classify_document(text)
        assert result.accepted is False
        assert result.rejection_reason == NOT_ENOUGH_TEXT_REASON

    def test_exactly_minimum_length_passes_length_gate(self) -> None:
        text = ("linkedin.com/in/jane " + "x" * 200)[:200]
        result = classify_document(text)
        assert result.rejection_reason != NOT_ENOUGH_TEXT_REASON

    def test_profile_url_alone_accepts(self) -> None:
        """The profile URL is decisive on its own."""
        text = "Jane Doe profile at linkedin.com/in/janedoe\n" + FILLER * 3
        assert classify_document(text).accepted is True

    def test_footer_with_five_sections_accepts(self) -> None:
        """Page numbering plus five section headers accept a URL-less export."""
        text = "\n".join(
            [
                "Contact",
                "Top Skills",
                "Summary",
                FILLER * 2,
                "Experience",
                "Education",
                "Page 1 of 3",
            ]
        )
        assert classify_document(text).accepted is True

    def test_sections_and_unique_pattern_accept(self) -> None:
        """Four sections and a unique pattern reach the score-only threshold."""
        text = "\n".join(
            ["Summary", FILLER * 2, "Experience", "Education", "Languages", "500+ connections"]
        )
        assert classify_document(text).accepted is True

    def test_few_sections_without_url_or_footer_rejected(self) -> None:
        """Three sections and nothing else ask for a fresh export."""
        text = "\n".join(["Summary", FILLER, "Experience", FILLER, "Education", FILLER])
        result = classify_document(text)
        assert result.accepted is False
        assert result.rejection_reason == EXPORT_AGAIN_REASON

    def test_single_negative_indicator_tolerated(self, sample_profile_text: str) -> None:
        """One stray word like "agreement" does not reject a profile."""
        result = classify_document(sample_profile_text + "\nSigned a partnership agreement.")
        assert result.accepted is True

    def test_negative_indicators_override_profile_signals(
        self, sample_profile_text: str
    ) -> None:
        """Adding two indicators to an accepted profile rejects it."""
        assert classify_document(sample_profile_text).accepted is True
        text = sample_profile_text + "\nInvoice attached. See terms and conditions."
        result = classify_document(text)
        assert result.accepted is False
        assert result.rejection_reason == NOT_A_PROFILE_REASON

    def test_idempotent(self, sample_profile_text: str, invoice_text: str) -> None:
        """Classifying the same text twice gives the same result."""
        for text in (sample_profile_text, invoice_text, "short"):
            assert classify_document(text) == classify_document(text)

    def test_case_insensitive_markers(self) -> None:
        text = "WWW.LINKEDIN.COM/IN/JANEDOE\n" + FILLER * 3
        assert classify_document(text).accepted is True


class TestRequireLinkedinProfile:
    """Tests for the raising wrapper."""

    def test_returns_accepted_result(self, sample_profile_text: str) -> None:
        assert require_linkedin_profile(sample_profile_text).extracted_name == "John Smith"

    def test_raises_with_reason(self, invoice_text: str) -> None:
        with pytest.raises(ClassificationRejection) as exc_info:
            require_linkedin_profile(invoice_text)
        assert exc_info.value.message == NOT_A_PROFILE_REASON


class TestCountMatches:
    def test_counts_distinct_phrases(self) -> None:
        phrases = ("summary", "experience", "invoice")
        assert count_matches("summary summary experience", phrases) == 2
