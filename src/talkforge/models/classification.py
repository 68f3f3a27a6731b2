"""Document classification and name extraction models."""

from enum import Enum

from pydantic import BaseModel, model_validator


class ClassificationResult(BaseModel):
    """Outcome of checking whether text is a LinkedIn profile export."""

    accepted: bool
    extracted_name: str | None = None
    rejection_reason: str | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "ClassificationResult":
        if self.accepted:
            if self.rejection_reason is not None:
                raise ValueError("accepted result cannot carry a rejection reason")
        else:
            if self.extracted_name is not None:
                raise ValueError("rejected result cannot carry an extracted name")
            if not self.rejection_reason:
                raise ValueError("rejected result needs a rejection reason")
        return self

    @classmethod
    def accept(cls, extracted_name: str | None = None) -> "ClassificationResult":
        return cls(accepted=True, extracted_name=extracted_name or None)

    @classmethod
    def reject(cls, reason: str) -> "ClassificationResult":
        return cls(accepted=False, rejection_reason=reason)


class NameStrategy(str, Enum):
    """Name extraction strategies, in priority order."""

    SUMMARY_ANCHORED = "summary_anchored"
    STRUCTURED_SCAN = "structured_scan"
    HEADER_SLICE = "header_slice"


class NameCandidate(BaseModel):
    """A scored guess at the profile owner's name."""

    text: str
    score: int = 0
    source_strategy: NameStrategy
    line_index: int = -1
    strong_context: bool = False
