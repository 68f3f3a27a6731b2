"""PDF text layer models."""

from pydantic import BaseModel, Field


class TextFragment(BaseModel):
    """A positioned run of text from a PDF text layer.

    ``y`` is in PDF coordinate space: larger values sit higher on the page.
    """

    text: str
    y: float = 0.0


class ReconstructedLine(BaseModel):
    """One visual line rebuilt from fragments sharing a vertical position."""

    y: float
    text: str = Field(default="")
