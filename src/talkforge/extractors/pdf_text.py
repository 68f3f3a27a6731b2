"""PDF text extraction with visual line reconstruction.

Text layers do not always stream fragments in reading order, so fragments are
regrouped into lines by clustering on their vertical position before any
classification or name extraction happens.
"""

import logging
import re
from collections.abc import Iterable, Sequence

from talkforge.errors import ExtractionFailure
from talkforge.models.document import ReconstructedLine, TextFragment

logger = logging.getLogger(__name__)

# Fragments whose baselines differ by at most this many PDF units share a line
LINE_Y_THRESHOLD = 2.5

PAGE_SEPARATOR = "\n\n"

_WHITESPACE_RE = re.compile(r"\s+")


def reconstruct_lines(
    fragments: Iterable[TextFragment],
    y_threshold: float = LINE_Y_THRESHOLD,
) -> list[ReconstructedLine]:
    """Group positioned fragments into top-to-bottom visual lines.

    Args:
        fragments: Fragments from a single page.
        y_threshold: Maximum vertical distance from the line's first fragment.

    Returns:
        Lines ordered by descending y (top of the page first).
    """
    items = sorted(
        (f for f in fragments if f.text.strip()),
        key=lambda f: f.y,
        reverse=True,
    )

    groups: list[tuple[float, list[str]]] = []
    for item in items:
        if not groups or abs(groups[-1][0] - item.y) > y_threshold:
            groups.append((item.y, [item.text.strip()]))
        else:
            groups[-1][1].append(item.text.strip())

    lines = []
    for y, parts in groups:
        text = _WHITESPACE_RE.sub(" ", " ".join(parts)).strip()
        if text:
            lines.append(ReconstructedLine(y=y, text=text))
    return lines


def page_text(fragments: Iterable[TextFragment]) -> str:
    """Render one page's fragments as newline-separated lines."""
    return "\n".join(line.text for line in reconstruct_lines(fragments))


def join_pages(pages: Sequence[Sequence[TextFragment]]) -> str:
    """Join reconstructed pages with a blank line and trim the document."""
    return PAGE_SEPARATOR.join(page_text(page) for page in pages).strip()


def extract_page_fragments(pdf_bytes: bytes) -> list[list[TextFragment]]:
    """Read the text layer of every page, one page at a time.

    Span baselines are converted to PDF coordinate space so that larger y
    means higher on the page.
    """
    import fitz  # PyMuPDF

    pages: list[list[TextFragment]] = []
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            height = page.rect.height
            fragments: list[TextFragment] = []
            for block in page.get_text("dict").get("blocks", []):
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        origin_y = span.get("origin", (0.0, 0.0))[1]
                        fragments.append(
                            TextFragment(text=str(span.get("text", "")), y=height - origin_y)
                        )
            pages.append(fragments)
    return pages


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """Extract reading-ordered text from PDF bytes.

    Raises:
        ExtractionFailure: If the PDF cannot be opened or parsed.
    """
    try:
        pages = extract_page_fragments(pdf_bytes)
    except Exception as e:
        logger.warning(f"PDF text extraction failed: {type(e).__name__}")
        raise ExtractionFailure() from e

    text = join_pages(pages)
    logger.info(f"Extracted {len(text)} characters from {len(pages)} page(s)")
    return text
