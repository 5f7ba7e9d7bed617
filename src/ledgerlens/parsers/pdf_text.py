"""PDF text extraction.

Statements are read as physical text lines: pdfplumber words that share a
vertical position are joined left to right, and lines are emitted top to
bottom, page by page.
"""

import io
import logging

import pdfplumber

from ledgerlens.domain.errors import InvalidDocumentError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"

# Words whose top edges are within this many points belong to the same line
LINE_TOLERANCE = 3


def ensure_pdf(data: bytes) -> None:
    """Reject empty or non-PDF buffers before any parsing happens.

    Raises:
        InvalidDocumentError: If the buffer is empty or lacks the PDF magic bytes
    """
    if not data:
        raise InvalidDocumentError("Uploaded file is empty")
    if not data.startswith(PDF_MAGIC):
        raise InvalidDocumentError("Uploaded file is not a PDF document")


def _group_words(words: list[dict]) -> list[str]:
    grouped: list[list[dict]] = []
    for word in sorted(words, key=lambda w: (w["top"], w["x0"])):
        if grouped and abs(word["top"] - grouped[-1][0]["top"]) <= LINE_TOLERANCE:
            grouped[-1].append(word)
        else:
            grouped.append([word])

    lines = []
    for group in grouped:
        text = " ".join(w["text"] for w in sorted(group, key=lambda w: w["x0"])).strip()
        if text:
            lines.append(text)
    return lines


def extract_text_lines(data: bytes) -> list[str]:
    """Extract the text lines of every page of a PDF.

    Args:
        data: Raw PDF bytes

    Returns:
        Non-empty text lines in reading order

    Raises:
        InvalidDocumentError: If the buffer is not a readable PDF
    """
    lines: list[str] = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                words = page.extract_words() or []
                lines.extend(_group_words(words))
    except Exception as e:
        logger.warning("PDF text extraction failed: %s", e)
        raise InvalidDocumentError(f"Could not read PDF document: {e}") from e

    logger.debug("Extracted %d text lines from PDF", len(lines))
    return lines
