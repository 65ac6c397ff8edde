"""Text extraction for PDF attachments using pypdf."""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"


class PDFParseError(Exception):
    """Raised when a PDF attachment cannot be read."""

    pass


def extract_pdf_text(file_content: bytes) -> str:
    """Extract the text of every page of a PDF.

    Pages that fail to extract are skipped with a warning, so a partially
    damaged document still yields what it can.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        Page texts joined by blank lines (empty for scanned documents).

    Raises:
        PDFParseError: If the bytes are not a readable PDF.
    """
    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = list(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    text_parts: list[str] = []
    for number, page in enumerate(pages, start=1):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    text = "\n\n".join(text_parts)
    if not text.strip():
        logger.warning("PDF attachment has no extractable text (may be scanned)")
    return text
