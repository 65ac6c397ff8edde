"""Attachment ingestion: classify an uploaded file and capture its content.

Images are kept as data URLs so they render inline with no further lookups.
Everything else is captured as text: PDFs through pypdf, other files decoded
as UTF-8 with undecodable bytes replaced.
"""

import base64
import logging

from chatdesk.composer.pdf import PDFParseError, extract_pdf_text
from chatdesk.models.conversation import Attachment, AttachmentKind

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

# File picker filter offered by the chat page
ACCEPTED_EXTENSIONS = (
    ".txt,.js,.jsx,.py,.json,.csv,.md,.html,.css,.ts,.tsx,.xml,.yaml,.yml,.log,"
    ".pdf,.png,.jpg,.jpeg,.gif,.webp"
)


class AttachmentError(Exception):
    """Raised when a file cannot be staged as an attachment."""

    pass


def _is_pdf(name: str, media_type: str) -> bool:
    return media_type == "application/pdf" or name.lower().endswith(".pdf")


def to_data_url(data: bytes, media_type: str) -> str:
    """Encode bytes as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def read_attachment(name: str | None, media_type: str | None, data: bytes) -> Attachment:
    """Turn an uploaded file into a stageable attachment.

    Args:
        name: Original file name.
        media_type: Declared media type (e.g. "image/png"), may be missing.
        data: Raw file content.

    Returns:
        An image attachment (data URL) when the media type starts with
        "image/", a text attachment otherwise.

    Raises:
        AttachmentError: If the name is missing, the file is too large,
            or a PDF cannot be read.
    """
    if not name:
        raise AttachmentError("Filename is required")

    if len(data) > MAX_FILE_SIZE:
        size_mb = len(data) / (1024 * 1024)
        raise AttachmentError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    media_type = (media_type or "").strip().lower()

    if media_type.startswith("image/"):
        return Attachment(name=name, kind=AttachmentKind.IMAGE, content=to_data_url(data, media_type))

    if _is_pdf(name, media_type):
        try:
            content = extract_pdf_text(data)
        except PDFParseError as e:
            logger.warning(f"Rejected PDF attachment {name}: {e}")
            raise AttachmentError(str(e)) from e
    else:
        content = data.decode("utf-8-sig", errors="replace")

    return Attachment(name=name, kind=AttachmentKind.TEXT, content=content)
