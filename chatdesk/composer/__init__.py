"""Outgoing message preparation.

Turns typed or dictated text, an optional attachment and an optional mode
into the transcript text and the assistant request.

Responsibilities:
    - Attachment ingestion (images as data URLs, text and PDF as text)
    - Attachment framing with a fixed snippet cap
    - Mode selection with toggle semantics and per-mode system prompts
"""

from chatdesk.composer.attachments import (
    ACCEPTED_EXTENSIONS,
    MAX_FILE_SIZE,
    AttachmentError,
    read_attachment,
)
from chatdesk.composer.composer import ATTACHMENT_SNIPPET_LIMIT, Composer, OutgoingMessage
from chatdesk.composer.modes import MODES, ModeConfig, mode_config, mode_prefix

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "ATTACHMENT_SNIPPET_LIMIT",
    "MAX_FILE_SIZE",
    "MODES",
    "AttachmentError",
    "Composer",
    "ModeConfig",
    "OutgoingMessage",
    "mode_config",
    "mode_prefix",
    "read_attachment",
]
