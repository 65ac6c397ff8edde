"""Pydantic models for conversations and the assistant wire format.

Provides type safety, validation and JSON persistence.

Models:
    - Message: One user or assistant turn
    - Attachment: File staged with a user turn
    - Session: Saved, titled conversation
    - AssistantRequest / AssistantResponse: Assistant endpoint payloads
    - StatsResponse: Global activity figures served by the host API
"""

from chatdesk.models.conversation import (
    Attachment,
    AttachmentKind,
    Message,
    Mode,
    Role,
    Session,
    derive_title,
)
from chatdesk.models.schemas import AssistantRequest, AssistantResponse, StatsResponse

__all__ = [
    "AssistantRequest",
    "AssistantResponse",
    "Attachment",
    "AttachmentKind",
    "Message",
    "Mode",
    "Role",
    "Session",
    "StatsResponse",
    "derive_title",
]
