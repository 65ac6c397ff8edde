"""Conversation data model: messages, attachments and saved sessions.

Field aliases keep the stored JSON compatible with the browser client's
history format (`createdAt`, `updatedAt`, attachment `type`). Both the Python
names and the aliases are accepted on input; serialization uses the aliases.
"""

import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

TITLE_MAX_LENGTH = 40
TITLE_ELLIPSIS = "..."


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_session_id() -> str:
    """Generate a fresh opaque session identifier."""
    return uuid.uuid4().hex


def derive_title(text: str, limit: int = TITLE_MAX_LENGTH) -> str:
    """Build a session title from the first user message.

    Args:
        text: Display text of the first user message.
        limit: Maximum number of characters kept before the ellipsis.

    Returns:
        The text truncated to `limit` characters, with "..." appended
        when anything was cut off.
    """
    if len(text) > limit:
        return text[:limit] + TITLE_ELLIPSIS
    return text


class Role(str, Enum):
    """Speaker of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class AttachmentKind(str, Enum):
    """How an attachment's content is represented."""

    IMAGE = "image"
    TEXT = "text"


class Mode(str, Enum):
    """Assistant persona selectable for a question."""

    SEARCH = "search"
    STUDY = "study"
    CREATE_IMAGE = "create_image"


class Attachment(BaseModel):
    """A file attached to a user message.

    Attributes:
        name: Original file name.
        kind: Image (content is a data URL) or text (content is decoded text).
        content: Data URL for images, full decoded text otherwise.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    kind: AttachmentKind = Field(..., alias="type")
    content: str

    @model_validator(mode="after")
    def check_image_is_data_url(self) -> "Attachment":
        """Image attachments must be renderable without further lookups."""
        if self.kind is AttachmentKind.IMAGE and not self.content.startswith("data:"):
            raise ValueError("image attachment content must be a data: URL")
        return self


class Message(BaseModel):
    """One turn in a conversation.

    Attributes:
        role: Who produced the turn.
        text: Display text, already framed with mode icon or attachment label.
        attachment: Staged file sent with a user turn.
        mode: Persona that received or produced the turn (None for default).
        sent_at: When the turn was appended.
    """

    model_config = ConfigDict(populate_by_name=True)

    role: Role
    text: str
    attachment: Attachment | None = None
    mode: Mode | None = None
    sent_at: datetime = Field(default_factory=utcnow, alias="sentAt")

    @model_validator(mode="after")
    def check_attachment_on_user_turn(self) -> "Message":
        """Only user turns carry attachments."""
        if self.attachment is not None and self.role is not Role.USER:
            raise ValueError("only user messages may carry an attachment")
        return self


class Session(BaseModel):
    """One saved conversation.

    The title is derived once, from the first user message, when the session
    is created. It is never recomputed afterwards.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_session_id, min_length=1)
    title: str = ""
    messages: list[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")

    @classmethod
    def start(cls, messages: list[Message]) -> "Session":
        """Create a session for a transcript that has no session yet.

        Args:
            messages: The transcript so far; its first user turn names the session.

        Returns:
            A new session with a fresh id and derived title.
        """
        first_user = next((m for m in messages if m.role is Role.USER), None)
        now = utcnow()
        return cls(
            title=derive_title(first_user.text if first_user else ""),
            messages=list(messages),
            created_at=now,
            updated_at=now,
        )
