"""Input aggregation for the next outgoing message.

The composer holds what the user is preparing (typed or dictated text, one
staged attachment, the selected mode) and turns it into a display text for the
transcript plus the request body for the assistant.
"""

from dataclasses import dataclass

from chatdesk.composer.modes import MODES, mode_prefix
from chatdesk.models.conversation import Attachment, AttachmentKind, Mode
from chatdesk.models.schemas import AssistantRequest

ATTACHMENT_SNIPPET_LIMIT = 3000
ATTACHMENT_MARKER = "📎"

DEFAULT_PLACEHOLDER = "Ask anything"
ATTACHMENT_PLACEHOLDER = "Ask about this file..."
ANALYZE_FILE_PROMPT = "Please analyze this file."
DESCRIBE_IMAGE_PROMPT = "Please describe or analyze this image."


@dataclass(frozen=True)
class OutgoingMessage:
    """A prepared submission.

    Attributes:
        display_text: Text shown in the transcript for the user turn.
        request: Body sent to the assistant.
        attachment: The attachment as staged (content not truncated).
        mode: Mode active when the message was prepared.
    """

    display_text: str
    request: AssistantRequest
    attachment: Attachment | None
    mode: Mode | None


def frame_display_text(question: str, attachment: Attachment | None, mode: Mode | None) -> str:
    """Text shown for a user turn."""
    text = question
    if attachment is not None:
        label = f"{ATTACHMENT_MARKER} {attachment.name}"
        text = f"{label}\n\n{question}" if question else label
    return mode_prefix(mode) + text


def frame_model_message(question: str, attachment: Attachment | None) -> str:
    """Question text sent to the assistant, with attachment context inlined."""
    if attachment is None:
        return question

    if attachment.kind is AttachmentKind.IMAGE:
        note = f"[User attached an image: {attachment.name}]"
        return f"{note} {question or DESCRIBE_IMAGE_PROMPT}"

    snippet = attachment.content[:ATTACHMENT_SNIPPET_LIMIT]
    header = f'Here is the content of the attached file "{attachment.name}":\n\n{snippet}\n\n'
    if question:
        return f"{header}User question: {question}"
    return f"{header}{ANALYZE_FILE_PROMPT}"


class Composer:
    """Pending input state for the chat box."""

    def __init__(self) -> None:
        self.text: str = ""
        self.attachment: Attachment | None = None
        self.mode: Mode | None = None

    def toggle_mode(self, mode: Mode) -> Mode | None:
        """Select `mode`, or clear it when it is already selected.

        Returns:
            The mode now active.
        """
        self.mode = None if self.mode is mode else mode
        return self.mode

    def stage_attachment(self, attachment: Attachment) -> None:
        """Stage a file, replacing any previously staged one."""
        self.attachment = attachment

    def clear_attachment(self) -> None:
        self.attachment = None

    def clear(self) -> None:
        """Reset text and attachment after sending. The mode stays selected."""
        self.text = ""
        self.attachment = None

    def placeholder(self) -> str:
        """Input hint for the current state."""
        if self.attachment is not None:
            return ATTACHMENT_PLACEHOLDER
        if self.mode is not None:
            return MODES[self.mode].placeholder
        return DEFAULT_PLACEHOLDER

    def build(self) -> OutgoingMessage | None:
        """Prepare the pending input for submission.

        Returns:
            The framed message, or None when there is neither text nor an
            attachment to send.
        """
        question = self.text.strip()
        if not question and self.attachment is None:
            return None

        system_prompt = MODES[self.mode].system_prompt if self.mode is not None else None
        return OutgoingMessage(
            display_text=frame_display_text(question, self.attachment, self.mode),
            request=AssistantRequest(
                message=frame_model_message(question, self.attachment),
                system_prompt=system_prompt,
            ),
            attachment=self.attachment,
            mode=self.mode,
        )
