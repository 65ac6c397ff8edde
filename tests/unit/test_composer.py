"""Unit tests for the composer: framing, modes and attachment ingestion."""

import base64
import io

import pytest
import pytest_check as check
from pypdf import PdfWriter

from chatdesk.composer.attachments import MAX_FILE_SIZE, AttachmentError, read_attachment
from chatdesk.composer.composer import ATTACHMENT_SNIPPET_LIMIT, Composer
from chatdesk.composer.modes import MODES
from chatdesk.models.conversation import Attachment, AttachmentKind, Mode


def text_attachment(content: str, name: str = "notes.txt") -> Attachment:
    return Attachment(name=name, kind=AttachmentKind.TEXT, content=content)


def image_attachment(name: str = "cat.png") -> Attachment:
    return Attachment(name=name, kind=AttachmentKind.IMAGE, content="data:image/png;base64,AAAA")


class TestComposerGuard:
    """Tests for rejecting empty submissions."""

    def test_empty_input_builds_nothing(self) -> None:
        assert Composer().build() is None

    def test_whitespace_only_builds_nothing(self) -> None:
        composer = Composer()
        composer.text = "   \n"
        assert composer.build() is None

    def test_attachment_alone_is_enough(self) -> None:
        composer = Composer()
        composer.stage_attachment(text_attachment("data"))
        assert composer.build() is not None


class TestPlainText:
    """Tests for messages without attachment or mode."""

    def test_plain_question(self) -> None:
        composer = Composer()
        composer.text = "  Hello  "

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(outgoing.display_text, "Hello")
        check.equal(outgoing.request.message, "Hello")
        check.is_none(outgoing.request.system_prompt)
        check.is_none(outgoing.mode)


class TestTextAttachment:
    """Tests for text attachment framing."""

    def test_snippet_truncated_to_limit(self) -> None:
        """A 5000-character file sends exactly its first 3000 characters."""
        content = "".join(chr(ord("a") + i % 26) for i in range(5000))
        composer = Composer()
        composer.stage_attachment(text_attachment(content))

        outgoing = composer.build()

        assert outgoing is not None
        expected = (
            'Here is the content of the attached file "notes.txt":\n\n'
            + content[:ATTACHMENT_SNIPPET_LIMIT]
            + "\n\nPlease analyze this file."
        )
        check.equal(outgoing.request.message, expected)
        check.is_not_in(content[:ATTACHMENT_SNIPPET_LIMIT + 1], outgoing.request.message)

    def test_display_keeps_full_content(self) -> None:
        content = "z" * 5000
        composer = Composer()
        composer.stage_attachment(text_attachment(content))

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(outgoing.display_text, "📎 notes.txt")
        check.equal(outgoing.attachment.content, content)

    def test_question_follows_snippet(self) -> None:
        composer = Composer()
        composer.text = "What does it do?"
        composer.stage_attachment(text_attachment("print(1)", name="main.py"))

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(outgoing.display_text, "📎 main.py\n\nWhat does it do?")
        check.is_true(outgoing.request.message.endswith("\n\nUser question: What does it do?"))


class TestImageAttachment:
    """Tests for image attachment framing."""

    def test_image_without_question(self) -> None:
        composer = Composer()
        composer.stage_attachment(image_attachment())

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(
            outgoing.request.message,
            "[User attached an image: cat.png] Please describe or analyze this image.",
        )
        check.equal(outgoing.display_text, "📎 cat.png")

    def test_image_with_question(self) -> None:
        composer = Composer()
        composer.text = "What breed?"
        composer.stage_attachment(image_attachment())

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(outgoing.request.message, "[User attached an image: cat.png] What breed?")


class TestStaging:
    """Tests for staging and clearing input."""

    def test_new_attachment_replaces_previous(self) -> None:
        composer = Composer()
        composer.stage_attachment(text_attachment("a", name="first.txt"))
        composer.stage_attachment(text_attachment("b", name="second.txt"))

        assert composer.attachment is not None
        assert composer.attachment.name == "second.txt"

    def test_clear_keeps_mode(self) -> None:
        composer = Composer()
        composer.text = "hi"
        composer.stage_attachment(image_attachment())
        composer.toggle_mode(Mode.STUDY)

        composer.clear()

        check.equal(composer.text, "")
        check.is_none(composer.attachment)
        check.equal(composer.mode, Mode.STUDY)

    def test_placeholder_follows_state(self) -> None:
        composer = Composer()
        check.equal(composer.placeholder(), "Ask anything")

        composer.toggle_mode(Mode.SEARCH)
        check.equal(composer.placeholder(), "Search the web...")

        composer.stage_attachment(image_attachment())
        check.equal(composer.placeholder(), "Ask about this file...")


class TestModes:
    """Tests for mode selection and framing."""

    def test_toggle_semantics(self) -> None:
        composer = Composer()

        check.equal(composer.toggle_mode(Mode.SEARCH), Mode.SEARCH)
        check.equal(composer.toggle_mode(Mode.STUDY), Mode.STUDY)
        check.is_none(composer.toggle_mode(Mode.STUDY))

    def test_mode_frames_display_and_prompt(self) -> None:
        composer = Composer()
        composer.text = "photosynthesis"
        composer.toggle_mode(Mode.STUDY)

        outgoing = composer.build()

        assert outgoing is not None
        check.equal(outgoing.display_text, "📚 photosynthesis")
        check.equal(outgoing.request.message, "photosynthesis")
        check.equal(outgoing.request.system_prompt, MODES[Mode.STUDY].system_prompt)
        check.equal(outgoing.mode, Mode.STUDY)

    def test_mode_icon_precedes_attachment_label(self) -> None:
        composer = Composer()
        composer.toggle_mode(Mode.CREATE_IMAGE)
        composer.stage_attachment(image_attachment())

        outgoing = composer.build()

        assert outgoing is not None
        assert outgoing.display_text == "🎨 📎 cat.png"

    def test_every_mode_has_a_prompt(self) -> None:
        for mode in Mode:
            check.is_true(MODES[mode].system_prompt)
            check.is_true(MODES[mode].icon)


class TestReadAttachment:
    """Tests for classifying and capturing uploaded files."""

    def test_image_becomes_data_url(self) -> None:
        data = b"\x89PNG\r\n\x1a\n"

        attachment = read_attachment("cat.png", "image/png", data)

        check.equal(attachment.kind, AttachmentKind.IMAGE)
        check.equal(
            attachment.content, "data:image/png;base64," + base64.b64encode(data).decode()
        )

    def test_text_is_decoded(self) -> None:
        attachment = read_attachment("notes.md", "text/markdown", "héllo".encode())

        check.equal(attachment.kind, AttachmentKind.TEXT)
        check.equal(attachment.content, "héllo")

    def test_missing_media_type_is_text(self) -> None:
        attachment = read_attachment("data.log", None, b"line")
        assert attachment.kind is AttachmentKind.TEXT

    def test_undecodable_bytes_replaced(self) -> None:
        attachment = read_attachment("blob.bin", "application/octet-stream", b"ok\xff")
        assert attachment.content == "ok\ufffd"

    def test_missing_name_rejected(self) -> None:
        with pytest.raises(AttachmentError, match="Filename"):
            read_attachment("", "text/plain", b"x")

    def test_oversized_file_rejected(self) -> None:
        with pytest.raises(AttachmentError, match="exceeds maximum"):
            read_attachment("big.txt", "text/plain", b"x" * (MAX_FILE_SIZE + 1))

    def test_pdf_text_extracted(self) -> None:
        writer = PdfWriter()
        writer.add_blank_page(width=72, height=72)
        buffer = io.BytesIO()
        writer.write(buffer)

        attachment = read_attachment("blank.pdf", "application/pdf", buffer.getvalue())

        check.equal(attachment.kind, AttachmentKind.TEXT)
        check.equal(attachment.content.strip(), "")

    def test_corrupt_pdf_rejected(self) -> None:
        with pytest.raises(AttachmentError, match="Invalid PDF"):
            read_attachment("fake.pdf", "application/pdf", b"not a pdf at all")

    def test_truncated_pdf_rejected(self) -> None:
        with pytest.raises(AttachmentError, match="Corrupt|Failed"):
            read_attachment("cut.pdf", "application/pdf", b"%PDF-1.4\n1 0 obj\n<<")
