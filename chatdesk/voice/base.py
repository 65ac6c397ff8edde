"""Voice capability interfaces.

Speech recognition and synthesis are optional, device-provided capabilities.
The conversation engine and dictation controller depend only on these
protocols; null implementations stand in when a capability is absent.

Recognition results arrive as an async stream of events: zero or more
partial transcripts, then a final transcript, terminated by an END or
ERROR event.
"""

from collections.abc import AsyncIterator
from enum import Enum
from typing import Protocol

from pydantic import BaseModel

# Browser error codes meaning the user or policy refused microphone access
PERMISSION_ERRORS = frozenset({"not-allowed", "service-not-allowed"})


class DictationError(Exception):
    """Raised when a recognition session cannot be started or fails."""

    pass


class TranscriptKind(str, Enum):
    """Kind of recognition event."""

    PARTIAL = "partial"
    FINAL = "final"
    END = "end"
    ERROR = "error"


class TranscriptEvent(BaseModel):
    """One event of a recognition session.

    Attributes:
        kind: Partial or final transcript, or a terminating END/ERROR.
        text: Transcript text (partial and final events).
        error: Capability error code (error events).
    """

    kind: TranscriptKind
    text: str = ""
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.kind in (TranscriptKind.END, TranscriptKind.ERROR)

    @property
    def is_permission_denied(self) -> bool:
        return self.kind is TranscriptKind.ERROR and self.error in PERMISSION_ERRORS


class DictationService(Protocol):
    """Speech-to-text capability."""

    async def is_available(self) -> bool: ...

    def listen(self, locale: str | None = None) -> AsyncIterator[TranscriptEvent]: ...

    async def stop(self) -> None: ...


class SpeechPlaybackService(Protocol):
    """Text-to-speech capability."""

    async def speak(self, text: str) -> None: ...

    async def cancel(self) -> None: ...


class NullDictation:
    """Dictation for devices without speech recognition."""

    async def is_available(self) -> bool:
        return False

    async def listen(self, locale: str | None = None) -> AsyncIterator[TranscriptEvent]:
        yield TranscriptEvent(kind=TranscriptKind.END)

    async def stop(self) -> None:
        return None


class NullPlayback:
    """Playback for devices without speech synthesis."""

    async def speak(self, text: str) -> None:
        return None

    async def cancel(self) -> None:
        return None
