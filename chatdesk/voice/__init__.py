"""Voice input and output.

Dictation feeds recognized speech into the composer and submits it;
playback reads assistant answers aloud. Both are best-effort: devices
without the capability get null implementations and a notice, never an error.

The browser-backed services live in `chatdesk.voice.browser` and are only
imported by the web UI.
"""

from chatdesk.voice.base import (
    DictationError,
    DictationService,
    NullDictation,
    NullPlayback,
    SpeechPlaybackService,
    TranscriptEvent,
    TranscriptKind,
)
from chatdesk.voice.dictation import PERMISSION_NOTICE, UNSUPPORTED_NOTICE, DictationController

__all__ = [
    "PERMISSION_NOTICE",
    "UNSUPPORTED_NOTICE",
    "DictationController",
    "DictationError",
    "DictationService",
    "NullDictation",
    "NullPlayback",
    "SpeechPlaybackService",
    "TranscriptEvent",
    "TranscriptKind",
]
