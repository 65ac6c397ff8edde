"""Conversation engine.

Owns the active transcript and the request lifecycle against the assistant,
and writes every change through to the user's saved sessions.
"""

from chatdesk.engine.conversation import (
    NO_RESPONSE_TEXT,
    Assistant,
    ConversationEngine,
    EngineState,
    unreachable_text,
)

__all__ = [
    "NO_RESPONSE_TEXT",
    "Assistant",
    "ConversationEngine",
    "EngineState",
    "unreachable_text",
]
