"""Global usage counter and per-user activity statistics."""

import logging

from pydantic import BaseModel, Field

from chatdesk.models.conversation import Role, Session
from chatdesk.storage.backend import KeyValueStorage
from chatdesk.storage.session_store import SessionStore

logger = logging.getLogger(__name__)

USAGE_COUNTER_KEY = "chatgpt_global_search_count"
RECENT_CHATS_LIMIT = 10


class UsageCounter:
    """Count of questions submitted by everyone, logged in or not."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    def current(self) -> int:
        """Stored count, 0 when absent or unparsable."""
        raw = self._storage.get(USAGE_COUNTER_KEY)
        if raw is None:
            return 0
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Resetting unparsable usage count: {raw!r}")
            return 0
        return max(value, 0)

    def increment(self) -> int:
        """Add one submission and persist it.

        Returns:
            The new count.
        """
        value = self.current() + 1
        self._storage.set(USAGE_COUNTER_KEY, str(value))
        return value


class UserStats(BaseModel):
    """Activity figures for one logged-in user.

    Attributes:
        total_chats: Saved sessions.
        total_messages: Messages across all sessions.
        questions_asked: User turns.
        assistant_responses: Assistant turns.
        recent_chats: Up to ten most recent sessions.
    """

    total_chats: int = Field(default=0, ge=0)
    total_messages: int = Field(default=0, ge=0)
    questions_asked: int = Field(default=0, ge=0)
    assistant_responses: int = Field(default=0, ge=0)
    recent_chats: list[Session] = Field(default_factory=list)


def summarize_sessions(sessions: list[Session]) -> UserStats:
    """Aggregate activity over a session collection."""
    questions = 0
    responses = 0
    for session in sessions:
        for message in session.messages:
            if message.role is Role.USER:
                questions += 1
            else:
                responses += 1

    return UserStats(
        total_chats=len(sessions),
        total_messages=questions + responses,
        questions_asked=questions,
        assistant_responses=responses,
        recent_chats=sessions[:RECENT_CHATS_LIMIT],
    )


def collect_user_stats(store: SessionStore, user_key: str | None) -> UserStats | None:
    """Activity figures for a user, None for anonymous visitors."""
    if not user_key:
        return None
    return summarize_sessions(store.load(user_key))
