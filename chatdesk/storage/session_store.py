"""Per-user persistence of saved chat sessions.

Each user's collection is one JSON document stored under a namespaced key.
Reads fail soft: missing or malformed data is an empty collection.
Anonymous callers (no user key) never read or write anything.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from chatdesk.models.conversation import Session
from chatdesk.storage.backend import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "chatgpt_history_"

_sessions_adapter = TypeAdapter(list[Session])


def storage_key(user_key: str) -> str:
    """Storage key holding a user's session collection."""
    return f"{STORAGE_KEY_PREFIX}{user_key}"


class SessionStore:
    """Load, save and delete a user's saved sessions."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    def load(self, user_key: str | None) -> list[Session]:
        """Load a user's sessions, most recent first.

        Args:
            user_key: Identity of the logged-in user, None when anonymous.

        Returns:
            The stored sessions, or an empty list when the user is anonymous
            or the stored data is absent or unreadable.
        """
        if not user_key:
            return []

        raw = self._storage.get(storage_key(user_key))
        if not raw:
            return []

        try:
            return _sessions_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session history for {user_key}: {e}")
            return []

    def save(self, user_key: str | None, sessions: list[Session]) -> None:
        """Overwrite a user's whole collection.

        Args:
            user_key: Identity of the logged-in user; no-op when None.
            sessions: Complete collection, most recent first.
        """
        if not user_key:
            return

        payload = _sessions_adapter.dump_json(sessions, by_alias=True)
        self._storage.set(storage_key(user_key), payload.decode("utf-8"))
        logger.debug(f"Saved {len(sessions)} sessions for {user_key}")

    def delete(self, user_key: str | None, session_id: str) -> list[Session]:
        """Remove one session and persist the remainder.

        Args:
            user_key: Identity of the logged-in user.
            session_id: Id of the session to remove; unknown ids are ignored.

        Returns:
            The collection after removal.
        """
        if not user_key:
            return []

        sessions = self.load(user_key)
        remaining = [s for s in sessions if s.id != session_id]
        if len(remaining) != len(sessions):
            self.save(user_key, remaining)
            logger.info(f"Deleted session {session_id} for {user_key}")
        return remaining
