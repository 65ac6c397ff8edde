"""Durable storage for chat history and usage figures.

Responsibilities:
    - String key-value storage contract with a mapping-backed implementation
    - Per-user session collections, written through on every change
    - Global usage counter shared by all visitors
    - Activity statistics for the dashboard

Reads never raise on bad data: corrupt entries load as empty state.
"""

from chatdesk.storage.backend import KeyValueStorage, MappingStorage, get_storage
from chatdesk.storage.session_store import STORAGE_KEY_PREFIX, SessionStore
from chatdesk.storage.usage import (
    USAGE_COUNTER_KEY,
    UsageCounter,
    UserStats,
    collect_user_stats,
    summarize_sessions,
)

__all__ = [
    "STORAGE_KEY_PREFIX",
    "USAGE_COUNTER_KEY",
    "KeyValueStorage",
    "MappingStorage",
    "SessionStore",
    "UsageCounter",
    "UserStats",
    "collect_user_stats",
    "get_storage",
    "summarize_sessions",
]
