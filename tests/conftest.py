"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - storage: In-memory key-value storage
    - store / counter: Session store and usage counter over that storage
    - assistant: Scriptable fake assistant endpoint
    - playback: Recording speech playback
    - engine: Conversation engine for a logged-in user
    - async_client: HTTPX client for the host API

No browser, network or audio device is needed.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from chatdesk.api.app import create_app
from chatdesk.engine.conversation import ConversationEngine
from chatdesk.models.schemas import AssistantRequest
from chatdesk.storage.backend import MappingStorage, get_storage
from chatdesk.storage.session_store import SessionStore
from chatdesk.storage.usage import UsageCounter

USER = "a@x.com"


class FakeAssistant:
    """Assistant double answering from a script.

    Each scripted reply is either answer text or an exception to raise.
    When `gate` is set, calls wait for it before answering.
    """

    def __init__(self, *replies: str | Exception) -> None:
        self.base_url = "http://assistant.test"
        self.replies: list[str | Exception] = list(replies)
        self.requests: list[AssistantRequest] = []
        self.gate: asyncio.Event | None = None

    async def ask(self, request: AssistantRequest) -> str:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingPlayback:
    """Playback double remembering what it was asked to say."""

    def __init__(self) -> None:
        self.spoken: list[str] = []
        self.cancelled = 0

    async def speak(self, text: str) -> None:
        self.spoken.append(text)

    async def cancel(self) -> None:
        self.cancelled += 1


@pytest.fixture
def storage() -> MappingStorage:
    """Return empty in-memory storage."""
    return MappingStorage({})


@pytest.fixture
def store(storage: MappingStorage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def counter(storage: MappingStorage) -> UsageCounter:
    return UsageCounter(storage)


@pytest.fixture
def assistant() -> FakeAssistant:
    """Return an assistant that answers "ok" unless scripted otherwise."""
    return FakeAssistant()


@pytest.fixture
def playback() -> RecordingPlayback:
    return RecordingPlayback()


@pytest.fixture
def engine(
    assistant: FakeAssistant,
    store: SessionStore,
    counter: UsageCounter,
    playback: RecordingPlayback,
) -> ConversationEngine:
    """Create a mounted engine for a logged-in user.

    Returns:
        ConversationEngine for user "a@x.com" with recording playback.
    """
    conversation = ConversationEngine(
        assistant=assistant,
        store=store,
        counter=counter,
        user_key=USER,
        playback=playback,
    )
    conversation.mount()
    return conversation


@pytest.fixture
async def async_client(storage: MappingStorage) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the host API over in-memory storage.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app = create_app()
    app.dependency_overrides[get_storage] = lambda: storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
