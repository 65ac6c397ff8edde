"""Conversation engine: the state machine behind the chat page.

Owns the active transcript and keeps it in sync with the user's saved
sessions.

Flow of one submission:

1. **Guard** - nothing is sent while a response is pending, or when the
   composer has neither text nor an attachment.
2. **Optimistic append** - the user turn is added to the transcript at once
   and the staged input is cleared, so the page can render it immediately.
3. **Usage count** - the global counter is bumped before the call goes out.
4. **Assistant call** - the only suspending step. While it is pending the
   engine is AWAITING_RESPONSE and rejects further submissions.
5. **Answer or failure** - exactly one assistant turn is appended: the answer,
   a placeholder for an empty answer, or a connectivity notice naming the
   endpoint. Answers are read aloud when playback is available. If the user
   switched conversations meanwhile, the turn is filed into the session that
   asked (or dropped if that session was deleted) and nothing is spoken.

After every append the transcript is written through to the session store:
the first append creates a session (titled after the first user turn), later
appends replace its messages. Anonymous users keep a transcript but no
saved sessions.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from chatdesk.client.assistant import AssistantUnavailableError
from chatdesk.composer.composer import Composer
from chatdesk.composer.modes import mode_prefix
from chatdesk.models.conversation import Message, Role, Session, utcnow
from chatdesk.models.schemas import AssistantRequest
from chatdesk.storage.session_store import SessionStore
from chatdesk.storage.usage import UsageCounter
from chatdesk.voice.base import SpeechPlaybackService

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response received."


def unreachable_text(base_url: str) -> str:
    """Assistant turn shown when the endpoint cannot be reached."""
    return f"⚠️ Something went wrong. Make sure the backend server is running at {base_url}"


class Assistant(Protocol):
    """The remote assistant as seen by the engine."""

    @property
    def base_url(self) -> str: ...

    async def ask(self, request: AssistantRequest) -> str: ...


class EngineState(str, Enum):
    """Request lifecycle state."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting-response"


class ConversationEngine:
    """Active transcript, saved sessions and the submit lifecycle."""

    def __init__(
        self,
        assistant: Assistant,
        store: SessionStore,
        counter: UsageCounter,
        user_key: str | None = None,
        composer: Composer | None = None,
        playback: SpeechPlaybackService | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            assistant: Remote assistant to ask.
            store: Persistence for the user's sessions.
            counter: Global usage counter.
            user_key: Logged-in user, None when anonymous.
            composer: Pending input; a fresh one is created if not provided.
            playback: Optional speech output for answers.
        """
        self._assistant = assistant
        self._store = store
        self._counter = counter
        self._user_key = user_key
        self._playback = playback
        self._listeners: list[Callable[[], None]] = []

        self.composer = composer or Composer()
        self.state = EngineState.IDLE
        self.transcript: list[Message] = []
        self.sessions: list[Session] = []
        self.active_session_id: str | None = None

    @property
    def user_key(self) -> str | None:
        return self._user_key

    @property
    def busy(self) -> bool:
        return self.state is EngineState.AWAITING_RESPONSE

    @property
    def active_session(self) -> Session | None:
        return self._find(self.active_session_id)

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener()

    def _find(self, session_id: str | None) -> Session | None:
        if session_id is None:
            return None
        return next((s for s in self.sessions if s.id == session_id), None)

    def mount(self) -> None:
        """Load the user's saved sessions."""
        self.sessions = self._store.load(self._user_key)
        logger.debug(f"Loaded {len(self.sessions)} sessions for {self._user_key}")
        self._changed()

    def set_user(self, user_key: str | None) -> None:
        """Switch to another identity (login or logout)."""
        self._user_key = user_key
        self.transcript = []
        self.active_session_id = None
        self.mount()

    def _append(self, message: Message) -> None:
        self.transcript.append(message)
        self._sync()
        self._changed()

    def _sync(self) -> None:
        """Write the transcript through to the active session."""
        if not self._user_key or not self.transcript:
            return

        session = self.active_session
        if session is None:
            session = Session.start(self.transcript)
            self.active_session_id = session.id
            logger.info(f"Created session {session.id} ({session.title!r})")
        else:
            session.messages = list(self.transcript)
            session.updated_at = utcnow()
            self.sessions = [s for s in self.sessions if s.id != session.id]

        self.sessions.insert(0, session)
        self._store.save(self._user_key, self.sessions)

    async def submit(self) -> bool:
        """Send the composer's pending input to the assistant.

        Returns:
            True if a question was sent, False if the submission was rejected
            (nothing to send, or a response is still pending).
        """
        if self.busy:
            return False

        outgoing = self.composer.build()
        if outgoing is None:
            return False

        self.state = EngineState.AWAITING_RESPONSE
        self._append(
            Message(
                role=Role.USER,
                text=outgoing.display_text,
                attachment=outgoing.attachment,
                mode=outgoing.mode,
            )
        )
        # The reply belongs to this conversation even if the view changes
        transcript = self.transcript
        target_id = self.active_session_id
        self.composer.clear()
        count = self._counter.increment()
        logger.info(f"Submitting question #{count}")

        try:
            answer = await self._assistant.ask(outgoing.request)
        except AssistantUnavailableError as e:
            logger.error(f"Assistant unreachable at {self._assistant.base_url}: {e}")
            reply = Message(role=Role.ASSISTANT, text=unreachable_text(self._assistant.base_url))
            answer = ""
        except Exception:
            self.state = EngineState.IDLE
            self._changed()
            raise
        else:
            reply = Message(
                role=Role.ASSISTANT,
                text=mode_prefix(outgoing.mode) + (answer or NO_RESPONSE_TEXT),
                mode=outgoing.mode,
            )

        self.state = EngineState.IDLE
        if self.transcript is transcript or (
            target_id is not None and target_id == self.active_session_id
        ):
            self._append(reply)
        else:
            # The user moved to another conversation while waiting
            self._file_reply(target_id, reply)
            return True

        if answer:
            await self._speak(answer)
        return True

    def _file_reply(self, session_id: str | None, reply: Message) -> None:
        """Store a late reply in the session that asked for it."""
        session = self._find(session_id)
        if session is None:
            logger.info("Dropping reply for a conversation that is no longer open")
            self._changed()
            return

        session.messages = [*session.messages, reply]
        session.updated_at = utcnow()
        self.sessions = [session, *(s for s in self.sessions if s.id != session.id)]
        self._store.save(self._user_key, self.sessions)
        self._changed()

    async def _speak(self, text: str) -> None:
        if self._playback is None:
            return
        try:
            await self._playback.speak(text)
        except Exception as e:
            logger.warning(f"Spoken playback failed: {e}")

    def start_new(self) -> None:
        """Clear the transcript; the next message starts a new session."""
        self.transcript = []
        self.active_session_id = None
        self._changed()

    def open(self, session_id: str) -> bool:
        """Show a saved session and make it active.

        Returns:
            False if no session has that id.
        """
        session = self._find(session_id)
        if session is None:
            return False
        self.transcript = list(session.messages)
        self.active_session_id = session.id
        self._changed()
        return True

    def remove(self, session_id: str) -> None:
        """Delete a saved session; clears the transcript if it was active."""
        self.sessions = self._store.delete(self._user_key, session_id)
        if self.active_session_id == session_id:
            self.transcript = []
            self.active_session_id = None
        self._changed()
