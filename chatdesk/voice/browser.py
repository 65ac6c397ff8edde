"""Browser speech capabilities driven through NiceGUI.

The Web Speech API lives in the visitor's browser. These services run small
scripts in the page with `run_javascript`; recognition results come back as
custom events (`emitEvent`) and are queued into an async stream.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from nicegui import Client, ui
from nicegui.events import GenericEventArguments
from pydantic import ValidationError

from chatdesk.voice.base import DictationError, TranscriptEvent, TranscriptKind

logger = logging.getLogger(__name__)

DICTATION_EVENT = "chatdesk_dictation"

_HAS_RECOGNITION_JS = "!!(window.SpeechRecognition || window.webkitSpeechRecognition)"

_START_RECOGNITION_JS = """
(() => {
  const session = __SESSION__;
  const send = (payload) => emitEvent('%(event)s', Object.assign({session}, payload));
  const Recognition = window.SpeechRecognition || window.webkitSpeechRecognition;
  if (!Recognition) { send({kind: 'error', error: 'unsupported'}); return; }
  if (window.chatdeskRecognition) { window.chatdeskRecognition.abort(); }
  const recognition = new Recognition();
  recognition.continuous = false;
  recognition.interimResults = true;
  recognition.lang = __LOCALE__ || navigator.language;
  recognition.onresult = (event) => {
    let finalText = '';
    let interimText = '';
    for (let i = event.resultIndex; i < event.results.length; i++) {
      const transcript = event.results[i][0].transcript;
      if (event.results[i].isFinal) { finalText += transcript; } else { interimText += transcript; }
    }
    if (finalText) { send({kind: 'final', text: finalText}); }
    else if (interimText) { send({kind: 'partial', text: interimText}); }
  };
  recognition.onerror = (event) => send({kind: 'error', error: event.error});
  recognition.onend = () => send({kind: 'end'});
  window.chatdeskRecognition = recognition;
  recognition.start();
})();
""" % {"event": DICTATION_EVENT}

_STOP_RECOGNITION_JS = "if (window.chatdeskRecognition) { window.chatdeskRecognition.stop(); }"

_SPEAK_JS = """
if ('speechSynthesis' in window) {
  window.speechSynthesis.cancel();
  const utterance = new SpeechSynthesisUtterance(__TEXT__);
  utterance.rate = 1;
  utterance.pitch = 1;
  window.speechSynthesis.speak(utterance);
}
"""

_CANCEL_SPEECH_JS = "if ('speechSynthesis' in window) { window.speechSynthesis.cancel(); }"


class BrowserDictation:
    """Speech recognition in the visitor's browser.

    Use `for_page` inside a page so the event handler binds to its client.
    """

    def __init__(self, client: Client) -> None:
        self._client = client
        self._session = 0
        self._queue: asyncio.Queue[TranscriptEvent] = asyncio.Queue()

    @classmethod
    def for_page(cls, client: Client) -> "BrowserDictation":
        """Create the service and subscribe it to the page's dictation events."""
        dictation = cls(client)
        with client:
            ui.on(DICTATION_EVENT, dictation._on_event)
        return dictation

    def _on_event(self, e: GenericEventArguments) -> None:
        self.receive(e.args)

    def receive(self, args: object) -> None:
        """Queue one event sent by the page script."""
        if not isinstance(args, dict):
            return
        # Late events from an earlier session are dropped
        if args.get("session") != self._session:
            return
        try:
            event = TranscriptEvent.model_validate(args)
        except ValidationError as err:
            logger.warning(f"Ignoring malformed dictation event: {err}")
            return
        self._queue.put_nowait(event)

    async def is_available(self) -> bool:
        try:
            return bool(await self._client.run_javascript(_HAS_RECOGNITION_JS))
        except TimeoutError:
            logger.warning("Browser did not answer the speech recognition probe")
            return False

    async def listen(self, locale: str | None = None) -> AsyncIterator[TranscriptEvent]:
        self._session += 1
        queue: asyncio.Queue[TranscriptEvent] = asyncio.Queue()
        # Any listener still waiting on the previous session ends now
        self._queue.put_nowait(TranscriptEvent(kind=TranscriptKind.END))
        self._queue = queue
        script = _START_RECOGNITION_JS.replace("__SESSION__", str(self._session)).replace(
            "__LOCALE__", json.dumps(locale)
        )
        try:
            await self._client.run_javascript(script)
        except TimeoutError as e:
            raise DictationError("Browser did not start speech recognition") from e

        while True:
            event = await queue.get()
            yield event
            if event.is_terminal:
                return

    async def stop(self) -> None:
        try:
            await self._client.run_javascript(_STOP_RECOGNITION_JS)
        except TimeoutError:
            logger.warning("Browser did not acknowledge stopping speech recognition")


class BrowserPlayback:
    """Speech synthesis in the visitor's browser; silently skipped when absent."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def speak(self, text: str) -> None:
        await self._client.run_javascript(_SPEAK_JS.replace("__TEXT__", json.dumps(text)))

    async def cancel(self) -> None:
        await self._client.run_javascript(_CANCEL_SPEECH_JS)
