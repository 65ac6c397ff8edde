"""Dictation controller: feeds recognized speech into the composer.

Partial transcripts replace the pending text as they arrive. A final
transcript replaces it one last time and, after a short delay that lets the
user read it, submits the question directly through the engine.

A missing capability or a refused microphone disables dictation for the rest
of the page session, with a one-time notice.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import aclosing

from chatdesk.composer.composer import Composer
from chatdesk.voice.base import DictationError, DictationService, TranscriptKind

logger = logging.getLogger(__name__)

UNSUPPORTED_NOTICE = "Speech recognition is not supported in your browser. Please use Google Chrome."
PERMISSION_NOTICE = (
    "Microphone access denied. Please allow microphone access in your browser settings."
)


class DictationController:
    """Runs recognition sessions against a DictationService."""

    def __init__(
        self,
        service: DictationService,
        composer: Composer,
        submit: Callable[[], Awaitable[object]],
        notify: Callable[[str], None],
        locale: str | None = None,
        auto_send_delay: float = 0.5,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            service: Recognition capability.
            composer: Pending input updated with transcripts.
            submit: Called once a final transcript is in place.
            notify: Shows a notice to the user.
            locale: Recognition locale, None for the device default.
            auto_send_delay: Seconds between the final transcript and submit.
            on_change: Called whenever pending text or listening state changes.
        """
        self._service = service
        self._composer = composer
        self._submit = submit
        self._notify = notify
        self._locale = locale
        self._auto_send_delay = auto_send_delay
        self._on_change = on_change or (lambda: None)
        self._listening = False
        self._disabled = False

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def disabled(self) -> bool:
        return self._disabled

    def _disable(self, notice: str) -> None:
        self._disabled = True
        self._notify(notice)

    def _set_listening(self, value: bool) -> None:
        self._listening = value
        self._on_change()

    async def toggle(self) -> None:
        """Start listening, or stop the current session."""
        if self._listening:
            await self.stop()
        else:
            await self.listen()

    async def stop(self) -> None:
        """End the current recognition session, if any."""
        if self._listening:
            await self._service.stop()
            self._set_listening(False)

    async def listen(self) -> None:
        """Run one recognition session to completion.

        Returns once the session ends; when it produced a final transcript,
        that happens after the question was submitted.
        """
        if self._disabled:
            return

        if not await self._service.is_available():
            logger.info("Speech recognition unavailable; dictation disabled")
            self._disable(UNSUPPORTED_NOTICE)
            return

        # At most one recognition session at a time
        if self._listening:
            await self._service.stop()

        self._set_listening(True)
        final_text: str | None = None
        try:
            async with aclosing(self._service.listen(self._locale)) as events:
                async for event in events:
                    if event.kind is TranscriptKind.PARTIAL:
                        self._composer.text = event.text
                        self._on_change()
                    elif event.kind is TranscriptKind.FINAL:
                        final_text = event.text
                        self._composer.text = final_text
                        self._on_change()
                        break
                    elif event.is_permission_denied:
                        logger.warning(f"Microphone access refused: {event.error}")
                        self._disable(PERMISSION_NOTICE)
                        break
                    elif event.kind is TranscriptKind.ERROR:
                        logger.warning(f"Speech recognition error: {event.error}")
                        break
                    else:
                        break
        except DictationError as e:
            logger.warning(f"Speech recognition failed: {e}")
        finally:
            self._set_listening(False)

        if final_text is not None:
            await asyncio.sleep(self._auto_send_delay)
            await self._submit()
