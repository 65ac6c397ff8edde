"""Unit tests for the browser-backed dictation service.

A stub client stands in for the NiceGUI page; events are fed to `receive`
the way the page script would emit them.
"""

import asyncio

import pytest_check as check

from chatdesk.voice.base import TranscriptKind
from chatdesk.voice.browser import BrowserDictation


class StubClient:
    """Page client that records scripts and reports recognition support."""

    def __init__(self) -> None:
        self.scripts: list[str] = []

    async def run_javascript(self, code: str) -> bool:
        self.scripts.append(code)
        return True


async def next_event(events):
    return await anext(events)


def started(events) -> asyncio.Task:
    """Begin waiting for the stream's next event in the background."""
    return asyncio.create_task(next_event(events))


async def settled(task: asyncio.Task):
    return await asyncio.wait_for(task, timeout=1)


class TestBrowserDictation:
    """Tests for session tagging and stream termination."""

    async def test_events_stream_until_end(self) -> None:
        client = StubClient()
        dictation = BrowserDictation(client)
        events = dictation.listen("en-GB")
        pending = started(events)
        await asyncio.sleep(0)

        dictation.receive({"session": 1, "kind": "partial", "text": "hel"})
        dictation.receive({"session": 1, "kind": "final", "text": "hello"})
        dictation.receive({"session": 1, "kind": "end"})

        check.equal((await settled(pending)).text, "hel")
        check.equal((await settled(started(events))).kind, TranscriptKind.FINAL)
        check.equal((await settled(started(events))).kind, TranscriptKind.END)
        check.is_in('"en-GB"', client.scripts[0])

    async def test_restart_ends_abandoned_session(self) -> None:
        """A new session releases a listener whose END was never delivered."""
        dictation = BrowserDictation(StubClient())
        first = dictation.listen()
        waiting = started(first)
        await asyncio.sleep(0)

        second = dictation.listen()
        following = started(second)
        await asyncio.sleep(0)

        # The browser's END for the first session arrives too late
        dictation.receive({"session": 1, "kind": "end"})
        dictation.receive({"session": 2, "kind": "final", "text": "again"})

        check.equal((await settled(waiting)).kind, TranscriptKind.END)
        check.equal((await settled(following)).text, "again")

    async def test_malformed_events_are_ignored(self) -> None:
        dictation = BrowserDictation(StubClient())
        events = dictation.listen()
        pending = started(events)
        await asyncio.sleep(0)

        dictation.receive("not a dict")
        dictation.receive({"session": 1, "kind": "shout"})
        dictation.receive({"session": 1, "kind": "error", "error": "not-allowed"})

        event = await settled(pending)
        check.is_true(event.is_permission_denied)

    async def test_availability_probe(self) -> None:
        assert await BrowserDictation(StubClient()).is_available() is True
