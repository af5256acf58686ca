"""Fakes for the external services, shared by the test modules."""

import asyncio

from thought_wanderer.errors import SpeechError


class FakeSynthesizer:
    """
    Records sentences instead of playing them.

    With `hold=True` every sentence stays "in the air" until release() is
    called, so tests can observe the queue mid-speech.
    """

    def __init__(self, hold: bool = False, fail_on=()):
        self.spoken = []
        self.hold = hold
        self.fail_on = set(fail_on)
        self._gate = None

    async def start(self):
        pass

    async def close(self):
        pass

    async def speak(self, text: str):
        self.spoken.append(text)
        if self.hold:
            self._gate = asyncio.Event()
            await self._gate.wait()
        if text in self.fail_on:
            raise SpeechError(f"cannot say {text!r}")

    def release(self):
        self._gate.set()


class FakeThoughtSource:
    """Replays canned replies; an Exception reply is raised instead."""

    def __init__(self, replies=(), hold: bool = False):
        self.replies = list(replies)
        self.calls = 0
        self.hold = hold
        self._gate = None

    async def fetch_thought(self) -> str:
        self.calls += 1
        if self.hold:
            self._gate = asyncio.Event()
            await self._gate.wait()
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply

    def release(self):
        self._gate.set()


async def settle(rounds: int = 5):
    """Let pending tasks and their done callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
