"""
Speech queue - one sentence at a time, strictly in order

=============================================================================
DRAIN PROTOCOL
=============================================================================

The queue holds sentences waiting to be spoken. drain_step() is called once
per tick and does one of two things:

    speaking, or nothing queued   -> return immediately
    otherwise                     -> start speaking the HEAD sentence

"Start speaking" means: mark the queue as speaking, show the sentence in
the character's bubble, and launch the synthesizer as an asyncio task. The
tick returns right away; the character keeps walking while it talks.

When the task finishes - whether the engine succeeded OR failed - the done
callback pops the head, clears the bubble and lowers the `speaking` flag.
A broken sentence is therefore skipped instead of jamming the queue.

=============================================================================
WHY THE HEAD STAYS IN THE QUEUE WHILE SPOKEN
=============================================================================

The sentence is only removed after it has been said. While it is in
flight the queue is non-empty, which also keeps the thought throttle from
fetching more content (see throttle.py: idle-only refill).

=============================================================================
"""

import asyncio
import logging
import re
from collections import deque
from typing import Deque, Optional, Tuple

from ..entities.character import Character

logger = logging.getLogger(__name__)

# One or more sentence-ending marks: "Wait... what?!" splits into two
SENTENCE_BREAK = re.compile(r"[.!?]+")


def split_sentences(text: Optional[str]) -> list:
    """
    Split text into trimmed sentences, dropping the punctuation.

    >>> split_sentences("Hello world. How are you? Fine!")
    ['Hello world', 'How are you', 'Fine']
    """
    if not text:
        return []
    fragments = (fragment.strip() for fragment in SENTENCE_BREAK.split(text))
    return [fragment for fragment in fragments if fragment]


class SpeechQueue:
    """FIFO of sentences drained through a speech synthesizer."""

    def __init__(self, character: Character, synthesizer):
        self.character = character
        self.synthesizer = synthesizer
        self._sentences: Deque[str] = deque()
        self.speaking = False
        self._task: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._sentences)

    @property
    def pending(self) -> Tuple[str, ...]:
        """Queued sentences, head first (includes the one being spoken)."""
        return tuple(self._sentences)

    @property
    def is_idle(self) -> bool:
        """True when nothing is queued and nothing is being spoken."""
        return not self.speaking and not self._sentences

    def enqueue_sentences(self, text: Optional[str]) -> int:
        """Append every sentence of `text`. Returns how many were added."""
        sentences = split_sentences(text)
        self._sentences.extend(sentences)
        return len(sentences)

    def drain_step(self) -> Optional[asyncio.Task]:
        """
        Start speaking the head sentence if the channel is free.

        Must be called from inside a running event loop. Returns the speech
        task that was started, or None when this call was a no-op.
        """
        if self.speaking or not self._sentences:
            return None

        sentence = self._sentences[0]
        self.speaking = True
        self.character.current_utterance = sentence

        self._task = asyncio.ensure_future(self._speak(sentence))
        self._task.add_done_callback(self._on_spoken)
        return self._task

    async def _speak(self, sentence: str):
        await self.synthesizer.speak(sentence)

    def _on_spoken(self, task: asyncio.Task):
        """Done callback: success, failure and cancellation all end here."""
        if task.cancelled():
            logger.debug("Speech cancelled")
        elif task.exception() is not None:
            logger.warning("Speech failed, skipping sentence: %s", task.exception())

        if self._sentences:
            self._sentences.popleft()
        self.character.current_utterance = None
        self.speaking = False
        self._task = None

    async def cancel(self):
        """Stop the in-flight sentence (shutdown only)."""
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
