"""
Thought fetch throttle - idle-only, rate-limited refills

=============================================================================
WHEN IS A THOUGHT FETCHED?
=============================================================================

maybe_fetch_thought() runs every tick and fetches only when ALL hold:

    1. the speech queue is idle (nothing queued, nothing being spoken)
    2. no fetch is already outstanding
    3. at least `min_interval` ms passed since the last ACCEPTED thought
       (or no thought was ever accepted)

The timestamp is taken when a usable thought ARRIVES, not when the request
leaves. A failed or empty fetch leaves it untouched, so the next idle tick
may simply try again instead of waiting another full interval.

=============================================================================
"""

import asyncio
import logging
from typing import Optional

from .. import config
from .queue import SpeechQueue

logger = logging.getLogger(__name__)


class ThoughtThrottle:
    """Feeds the speech queue from a thought source, at most once per interval."""

    def __init__(self, source, queue: SpeechQueue, clock,
                 min_interval: float = config.THOUGHT_INTERVAL):
        self.source = source
        self.queue = queue
        self.clock = clock
        self.min_interval = min_interval
        self.last_fetch_at: Optional[float] = None
        self.fetching = False
        self._task: Optional[asyncio.Task] = None

    def is_due(self, now: float) -> bool:
        if self.last_fetch_at is None:
            return True
        return now - self.last_fetch_at >= self.min_interval

    def maybe_fetch_thought(self) -> Optional[asyncio.Task]:
        """
        Start one thought request if the refill policy allows it.

        Must be called from inside a running event loop. Returns the fetch
        task, or None when nothing was started.
        """
        if self.fetching or not self.queue.is_idle:
            return None
        if not self.is_due(self.clock.now()):
            return None

        self.fetching = True
        self._task = asyncio.ensure_future(self._fetch())
        self._task.add_done_callback(self._on_fetched)
        return self._task

    async def _fetch(self) -> str:
        return await self.source.fetch_thought()

    def _on_fetched(self, task: asyncio.Task):
        self.fetching = False
        self._task = None

        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Thought fetch failed: %s", error)
            return

        thought = task.result()
        added = self.queue.enqueue_sentences(thought)
        if added == 0:
            logger.warning("Thought service returned nothing to say: %r", thought)
            return

        self.last_fetch_at = self.clock.now()
        logger.info("New thought (%d sentence%s)", added, "" if added == 1 else "s")

    async def cancel(self):
        """Abandon the outstanding request (shutdown only)."""
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
