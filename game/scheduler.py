"""Virtual-time queue of scheduled continuations."""

import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Optional

from game.intents import Continuation, Scheduled

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Continuations ordered by due time (simulated seconds), FIFO among equal
    due times. Nothing is ever cancelled: stale entries are dropped by the
    reducer when they fire.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Continuation]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, effect: Scheduled, now: float) -> None:
        heapq.heappush(self._heap, (now + max(effect.delay, 0.0), next(self._seq), effect.continuation))

    def schedule_all(self, effects: list[Scheduled], now: float) -> None:
        for effect in effects:
            self.schedule(effect, now)

    def next_due(self) -> Optional[float]:
        return self._heap[0][0] if self._heap else None

    def pop_due(self, until: float) -> Optional[tuple[float, Continuation]]:
        """Remove and return the earliest entry due at or before until."""
        if not self._heap or self._heap[0][0] > until:
            return None
        due, _, continuation = heapq.heappop(self._heap)
        return due, continuation

    def run_until(
        self,
        until: float,
        handler: Callable[[Continuation, float], list[Scheduled]],
    ) -> int:
        """
        Fire every continuation due at or before until, in order. handler
        returns follow-up effects, which are queued relative to the firing
        time and may themselves fire within the same call.
        """
        fired = 0
        while True:
            item = self.pop_due(until)
            if item is None:
                return fired
            due, continuation = item
            self.schedule_all(handler(continuation, due), due)
            fired += 1

    def clear(self) -> None:
        self._heap = []
