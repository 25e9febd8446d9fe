"""One running game: state, scheduler, RNG and clock behind a single lock."""

import logging
import random
import threading
import time
from collections.abc import Callable
from typing import Optional

from game.config import DEFAULT_CONFIG, GameConfig
from game.engine import dispatch, start_game
from game.intents import Continuation, HumanIntent, Scheduled
from game.rules import Phase, Role
from game.scheduler import Scheduler
from game.state import GameState

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the only mutable reference to a GameState. Intents are applied one
    at a time under the lock; scheduled continuations fire lazily whenever
    the session is touched, catching simulated time up with the clock.

    With clock=None time only moves through advance(), which is what tests use.
    """

    def __init__(
        self,
        seat_count: int,
        human_name: str,
        test_mode: bool = False,
        *,
        rng: Optional[random.Random] = None,
        config: GameConfig = DEFAULT_CONFIG,
        clock: Optional[Callable[[], float]] = None,
        roles: Optional[list[Role]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._rng = rng or random.Random()
        self._clock = clock
        self._started_at = clock() if clock is not None else 0.0
        self._scheduler = Scheduler()
        self.now = 0.0
        self.state, effects = start_game(
            seat_count,
            human_name,
            test_mode,
            rng=self._rng,
            now=self.now,
            config=config,
            roles=roles,
        )
        self._scheduler.schedule_all(effects, self.now)

    @classmethod
    def realtime(cls, seat_count: int, human_name: str, test_mode: bool = False, **kwargs) -> "GameSession":
        """Session driven by the wall clock (time.monotonic)."""
        return cls(seat_count, human_name, test_mode, clock=time.monotonic, **kwargs)

    @property
    def lock(self):
        """Held while reading state and now together from outside the session."""
        return self._lock

    @property
    def config(self) -> GameConfig:
        return self.state.config

    @property
    def is_over(self) -> bool:
        return self.state.phase == Phase.GAME_OVER

    def _fire(self, continuation: Continuation, due: float) -> list[Scheduled]:
        self.now = due
        self.state, effects = dispatch(self.state, continuation, self._rng, due)
        return effects

    def _run_until(self, until: float) -> None:
        fired = self._scheduler.run_until(until, self._fire)
        if fired:
            logger.debug("Fired %s continuations up to t=%.1f", fired, until)
        self.now = max(self.now, until)
        if self.is_over and len(self._scheduler):
            self._scheduler.clear()

    def sync(self) -> GameState:
        """Catch simulated time up with the clock. No-op without a clock."""
        with self._lock:
            if self._clock is not None:
                elapsed = (self._clock() - self._started_at) * self.config.time_scale
                self._run_until(elapsed)
            return self.state

    def advance(self, seconds: float) -> GameState:
        """Move simulated time forward by seconds, firing whatever comes due."""
        with self._lock:
            self._run_until(self.now + seconds)
            return self.state

    def run_to_completion(self, limit: float = 10_000.0) -> GameState:
        """Fire continuations until game over, the queue empties, or limit simulated seconds pass."""
        with self._lock:
            while not self.is_over and self.now < limit:
                due = self._scheduler.next_due()
                if due is None:
                    break
                self._run_until(min(due, limit))
            return self.state

    def apply(self, intent: HumanIntent) -> GameState:
        """Apply one human intent at the current simulated time."""
        with self._lock:
            self.sync()
            self.state, effects = dispatch(self.state, intent, self._rng, self.now)
            self._scheduler.schedule_all(effects, self.now)
            if self.is_over:
                self._scheduler.clear()
            return self.state

    def pending(self) -> int:
        with self._lock:
            return len(self._scheduler)
