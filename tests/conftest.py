"""Shared test helpers."""

import random

import pytest

from api import game_store
from game.config import GameConfig
from game.engine import start_game
from game.rules import Role
from game.state import GameState


class ScriptedRandom(random.Random):
    """
    Deterministic stand-in for random.Random.

    random() always returns roll, uniform() the low bound, and choice()
    returns the first element matching an id in prefer (seat ids or players),
    else the first element.
    """

    def __init__(self, roll: float = 0.99, prefer=()):
        super().__init__(0)
        self.roll = roll
        self.prefer = list(prefer)

    def random(self):
        return self.roll

    def uniform(self, a, b):
        return a

    def choice(self, seq):
        for wanted in self.prefer:
            for item in seq:
                if item == wanted or getattr(item, "id", None) == wanted:
                    return item
        return seq[0]


def make_game(roles: list[Role], test_mode: bool = False, rng=None, config: GameConfig | None = None) -> GameState:
    """Start a game with a fixed role per seat (seat 1 first)."""
    state, _ = start_game(
        len(roles),
        "Tester",
        test_mode,
        rng=rng or ScriptedRandom(),
        roles=roles,
        config=config or GameConfig(),
    )
    return state


@pytest.fixture
def scripted():
    return ScriptedRandom()


@pytest.fixture(autouse=True)
def _empty_store():
    game_store.clear()
    yield
    game_store.clear()
