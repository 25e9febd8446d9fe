"""Role assignment and seating."""

import random
from typing import Optional

from game.rules import Role, MIN_SEATS, MAX_SEATS, mafia_count_for
from game.state import Player

BOT_NAMES = [
    "Alexei", "Maria", "Ivan", "Elena", "Dmitri",
    "Anna", "Sergei", "Olga", "Andrei", "Natalia",
    "Mikhail", "Ekaterina", "Vladimir", "Tatiana", "Artyom",
]

TEST_SEAT_NAME = "You (test)"


def validate_seat_count(seat_count: int) -> None:
    if not MIN_SEATS <= seat_count <= MAX_SEATS:
        raise ValueError(f"seat_count must be between {MIN_SEATS} and {MAX_SEATS}, got {seat_count}")


def assign_roles(seat_count: int, rng: Optional[random.Random] = None) -> list[Role]:
    """
    Return one role per seat (index 0 is seat 1): exactly mafia_count_for(n) mafia,
    one sheriff, the rest civilians. Shuffle, label, then shuffle again so the
    labels carry no positional pattern.
    """
    validate_seat_count(seat_count)
    rng = rng or random.Random()
    order = list(range(seat_count))
    rng.shuffle(order)
    mafia_count = mafia_count_for(seat_count)
    labels: dict[int, Role] = {}
    for rank, seat_index in enumerate(order):
        if rank < mafia_count:
            labels[seat_index] = Role.MAFIA
        elif rank == mafia_count:
            labels[seat_index] = Role.SHERIFF
        else:
            labels[seat_index] = Role.CIVILIAN
    rng.shuffle(order)
    roles = [Role.CIVILIAN] * seat_count
    for seat_index in order:
        roles[seat_index] = labels[seat_index]
    return roles


def draw_bot_names(count: int, rng: Optional[random.Random] = None) -> list[str]:
    """Distinct names from the bot pool."""
    if count > len(BOT_NAMES):
        raise ValueError(f"at most {len(BOT_NAMES)} bot names available")
    rng = rng or random.Random()
    return rng.sample(BOT_NAMES, count)


def seat_players(
    seat_count: int,
    human_name: str,
    test_mode: bool,
    roles: list[Role],
    rng: Optional[random.Random] = None,
) -> list[Player]:
    """Build the roster: seat 1 is the human (engine-driven in test mode), seats 2..n are bots."""
    if len(roles) != seat_count:
        raise ValueError("roles must have one entry per seat")
    first_name = TEST_SEAT_NAME if test_mode else human_name.strip()
    names = [first_name] + draw_bot_names(seat_count - 1, rng)
    return [
        Player(id=i + 1, name=name, role=role, alive=True, is_bot=test_mode or i > 0)
        for i, (name, role) in enumerate(zip(names, roles))
    ]
