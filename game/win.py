"""Win evaluation."""

from typing import Optional

from game.rules import Role, Winner
from game.state import Player


def evaluate_winner(players: list[Player], test_mode: bool = False) -> Optional[Winner]:
    """
    Return the winning faction or None while the game goes on.

    A dead human seat (outside test mode) hands the win to the other side
    before any head count: town if the human was mafia, mafia otherwise.
    """
    if not test_mode:
        human = next((p for p in players if not p.is_bot), None)
        if human is not None and not human.alive:
            return Winner.CIVILIANS if human.role == Role.MAFIA else Winner.MAFIA

    alive = [p for p in players if p.alive]
    mafia_alive = sum(1 for p in alive if p.role == Role.MAFIA)
    town_alive = len(alive) - mafia_alive
    if mafia_alive >= town_alive:
        return Winner.MAFIA
    if mafia_alive == 0:
        return Winner.CIVILIANS
    return None


def is_game_over(players: list[Player], test_mode: bool = False) -> bool:
    return evaluate_winner(players, test_mode) is not None
