"""In-memory session store. One GameSession per game id, nothing persisted."""

from game.session import GameSession

# game_id -> session
_store: dict[str, GameSession] = {}


def create(game_id: str, session: GameSession) -> None:
    _store[game_id] = session


def get(game_id: str) -> GameSession | None:
    return _store.get(game_id)


def delete(game_id: str) -> bool:
    return _store.pop(game_id, None) is not None


def list_games() -> list[str]:
    return list(_store.keys())


def clear() -> None:
    _store.clear()
