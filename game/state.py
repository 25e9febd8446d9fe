"""Game state types for Solo Mafia."""

from dataclasses import dataclass, field
from typing import Optional

from game.config import DEFAULT_CONFIG, GameConfig
from game.rules import Channel, Phase, Role, Winner, SYSTEM_SEAT_ID


@dataclass(frozen=True)
class Player:
    """A seat at the table."""

    id: int
    name: str
    role: Role
    alive: bool = True
    is_bot: bool = True


@dataclass(frozen=True)
class Message:
    """One chat entry. author_seat_id 0 marks the narrator."""

    id: int
    author_seat_id: int
    text: str
    timestamp: float
    is_system: bool = False


@dataclass
class ChatLog:
    """Append-only message sequence for one channel."""

    channel: Channel
    messages: list[Message] = field(default_factory=list)
    next_id: int = 1

    def append(
        self,
        author_seat_id: int,
        text: str,
        now: float,
        is_system: bool = False,
    ) -> Message:
        """Append an entry with the next sequence id (mutates the log)."""
        if self.messages:
            now = max(now, self.messages[-1].timestamp)
        message = Message(
            id=self.next_id,
            author_seat_id=author_seat_id,
            text=text,
            timestamp=now,
            is_system=is_system,
        )
        self.messages.append(message)
        self.next_id += 1
        return message

    def system(self, text: str, now: float) -> Message:
        return self.append(SYSTEM_SEAT_ID, text, now, is_system=True)

    def list(self) -> list[Message]:
        """Entries in append order."""
        return list(self.messages)

    def reset(self) -> None:
        """Drop all entries; sequence ids keep counting up."""
        self.messages = []


@dataclass
class GameState:
    """Full game session state."""

    players: list[Player] = field(default_factory=list)
    public_log: ChatLog = field(default_factory=lambda: ChatLog(Channel.PUBLIC))
    mafia_log: ChatLog = field(default_factory=lambda: ChatLog(Channel.MAFIA))
    phase: Phase = Phase.SETUP
    day: int = 1
    timer: Optional[int] = None
    winner: Optional[Winner] = None
    mafia_count: int = 0
    test_mode: bool = False
    votes: dict[int, int] = field(default_factory=dict)  # voter seat -> target seat, current day vote
    mafia_votes: dict[int, int] = field(default_factory=dict)  # mafia voter -> target, current night
    checked_players: dict[int, Role] = field(default_factory=dict)  # sheriff results, whole game
    selected_seat_id: Optional[int] = None  # human sheriff's pending pick
    pending_kill_seat_id: Optional[int] = None  # night kill awaiting the results transition
    last_check_seat_id: Optional[int] = None  # seat investigated this night
    eliminated_seat_id: Optional[int] = None  # seat holding the floor in last-word
    phase_serial: int = 0  # bumped on every phase entry; stale continuations compare against it
    config: GameConfig = DEFAULT_CONFIG

    def get_alive_players(self) -> list[Player]:
        """Return list of alive players."""
        return [p for p in self.players if p.alive]

    def get_player(self, seat_id: Optional[int]) -> Optional[Player]:
        """Return player by id or None."""
        for p in self.players:
            if p.id == seat_id:
                return p
        return None

    def get_players_by_role(self, role: Role) -> list[Player]:
        """Return alive players with the given role."""
        return [p for p in self.players if p.alive and p.role == role]

    def get_human(self) -> Optional[Player]:
        """The human-controlled seat, or None in test mode."""
        for p in self.players:
            if not p.is_bot:
                return p
        return None

    def get_alive_bots(self) -> list[Player]:
        return [p for p in self.players if p.alive and p.is_bot]

    def get_sheriff(self) -> Optional[Player]:
        """The living sheriff, if any."""
        sheriffs = self.get_players_by_role(Role.SHERIFF)
        return sheriffs[0] if sheriffs else None
