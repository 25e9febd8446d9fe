"""Intents accepted by the phase state machine and the continuations it schedules."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from game.rules import Phase


@dataclass(frozen=True)
class CastVote:
    """Human ballot: day lynch vote or (mafia only) night kill vote."""

    target_seat_id: int
    is_night_vote: bool = False


@dataclass(frozen=True)
class SendChatMessage:
    """Human chat line, public or mafia channel."""

    text: str
    is_mafia_channel: bool = False


@dataclass(frozen=True)
class SelectInvestigationTarget:
    """Human sheriff's pick; does not advance the phase by itself."""

    seat_id: int


@dataclass(frozen=True)
class AdvancePhase:
    """Human request to end the current phase early."""


class ContinuationKind(str, Enum):
    """Delayed re-entrant calls the engine schedules for itself."""

    TICK = "tick"
    BOTS_TALK = "bots-talk"
    MAFIA_TALK = "mafia-talk"
    BOT_VOTE = "bot-vote"
    MAFIA_BOT_VOTE = "mafia-bot-vote"
    SHERIFF_ACT = "sheriff-act"
    NIGHT_FALLS = "night-falls"
    SHOW_RESULTS = "show-results"


@dataclass(frozen=True)
class Continuation:
    """
    A scheduled callback. phase and serial pin it to the phase entry that
    scheduled it; once the state moves on it is a no-op.
    """

    kind: ContinuationKind
    phase: Phase
    serial: int
    seat_id: Optional[int] = None  # bot seat for per-seat votes; None means every outstanding bot
    triggers: tuple[str, ...] = ()  # trigger categories for a reactive reply
    repeat: bool = False  # chatter re-arms itself while the phase lasts


@dataclass(frozen=True)
class Scheduled:
    """Side effect returned by a transition: run continuation after delay simulated seconds."""

    delay: float
    continuation: Continuation


HumanIntent = Union[CastVote, SendChatMessage, SelectInvestigationTarget, AdvancePhase]
Intent = Union[HumanIntent, Continuation]
