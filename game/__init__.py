"""Game engine for Solo Mafia."""

from game.engine import (
    start_game,
    dispatch,
    can_advance,
    expire_timer,
)
from game.intents import (
    AdvancePhase,
    CastVote,
    Continuation,
    ContinuationKind,
    Scheduled,
    SelectInvestigationTarget,
    SendChatMessage,
)
from game.rules import Role, Phase, Winner, Channel
from game.session import GameSession
from game.state import GameState, Player, Message, ChatLog
from game.win import evaluate_winner

__all__ = [
    "start_game",
    "dispatch",
    "can_advance",
    "expire_timer",
    "AdvancePhase",
    "CastVote",
    "Continuation",
    "ContinuationKind",
    "Scheduled",
    "SelectInvestigationTarget",
    "SendChatMessage",
    "Role",
    "Phase",
    "Winner",
    "Channel",
    "GameSession",
    "GameState",
    "Player",
    "Message",
    "ChatLog",
    "evaluate_winner",
]
