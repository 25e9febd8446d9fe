"""Game rules and constants for Solo Mafia."""

from enum import Enum


class Role(str, Enum):
    """Seat roles in the game."""

    CIVILIAN = "civilian"
    MAFIA = "mafia"
    SHERIFF = "sheriff"


class Phase(str, Enum):
    """Current game phase."""

    SETUP = "setup"
    DAY = "day"
    VOTING = "voting"
    LAST_WORD = "last-word"
    NIGHT = "night"
    MAFIA_CHAT = "mafia-chat"
    MAFIA_TURN = "mafia-turn"
    SHERIFF_TURN = "sheriff-turn"
    RESULTS = "results"
    GAME_OVER = "game-over"


class Winner(str, Enum):
    """Winning faction."""

    MAFIA = "mafia"
    CIVILIANS = "civilians"


class Channel(str, Enum):
    """Chat channels. The mafia channel is only visible to mafia seats."""

    PUBLIC = "public"
    MAFIA = "mafia"


class Personality(int, Enum):
    """Bot archetype, fixed per seat as seat_id % 4."""

    AGGRESSIVE = 0
    ANALYTICAL = 1
    CAUTIOUS = 2
    CALM = 3


# Phases in which the human may skip ahead with advance_phase
MANUAL_ADVANCE_PHASES = (Phase.DAY, Phase.LAST_WORD, Phase.MAFIA_CHAT, Phase.SHERIFF_TURN)

MIN_SEATS = 4
MAX_SEATS = 10

# Seat id reserved for narrator messages
SYSTEM_SEAT_ID = 0

# Seat id of the human (or the observer's seat in test mode)
HUMAN_SEAT_ID = 1

# A day tally needs at least this many votes on the leader
DAY_VOTE_MIN_COUNT = 2

# Probability that a mafia chat line names a concrete target
TARGET_MENTION_PROBABILITY = 0.5

# Probability that a sheriff bot hints at a confirmed mafia seat
SHERIFF_HINT_PROBABILITY = 0.5

# Probability that a mafia bot tries to discredit a suspected sheriff
DISCREDIT_PROBABILITY = 0.5

# Seats with fewer public messages than this look suspicious to town bots
QUIET_MESSAGE_THRESHOLD = 2

# Seats with more public messages than this are "active" night targets
ACTIVE_MESSAGE_THRESHOLD = 2


def mafia_count_for(seat_count: int) -> int:
    """Number of mafia seats for a table of seat_count players."""
    if seat_count == 10:
        return 3
    return max(1, seat_count // 4)


def personality_for(seat_id: int) -> Personality:
    return Personality(seat_id % 4)


def is_town(role: Role) -> bool:
    return role != Role.MAFIA
