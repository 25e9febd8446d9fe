"""Bot decision engine: chat lines and vote targets for engine-controlled seats."""

import dataclasses
import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from game.phrases import (
    Category,
    DAY_VOTE_LINE,
    DISCREDIT_LINES,
    FALLBACK_LINE,
    INNOCENCE_PATTERNS,
    LAST_WORDS,
    MAFIA_LAST_WORD,
    MAFIA_NIGHT_LINES,
    MAFIA_TARGET_LINES,
    NIGHT_VOTE_LINE,
    SHERIFF_HINTS,
    SHERIFF_LIKE_PATTERNS,
    TRIGGER_WORDS,
    phrase_bank,
)
from game.rules import (
    ACTIVE_MESSAGE_THRESHOLD,
    DISCREDIT_PROBABILITY,
    QUIET_MESSAGE_THRESHOLD,
    SHERIFF_HINT_PROBABILITY,
    TARGET_MENTION_PROBABILITY,
    Role,
    personality_for,
)
from game.state import GameState, Message, Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotView:
    """What one seat is allowed to know. Other seats' roles are never exposed."""

    seat: Player
    alive_ids: tuple[int, ...]
    names: dict[int, str]
    public_messages: tuple[Message, ...]
    teammates: frozenset[int] = frozenset()  # fellow mafia, mafia seats only
    mafia_messages: tuple[Message, ...] = ()  # mafia seats only
    checked: dict[int, Role] = field(default_factory=dict)  # sheriff seat only

    @property
    def is_mafia(self) -> bool:
        return self.seat.role == Role.MAFIA

    def name_of(self, seat_id: int) -> str:
        return self.names.get(seat_id, f"#{seat_id}")

    def message_counts(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for m in self.public_messages:
            if not m.is_system:
                counts[m.author_seat_id] = counts.get(m.author_seat_id, 0) + 1
        return counts

    def said_any(self, seat_id: int, patterns: tuple[str, ...]) -> bool:
        for m in self.public_messages:
            if m.author_seat_id != seat_id or m.is_system:
                continue
            text = m.text.lower()
            if any(p in text for p in patterns):
                return True
        return False


def build_view(state: GameState, seat: Player) -> BotView:
    """Project the game state down to what seat may see."""
    view = BotView(
        seat=seat,
        alive_ids=tuple(p.id for p in state.get_alive_players()),
        names={p.id: p.name for p in state.players},
        public_messages=tuple(state.public_log.messages),
    )
    if seat.role == Role.MAFIA:
        teammates = frozenset(p.id for p in state.players if p.role == Role.MAFIA and p.id != seat.id)
        return dataclasses.replace(
            view,
            teammates=teammates,
            mafia_messages=tuple(state.mafia_log.messages),
        )
    if seat.role == Role.SHERIFF:
        return dataclasses.replace(view, checked=dict(state.checked_players))
    return view


# --- chat ---------------------------------------------------------------


def analyze_triggers(text: str) -> list[str]:
    """Trigger categories found in a human message (case-insensitive substring match)."""
    lowered = text.lower()
    return [kind for kind, words in TRIGGER_WORDS.items() if any(w in lowered for w in words)]


def choose_speaker(bots: list[Player], triggers: list[str], rng: random.Random) -> Optional[Player]:
    """Pick which living bot speaks; triggers prefer the bots they concern."""
    if not bots:
        return None
    if triggers:
        relevant = [
            b for b in bots
            if ("sheriff" in triggers and b.role == Role.SHERIFF)
            or ("accusation" in triggers and b.role == Role.MAFIA)
            or "defense" in triggers
        ]
        if relevant:
            return rng.choice(relevant)
    return rng.choice(bots)


def choose_category(role: Role, triggers: list[str]) -> Category:
    if "accusation" in triggers:
        return Category.ACCUSATION
    if "defense" in triggers:
        return Category.DEFENSE
    if "sheriff" in triggers and role == Role.SHERIFF:
        return Category.SHERIFF_HINT
    if "strategy" in triggers:
        return Category.STRATEGY
    return Category.DEFAULT


def pick_index(rng: random.Random, size: int) -> int:
    return rng.randrange(size)


def compose_day_line(view: BotView, category: Category, rng: random.Random) -> str:
    """Public chat line for a bot, conditioned on role, category and personality."""
    role = view.seat.role
    if role == Role.SHERIFF and category == Category.DEFAULT:
        known = known_mafia(view)
        if known and rng.random() < SHERIFF_HINT_PROBABILITY:
            template = SHERIFF_HINTS[pick_index(rng, len(SHERIFF_HINTS))]
            return template.format(name=view.name_of(known[0]))
    if role == Role.MAFIA and category in (Category.DEFAULT, Category.ACCUSATION):
        suspects = sheriff_suspects(view)
        if suspects and rng.random() < DISCREDIT_PROBABILITY:
            template = DISCREDIT_LINES[pick_index(rng, len(DISCREDIT_LINES))]
            return template.format(name=view.name_of(rng.choice(suspects)))
    bank = phrase_bank(role, category, personality_for(view.seat.id))
    if not bank:
        return FALLBACK_LINE
    return bank[pick_index(rng, len(bank))]


def compose_mafia_line(view: BotView, rng: random.Random) -> str:
    """Night chat line; about half the time it names a plausible target."""
    targets = [sid for sid in view.alive_ids if sid != view.seat.id and sid not in view.teammates]
    if targets and rng.random() < TARGET_MENTION_PROBABILITY:
        template = MAFIA_TARGET_LINES[pick_index(rng, len(MAFIA_TARGET_LINES))]
        return template.format(name=view.name_of(rng.choice(targets)))
    bank = MAFIA_NIGHT_LINES[personality_for(view.seat.id)]
    return bank[pick_index(rng, len(bank))]


def last_word_line(seat: Player, rng: random.Random) -> str:
    if seat.role == Role.MAFIA:
        return MAFIA_LAST_WORD
    return LAST_WORDS[pick_index(rng, len(LAST_WORDS))]


def vote_line(target_name: str, night: bool) -> str:
    return (NIGHT_VOTE_LINE if night else DAY_VOTE_LINE).format(name=target_name)


# --- target pools -------------------------------------------------------


def _others_alive(view: BotView) -> list[int]:
    return [sid for sid in view.alive_ids if sid != view.seat.id]


def known_mafia(view: BotView) -> list[int]:
    """Living seats the sheriff has confirmed as mafia."""
    alive = set(view.alive_ids)
    return [sid for sid, role in view.checked.items() if role == Role.MAFIA and sid in alive and sid != view.seat.id]


def sheriff_suspects(view: BotView) -> list[int]:
    """Living non-mafia seats whose public talk sounds like the sheriff."""
    return [
        sid for sid in _others_alive(view)
        if sid not in view.teammates and view.said_any(sid, SHERIFF_LIKE_PATTERNS)
    ]


def suspicious_seats(view: BotView) -> list[int]:
    """Living seats that barely talk or loudly protest their innocence."""
    counts = view.message_counts()
    return [
        sid for sid in _others_alive(view)
        if counts.get(sid, 0) < QUIET_MESSAGE_THRESHOLD or view.said_any(sid, INNOCENCE_PATTERNS)
    ]


def active_seats(view: BotView) -> list[int]:
    """Living non-mafia seats that talk a lot."""
    counts = view.message_counts()
    return [
        sid for sid in _others_alive(view)
        if sid not in view.teammates and counts.get(sid, 0) > ACTIVE_MESSAGE_THRESHOLD
    ]


def _first_pool(tiers: list[list[int]], candidates: list[int], rng: random.Random) -> Optional[int]:
    allowed = set(candidates)
    for tier in tiers:
        pool = [sid for sid in tier if sid in allowed]
        if pool:
            return rng.choice(pool)
    return None


def choose_vote_target(view: BotView, rng: random.Random, night: bool = False) -> Optional[int]:
    """
    Ballot target by priority: a known target for the voter's side, then
    suspicious seats (town), then active seats (mafia at night), then anyone
    eligible. Returns None when nobody can be voted for.
    """
    candidates = [sid for sid in _others_alive(view) if sid not in view.teammates]
    if not candidates:
        logger.warning("Seat %s has no vote candidates", view.seat.id)
        return None
    if view.is_mafia:
        tiers = [sheriff_suspects(view), active_seats(view) if night else [], candidates]
    else:
        tiers = [known_mafia(view), suspicious_seats(view), candidates]
    return _first_pool(tiers, candidates, rng)


def choose_investigation_target(view: BotView, rng: random.Random) -> Optional[int]:
    """Sheriff check: unchecked suspicious seats, then any unchecked seat, then anyone alive."""
    candidates = _others_alive(view)
    if not candidates:
        return None
    unchecked = [sid for sid in candidates if sid not in view.checked]
    suspicious = [sid for sid in suspicious_seats(view) if sid in unchecked]
    return _first_pool([suspicious, unchecked, candidates], candidates, rng)
