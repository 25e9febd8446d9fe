"""Game engine: pure phase transitions, no I/O and no clock.

Every public transition takes a GameState and returns (new_state, effects).
The input state is never mutated. Effects are Scheduled continuations that
the caller feeds back through dispatch() once their delay has elapsed.
"""

import copy
import logging
import random
from typing import Optional

from game.bots import (
    analyze_triggers,
    build_view,
    choose_category,
    choose_investigation_target,
    choose_speaker,
    choose_vote_target,
    compose_day_line,
    compose_mafia_line,
    last_word_line,
    vote_line,
)
from game.config import DEFAULT_CONFIG, GameConfig
from game.intents import (
    AdvancePhase,
    CastVote,
    Continuation,
    ContinuationKind,
    Intent,
    Scheduled,
    SelectInvestigationTarget,
    SendChatMessage,
)
from game.phrases import (
    CHOSEN_FOR_ELIMINATION_TEXT,
    ELIMINATION_REVEAL_TEXT,
    GAME_START_TEXT,
    HUMAN_OUT_TEXT,
    MAFIA_CHOOSE_TEXT,
    MAFIA_WAKES_TEXT,
    MORNING_TEXT,
    NEW_DAY_TEXT,
    NIGHT_FALLS_TEXT,
    NIGHT_KILL_TEXT,
    NO_ELIMINATION_TEXT,
    QUIET_NIGHT_TEXT,
    SHERIFF_RESULT_TEXT,
    SHERIFF_TURN_TEXT,
    VOTING_START_TEXT,
    WIN_TEXTS,
    role_name,
)
from game.roles import assign_roles, seat_players, validate_seat_count
from game.rules import MANUAL_ADVANCE_PHASES, Phase, Role, Winner, is_town
from game.state import GameState, Player
from game.tally import tally_day_votes, tally_night_votes
from game.win import evaluate_winner

logger = logging.getLogger(__name__)

Step = tuple[GameState, list[Scheduled]]


def _later(state: GameState, delay: float, kind: ContinuationKind, **kwargs) -> Scheduled:
    """Schedule kind for the phase the state is in right now."""
    return Scheduled(
        delay=delay,
        continuation=Continuation(kind=kind, phase=state.phase, serial=state.phase_serial, **kwargs),
    )


def _jitter(state: GameState, rng: random.Random) -> float:
    return rng.uniform(state.config.bot_delay_min, state.config.bot_delay_max)


def _enter_phase(state: GameState, phase: Phase, timer: Optional[int]) -> list[Scheduled]:
    """Switch phase (mutates state) and arm its countdown."""
    logger.info("Day %s: %s -> %s", state.day, state.phase.value, phase.value)
    state.phase = phase
    state.phase_serial += 1
    state.timer = timer
    if timer is None:
        return []
    return [_later(state, 1.0, ContinuationKind.TICK)]


def _kill(state: GameState, seat_id: int) -> Optional[Player]:
    """Mark seat dead (mutates state). Returns the seat if it was alive; the dead stay dead."""
    victim = state.get_player(seat_id)
    if victim is None or not victim.alive:
        return None
    state.players = [
        Player(id=p.id, name=p.name, role=p.role, alive=False, is_bot=p.is_bot) if p.id == seat_id else p
        for p in state.players
    ]
    logger.info("Seat %s (%s) is out", victim.id, victim.role.value)
    return victim


def _finish(state: GameState, winner: Winner, now: float) -> list[Scheduled]:
    """Enter game-over (mutates state). No timers survive."""
    state.public_log.system(WIN_TEXTS[winner], now)
    _enter_phase(state, Phase.GAME_OVER, None)
    state.winner = winner
    state.votes = {}
    state.mafia_votes = {}
    state.selected_seat_id = None
    state.pending_kill_seat_id = None
    logger.info("Game over: %s win", winner.value)
    return []


def _finish_if_decided(state: GameState, now: float) -> Optional[list[Scheduled]]:
    winner = evaluate_winner(state.players, state.test_mode)
    if winner is None:
        return None
    human = state.get_human()
    if human is not None and not human.alive and not state.test_mode:
        state.public_log.system(HUMAN_OUT_TEXT.format(name=human.name, role=role_name(human.role)), now)
    return _finish(state, winner, now)


def _human_is_out(state: GameState) -> bool:
    if state.test_mode:
        return False
    human = state.get_human()
    return human is not None and not human.alive


def _all_voted(ballots: dict[int, int], voters: list[Player]) -> bool:
    return all(v.id in ballots for v in voters)


# --- setup --------------------------------------------------------------


def start_game(
    seat_count: int,
    human_name: str,
    test_mode: bool = False,
    *,
    rng: Optional[random.Random] = None,
    now: float = 0.0,
    config: GameConfig = DEFAULT_CONFIG,
    roles: Optional[list[Role]] = None,
) -> Step:
    """
    Create a session in the day phase. Roles are assigned at random unless
    given explicitly (one per seat, seat 1 first). Raises ValueError on bad input.
    """
    validate_seat_count(seat_count)
    if not test_mode and not human_name.strip():
        raise ValueError("human_name is required outside test mode")
    rng = rng or random.Random()
    if roles is None:
        roles = assign_roles(seat_count, rng)
    players = seat_players(seat_count, human_name, test_mode, roles, rng)

    state = GameState(
        players=players,
        mafia_count=sum(1 for r in roles if r == Role.MAFIA),
        test_mode=test_mode,
        config=config,
    )
    state.public_log.system(GAME_START_TEXT.format(seconds=config.day_seconds), now)
    effects = _enter_day(state, rng)
    logger.info("Game started: %s seats, %s mafia, test_mode=%s", seat_count, state.mafia_count, test_mode)
    return state, effects


# --- day ----------------------------------------------------------------


def _enter_day(state: GameState, rng: random.Random) -> list[Scheduled]:
    effects = _enter_phase(state, Phase.DAY, state.config.day_seconds)
    effects.append(_later(state, _jitter(state, rng), ContinuationKind.BOTS_TALK, repeat=True))
    return effects


def bots_talk(
    state: GameState,
    rng: random.Random,
    now: float,
    triggers: tuple[str, ...] = (),
    repeat: bool = False,
) -> Step:
    """One living bot says something in the public chat."""
    if state.phase != Phase.DAY:
        return state, []
    bots = state.get_alive_bots()
    if not bots:
        return state, []
    state = copy.deepcopy(state)
    speaker = choose_speaker(bots, list(triggers), rng)
    category = choose_category(speaker.role, list(triggers))
    line = compose_day_line(build_view(state, speaker), category, rng)
    state.public_log.append(speaker.id, line, now)
    effects = []
    if repeat:
        cfg = state.config
        effects.append(
            _later(state, rng.uniform(cfg.day_chatter_min, cfg.day_chatter_max), ContinuationKind.BOTS_TALK, repeat=True)
        )
    return state, effects


def begin_voting(state: GameState, rng: random.Random, now: float) -> Step:
    """Day -> voting. Every living bot gets its own jittered ballot."""
    if state.phase != Phase.DAY:
        return state, []
    state = copy.deepcopy(state)
    state.public_log.system(VOTING_START_TEXT.format(seconds=state.config.voting_seconds), now)
    state.votes = {}
    effects = _enter_phase(state, Phase.VOTING, state.config.voting_seconds)
    for bot in state.get_alive_bots():
        effects.append(_later(state, _jitter(state, rng), ContinuationKind.BOT_VOTE, seat_id=bot.id))
    return state, effects


def cast_bot_votes(state: GameState, rng: random.Random, now: float, seat_id: Optional[int] = None) -> Step:
    """Bots that have not voted yet cast a day ballot (one bot, or all when seat_id is None)."""
    if state.phase != Phase.VOTING:
        return state, []
    state = copy.deepcopy(state)
    bots = [b for b in state.get_alive_bots() if seat_id is None or b.id == seat_id]
    for bot in bots:
        if bot.id in state.votes:
            continue
        target_id = choose_vote_target(build_view(state, bot), rng, night=False)
        if target_id is None:
            continue
        state.votes[bot.id] = target_id
        state.public_log.append(bot.id, vote_line(state.get_player(target_id).name, night=False), now)
    if _all_voted(state.votes, state.get_alive_players()):
        return close_day_vote(state, rng, now)
    return state, []


def close_day_vote(state: GameState, rng: random.Random, now: float) -> Step:
    """
    Voting -> last-word, night or game-over. A voted-out seat dies right here,
    before its last word, so head counts are already current.
    """
    if state.phase != Phase.VOTING:
        return state, []
    state = copy.deepcopy(state)
    alive_ids = [p.id for p in state.get_alive_players()]
    target_id = tally_day_votes(state.votes, alive_ids, alive_ids)
    state.votes = {}
    if target_id is None:
        state.public_log.system(NO_ELIMINATION_TEXT, now)
        return state, _enter_night(state, now)

    target = state.get_player(target_id)
    state.public_log.system(CHOSEN_FOR_ELIMINATION_TEXT.format(name=target.name), now)
    if target.is_bot:
        state.public_log.append(target.id, last_word_line(target, rng), now)
    _kill(state, target_id)
    state.eliminated_seat_id = target_id

    finished = _finish_if_decided(state, now)
    if finished is not None:
        return state, finished
    return state, _enter_phase(state, Phase.LAST_WORD, state.config.last_word_seconds)


def end_last_word(state: GameState, rng: random.Random, now: float) -> Step:
    """Last-word -> night, revealing the eliminated seat's role."""
    if state.phase != Phase.LAST_WORD:
        return state, []
    state = copy.deepcopy(state)
    eliminated = state.get_player(state.eliminated_seat_id)
    if eliminated is not None:
        state.public_log.system(
            ELIMINATION_REVEAL_TEXT.format(name=eliminated.name, role=role_name(eliminated.role)), now
        )
    finished = _finish_if_decided(state, now)
    if finished is not None:
        return state, finished
    return state, _enter_night(state, now)


# --- night --------------------------------------------------------------


def _enter_night(state: GameState, now: float) -> list[Scheduled]:
    state.public_log.system(NIGHT_FALLS_TEXT, now)
    state.eliminated_seat_id = None
    effects = _enter_phase(state, Phase.NIGHT, None)
    effects.append(_later(state, state.config.night_delay, ContinuationKind.NIGHT_FALLS))
    return effects


def night_falls(state: GameState, rng: random.Random, now: float) -> Step:
    """Night -> mafia-chat with a fresh mafia log, or straight to the sheriff without living mafia."""
    if state.phase != Phase.NIGHT:
        return state, []
    state = copy.deepcopy(state)
    state.mafia_votes = {}
    state.pending_kill_seat_id = None
    state.last_check_seat_id = None
    state.selected_seat_id = None
    if not state.get_players_by_role(Role.MAFIA):
        return _enter_sheriff_turn(state, rng, now)

    state.mafia_log.reset()
    state.mafia_log.system(MAFIA_WAKES_TEXT, now)
    effects = _enter_phase(state, Phase.MAFIA_CHAT, state.config.mafia_chat_seconds)
    if any(p.is_bot for p in state.get_players_by_role(Role.MAFIA)):
        effects.append(_later(state, state.config.reaction_delay, ContinuationKind.MAFIA_TALK, repeat=True))
    return state, effects


def mafia_bots_talk(state: GameState, rng: random.Random, now: float, repeat: bool = False) -> Step:
    """One living mafia bot posts in the mafia chat."""
    if state.phase != Phase.MAFIA_CHAT:
        return state, []
    bots = [p for p in state.get_players_by_role(Role.MAFIA) if p.is_bot]
    if not bots:
        return state, []
    state = copy.deepcopy(state)
    bot = rng.choice(bots)
    state.mafia_log.append(bot.id, compose_mafia_line(build_view(state, bot), rng), now)
    effects = []
    if repeat:
        cfg = state.config
        effects.append(
            _later(state, rng.uniform(cfg.mafia_chatter_min, cfg.mafia_chatter_max), ContinuationKind.MAFIA_TALK, repeat=True)
        )
    return state, effects


def begin_mafia_vote(state: GameState, rng: random.Random, now: float) -> Step:
    """Mafia-chat -> mafia-turn."""
    if state.phase != Phase.MAFIA_CHAT:
        return state, []
    state = copy.deepcopy(state)
    state.mafia_log.system(MAFIA_CHOOSE_TEXT, now)
    state.mafia_votes = {}
    effects = _enter_phase(state, Phase.MAFIA_TURN, state.config.mafia_turn_seconds)
    for bot in state.get_players_by_role(Role.MAFIA):
        if bot.is_bot:
            effects.append(_later(state, _jitter(state, rng), ContinuationKind.MAFIA_BOT_VOTE, seat_id=bot.id))
    return state, effects


def cast_mafia_bot_votes(state: GameState, rng: random.Random, now: float, seat_id: Optional[int] = None) -> Step:
    """Mafia bots that have not voted yet pick a night kill target."""
    if state.phase != Phase.MAFIA_TURN:
        return state, []
    state = copy.deepcopy(state)
    mafia = state.get_players_by_role(Role.MAFIA)
    for bot in mafia:
        if not bot.is_bot or (seat_id is not None and bot.id != seat_id):
            continue
        if bot.id in state.mafia_votes:
            continue
        target_id = choose_vote_target(build_view(state, bot), rng, night=True)
        if target_id is None:
            continue
        state.mafia_votes[bot.id] = target_id
        state.mafia_log.append(bot.id, vote_line(state.get_player(target_id).name, night=True), now)
    if _all_voted(state.mafia_votes, mafia):
        return close_mafia_vote(state, rng, now)
    return state, []


def close_mafia_vote(state: GameState, rng: random.Random, now: float) -> Step:
    """Mafia-turn -> sheriff-turn. The chosen seat stays alive until the morning results."""
    if state.phase != Phase.MAFIA_TURN:
        return state, []
    state = copy.deepcopy(state)
    mafia_ids = [p.id for p in state.get_players_by_role(Role.MAFIA)]
    town_ids = [p.id for p in state.get_alive_players() if is_town(p.role)]
    state.pending_kill_seat_id = tally_night_votes(state.mafia_votes, mafia_ids, town_ids)
    state.mafia_votes = {}
    logger.info("Mafia target for night %s: %s", state.day, state.pending_kill_seat_id)
    return _enter_sheriff_turn(state, rng, now)


def _enter_sheriff_turn(state: GameState, rng: random.Random, now: float) -> Step:
    state.public_log.system(SHERIFF_TURN_TEXT, now)
    state.selected_seat_id = None
    effects = _enter_phase(state, Phase.SHERIFF_TURN, state.config.sheriff_turn_seconds)
    sheriff = state.get_sheriff()
    if sheriff is not None and sheriff.is_bot:
        effects.append(_later(state, _jitter(state, rng), ContinuationKind.SHERIFF_ACT))
    return state, effects


def _record_check(state: GameState, seat_id: int) -> None:
    target = state.get_player(seat_id)
    if target is None:
        logger.warning("Sheriff check on unknown seat %s ignored", seat_id)
        return
    state.checked_players[seat_id] = target.role
    state.last_check_seat_id = seat_id


def _bot_sheriff_check(state: GameState, sheriff: Player, rng: random.Random) -> None:
    target_id = choose_investigation_target(build_view(state, sheriff), rng)
    if target_id is None:
        logger.warning("Sheriff bot %s found nobody to check", sheriff.id)
        return
    _record_check(state, target_id)


def sheriff_bot_act(state: GameState, rng: random.Random, now: float) -> Step:
    """Bot sheriff picks a seat to check; sheriff-turn -> results."""
    if state.phase != Phase.SHERIFF_TURN:
        return state, []
    sheriff = state.get_sheriff()
    if sheriff is None or not sheriff.is_bot:
        return state, []
    state = copy.deepcopy(state)
    _bot_sheriff_check(state, sheriff, rng)
    return _enter_results(state)


def resolve_sheriff_turn(state: GameState, rng: random.Random, now: float) -> Step:
    """Sheriff-turn -> results on advance or timer expiry, recording whatever check was made."""
    if state.phase != Phase.SHERIFF_TURN:
        return state, []
    state = copy.deepcopy(state)
    sheriff = state.get_sheriff()
    if sheriff is not None:
        if sheriff.is_bot:
            _bot_sheriff_check(state, sheriff, rng)
        elif state.selected_seat_id is not None:
            _record_check(state, state.selected_seat_id)
    state.selected_seat_id = None
    return _enter_results(state)


def _enter_results(state: GameState) -> Step:
    effects = _enter_phase(state, Phase.RESULTS, None)
    effects.append(_later(state, state.config.results_delay, ContinuationKind.SHOW_RESULTS))
    return state, effects


def show_results(state: GameState, rng: random.Random, now: float) -> Step:
    """
    Results -> next day or game-over. The night kill is applied here and
    nowhere earlier.
    """
    if state.phase != Phase.RESULTS:
        return state, []
    state = copy.deepcopy(state)
    state.public_log.system(MORNING_TEXT, now)
    killed = None
    if state.pending_kill_seat_id is not None:
        killed = _kill(state, state.pending_kill_seat_id)
    state.pending_kill_seat_id = None
    if killed is not None:
        state.public_log.system(NIGHT_KILL_TEXT.format(name=killed.name, role=role_name(killed.role)), now)
    else:
        state.public_log.system(QUIET_NIGHT_TEXT, now)

    human = state.get_human()
    checked = state.get_player(state.last_check_seat_id)
    if human is not None and human.alive and human.role == Role.SHERIFF and checked is not None:
        result = "mafia" if checked.role == Role.MAFIA else "not mafia"
        state.public_log.system(SHERIFF_RESULT_TEXT.format(name=checked.name, result=result), now)
    state.last_check_seat_id = None

    finished = _finish_if_decided(state, now)
    if finished is not None:
        return state, finished
    state.day += 1
    state.public_log.system(NEW_DAY_TEXT.format(day=state.day, seconds=state.config.day_seconds), now)
    return state, _enter_day(state, rng)


# --- timers -------------------------------------------------------------


def expire_timer(state: GameState, rng: random.Random, now: float) -> Step:
    """Run the transition the current phase takes when its countdown runs out."""
    handlers = {
        Phase.DAY: begin_voting,
        Phase.VOTING: close_day_vote,
        Phase.LAST_WORD: end_last_word,
        Phase.MAFIA_CHAT: begin_mafia_vote,
        Phase.MAFIA_TURN: close_mafia_vote,
        Phase.SHERIFF_TURN: resolve_sheriff_turn,
    }
    handler = handlers.get(state.phase)
    if handler is None:
        return state, []
    return handler(state, rng, now)


def tick(state: GameState, rng: random.Random, now: float) -> Step:
    """One simulated second of the phase countdown."""
    if state.timer is None:
        return state, []
    state = copy.deepcopy(state)
    state.timer -= 1
    if state.timer <= 0:
        state.timer = 0
        return expire_timer(state, rng, now)
    return state, [_later(state, 1.0, ContinuationKind.TICK)]


# --- human intents ------------------------------------------------------


def cast_vote(state: GameState, intent: CastVote, rng: random.Random, now: float) -> Step:
    """Human ballot. Anything not valid for the phase, role or target is ignored."""
    human = state.get_human()
    target = state.get_player(intent.target_seat_id)
    if human is None or not human.alive or target is None or not target.alive or target.id == human.id:
        return state, []

    if intent.is_night_vote:
        if state.phase != Phase.MAFIA_TURN or human.role != Role.MAFIA or target.role == Role.MAFIA:
            return state, []
        state = copy.deepcopy(state)
        state.mafia_votes[human.id] = target.id
        if _all_voted(state.mafia_votes, state.get_players_by_role(Role.MAFIA)):
            return close_mafia_vote(state, rng, now)
        return state, [_later(state, state.config.reaction_delay, ContinuationKind.MAFIA_BOT_VOTE)]

    if state.phase != Phase.VOTING:
        return state, []
    state = copy.deepcopy(state)
    state.votes[human.id] = target.id
    if _all_voted(state.votes, state.get_alive_players()):
        return close_day_vote(state, rng, now)
    return state, [_later(state, state.config.reaction_delay, ContinuationKind.BOT_VOTE)]


def send_chat_message(state: GameState, intent: SendChatMessage, rng: random.Random, now: float) -> Step:
    """Human chat line; bots react after a short pause."""
    human = state.get_human()
    text = intent.text.strip()
    if human is None or not human.alive or not text:
        return state, []

    if intent.is_mafia_channel:
        if state.phase != Phase.MAFIA_CHAT or human.role != Role.MAFIA:
            return state, []
        state = copy.deepcopy(state)
        state.mafia_log.append(human.id, text, now)
        return state, [_later(state, state.config.reaction_delay, ContinuationKind.MAFIA_TALK)]

    if state.phase != Phase.DAY:
        return state, []
    state = copy.deepcopy(state)
    state.public_log.append(human.id, text, now)
    triggers = tuple(analyze_triggers(text))
    return state, [_later(state, state.config.reaction_delay, ContinuationKind.BOTS_TALK, triggers=triggers)]


def select_investigation_target(state: GameState, intent: SelectInvestigationTarget) -> Step:
    """Record the human sheriff's pick without leaving the phase."""
    human = state.get_human()
    target = state.get_player(intent.seat_id)
    if (
        state.phase != Phase.SHERIFF_TURN
        or human is None
        or not human.alive
        or human.role != Role.SHERIFF
        or target is None
        or not target.alive
        or target.id == human.id
    ):
        return state, []
    state = copy.deepcopy(state)
    state.selected_seat_id = target.id
    return state, []


def can_advance(state: GameState) -> bool:
    """Whether an AdvancePhase intent would do anything right now."""
    if state.phase not in MANUAL_ADVANCE_PHASES:
        return False
    human = state.get_human()
    human_alive = human is not None and human.alive
    if state.phase == Phase.DAY:
        return human_alive or state.test_mode
    if state.phase == Phase.LAST_WORD:
        return True
    if state.phase == Phase.MAFIA_CHAT:
        return state.test_mode or (human_alive and human.role == Role.MAFIA)
    # sheriff-turn: only once the human sheriff has picked someone
    return human_alive and human.role == Role.SHERIFF and state.selected_seat_id is not None


def advance_phase(state: GameState, rng: random.Random, now: float) -> Step:
    """Human-requested early transition, only where the phase offers one."""
    if not can_advance(state):
        return state, []
    handlers = {
        Phase.DAY: begin_voting,
        Phase.LAST_WORD: end_last_word,
        Phase.MAFIA_CHAT: begin_mafia_vote,
        Phase.SHERIFF_TURN: resolve_sheriff_turn,
    }
    return handlers[state.phase](state, rng, now)


# --- reducer ------------------------------------------------------------


def _run_continuation(state: GameState, c: Continuation, rng: random.Random, now: float) -> Step:
    if c.phase != state.phase or c.serial != state.phase_serial:
        logger.debug("Stale %s for %s#%s (now %s#%s)", c.kind.value, c.phase.value, c.serial, state.phase.value, state.phase_serial)
        return state, []
    kind = c.kind
    if kind == ContinuationKind.TICK:
        return tick(state, rng, now)
    if kind == ContinuationKind.BOTS_TALK:
        return bots_talk(state, rng, now, triggers=c.triggers, repeat=c.repeat)
    if kind == ContinuationKind.MAFIA_TALK:
        return mafia_bots_talk(state, rng, now, repeat=c.repeat)
    if kind == ContinuationKind.BOT_VOTE:
        return cast_bot_votes(state, rng, now, seat_id=c.seat_id)
    if kind == ContinuationKind.MAFIA_BOT_VOTE:
        return cast_mafia_bot_votes(state, rng, now, seat_id=c.seat_id)
    if kind == ContinuationKind.SHERIFF_ACT:
        return sheriff_bot_act(state, rng, now)
    if kind == ContinuationKind.NIGHT_FALLS:
        return night_falls(state, rng, now)
    if kind == ContinuationKind.SHOW_RESULTS:
        return show_results(state, rng, now)
    return state, []


def dispatch(state: GameState, intent: Intent, rng: random.Random, now: float) -> Step:
    """
    Apply one intent or continuation. Never raises for game-flow reasons:
    anything that does not fit the current phase leaves state untouched.
    """
    if state.phase in (Phase.SETUP, Phase.GAME_OVER):
        return state, []
    if _human_is_out(state):
        # A dead human ends the game whatever phase we are in
        state = copy.deepcopy(state)
        return state, _finish_if_decided(state, now) or []

    if isinstance(intent, Continuation):
        return _run_continuation(state, intent, rng, now)
    if isinstance(intent, CastVote):
        new_state, effects = cast_vote(state, intent, rng, now)
    elif isinstance(intent, SendChatMessage):
        new_state, effects = send_chat_message(state, intent, rng, now)
    elif isinstance(intent, SelectInvestigationTarget):
        new_state, effects = select_investigation_target(state, intent)
    elif isinstance(intent, AdvancePhase):
        new_state, effects = advance_phase(state, rng, now)
    else:
        raise TypeError(f"Unknown intent {intent!r}")
    if new_state is state:
        logger.debug("Ignored %s in phase %s", type(intent).__name__, state.phase.value)
    return new_state, effects
