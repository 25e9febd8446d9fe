"""Unit tests for the phase state machine."""

from dataclasses import replace

import pytest

from conftest import ScriptedRandom, make_game
from game.engine import (
    begin_mafia_vote,
    begin_voting,
    can_advance,
    cast_bot_votes,
    cast_mafia_bot_votes,
    close_day_vote,
    dispatch,
    end_last_word,
    expire_timer,
    night_falls,
    sheriff_bot_act,
    show_results,
    start_game,
)
from game.intents import (
    AdvancePhase,
    CastVote,
    Continuation,
    ContinuationKind,
    SelectInvestigationTarget,
    SendChatMessage,
)
from game.phrases import HUMAN_OUT_TEXT, MAFIA_WAKES_TEXT, NO_ELIMINATION_TEXT, QUIET_NIGHT_TEXT, role_name
from game.rules import Phase, Role, Winner

# Seat 1 human civilian, 2 mafia bot, 3 sheriff bot, 4 civilian bot
SCENARIO_ROLES = [Role.CIVILIAN, Role.MAFIA, Role.SHERIFF, Role.CIVILIAN]


def _kinds(effects):
    return [e.continuation.kind for e in effects]


def _texts(state):
    return [m.text for m in state.public_log.messages]


def _to_night(state, rng):
    """Day 1 with no ballots: both timers run out, nobody is eliminated."""
    state, _ = expire_timer(state, rng, 30.0)
    assert state.phase == Phase.VOTING
    state, effects = expire_timer(state, rng, 40.0)
    assert state.phase == Phase.NIGHT
    assert _kinds(effects) == [ContinuationKind.NIGHT_FALLS]
    return state


def _to_mafia_turn(state, rng):
    state = _to_night(state, rng)
    state, _ = night_falls(state, rng, 42.0)
    assert state.phase == Phase.MAFIA_CHAT
    state, _ = begin_mafia_vote(state, rng, 62.0)
    assert state.phase == Phase.MAFIA_TURN
    return state


def test_start_game():
    rng = ScriptedRandom()
    state, effects = start_game(6, "Alice", rng=rng)
    assert state.phase == Phase.DAY
    assert state.day == 1
    assert state.timer == 30
    assert len(state.players) == 6
    assert all(p.alive for p in state.players)
    assert state.get_human().id == 1
    assert state.mafia_count == 1
    assert state.public_log.messages[0].is_system
    assert set(_kinds(effects)) == {ContinuationKind.TICK, ContinuationKind.BOTS_TALK}


@pytest.mark.parametrize("seat_count", [3, 11])
def test_start_game_bad_seat_count_raises(seat_count):
    with pytest.raises(ValueError):
        start_game(seat_count, "Alice", rng=ScriptedRandom())


def test_start_game_blank_name_raises():
    with pytest.raises(ValueError):
        start_game(5, "   ", rng=ScriptedRandom())


def test_start_game_test_mode_needs_no_name():
    state, _ = start_game(5, "", True, rng=ScriptedRandom())
    assert state.get_human() is None
    assert state.test_mode


def test_scenario_a_night_cycle():
    rng = ScriptedRandom(prefer=[4])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_night(state, rng)
    assert NO_ELIMINATION_TEXT in _texts(state)
    assert all(p.alive for p in state.players)

    state, _ = night_falls(state, rng, 42.0)
    state, effects = begin_mafia_vote(state, rng, 62.0)
    assert _kinds(effects).count(ContinuationKind.MAFIA_BOT_VOTE) == 1

    # The only mafia voter decides alone; civilian 4 becomes the pending target
    state, effects = cast_mafia_bot_votes(state, rng, 64.0, seat_id=2)
    assert state.phase == Phase.SHERIFF_TURN
    assert state.pending_kill_seat_id == 4
    assert state.get_player(4).alive
    assert ContinuationKind.SHERIFF_ACT in _kinds(effects)

    rng.prefer = [2]
    state, effects = sheriff_bot_act(state, rng, 66.0)
    assert state.checked_players[2] == Role.MAFIA
    assert state.phase == Phase.RESULTS
    assert state.get_player(4).alive
    assert _kinds(effects) == [ContinuationKind.SHOW_RESULTS]

    state, effects = show_results(state, rng, 67.0)
    assert not state.get_player(4).alive
    assert state.day == 2
    assert state.phase == Phase.DAY
    assert state.winner is None
    assert state.pending_kill_seat_id is None
    assert ContinuationKind.BOTS_TALK in _kinds(effects)


def test_scenario_b_lynch_mafia_ends_game():
    rng = ScriptedRandom(prefer=[4])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_mafia_turn(state, rng)
    state, _ = cast_mafia_bot_votes(state, rng, 64.0, seat_id=2)
    rng.prefer = [2]
    state, _ = sheriff_bot_act(state, rng, 66.0)
    state, _ = show_results(state, rng, 67.0)

    state, _ = begin_voting(state, rng, 70.0)
    state, _ = dispatch(state, CastVote(target_seat_id=2), rng, 71.0)
    assert state.votes == {1: 2}
    state, _ = cast_bot_votes(state, rng, 72.0, seat_id=3)
    assert state.votes[3] == 2
    assert state.phase == Phase.VOTING

    state, effects = expire_timer(state, rng, 80.0)
    assert not state.get_player(2).alive
    assert state.winner == Winner.CIVILIANS
    assert state.phase == Phase.GAME_OVER
    assert state.timer is None
    assert effects == []


def test_lynch_goes_through_last_word():
    roles = [Role.CIVILIAN, Role.MAFIA, Role.MAFIA, Role.SHERIFF, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN, Role.CIVILIAN]
    rng = ScriptedRandom()
    state = make_game(roles, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state.votes = {1: 5, 4: 5, 6: 7}
    state, effects = close_day_vote(state, rng, 10.0)
    # Dead at vote close, before the last word
    assert not state.get_player(5).alive
    assert state.phase == Phase.LAST_WORD
    assert state.timer == 15
    assert state.eliminated_seat_id == 5
    assert state.public_log.messages[-1].author_seat_id == 5

    state, effects = dispatch(state, AdvancePhase(), rng, 12.0)
    assert state.phase == Phase.NIGHT
    assert state.eliminated_seat_id is None
    assert any("Their role: Civilian" in t for t in _texts(state))


def test_day_tie_goes_to_night():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state.votes = {1: 2, 2: 3, 3: 2, 4: 3}
    state, _ = close_day_vote(state, rng, 10.0)
    assert state.phase == Phase.NIGHT
    assert all(p.alive for p in state.players)


def test_all_ballots_close_vote_early():
    rng = ScriptedRandom(prefer=[2])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state, _ = cast_bot_votes(state, rng, 6.5)
    assert state.phase == Phase.VOTING
    assert set(state.votes) == {2, 3, 4}
    state, _ = dispatch(state, CastVote(target_seat_id=2), rng, 7.0)
    assert state.phase != Phase.VOTING
    assert not state.get_player(2).alive


def test_human_can_revote_bots_cannot():
    rng = ScriptedRandom(prefer=[3])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state, effects = dispatch(state, CastVote(target_seat_id=2), rng, 6.0)
    assert _kinds(effects) == [ContinuationKind.BOT_VOTE]
    state, _ = dispatch(state, CastVote(target_seat_id=4), rng, 6.5)
    assert state.votes == {1: 4}

    state, _ = cast_bot_votes(state, rng, 7.0, seat_id=2)
    first = state.votes[2]
    rng.prefer = [4]
    state, _ = cast_bot_votes(state, rng, 7.5, seat_id=2)
    assert state.votes[2] == first


def test_deferred_night_kill_survives_sheriff_turn():
    rng = ScriptedRandom(prefer=[4])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_mafia_turn(state, rng)
    state, _ = cast_mafia_bot_votes(state, rng, 64.0)
    assert state.phase == Phase.SHERIFF_TURN
    # Timer runs all the way out
    for second in range(14):
        state, _ = dispatch(state, Continuation(ContinuationKind.TICK, state.phase, state.phase_serial), rng, 65.0 + second)
        assert state.phase == Phase.SHERIFF_TURN
        assert state.get_player(4).alive
    state, _ = dispatch(state, Continuation(ContinuationKind.TICK, state.phase, state.phase_serial), rng, 80.0)
    assert state.phase == Phase.RESULTS
    assert state.get_player(4).alive
    state, _ = show_results(state, rng, 81.0)
    assert not state.get_player(4).alive


def test_vote_during_day_is_ignored():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    new_state, effects = dispatch(state, CastVote(target_seat_id=2), rng, 1.0)
    assert new_state is state
    assert effects == []
    assert state.votes == {}
    assert state.mafia_votes == {}
    assert state.phase == Phase.DAY


@pytest.mark.parametrize(
    "intent",
    [
        CastVote(target_seat_id=1),  # self
        CastVote(target_seat_id=99),  # no such seat
        CastVote(target_seat_id=2, is_night_vote=True),  # not mafia, not night
    ],
)
def test_invalid_ballots_are_ignored(intent):
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    new_state, effects = dispatch(state, intent, rng, 6.0)
    assert new_state is state
    assert effects == []


def test_blank_chat_is_ignored():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    new_state, effects = dispatch(state, SendChatMessage(text="   "), rng, 1.0)
    assert new_state is state
    assert effects == []


def test_chat_triggers_a_reply():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, effects = dispatch(state, SendChatMessage(text="Who is the sheriff here?"), rng, 1.0)
    assert state.public_log.messages[-1].author_seat_id == 1
    assert _kinds(effects) == [ContinuationKind.BOTS_TALK]
    reply = effects[0].continuation
    assert reply.triggers == ("sheriff",)
    assert reply.repeat is False

    state, effects = dispatch(state, reply, rng, 2.5)
    assert state.public_log.messages[-1].author_seat_id == 3
    assert effects == []


def test_civilian_cannot_post_to_mafia_chat():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_night(state, rng)
    state, _ = night_falls(state, rng, 42.0)
    new_state, _ = dispatch(state, SendChatMessage(text="psst", is_mafia_channel=True), rng, 43.0)
    assert new_state is state


def test_stale_continuation_is_noop():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    old_tick = Continuation(ContinuationKind.TICK, state.phase, state.phase_serial)
    state, _ = begin_voting(state, rng, 5.0)
    new_state, effects = dispatch(state, old_tick, rng, 6.0)
    assert new_state is state
    assert effects == []
    # Same phase name, older serial
    stale_vote = Continuation(ContinuationKind.BOT_VOTE, Phase.VOTING, state.phase_serial - 1, seat_id=2)
    new_state, _ = dispatch(state, stale_vote, rng, 6.0)
    assert new_state is state


def test_tick_counts_down_and_rearms():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    tick = Continuation(ContinuationKind.TICK, state.phase, state.phase_serial)
    state, effects = dispatch(state, tick, rng, 1.0)
    assert state.timer == 29
    assert _kinds(effects) == [ContinuationKind.TICK]


def test_input_state_is_not_mutated():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    new_state, _ = begin_voting(state, rng, 5.0)
    assert state.phase == Phase.DAY
    assert new_state.phase == Phase.VOTING
    assert len(new_state.public_log.messages) == len(state.public_log.messages) + 1


def test_human_mafia_voted_out_civilians_win():
    roles = [Role.MAFIA, Role.CIVILIAN, Role.SHERIFF, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[1])
    state = make_game(roles, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state, _ = cast_bot_votes(state, rng, 6.5)
    assert state.votes == {2: 1, 3: 1, 4: 1}
    state, _ = expire_timer(state, rng, 15.0)
    assert not state.get_player(1).alive
    assert state.phase == Phase.GAME_OVER
    assert state.winner == Winner.CIVILIANS


def test_human_sheriff_check_and_private_result():
    roles = [Role.SHERIFF, Role.MAFIA, Role.CIVILIAN, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[3])
    state = make_game(roles, rng=rng)
    state = _to_mafia_turn(state, rng)
    state, effects = cast_mafia_bot_votes(state, rng, 64.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert ContinuationKind.SHERIFF_ACT not in _kinds(effects)

    # Advance needs a pick first
    assert not can_advance(state)
    new_state, _ = dispatch(state, AdvancePhase(), rng, 65.0)
    assert new_state is state
    new_state, _ = dispatch(state, SelectInvestigationTarget(seat_id=1), rng, 65.0)
    assert new_state is state

    state, _ = dispatch(state, SelectInvestigationTarget(seat_id=2), rng, 65.0)
    assert state.selected_seat_id == 2
    assert state.phase == Phase.SHERIFF_TURN
    assert can_advance(state)
    state, _ = dispatch(state, AdvancePhase(), rng, 66.0)
    assert state.phase == Phase.RESULTS
    assert state.checked_players == {2: Role.MAFIA}

    state, _ = show_results(state, rng, 67.0)
    assert not state.get_player(3).alive
    name = state.get_player(2).name
    assert any(name in t and "Result: mafia" in t for t in _texts(state))


def test_human_mafia_night_vote_and_chat():
    roles = [Role.MAFIA, Role.CIVILIAN, Role.SHERIFF, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[2])
    state = make_game(roles, rng=rng)
    state = _to_night(state, rng)
    state, effects = night_falls(state, rng, 42.0)
    assert state.phase == Phase.MAFIA_CHAT
    # No mafia bots, so no chatter is scheduled
    assert ContinuationKind.MAFIA_TALK not in _kinds(effects)

    state, _ = dispatch(state, SendChatMessage(text="Seat 3 is the sheriff", is_mafia_channel=True), rng, 43.0)
    assert state.mafia_log.messages[-1].author_seat_id == 1
    assert state.mafia_log.messages[-1].text == "Seat 3 is the sheriff"

    state, effects = dispatch(state, AdvancePhase(), rng, 44.0)
    assert state.phase == Phase.MAFIA_TURN
    assert ContinuationKind.MAFIA_BOT_VOTE not in _kinds(effects)

    # Day ballot or teammate ballot is ignored at night
    new_state, _ = dispatch(state, CastVote(target_seat_id=3), rng, 45.0)
    assert new_state is state
    state, _ = dispatch(state, CastVote(target_seat_id=3, is_night_vote=True), rng, 45.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert state.pending_kill_seat_id == 3
    assert state.get_player(3).alive


def test_night_without_mafia_vote_is_quiet():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_mafia_turn(state, rng)
    state, _ = expire_timer(state, rng, 77.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert state.pending_kill_seat_id is None
    state, _ = expire_timer(state, rng, 92.0)
    state, _ = show_results(state, rng, 93.0)
    assert QUIET_NIGHT_TEXT in _texts(state)
    assert all(p.alive for p in state.players)
    assert state.day == 2


def test_mafia_log_fresh_each_night():
    rng = ScriptedRandom(prefer=[4])
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_mafia_turn(state, rng)
    first_ids = [m.id for m in state.mafia_log.messages]
    state, _ = cast_mafia_bot_votes(state, rng, 64.0)
    state, _ = expire_timer(state, rng, 80.0)
    state, _ = show_results(state, rng, 81.0)
    state, _ = expire_timer(state, rng, 111.0)
    state, _ = expire_timer(state, rng, 121.0)
    state, _ = night_falls(state, rng, 123.0)
    assert len(state.mafia_log.messages) == 1
    assert state.mafia_log.messages[0].id > max(first_ids)


def test_last_word_then_win_check():
    # 4 seats: lynching a civilian leaves 1 mafia vs 2 town
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state.votes = {1: 4, 2: 4, 3: 2}
    state, _ = close_day_vote(state, rng, 10.0)
    assert state.phase == Phase.LAST_WORD
    state, _ = end_last_word(state, rng, 25.0)
    assert state.phase == Phase.NIGHT
    assert state.winner is None


def test_game_over_ignores_everything():
    roles = [Role.MAFIA, Role.CIVILIAN, Role.SHERIFF, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[1])
    state = make_game(roles, rng=rng)
    state, _ = begin_voting(state, rng, 5.0)
    state, _ = cast_bot_votes(state, rng, 6.5)
    state, _ = expire_timer(state, rng, 15.0)
    assert state.phase == Phase.GAME_OVER
    for intent in (AdvancePhase(), SendChatMessage(text="gg"), Continuation(ContinuationKind.TICK, state.phase, state.phase_serial)):
        new_state, effects = dispatch(state, intent, rng, 20.0)
        assert new_state is state
        assert effects == []


def _with_dead(state, *seat_ids):
    state.players = [replace(p, alive=False) if p.id in seat_ids else p for p in state.players]
    return state


def test_sheriff_turn_without_sheriff_waits_for_timer():
    # Seat 1 human civilian, 2 mafia bot, 3 dead sheriff, 4 and 5 civilian bots
    roles = [Role.CIVILIAN, Role.MAFIA, Role.SHERIFF, Role.CIVILIAN, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[1])
    state = _with_dead(make_game(roles, rng=rng), 3)
    state = _to_mafia_turn(state, rng)
    state, effects = cast_mafia_bot_votes(state, rng, 64.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert state.pending_kill_seat_id == 1
    assert _kinds(effects) == [ContinuationKind.TICK]
    assert not can_advance(state)
    new_state, effects = dispatch(state, AdvancePhase(), rng, 65.0)
    assert new_state is state
    assert effects == []

    state, effects = expire_timer(state, rng, 79.0)
    assert state.phase == Phase.RESULTS
    assert state.checked_players == {}
    assert _kinds(effects) == [ContinuationKind.SHOW_RESULTS]


def test_human_civilian_killed_at_night_mafia_wins():
    roles = [Role.CIVILIAN, Role.MAFIA, Role.SHERIFF, Role.CIVILIAN, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[1])
    state = _with_dead(make_game(roles, rng=rng), 3)
    state = _to_mafia_turn(state, rng)
    state, _ = cast_mafia_bot_votes(state, rng, 64.0)
    state, _ = expire_timer(state, rng, 79.0)
    state, effects = show_results(state, rng, 80.0)
    assert not state.get_player(1).alive
    assert state.winner == Winner.MAFIA
    assert state.phase == Phase.GAME_OVER
    assert HUMAN_OUT_TEXT.format(name="Tester", role=role_name(Role.CIVILIAN)) in _texts(state)
    assert ContinuationKind.BOTS_TALK not in _kinds(effects)


def test_night_kill_to_parity_mafia_wins():
    # Two mafia bots against three town seats; one kill evens it out
    roles = [Role.CIVILIAN, Role.MAFIA, Role.MAFIA, Role.SHERIFF, Role.CIVILIAN]
    rng = ScriptedRandom(prefer=[5])
    state = make_game(roles, rng=rng)
    state = _to_mafia_turn(state, rng)
    state, effects = cast_mafia_bot_votes(state, rng, 64.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert state.pending_kill_seat_id == 5
    assert ContinuationKind.SHERIFF_ACT in _kinds(effects)
    state, _ = sheriff_bot_act(state, rng, 66.0)
    assert state.phase == Phase.RESULTS
    state, _ = show_results(state, rng, 67.0)
    assert not state.get_player(5).alive
    assert state.get_player(1).alive
    assert state.winner == Winner.MAFIA
    assert state.phase == Phase.GAME_OVER


def test_night_without_living_mafia_skips_to_sheriff():
    rng = ScriptedRandom()
    state = make_game(SCENARIO_ROLES, rng=rng)
    state = _to_night(state, rng)
    state = _with_dead(state, 2)
    state, effects = night_falls(state, rng, 42.0)
    assert state.phase == Phase.SHERIFF_TURN
    assert MAFIA_WAKES_TEXT not in [m.text for m in state.mafia_log.messages]
    assert ContinuationKind.MAFIA_TALK not in _kinds(effects)
    assert ContinuationKind.SHERIFF_ACT in _kinds(effects)

    state, _ = expire_timer(state, rng, 57.0)
    assert state.phase == Phase.RESULTS
    state, _ = show_results(state, rng, 58.0)
    assert QUIET_NIGHT_TEXT in _texts(state)
    assert state.winner == Winner.CIVILIANS
    assert state.phase == Phase.GAME_OVER
