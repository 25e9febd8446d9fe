"""Pydantic request/response models for the API."""

from pydantic import BaseModel, Field, model_validator

from game.engine import can_advance
from game.rules import HUMAN_SEAT_ID, MAX_SEATS, MIN_SEATS, Phase, Role
from game.state import GameState, Message

# Validation constants (no magic numbers in validation)
MAX_HUMAN_NAME_LENGTH = 50
MAX_CHAT_LENGTH = 500


class GameCreateRequest(BaseModel):
    """Body for POST /games."""

    seat_count: int = Field(default=6, ge=MIN_SEATS, le=MAX_SEATS)
    human_name: str = Field(default="", max_length=MAX_HUMAN_NAME_LENGTH)
    test_mode: bool = Field(
        default=False,
        description="If true, seat 1 is played by a bot too and the whole table is visible.",
    )

    @model_validator(mode="after")
    def name_required_outside_test_mode(self) -> "GameCreateRequest":
        if not self.test_mode and not self.human_name.strip():
            raise ValueError("human_name is required unless test_mode is set")
        return self


class VoteRequest(BaseModel):
    """Body for POST /games/{id}/vote."""

    target_seat_id: int
    is_night_vote: bool = False


class ChatRequest(BaseModel):
    """Body for POST /games/{id}/chat. Blank text is accepted and ignored by the game."""

    text: str = Field(..., max_length=MAX_CHAT_LENGTH)
    is_mafia_channel: bool = False


class InvestigateRequest(BaseModel):
    """Body for POST /games/{id}/investigate."""

    seat_id: int


class PlayerPublic(BaseModel):
    """Seat as shown to the human: role only where the human is allowed to know it."""

    id: int
    name: str
    alive: bool
    is_bot: bool
    role: str | None = Field(default=None, description="Own seat, dead seats, fellow mafia, or everything in test mode / after game over")


class MessagePublic(BaseModel):
    id: int
    author_seat_id: int
    author_name: str
    text: str
    timestamp: float
    is_system: bool


class VotePublic(BaseModel):
    """One ballot in the open round."""

    voter_seat_id: int
    target_seat_id: int


class GameStateResponse(BaseModel):
    """Read-only snapshot for GET /games/{id} and every action endpoint."""

    game_id: str
    phase: str
    day: int
    timer: int | None = Field(default=None, description="Seconds left in the current timed phase")
    winner: str | None = Field(default=None, description="mafia or civilians when game over")
    test_mode: bool
    you_seat_id: int | None = Field(default=None, description="Human seat; None in test mode")
    players: list[PlayerPublic]
    public_chat: list[MessagePublic]
    mafia_chat: list[MessagePublic] | None = Field(default=None, description="Only for a mafia human or in test mode")
    votes: list[VotePublic] = Field(default_factory=list)
    mafia_votes: list[VotePublic] | None = Field(default=None, description="Only for a mafia human or in test mode")
    checked_players: dict[int, str] | None = Field(default=None, description="Only for a human sheriff or in test mode")
    selected_seat_id: int | None = Field(default=None, description="Human sheriff's pick this night")
    can_advance: bool = Field(default=False, description="True when POST /advance would do something now")
    simulated_time: float = 0.0


def _can_see_role(state: GameState, viewer_role: Role | None, seat) -> bool:
    if state.test_mode or state.phase == Phase.GAME_OVER or not seat.alive:
        return True
    if seat.id == HUMAN_SEAT_ID:
        return True
    return viewer_role == Role.MAFIA and seat.role == Role.MAFIA


def _messages(state: GameState, messages: list[Message]) -> list[MessagePublic]:
    names = {p.id: p.name for p in state.players}
    return [
        MessagePublic(
            id=m.id,
            author_seat_id=m.author_seat_id,
            author_name="System" if m.is_system else names.get(m.author_seat_id, str(m.author_seat_id)),
            text=m.text,
            timestamp=m.timestamp,
            is_system=m.is_system,
        )
        for m in messages
    ]


def _ballots(votes: dict[int, int]) -> list[VotePublic]:
    return [VotePublic(voter_seat_id=v, target_seat_id=t) for v, t in sorted(votes.items())]


def game_state_to_public(game_id: str, state: GameState, now: float = 0.0) -> GameStateResponse:
    """Build the snapshot the human is allowed to see; hidden roles and channels stay hidden."""
    human = state.get_human()
    viewer_role = human.role if human is not None else None
    sees_mafia = state.test_mode or viewer_role == Role.MAFIA
    sees_checks = state.test_mode or viewer_role == Role.SHERIFF

    players_public = [
        PlayerPublic(
            id=p.id,
            name=p.name,
            alive=p.alive,
            is_bot=p.is_bot,
            role=p.role.value if _can_see_role(state, viewer_role, p) else None,
        )
        for p in state.players
    ]
    return GameStateResponse(
        game_id=game_id,
        phase=state.phase.value,
        day=state.day,
        timer=state.timer,
        winner=state.winner.value if state.winner else None,
        test_mode=state.test_mode,
        you_seat_id=None if state.test_mode else HUMAN_SEAT_ID,
        players=players_public,
        public_chat=_messages(state, state.public_log.list()),
        mafia_chat=_messages(state, state.mafia_log.list()) if sees_mafia else None,
        votes=_ballots(state.votes),
        mafia_votes=_ballots(state.mafia_votes) if sees_mafia else None,
        checked_players={sid: role.value for sid, role in state.checked_players.items()} if sees_checks else None,
        selected_seat_id=state.selected_seat_id if sees_checks else None,
        can_advance=can_advance(state),
        simulated_time=now,
    )
