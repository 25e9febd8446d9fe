"""FastAPI app: create a game, read its snapshot, submit human intents."""

import logging
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api.game_store import (
    create as store_create,
    delete as store_delete,
    get as store_get,
    list_games,
)
from api.models import (
    ChatRequest,
    GameCreateRequest,
    GameStateResponse,
    InvestigateRequest,
    VoteRequest,
    game_state_to_public,
)
from game.config import load_config
from game.intents import AdvancePhase, CastVote, HumanIntent, SelectInvestigationTarget, SendChatMessage
from game.session import GameSession

logger = logging.getLogger(__name__)

app = FastAPI(title="Solo Mafia API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session_or_404(game_id: str) -> GameSession:
    session = store_get(game_id)
    if session is None:
        raise HTTPException(404, "Game not found")
    return session


def _snapshot(game_id: str, session: GameSession) -> GameStateResponse:
    return game_state_to_public(game_id, session.state, session.now)


def _apply(game_id: str, intent: HumanIntent) -> GameStateResponse:
    """Illegal intents are ignored by the game, so this always answers with the current snapshot."""
    session = _session_or_404(game_id)
    with session.lock:
        session.apply(intent)
        return _snapshot(game_id, session)


@app.post("/games", response_model=dict, tags=["Games"], summary="Create game")
def create_game(body: GameCreateRequest):
    """Seat the table and start day 1. Returns game_id."""
    try:
        session = GameSession.realtime(
            body.seat_count,
            body.human_name,
            body.test_mode,
            config=load_config(),
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    game_id = str(uuid.uuid4())
    store_create(game_id, session)
    logger.info("Created game %s", game_id)
    return {"game_id": game_id}


@app.get("/games/{game_id}", response_model=GameStateResponse, tags=["Games"], summary="Get game state")
def get_game(game_id: str):
    """Catch the game up with the clock and return what the human may see."""
    session = _session_or_404(game_id)
    with session.lock:
        session.sync()
        return _snapshot(game_id, session)


@app.post("/games/{game_id}/vote", response_model=GameStateResponse, tags=["Actions"], summary="Cast vote")
def cast_vote(game_id: str, body: VoteRequest):
    """Day ballot, or night kill ballot when is_night_vote (mafia only)."""
    return _apply(game_id, CastVote(target_seat_id=body.target_seat_id, is_night_vote=body.is_night_vote))


@app.post("/games/{game_id}/chat", response_model=GameStateResponse, tags=["Actions"], summary="Send chat message")
def send_chat(game_id: str, body: ChatRequest):
    return _apply(game_id, SendChatMessage(text=body.text, is_mafia_channel=body.is_mafia_channel))


@app.post(
    "/games/{game_id}/investigate",
    response_model=GameStateResponse,
    tags=["Actions"],
    summary="Pick sheriff target",
)
def investigate(game_id: str, body: InvestigateRequest):
    """Record the sheriff's pick. Use /advance to confirm it early."""
    return _apply(game_id, SelectInvestigationTarget(seat_id=body.seat_id))


@app.post("/games/{game_id}/advance", response_model=GameStateResponse, tags=["Actions"], summary="End phase early")
def advance(game_id: str):
    return _apply(game_id, AdvancePhase())


@app.delete("/games/{game_id}", tags=["Games"], summary="Delete game")
def delete_game(game_id: str):
    if not store_delete(game_id):
        raise HTTPException(404, "Game not found")
    return {"deleted": game_id}


@app.get("/games", response_model=list[str], tags=["Games"], summary="List game IDs")
def list_games_route():
    """List all game IDs."""
    return list_games()


@app.get("/health", tags=["System"], summary="Health check")
def health():
    return {"status": "ok"}


@app.get("/settings/timers", response_model=dict, tags=["Settings"], summary="Get timer settings")
def get_timers():
    """Phase lengths and bot pacing new games are created with (from env, else defaults)."""
    return load_config().to_dict()
