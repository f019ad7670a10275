"""FastAPI endpoints for resolution sessions, dice rolls and token pools."""

from __future__ import annotations

import logging
import threading
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .config import ResolutionSettings, load_settings
from .dice import roll_dice_pool
from .errors import InvalidInput, InvalidTransition
from .models import MAX_AXIS_VALUE, MAX_PENDING_SUCCESSES, DicePoolConfig, SessionRecord
from .pool import generate_token_pool
from .rng import create_random_source
from .store import SessionStore, create_store

logger = logging.getLogger(__name__)


class BoardAction(BaseModel):
    type: Literal["START_ROUND", "REVEAL_TOKEN", "ADVANCE_PHASE", "RESET", "SET_SUCCESSES"]
    tokenId: str | None = None
    successes: int | None = Field(default=None, ge=0, le=MAX_PENDING_SUCCESSES)


class ActionEnvelope(BaseModel):
    action: BoardAction


class DiceConfigRequest(BaseModel):
    stats: int = Field(default=0, ge=0, le=MAX_AXIS_VALUE)
    skills: int = Field(default=0, ge=0, le=MAX_AXIS_VALUE)
    bonuses: int = Field(default=0, ge=0, le=MAX_AXIS_VALUE)


class SessionResponse(BaseModel):
    state: dict[str, Any]


class BoardActionResponse(BaseModel):
    state: dict[str, Any]
    events: list[dict[str, Any]]


class PoolResponse(BaseModel):
    tokens: list[dict[str, Any]]


class RollResponse(BaseModel):
    config: dict[str, Any]
    result: dict[str, Any]


def _require(record: SessionRecord | None) -> SessionRecord:
    if record is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return record


def create_app(store: SessionStore | None = None, settings: ResolutionSettings | None = None) -> FastAPI:
    app = FastAPI(title="RPG Resolution API", version="0.1.0")
    app_settings = settings if settings is not None else load_settings()
    session_store = (
        store
        if store is not None
        else create_store(seed=app_settings.seed, max_explosion_depth=app_settings.max_explosion_depth)
    )
    stateless_rng = create_random_source(app_settings.seed)
    rng_lock = threading.Lock()

    def get_store() -> SessionStore:
        return session_store

    @app.post("/api/sessions", response_model=SessionResponse)
    def create_session(local_store: SessionStore = Depends(get_store)) -> SessionResponse:
        record = local_store.create_session()
        return SessionResponse(state=record.to_dict())

    @app.get("/api/sessions/{session_id}", response_model=SessionResponse)
    def get_session(session_id: str, local_store: SessionStore = Depends(get_store)) -> SessionResponse:
        record = _require(local_store.get_session(session_id))
        return SessionResponse(state=record.to_dict())

    @app.delete("/api/sessions/{session_id}", status_code=204)
    def delete_session(session_id: str, local_store: SessionStore = Depends(get_store)) -> None:
        if not local_store.delete_session(session_id):
            raise HTTPException(status_code=404, detail="Session not found")

    @app.post("/api/sessions/{session_id}/board/actions", response_model=BoardActionResponse)
    def post_board_action(
        session_id: str,
        payload: ActionEnvelope,
        local_store: SessionStore = Depends(get_store),
    ) -> BoardActionResponse:
        action = payload.action.model_dump(exclude_none=True)
        try:
            result = local_store.apply_board_action(session_id=session_id, action=action)
        except InvalidTransition as exc:
            logger.warning("Rejected %s for session %s: %s", action["type"], session_id, exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except InvalidInput as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if result is None:
            raise HTTPException(status_code=404, detail="Session not found")
        return BoardActionResponse(state=result.state.to_dict(), events=result.engine_events)

    @app.put("/api/sessions/{session_id}/dice", response_model=SessionResponse)
    def put_dice_config(
        session_id: str,
        payload: DiceConfigRequest,
        local_store: SessionStore = Depends(get_store),
    ) -> SessionResponse:
        config = DicePoolConfig(stats=payload.stats, skills=payload.skills, bonuses=payload.bonuses)
        record = _require(local_store.configure_dice(session_id=session_id, config=config))
        return SessionResponse(state=record.to_dict())

    @app.post("/api/sessions/{session_id}/dice/roll", response_model=SessionResponse)
    def post_session_roll(session_id: str, local_store: SessionStore = Depends(get_store)) -> SessionResponse:
        record = _require(local_store.roll_dice(session_id=session_id))
        return SessionResponse(state=record.to_dict())

    @app.get("/api/pool", response_model=PoolResponse)
    def get_pool(successes: int = Query(default=0, ge=0, le=MAX_PENDING_SUCCESSES)) -> PoolResponse:
        with rng_lock:
            tokens = generate_token_pool(successes, stateless_rng)
        return PoolResponse(tokens=[token.to_dict() for token in tokens])

    @app.post("/api/dice/roll", response_model=RollResponse)
    def post_roll(payload: DiceConfigRequest) -> RollResponse:
        config = DicePoolConfig(stats=payload.stats, skills=payload.skills, bonuses=payload.bonuses)
        if config.total_dice == 0:
            raise HTTPException(status_code=422, detail="Dice pool is empty")
        with rng_lock:
            result = roll_dice_pool(config, stateless_rng, max_depth=app_settings.max_explosion_depth)
        return RollResponse(config=config.to_dict(), result=result.to_dict())

    return app


app = create_app()
