"""Reducer and engine helpers for the reveal board."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Any

from .errors import InvalidInput, InvalidTransition
from .models import (
    OUTCOME_RETRY,
    PHASE_END,
    PHASE_INPUT,
    PHASE_PLAYING,
    PHASE_SUMMARY,
    ROUND_COUNT,
    BoardState,
    validate_pending_successes,
)
from .pool import generate_token_pool
from .rng import RandomSource
from .state import build_initial_board_state

logger = logging.getLogger(__name__)

LAST_ROUND = ROUND_COUNT - 1


@dataclass(frozen=True)
class ActionResult:
    state: BoardState
    engine_events: list[dict[str, Any]]


def apply_board_action(state: BoardState, action: dict[str, Any], rng: RandomSource) -> ActionResult:
    """Apply a board action and report what happened."""
    action_type = str(action.get("type", "")).upper()
    if action_type == "START_ROUND":
        return _apply_start_round(state=state, rng=rng)
    if action_type == "REVEAL_TOKEN":
        return _apply_reveal(state=state, action=action)
    if action_type == "ADVANCE_PHASE":
        return _apply_advance(state=state)
    if action_type == "RESET":
        return ActionResult(state=reset_board(), engine_events=[{"kind": "board_reset"}])
    if action_type == "SET_SUCCESSES":
        return _apply_set_successes(state=state, action=action)
    raise InvalidInput(f"unknown board action type {action.get('type')!r}")


def set_pending_successes(state: BoardState, value: int) -> BoardState:
    if state.phase != PHASE_INPUT:
        raise InvalidTransition("set_pending_successes", state.phase)
    return replace(state, pending_successes=validate_pending_successes(value))


def start_round(state: BoardState, rng: RandomSource) -> BoardState:
    if state.phase != PHASE_INPUT:
        raise InvalidTransition("start_round", state.phase)
    tokens = generate_token_pool(state.pending_successes, rng)
    logger.debug("Round %d started with %d tokens", state.round, len(tokens))
    return replace(state, tokens=tokens, phase=PHASE_PLAYING)


def reveal_token(state: BoardState, token_id: str) -> BoardState:
    """Reveal one token; revisiting a token or clicking outside play is a no-op."""
    if state.phase != PHASE_PLAYING:
        return state
    token = state.find_token(token_id)
    if token is None or token.revealed:
        return state

    tokens = tuple(replace(t, revealed=True) if t.id == token_id else t for t in state.tokens)
    if token.outcome == OUTCOME_RETRY:
        return replace(state, tokens=tokens)

    history = list(state.history)
    history[state.round] = token.outcome
    logger.debug("Round %d resolved as %s", state.round, token.outcome)
    return replace(state, tokens=tokens, history=tuple(history), phase=PHASE_SUMMARY)


def advance_phase(state: BoardState) -> BoardState:
    if state.phase != PHASE_SUMMARY:
        raise InvalidTransition("advance_phase", state.phase)
    if state.round >= LAST_ROUND:
        return replace(state, tokens=(), phase=PHASE_END)
    return replace(state, round=state.round + 1, pending_successes=0, tokens=(), phase=PHASE_INPUT)


def reset_board() -> BoardState:
    return build_initial_board_state()


def _phase_event(before: BoardState, after: BoardState) -> dict[str, Any]:
    return {"kind": "phase_changed", "from": before.phase, "to": after.phase, "round": after.round}


def _apply_set_successes(state: BoardState, action: dict[str, Any]) -> ActionResult:
    next_state = set_pending_successes(state, action.get("successes"))
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "successes_set", "successes": next_state.pending_successes}],
    )


def _apply_start_round(state: BoardState, rng: RandomSource) -> ActionResult:
    next_state = start_round(state, rng)
    return ActionResult(
        state=next_state,
        engine_events=[
            {
                "kind": "round_started",
                "round": next_state.round,
                "pendingSuccesses": next_state.pending_successes,
                "poolSize": len(next_state.tokens),
            },
            _phase_event(state, next_state),
        ],
    )


def _apply_reveal(state: BoardState, action: dict[str, Any]) -> ActionResult:
    token_id = action.get("tokenId")
    if not isinstance(token_id, str) or token_id == "":
        return ActionResult(state=state, engine_events=[])

    next_state = reveal_token(state, token_id)
    if next_state is state:
        return ActionResult(state=state, engine_events=[])

    token = next(t for t in next_state.tokens if t.id == token_id)
    events: list[dict[str, Any]] = [
        {"kind": "token_revealed", "tokenId": token_id, "outcome": token.outcome, "tier": token.tier}
    ]
    if next_state.phase == PHASE_SUMMARY:
        events.append({"kind": "round_resolved", "round": next_state.round, "outcome": next_state.history[next_state.round]})
        events.append(_phase_event(state, next_state))
    return ActionResult(state=next_state, engine_events=events)


def _apply_advance(state: BoardState) -> ActionResult:
    next_state = advance_phase(state)
    events: list[dict[str, Any]] = [_phase_event(state, next_state)]
    if next_state.phase == PHASE_END:
        events.append({"kind": "game_over", "verdict": next_state.verdict, "history": list(next_state.history)})
    return ActionResult(state=next_state, engine_events=events)
