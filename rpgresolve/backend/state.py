"""State builders for board and dice snapshots."""

from __future__ import annotations

from .models import PHASE_INPUT, ROUND_COUNT, BoardState, DicePoolConfig, DiceState


def build_initial_board_state() -> BoardState:
    """Return the session-start board: round 0, empty history, awaiting input."""
    return BoardState(
        round=0,
        pending_successes=0,
        tokens=(),
        history=(None,) * ROUND_COUNT,
        phase=PHASE_INPUT,
    )


def build_initial_dice_state() -> DiceState:
    return DiceState(config=DicePoolConfig(), result=None)
