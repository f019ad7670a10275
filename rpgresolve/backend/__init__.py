"""Backend package for the RPG resolution engines."""

from .config import ResolutionSettings, configure_logging, load_settings
from .dice import configure_dice, roll_dice, roll_dice_pool, set_dice_axis, toggle_dice_axis
from .engine import ActionResult, advance_phase, apply_board_action, reset_board, reveal_token, set_pending_successes, start_round
from .errors import InvalidInput, InvalidTransition, ResolutionError
from .models import BoardState, DicePoolConfig, DiceState, RollResult, Token, classify_successes
from .pool import generate_token_pool
from .rng import RandomSource, create_random_source
from .state import build_initial_board_state, build_initial_dice_state
from .store import InMemorySessionStore, SessionStore, create_store

__all__ = [
    "ActionResult",
    "advance_phase",
    "apply_board_action",
    "BoardState",
    "build_initial_board_state",
    "build_initial_dice_state",
    "classify_successes",
    "configure_dice",
    "configure_logging",
    "create_random_source",
    "create_store",
    "DicePoolConfig",
    "DiceState",
    "generate_token_pool",
    "InMemorySessionStore",
    "InvalidInput",
    "InvalidTransition",
    "load_settings",
    "RandomSource",
    "ResolutionError",
    "ResolutionSettings",
    "reset_board",
    "reveal_token",
    "roll_dice",
    "roll_dice_pool",
    "RollResult",
    "SessionStore",
    "set_dice_axis",
    "set_pending_successes",
    "start_round",
    "toggle_dice_axis",
    "Token",
]
