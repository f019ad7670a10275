"""Domain snapshots for the reveal board and the dice pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidInput

OUTCOME_GOOD = "good"
OUTCOME_BAD = "bad"
OUTCOME_RETRY = "retry"
OUTCOMES = (OUTCOME_GOOD, OUTCOME_BAD, OUTCOME_RETRY)

TIER_BASIC = "basic"
TIER_ADVANCED = "advanced"
TIER_HARD = "hard"
TIERS = (TIER_BASIC, TIER_ADVANCED, TIER_HARD)

PHASE_INPUT = "input"
PHASE_PLAYING = "playing"
PHASE_SUMMARY = "summary"
PHASE_END = "end"
PHASES = (PHASE_INPUT, PHASE_PLAYING, PHASE_SUMMARY, PHASE_END)

ROUND_COUNT = 3
MAX_PENDING_SUCCESSES = 3
VICTORY_THRESHOLD = 2

DICE_AXES = ("stats", "skills", "bonuses")
MAX_AXIS_VALUE = 5
SUCCESS_THRESHOLD = 8
EXPLODING_FACE = 10
EXCEPTIONAL_THRESHOLD = 5

VERDICT_VICTORY = "victory"
VERDICT_DEFEAT = "defeat"

ROLL_FAILURE = "failure"
ROLL_SUCCESS = "success"
ROLL_EXCEPTIONAL = "exceptional_success"


def validate_pending_successes(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"pending successes must be an integer, got {value!r}")
    if not 0 <= value <= MAX_PENDING_SUCCESSES:
        raise InvalidInput(f"pending successes must be in [0, {MAX_PENDING_SUCCESSES}], got {value}")
    return value


def validate_axis_value(axis: str, value: int) -> int:
    if axis not in DICE_AXES:
        raise InvalidInput(f"unknown dice axis {axis!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{axis} must be an integer, got {value!r}")
    if not 0 <= value <= MAX_AXIS_VALUE:
        raise InvalidInput(f"{axis} must be in [0, {MAX_AXIS_VALUE}], got {value}")
    return value


def classify_successes(total_successes: int) -> str:
    """Map a success count to failure, success or exceptional success."""
    if total_successes <= 0:
        return ROLL_FAILURE
    if total_successes >= EXCEPTIONAL_THRESHOLD:
        return ROLL_EXCEPTIONAL
    return ROLL_SUCCESS


@dataclass(frozen=True)
class Token:
    id: str
    outcome: str
    tier: str
    revealed: bool = False

    def __post_init__(self) -> None:
        if self.outcome not in OUTCOMES:
            raise InvalidInput(f"unknown token outcome {self.outcome!r}")
        if self.tier not in TIERS:
            raise InvalidInput(f"unknown token tier {self.tier!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "outcome": self.outcome, "tier": self.tier, "revealed": self.revealed}


@dataclass(frozen=True)
class BoardState:
    round: int
    pending_successes: int
    tokens: tuple[Token, ...]
    history: tuple[str | None, ...]
    phase: str

    def __post_init__(self) -> None:
        if self.phase not in PHASES:
            raise InvalidInput(f"unknown board phase {self.phase!r}")

    def find_token(self, token_id: str) -> Token | None:
        for token in self.tokens:
            if token.id == token_id:
                return token
        return None

    @property
    def good_count(self) -> int:
        return sum(1 for entry in self.history if entry == OUTCOME_GOOD)

    @property
    def verdict(self) -> str | None:
        """Victory or defeat once all rounds are played, otherwise None."""
        if self.phase != PHASE_END:
            return None
        return VERDICT_VICTORY if self.good_count >= VICTORY_THRESHOLD else VERDICT_DEFEAT

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round,
            "pendingSuccesses": self.pending_successes,
            "tokens": [token.to_dict() for token in self.tokens],
            "history": list(self.history),
            "phase": self.phase,
            "verdict": self.verdict,
        }


@dataclass(frozen=True)
class DicePoolConfig:
    stats: int = 0
    skills: int = 0
    bonuses: int = 0

    def __post_init__(self) -> None:
        for axis in DICE_AXES:
            validate_axis_value(axis, getattr(self, axis))

    @property
    def total_dice(self) -> int:
        return self.stats + self.skills + self.bonuses

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.stats,
            "skills": self.skills,
            "bonuses": self.bonuses,
            "totalDice": self.total_dice,
        }


@dataclass(frozen=True)
class RollResult:
    rolls: tuple[int, ...]
    total_successes: int

    @property
    def outcome(self) -> str:
        return classify_successes(self.total_successes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rolls": list(self.rolls),
            "totalSuccesses": self.total_successes,
            "outcome": self.outcome,
        }


@dataclass(frozen=True)
class DiceState:
    config: DicePoolConfig
    result: RollResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "result": self.result.to_dict() if self.result is not None else None,
        }


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    board: BoardState
    dice: DiceState

    def to_dict(self) -> dict[str, Any]:
        return {"sessionId": self.session_id, "board": self.board.to_dict(), "dice": self.dice.to_dict()}
