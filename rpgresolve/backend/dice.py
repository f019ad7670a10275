"""Exploding d10 pool roller and dice session helpers."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
import logging

from .errors import InvalidInput
from .models import (
    EXPLODING_FACE,
    SUCCESS_THRESHOLD,
    DicePoolConfig,
    DiceState,
    RollResult,
    validate_axis_value,
)
from .rng import RandomSource

logger = logging.getLogger(__name__)

DIE_FACES = 10
DEFAULT_MAX_EXPLOSION_DEPTH = 100


def roll_dice_pool(
    config: DicePoolConfig,
    rng: RandomSource,
    max_depth: int | None = DEFAULT_MAX_EXPLOSION_DEPTH,
) -> RollResult:
    """Roll the configured pool, re-rolling one extra die for every 10.

    Dice of one depth are appended before any die they trigger. ``max_depth``
    caps how many explosion waves follow the initial roll; ``None`` removes
    the cap.
    """
    if config.total_dice <= 0:
        raise InvalidInput("cannot roll an empty dice pool")
    if max_depth is not None and max_depth < 0:
        raise InvalidInput(f"explosion depth guard must be >= 0, got {max_depth}")

    rolls: list[int] = []
    total_successes = 0
    pending: deque[tuple[int, int]] = deque([(config.total_dice, 0)])
    while pending:
        count, depth = pending.popleft()
        explosions = 0
        for _ in range(count):
            value = rng.randint(1, DIE_FACES)
            rolls.append(value)
            if value >= SUCCESS_THRESHOLD:
                total_successes += 1
            if value == EXPLODING_FACE:
                explosions += 1
        if explosions == 0:
            continue
        if max_depth is not None and depth >= max_depth:
            logger.warning("Explosion depth guard hit at depth %d; %d dice not rolled", depth, explosions)
            continue
        pending.append((explosions, depth + 1))

    logger.debug("Rolled %d dice for a pool of %d: %d successes", len(rolls), config.total_dice, total_successes)
    return RollResult(rolls=tuple(rolls), total_successes=total_successes)


def set_dice_axis(config: DicePoolConfig, axis: str, value: int) -> DicePoolConfig:
    validate_axis_value(axis, value)
    return replace(config, **{axis: value})


def toggle_dice_axis(config: DicePoolConfig, axis: str, value: int) -> DicePoolConfig:
    """Select ``value`` on an axis; selecting the current value clears it."""
    validate_axis_value(axis, value)
    if getattr(config, axis) == value:
        return replace(config, **{axis: 0})
    return replace(config, **{axis: value})


def configure_dice(state: DiceState, config: DicePoolConfig) -> DiceState:
    if config == state.config:
        return state
    return DiceState(config=config, result=None)


def roll_dice(
    state: DiceState,
    rng: RandomSource,
    max_depth: int | None = DEFAULT_MAX_EXPLOSION_DEPTH,
) -> DiceState:
    if state.config.total_dice == 0:
        return state
    return DiceState(config=state.config, result=roll_dice_pool(state.config, rng, max_depth=max_depth))
