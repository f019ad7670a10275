"""Token pool construction for a single board round."""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar
import uuid

from .models import (
    OUTCOME_BAD,
    OUTCOME_GOOD,
    OUTCOME_RETRY,
    TIER_ADVANCED,
    TIER_BASIC,
    TIER_HARD,
    Token,
    validate_pending_successes,
)
from .rng import RandomSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

BASIC_POOL: tuple[tuple[str, str], ...] = (
    (OUTCOME_GOOD, TIER_BASIC),
    (OUTCOME_BAD, TIER_BASIC),
    (OUTCOME_RETRY, TIER_BASIC),
    (OUTCOME_RETRY, TIER_BASIC),
)
ADVANCED_POOL: tuple[tuple[str, str], ...] = (
    (OUTCOME_GOOD, TIER_ADVANCED),
    (OUTCOME_GOOD, TIER_ADVANCED),
    (OUTCOME_BAD, TIER_ADVANCED),
    (OUTCOME_BAD, TIER_ADVANCED),
)
HARD_POOL: tuple[tuple[str, str], ...] = (
    (OUTCOME_GOOD, TIER_HARD),
    (OUTCOME_BAD, TIER_HARD),
)

ADVANCED_REMOVAL_CAP = 2


def removal_counts(pending_successes: int) -> tuple[int, int]:
    """Return how many bad tokens leave the advanced and hard pools."""
    remove_advanced = min(pending_successes, ADVANCED_REMOVAL_CAP)
    remove_hard = max(0, pending_successes - ADVANCED_REMOVAL_CAP)
    return remove_advanced, remove_hard


def drop_first_bad(pool: Sequence[tuple[str, str]], count: int) -> list[tuple[str, str]]:
    """Drop the first ``count`` bad entries, keeping the rest in order."""
    kept: list[tuple[str, str]] = []
    removed = 0
    for entry in pool:
        if entry[0] == OUTCOME_BAD and removed < count:
            removed += 1
            continue
        kept.append(entry)
    return kept


def fisher_yates_shuffle(items: Sequence[T], rng: RandomSource) -> list[T]:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_token_pool(pending_successes: int, rng: RandomSource) -> tuple[Token, ...]:
    """Build, label and shuffle the tokens for one round.

    Each pending success buys out one bad token, first from the advanced pool
    (at most two) and then from the hard pool. The basic pool never changes.
    """
    validate_pending_successes(pending_successes)
    remove_advanced, remove_hard = removal_counts(pending_successes)

    entries = [
        *BASIC_POOL,
        *drop_first_bad(ADVANCED_POOL, remove_advanced),
        *drop_first_bad(HARD_POOL, remove_hard),
    ]
    batch = uuid.uuid4().hex[:12]
    tokens = [
        Token(id=f"token-{batch}-{index}", outcome=outcome, tier=tier, revealed=False)
        for index, (outcome, tier) in enumerate(entries)
    ]
    logger.debug("Generated %d tokens for %d pending successes", len(tokens), pending_successes)
    return tuple(fisher_yates_shuffle(tokens, rng))
