from collections import Counter
import random

import pytest

from rpgresolve.backend.errors import InvalidInput
from rpgresolve.backend.pool import (
    ADVANCED_POOL,
    drop_first_bad,
    fisher_yates_shuffle,
    generate_token_pool,
    removal_counts,
)


class AlwaysHigh:
    def randint(self, a: int, b: int) -> int:
        return b


class AlwaysLow:
    def randint(self, a: int, b: int) -> int:
        return a


def _composition(tokens, tier=None) -> Counter:
    return Counter(token.outcome for token in tokens if tier is None or token.tier == tier)


@pytest.mark.parametrize("successes, expected", [(0, 10), (1, 9), (2, 8), (3, 7)])
def test_generate_token_pool_length_follows_removal_formula(successes: int, expected: int) -> None:
    tokens = generate_token_pool(successes, random.Random(7))

    assert len(tokens) == expected


@pytest.mark.parametrize("successes", [0, 1, 2, 3])
def test_generate_token_pool_keeps_basic_tier_intact(successes: int) -> None:
    tokens = generate_token_pool(successes, random.Random(successes))

    assert _composition(tokens, "basic") == Counter({"good": 1, "bad": 1, "retry": 2})


def test_generate_token_pool_removes_advanced_bad_before_hard() -> None:
    one = generate_token_pool(1, random.Random(1))
    two = generate_token_pool(2, random.Random(2))
    three = generate_token_pool(3, random.Random(3))

    assert _composition(one, "advanced") == Counter({"good": 2, "bad": 1})
    assert _composition(one, "hard") == Counter({"good": 1, "bad": 1})
    assert _composition(two, "advanced") == Counter({"good": 2})
    assert _composition(two, "hard") == Counter({"good": 1, "bad": 1})
    assert _composition(three, "advanced") == Counter({"good": 2})
    assert _composition(three, "hard") == Counter({"good": 1})


def test_generate_token_pool_with_three_successes_leaves_single_bad_token() -> None:
    tokens = generate_token_pool(3, random.Random(11))

    bad_tokens = [token for token in tokens if token.outcome == "bad"]
    assert len(tokens) == 7
    assert len(bad_tokens) == 1
    assert bad_tokens[0].tier == "basic"


def test_generate_token_pool_ids_are_unique_and_not_shared_between_calls() -> None:
    rng = random.Random(5)
    first = generate_token_pool(0, rng)
    second = generate_token_pool(0, rng)

    first_ids = {token.id for token in first}
    second_ids = {token.id for token in second}
    assert len(first_ids) == len(first)
    assert len(second_ids) == len(second)
    assert first_ids.isdisjoint(second_ids)
    assert all(token.revealed is False for token in first + second)


def test_generate_token_pool_rejects_out_of_range_successes() -> None:
    with pytest.raises(InvalidInput):
        generate_token_pool(4, random.Random(0))
    with pytest.raises(InvalidInput):
        generate_token_pool(-1, random.Random(0))


def test_generate_token_pool_identity_shuffle_keeps_assembly_order() -> None:
    tokens = generate_token_pool(1, AlwaysHigh())

    assert [(token.tier, token.outcome) for token in tokens] == [
        ("basic", "good"),
        ("basic", "bad"),
        ("basic", "retry"),
        ("basic", "retry"),
        ("advanced", "good"),
        ("advanced", "good"),
        ("advanced", "bad"),
        ("hard", "good"),
        ("hard", "bad"),
    ]


def test_removal_counts_split_between_advanced_and_hard() -> None:
    assert removal_counts(0) == (0, 0)
    assert removal_counts(1) == (1, 0)
    assert removal_counts(2) == (2, 0)
    assert removal_counts(3) == (2, 1)


def test_drop_first_bad_preserves_relative_order() -> None:
    pool = [("bad", "x"), ("good", "x"), ("bad", "y"), ("good", "y")]

    assert drop_first_bad(pool, 1) == [("good", "x"), ("bad", "y"), ("good", "y")]
    assert drop_first_bad(ADVANCED_POOL, 0) == list(ADVANCED_POOL)
    assert drop_first_bad(pool, 5) == [("good", "x"), ("good", "y")]


def test_fisher_yates_shuffle_swaps_against_low_draws() -> None:
    assert fisher_yates_shuffle(["a", "b", "c"], AlwaysLow()) == ["b", "c", "a"]
    assert fisher_yates_shuffle(["a", "b", "c"], AlwaysHigh()) == ["a", "b", "c"]
    assert fisher_yates_shuffle([], AlwaysLow()) == []


def test_fisher_yates_shuffle_does_not_mutate_input() -> None:
    items = [1, 2, 3, 4]

    fisher_yates_shuffle(items, random.Random(3))

    assert items == [1, 2, 3, 4]


def test_fisher_yates_shuffle_hits_every_permutation_evenly() -> None:
    rng = random.Random(2024)
    counts = Counter(tuple(fisher_yates_shuffle("abc", rng)) for _ in range(6000))

    assert len(counts) == 6
    assert all(800 <= count <= 1200 for count in counts.values())
