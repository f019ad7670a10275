import random

import pytest

from rpgresolve.backend.dice import (
    configure_dice,
    roll_dice,
    roll_dice_pool,
    set_dice_axis,
    toggle_dice_axis,
)
from rpgresolve.backend.errors import InvalidInput
from rpgresolve.backend.models import DicePoolConfig, DiceState, RollResult, classify_successes


class ScriptedRandom:
    def __init__(self, values: list[int]) -> None:
        self._values = list(values)

    def randint(self, a: int, b: int) -> int:
        assert (a, b) == (1, 10)
        return self._values.pop(0)


def test_roll_dice_pool_without_tens_rolls_configured_dice_once() -> None:
    result = roll_dice_pool(DicePoolConfig(stats=2, skills=1), ScriptedRandom([3, 8, 9]))

    assert result.rolls == (3, 8, 9)
    assert result.total_successes == 2
    assert result.outcome == "success"


def test_roll_dice_pool_explodes_recursively_on_tens() -> None:
    result = roll_dice_pool(DicePoolConfig(bonuses=2), ScriptedRandom([10, 5, 10, 2]))

    assert result.rolls == (10, 5, 10, 2)
    assert result.total_successes == 2


def test_roll_dice_pool_appends_each_wave_after_the_previous_one() -> None:
    scripted = ScriptedRandom([10, 10, 1, 4, 10, 9])

    result = roll_dice_pool(DicePoolConfig(stats=3), scripted)

    assert result.rolls == (10, 10, 1, 4, 10, 9)
    assert result.total_successes == 4
    assert len(result.rolls) - 3 == result.rolls.count(10)


def test_roll_dice_pool_depth_guard_stops_further_waves() -> None:
    result = roll_dice_pool(DicePoolConfig(stats=1), ScriptedRandom([10, 10, 3]), max_depth=1)

    assert result.rolls == (10, 10)
    assert result.total_successes == 2


def test_roll_dice_pool_depth_guard_zero_skips_all_explosions() -> None:
    result = roll_dice_pool(DicePoolConfig(stats=1), ScriptedRandom([10]), max_depth=0)

    assert result.rolls == (10,)


def test_roll_dice_pool_rejects_empty_pool() -> None:
    with pytest.raises(InvalidInput):
        roll_dice_pool(DicePoolConfig(), ScriptedRandom([]))


def test_roll_dice_pool_extra_rolls_match_tens_rolled() -> None:
    rng = random.Random(42)
    for total in range(1, 16):
        config = DicePoolConfig(stats=min(total, 5), skills=min(max(total - 5, 0), 5), bonuses=max(total - 10, 0))
        result = roll_dice_pool(config, rng, max_depth=None)

        assert len(result.rolls) >= config.total_dice
        assert len(result.rolls) - config.total_dice == result.rolls.count(10)
        assert all(1 <= value <= 10 for value in result.rolls)
        assert result.total_successes == sum(1 for value in result.rolls if value >= 8)


@pytest.mark.parametrize(
    "successes, outcome",
    [(0, "failure"), (1, "success"), (4, "success"), (5, "exceptional_success"), (9, "exceptional_success")],
)
def test_classify_successes_boundaries(successes: int, outcome: str) -> None:
    assert classify_successes(successes) == outcome
    assert RollResult(rolls=(), total_successes=successes).outcome == outcome


def test_dice_pool_config_rejects_out_of_range_axes() -> None:
    with pytest.raises(InvalidInput):
        DicePoolConfig(stats=6)
    with pytest.raises(InvalidInput):
        DicePoolConfig(skills=-1)
    assert DicePoolConfig(stats=5, skills=5, bonuses=5).total_dice == 15


def test_set_and_toggle_dice_axis() -> None:
    config = set_dice_axis(DicePoolConfig(), "skills", 3)

    assert config == DicePoolConfig(skills=3)
    assert toggle_dice_axis(config, "skills", 4) == DicePoolConfig(skills=4)
    assert toggle_dice_axis(config, "skills", 3) == DicePoolConfig()
    with pytest.raises(InvalidInput):
        set_dice_axis(config, "luck", 1)
    with pytest.raises(InvalidInput):
        toggle_dice_axis(config, "stats", 6)


def test_configure_dice_clears_previous_result() -> None:
    state = DiceState(config=DicePoolConfig(stats=1), result=RollResult(rolls=(9,), total_successes=1))

    assert configure_dice(state, DicePoolConfig(stats=1)) is state
    assert configure_dice(state, DicePoolConfig(stats=2)) == DiceState(config=DicePoolConfig(stats=2), result=None)


def test_roll_dice_is_noop_on_empty_pool() -> None:
    state = DiceState(config=DicePoolConfig())

    assert roll_dice(state, ScriptedRandom([])) is state


def test_roll_dice_stores_result_for_current_config() -> None:
    state = DiceState(config=DicePoolConfig(stats=1, bonuses=1))

    next_state = roll_dice(state, ScriptedRandom([8, 2]))

    assert next_state.config == state.config
    assert next_state.result == RollResult(rolls=(8, 2), total_successes=1)


def test_roll_dice_pool_rejects_negative_depth_guard() -> None:
    scripted = ScriptedRandom([10, 4])

    with pytest.raises(InvalidInput):
        roll_dice_pool(DicePoolConfig(stats=1), scripted, max_depth=-3)
    assert scripted.randint(1, 10) == 10
