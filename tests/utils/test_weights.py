"""Tests for weight rounding and continuation multipliers."""

import pytest

from train.utils.weights import (
    DELOAD_MULTIPLIER,
    back_off_multiplier,
    back_off_weight,
    deload_weight,
    round_half_up,
    round_to_plate,
)


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-1.5, -2), (7.8, 8)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


@pytest.mark.parametrize("weight,expected", [(101.0, 100.0), (101.25, 102.5), (103.6, 102.5), (0.0, 0.0)])
def test_round_to_plate(weight: float, expected: float) -> None:
    assert round_to_plate(weight) == expected


def test_custom_increment() -> None:
    assert round_to_plate(52.0, increment=5) == 50


def test_invalid_increment() -> None:
    with pytest.raises(ValueError):
        round_to_plate(100.0, increment=0)


def test_back_off_multiplier() -> None:
    assert back_off_multiplier(4) == 0.93
    assert back_off_multiplier(8) == 0.90


def test_back_off_weight() -> None:
    """200 x 0.90 = 180; 200 x 0.93 = 186 -> 185."""
    assert back_off_weight(200.0, 8) == 180.0
    assert back_off_weight(200.0, 4) == 185.0


def test_deload() -> None:
    assert DELOAD_MULTIPLIER == 0.5
    assert deload_weight(185.0) == 92.5
    assert deload_weight(135.0) == 67.5
