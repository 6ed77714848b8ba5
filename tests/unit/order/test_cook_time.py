from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from tableorder.domain.kitchen.cook_time import CookTimeGenerator, CookTimeRangeError


def test_generated_values_stay_within_inclusive_bounds() -> None:
    generator = CookTimeGenerator(5, 15, rng=random.Random(1234))

    values = {generator.generate() for _ in range(2000)}

    assert values == set(range(5, 16))


def test_degenerate_range_always_returns_the_single_value() -> None:
    generator = CookTimeGenerator(7, 7)

    assert {generator.generate() for _ in range(50)} == {7}


def test_inverted_range_is_rejected_at_construction() -> None:
    with pytest.raises(CookTimeRangeError):
        CookTimeGenerator(16, 15)


def test_negative_minimum_is_rejected() -> None:
    with pytest.raises(CookTimeRangeError):
        CookTimeGenerator(-1, 15)


def test_bounds_are_exposed() -> None:
    generator = CookTimeGenerator(3, 9)
    assert (generator.minimum, generator.maximum) == (3, 9)
