from __future__ import annotations

import random


class CookTimeRangeError(ValueError):
    pass


class CookTimeGenerator:
    """Draws cook times, in minutes, uniformly from ``[minimum, maximum]``.

    Bounds are fixed at construction; an inverted or negative range is
    rejected immediately so a bad configuration never reaches a request.
    """

    def __init__(self, minimum: int, maximum: int, rng: random.Random | None = None) -> None:
        if minimum < 0:
            raise CookTimeRangeError(f"cook time minimum must be >= 0, got {minimum}")
        if minimum > maximum:
            raise CookTimeRangeError(
                f"cook time minimum {minimum} is greater than maximum {maximum}"
            )
        self._minimum = minimum
        self._maximum = maximum
        self._rng = rng or random.Random()

    @property
    def minimum(self) -> int:
        return self._minimum

    @property
    def maximum(self) -> int:
        return self._maximum

    def generate(self) -> int:
        return self._rng.randint(self._minimum, self._maximum)
