"""Finite space of consecutive integers."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..core.constants import DISCRETE_DTYPE
from ..core.enums import SpaceKind
from ..utils.exceptions import ValidationError
from .space import Space, is_integer_scalar


class Discrete(Space[np.int64]):
    """The integers ``{start, start + 1, ..., start + n - 1}``.

    Example::

        >>> space = Discrete(5, start=-2)
        >>> space.contains(-2), space.contains(3)
        (True, False)
    """

    kind = SpaceKind.DISCRETE

    def __init__(self, n: int, start: int = 0, seed: Optional[int] = None):
        if not is_integer_scalar(n):
            raise ValidationError(
                f"n must be an integer, got {type(n).__name__}",
                parameter_name="n",
                parameter_value=n,
                expected_format="positive integer",
            )
        if n <= 0:
            raise ValidationError(
                f"The number of discrete elements must be positive, got {n}",
                parameter_name="n",
                parameter_value=n,
                expected_format="positive integer",
            )
        if not is_integer_scalar(start):
            raise ValidationError(
                f"start must be an integer, got {type(start).__name__}",
                parameter_name="start",
                parameter_value=start,
                expected_format="integer",
            )
        self.n = int(n)
        self.start = int(start)
        super().__init__((), DISCRETE_DTYPE, seed)

    def sample(self) -> np.int64:
        return np.int64(self.start + self.np_random.integers(self.n))

    def contains(self, x: Any) -> bool:
        if is_integer_scalar(x):
            value = int(x)
        elif (
            isinstance(x, np.ndarray)
            and x.shape == ()
            and np.issubdtype(x.dtype, np.integer)
        ):
            value = int(x)
        else:
            return False
        return self.start <= value < self.start + self.n

    def __repr__(self) -> str:
        if self.start != 0:
            return f"Discrete({self.n}, start={self.start})"
        return f"Discrete({self.n})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Discrete)
            and self.n == other.n
            and self.start == other.start
        )
