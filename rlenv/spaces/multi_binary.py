"""Fixed-shape binary arrays."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from ..core.constants import MULTI_BINARY_DTYPE
from ..core.enums import SpaceKind
from ..utils.exceptions import ValidationError
from .space import Space, matches_array_signature


class MultiBinary(Space[NDArray[np.int8]]):
    """Arrays of 0/1 values; ``n`` is either a length or a full shape."""

    kind = SpaceKind.MULTI_BINARY

    def __init__(
        self,
        n: Union[int, Sequence[int], NDArray[np.integer]],
        seed: Optional[int] = None,
    ):
        if isinstance(n, (int, np.integer)) and not isinstance(n, (bool, np.bool_)):
            shape = (int(n),)
        elif isinstance(n, (list, tuple, np.ndarray)):
            shape = tuple(np.asarray(n).tolist())
        else:
            raise ValidationError(
                f"n must be an integer or a shape, got {type(n).__name__}",
                parameter_name="n",
                parameter_value=n,
                expected_format="positive integer or sequence of positive integers",
            )
        if not shape or any(
            isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0
            for dim in shape
        ):
            raise ValidationError(
                f"n (counts) have to be positive, got {n!r}",
                parameter_name="n",
                parameter_value=n,
                expected_format="positive integer or sequence of positive integers",
            )
        self.n = n
        super().__init__(shape, MULTI_BINARY_DTYPE, seed)

    def sample(self) -> NDArray[np.int8]:
        return self.np_random.integers(0, 2, size=self.shape, dtype=self.dtype)

    def contains(self, x: Any) -> bool:
        if not matches_array_signature(x, self.shape, self.dtype):
            return False
        return bool(np.all((x == 0) | (x == 1)))

    def __repr__(self) -> str:
        return f"MultiBinary({self.n})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, MultiBinary) and self.shape == other.shape
