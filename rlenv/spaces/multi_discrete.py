"""Cartesian product of independent Discrete spaces."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from ..core.constants import DEFAULT_MULTI_DISCRETE_DTYPE, SUPPORTED_INT_DTYPES
from ..core.enums import SpaceKind
from ..utils.exceptions import ValidationError
from .discrete import Discrete
from .space import Space, matches_array_signature


class MultiDiscrete(Space[NDArray[np.integer]]):
    """Element ``i`` takes values in ``{start[i], ..., start[i] + nvec[i] - 1}``.

    ``nvec`` may be multi-dimensional; the space shape is ``nvec.shape``.

    Example::

        >>> space = MultiDiscrete([5, 2, 2])
        >>> space.contains(np.array([4, 0, 1]))
        True
    """

    kind = SpaceKind.MULTI_DISCRETE

    def __init__(
        self,
        nvec: Union[Sequence[int], NDArray[np.integer]],
        start: Optional[Union[Sequence[int], NDArray[np.integer]]] = None,
        dtype: Any = DEFAULT_MULTI_DISCRETE_DTYPE,
        seed: Optional[int] = None,
    ):
        resolved_dtype = np.dtype(dtype)
        if resolved_dtype not in SUPPORTED_INT_DTYPES:
            raise ValidationError(
                f"MultiDiscrete dtype must be an integer dtype, got {resolved_dtype}",
                parameter_name="dtype",
                parameter_value=dtype,
                expected_format="integer numpy dtype",
            )

        nvec_array = np.asarray(nvec)
        if nvec_array.size and not np.issubdtype(nvec_array.dtype, np.integer):
            raise ValidationError(
                "nvec must contain integers",
                parameter_name="nvec",
                parameter_value=nvec,
                expected_format="array of positive integers",
            )
        nvec_array = nvec_array.astype(np.int64)
        if np.any(nvec_array <= 0):
            raise ValidationError(
                "nvec (counts) have to be positive",
                parameter_name="nvec",
                parameter_value=nvec,
                expected_format="array of positive integers",
            )

        if start is None:
            start_array = np.zeros(nvec_array.shape, dtype=np.int64)
        else:
            start_array = np.asarray(start)
            if start_array.size and not np.issubdtype(start_array.dtype, np.integer):
                raise ValidationError(
                    "start must contain integers",
                    parameter_name="start",
                    parameter_value=start,
                    expected_format="integer array",
                )
            if start_array.shape != nvec_array.shape:
                raise ValidationError(
                    f"start has shape {start_array.shape}, expected {nvec_array.shape}",
                    parameter_name="start",
                    parameter_value=start,
                    expected_format=f"integer array of shape {nvec_array.shape}",
                )
            start_array = start_array.astype(np.int64)

        info = np.iinfo(resolved_dtype)
        if (
            np.any(nvec_array > info.max)
            or np.any(start_array < info.min)
            or np.any(start_array + nvec_array - 1 > info.max)
        ):
            raise ValidationError(
                f"nvec and the values start..start + nvec - 1 must fit in {resolved_dtype}",
                parameter_name="start",
                parameter_value=start,
                expected_format=f"ranges within [{info.min}, {info.max}]",
            )

        self.nvec = nvec_array.astype(resolved_dtype)
        self.start = start_array.astype(resolved_dtype)
        super().__init__(nvec_array.shape, resolved_dtype, seed)

    def sample(self) -> NDArray[np.integer]:
        # floor(U * n) lies in [0, n); the clamp absorbs rounding at U -> 1
        offsets = np.floor(self.np_random.random(self.shape) * self.nvec)
        offsets = np.minimum(offsets, self.nvec - 1)
        return (offsets.astype(self.dtype) + self.start).astype(self.dtype)

    def contains(self, x: Any) -> bool:
        if not matches_array_signature(x, self.shape, self.dtype):
            return False
        # Widen first so the subtraction cannot wrap in a narrow dtype
        offsets = x.astype(np.int64) - self.start.astype(np.int64)
        return bool(np.all(offsets >= 0) and np.all(offsets < self.nvec))

    def __getitem__(self, index: Any) -> Union["MultiDiscrete", Discrete]:
        """Return the Discrete space at ``index`` or a sliced MultiDiscrete."""
        nvec = self.nvec[index]
        start = self.start[index]
        if nvec.ndim == 0:
            sub_space: Union[MultiDiscrete, Discrete] = Discrete(int(nvec), start=int(start))
        else:
            sub_space = MultiDiscrete(nvec, start=start, dtype=self.dtype)
        sub_space.np_random.bit_generator.state = self.np_random.bit_generator.state
        return sub_space

    def __len__(self) -> int:
        if self.nvec.ndim >= 2:
            raise TypeError("len() of a multi-dimensional MultiDiscrete is ambiguous")
        return len(self.nvec)

    def __repr__(self) -> str:
        if np.any(self.start != 0):
            return f"MultiDiscrete({self.nvec}, start={self.start})"
        return f"MultiDiscrete({self.nvec})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, MultiDiscrete)
            and self.dtype == other.dtype
            and self.shape == other.shape
            and np.array_equal(self.nvec, other.nvec)
            and np.array_equal(self.start, other.start)
        )
