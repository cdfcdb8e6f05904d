"""
Box space: the Cartesian product of closed intervals.

Bounds come in exactly two representations, modelled as a tagged union:

- :class:`ScalarBounds`: one ``low`` and one ``high`` number broadcast to
  every element of ``shape``;
- :class:`ArrayBounds`: per-element ``low``/``high`` arrays whose shape is
  the Box shape.

Either side of an element may be infinite. Sampling classifies every element
into one of four regimes (see :class:`rlenv.core.enums.Boundedness`):

=================  ==========================================
unbounded          standard normal
bounded            ``low + U * (high - low)``
bounded below      ``low + Exp(1)``, ``Exp(1) = -ln(U)``
bounded above      ``high - Exp(1)``
=================  ==========================================

All four draws are computed over the full shape and merged per element by
the classification masks, so mixed boundedness needs no per-element branch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from ..core.constants import DEFAULT_BOX_DTYPE, SUPPORTED_DTYPES
from ..core.enums import Boundedness, SpaceKind
from ..utils.exceptions import ValidationError
from .space import Space, _validate_shape, matches_array_signature

__all__ = ["Box", "ScalarBounds", "ArrayBounds", "BoxBounds"]


@dataclass(frozen=True)
class ScalarBounds:
    """One lower and one upper bound shared by every element."""

    low: Union[int, float]
    high: Union[int, float]

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.low) and np.isfinite(self.high))


@dataclass(frozen=True, eq=False)
class ArrayBounds:
    """Per-element lower and upper bounds with the Box's shape."""

    low: NDArray[Any]
    high: NDArray[Any]


BoxBounds = Union[ScalarBounds, ArrayBounds]


def _is_scalar_bound(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, (bool, np.bool_)
    )


def _is_array_bound(value: Any) -> bool:
    return isinstance(value, (np.ndarray, list, tuple))


class Box(Space[NDArray[Any]]):
    """A (possibly unbounded) box in :math:`\\mathbb{R}^n` or :math:`\\mathbb{Z}^n`.

    Parameters
    ----------
    low, high : number | array-like
        Both scalars or both arrays. Infinite values mark unbounded sides.
    shape : Sequence[int] | None
        Required for scalar bounds; defaults to the bound arrays' shape.
    dtype : numpy dtype-like
        A floating or integer dtype (default ``float32``).
    seed : int | None
        Seed for the sampling generator.

    Raises
    ------
    ValidationError
        If the bound representations differ, an array bound does not have the
        Box shape, a bound is NaN, or ``high < low`` anywhere.

    Example::

        >>> Box(0.0, 1.0, shape=(2,)).contains(np.array([0.5, 1.0], dtype=np.float32))
        True
        >>> Box(np.array([-np.inf]), np.array([0.0])).sample() <= 0
        array([ True])
    """

    kind = SpaceKind.BOX

    def __init__(
        self,
        low: Union[float, int, Sequence[Any], NDArray[Any]],
        high: Union[float, int, Sequence[Any], NDArray[Any]],
        shape: Optional[Sequence[int]] = None,
        dtype: Any = DEFAULT_BOX_DTYPE,
        seed: Optional[int] = None,
    ):
        try:
            resolved_dtype = np.dtype(dtype)
        except TypeError:
            raise ValidationError(
                f"dtype {dtype!r} is not a numpy dtype",
                parameter_name="dtype",
                parameter_value=dtype,
                expected_format="numeric numpy dtype",
            ) from None
        if resolved_dtype not in SUPPORTED_DTYPES:
            raise ValidationError(
                f"Box dtype must be a floating or integer dtype, got {resolved_dtype}",
                parameter_name="dtype",
                parameter_value=dtype,
                expected_format="one of " + ", ".join(str(d) for d in SUPPORTED_DTYPES),
            )

        if _is_scalar_bound(low) and _is_scalar_bound(high):
            if shape is None:
                raise ValidationError(
                    "shape must be provided when low and high are scalars",
                    parameter_name="shape",
                    parameter_value=shape,
                    expected_format="tuple of non-negative integers",
                )
            box_shape = _validate_shape(shape)
            self._bounds: BoxBounds = _build_scalar_bounds(low, high, resolved_dtype)
        elif _is_array_bound(low) and _is_array_bound(high):
            low_array = np.asarray(low)
            high_array = np.asarray(high)
            box_shape = (
                low_array.shape if shape is None else _validate_shape(shape)
            )
            if low_array.shape != box_shape:
                raise ValidationError(
                    f"Low should have the same shape as Box! low.shape={low_array.shape}, shape={box_shape}",
                    parameter_name="low",
                    parameter_value=low_array.shape,
                    expected_format=f"array of shape {box_shape}",
                )
            if high_array.shape != box_shape:
                raise ValidationError(
                    f"High should have the same shape as Box! high.shape={high_array.shape}, shape={box_shape}",
                    parameter_name="high",
                    parameter_value=high_array.shape,
                    expected_format=f"array of shape {box_shape}",
                )
            self._bounds = _build_array_bounds(low_array, high_array, resolved_dtype)
        else:
            raise ValidationError(
                "Low and high should be of the same type! "
                f"Got {type(low).__name__} and {type(high).__name__}",
                parameter_name="low/high",
                parameter_value=(type(low).__name__, type(high).__name__),
                expected_format="two scalars or two arrays",
            )

        super().__init__(box_shape, resolved_dtype, seed)

    # ------------------------------------------------------------------
    # Bounds accessors
    # ------------------------------------------------------------------
    @property
    def bounds(self) -> BoxBounds:
        """The tagged bound representation."""
        return self._bounds

    @property
    def low(self) -> Union[int, float, NDArray[Any]]:
        return self._bounds.low

    @property
    def high(self) -> Union[int, float, NDArray[Any]]:
        return self._bounds.high

    @property
    def has_elementwise_bounds(self) -> bool:
        return True

    def broadcast_bounds(self) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return ``(low, high)`` as float64 arrays of the Box shape."""
        low = np.broadcast_to(np.asarray(self._bounds.low, dtype=np.float64), self.shape)
        high = np.broadcast_to(
            np.asarray(self._bounds.high, dtype=np.float64), self.shape
        )
        return low, high

    @property
    def bounded_below(self) -> NDArray[np.bool_]:
        """Per-element mask of finite lower bounds."""
        return np.isfinite(self.broadcast_bounds()[0])

    @property
    def bounded_above(self) -> NDArray[np.bool_]:
        """Per-element mask of finite upper bounds."""
        return np.isfinite(self.broadcast_bounds()[1])

    def is_bounded(self, manner: str = "both") -> bool:
        """Check whether every element is bounded in the given manner.

        Args:
            manner: ``"both"``, ``"below"`` or ``"above"``
        """
        below = bool(np.all(self.bounded_below))
        above = bool(np.all(self.bounded_above))
        if manner == "both":
            return below and above
        if manner == "below":
            return below
        if manner == "above":
            return above
        raise ValidationError(
            f"manner must be 'both', 'below' or 'above', got {manner!r}",
            parameter_name="manner",
            parameter_value=manner,
        )

    def classify(self) -> Dict[Boundedness, NDArray[np.bool_]]:
        """Partition elements into the four boundedness regimes."""
        below = self.bounded_below
        above = self.bounded_above
        return {
            Boundedness.UNBOUNDED: ~below & ~above,
            Boundedness.BOUNDED: below & above,
            Boundedness.BELOW_ONLY: below & ~above,
            Boundedness.ABOVE_ONLY: ~below & above,
        }

    # ------------------------------------------------------------------
    # Space contract
    # ------------------------------------------------------------------
    def sample(self) -> NDArray[Any]:
        """Draw a random element of the Box.

        Finite scalar bounds draw directly: uniform floats in ``[low, high]``
        or uniform integers in ``[low, high]``. Everything else goes through
        the per-element regime merge described in the module docstring.
        """
        bounds = self._bounds
        if isinstance(bounds, ScalarBounds) and bounds.is_finite():
            if np.issubdtype(self.dtype, np.integer):
                draw = self.np_random.integers(
                    int(bounds.low), int(bounds.high), size=self.shape, endpoint=True
                )
            else:
                draw = self.np_random.uniform(bounds.low, bounds.high, size=self.shape)
            return np.asarray(draw).astype(self.dtype)
        return self._sample_by_regime()

    def _sample_by_regime(self) -> NDArray[Any]:
        shape = self.shape
        rng = self.np_random
        is_integer = np.issubdtype(self.dtype, np.integer)

        low, high = self.broadcast_bounds()
        regimes = self.classify()
        bounded_above = ~regimes[Boundedness.UNBOUNDED] & ~regimes[Boundedness.BELOW_ONLY]

        if is_integer:
            # Half-open upper bound so flooring reaches high itself
            high = np.where(bounded_above, high + 1.0, high)

        with np.errstate(invalid="ignore", over="ignore"):
            normal_draw = rng.standard_normal(shape)
            uniform_draw = low + rng.random(shape) * (high - low)
            below_draw = low + _standard_exponential(rng, shape)
            above_draw = high - _standard_exponential(rng, shape)

            sample = np.zeros(shape, dtype=np.float64)
            sample = np.where(regimes[Boundedness.UNBOUNDED], normal_draw, sample)
            sample = np.where(regimes[Boundedness.BOUNDED], uniform_draw, sample)
            sample = np.where(regimes[Boundedness.BELOW_ONLY], below_draw, sample)
            sample = np.where(regimes[Boundedness.ABOVE_ONLY], above_draw, sample)

        if is_integer:
            sample = np.floor(sample)
            sample = np.where(bounded_above, np.minimum(sample, high - 1.0), sample)
            # Open sides can run past what the dtype holds
            sample = np.clip(sample, *_integer_limits(self.dtype))

        return np.asarray(sample).astype(self.dtype)

    def contains(self, x: Any) -> bool:
        if not matches_array_signature(x, self.shape, self.dtype):
            return False
        with np.errstate(invalid="ignore"):
            return bool(
                np.all(x >= self._bounds.low) and np.all(x <= self._bounds.high)
            )

    def __repr__(self) -> str:
        return f"Box({_short_repr(self.low)}, {_short_repr(self.high)}, {self.shape}, {self.dtype})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Box):
            return False
        if self.dtype != other.dtype or self.shape != other.shape:
            return False
        mine, theirs = self._bounds, other.bounds
        if isinstance(mine, ScalarBounds):
            return (
                isinstance(theirs, ScalarBounds)
                and mine.low == theirs.low
                and mine.high == theirs.high
            )
        return (
            isinstance(theirs, ArrayBounds)
            and np.array_equal(mine.low, theirs.low)
            and np.array_equal(mine.high, theirs.high)
        )


def _standard_exponential(rng: np.random.Generator, shape: Tuple[int, ...]) -> NDArray[np.float64]:
    """Exp(1) draws as ``-ln(U)``; ``1 - random()`` keeps U in (0, 1]."""
    return -np.log(1.0 - rng.random(shape))


def _short_repr(bound: Any) -> str:
    if isinstance(bound, np.ndarray):
        if bound.size and np.all(bound == bound.flat[0]):
            return str(bound.flat[0])
        return np.array2string(bound, separator=", ", threshold=8)
    return str(bound)


def _check_not_nan(value: Any, name: str) -> None:
    if np.any(np.isnan(np.asarray(value, dtype=np.float64))):
        raise ValidationError(
            f"{name} must not contain NaN",
            parameter_name=name,
            parameter_value=value,
            expected_format="real numbers or +/- infinity",
        )


def _check_whole_numbers(value: NDArray[np.float64], name: str) -> None:
    finite = value[np.isfinite(value)]
    if np.any(finite != np.floor(finite)):
        raise ValidationError(
            f"Integer Box bounds must be whole numbers, got {name}={value!r}",
            parameter_name=name,
            parameter_value=value,
            expected_format="whole numbers or +/- infinity",
        )


def _integer_limits(dtype: np.dtype) -> Tuple[float, float]:
    """Float64 limits that cast back into ``dtype`` without wrapping."""
    info = np.iinfo(dtype)
    lowest, highest = float(info.min), float(info.max)
    if int(highest) > info.max:
        highest = float(np.nextafter(highest, 0.0))
    return lowest, highest


def _check_integer_range(value: NDArray[np.float64], name: str, dtype: np.dtype) -> None:
    info = np.iinfo(dtype)
    finite = value[np.isfinite(value)]
    if np.any(finite < info.min) or np.any(finite > info.max):
        raise ValidationError(
            f"{name} must fit in {dtype}, got {name}={value!r}",
            parameter_name=name,
            parameter_value=value,
            expected_format=f"whole numbers in [{info.min}, {info.max}] or +/- infinity",
        )


def _build_scalar_bounds(low: Any, high: Any, dtype: np.dtype) -> ScalarBounds:
    _check_not_nan(low, "low")
    _check_not_nan(high, "high")
    if high < low:
        raise ValidationError(
            f"High is lower than low! low={low}, high={high}",
            parameter_name="high",
            parameter_value=high,
            expected_format=f"number >= {low}",
        )
    if np.issubdtype(dtype, np.integer):
        _check_whole_numbers(np.asarray([low, high], dtype=np.float64), "low/high")
        _check_integer_range(np.asarray([low, high], dtype=np.float64), "low/high", dtype)
        return ScalarBounds(
            low=int(low) if np.isfinite(low) else float(low),
            high=int(high) if np.isfinite(high) else float(high),
        )
    # Round through the dtype so cast samples never land outside the stored bounds
    cast = dtype.type
    return ScalarBounds(low=float(cast(low)), high=float(cast(high)))


def _build_array_bounds(
    low: NDArray[Any], high: NDArray[Any], dtype: np.dtype
) -> ArrayBounds:
    for name, value in (("low", low), ("high", high)):
        if not (
            np.issubdtype(value.dtype, np.integer)
            or np.issubdtype(value.dtype, np.floating)
        ):
            raise ValidationError(
                f"{name} must be a numeric array, got dtype {value.dtype}",
                parameter_name=name,
                parameter_value=value,
                expected_format="numeric array",
            )
    _check_not_nan(low, "low")
    _check_not_nan(high, "high")

    low_f = low.astype(np.float64)
    high_f = high.astype(np.float64)
    if np.any(high_f < low_f):
        raise ValidationError(
            "Not all values in high are higher than low!",
            parameter_name="high",
            parameter_value=high,
            expected_format="array with high >= low elementwise",
        )

    if np.issubdtype(dtype, np.integer):
        _check_whole_numbers(low_f, "low")
        _check_whole_numbers(high_f, "high")
        _check_integer_range(low_f, "low", dtype)
        _check_integer_range(high_f, "high", dtype)
        if np.all(np.isfinite(low_f)) and np.all(np.isfinite(high_f)):
            return ArrayBounds(low=low.astype(dtype), high=high.astype(dtype))
        # Infinite sides cannot be represented in an integer dtype
        return ArrayBounds(low=low_f, high=high_f)
    return ArrayBounds(low=low.astype(dtype), high=high.astype(dtype))
