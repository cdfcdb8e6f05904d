"""Abstract base class shared by every space variant."""

from __future__ import annotations

import abc
from typing import Any, ClassVar, Generic, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..core.enums import SpaceKind
from ..utils import seeding
from ..utils.exceptions import ValidationError

T_cov = TypeVar("T_cov", covariant=True)


class Space(abc.ABC, Generic[T_cov]):
    """Typed description of a domain of valid values.

    Concrete variants declare a ``kind`` tag from the fixed :class:`SpaceKind`
    set. Callers that need a capability (elementwise bounds, components)
    query ``kind`` or the capability properties below rather than probing
    the runtime class.

    Parameters
    ----------
    shape : Sequence[int] | None
        Shape of every sampled element, ``()`` for scalars, ``None`` for
        composite spaces.
    dtype : numpy dtype-like | None
        Element dtype, ``None`` for composite spaces.
    seed : int | None
        Optional seed for the space's private random generator.
    """

    kind: ClassVar[SpaceKind]

    def __init__(
        self,
        shape: Optional[Sequence[int]] = None,
        dtype: Any = None,
        seed: Optional[int] = None,
    ):
        self._shape = None if shape is None else _validate_shape(shape)
        self.dtype = None if dtype is None else np.dtype(dtype)
        self._np_random: Optional[np.random.Generator] = None
        if seed is not None:
            self.seed(seed)

    @property
    def shape(self) -> Optional[Tuple[int, ...]]:
        """Shape of sampled elements, or None for composite spaces."""
        return self._shape

    @property
    def np_random(self) -> np.random.Generator:
        """Private generator, created from OS entropy on first use."""
        if self._np_random is None:
            self.seed()
        return self._np_random  # type: ignore[return-value]

    def seed(self, seed: Optional[int] = None) -> List[int]:
        """Reseed the space's generator and return the seeds used."""
        self._np_random, seed_used = seeding.np_random(seed)
        return [seed_used]

    @property
    def has_elementwise_bounds(self) -> bool:
        """True when the space exposes per-element ``low``/``high`` bounds."""
        return False

    @abc.abstractmethod
    def sample(self) -> T_cov:
        """Draw one random element of the space."""

    @abc.abstractmethod
    def contains(self, x: Any) -> bool:
        """Return True iff ``x`` is a member of the space; never raises."""

    def __contains__(self, x: Any) -> bool:
        return self.contains(x)

    @abc.abstractmethod
    def __eq__(self, other: Any) -> bool:
        """Structural equality of every defining parameter."""

    __hash__ = None  # type: ignore[assignment]


def _validate_shape(shape: Sequence[int]) -> Tuple[int, ...]:
    try:
        dims = tuple(shape)
    except TypeError:
        raise ValidationError(
            f"shape must be a sequence of integers, got {shape!r}",
            parameter_name="shape",
            parameter_value=shape,
            expected_format="tuple of non-negative integers",
        ) from None
    for dim in dims:
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise ValidationError(
                f"shape must contain non-negative integers, got {shape!r}",
                parameter_name="shape",
                parameter_value=shape,
                expected_format="tuple of non-negative integers",
            )
    return tuple(int(dim) for dim in dims)


def is_integer_scalar(value: Any) -> bool:
    """Python or numpy integer, excluding booleans."""
    return isinstance(value, (int, np.integer)) and not isinstance(
        value, (bool, np.bool_)
    )


def matches_array_signature(x: Any, shape: Tuple[int, ...], dtype: np.dtype) -> bool:
    """Check that ``x`` is a numpy value with exactly ``shape`` and ``dtype``."""
    if not isinstance(x, (np.ndarray, np.generic)):
        return False
    return x.shape == shape and x.dtype == dtype
