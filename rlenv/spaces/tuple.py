"""Ordered product of component spaces."""

from __future__ import annotations

import typing
from typing import Any, Iterable, Iterator, List, Optional

from ..core.enums import SpaceKind
from ..utils import seeding
from ..utils.exceptions import ValidationError
from .space import Space


class Tuple(Space[typing.Tuple[Any, ...]], typing.Sequence[Any]):
    """A fixed-length, positional product of spaces.

    Example::

        >>> space = Tuple((Discrete(2), Box(-1.0, 1.0, shape=(2,))))
        >>> len(space.sample())
        2
    """

    kind = SpaceKind.TUPLE

    def __init__(self, spaces: Iterable[Space[Any]], seed: Optional[int] = None):
        self.spaces = tuple(spaces)
        for index, space in enumerate(self.spaces):
            if not isinstance(space, Space):
                raise ValidationError(
                    f"Tuple component {index} is not a Space: {space!r}",
                    parameter_name="spaces",
                    parameter_value=space,
                    expected_format="sequence of Space instances",
                )
        super().__init__(None, None, seed)

    def seed(self, seed: Optional[int] = None) -> List[int]:
        """Seed the tuple's generator, then every component from child seeds."""
        seeds = super().seed(seed)
        for child_seed, space in zip(
            seeding.spawn_seeds(self._np_random, len(self.spaces)), self.spaces
        ):
            seeds.extend(space.seed(child_seed))
        return seeds

    def sample(self) -> typing.Tuple[Any, ...]:
        return tuple(space.sample() for space in self.spaces)

    def contains(self, x: Any) -> bool:
        if not isinstance(x, (tuple, list)) or len(x) != len(self.spaces):
            return False
        return all(space.contains(part) for space, part in zip(self.spaces, x))

    def __getitem__(self, index: Any) -> Any:
        return self.spaces[index]

    def __len__(self) -> int:
        return len(self.spaces)

    def __iter__(self) -> Iterator[Space[Any]]:
        return iter(self.spaces)

    def __repr__(self) -> str:
        return "Tuple(" + ", ".join(str(space) for space in self.spaces) + ")"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Tuple) and self.spaces == other.spaces

    __hash__ = None  # type: ignore[assignment]
