"""Keyed product of component spaces."""

from __future__ import annotations

import typing
from typing import Any, Iterator, KeysView, List, Mapping, Optional, Sequence, Union

from ..core.enums import SpaceKind
from ..utils import seeding
from ..utils.exceptions import ValidationError
from .space import Space


class Dict(Space[typing.Dict[str, Any]], typing.Mapping[str, Space[Any]]):
    """A mapping from string keys to component spaces.

    Keys keep the order they were given in. Samples are plain ``dict``s.
    """

    kind = SpaceKind.DICT

    def __init__(
        self,
        spaces: Union[Mapping[str, Space[Any]], Sequence[typing.Tuple[str, Space[Any]]], None] = None,
        seed: Optional[int] = None,
        **spaces_kwargs: Space[Any],
    ):
        items = dict(spaces or {})
        items.update(spaces_kwargs)
        for key, space in items.items():
            if not isinstance(key, str):
                raise ValidationError(
                    f"Dict keys must be strings, got {key!r}",
                    parameter_name="spaces",
                    parameter_value=key,
                    expected_format="str keys",
                )
            if not isinstance(space, Space):
                raise ValidationError(
                    f"Dict value for key {key!r} is not a Space: {space!r}",
                    parameter_name="spaces",
                    parameter_value=space,
                    expected_format="Space values",
                )
        self.spaces: typing.Dict[str, Space[Any]] = items
        super().__init__(None, None, seed)

    def seed(self, seed: Optional[int] = None) -> List[int]:
        seeds = super().seed(seed)
        for child_seed, space in zip(
            seeding.spawn_seeds(self._np_random, len(self.spaces)),
            self.spaces.values(),
        ):
            seeds.extend(space.seed(child_seed))
        return seeds

    def sample(self) -> typing.Dict[str, Any]:
        return {key: space.sample() for key, space in self.spaces.items()}

    def contains(self, x: Any) -> bool:
        if not isinstance(x, Mapping) or set(x.keys()) != set(self.spaces.keys()):
            return False
        return all(space.contains(x[key]) for key, space in self.spaces.items())

    def __getitem__(self, key: str) -> Space[Any]:
        return self.spaces[key]

    def keys(self) -> KeysView[str]:
        return self.spaces.keys()

    def __len__(self) -> int:
        return len(self.spaces)

    def __iter__(self) -> Iterator[str]:
        return iter(self.spaces)

    def __repr__(self) -> str:
        return "Dict(" + ", ".join(f"{key!r}: {space}" for key, space in self.spaces.items()) + ")"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Dict) and self.spaces == other.spaces

    __hash__ = None  # type: ignore[assignment]
