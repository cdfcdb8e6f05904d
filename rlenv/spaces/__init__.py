"""
Spaces describe the set of valid actions and observations of an environment.

Every space can ``sample()`` a random member from its own seeded generator,
test membership with ``contains()`` (or ``x in space``) and compare
structurally with ``==``.
"""

from .box import ArrayBounds, Box, BoxBounds, ScalarBounds
from .dict import Dict
from .discrete import Discrete
from .multi_binary import MultiBinary
from .multi_discrete import MultiDiscrete
from .space import Space
from .tuple import Tuple

__all__ = [
    "Space",
    "Discrete",
    "Box",
    "BoxBounds",
    "ScalarBounds",
    "ArrayBounds",
    "MultiDiscrete",
    "MultiBinary",
    "Tuple",
    "Dict",
]
