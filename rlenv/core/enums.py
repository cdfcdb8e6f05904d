"""
Core enumerations for rlenv.
"""

from enum import Enum


class RenderMode(Enum):
    """Enumeration for visualization modes."""

    RGB_ARRAY = "rgb_array"
    HUMAN = "human"

    def requires_pacing(self) -> bool:
        """Check if step/render should be paced to the render frame rate."""
        return self == RenderMode.HUMAN


class SpaceKind(Enum):
    """Tag identifying each member of the fixed set of space variants."""

    DISCRETE = "discrete"
    BOX = "box"
    MULTI_DISCRETE = "multi_discrete"
    MULTI_BINARY = "multi_binary"
    TUPLE = "tuple"
    DICT = "dict"

    def is_composite(self) -> bool:
        """Check if spaces of this kind own component spaces."""
        return self in (SpaceKind.TUPLE, SpaceKind.DICT)


class Boundedness(Enum):
    """Per-element boundedness regime used by the Box sampler."""

    UNBOUNDED = "unbounded"
    BOUNDED = "bounded"
    BELOW_ONLY = "below"
    ABOVE_ONLY = "above"
