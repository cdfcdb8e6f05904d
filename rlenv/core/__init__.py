"""Constants, enumerations and type aliases shared across rlenv."""

from .constants import (
    AUTORESET_REWARD,
    DEFAULT_BOX_DTYPE,
    DEFAULT_STATS_BUFFER_LENGTH,
    DEFAULT_STATS_KEY,
    PACKAGE_NAME,
    PACKAGE_VERSION,
    SUPPORTED_DTYPES,
)
from .enums import Boundedness, RenderMode, SpaceKind
from .types import (
    ActType,
    InfoType,
    ObsType,
    RenderFrame,
)

__all__ = [
    "AUTORESET_REWARD",
    "DEFAULT_BOX_DTYPE",
    "DEFAULT_STATS_BUFFER_LENGTH",
    "DEFAULT_STATS_KEY",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "SUPPORTED_DTYPES",
    "Boundedness",
    "RenderMode",
    "SpaceKind",
    "ActType",
    "InfoType",
    "ObsType",
    "RenderFrame",
]
