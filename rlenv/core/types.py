"""Canonical type aliases shared by envs and wrappers."""

from __future__ import annotations

from typing import Any, Dict, TypeVar

import numpy as np
from numpy.typing import NDArray

ObsType = TypeVar("ObsType")
ActType = TypeVar("ActType")
WrapperObsType = TypeVar("WrapperObsType")
WrapperActType = TypeVar("WrapperActType")

InfoType = Dict[str, Any]
RenderFrame = NDArray[np.uint8]

__all__ = [
    "ObsType",
    "ActType",
    "WrapperObsType",
    "WrapperActType",
    "InfoType",
    "RenderFrame",
]
