"""Validated configuration models and wrapper-stack composition."""

from .composition import apply_wrappers
from .models import (
    ClipRewardConfig,
    EnvSpec,
    RecordEpisodeStatisticsConfig,
    TimeLimitConfig,
    WrapperStackConfig,
)

__all__ = [
    "EnvSpec",
    "TimeLimitConfig",
    "RecordEpisodeStatisticsConfig",
    "ClipRewardConfig",
    "WrapperStackConfig",
    "apply_wrappers",
]
