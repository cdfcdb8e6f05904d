"""Reward transform wrappers."""

from __future__ import annotations

from typing import Callable, Optional, SupportsFloat, Union

import numpy as np

from ..core.types import ActType, ObsType
from ..envs import Env, RewardWrapper
from ..utils.exceptions import ValidationError

__all__ = ["ClipReward", "TransformReward"]


class TransformReward(RewardWrapper[ObsType, ActType]):
    """Apply ``func`` to every reward."""

    def __init__(
        self,
        env: Env[ObsType, ActType],
        func: Callable[[SupportsFloat], SupportsFloat],
    ):
        if not callable(func):
            raise ValidationError(
                f"func must be callable, got {type(func).__name__}",
                parameter_name="func",
                parameter_value=func,
                expected_format="callable",
            )
        super().__init__(env)
        self.func = func

    def reward(self, reward: SupportsFloat) -> SupportsFloat:
        return self.func(reward)


class ClipReward(RewardWrapper[ObsType, ActType]):
    """Clip rewards into ``[min_reward, max_reward]``; either side may be open.

    Raises:
        ValidationError: If both bounds are None or ``min_reward > max_reward``.
    """

    def __init__(
        self,
        env: Env[ObsType, ActType],
        min_reward: Optional[Union[float, int]] = None,
        max_reward: Optional[Union[float, int]] = None,
    ):
        if min_reward is None and max_reward is None:
            raise ValidationError(
                "Both min_reward and max_reward cannot be None",
                parameter_name="min_reward/max_reward",
                parameter_value=(min_reward, max_reward),
                expected_format="at least one finite bound",
            )
        if min_reward is not None and max_reward is not None and max_reward < min_reward:
            raise ValidationError(
                f"min_reward ({min_reward}) must not exceed max_reward ({max_reward})",
                parameter_name="max_reward",
                parameter_value=max_reward,
                expected_format=f"number >= {min_reward}",
            )
        super().__init__(env)
        self.min_reward = min_reward
        self.max_reward = max_reward

    def reward(self, reward: SupportsFloat) -> float:
        lower = -np.inf if self.min_reward is None else self.min_reward
        upper = np.inf if self.max_reward is None else self.max_reward
        return float(np.clip(float(reward), lower, upper))
