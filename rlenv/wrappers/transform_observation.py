"""Observation transform wrappers."""

from __future__ import annotations

from typing import Callable, Optional

from ..core.types import ActType, ObsType, WrapperObsType
from ..envs import Env, ObservationWrapper
from ..spaces import Space
from ..utils.exceptions import ValidationError

__all__ = ["TransformObservation"]


class TransformObservation(ObservationWrapper[WrapperObsType, ActType, ObsType]):
    """Apply ``func`` to every observation from ``reset`` and ``step``.

    When ``func`` changes the observation domain, pass the new
    ``observation_space`` so that reads of the wrapper's space stay truthful.

    Example::

        >>> env = TransformObservation(env, lambda obs: obs * 2)
    """

    def __init__(
        self,
        env: Env[ObsType, ActType],
        func: Callable[[ObsType], WrapperObsType],
        observation_space: Optional[Space[WrapperObsType]] = None,
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
        if observation_space is not None:
            self.observation_space = observation_space

    def observation(self, observation: ObsType) -> WrapperObsType:
        return self.func(observation)
