"""
Wrapper base classes.

A :class:`Wrapper` holds one non-owning reference to an inner env (a plain
:class:`~rlenv.envs.base_env.Env` or another wrapper) and delegates every
operation to it. Spaces, render mode and metadata can be overridden per
layer by assignment; reads fall through to the inner env otherwise.

The three transform bases apply exactly one function to one component of
the interaction and leave everything else untouched:

- :class:`ObservationWrapper` maps observations after ``reset``/``step``;
- :class:`RewardWrapper` maps the reward after ``step``;
- :class:`ActionWrapper` maps the action before forwarding it.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, SupportsFloat, Tuple

import numpy as np

from ..core.types import (
    ActType,
    InfoType,
    ObsType,
    RenderFrame,
    WrapperActType,
    WrapperObsType,
)
from ..logging import ComponentType, get_component_logger
from ..spaces import Space
from ..utils.exceptions import ValidationError
from .base_env import Env

__all__ = ["Wrapper", "ObservationWrapper", "RewardWrapper", "ActionWrapper"]

_logger = get_component_logger(__name__, ComponentType.WRAPPERS)


class Wrapper(
    Env[WrapperObsType, WrapperActType],
    Generic[WrapperObsType, WrapperActType, ObsType, ActType],
):
    """Delegating layer over an inner environment.

    Args:
        env: The environment (or wrapper) to wrap.

    Raises:
        ValidationError: If ``env`` is not an :class:`Env`.
    """

    def __init__(self, env: Env[ObsType, ActType]):
        if not isinstance(env, Env):
            raise ValidationError(
                f"Wrapper expects an Env, got {type(env).__name__}",
                parameter_name="env",
                parameter_value=env,
                expected_format="rlenv.envs.Env instance",
            )
        self.env = env
        self._action_space: Optional[Space[WrapperActType]] = None
        self._observation_space: Optional[Space[WrapperObsType]] = None
        self._render_mode: Optional[str] = None
        self._metadata: Optional[Dict[str, Any]] = None
        _logger.debug("Wrapped %s with %s", env, type(self).__name__)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails on this layer
        if name == "env" or name.startswith("_"):
            raise AttributeError(
                f"accessing private attribute '{name}' is prohibited"
                if name.startswith("_")
                else f"'{type(self).__name__}' object has no attribute 'env'"
            )
        return getattr(self.env, name)

    # ------------------------------------------------------------------
    # Overridable properties
    # ------------------------------------------------------------------
    @property
    def action_space(self) -> Space[WrapperActType]:
        if self._action_space is None:
            return self.env.action_space  # type: ignore[return-value]
        return self._action_space

    @action_space.setter
    def action_space(self, space: Space[WrapperActType]) -> None:
        self._action_space = space

    @property
    def observation_space(self) -> Space[WrapperObsType]:
        if self._observation_space is None:
            return self.env.observation_space  # type: ignore[return-value]
        return self._observation_space

    @observation_space.setter
    def observation_space(self, space: Space[WrapperObsType]) -> None:
        self._observation_space = space

    @property
    def render_mode(self) -> Optional[str]:
        if self._render_mode is None:
            return self.env.render_mode
        return self._render_mode

    @render_mode.setter
    def render_mode(self, mode: Optional[str]) -> None:
        self._render_mode = mode

    @property
    def metadata(self) -> Dict[str, Any]:  # type: ignore[override]
        if self._metadata is None:
            return self.env.metadata
        return self._metadata

    @metadata.setter
    def metadata(self, value: Dict[str, Any]) -> None:
        self._metadata = value

    @property
    def np_random(self) -> np.random.Generator:
        return self.env.np_random

    @np_random.setter
    def np_random(self, value: np.random.Generator) -> None:
        self.env.np_random = value

    @property
    def np_random_seed(self) -> Optional[int]:
        return self.env.np_random_seed

    @property
    def spec(self) -> Any:  # type: ignore[override]
        return self.env.spec

    @property
    def unwrapped(self) -> Env[Any, Any]:
        return self.env.unwrapped

    # ------------------------------------------------------------------
    # Delegated lifecycle
    # ------------------------------------------------------------------
    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[WrapperObsType, Optional[InfoType]]:
        return self.env.reset(seed=seed, options=options)  # type: ignore[return-value]

    def step(
        self, action: WrapperActType
    ) -> Tuple[WrapperObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        return self.env.step(action)  # type: ignore[arg-type,return-value]

    def render(self) -> Optional[RenderFrame]:
        return self.env.render()

    def close(self) -> None:
        self.env.close()

    def pace_frame(self) -> None:
        self.env.pace_frame()

    # ------------------------------------------------------------------
    # Chain inspection
    # ------------------------------------------------------------------
    @classmethod
    def class_name(cls) -> str:
        return cls.__name__

    def has_wrapper_attr(self, name: str) -> bool:
        """Check whether any layer of the chain defines ``name``."""
        layer: Env[Any, Any] = self
        while True:
            if name in vars(layer) or hasattr(type(layer), name):
                return True
            if not isinstance(layer, Wrapper):
                return False
            layer = layer.env

    def get_wrapper_attr(self, name: str) -> Any:
        """Return ``name`` from the outermost layer that defines it.

        Raises:
            AttributeError: If no layer defines ``name``.
        """
        layer: Env[Any, Any] = self
        while True:
            if name in vars(layer) or hasattr(type(layer), name):
                return getattr(layer, name)
            if not isinstance(layer, Wrapper):
                raise AttributeError(
                    f"{self} and its inner environments have no attribute {name!r}"
                )
            layer = layer.env

    def __str__(self) -> str:
        return f"<{type(self).__name__}{self.env}>"

    def __repr__(self) -> str:
        return str(self)


class ObservationWrapper(Wrapper[WrapperObsType, ActType, ObsType, ActType]):
    """Maps every observation returned by ``reset`` and ``step``.

    Subclasses implement :meth:`observation` and, when the mapping changes
    the observation domain, assign ``self.observation_space``.
    """

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[WrapperObsType, Optional[InfoType]]:
        obs, info = self.env.reset(seed=seed, options=options)
        return self.observation(obs), info

    def step(
        self, action: ActType
    ) -> Tuple[WrapperObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return self.observation(obs), reward, terminated, truncated, info

    def observation(self, observation: ObsType) -> WrapperObsType:
        raise NotImplementedError


class RewardWrapper(Wrapper[ObsType, ActType, ObsType, ActType]):
    """Maps the reward returned by ``step``."""

    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return obs, self.reward(reward), terminated, truncated, info

    def reward(self, reward: SupportsFloat) -> SupportsFloat:
        raise NotImplementedError


class ActionWrapper(Wrapper[ObsType, WrapperActType, ObsType, ActType]):
    """Maps the caller's action before it reaches the inner env."""

    def step(
        self, action: WrapperActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        return self.env.step(self.action(action))

    def action(self, action: WrapperActType) -> ActType:
        raise NotImplementedError

    def reverse_action(self, action: ActType) -> WrapperActType:
        """Map an inner-env action back to this wrapper's action domain."""
        raise NotImplementedError
