"""
Abstract environment contract.

An :class:`Env` owns exactly one action space and one observation space for
its whole lifetime and exposes ``reset``/``step``/``render``/``close``.
Concrete environments subclass it, call ``super().__init__`` with their
spaces and implement :meth:`Env.step` and :meth:`Env.reset`.

Environments rendered for a human are paced in real time: :meth:`Env.pace_frame`
blocks the caller for one frame interval (``1 / metadata["render_fps"]``).
Calls never overlap on one instance, so pacing needs no locks.
"""

from __future__ import annotations

import abc
import time
from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, SupportsFloat, Tuple

import numpy as np

from ..core.enums import RenderMode
from ..core.types import ActType, InfoType, ObsType, RenderFrame
from ..logging import ComponentType, get_component_logger
from ..spaces import Space
from ..utils import seeding
from ..utils.exceptions import ValidationError

if TYPE_CHECKING:
    from ..config.models import EnvSpec

__all__ = ["Env"]

_logger = get_component_logger(__name__, ComponentType.ENVIRONMENT)


class Env(abc.ABC, Generic[ObsType, ActType]):
    """Base class for every environment.

    Attributes:
        metadata: ``render_modes`` lists the supported render modes and
            ``render_fps`` the real-time frame rate used for human pacing.
        spec: The :class:`~rlenv.config.EnvSpec` this env was made from, if any.
    """

    metadata: Dict[str, Any] = {"render_modes": [], "render_fps": None}
    spec: Optional["EnvSpec"] = None

    def __init__(
        self,
        action_space: Space[ActType],
        observation_space: Space[ObsType],
        render_mode: Optional[str] = None,
    ):
        for name, space in (
            ("action_space", action_space),
            ("observation_space", observation_space),
        ):
            if not isinstance(space, Space):
                raise ValidationError(
                    f"{name} must be a Space, got {type(space).__name__}",
                    parameter_name=name,
                    parameter_value=space,
                    expected_format="rlenv.spaces.Space instance",
                )
        supported_modes = self.metadata.get("render_modes", [])
        if render_mode is not None and render_mode not in supported_modes:
            raise ValidationError(
                f"render_mode {render_mode!r} is not supported by {type(self).__name__}; "
                f"supported modes: {supported_modes}",
                parameter_name="render_mode",
                parameter_value=render_mode,
                expected_format=f"None or one of {supported_modes}",
            )

        self._action_space = action_space
        self._observation_space = observation_space
        self._render_mode = render_mode
        self._np_random: Optional[np.random.Generator] = None
        self._np_random_seed: Optional[int] = None

    # ------------------------------------------------------------------
    # Spaces and modes
    # ------------------------------------------------------------------
    @property
    def action_space(self) -> Space[ActType]:
        return self._action_space

    @property
    def observation_space(self) -> Space[ObsType]:
        return self._observation_space

    @property
    def render_mode(self) -> Optional[str]:
        return self._render_mode

    @property
    def unwrapped(self) -> "Env[ObsType, ActType]":
        """The innermost environment; for a plain Env, itself."""
        return self

    # ------------------------------------------------------------------
    # Randomness
    # ------------------------------------------------------------------
    @property
    def np_random(self) -> np.random.Generator:
        """Episode generator, seeded from OS entropy on first use."""
        if self._np_random is None:
            self._np_random, self._np_random_seed = seeding.np_random()
        return self._np_random

    @np_random.setter
    def np_random(self, value: np.random.Generator) -> None:
        self._np_random = value
        self._np_random_seed = -1

    @property
    def np_random_seed(self) -> Optional[int]:
        """Seed of the current generator; -1 when the generator was assigned directly."""
        if self._np_random is None:
            self._np_random, self._np_random_seed = seeding.np_random()
        return self._np_random_seed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ObsType, Optional[InfoType]]:
        """Start a new episode.

        The base implementation is only a seeding hook: it reseeds
        ``np_random`` when ``seed`` is given and returns ``None``. Subclasses
        call ``super().reset(seed=seed)`` first, discard its result, then
        build and return ``(observation, info)``.
        """
        if seed is not None:
            self._np_random, self._np_random_seed = seeding.np_random(seed)
            _logger.debug("%s reseeded with %s", type(self).__name__, seed)
        return None  # type: ignore[return-value]

    @abc.abstractmethod
    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        """Advance the episode by one action.

        Returns:
            ``(observation, reward, terminated, truncated, info)``
        """

    def render(self) -> Optional[RenderFrame]:
        """Render the current state; ``None`` unless the subclass draws frames."""
        return None

    def close(self) -> None:
        """Release resources held by the environment."""

    def pace_frame(self) -> None:
        """Block for one frame interval when rendering for a human."""
        if self._render_mode not in {mode.value for mode in RenderMode}:
            return
        if not RenderMode(self._render_mode).requires_pacing():
            return
        fps = self.metadata.get("render_fps")
        if fps:
            time.sleep(1.0 / fps)

    def __enter__(self) -> "Env[ObsType, ActType]":
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.close()
        return False

    def __str__(self) -> str:
        if self.spec is None:
            return f"<{type(self).__name__}>"
        return f"<{type(self).__name__}<{self.spec.id}>>"

    def __repr__(self) -> str:
        return str(self)
