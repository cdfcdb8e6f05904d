"""Action transform wrappers."""

from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np

from ..core.enums import SpaceKind
from ..core.types import ActType, ObsType, WrapperActType
from ..envs import ActionWrapper, Env
from ..spaces import Space
from ..utils.exceptions import IncompatibleSpaceError, ValidationError

__all__ = ["ClipAction", "TransformAction"]


class ClipAction(ActionWrapper[ObsType, Any, ActType]):
    """Clip continuous actions into the inner env's Box bounds.

    Scalar and per-element bounds are both supported; infinite sides are
    left open.

    Raises:
        IncompatibleSpaceError: If the action space is not a Box.

    Example::

        >>> env = ClipAction(env_with_unit_box_actions)
        >>> env.action(np.array([2.0], dtype=np.float32))
        array([1.], dtype=float32)
    """

    def __init__(self, env: Env[ObsType, ActType]):
        space = env.action_space
        if space.kind is not SpaceKind.BOX or not space.has_elementwise_bounds:
            raise IncompatibleSpaceError(
                f"ClipAction requires a Box action space, got {space}",
                config_parameter="action_space",
                parameter_value=space,
            )
        super().__init__(env)

    def action(self, action: Any) -> ActType:
        space = self.env.action_space
        clipped = np.clip(action, space.low, space.high)
        return np.asarray(clipped).astype(space.dtype, copy=False)


class TransformAction(ActionWrapper[ObsType, WrapperActType, ActType]):
    """Apply ``func`` to every action before it reaches the inner env.

    Args:
        env: The environment to wrap.
        func: Maps this wrapper's actions to inner-env actions.
        action_space: Action space exposed by this wrapper; defaults to the
            inner env's when omitted.
    """

    def __init__(
        self,
        env: Env[ObsType, ActType],
        func: Callable[[WrapperActType], ActType],
        action_space: Optional[Space[WrapperActType]] = None,
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
        if action_space is not None:
            self.action_space = action_space

    def action(self, action: WrapperActType) -> ActType:
        return self.func(action)
