"""
Pydantic configuration models for environment specs and wrapper stacks.

These models describe *how* an environment is assembled. They carry no
runtime state; :func:`rlenv.registration.make` and
:func:`rlenv.config.apply_wrappers` turn them into live env chains.

Example:
    >>> from rlenv.config import EnvSpec, WrapperStackConfig, TimeLimitConfig
    >>>
    >>> spec = EnvSpec(id="Counter-v0", entry_point="my_pkg.envs:CounterEnv")
    >>> stack = WrapperStackConfig(time_limit=TimeLimitConfig(max_episode_steps=50))
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    field_validator,
    model_validator,
)

from ..core.constants import (
    DEFAULT_STATS_BUFFER_LENGTH,
    DEFAULT_STATS_KEY,
    ENV_ID_PATTERN,
)

if TYPE_CHECKING:
    from ..envs import Env

__all__ = [
    "EnvSpec",
    "TimeLimitConfig",
    "RecordEpisodeStatisticsConfig",
    "ClipRewardConfig",
    "WrapperStackConfig",
]

_ENV_ID_RE = re.compile(ENV_ID_PATTERN)


class EnvSpec(BaseModel):
    """Registration record for one environment id.

    Attributes:
        id: Versioned identifier, ``[namespace/]Name-vN``
        entry_point: ``"module.path:Attr"`` or a callable returning an Env
        max_episode_steps: Step budget applied with TimeLimit (None = unlimited)
        order_enforce: Whether make() applies OrderEnforcing
        autoreset: Whether make() applies Autoreset
        kwargs: Default constructor keyword arguments
    """

    id: str = Field(description="Versioned environment id, e.g. 'CartPole-v1'")
    entry_point: Union[str, Callable[..., Any]] = Field(
        description="'module.path:Attr' import path or env factory callable"
    )
    max_episode_steps: Optional[PositiveInt] = Field(
        default=None, description="Episode step budget enforced by TimeLimit"
    )
    order_enforce: bool = Field(
        default=True, description="Wrap in OrderEnforcing on make()"
    )
    autoreset: bool = Field(default=False, description="Wrap in Autoreset on make()")
    kwargs: Dict[str, Any] = Field(
        default_factory=dict, description="Default env constructor kwargs"
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator("id")
    @classmethod
    def _validate_id(cls, v: str) -> str:
        if not _ENV_ID_RE.match(v):
            raise ValueError(
                f"Malformed environment id {v!r}; expected '[namespace/]Name-vN'"
            )
        return v

    @field_validator("entry_point")
    @classmethod
    def _validate_entry_point(cls, v: Any) -> Any:
        if isinstance(v, str):
            module, sep, attr = v.strip().partition(":")
            if not sep or not module or not attr:
                raise ValueError(
                    "entry_point must be 'module.path:Attr' or a callable"
                )
            return v.strip()
        return v

    @field_validator("kwargs")
    @classmethod
    def _validate_kwargs(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if not all(isinstance(k, str) for k in v):
            raise ValueError("kwargs keys must be strings")
        return v

    @property
    def namespace(self) -> Optional[str]:
        return _ENV_ID_RE.match(self.id).group("namespace")  # type: ignore[union-attr]

    @property
    def name(self) -> str:
        return _ENV_ID_RE.match(self.id).group("name")  # type: ignore[union-attr]

    @property
    def version(self) -> int:
        return int(_ENV_ID_RE.match(self.id).group("version"))  # type: ignore[union-attr]

    def make(self, **kwargs: Any) -> "Env[Any, Any]":
        """Instantiate this spec; equivalent to ``rlenv.make(spec, **kwargs)``."""
        from ..registration import make

        return make(self, **kwargs)


class TimeLimitConfig(BaseModel):
    """Configuration for :class:`rlenv.wrappers.TimeLimit`."""

    max_episode_steps: PositiveInt = Field(description="Steps before truncation")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")


class RecordEpisodeStatisticsConfig(BaseModel):
    """Configuration for :class:`rlenv.wrappers.RecordEpisodeStatistics`."""

    buffer_length: PositiveInt = Field(
        default=DEFAULT_STATS_BUFFER_LENGTH,
        description="Completed episodes kept in the statistics queues",
    )
    stats_key: str = Field(
        default=DEFAULT_STATS_KEY,
        min_length=1,
        description="Info key receiving the episode statistics",
    )

    model_config = ConfigDict(validate_assignment=True, extra="forbid")


class ClipRewardConfig(BaseModel):
    """Configuration for :class:`rlenv.wrappers.ClipReward`."""

    min_reward: Optional[float] = Field(default=None, description="Lower clip bound")
    max_reward: Optional[float] = Field(default=None, description="Upper clip bound")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @model_validator(mode="after")
    def _check_bounds(self) -> "ClipRewardConfig":
        if self.min_reward is None and self.max_reward is None:
            raise ValueError("at least one of min_reward and max_reward is required")
        if (
            self.min_reward is not None
            and self.max_reward is not None
            and self.max_reward < self.min_reward
        ):
            raise ValueError(
                f"min_reward ({self.min_reward}) must not exceed max_reward ({self.max_reward})"
            )
        return self


class WrapperStackConfig(BaseModel):
    """Declarative wrapper stack.

    Wrappers are applied innermost first in this order: ClipAction,
    ClipReward, OrderEnforcing, TimeLimit, RecordEpisodeStatistics,
    Autoreset.

    Example:
        >>> config = WrapperStackConfig(
        ...     time_limit={"max_episode_steps": 200},
        ...     record_episode_statistics={},
        ...     autoreset=True,
        ... )
    """

    clip_action: bool = Field(default=False, description="Clip Box actions")
    clip_reward: Optional[ClipRewardConfig] = Field(default=None)
    order_enforce: bool = Field(default=True, description="Apply OrderEnforcing")
    disable_render_order_enforcing: bool = Field(default=False)
    time_limit: Optional[TimeLimitConfig] = Field(default=None)
    record_episode_statistics: Optional[RecordEpisodeStatisticsConfig] = Field(
        default=None
    )
    autoreset: bool = Field(default=False, description="Apply Autoreset outermost")

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
