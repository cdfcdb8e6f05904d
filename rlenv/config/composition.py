"""Build wrapper chains from :class:`WrapperStackConfig`."""

from __future__ import annotations

from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from ..envs import Env
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import ConfigurationError
from ..wrappers import (
    Autoreset,
    ClipAction,
    ClipReward,
    OrderEnforcing,
    RecordEpisodeStatistics,
    TimeLimit,
)
from .models import WrapperStackConfig

__all__ = ["apply_wrappers"]

_logger = get_component_logger(__name__, ComponentType.WRAPPERS)


def apply_wrappers(
    env: Env[Any, Any],
    config: Union[WrapperStackConfig, Dict[str, Any]],
) -> Env[Any, Any]:
    """Wrap ``env`` according to ``config`` and return the outermost layer.

    Args:
        env: Environment to wrap
        config: Stack description, or a dict validated into one

    Raises:
        ConfigurationError: If a dict config fails validation
    """
    if not isinstance(config, WrapperStackConfig):
        try:
            config = WrapperStackConfig.model_validate(config)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Invalid wrapper stack configuration: {exc}",
                config_parameter="wrapper_stack",
                parameter_value=config,
            ) from exc

    if config.clip_action:
        env = ClipAction(env)
    if config.clip_reward is not None:
        env = ClipReward(
            env,
            min_reward=config.clip_reward.min_reward,
            max_reward=config.clip_reward.max_reward,
        )
    if config.order_enforce:
        env = OrderEnforcing(
            env,
            disable_render_order_enforcing=config.disable_render_order_enforcing,
        )
    if config.time_limit is not None:
        env = TimeLimit(env, max_episode_steps=config.time_limit.max_episode_steps)
    if config.record_episode_statistics is not None:
        env = RecordEpisodeStatistics(
            env,
            buffer_length=config.record_episode_statistics.buffer_length,
            stats_key=config.record_episode_statistics.stats_key,
        )
    if config.autoreset:
        env = Autoreset(env)

    _logger.debug("Built wrapper stack %s", env)
    return env
