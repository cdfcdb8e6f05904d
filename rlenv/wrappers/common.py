"""
Lifecycle wrappers.

Each wrapper keeps its own private per-episode state (reset flag, elapsed
steps, statistics accumulators) and only touches it inside the synchronous
extent of a delegated call. A call that raises leaves that state as it was;
layers beneath may already have advanced.

- :class:`OrderEnforcing` rejects ``step``/``render`` before the first ``reset``.
- :class:`Autoreset` replaces the step after an episode end with a reset.
- :class:`TimeLimit` forces truncation once the step budget is spent.
- :class:`RecordEpisodeStatistics` reports episode return, length and time.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Any, Deque, Dict, Optional, SupportsFloat, Tuple

from ..core.constants import (
    AUTORESET_REWARD,
    DEFAULT_STATS_BUFFER_LENGTH,
    DEFAULT_STATS_KEY,
)
from ..core.types import ActType, InfoType, ObsType, RenderFrame
from ..envs import Env, Wrapper
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import (
    ResetNeeded,
    StatisticsKeyCollisionError,
    ValidationError,
)

__all__ = [
    "OrderEnforcing",
    "Autoreset",
    "TimeLimit",
    "RecordEpisodeStatistics",
]

_logger = get_component_logger(__name__, ComponentType.WRAPPERS)


class OrderEnforcing(Wrapper[ObsType, ActType, ObsType, ActType]):
    """Raise :class:`ResetNeeded` if ``step`` is called before ``reset``.

    Example::

        >>> env = OrderEnforcing(CounterEnv())
        >>> env.step(0)
        Traceback (most recent call last):
        ...
        rlenv.utils.exceptions.ResetNeeded: Cannot call env.step() before calling env.reset()
    """

    def __init__(
        self,
        env: Env[ObsType, ActType],
        disable_render_order_enforcing: bool = False,
    ):
        super().__init__(env)
        self._has_reset = False
        self._disable_render_order_enforcing = disable_render_order_enforcing

    @property
    def has_reset(self) -> bool:
        """Whether ``reset`` has been called at least once."""
        return self._has_reset

    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        if not self._has_reset:
            raise ResetNeeded(
                "Cannot call env.step() before calling env.reset()",
                current_state="unstarted",
                expected_state="active",
                component_name=self.class_name(),
            )
        return self.env.step(action)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ObsType, Optional[InfoType]]:
        self._has_reset = True
        return self.env.reset(seed=seed, options=options)

    def render(self) -> Optional[RenderFrame]:
        if not self._disable_render_order_enforcing and not self._has_reset:
            raise ResetNeeded(
                "Cannot call env.render() before calling env.reset(), "
                "set disable_render_order_enforcing=True if this is intended",
                current_state="unstarted",
                expected_state="active",
                component_name=self.class_name(),
            )
        return self.env.render()


class Autoreset(Wrapper[ObsType, ActType, ObsType, ActType]):
    """Reset the inner env on the step after an episode ends.

    The intercepting step ignores the caller's action and returns
    ``(reset_obs, 0.0, False, False, reset_info)``.
    """

    def __init__(self, env: Env[ObsType, ActType]):
        super().__init__(env)
        self._needs_reset = False

    @property
    def needs_reset(self) -> bool:
        return self._needs_reset

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ObsType, Optional[InfoType]]:
        result = self.env.reset(seed=seed, options=options)
        self._needs_reset = False
        return result

    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        if self._needs_reset:
            obs, info = self.env.reset()
            self._needs_reset = False
            _logger.debug("Episode ended on previous step; reset %s", self.env)
            return obs, AUTORESET_REWARD, False, False, info

        obs, reward, terminated, truncated, info = self.env.step(action)
        self._needs_reset = bool(terminated or truncated)
        return obs, reward, terminated, truncated, info


class TimeLimit(Wrapper[ObsType, ActType, ObsType, ActType]):
    """Truncate the episode once ``max_episode_steps`` steps have elapsed.

    Args:
        env: Environment to limit.
        max_episode_steps: Positive step budget per episode.
    """

    def __init__(self, env: Env[ObsType, ActType], max_episode_steps: int):
        if (
            isinstance(max_episode_steps, bool)
            or not isinstance(max_episode_steps, int)
            or max_episode_steps <= 0
        ):
            raise ValidationError(
                f"max_episode_steps must be a positive int, got {max_episode_steps!r}",
                parameter_name="max_episode_steps",
                parameter_value=max_episode_steps,
                expected_format="positive integer",
            )
        super().__init__(env)
        self._max_episode_steps = max_episode_steps
        self._elapsed_steps = 0

    @property
    def max_episode_steps(self) -> int:
        return self._max_episode_steps

    @property
    def elapsed_steps(self) -> int:
        return self._elapsed_steps

    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        self._elapsed_steps += 1
        if self._elapsed_steps >= self._max_episode_steps:
            if not truncated:
                _logger.debug(
                    "Truncating episode after %d steps", self._elapsed_steps
                )
            truncated = True
        return obs, reward, terminated, truncated, info

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ObsType, Optional[InfoType]]:
        result = self.env.reset(seed=seed, options=options)
        self._elapsed_steps = 0
        return result


class RecordEpisodeStatistics(Wrapper[ObsType, ActType, ObsType, ActType]):
    """Add episode return, length and duration to the final step's info.

    At the end of an episode the info gains::

        info[stats_key] = {
            "rewards": <cumulative reward>,
            "length": <episode length>,
            "time": <seconds since reset>,
        }

    The last ``buffer_length`` completed episodes are also kept in
    ``return_queue``, ``length_queue`` and ``time_queue``.

    Raises:
        StatisticsKeyCollisionError: On an episode end whose inner info
            already carries ``stats_key``.
    """

    def __init__(
        self,
        env: Env[ObsType, ActType],
        buffer_length: int = DEFAULT_STATS_BUFFER_LENGTH,
        stats_key: str = DEFAULT_STATS_KEY,
    ):
        if isinstance(buffer_length, bool) or not isinstance(buffer_length, int) or buffer_length <= 0:
            raise ValidationError(
                f"buffer_length must be a positive int, got {buffer_length!r}",
                parameter_name="buffer_length",
                parameter_value=buffer_length,
                expected_format="positive integer",
            )
        if not isinstance(stats_key, str) or not stats_key:
            raise ValidationError(
                f"stats_key must be a non-empty string, got {stats_key!r}",
                parameter_name="stats_key",
                parameter_value=stats_key,
                expected_format="non-empty str",
            )
        super().__init__(env)
        self._stats_key = stats_key

        self.episode_count = 0
        self.episode_start_time: float = 0.0
        self.episode_returns: float = 0.0
        self.episode_lengths: int = 0
        self._start_episode()

        self.return_queue: Deque[float] = deque(maxlen=buffer_length)
        self.length_queue: Deque[int] = deque(maxlen=buffer_length)
        self.time_queue: Deque[float] = deque(maxlen=buffer_length)

    @property
    def stats_key(self) -> str:
        return self._stats_key

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ObsType, Optional[InfoType]]:
        result = self.env.reset(seed=seed, options=options)
        self._start_episode()
        return result

    def step(
        self, action: ActType
    ) -> Tuple[ObsType, SupportsFloat, bool, bool, Optional[InfoType]]:
        obs, reward, terminated, truncated, info = self.env.step(action)

        episode_return = self.episode_returns + float(reward)
        episode_length = self.episode_lengths + 1

        if terminated or truncated:
            if info is not None and self._stats_key in info:
                raise StatisticsKeyCollisionError(self._stats_key)

            elapsed = round(time.perf_counter() - self.episode_start_time, 6)
            info = dict(info) if info is not None else {}
            info[self._stats_key] = {
                "rewards": episode_return,
                "length": episode_length,
                "time": elapsed,
            }
            self.return_queue.append(episode_return)
            self.length_queue.append(episode_length)
            self.time_queue.append(elapsed)
            self.episode_count += 1
            _logger.debug(
                "Episode %d finished: return=%s length=%d",
                self.episode_count,
                episode_return,
                episode_length,
            )
            # Steps after the end (e.g. an outer Autoreset) start a new tally
            self._start_episode()
        else:
            self.episode_returns = episode_return
            self.episode_lengths = episode_length

        return obs, reward, terminated, truncated, info

    def _start_episode(self) -> None:
        self.episode_start_time = time.perf_counter()
        self.episode_returns = 0.0
        self.episode_lengths = 0
