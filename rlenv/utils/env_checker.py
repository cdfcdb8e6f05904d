"""
Runtime conformance checks for environment implementations.

:func:`check_env` exercises an environment once through ``reset`` and
``step`` and raises :class:`~rlenv.utils.exceptions.ValidationError` on the
first contract violation it finds.
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np

from ..envs import Env
from ..logging import ComponentType, get_component_logger
from ..spaces import Space
from .exceptions import ValidationError

__all__ = ["check_env", "data_equivalence"]

_logger = get_component_logger(__name__, ComponentType.UTILS)

_CHECK_SEED = 42


def data_equivalence(a: Any, b: Any) -> bool:
    """Structural equality for observations (arrays, tuples, dicts, scalars)."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(data_equivalence(a[k], b[k]) for k in a)
    if isinstance(a, (tuple, list)):
        return len(a) == len(b) and all(data_equivalence(x, y) for x, y in zip(a, b))
    if isinstance(a, np.ndarray):
        return a.shape == b.shape and a.dtype == b.dtype and bool(
            np.array_equal(a, b, equal_nan=np.issubdtype(a.dtype, np.floating))
        )
    return bool(a == b)


def _fail(message: str, parameter_name: str, value: Any = None) -> None:
    raise ValidationError(message, parameter_name=parameter_name, parameter_value=value)


def _check_spaces(env: Env[Any, Any]) -> None:
    for name in ("action_space", "observation_space"):
        space = getattr(env, name)
        if not isinstance(space, Space):
            _fail(f"{name} must be an rlenv Space, got {type(space).__name__}", name, space)


def _check_reset(env: Env[Any, Any]) -> Any:
    result = env.reset(seed=_CHECK_SEED)
    if not isinstance(result, tuple) or len(result) != 2:
        _fail(
            f"reset() must return an (observation, info) tuple, got {result!r}",
            "reset",
            result,
        )
    obs, info = result
    if obs not in env.observation_space:
        _fail(
            f"reset() observation is not contained in {env.observation_space}",
            "observation",
            obs,
        )
    if info is not None and not isinstance(info, dict):
        _fail(f"reset() info must be a dict or None, got {type(info).__name__}", "info", info)
    return obs


def _check_step(env: Env[Any, Any]) -> None:
    result = env.step(env.action_space.sample())
    if not isinstance(result, tuple) or len(result) != 5:
        _fail(
            "step() must return (observation, reward, terminated, truncated, info)",
            "step",
            result,
        )
    obs, reward, terminated, truncated, info = result
    if obs not in env.observation_space:
        _fail(
            f"step() observation is not contained in {env.observation_space}",
            "observation",
            obs,
        )
    if isinstance(reward, (bool, np.bool_)) or not isinstance(
        reward, (int, float, np.integer, np.floating)
    ):
        _fail(f"step() reward must be a real number, got {type(reward).__name__}", "reward", reward)
    elif not np.isfinite(reward):
        _logger.warning("step() returned a non-finite reward: %s", reward)
    for name, flag in (("terminated", terminated), ("truncated", truncated)):
        if not isinstance(flag, (bool, np.bool_)):
            _fail(f"step() {name} must be a bool, got {type(flag).__name__}", name, flag)
    if info is not None and not isinstance(info, dict):
        _fail(f"step() info must be a dict or None, got {type(info).__name__}", "info", info)


def check_env(env: Env[Any, Any], skip_determinism_check: bool = False) -> Dict[str, Any]:
    """Check that ``env`` follows the environment contract.

    Args:
        env: Environment (or wrapper chain) to check
        skip_determinism_check: Skip the identical-seed reset comparison

    Returns:
        Summary of the checks that ran

    Raises:
        ValidationError: On the first violation found
    """
    if not isinstance(env, Env):
        _fail(f"check_env expects an rlenv Env, got {type(env).__name__}", "env", env)

    checks: List[str] = []
    _check_spaces(env)
    checks.append("spaces")

    first_obs = _check_reset(env)
    checks.append("reset")

    if not skip_determinism_check:
        second_obs, _ = env.reset(seed=_CHECK_SEED)
        if not data_equivalence(first_obs, second_obs):
            _fail(
                "reset() with the same seed produced different observations",
                "seed",
                _CHECK_SEED,
            )
        checks.append("determinism")

    _check_step(env)
    checks.append("step")

    _logger.debug("check_env passed for %s: %s", env, checks)
    return {"env": str(env), "checks": checks}
