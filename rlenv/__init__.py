"""
rlenv: a standard contract for reinforcement-learning environments.

The package provides typed spaces, the Env/Wrapper lifecycle and a set of
composable wrappers::

    >>> import rlenv
    >>> rlenv.register("Counter-v0", "my_pkg.envs:CounterEnv", max_episode_steps=100)
    >>> env = rlenv.make("Counter-v0")
    >>> obs, info = env.reset(seed=0)
"""

from __future__ import annotations

from . import spaces, wrappers
from .config import EnvSpec, WrapperStackConfig, apply_wrappers
from .core.constants import PACKAGE_NAME, PACKAGE_VERSION
from .envs import ActionWrapper, Env, ObservationWrapper, RewardWrapper, Wrapper
from .registration import make, pprint_registry, register, registry, spec, unregister
from .utils.exceptions import (
    ConfigurationError,
    IncompatibleSpaceError,
    NameNotFound,
    ResetNeeded,
    RLEnvError,
    StateError,
    StatisticsKeyCollisionError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "spaces",
    "wrappers",
    "Env",
    "Wrapper",
    "ObservationWrapper",
    "RewardWrapper",
    "ActionWrapper",
    "EnvSpec",
    "WrapperStackConfig",
    "apply_wrappers",
    "register",
    "unregister",
    "make",
    "spec",
    "registry",
    "pprint_registry",
    "RLEnvError",
    "ValidationError",
    "StateError",
    "ResetNeeded",
    "ConfigurationError",
    "StatisticsKeyCollisionError",
    "IncompatibleSpaceError",
    "NameNotFound",
]
