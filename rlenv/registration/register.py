"""
Environment registry.

``register`` stores an :class:`~rlenv.config.EnvSpec` under a versioned id
and ``make`` turns the id back into a wrapped, ready-to-reset environment::

    >>> register("Counter-v0", "my_pkg.envs:CounterEnv", max_episode_steps=10)
    >>> env = make("Counter-v0")
    >>> env
    <TimeLimit<OrderEnforcing<CounterEnv<Counter-v0>>>>
"""

from __future__ import annotations

import importlib
import re
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..config.models import EnvSpec
from ..core.constants import ENV_ID_PATTERN
from ..envs import Env
from ..logging import ComponentType, get_component_logger
from ..utils.exceptions import ConfigurationError, NameNotFound, ValidationError
from ..wrappers import Autoreset, OrderEnforcing, TimeLimit

__all__ = [
    "registry",
    "register",
    "unregister",
    "spec",
    "make",
    "load_entry_point",
    "pprint_registry",
]

_logger = get_component_logger(__name__, ComponentType.REGISTRATION)

_ENV_ID_RE = re.compile(ENV_ID_PATTERN)

# Global registry of environment specs keyed by id
registry: Dict[str, EnvSpec] = {}


def _validate_env_id(env_id: Any) -> str:
    if not isinstance(env_id, str) or not _ENV_ID_RE.match(env_id):
        raise ValidationError(
            f"Malformed environment id {env_id!r}",
            parameter_name="id",
            parameter_value=env_id,
            expected_format="[namespace/]Name-vN, e.g. 'CartPole-v1'",
        )
    return env_id


def register(
    id: str,
    entry_point: Union[str, Callable[..., Env[Any, Any]]],
    *,
    max_episode_steps: Optional[int] = None,
    order_enforce: bool = True,
    autoreset: bool = False,
    kwargs: Optional[Dict[str, Any]] = None,
) -> EnvSpec:
    """Register an environment under ``id``.

    Args:
        id: Versioned id, ``[namespace/]Name-vN``
        entry_point: ``"module.path:Attr"`` or a factory callable
        max_episode_steps: Step budget applied with TimeLimit on make()
        order_enforce: Apply OrderEnforcing on make()
        autoreset: Apply Autoreset on make()
        kwargs: Default constructor kwargs

    Returns:
        The stored spec

    Raises:
        ValidationError: If ``id`` is malformed
        ConfigurationError: If any other field fails validation
    """
    _validate_env_id(id)
    try:
        env_spec = EnvSpec(
            id=id,
            entry_point=entry_point,
            max_episode_steps=max_episode_steps,
            order_enforce=order_enforce,
            autoreset=autoreset,
            kwargs=dict(kwargs or {}),
        )
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"Invalid registration for {id!r}: {exc}",
            config_parameter="env_spec",
            parameter_value=id,
        ) from exc

    if id in registry:
        _logger.warning("Overriding environment %s already in registry", id)
    registry[id] = env_spec
    _logger.debug("Registered %s -> %s", id, entry_point)
    return env_spec


def unregister(id: str) -> bool:
    """Remove ``id`` from the registry; return whether it was present."""
    removed = registry.pop(id, None) is not None
    if removed:
        _logger.debug("Unregistered %s", id)
    return removed


def spec(id: str) -> EnvSpec:
    """Look up the spec registered under ``id``.

    Raises:
        NameNotFound: If ``id`` is not registered
    """
    env_spec = registry.get(id)
    if env_spec is None:
        known = ", ".join(sorted(registry)) or "none"
        raise NameNotFound(
            f"Environment {id!r} doesn't exist. Registered environments: {known}",
            config_parameter="id",
            parameter_value=id,
        )
    return env_spec


def load_entry_point(name: str) -> Callable[..., Any]:
    """Import ``"module.path:Attr"`` and return the attribute.

    Raises:
        ConfigurationError: If the module or attribute cannot be loaded
    """
    module_name, _, attr_name = name.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(
            f"Cannot import module {module_name!r} for entry point {name!r}",
            config_parameter="entry_point",
            parameter_value=name,
        ) from exc
    try:
        target = module
        for part in attr_name.split("."):
            target = getattr(target, part)
    except AttributeError as exc:
        raise ConfigurationError(
            f"Module {module_name!r} has no attribute {attr_name!r}",
            config_parameter="entry_point",
            parameter_value=name,
        ) from exc
    return target  # type: ignore[return-value]


def make(id: Union[str, EnvSpec], **kwargs: Any) -> Env[Any, Any]:
    """Create an environment from a registered id (or a spec).

    Call kwargs override the spec's kwargs. The result is wrapped in
    OrderEnforcing, TimeLimit and Autoreset, innermost first, as the spec
    requests.

    Raises:
        NameNotFound: If ``id`` is not registered
        ConfigurationError: If the entry point cannot be loaded or does not
            produce an Env
    """
    env_spec = id if isinstance(id, EnvSpec) else spec(id)

    creator = (
        load_entry_point(env_spec.entry_point)
        if isinstance(env_spec.entry_point, str)
        else env_spec.entry_point
    )
    env_kwargs = {**env_spec.kwargs, **kwargs}
    env = creator(**env_kwargs)
    if not isinstance(env, Env):
        raise ConfigurationError(
            f"Entry point for {env_spec.id!r} returned {type(env).__name__}, not an Env",
            config_parameter="entry_point",
            parameter_value=env_spec.entry_point,
        )

    env.unwrapped.spec = env_spec.model_copy(update={"kwargs": env_kwargs})

    if env_spec.order_enforce:
        env = OrderEnforcing(env)
    if env_spec.max_episode_steps is not None:
        env = TimeLimit(env, max_episode_steps=env_spec.max_episode_steps)
    if env_spec.autoreset:
        env = Autoreset(env)

    _logger.debug("Made %s", env)
    return env


def pprint_registry(num_cols: int = 3, print_output: bool = True) -> Optional[str]:
    """Pretty-print registered ids grouped by namespace.

    Returns the text instead of printing when ``print_output`` is False.
    """
    by_namespace: Dict[str, List[str]] = {}
    for env_spec in registry.values():
        by_namespace.setdefault(env_spec.namespace or "", []).append(env_spec.id)

    if not by_namespace:
        output = "No environments registered"
    else:
        width = max(len(env_id) for ids in by_namespace.values() for env_id in ids)
        blocks = []
        for namespace in sorted(by_namespace):
            ids = sorted(by_namespace[namespace])
            header = f"===== {namespace or 'default'} ====="
            rows = [
                " ".join(env_id.ljust(width) for env_id in ids[i : i + num_cols]).rstrip()
                for i in range(0, len(ids), num_cols)
            ]
            blocks.append("\n".join([header, *rows]))
        output = "\n\n".join(blocks)

    if print_output:
        print(output)
        return None
    return output
