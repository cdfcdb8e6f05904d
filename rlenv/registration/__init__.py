"""Environment registration: ``register`` ids and ``make`` wrapped envs from them."""

from .register import (
    load_entry_point,
    make,
    pprint_registry,
    register,
    registry,
    spec,
    unregister,
)

__all__ = [
    "registry",
    "register",
    "unregister",
    "spec",
    "make",
    "load_entry_point",
    "pprint_registry",
]
