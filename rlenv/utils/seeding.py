# External imports with version comments
import logging  # >=3.10 - Debug logging of generator creation for reproducibility tracking
from typing import (  # >=3.10 - Type hints for seeding helpers
    Any,
    List,
    Optional,
    Tuple,
)

import numpy  # >=2.1.0 - numpy.random.Generator and SeedSequence for deterministic sampling

# Internal imports from core constants and utility exceptions
from ..core.constants import SEED_MAX_VALUE, SEED_MIN_VALUE
from .exceptions import ValidationError

_logger = logging.getLogger(__name__)

# Module exports - seeding interface used by spaces and environments
__all__ = [
    "validate_seed",
    "np_random",
    "spawn_seeds",
]


def validate_seed(seed: Any) -> Tuple[bool, Optional[int], str]:
    """Validate a seed value without normalizing it.

    Accepts None (random seed request), non-negative Python integers within
    ``[SEED_MIN_VALUE, SEED_MAX_VALUE]`` and ``numpy.integer`` values
    (converted to native int). Rejects bools, floats, strings and negative
    integers rather than coercing them.

    Args:
        seed (Any): Seed value to validate

    Returns:
        Tuple[bool, Optional[int], str]: (is_valid, validated_seed, error_message)

    Examples:
        >>> validate_seed(42)
        (True, 42, '')
        >>> validate_seed(None)
        (True, None, '')
        >>> validate_seed(-1)[0]
        False
    """
    if seed is None:
        return (True, None, "")

    if isinstance(seed, bool) or not isinstance(seed, (int, numpy.integer)):
        return (False, None, f"Seed must be integer type, got {type(seed).__name__}")

    seed = int(seed)

    if seed < SEED_MIN_VALUE:
        return (
            False,
            None,
            f"Seed must be non-negative, got {seed} (range: [{SEED_MIN_VALUE}, {SEED_MAX_VALUE}])",
        )

    if seed > SEED_MAX_VALUE:
        return (
            False,
            None,
            f"Seed {seed} exceeds maximum {SEED_MAX_VALUE} (range: [{SEED_MIN_VALUE}, {SEED_MAX_VALUE}])",
        )

    return (True, seed, "")


def np_random(seed: Optional[int] = None) -> Tuple[numpy.random.Generator, int]:
    """Create a seeded ``numpy.random.Generator`` and report the seed actually used.

    When ``seed`` is None a seed is drawn from OS entropy through
    ``numpy.random.SeedSequence`` so that the run can still be reproduced
    from the returned value.

    Args:
        seed (Optional[int]): Seed value for RNG initialization, None for random seed generation

    Returns:
        Tuple[numpy.random.Generator, int]: Generator and the seed used to build it

    Raises:
        ValidationError: If seed validation fails
    """
    is_valid, normalized_seed, error_message = validate_seed(seed)
    if not is_valid:
        raise ValidationError(
            f"Invalid seed for RNG creation: {error_message}",
            parameter_name="seed",
            parameter_value=seed,
            expected_format="non-negative integer or None",
        )

    if normalized_seed is None:
        # 63-bit draw so the reported seed passes validate_seed when replayed
        entropy = numpy.random.SeedSequence().generate_state(1, dtype=numpy.uint64)[0]
        normalized_seed = int(entropy) >> 1

    seed_used = normalized_seed
    rng = numpy.random.Generator(numpy.random.PCG64(numpy.random.SeedSequence(seed_used)))

    _logger.debug("Created seeded RNG with seed: %s", seed_used)
    return rng, seed_used


def spawn_seeds(rng: numpy.random.Generator, count: int) -> List[int]:
    """Draw ``count`` child seeds from ``rng`` for seeding sub-spaces deterministically."""
    if count < 0:
        raise ValidationError(
            f"count must be non-negative, got {count}",
            parameter_name="count",
            parameter_value=count,
        )
    return [
        int(value)
        for value in rng.integers(SEED_MIN_VALUE, 2**31 - 1, size=count, dtype=numpy.int64)
    ]
