import numpy as np
import pytest

from rlenv.core.constants import SEED_MAX_VALUE
from rlenv.utils.exceptions import ValidationError
from rlenv.utils.seeding import np_random, spawn_seeds, validate_seed


class TestValidateSeed:
    @pytest.mark.parametrize("seed", [None, 0, 42, np.int32(7), SEED_MAX_VALUE])
    def test_accepts(self, seed):
        is_valid, value, message = validate_seed(seed)
        assert is_valid and message == ""
        assert value == (None if seed is None else int(seed))

    @pytest.mark.parametrize("seed", [-1, 1.5, "3", True, SEED_MAX_VALUE + 1])
    def test_rejects(self, seed):
        is_valid, value, message = validate_seed(seed)
        assert not is_valid
        assert value is None
        assert message


class TestNpRandom:
    def test_same_seed_same_stream(self):
        rng_a, seed_a = np_random(123)
        rng_b, seed_b = np_random(123)
        assert seed_a == seed_b == 123
        np.testing.assert_array_equal(rng_a.random(5), rng_b.random(5))

    def test_unseeded_reports_replayable_seed(self):
        rng, seed = np_random()
        replay, _ = np_random(seed)
        assert validate_seed(seed)[0]
        np.testing.assert_array_equal(rng.random(3), replay.random(3))

    def test_invalid_seed_raises(self):
        with pytest.raises(ValidationError, match="Invalid seed"):
            np_random(-5)


class TestSpawnSeeds:
    def test_deterministic(self):
        assert spawn_seeds(np_random(1)[0], 4) == spawn_seeds(np_random(1)[0], 4)

    def test_count_and_range(self):
        seeds = spawn_seeds(np_random(0)[0], 3)
        assert len(seeds) == 3
        assert all(isinstance(s, int) and s >= 0 for s in seeds)

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            spawn_seeds(np_random(0)[0], -1)
