"""
Discrete space: construction, sampling, membership and equality.
"""

import numpy as np
import pytest

from rlenv.core.enums import SpaceKind
from rlenv.spaces import Discrete
from rlenv.utils.exceptions import ValidationError


class TestDiscreteConstruction:
    def test_defaults(self):
        space = Discrete(5)
        assert space.n == 5
        assert space.start == 0
        assert space.shape == ()
        assert space.dtype == np.int64
        assert space.kind is SpaceKind.DISCRETE
        assert not space.has_elementwise_bounds

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_n_rejected(self, n):
        with pytest.raises(ValidationError, match="positive"):
            Discrete(n)

    @pytest.mark.parametrize("n", [2.5, "3", True, None])
    def test_non_integer_n_rejected(self, n):
        with pytest.raises(ValidationError):
            Discrete(n)

    def test_non_integer_start_rejected(self):
        with pytest.raises(ValidationError, match="start"):
            Discrete(3, start=0.5)

    def test_numpy_integers_accepted(self):
        space = Discrete(np.int32(4), start=np.int64(-1))
        assert space.n == 4 and space.start == -1


class TestDiscreteSampling:
    def test_samples_stay_in_shifted_range(self):
        """Discrete(5, start=-2) only ever yields -2..2."""
        space = Discrete(5, start=-2, seed=0)
        samples = {int(space.sample()) for _ in range(10_000)}
        assert samples == {-2, -1, 0, 1, 2}
        assert 3 not in samples and -3 not in samples

    def test_sample_dtype(self):
        assert isinstance(Discrete(3).sample(), np.int64)

    def test_seed_reproducibility(self):
        a = Discrete(100, seed=123)
        b = Discrete(100, seed=123)
        assert [a.sample() for _ in range(20)] == [b.sample() for _ in range(20)]

    def test_reseed_restarts_sequence(self):
        space = Discrete(100)
        space.seed(7)
        first = [space.sample() for _ in range(10)]
        assert space.seed(7) == [7]
        assert [space.sample() for _ in range(10)] == first


class TestDiscreteContains:
    @pytest.mark.parametrize("value", [-2, 0, 2, np.int64(1), np.int8(-2), np.array(0)])
    def test_members(self, value):
        assert Discrete(5, start=-2).contains(value)

    @pytest.mark.parametrize(
        "value", [3, -3, 1.0, True, "1", None, np.array([0]), np.array(1.0), [1]]
    )
    def test_non_members(self, value):
        assert not Discrete(5, start=-2).contains(value)

    def test_in_operator(self):
        assert 1 in Discrete(2)
        assert 2 not in Discrete(2)


class TestDiscreteEquality:
    def test_reflexive_and_symmetric(self):
        a, b = Discrete(5, start=-2), Discrete(5, start=-2)
        assert a == a
        assert a == b and b == a

    def test_sensitive_to_n_and_start(self):
        assert Discrete(5, -2) != Discrete(4, -2)
        assert Discrete(5, -2) != Discrete(5, 0)

    def test_not_equal_to_other_types(self):
        assert Discrete(2) != 2
        assert Discrete(2) != "Discrete(2)"

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Discrete(2))

    def test_repr(self):
        assert repr(Discrete(3)) == "Discrete(3)"
        assert repr(Discrete(3, start=1)) == "Discrete(3, start=1)"
