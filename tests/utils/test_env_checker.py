"""
check_env: a conforming env passes every check; each contract violation is
reported as a ValidationError naming the offending part.
"""

import numpy as np
import pytest

from rlenv.spaces import Discrete
from rlenv.utils.env_checker import check_env, data_equivalence
from rlenv.utils.exceptions import ValidationError
from rlenv.wrappers import OrderEnforcing, RecordEpisodeStatistics, TimeLimit
from tests.fakes import CounterEnv, EchoActionEnv, NoInfoEnv, RandomObservationEnv


class TestCheckEnvPasses:
    @pytest.mark.parametrize(
        "factory",
        [CounterEnv, NoInfoEnv, RandomObservationEnv, EchoActionEnv],
    )
    def test_conforming_envs(self, factory):
        result = check_env(factory())
        assert result["checks"] == ["spaces", "reset", "determinism", "step"]

    def test_wrapper_chain(self):
        env = RecordEpisodeStatistics(TimeLimit(OrderEnforcing(CounterEnv()), 10))
        assert check_env(env)["env"] == str(env)

    def test_skip_determinism(self):
        result = check_env(CounterEnv(), skip_determinism_check=True)
        assert "determinism" not in result["checks"]


class BadResetEnv(CounterEnv):
    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        return np.int64(0)


class OutOfSpaceEnv(CounterEnv):
    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        return np.int64(-1), {}


class UnseededEnv(RandomObservationEnv):
    def reset(self, *, seed=None, options=None):
        super().reset(seed=None)
        return self._observe(), {}


class BadRewardEnv(CounterEnv):
    def step(self, action):
        obs, _, terminated, truncated, info = super().step(action)
        return obs, "1.0", terminated, truncated, info


class BadFlagEnv(CounterEnv):
    def step(self, action):
        obs, reward, _, truncated, info = super().step(action)
        return obs, reward, 0, truncated, info


class ListInfoEnv(CounterEnv):
    def step(self, action):
        obs, reward, terminated, truncated, _ = super().step(action)
        return obs, reward, terminated, truncated, []


class FourTupleEnv(CounterEnv):
    def step(self, action):
        return super().step(action)[:4]


class TestCheckEnvFails:
    @pytest.mark.parametrize(
        "env_cls, parameter",
        [
            (BadResetEnv, "reset"),
            (OutOfSpaceEnv, "observation"),
            (UnseededEnv, "seed"),
            (BadRewardEnv, "reward"),
            (BadFlagEnv, "terminated"),
            (ListInfoEnv, "info"),
            (FourTupleEnv, "step"),
        ],
    )
    def test_violation_reported(self, env_cls, parameter):
        with pytest.raises(ValidationError) as exc_info:
            check_env(env_cls())
        assert exc_info.value.parameter_name == parameter

    def test_non_space_attribute(self):
        env = CounterEnv()
        env._action_space = "not a space"
        with pytest.raises(ValidationError, match="action_space"):
            check_env(env)

    def test_non_env_rejected(self):
        with pytest.raises(ValidationError, match="expects an rlenv Env"):
            check_env(object())

    def test_non_finite_reward_only_warns(self, caplog):
        class NanRewardEnv(CounterEnv):
            def step(self, action):
                obs, _, terminated, truncated, info = super().step(action)
                return obs, float("nan"), terminated, truncated, info

        caplog.set_level("WARNING", logger="rlenv")
        check_env(NanRewardEnv())
        assert any("non-finite" in r.getMessage() for r in caplog.records)


class TestDataEquivalence:
    @pytest.mark.parametrize(
        "a, b",
        [
            (1, 1),
            (np.array([1.0, np.nan]), np.array([1.0, np.nan])),
            ((1, {"a": np.zeros(2)}), (1, {"a": np.zeros(2)})),
        ],
    )
    def test_equal(self, a, b):
        assert data_equivalence(a, b)

    @pytest.mark.parametrize(
        "a, b",
        [
            (1, 1.0),
            (np.zeros(2, dtype=np.float32), np.zeros(2, dtype=np.float64)),
            (np.zeros(2), np.zeros(3)),
            ({"a": 1}, {"b": 1}),
            ((1, 2), (1, 2, 3)),
        ],
    )
    def test_not_equal(self, a, b):
        assert not data_equivalence(a, b)

    def test_discrete_samples(self):
        space = Discrete(5, seed=3)
        other = Discrete(5, seed=3)
        assert data_equivalence(space.sample(), other.sample())
