"""
Contract tests: Env base class.

Covers construction validation, seeding, render-mode handling, real-time
pacing and the context-manager protocol.
"""

import time

import numpy as np
import pytest

from rlenv.envs import Env
from rlenv.spaces import Discrete
from rlenv.utils.exceptions import ValidationError
from tests.fakes import CounterEnv, RandomObservationEnv


class TestEnvConstruction:
    def test_spaces_exposed(self, counter_env):
        assert counter_env.action_space == Discrete(2)
        assert counter_env.observation_space == Discrete(10_000)

    def test_unwrapped_is_self(self, counter_env):
        assert counter_env.unwrapped is counter_env

    def test_step_is_abstract(self):
        class Incomplete(Env):
            pass

        with pytest.raises(TypeError):
            Incomplete(Discrete(2), Discrete(2))

    def test_non_space_rejected(self):
        class Minimal(Env):
            def step(self, action):
                return 0, 0.0, False, False, None

        with pytest.raises(ValidationError, match="action_space"):
            Minimal("not a space", Discrete(2))
        with pytest.raises(ValidationError, match="observation_space"):
            Minimal(Discrete(2), [0, 1])

    def test_unsupported_render_mode_rejected(self):
        with pytest.raises(ValidationError, match="render_mode"):
            CounterEnv(render_mode="ascii")

    @pytest.mark.parametrize("mode", [None, "rgb_array", "human"])
    def test_supported_render_modes(self, mode):
        assert CounterEnv(render_mode=mode).render_mode == mode

    def test_str_without_spec(self, counter_env):
        assert str(counter_env) == "<CounterEnv>"


class TestEnvSeeding:
    def test_reset_seed_reproducible(self):
        env = RandomObservationEnv()
        first, _ = env.reset(seed=42)
        second, _ = env.reset(seed=42)
        np.testing.assert_array_equal(first, second)
        assert env.np_random_seed == 42

    def test_different_seeds_differ(self):
        env = RandomObservationEnv()
        first, _ = env.reset(seed=1)
        second, _ = env.reset(seed=2)
        assert not np.array_equal(first, second)

    def test_unseeded_generator_reports_seed(self):
        env = RandomObservationEnv()
        assert isinstance(env.np_random, np.random.Generator)
        assert isinstance(env.np_random_seed, int)
        assert env.np_random_seed >= 0

    def test_base_reset_is_a_seeding_hook(self):
        env = CounterEnv()
        assert Env.reset(env, seed=3) is None
        assert env.np_random_seed == 3
        assert Env.reset(env) is None
        assert env.np_random_seed == 3

    def test_assigned_generator_marks_seed_unknown(self):
        env = RandomObservationEnv()
        env.np_random = np.random.default_rng(0)
        assert env.np_random_seed == -1

    @pytest.mark.parametrize("seed", [-1, 1.5, "7", True])
    def test_invalid_seed_rejected(self, seed):
        with pytest.raises(ValidationError):
            RandomObservationEnv().reset(seed=seed)


class TestEnvRendering:
    def test_rgb_array_returns_frame(self):
        env = CounterEnv(render_mode="rgb_array")
        env.reset()
        frame = env.render()
        assert frame.shape == (4, 4, 3) and frame.dtype == np.uint8

    def test_default_render_returns_none(self):
        env = RandomObservationEnv()
        assert env.render() is None

    def test_human_mode_paces_steps(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr(time, "sleep", sleeps.append)
        env = CounterEnv(render_mode="human", terminate_after=None)
        env.reset()
        env.step(0)
        env.step(0)
        assert sleeps == [pytest.approx(1 / 1000)] * 2

    @pytest.mark.parametrize("mode", [None, "rgb_array"])
    def test_other_modes_do_not_pace(self, monkeypatch, mode):
        sleeps = []
        monkeypatch.setattr(time, "sleep", sleeps.append)
        env = CounterEnv(render_mode=mode, terminate_after=None)
        env.reset()
        env.step(0)
        assert sleeps == []


class TestEnvLifecycle:
    def test_context_manager_closes(self):
        with CounterEnv() as env:
            env.reset()
        assert env.closed

    def test_context_manager_propagates_errors(self):
        with pytest.raises(RuntimeError):
            with CounterEnv() as env:
                raise RuntimeError("boom")
        assert env.closed

    def test_step_returns_five_tuple(self, counter_env):
        counter_env.reset()
        obs, reward, terminated, truncated, info = counter_env.step(0)
        assert obs == 1 and reward == 1.0
        assert terminated is False and truncated is False
        assert info == {"count": 1}
