"""
Contract Guard Tests: RecordEpisodeStatistics

On the step that ends an episode, ``info[stats_key]`` carries the episode's
cumulative reward, length and wall-clock duration. A key already present in
the inner info is a stacking error and must not be overwritten.
"""

import pytest

from rlenv.utils.exceptions import (
    ConfigurationError,
    StatisticsKeyCollisionError,
    ValidationError,
)
from rlenv.wrappers import Autoreset, RecordEpisodeStatistics, TimeLimit
from tests.fakes import CounterEnv, FailingStepEnv, NoInfoEnv


def _run_episode(env, action=0):
    while True:
        result = env.step(action)
        if result[2] or result[3]:
            return result


class TestRecordEpisodeStatistics:
    def test_five_step_episode(self, five_step_env):
        env = RecordEpisodeStatistics(five_step_env)
        env.reset()
        for _ in range(4):
            *_, info = env.step(0)
            assert "episode" not in info
        _, _, terminated, _, info = env.step(0)
        assert terminated
        stats = info["episode"]
        assert stats["length"] == 5
        assert stats["rewards"] == 5.0
        assert stats["time"] >= 0.0
        assert info["count"] == 5

    def test_custom_stats_key(self, five_step_env):
        env = RecordEpisodeStatistics(five_step_env, stats_key="stats")
        env.reset()
        *_, info = _run_episode(env)
        assert info["stats"]["length"] == 5
        assert env.stats_key == "stats"

    def test_injects_into_none_info(self, no_info_env):
        env = RecordEpisodeStatistics(no_info_env)
        env.reset()
        *_, info = env.step(0)
        assert info is None
        *_, info = env.step(0)
        assert info == {"episode": {"rewards": 2.0, "length": 2, "time": info["episode"]["time"]}}

    def test_does_not_mutate_inner_info(self):
        shared = {"tag": "inner"}

        class SharedInfoEnv(CounterEnv):
            def step(self, action):
                obs, reward, terminated, truncated, _ = super().step(action)
                return obs, reward, terminated, truncated, shared

        env = RecordEpisodeStatistics(SharedInfoEnv(terminate_after=1))
        env.reset()
        *_, info = env.step(0)
        assert "episode" in info
        assert shared == {"tag": "inner"}

    def test_truncation_also_records(self, endless_env):
        env = RecordEpisodeStatistics(TimeLimit(endless_env, max_episode_steps=4))
        env.reset()
        _, _, terminated, truncated, info = _run_episode(env)
        assert truncated and not terminated
        assert info["episode"]["length"] == 4

    def test_key_collision_fails(self):
        inner = CounterEnv(terminate_after=1, info_extra={"episode": "taken"})
        env = RecordEpisodeStatistics(inner)
        env.reset()
        with pytest.raises(StatisticsKeyCollisionError, match="episode"):
            env.step(0)

    def test_stacked_recorders_with_same_key_fail(self, five_step_env):
        env = RecordEpisodeStatistics(RecordEpisodeStatistics(five_step_env))
        env.reset()
        with pytest.raises(ConfigurationError):
            _run_episode(env)

    def test_stacked_recorders_with_distinct_keys(self, five_step_env):
        env = RecordEpisodeStatistics(
            RecordEpisodeStatistics(five_step_env), stats_key="outer"
        )
        env.reset()
        *_, info = _run_episode(env)
        assert info["episode"]["length"] == info["outer"]["length"] == 5

    def test_collision_leaves_accumulators_untouched(self):
        inner = CounterEnv(terminate_after=2, info_extra={"episode": "taken"})
        env = RecordEpisodeStatistics(inner)
        env.reset()
        env.step(0)
        with pytest.raises(StatisticsKeyCollisionError):
            env.step(0)
        assert env.episode_lengths == 1
        assert env.episode_returns == 1.0
        assert env.episode_count == 0
        assert len(env.return_queue) == 0

    def test_failed_inner_step_leaves_accumulators(self):
        inner = FailingStepEnv(terminate_after=None)
        env = RecordEpisodeStatistics(inner)
        env.reset()
        env.step(0)
        inner.fail = True
        with pytest.raises(RuntimeError):
            env.step(0)
        assert env.episode_lengths == 1

    def test_queues_and_episode_count(self):
        env = RecordEpisodeStatistics(CounterEnv(terminate_after=2, reward=0.5), buffer_length=2)
        for _ in range(3):
            env.reset()
            _run_episode(env)
        assert env.episode_count == 3
        assert list(env.return_queue) == [1.0, 1.0]
        assert list(env.length_queue) == [2, 2]
        assert len(env.time_queue) == 2

    def test_reset_restarts_tally(self, five_step_env):
        env = RecordEpisodeStatistics(five_step_env)
        env.reset()
        env.step(0)
        env.step(0)
        env.reset()
        *_, info = _run_episode(env)
        assert info["episode"]["length"] == 5

    def test_under_autoreset(self):
        env = Autoreset(RecordEpisodeStatistics(CounterEnv(terminate_after=2)))
        env.reset()
        for _ in range(3):
            *_, info = _run_episode(env)
            assert info["episode"]["length"] == 2
            env.step(0)  # autoreset step

    @pytest.mark.parametrize(
        "kwargs",
        [{"buffer_length": 0}, {"buffer_length": 1.5}, {"stats_key": ""}, {"stats_key": 3}],
    )
    def test_invalid_arguments(self, five_step_env, kwargs):
        with pytest.raises(ValidationError):
            RecordEpisodeStatistics(five_step_env, **kwargs)

    def test_no_info_subclass_is_supported(self):
        env = RecordEpisodeStatistics(NoInfoEnv(terminate_after=1))
        env.reset()
        *_, info = env.step(0)
        assert info["episode"]["length"] == 1

    def test_clock_runs_from_construction_without_reset(self, monkeypatch):
        clock = iter([100.0, 100.25, 100.5])
        monkeypatch.setattr(
            "rlenv.wrappers.common.time.perf_counter", lambda: next(clock)
        )
        env = RecordEpisodeStatistics(CounterEnv(terminate_after=1))
        *_, info = env.step(0)
        assert info["episode"]["time"] == 0.25
