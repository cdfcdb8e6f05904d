"""
Registry contract: ids are versioned, ``make`` resolves entry points, merges
kwargs and applies OrderEnforcing, TimeLimit and Autoreset innermost first.
"""

import logging

import pytest

from rlenv import make, pprint_registry, register, spec, unregister
from rlenv.config import EnvSpec
from rlenv.registration import load_entry_point, registry
from rlenv.utils.exceptions import (
    ConfigurationError,
    NameNotFound,
    ResetNeeded,
    ValidationError,
)
from rlenv.wrappers import Autoreset, OrderEnforcing, TimeLimit
from tests.fakes import CounterEnv, make_counter_env

pytestmark = pytest.mark.usefixtures("clean_registry")


class TestRegister:
    @pytest.mark.parametrize(
        "env_id", ["Counter-v0", "Counter-v12", "fakes/Counter-v1", "My_Env.x-v3"]
    )
    def test_valid_ids(self, env_id):
        env_spec = register(env_id, "tests.fakes:CounterEnv")
        assert spec(env_id) is env_spec

    @pytest.mark.parametrize("env_id", ["Counter", "Counter-v", "Counter-vX", "", None, 5])
    def test_malformed_ids_rejected(self, env_id):
        with pytest.raises(ValidationError):
            register(env_id, "tests.fakes:CounterEnv")

    def test_id_parts(self):
        env_spec = register("fakes/Counter-v2", "tests.fakes:CounterEnv")
        assert env_spec.namespace == "fakes"
        assert env_spec.name == "Counter"
        assert env_spec.version == 2
        assert register("Counter-v0", make_counter_env).namespace is None

    def test_reregistration_overrides_with_warning(self, caplog):
        register("Counter-v0", "tests.fakes:CounterEnv")
        with caplog.at_level(logging.WARNING, logger="rlenv"):
            register("Counter-v0", make_counter_env, max_episode_steps=7)
        assert any("Overriding" in r.getMessage() for r in caplog.records)
        assert spec("Counter-v0").max_episode_steps == 7

    @pytest.mark.parametrize(
        "fields",
        [
            {"entry_point": "tests.fakes.CounterEnv"},
            {"entry_point": "tests.fakes:CounterEnv", "max_episode_steps": 0},
            {"entry_point": "tests.fakes:CounterEnv", "kwargs": {1: "x"}},
        ],
    )
    def test_invalid_fields_raise_configuration_error(self, fields):
        entry_point = fields.pop("entry_point")
        with pytest.raises(ConfigurationError):
            register("Counter-v0", entry_point, **fields)
        assert "Counter-v0" not in registry

    def test_unregister(self):
        register("Counter-v0", "tests.fakes:CounterEnv")
        assert unregister("Counter-v0") is True
        assert unregister("Counter-v0") is False
        with pytest.raises(NameNotFound):
            spec("Counter-v0")

    def test_unknown_id(self):
        with pytest.raises(NameNotFound, match="doesn't exist"):
            spec("Missing-v0")
        with pytest.raises(ConfigurationError):
            make("Missing-v0")


class TestMake:
    def test_default_wrapper_order(self):
        register("Counter-v0", "tests.fakes:CounterEnv", max_episode_steps=10)
        env = make("Counter-v0")
        assert str(env) == "<TimeLimit<OrderEnforcing<CounterEnv<Counter-v0>>>>"
        assert isinstance(env, TimeLimit)
        assert isinstance(env.env, OrderEnforcing)
        assert isinstance(env.unwrapped, CounterEnv)

    def test_autoreset_outermost(self):
        register("Counter-v0", make_counter_env, max_episode_steps=5, autoreset=True)
        env = make("Counter-v0")
        assert isinstance(env, Autoreset)
        assert str(env) == "<Autoreset<TimeLimit<OrderEnforcing<CounterEnv<Counter-v0>>>>>"

    def test_order_enforcing_can_be_skipped(self):
        register("Counter-v0", CounterEnv, order_enforce=False)
        env = make("Counter-v0")
        assert type(env) is CounterEnv

    def test_made_env_enforces_reset(self):
        register("Counter-v0", "tests.fakes:CounterEnv")
        env = make("Counter-v0")
        with pytest.raises(ResetNeeded):
            env.step(0)

    def test_kwargs_merge_call_over_spec(self):
        register(
            "Counter-v0",
            "tests.fakes:CounterEnv",
            kwargs={"terminate_after": 2, "reward": 3.0},
        )
        env = make("Counter-v0", reward=0.5)
        assert env.unwrapped.terminate_after == 2
        assert env.unwrapped.reward == 0.5
        assert env.spec.kwargs == {"terminate_after": 2, "reward": 0.5}
        assert spec("Counter-v0").kwargs == {"terminate_after": 2, "reward": 3.0}

    def test_spec_attached_to_unwrapped(self):
        registered = register("Counter-v0", "tests.fakes:CounterEnv", max_episode_steps=4)
        env = make("Counter-v0")
        assert env.unwrapped.spec.id == "Counter-v0"
        assert env.unwrapped.spec.max_episode_steps == 4
        assert env.unwrapped.spec is not registered

    def test_time_limit_from_spec(self):
        register("Counter-v0", "tests.fakes:CounterEnv", max_episode_steps=2,
                 kwargs={"terminate_after": None})
        env = make("Counter-v0")
        env.reset(seed=0)
        env.step(0)
        assert env.step(0)[3]

    def test_make_from_spec_object(self):
        env_spec = EnvSpec(id="Unregistered-v0", entry_point=make_counter_env)
        env = env_spec.make(terminate_after=1)
        assert env.unwrapped.terminate_after == 1
        assert str(env) == "<OrderEnforcing<CounterEnv<Unregistered-v0>>>"

    @pytest.mark.parametrize(
        "entry_point", ["tests.no_such_module:Env", "tests.fakes:NoSuchEnv"]
    )
    def test_unloadable_entry_point(self, entry_point):
        register("Broken-v0", entry_point)
        with pytest.raises(ConfigurationError, match="entry_point|Cannot import|no attribute"):
            make("Broken-v0")

    def test_non_env_result_rejected(self):
        register("NotAnEnv-v0", lambda: object())
        with pytest.raises(ConfigurationError, match="not an Env"):
            make("NotAnEnv-v0")


class TestHelpers:
    def test_load_entry_point(self):
        assert load_entry_point("tests.fakes:CounterEnv") is CounterEnv
        assert load_entry_point("tests.fakes:CounterEnv.reset") is CounterEnv.reset

    def test_pprint_registry_groups_by_namespace(self):
        register("Counter-v0", "tests.fakes:CounterEnv")
        register("fakes/Echo-v0", "tests.fakes:EchoActionEnv")
        text = pprint_registry(print_output=False)
        assert "===== default =====" in text
        assert "===== fakes =====" in text
        assert text.index("Counter-v0") < text.index("fakes/Echo-v0")

    def test_pprint_registry_columns(self, capsys):
        for i in range(4):
            register(f"Env{i}-v0", "tests.fakes:CounterEnv")
        assert pprint_registry(num_cols=2) is None
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0] == "===== default ====="
        assert len(lines) == 3

    def test_pprint_empty_registry(self):
        assert pprint_registry(print_output=False) == "No environments registered"
