"""
Shared pytest fixtures for the rlenv test suite.

Fake environments live in :mod:`tests.fakes`; fixtures here hand out fresh
instances and keep the global registry isolated between tests.
"""

import logging

import pytest

from rlenv.registration import registry
from tests.fakes import CounterEnv, EchoActionEnv, NoInfoEnv


@pytest.fixture
def counter_env():
    """Env that terminates on its 3rd step with reward 1."""
    return CounterEnv(terminate_after=3)


@pytest.fixture
def endless_env():
    """Env that never terminates on its own."""
    return CounterEnv(terminate_after=None)


@pytest.fixture
def five_step_env():
    """Env with 5-step episodes paying reward 1 per step."""
    return CounterEnv(terminate_after=5, reward=1.0)


@pytest.fixture
def no_info_env():
    return NoInfoEnv(terminate_after=2)


@pytest.fixture
def echo_env():
    return EchoActionEnv()


@pytest.fixture
def clean_registry():
    """Snapshot the registry and restore it after the test."""
    saved = dict(registry)
    registry.clear()
    yield registry
    registry.clear()
    registry.update(saved)


@pytest.fixture
def rlenv_debug_logs(caplog):
    """Capture DEBUG records from the rlenv logger hierarchy."""
    caplog.set_level(logging.DEBUG, logger="rlenv")
    return caplog
