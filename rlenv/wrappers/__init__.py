"""Concrete wrappers: lifecycle enforcement and observation/action/reward transforms."""

from .common import Autoreset, OrderEnforcing, RecordEpisodeStatistics, TimeLimit
from .transform_action import ClipAction, TransformAction
from .transform_observation import TransformObservation
from .transform_reward import ClipReward, TransformReward

__all__ = [
    "OrderEnforcing",
    "Autoreset",
    "TimeLimit",
    "RecordEpisodeStatistics",
    "ClipAction",
    "TransformAction",
    "ClipReward",
    "TransformReward",
    "TransformObservation",
]
