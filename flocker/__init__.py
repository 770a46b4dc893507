"""Per-tick steering decisions for flocking agents."""

from .percept import ObjectCategory, Percept, PerceptArrays
from .force import WeightedForce
from .attributes import ConfigError, FlockerAttributes, merge
from .flocker import (
    ActionType,
    Decision,
    Flocker,
    ForceSnapshot,
    Intention,
    InteractiveBehavior,
    deliberate,
)

__all__ = [
    "ObjectCategory", "Percept", "PerceptArrays",
    "WeightedForce",
    "ConfigError", "FlockerAttributes", "merge",
    "ActionType", "Decision", "Flocker", "ForceSnapshot", "Intention",
    "InteractiveBehavior", "deliberate",
]
