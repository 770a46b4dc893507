"""Directional influence on an agent, expressed in the agent's own frame."""

import math
from typing import Tuple

from .geometry import normalize_angle


class WeightedForce:
    """
    A 2D force relative to an agent's heading.

    fx is the push forward (positive) or back along the heading, fy the push
    to the right (positive) or left. The force's weight is its magnitude and
    its angle is the direction relative to the heading, in (-pi, pi].
    The zero force has no meaningful angle.
    """

    __slots__ = ("fx", "fy")

    def __init__(self, weight: float = 0.0, angle: float = 0.0):
        self.fx = weight * math.cos(angle)
        self.fy = weight * math.sin(angle)

    @classmethod
    def zero(cls) -> "WeightedForce":
        return cls()

    @classmethod
    def from_components(cls, fx: float, fy: float) -> "WeightedForce":
        force = cls()
        force.fx = float(fx)
        force.fy = float(fy)
        return force

    @property
    def weight(self) -> float:
        return math.hypot(self.fx, self.fy)

    @property
    def angle(self) -> float:
        if self.is_zero():
            return 0.0
        return normalize_angle(math.atan2(self.fy, self.fx))

    def is_zero(self) -> bool:
        return self.fx == 0.0 and self.fy == 0.0

    def add_in(self, other: "WeightedForce"):
        """Accumulate another force (vector sum)."""
        self.fx += other.fx
        self.fy += other.fy

    def reweight(self, factor: float):
        """Scale the force by a factor."""
        self.fx *= factor
        self.fy *= factor

    def copy(self) -> "WeightedForce":
        return WeightedForce.from_components(self.fx, self.fy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.fx, self.fy)

    def to_dict(self) -> dict:
        return {"weight": self.weight, "angle": self.angle, "fx": self.fx, "fy": self.fy}

    def __eq__(self, other):
        if not isinstance(other, WeightedForce):
            return NotImplemented
        return self.fx == other.fx and self.fy == other.fy

    __hash__ = None

    def __repr__(self):
        return f"WeightedForce(weight={self.weight:.4g}, angle={self.angle:.4g})"
