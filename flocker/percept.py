"""Sensed objects reported to an agent for a single tick."""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class ObjectCategory(Enum):
    """What kind of thing a percept describes."""
    BOID = 0
    OBSTACLE = 1
    PREDATOR = 2
    LIGHT = 3
    OTHER = 4

    @classmethod
    def parse(cls, name: str) -> "ObjectCategory":
        """Look up a category by (case-insensitive) name."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown object category: {name!r}") from None


@dataclass(frozen=True)
class Percept:
    """
    Snapshot of one sensed object.

    Attributes:
        category: What was sensed
        distance: Range to the object (>= 0)
        angle: Bearing relative to the sensing agent's heading, in (-pi, pi]
        orientation: Heading of the sensed object (only meaningful for boids)
        color: Sampled RGB colour, 0-255 per channel
    """
    category: ObjectCategory
    distance: float
    angle: float = 0.0
    orientation: float = 0.0
    color: Tuple[int, int, int] = (0, 0, 0)

    @property
    def green(self) -> int:
        return self.color[1]


@dataclass(frozen=True)
class PerceptArrays:
    """Column view of a percept list so filters can run as boolean masks."""
    categories: np.ndarray
    distances: np.ndarray
    angles: np.ndarray
    orientations: np.ndarray
    greens: np.ndarray

    @classmethod
    def from_percepts(cls, percepts: Iterable[Percept]) -> "PerceptArrays":
        ps = list(percepts)
        n = len(ps)
        categories = np.empty(n, dtype=np.int8)
        distances = np.empty(n, dtype=np.float64)
        angles = np.empty(n, dtype=np.float64)
        orientations = np.empty(n, dtype=np.float64)
        greens = np.empty(n, dtype=np.int32)

        for i, p in enumerate(ps):
            categories[i] = p.category.value
            distances[i] = p.distance
            angles[i] = p.angle
            orientations[i] = p.orientation
            greens[i] = p.green

        return cls(categories, distances, angles, orientations, greens)

    def __len__(self) -> int:
        return self.distances.shape[0]

    def is_category(self, *categories: ObjectCategory) -> np.ndarray:
        """Mask of percepts whose category is any of the given ones."""
        codes = [c.value for c in categories]
        return np.isin(self.categories, codes)
