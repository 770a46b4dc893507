"""Force generators - one per flocking impulse, each a filter plus a weighted sum."""

import math
import numpy as np
from numba import njit
from typing import Iterable, Optional, Union

from config import flocker as config
from .attributes import FlockerAttributes
from .force import WeightedForce
from .percept import ObjectCategory, Percept, PerceptArrays

PerceptsLike = Union[PerceptArrays, Iterable[Percept]]


# ============================================================================
# NUMBA JIT-COMPILED ACCUMULATION
# ============================================================================

@njit(cache=True)
def sum_polar(weights: np.ndarray, angles: np.ndarray):
    """Cartesian sum of (weight, angle) contributions."""
    fx = 0.0
    fy = 0.0
    for i in range(weights.shape[0]):
        fx += weights[i] * math.cos(angles[i])
        fy += weights[i] * math.sin(angles[i])
    return fx, fy


def _accumulate(weights: np.ndarray, angles: np.ndarray) -> WeightedForce:
    fx, fy = sum_polar(
        np.ascontiguousarray(weights, dtype=np.float64),
        np.ascontiguousarray(angles, dtype=np.float64),
    )
    return WeightedForce.from_components(fx, fy)


def _arrays(percepts: PerceptsLike) -> PerceptArrays:
    if isinstance(percepts, PerceptArrays):
        return percepts
    return PerceptArrays.from_percepts(percepts)


def _floored(distances: np.ndarray) -> np.ndarray:
    """Distances used in inverse-distance terms; saturates instead of diverging at zero."""
    return np.maximum(distances, config.PERCEPTION["min_distance"])


# ============================================================================
# ADMISSION PREDICATES
# ============================================================================

def clearance_targets(pa: PerceptArrays, flocking: FlockerAttributes) -> np.ndarray:
    """Obstacles and predators within detection range and inside the cone."""
    return (
        pa.is_category(ObjectCategory.OBSTACLE, ObjectCategory.PREDATOR)
        & (pa.distances < flocking.detection_distance)
        & (np.abs(pa.angles) <= flocking.cone)
    )


def separation_targets(pa: PerceptArrays, flocking: FlockerAttributes) -> np.ndarray:
    """Boids closer than the separation distance."""
    return pa.is_category(ObjectCategory.BOID) & (pa.distances < flocking.separation_distance)


def neighbor_targets(pa: PerceptArrays, flocking: FlockerAttributes) -> np.ndarray:
    """Boids between the separation and detection distances (alignment and centering)."""
    return (
        pa.is_category(ObjectCategory.BOID)
        & (pa.distances > flocking.separation_distance)
        & (pa.distances < flocking.detection_distance)
    )


def light_targets(pa: PerceptArrays, flocking: FlockerAttributes) -> np.ndarray:
    """Lights within detection range."""
    return pa.is_category(ObjectCategory.LIGHT) & (pa.distances < flocking.detection_distance)


def green_targets(pa: PerceptArrays) -> np.ndarray:
    return pa.greens == config.PERCEPTION["affinity_green"]


# ============================================================================
# GENERATORS
# ============================================================================

def maintain_clearance(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """
    Steer toward the far edge of the cone, away from threats ahead.

    An obstacle on the left (or dead ahead) pushes toward +cone, one on the
    right toward -cone, harder the closer it is.
    """
    pa = _arrays(percepts)
    mask = clearance_targets(pa, flocking)
    if not mask.any():
        return WeightedForce.zero()

    angles = np.where(pa.angles[mask] <= 0, flocking.cone, -flocking.cone)
    weights = flocking.obstacle_weight * (flocking.clearance / _floored(pa.distances[mask]))
    return _accumulate(weights, angles)


def separate_from_neighbors(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """Move directly away from boids that are too close, inversely to distance."""
    pa = _arrays(percepts)
    mask = separation_targets(pa, flocking)
    if not mask.any():
        return WeightedForce.zero()

    weights = flocking.separation_weight * (
        flocking.separation_distance / _floored(pa.distances[mask])
    )
    return _accumulate(weights, -pa.angles[mask])


def align_with_neighbors(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """Mean of the neighbours' headings, each at alignment_weight."""
    pa = _arrays(percepts)
    mask = neighbor_targets(pa, flocking)
    count = int(mask.sum())
    if count == 0:
        return WeightedForce.zero()

    force = _accumulate(np.full(count, flocking.alignment_weight), pa.orientations[mask])
    force.reweight(1.0 / count)
    return force


def center_on_neighbors(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """Mean of the bearings to neighbours, each at centering_weight."""
    pa = _arrays(percepts)
    mask = neighbor_targets(pa, flocking)
    count = int(mask.sum())
    if count == 0:
        return WeightedForce.zero()

    force = _accumulate(np.full(count, flocking.centering_weight), pa.angles[mask])
    force.reweight(1.0 / count)
    return force


def best_target(pa: PerceptArrays, flocking: FlockerAttributes) -> Optional[int]:
    """Index of the nearest qualifying light, or None. Ties go to the earliest percept."""
    mask = light_targets(pa, flocking)
    if not mask.any():
        return None
    candidates = np.flatnonzero(mask)
    return int(candidates[np.argmin(pa.distances[candidates])])


def follow_light(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """Head for the nearest light, harder the closer it is."""
    pa = _arrays(percepts)
    idx = best_target(pa, flocking)
    if idx is None:
        return WeightedForce.zero()

    distance = max(float(pa.distances[idx]), config.PERCEPTION["min_distance"])
    weight = flocking.follow_weight * (flocking.detection_distance / distance)
    return WeightedForce(weight, float(pa.angles[idx]))


def affinity_for_green(percepts: PerceptsLike, flocking: FlockerAttributes) -> WeightedForce:
    """
    Pull toward anything whose sampled green channel matches the target value.

    Applies to every category and ignores the behaviour flags.
    """
    pa = _arrays(percepts)
    mask = green_targets(pa)
    if not mask.any():
        return WeightedForce.zero()

    scale = config.PERCEPTION["affinity_scale"] * flocking.obstacle_weight
    weights = scale * (flocking.detection_distance / _floored(pa.distances[mask]))
    return _accumulate(weights, pa.angles[mask])
