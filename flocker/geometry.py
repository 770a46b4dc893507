"""Angle helpers shared by percepts, forces and attributes."""

import math

TWO_PI = 2 * math.pi
DEGREES_TO_RADIANS = math.pi / 180.0
RADIANS_TO_DEGREES = 180.0 / math.pi


def clamp_to_circle(value: float, circumference: float) -> float:
    """Wrap value into [0, circumference)."""
    wrapped = math.fmod(value, circumference)
    if wrapped < 0:
        wrapped += circumference
    # fmod of a tiny negative number can round back up to the circumference
    if wrapped >= circumference:
        wrapped = 0.0
    return wrapped


def displacement_on_circle(start: float, end: float, circumference: float) -> float:
    """
    Signed shortest displacement from start to end on a circle.

    The result lies in (-circumference / 2, circumference / 2].
    """
    half = circumference / 2
    d = clamp_to_circle(end - start, circumference)
    if d > half:
        d -= circumference
    return d


def normalize_angle(angle: float) -> float:
    """Map an angle in radians into (-pi, pi]."""
    return displacement_on_circle(0.0, angle, TWO_PI)
