"""Percept builders shared by the tests."""

from flocker import ObjectCategory, Percept

PURPLE = (150, 0, 150)
YELLOW = (255, 255, 0)
GREY = (90, 90, 90)
TARGET_GREEN = (0, 254, 0)


def boid(distance, angle=0.0, orientation=0.0, color=PURPLE):
    return Percept(ObjectCategory.BOID, distance, angle, orientation, color)


def light(distance, angle=0.0, color=YELLOW):
    return Percept(ObjectCategory.LIGHT, distance, angle, 0.0, color)


def obstacle(distance, angle=0.0, category=ObjectCategory.OBSTACLE):
    return Percept(category, distance, angle, 0.0, GREY)
