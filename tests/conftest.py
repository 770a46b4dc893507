import pytest

from flocker import FlockerAttributes, merge

FLAGS = (
    "avoids_obstacles",
    "avoids_collisions",
    "aligns_with_neighbors",
    "does_centering",
    "follows_light",
)


@pytest.fixture
def flocking():
    """Default attributes (cone 60 degrees, separation 50, detection 250)."""
    return FlockerAttributes.defaults()


@pytest.fixture
def only():
    """Factory for attributes with every behaviour off except the named ones."""
    def _only(*flags, **overrides):
        values = {flag: flag in flags for flag in FLAGS}
        values.update(overrides)
        return merge(values, FlockerAttributes.defaults())
    return _only
