import math

import pytest

from flocker import (
    ActionType,
    Flocker,
    FlockerAttributes,
    InteractiveBehavior,
    ObjectCategory,
    Percept,
    WeightedForce,
    deliberate,
    merge,
)
from flocker.behaviors import (
    align_with_neighbors,
    center_on_neighbors,
    follow_light,
    maintain_clearance,
    separate_from_neighbors,
)
from helpers import TARGET_GREEN, boid, light, obstacle

MIXED = [
    boid(20.0, 1.2, 0.3),
    boid(90.0, -0.4, 0.8),
    boid(160.0, 0.9, -0.5),
    obstacle(120.0, -0.3),
    obstacle(60.0, 0.5, ObjectCategory.PREDATOR),
    light(140.0, 0.7),
    Percept(ObjectCategory.OTHER, 180.0, -2.0, 0.0, TARGET_GREEN),
]


def test_empty_percepts_give_inertia_only(flocking):
    d = deliberate([], flocking, forward_speed=4.0, max_speed=30.0)
    assert d.turn == 0.0
    assert d.speed_change == pytest.approx(26.0)
    assert d.forces.total.weight == pytest.approx(1.0)
    assert d.forces.total.angle == 0.0


def test_single_light_steers_toward_it(only):
    flocking = only("follows_light")
    p = light(flocking.detection_distance / 2, math.pi / 4)
    d = deliberate([p], flocking, forward_speed=10.0, max_speed=10.0)

    assert d.forces.light.weight == pytest.approx(flocking.follow_weight * 2)
    assert d.forces.light.angle == pytest.approx(math.pi / 4)

    expected = WeightedForce(1, 0)
    expected.add_in(WeightedForce(flocking.follow_weight * 2, math.pi / 4))
    assert d.forces.total.fx == pytest.approx(expected.fx)
    assert d.forces.total.fy == pytest.approx(expected.fy)
    assert d.turn == pytest.approx(expected.angle)
    assert d.speed_change == 0.0


def test_close_neighbour_only_triggers_separation(flocking):
    d = deliberate([boid(25.0, math.pi / 2)], flocking, forward_speed=0.0, max_speed=1.0)
    assert d.forces.collision.angle == pytest.approx(-math.pi / 2)
    assert d.forces.collision.weight == pytest.approx(flocking.separation_weight * 50.0 / 25.0)
    assert d.forces.alignment.is_zero()
    assert d.forces.centering.is_zero()
    assert d.turn < 0


def test_disabled_behaviours_are_absent_from_snapshot(only):
    d = deliberate(MIXED, only(), forward_speed=0.0, max_speed=1.0)
    assert d.forces.safety is None
    assert d.forces.collision is None
    assert d.forces.alignment is None
    assert d.forces.centering is None
    assert d.forces.light is None
    assert d.forces.affinity is not None
    assert not d.forces.affinity.is_zero()


@pytest.mark.parametrize("flag, generator", [
    ("avoids_obstacles", maintain_clearance),
    ("avoids_collisions", separate_from_neighbors),
    ("aligns_with_neighbors", align_with_neighbors),
    ("does_centering", center_on_neighbors),
    ("follows_light", follow_light),
])
def test_switching_off_a_behaviour_removes_exactly_its_force(flocking, flag, generator):
    on = deliberate(MIXED, flocking, 0.0, 1.0).forces.total
    off = deliberate(MIXED, merge({flag: False}, flocking), 0.0, 1.0).forces.total
    alone = generator(MIXED, flocking)
    assert not alone.is_zero()
    assert off.fx == pytest.approx(on.fx - alone.fx, abs=1e-9)
    assert off.fy == pytest.approx(on.fy - alone.fy, abs=1e-9)


def test_green_affinity_ignores_flags(only, flocking):
    everything_off = deliberate(MIXED, only(), 0.0, 1.0).forces.affinity
    everything_on = deliberate(MIXED, flocking, 0.0, 1.0).forces.affinity
    assert everything_off == everything_on


def test_total_is_sum_of_snapshot(flocking):
    forces = deliberate(MIXED, flocking, 0.0, 1.0).forces
    total = WeightedForce()
    for name, f in forces.items():
        if name != "total" and f is not None:
            total.add_in(f)
    assert total.fx == pytest.approx(forces.total.fx)
    assert total.fy == pytest.approx(forces.total.fy)


def test_throttle_ignores_resultant(flocking):
    calm = deliberate([], flocking, 12.0, 20.0)
    busy = deliberate(MIXED, flocking, 12.0, 20.0)
    assert calm.speed_change == busy.speed_change == pytest.approx(8.0)
    assert deliberate([], flocking, 25.0, 20.0).speed_change == pytest.approx(-5.0)


def test_decisions_do_not_depend_on_previous_ticks(flocking):
    first = deliberate(MIXED, flocking, 3.0, 9.0)
    deliberate([light(10.0, -2.0)], flocking, 0.0, 1.0)
    again = deliberate(MIXED, flocking, 3.0, 9.0)
    assert again.turn == first.turn
    assert again.speed_change == first.speed_change


def test_intentions_order():
    agent = Flocker(3)
    intentions = agent.deliberate([light(100.0, 0.4)], forward_speed=5.0, max_speed=30.0)
    assert [i.action for i in intentions] == [ActionType.TURN, ActionType.CHANGE_SPEED]
    assert intentions[0].value == agent.last_decision.turn
    assert intentions[1].value == pytest.approx(25.0)


def test_agent_update_replaces_attributes():
    agent = Flocker.from_attributes(1, {"follow": "false"})
    before = agent.flocking
    agent.update({"follow": "true", "lw": "9"})
    assert agent.flocking.follows_light
    assert agent.flocking.follow_weight == 9.0
    assert not before.follows_light


def test_agent_targets_and_approach_behaviour():
    agent = Flocker(2, FlockerAttributes.defaults())
    assert agent.is_target(light(100.0))
    assert not agent.is_target(light(400.0))
    assert not agent.is_target(boid(10.0))
    assert agent.behavior_on_approach(ObjectCategory.LIGHT) is InteractiveBehavior.ATTACK
    assert agent.behavior_on_approach(ObjectCategory.PREDATOR) is InteractiveBehavior.COEXIST


def test_agent_log_element():
    line = Flocker(5).log()
    assert line.startswith('<flocker id="5" clear="true" ')
    assert line.endswith(" />\n")
