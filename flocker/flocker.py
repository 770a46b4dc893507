"""Decision engine: combine flocking impulses into one turn and one speed change per tick."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional

from .attributes import FlockerAttributes
from .behaviors import (
    affinity_for_green,
    align_with_neighbors,
    center_on_neighbors,
    follow_light,
    maintain_clearance,
    separate_from_neighbors,
)
from .force import WeightedForce
from .percept import ObjectCategory, Percept, PerceptArrays

XML_NAME = "flocker"


class ActionType(Enum):
    TURN = "turn"
    CHANGE_SPEED = "change_speed"


class InteractiveBehavior(Enum):
    """What an agent does with something it runs into."""
    ATTACK = "attack"
    COEXIST = "coexist"


@dataclass(frozen=True)
class Intention:
    action: ActionType
    value: float


@dataclass(frozen=True)
class ForceSnapshot:
    """
    The named forces behind one decision, for visualisation only.

    A behaviour that was switched off is None. Inertia, affinity and
    total are always present.
    """
    inertia: WeightedForce
    safety: Optional[WeightedForce]
    collision: Optional[WeightedForce]
    alignment: Optional[WeightedForce]
    centering: Optional[WeightedForce]
    light: Optional[WeightedForce]
    affinity: WeightedForce
    total: WeightedForce

    def items(self):
        """(name, force) pairs in drawing order."""
        for name in ("inertia", "safety", "collision", "alignment",
                     "centering", "light", "affinity", "total"):
            yield name, getattr(self, name)

    def to_dict(self) -> dict:
        return {name: (f.to_dict() if f is not None else None) for name, f in self.items()}


@dataclass(frozen=True)
class Decision:
    """Output of one tick: turn relative to heading and change in forward speed."""
    turn: float
    speed_change: float
    forces: ForceSnapshot

    def intentions(self) -> List[Intention]:
        return [
            Intention(ActionType.TURN, self.turn),
            Intention(ActionType.CHANGE_SPEED, self.speed_change),
        ]

    def to_dict(self) -> dict:
        return {
            "turn": self.turn,
            "speed_change": self.speed_change,
            "forces": self.forces.to_dict(),
        }


def deliberate(percepts: Iterable[Percept], flocking: FlockerAttributes,
               forward_speed: float, max_speed: float) -> Decision:
    """
    Decide this tick's turn and speed change.

    The resultant is forward inertia (weight 1, straight ahead) plus every
    enabled impulse plus the green affinity, which is always on. The agent
    turns toward the resultant; throttle always drives toward max_speed
    regardless of the resultant's magnitude.

    Args:
        percepts: Objects sensed this tick (may be empty)
        flocking: The agent's flocking attributes
        forward_speed: Current forward speed
        max_speed: Maximum forward speed

    Returns:
        Decision with the turn, the speed change and the forces behind them
    """
    pa = PerceptArrays.from_percepts(percepts)

    inertia = WeightedForce(1, 0)
    safety = maintain_clearance(pa, flocking) if flocking.avoids_obstacles else None
    collision = separate_from_neighbors(pa, flocking) if flocking.avoids_collisions else None
    alignment = align_with_neighbors(pa, flocking) if flocking.aligns_with_neighbors else None
    centering = center_on_neighbors(pa, flocking) if flocking.does_centering else None
    light = follow_light(pa, flocking) if flocking.follows_light else None
    affinity = affinity_for_green(pa, flocking)

    total = WeightedForce()
    for force in (inertia, safety, collision, alignment, centering, light, affinity):
        if force is not None:
            total.add_in(force)

    forces = ForceSnapshot(
        inertia=inertia,
        safety=safety,
        collision=collision,
        alignment=alignment,
        centering=centering,
        light=light,
        affinity=affinity,
        total=total,
    )
    return Decision(turn=total.angle, speed_change=max_speed - forward_speed, forces=forces)


class Flocker:
    """
    A flocking agent's decision-making side.

    Motion, rendering and world bookkeeping belong to the host simulation;
    this holds the agent's attributes and the last decision for inspection.
    """

    def __init__(self, agent_id: int, flocking: Optional[FlockerAttributes] = None):
        self.id = agent_id
        self.flocking = flocking if flocking is not None else FlockerAttributes.defaults()
        self.last_decision: Optional[Decision] = None

    @classmethod
    def from_attributes(cls, agent_id: int, atts: Mapping[str, str],
                        defaults: Optional[FlockerAttributes] = None) -> "Flocker":
        return cls(agent_id, FlockerAttributes.from_attributes(atts, defaults))

    def update(self, atts: Mapping[str, str]):
        """Apply a reconfiguration event."""
        self.flocking = self.flocking.update(atts)

    def deliberate(self, percepts: Iterable[Percept], forward_speed: float,
                   max_speed: float) -> List[Intention]:
        self.last_decision = deliberate(percepts, self.flocking, forward_speed, max_speed)
        return self.last_decision.intentions()

    def is_target(self, p: Percept) -> bool:
        """Close lights are what a flocker goes after."""
        return (p.category is ObjectCategory.LIGHT
                and p.distance < self.flocking.detection_distance)

    def behavior_on_approach(self, neighbor: ObjectCategory) -> InteractiveBehavior:
        """Eat light sources, leave everything else alone."""
        if neighbor is ObjectCategory.LIGHT:
            return InteractiveBehavior.ATTACK
        return InteractiveBehavior.COEXIST

    def log(self) -> str:
        """XML element describing this flocker's current attributes."""
        return f'<{XML_NAME} id="{self.id}" {self.flocking.log().rstrip()} />\n'
