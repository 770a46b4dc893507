"""Per-agent flocking parameters: defaults, overrides and the attribute write format."""

import math
from dataclasses import dataclass, fields, replace, asdict
from typing import Any, Dict, Mapping, Optional

from config import flocker as config
from .geometry import TWO_PI, DEGREES_TO_RADIANS, RADIANS_TO_DEGREES, clamp_to_circle


class ConfigError(ValueError):
    """Raised when flocking attributes are malformed."""


_FLAGS = (
    "avoids_obstacles",
    "avoids_collisions",
    "aligns_with_neighbors",
    "does_centering",
    "follows_light",
)

_DISTANCES = (
    "clearance",
    "separation_distance",
    "detection_distance",
)

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


@dataclass(frozen=True)
class FlockerAttributes:
    """
    Decision-making parameters for one flocking agent.

    Instances never change. Reconfiguration builds a new instance from the
    current one plus overrides (see merge() and update()).

    Attributes:
        avoids_obstacles: Steer away from obstacles and predators ahead
        avoids_collisions: Steer away from neighbours that are too close
        aligns_with_neighbors: Fly in the same direction as neighbours
        does_centering: Fly toward the middle of the local group
        follows_light: Head for the nearest light source
        clearance: Distance scale for obstacle avoidance
        cone: Half-width (radians, in [0, 2pi)) of the crash-course cone
        separation_distance: Neighbours closer than this trigger evasion
        detection_distance: Range of attention for everything else
        obstacle_weight: Importance of avoiding obstacles
        separation_weight: Importance of avoiding collisions
        alignment_weight: Importance of aligning with neighbours
        centering_weight: Importance of centering
        follow_weight: Importance of following light
    """
    avoids_obstacles: bool = True
    avoids_collisions: bool = True
    aligns_with_neighbors: bool = True
    does_centering: bool = True
    follows_light: bool = True
    clearance: float = 140.0
    cone: float = 60.0 * DEGREES_TO_RADIANS
    separation_distance: float = 50.0
    detection_distance: float = 250.0
    obstacle_weight: float = 2.0
    separation_weight: float = 2.0
    alignment_weight: float = 5.0
    centering_weight: float = 10.0
    follow_weight: float = 5.0

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _checked(f.name, getattr(self, f.name)))

    @classmethod
    def defaults(cls) -> "FlockerAttributes":
        """Defaults from config.FLOCKER (cone given there in degrees)."""
        values = dict(config.FLOCKER)
        values["cone"] = values["cone"] * DEGREES_TO_RADIANS
        return merge(values, cls())

    @classmethod
    def from_attributes(cls, atts: Mapping[str, str],
                        defaults: Optional["FlockerAttributes"] = None) -> "FlockerAttributes":
        """
        Build attributes from a world-file attribute mapping.

        Args:
            atts: Attribute name -> string value (e.g. {"clear": "false", "cone": "45"})
            defaults: Values for unspecified attributes (config defaults if None)

        Raises:
            ConfigError: if a value has the wrong format
        """
        if defaults is None:
            defaults = cls.defaults()

        overrides = {}
        for name, att in config.ATTRIBUTES.items():
            if att not in atts:
                continue
            raw = atts[att]
            if name in _FLAGS:
                overrides[name] = _parse_bool(att, raw)
            elif name == "cone":
                overrides[name] = _parse_float(att, raw) * DEGREES_TO_RADIANS
            else:
                overrides[name] = _parse_float(att, raw)

        return merge(overrides, defaults)

    def update(self, atts: Mapping[str, str]) -> "FlockerAttributes":
        """New attributes with the given attribute strings applied on top of these."""
        return FlockerAttributes.from_attributes(atts, self)

    def to_attributes(self) -> Dict[str, str]:
        """Attribute mapping accepted back by from_attributes()."""
        out = {}
        for name, att in config.ATTRIBUTES.items():
            value = getattr(self, name)
            if name in _FLAGS:
                out[att] = "true" if value else "false"
            elif name == "cone":
                out[att] = repr(value * RADIANS_TO_DEGREES)
            else:
                out[att] = repr(float(value))
        return out

    def log(self) -> str:
        """Attribute fragment for an agent's XML element, newline terminated."""
        return " ".join(f'{att}="{value}"' for att, value in self.to_attributes().items()) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def merge(overrides: Mapping[str, Any], defaults: FlockerAttributes) -> FlockerAttributes:
    """
    Derive attributes from defaults plus overrides keyed by field name.

    Values are in native units (cone in radians). The cone is wrapped into
    [0, 2pi); negative or non-finite distances and non-finite weights are
    rejected.

    Raises:
        ConfigError: on unknown fields or invalid values
    """
    known = {f.name for f in fields(FlockerAttributes)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown flocking attribute(s): {', '.join(unknown)}")

    return replace(defaults, **overrides)


def _checked(name: str, value: Any) -> Any:
    """Validated value for one field; the cone comes back wrapped into [0, 2pi)."""
    if name in _FLAGS:
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be a boolean, got {value!r}")
        return value

    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    if name in _DISTANCES and number < 0:
        raise ConfigError(f"{name} must not be negative, got {value!r}")
    if name == "cone":
        number = clamp_to_circle(number, TWO_PI)
    return number


def _parse_bool(att: str, raw: str) -> bool:
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f'Attribute {att}="{raw}" is not a boolean')


def _parse_float(att: str, raw: str) -> float:
    try:
        return float(str(raw).strip())
    except ValueError:
        raise ConfigError(f'Attribute {att}="{raw}" is not a number') from None
