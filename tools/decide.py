"""
Single-Tick Decision Runner
===========================

Evaluates one flocker decision from a scenario file and prints the result.

Usage:
    python -m tools.decide scenario.json              # Print turn/speed and forces
    python -m tools.decide scenario.json --json       # Machine-readable output
    python -m tools.decide scenario.json --degrees    # Angles in degrees
    python -m tools.decide scenario.json --config-only

Scenario format:
    {
        "attributes": {"clear": "true", "cone": "45", "lw": "5.0"},
        "forward_speed": 10.0,
        "max_speed": 30.0,
        "percepts": [
            {"category": "light", "distance": 125.0, "angle": 0.785},
            {"category": "boid", "distance": 30.0, "angle": 1.57, "orientation": 0.2,
             "color": [150, 0, 150]}
        ]
    }
"""

import sys
import json
import argparse
from pathlib import Path
from typing import List, Tuple

from config import flocker as config
from flocker import ConfigError, Flocker, FlockerAttributes, ObjectCategory, Percept
from flocker.geometry import RADIANS_TO_DEGREES


def load_scenario(path: Path) -> dict:
    """Load a scenario file."""
    with open(path, "r") as f:
        scenario = json.load(f)
    if not isinstance(scenario, dict):
        raise ValueError("Scenario must be a JSON object")
    return scenario


def parse_percepts(entries: list) -> List[Percept]:
    """Turn scenario percept entries into Percepts."""
    if not isinstance(entries, list):
        raise ValueError("percepts must be a list")
    percepts = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"percept {i}: must be an object")
        try:
            color = tuple(int(c) for c in entry.get("color", (0, 0, 0)))
            if len(color) != 3:
                raise ValueError("color must have three channels")
            percepts.append(Percept(
                category=ObjectCategory.parse(entry["category"]),
                distance=float(entry["distance"]),
                angle=float(entry.get("angle", 0.0)),
                orientation=float(entry.get("orientation", 0.0)),
                color=color,
            ))
        except KeyError as e:
            raise ValueError(f"percept {i}: missing field {e.args[0]!r}") from None
        except (TypeError, ValueError) as e:
            raise ValueError(f"percept {i}: {e}") from None
    return percepts


def build_agent(scenario: dict) -> Flocker:
    raw = scenario.get("attributes", {})
    if not isinstance(raw, dict):
        raise ValueError("attributes must be an object")
    atts = {k: str(v).lower() if isinstance(v, bool) else str(v) for k, v in raw.items()}
    return Flocker.from_attributes(scenario.get("id", 0), atts, FlockerAttributes.defaults())


def _number(scenario: dict, key: str, default: float) -> float:
    try:
        return float(scenario.get(key, default))
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number") from None


def format_angle(angle: float, degrees: bool) -> str:
    if degrees:
        return f"{angle * RADIANS_TO_DEGREES:+.2f}°"
    return f"{angle:+.4f} rad"


def run(scenario: dict, forward_speed: float = None, max_speed: float = None) -> Tuple[Flocker, list]:
    """Evaluate one tick for the scenario's agent."""
    agent = build_agent(scenario)
    percepts = parse_percepts(scenario.get("percepts", []))

    if forward_speed is None:
        forward_speed = _number(scenario, "forward_speed", 0.0)
    if max_speed is None:
        max_speed = _number(scenario, "max_speed", config.MOTION["max_speed"])

    intentions = agent.deliberate(percepts, forward_speed, max_speed)
    return agent, intentions


def print_decision(agent: Flocker, percept_count: int, degrees: bool):
    decision = agent.last_decision
    print(f"[decide] Agent {agent.id}: {percept_count} percept(s)")
    print(f"[decide] Turn: {format_angle(decision.turn, degrees)}  |  "
          f"Speed change: {decision.speed_change:+.3f}")
    print("[decide] Forces:")
    for name, force in decision.forces.items():
        if force is None:
            print(f"    {name:<10} off")
        else:
            print(f"    {name:<10} weight={force.weight:8.3f}  angle={format_angle(force.angle, degrees)}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate one flocker decision")
    parser.add_argument("scenario", type=Path, help="Scenario JSON file")
    parser.add_argument("--json", action="store_true", help="Print the decision as JSON")
    parser.add_argument("--degrees", action="store_true", help="Show angles in degrees")
    parser.add_argument("--config-only", action="store_true",
                        help="Print the agent's resolved attributes and exit")
    parser.add_argument("--forward-speed", type=float, help="Override current forward speed")
    parser.add_argument("--max-speed", type=float, help="Override maximum forward speed")
    args = parser.parse_args(argv)

    try:
        scenario = load_scenario(args.scenario)
        if args.config_only:
            sys.stdout.write(build_agent(scenario).log())
            return 0
        agent, intentions = run(scenario, args.forward_speed, args.max_speed)
    except FileNotFoundError:
        print(f"[decide] Scenario not found: {args.scenario}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"[decide] Cannot read {args.scenario}: {e.strerror or e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"[decide] Invalid JSON in {args.scenario}: {e}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"[decide] Bad attributes: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"[decide] Bad scenario: {e}", file=sys.stderr)
        return 1

    if args.json:
        out = agent.last_decision.to_dict()
        out["intentions"] = [{"action": i.action.value, "value": i.value} for i in intentions]
        print(json.dumps(out, indent=2))
    else:
        print_decision(agent, len(scenario.get("percepts", [])), args.degrees)
    return 0


if __name__ == "__main__":
    sys.exit(main())
