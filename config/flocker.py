"""Configuration for flocking agents."""

# Behaviour defaults used when an agent's attributes leave a field unspecified
FLOCKER = {
    # Which impulses are active
    "avoids_obstacles": True,
    "avoids_collisions": True,
    "aligns_with_neighbors": True,
    "does_centering": True,
    "follows_light": True,

    # Thresholds (same units as percept distances)
    "clearance": 140.0,             # When an obstacle becomes a worry
    "cone": 60.0,                   # Degrees either side of heading that count as a crash course
    "separation_distance": 50.0,    # Closer than this and neighbours get antsy
    "detection_distance": 250.0,    # How much of the world an agent attends to

    # Relative importance of each impulse
    "obstacle_weight": 2.0,
    "separation_weight": 2.0,
    "alignment_weight": 5.0,
    "centering_weight": 10.0,
    "follow_weight": 5.0,
}

# Attribute names used in world files and agent logs
ATTRIBUTES = {
    "avoids_obstacles": "clear",
    "avoids_collisions": "evade",
    "aligns_with_neighbors": "align",
    "does_centering": "center",
    "follows_light": "follow",
    "clearance": "clearance",
    "cone": "cone",
    "separation_distance": "separation",
    "detection_distance": "detection",
    "obstacle_weight": "ow",
    "separation_weight": "sw",
    "alignment_weight": "aw",
    "centering_weight": "cw",
    "follow_weight": "lw",
}

PERCEPTION = {
    "min_distance": 1e-3,   # Floor for inverse-distance terms
    "affinity_green": 254,  # Green channel value that attracts every agent
    "affinity_scale": 5.0,  # Multiple of obstacle_weight used by the green attractor
}

MOTION = {
    "max_speed": 30.0,
}
