#!/usr/bin/env python3
"""
Flocker Decisions
=================

Convenience entry point for evaluating one flocking decision.

Usage:
    python main.py scenario.json              # Print turn/speed and forces
    python main.py scenario.json --json       # Machine-readable output
    python main.py scenario.json --degrees    # Angles in degrees
    python main.py scenario.json --config-only
"""

import sys

from tools.decide import main

if __name__ == "__main__":
    sys.exit(main())
