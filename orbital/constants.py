#!/usr/bin/env python3
"""
Shared constants for the orbital simulator (simulation units: pixels and ticks).

One tick is the unit of time, so velocities are in pixels per tick and
accelerations in pixels per tick squared. Keeping defaults in one place makes
behavioural parity easy to check and tuning easier.
"""

# Physical constants
G = 0.1  # gravitational constant in simulation units

# Orbit lifecycle heuristics
ESCAPE_TIMER_BUDGET = 100  # ticks an unbound body may stay unbound before removal
REPARENT_GOOD_ENOUGH = 0.1  # stop searching once a candidate gives e below this

# Viewport (bodies beyond both half-extents are "far away")
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
VIEW_HALF_EXTENTS = (VIEW_WIDTH / 2, VIEW_HEIGHT / 2)

# Presentation defaults (never read by the physics)
DEFAULT_COLOR = (200, 200, 255)
DEFAULT_SIZE = 20.0
SPAWN_SIZE_RANGE = (10.0, 40.0)
