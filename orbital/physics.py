#!/usr/bin/env python3
"""
Core Physics Engine for the orbital simulator

Responsibilities
- Compute pairwise gravitational accelerations by direct summation.
- Advance body states with an explicit Euler step (velocity first, then position).
- Provide small helpers for common orbital speeds (circular, vis-viva, escape).

Units and conventions
- Positions are in pixels, velocities in pixels per tick.
- One integration step is one tick; there is no sub-stepping and no wall-clock time,
  so a fixed sequence of ticks always yields the same trajectory.
- The gravitational constant is a simulation constant (0.1 by default), not SI.

Numerical notes
- No softening: coincident bodies (r^2 == 0) are skipped instead, and a contribution
  that overflows to infinity is dropped, so positions and velocities stay finite.
- Complexity: acceleration computation is O(N^2) per tick (direct summation).
- Ordering: accelerations for every body are computed from the tick-start positions
  before any body is moved. Interleaving the two passes would make the result
  depend on iteration order.
"""

import logging
import math
from typing import List, Tuple

from .constants import G
from .data_models import Body
from .errors import DegenerateOrbitError
from .vector_utils import ZERO, vec_add, vec_len_sq, vec_set_len, vec_sub

logger = logging.getLogger(__name__)


class NBodyPhysics:
    """
    N-body gravitational physics engine with an explicit Euler integrator.

    The acceleration of body i due to body j follows the inverse-square law:

        F = G * m_i * m_j / r^2
        a_i += F / m_i   (directed from i towards j)
    """

    def __init__(self, gravitational_constant: float = G):
        """
        Initialize the physics engine.

        Args:
            gravitational_constant: G used for every pairwise force
        """
        self.gravitational_constant = float(gravitational_constant)

    def compute_accelerations(self, bodies: List[Body]) -> List[Tuple[float, float]]:
        """
        Compute gravitational accelerations for all bodies.

        Only the current positions and masses are read; no body is modified.
        Self-interaction and coincident pairs are skipped.

        Args:
            bodies: List of Body objects.

        Returns:
            List of (ax, ay) accelerations for each body, same order as inputs.
        """
        g = self.gravitational_constant
        accelerations = []

        for body in bodies:
            acc = ZERO
            for other in bodies:
                if other is body:
                    continue

                # Vector from body to other
                d = vec_sub(other.position, body.position)
                r_squared = vec_len_sq(d)
                if r_squared == 0:
                    logger.debug("Bodies %s and %s coincide; skipping pair", body.body_id, other.body_id)
                    continue

                force = g * body.mass * other.mass / r_squared
                magnitude = force / body.mass
                if not math.isfinite(magnitude):
                    logger.debug("Non-finite pull on body %s from %s; skipping pair", body.body_id, other.body_id)
                    continue

                acc = vec_add(acc, vec_set_len(d, magnitude))

            accelerations.append(acc)

        return accelerations

    def apply_gravity(self, bodies: List[Body]) -> None:
        """
        Reset and accumulate the acceleration of every body.

        All accelerations are computed before any is stored, so the result does
        not depend on the order of `bodies`.
        """
        for body, acc in zip(bodies, self.compute_accelerations(bodies)):
            body.acceleration = acc

    def euler_integration_step(self, bodies: List[Body]) -> None:
        """
        Perform one explicit Euler step on every body (modified in place).

            velocity += acceleration
            position += velocity
        """
        for body in bodies:
            body.velocity = vec_add(body.velocity, body.acceleration)
            body.position = vec_add(body.position, body.velocity)


def circular_orbit_velocity(gravitational_parameter: float, orbital_radius: float) -> float:
    """
    Calculate the speed needed for a circular orbit.

    For a circular orbit, gravity provides exactly the centripetal force:
    mu / r^2 = v^2 / r, therefore v = sqrt(mu / r).

    Args:
        gravitational_parameter: mu = G * (M + m)
        orbital_radius: Distance to the reference body

    Returns:
        Orbital speed for a circular orbit (0 for a non-positive radius)
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(gravitational_parameter / orbital_radius)


def vis_viva_speed(gravitational_parameter: float, orbital_radius: float, semi_major_axis: float) -> float:
    """
    Orbital speed at a given distance on an orbit with the given semi-major axis.

    v = sqrt(mu * (2 / r - 1 / a))

    Raises:
        DegenerateOrbitError: if no bound orbit with that semi-major axis passes
            through the given radius (a < r / 2) or a is not positive.
    """
    if orbital_radius <= 0:
        return 0.0
    if semi_major_axis <= 0:
        raise DegenerateOrbitError(f"Semi-major axis must be positive, got {semi_major_axis}")

    term = 2.0 / orbital_radius - 1.0 / semi_major_axis
    if term < 0:
        raise DegenerateOrbitError(
            f"No orbit with semi-major axis {semi_major_axis} reaches radius {orbital_radius}"
        )
    return math.sqrt(gravitational_parameter * term)


def escape_velocity(gravitational_parameter: float, separation: float) -> float:
    """
    Calculate the escape velocity at a given separation.

    v_escape = sqrt(2 * mu / r)

    Returns:
        Escape speed (0 for a non-positive separation or parameter)
    """
    if separation <= 0 or gravitational_parameter <= 0:
        return 0.0

    return math.sqrt(2.0 * gravitational_parameter / separation)
