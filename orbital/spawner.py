#!/usr/bin/env python3
"""
Satellite spawning for interactive front-ends.

A front-end turns a click into a world position and hands it to
SatelliteSpawner.spawn(), which picks a random mass, derives a size from it,
attaches the new satellite to the first primary and rolls a fresh colour for
the next spawn.
"""
import logging
import random
from typing import Optional, Tuple

from .constants import SPAWN_SIZE_RANGE
from .errors import UnknownBodyError
from .system import OrbitalSystem
from .vector_utils import vec_dist

logger = logging.getLogger(__name__)

AUTO_SIZE = -1


def random_int(rng: random.Random, low: int, high: int) -> int:
    """Integer in [low, high); low itself when the range is empty or inverted."""
    if low > high:
        return low
    return int(rng.random() * (high - low) + low)


def random_color(rng: random.Random) -> Tuple[int, int, int]:
    return (rng.randrange(256), rng.randrange(256), rng.randrange(256))


def map_range(value: float, in_low: float, in_high: float, out_low: float, out_high: float) -> float:
    """Linearly map value from [in_low, in_high] onto [out_low, out_high]."""
    if in_high == in_low:
        return out_low
    return out_low + (value - in_low) * (out_high - out_low) / (in_high - in_low)


class SatelliteSpawner:
    """
    Settings for, and creation of, user-placed satellites.

    Fields:
    - mass_min / mass_max: Range of the random integer mass
    - size: Fixed size, or AUTO_SIZE to map mass onto SPAWN_SIZE_RANGE
    - color: Colour of the next satellite; re-rolled after each spawn
    - eccentricity: Target eccentricity (0 = circular); the satellite starts at apoapsis
    """

    def __init__(
        self,
        mass_min: int = 25,
        mass_max: int = 500,
        size: float = AUTO_SIZE,
        color: Optional[Tuple[int, int, int]] = None,
        eccentricity: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.mass_min = int(mass_min)
        self.mass_max = int(mass_max)
        self.size = float(size)
        self.color = color if color is not None else random_color(self.rng)
        self.eccentricity = float(eccentricity)

    def next_mass(self) -> int:
        return random_int(self.rng, self.mass_min, self.mass_max)

    def size_for(self, mass: float) -> float:
        if self.size != AUTO_SIZE:
            return self.size
        low, high = SPAWN_SIZE_RANGE
        return map_range(mass, self.mass_min, self.mass_max, low, high)

    def spawn(self, system: OrbitalSystem, position: Tuple[float, float]) -> int:
        """
        Add a satellite of the first primary at a world position.

        Raises:
            UnknownBodyError: if the system has no primary body.
            InvalidMassError / DegenerateOrbitError: as OrbitalSystem.add_satellite.
        """
        primaries = system.primary_ids()
        if not primaries:
            raise UnknownBodyError(None)
        reference = primaries[0]

        mass = self.next_mass()
        distance = vec_dist(position, system.body(reference).position)
        body_id = system.add_satellite(
            reference=reference,
            mass=mass,
            size=self.size_for(mass),
            color=self.color,
            position=position,
            semi_major_axis=distance / (1.0 + self.eccentricity),
            direction=1 if self.rng.random() > 0.5 else -1,
        )
        logger.debug("Spawned body %s (mass=%s) around %s", body_id, mass, reference)
        self.color = random_color(self.rng)
        return body_id
