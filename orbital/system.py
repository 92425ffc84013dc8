#!/usr/bin/env python3
"""
OrbitalSystem: owner of the active set of bodies and of the per-tick pipeline.

One call to tick() runs, to completion and in this order:
1) gravity: reset and accumulate every body's acceleration from tick-start positions
2) integration: explicit Euler step for every body
3) orbital elements: recompute each satellite's elements against its reference
4) re-parenting: an unbound satellite looks for a body it would be bound to
5) lifecycle: satellites unbound for too long and far outside the viewport are
   marked, then removed once every body has been processed

Identity
- Bodies are keyed by integer ids handed out in increasing order and never
  reused. Dict order is insertion order, which makes the re-parenting search
  deterministic for a fixed sequence of additions.
- When a body is removed, satellites that referenced it move up to the removed
  body's own reference, so no surviving body ever points at a missing id.

Collaborators (renderers, input handlers) may only add bodies, change a body's
mass and read BodyView snapshots between ticks.
"""
import logging
import math
import random
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .constants import DEFAULT_COLOR, DEFAULT_SIZE
from .data_models import Body, BodyView
from .errors import DegenerateOrbitError, InvalidMassError, UnknownBodyError
from .orbital_elements import OrbitEllipse, compute_orbital_elements, ellipse_geometry
from .physics import NBodyPhysics, circular_orbit_velocity, vis_viva_speed
from .settings import SimulationSettings
from .vector_utils import ZERO, vec_len, vec_rotate, vec_set_len, vec_sub

logger = logging.getLogger(__name__)


class OrbitalSystem:
    """
    Gravitationally interacting point masses with per-body Keplerian orbits.

    Args:
        settings: Simulation settings; SimulationSettings() when omitted.
        rng: Random source for the orbit-direction choice of new satellites.
            Pass a seeded random.Random for reproducible runs.
    """

    def __init__(self, settings: Optional[SimulationSettings] = None, rng: Optional[random.Random] = None):
        self.settings = settings if settings is not None else SimulationSettings()
        self.rng = rng if rng is not None else random.Random()
        self.physics = NBodyPhysics(self.settings.gravitational_constant)
        self.tick_count = 0
        self._bodies: Dict[int, Body] = {}
        self._removed: Set[int] = set()
        self._next_id = 0

    # ------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._bodies) - len(self._removed)

    def __contains__(self, body_id) -> bool:
        return body_id in self._bodies and body_id not in self._removed

    def bodies(self) -> Iterator[BodyView]:
        """Snapshots of every active body, in insertion order."""
        views = [BodyView.from_body(b) for b in self._active()]
        return iter(views)

    def body(self, body_id: int) -> BodyView:
        return BodyView.from_body(self._get(body_id))

    def primary_ids(self) -> List[int]:
        return [b.body_id for b in self._active() if b.reference is None]

    def standard_gravitational_parameter(self, body_id: int) -> float:
        """mu of a body's orbit, from current masses; G * mass for a primary."""
        body = self._get(body_id)
        return self._mu(body)

    def ellipse(self, body_id: int) -> Optional[OrbitEllipse]:
        """Placement of a satellite's orbit ellipse, or None for a primary."""
        body = self._get(body_id)
        if body.reference is None:
            return None
        parent = self._bodies[body.reference]
        return ellipse_geometry(
            parent.position,
            body.eccentricity_vector,
            body.semi_major_axis,
            body.semi_minor_axis,
        )

    # ------------------------------------------------------------
    # Creation and editing
    # ------------------------------------------------------------

    def add_body(
        self,
        mass: float,
        position: Tuple[float, float],
        velocity: Tuple[float, float] = ZERO,
        size: float = DEFAULT_SIZE,
        color=DEFAULT_COLOR,
        reference: Optional[int] = None,
    ) -> int:
        """
        Insert a body and compute its initial orbital elements.

        Raises:
            InvalidMassError: if mass <= 0; the active set is left unchanged.
            UnknownBodyError: if reference names no active body.
        """
        if reference is not None:
            self._get(reference)
        body = Body(
            body_id=self._next_id,
            mass=mass,
            position=(float(position[0]), float(position[1])),
            velocity=(float(velocity[0]), float(velocity[1])),
            size=size,
            color=color,
            reference=reference,
            escape_timer=self.settings.escape_timer_budget,
        )
        self._next_id += 1
        self._bodies[body.body_id] = body
        self._calculate(body)
        logger.debug("Added body %s (mass=%s, reference=%s)", body.body_id, mass, reference)
        return body.body_id

    def add_primary(
        self,
        mass: float,
        position: Tuple[float, float] = ZERO,
        velocity: Tuple[float, float] = ZERO,
        size: float = DEFAULT_SIZE,
        color=DEFAULT_COLOR,
    ) -> int:
        return self.add_body(mass, position, velocity, size, color)

    def add_satellite(
        self,
        reference: int,
        mass: float,
        size: float,
        color,
        position: Tuple[float, float],
        eccentricity_modifier: float = 1.0,
        semi_major_axis: Optional[float] = None,
        direction: Optional[int] = None,
    ) -> int:
        """
        Attach a new satellite at a world position, orbiting reference.

        The launch speed is the circular speed sqrt(mu / r), or the vis-viva
        speed sqrt(mu * (2 / r - 1 / a)) when semi_major_axis is given, times
        eccentricity_modifier. With a modifier of 1 and no semi-major axis the
        orbit starts circular. The velocity is the reference->satellite vector
        turned a quarter turn; direction picks the sense (+1 counter-clockwise,
        -1 clockwise, None for a random pick from self.rng).

        Raises:
            InvalidMassError: if mass <= 0.
            UnknownBodyError: if reference names no active body.
            DegenerateOrbitError: if position coincides with the reference, or
                no orbit with the requested semi-major axis passes through it.
        """
        if not mass > 0:
            raise InvalidMassError(mass)
        parent = self._get(reference)

        offset = vec_sub(position, parent.position)
        distance = vec_len(offset)
        if distance == 0:
            raise DegenerateOrbitError(f"Satellite position coincides with body {reference}")

        mu = self.settings.gravitational_constant * (parent.mass + mass)
        if semi_major_axis is None:
            speed = circular_orbit_velocity(mu, distance)
        else:
            speed = vis_viva_speed(mu, distance, semi_major_axis)
        speed *= eccentricity_modifier

        if direction is None:
            direction = 1 if self.rng.random() > 0.5 else -1
        elif direction not in (1, -1):
            raise ValueError(f"direction must be +1, -1 or None, got {direction!r}")

        velocity = vec_set_len(vec_rotate(offset, direction * math.pi / 2), speed)
        return self.add_body(mass, position, velocity, size, color, reference)

    def set_mass(self, body_id: int, mass: float) -> None:
        """
        Change a body's mass and refresh the orbits that depend on it.

        Raises:
            InvalidMassError: if mass <= 0; the body keeps its old mass.
        """
        body = self._get(body_id)
        body.mass = mass
        for other in self._active():
            if other is body or other.reference == body_id:
                self._calculate(other)

    def remove_all_except_primary(self) -> int:
        """Drop every satellite, keeping primaries. Returns the number removed."""
        doomed = [b.body_id for b in self._bodies.values() if b.reference is not None]
        for body_id in doomed:
            del self._bodies[body_id]
        self._removed.clear()
        logger.info("Cleared %d satellites", len(doomed))
        return len(doomed)

    # ------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------

    def tick(self) -> None:
        """Advance the simulation by one step."""
        live = list(self._active())
        self._sync_physics()

        self.physics.apply_gravity(live)

        anchor = None
        if self.settings.anchor_first_primary:
            anchor = next((b for b in live if b.reference is None), None)
        anchor_position = anchor.position if anchor is not None else None

        self.physics.euler_integration_step(live)

        if anchor is not None:
            anchor.position = anchor_position
            anchor.velocity = ZERO

        for body in live:
            if body.body_id in self._removed:
                continue
            self._update(body)

        self._compact()
        self.tick_count += 1

    def apply_gravity(self) -> None:
        self._sync_physics()
        self.physics.apply_gravity(list(self._active()))

    def integrate(self) -> None:
        self.physics.euler_integration_step(list(self._active()))

    def calculate_orbital_parameters(self, body_id: int) -> float:
        """Recompute a body's orbital elements; returns its eccentricity (0 for a primary)."""
        return self._calculate(self._get(body_id))

    def update(self, body_id: int) -> None:
        """Recompute elements, re-parent if unbound and advance the escape lifecycle."""
        self._update(self._get(body_id))

    def find_best_reference(self, body_id: int, current_eccentricity: float) -> float:
        """
        Search for a reference body that binds body_id more tightly.

        Returns the lowest eccentricity found (current_eccentricity if none beat it).
        Primaries are left untouched and report 0.
        """
        return self._find_best_reference(self._get(body_id), current_eccentricity)

    def update_lifecycle(self, body_id: int) -> bool:
        """Advance the escape timer; returns True if the body was marked for removal."""
        return self._update_lifecycle(self._get(body_id))

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _sync_physics(self) -> None:
        self.physics.gravitational_constant = self.settings.gravitational_constant

    def _active(self) -> Iterator[Body]:
        return (b for b in self._bodies.values() if b.body_id not in self._removed)

    def _get(self, body_id: int) -> Body:
        body = self._bodies.get(body_id)
        if body is None or body_id in self._removed:
            raise UnknownBodyError(body_id)
        return body

    def _mu(self, body: Body) -> float:
        g = self.settings.gravitational_constant
        if body.reference is None:
            return g * body.mass
        return g * (self._bodies[body.reference].mass + body.mass)

    def _calculate(self, body: Body) -> float:
        if body.reference is None:
            body.clear_orbit()
            return 0.0

        parent = self._bodies[body.reference]
        elements = compute_orbital_elements(
            vec_sub(body.position, parent.position),
            body.velocity,
            self._mu(body),
        )
        body.eccentricity_vector = elements.eccentricity_vector
        body.eccentricity = elements.eccentricity
        body.semi_major_axis = elements.semi_major_axis
        body.semi_minor_axis = elements.semi_minor_axis
        body.standard_gravitational_parameter = elements.standard_gravitational_parameter
        return elements.eccentricity

    def _update(self, body: Body) -> None:
        eccentricity = self._calculate(body)
        if body.reference is None:
            return
        if eccentricity >= 1.0:
            self._find_best_reference(body, eccentricity)
            self._update_lifecycle(body)
        else:
            body.escape_timer = self.settings.escape_timer_budget

    def _find_best_reference(self, body: Body, current_eccentricity: float) -> float:
        if body.reference is None:
            return 0.0
        original = body.reference
        best = original
        best_eccentricity = current_eccentricity

        for candidate in list(self._active()):
            if candidate is body or candidate.body_id == original:
                continue
            body.reference = candidate.body_id
            eccentricity = self._calculate(body)
            if eccentricity < best_eccentricity:
                best = candidate.body_id
                best_eccentricity = eccentricity
                if eccentricity < self.settings.reparent_threshold:
                    break

        body.reference = best if best_eccentricity < 1.0 else original
        self._calculate(body)
        if body.reference != original:
            logger.debug(
                "Body %s re-parented from %s to %s (e=%.4f)",
                body.body_id, original, body.reference, best_eccentricity,
            )
        return best_eccentricity

    def _update_lifecycle(self, body: Body) -> bool:
        eccentricity = self._calculate(body)
        if eccentricity < 1.0:
            body.escape_timer = self.settings.escape_timer_budget
            return False

        body.escape_timer -= 1
        if body.escape_timer <= 0 and self.settings.is_far_away(body.position):
            self._removed.add(body.body_id)
            logger.info("Body %s escaped and was removed at %s", body.body_id, body.position)
            return True
        return False

    def _compact(self) -> None:
        if not self._removed:
            return

        removed_refs = {body_id: self._bodies.pop(body_id).reference for body_id in self._removed}
        self._removed.clear()

        for body in self._bodies.values():
            if body.reference not in removed_refs:
                continue
            body.reference = self._surviving_reference(body, removed_refs)
            self._calculate(body)
            logger.debug("Body %s lost its reference; now orbits %s", body.body_id, body.reference)

    def _surviving_reference(self, body: Body, removed_refs: Dict[int, Optional[int]]) -> Optional[int]:
        ref = body.reference
        seen = set()
        while ref in removed_refs and ref not in seen:
            seen.add(ref)
            ref = removed_refs[ref]
        if ref is not None and ref != body.body_id and ref in self._bodies:
            return ref
        return next(
            (b.body_id for b in self._bodies.values() if b.reference is None and b is not body),
            None,
        )
