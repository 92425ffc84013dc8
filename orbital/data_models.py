#!/usr/bin/env python3
"""
Data models for the orbital simulator.

This module defines the Body dataclass owned by OrbitalSystem and the
read-only BodyView snapshot handed to renderers and other collaborators.

Units and usage
- position is in pixels, velocity in pixels per tick, acceleration in pixels per tick^2.
- size and color are presentation attributes; the physics never reads them.
- reference is the id of the body this one orbits, or None for a primary body.
- Orbital elements are derived state, recomputed every tick for bodies with a reference.
"""
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .constants import DEFAULT_COLOR, DEFAULT_SIZE, ESCAPE_TIMER_BUDGET
from .errors import InvalidMassError
from .vector_utils import ZERO


@dataclass(eq=False)
class Body:
    """
    A point mass in the simulation.

    Fields:
    - body_id: Stable handle assigned by OrbitalSystem; never reused
    - mass: Strictly positive mass; assignment of a value <= 0 raises InvalidMassError
    - position / velocity / acceleration: 2D state vectors
    - size / color: Presentation attributes
    - reference: Id of the body this one orbits, or None for a primary
    - eccentricity_vector .. standard_gravitational_parameter: Derived orbital elements
    - escape_timer: Ticks left before an unbound body may be removed
    """
    body_id: int
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    size: float = DEFAULT_SIZE
    color: Any = DEFAULT_COLOR
    reference: Optional[int] = None
    acceleration: Tuple[float, float] = ZERO
    eccentricity_vector: Tuple[float, float] = ZERO
    eccentricity: float = 0.0
    semi_major_axis: float = 0.0
    semi_minor_axis: float = 0.0
    standard_gravitational_parameter: float = 0.0
    escape_timer: int = ESCAPE_TIMER_BUDGET

    def __setattr__(self, name, value):
        if name == "mass" and not value > 0:
            raise InvalidMassError(value)
        if name == "reference" and value is not None and value == self.__dict__.get("body_id"):
            raise ValueError(f"Body {value} cannot orbit itself")
        super().__setattr__(name, value)

    @property
    def is_primary(self) -> bool:
        return self.reference is None

    def clear_orbit(self) -> None:
        """Reset the derived orbital elements to the primary-body values."""
        self.eccentricity_vector = ZERO
        self.eccentricity = 0.0
        self.semi_major_axis = 0.0
        self.semi_minor_axis = 0.0
        self.standard_gravitational_parameter = 0.0


@dataclass(frozen=True)
class BodyView:
    """Immutable snapshot of a body as of the last completed tick."""
    body_id: int
    mass: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    size: float
    color: Any
    reference: Optional[int]
    eccentricity_vector: Tuple[float, float]
    eccentricity: float
    semi_major_axis: float
    semi_minor_axis: float
    standard_gravitational_parameter: float
    escape_timer: int

    @classmethod
    def from_body(cls, body: Body) -> "BodyView":
        return cls(
            body_id=body.body_id,
            mass=body.mass,
            position=body.position,
            velocity=body.velocity,
            size=body.size,
            color=body.color,
            reference=body.reference,
            eccentricity_vector=body.eccentricity_vector,
            eccentricity=body.eccentricity,
            semi_major_axis=body.semi_major_axis,
            semi_minor_axis=body.semi_minor_axis,
            standard_gravitational_parameter=body.standard_gravitational_parameter,
            escape_timer=body.escape_timer,
        )

    @property
    def is_primary(self) -> bool:
        return self.reference is None

    @property
    def is_bound(self) -> bool:
        return self.reference is not None and self.eccentricity < 1.0
