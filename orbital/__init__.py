#!/usr/bin/env python3
"""
Orbital simulator core: N-body gravity, explicit Euler integration and
per-body Keplerian orbits with automatic re-parenting of escaping satellites.
"""
from .data_models import Body, BodyView
from .errors import (
    ConfigurationError,
    DegenerateOrbitError,
    InvalidMassError,
    OrbitalError,
    UnknownBodyError,
)
from .orbital_elements import OrbitalElements, OrbitEllipse, compute_orbital_elements, ellipse_geometry
from .settings import SimulationSettings
from .system import OrbitalSystem

__all__ = [
    "Body",
    "BodyView",
    "ConfigurationError",
    "DegenerateOrbitError",
    "InvalidMassError",
    "OrbitalError",
    "OrbitalElements",
    "OrbitEllipse",
    "OrbitalSystem",
    "SimulationSettings",
    "UnknownBodyError",
    "compute_orbital_elements",
    "ellipse_geometry",
]
