#!/usr/bin/env python3
"""
Exception types raised by the orbital simulator.

Only requests made from outside a tick raise; numeric edge cases met while a
tick runs are resolved locally and never surface as exceptions.
"""


class OrbitalError(Exception):
    """Base class for all simulator errors."""
    pass


class InvalidMassError(OrbitalError, ValueError):
    """Raised when a body would be created with, or set to, a mass <= 0."""

    def __init__(self, mass):
        super().__init__(f"Mass must be positive, got {mass!r}")
        self.mass = mass


class UnknownBodyError(OrbitalError, KeyError):
    """Raised when a body id does not name a body in the active set."""

    def __init__(self, body_id):
        super().__init__(f"No body with id {body_id!r}")
        self.body_id = body_id

    def __str__(self) -> str:
        return self.args[0]


class DegenerateOrbitError(OrbitalError, ValueError):
    """Raised when a satellite cannot be placed on the requested orbit."""
    pass


class ConfigurationError(OrbitalError):
    """Raised by `SimulationSettings.validate()` for inconsistent settings."""
    pass
