#!/usr/bin/env python3
"""
Simulation settings for the orbital simulator.

SimulationSettings gathers the tunable constants that drive a tick. Defaults
come from constants.py; every value can be overridden at construction time,
and validate() rejects combinations that would prevent the
simulation from running correctly.
"""
from typing import Tuple

from .constants import (
    ESCAPE_TIMER_BUDGET,
    G,
    REPARENT_GOOD_ENOUGH,
    VIEW_HALF_EXTENTS,
)
from .errors import ConfigurationError


class SimulationSettings:
    """Container for simulation-wide settings."""

    def __init__(
        self,
        gravitational_constant: float = G,
        escape_timer_budget: int = ESCAPE_TIMER_BUDGET,
        reparent_threshold: float = REPARENT_GOOD_ENOUGH,
        viewport_half_extents: Tuple[float, float] = VIEW_HALF_EXTENTS,
        anchor_first_primary: bool = False,
    ):
        self.gravitational_constant = float(gravitational_constant)
        self.escape_timer_budget = int(escape_timer_budget)
        self.reparent_threshold = float(reparent_threshold)
        self.viewport_half_extents = (float(viewport_half_extents[0]), float(viewport_half_extents[1]))
        self.anchor_first_primary = bool(anchor_first_primary)
        self.validate()

    def validate(self) -> None:
        """
        Check the settings for consistency.

        Raises:
            ConfigurationError: if any value is out of range.
        """
        if not self.gravitational_constant > 0:
            raise ConfigurationError(
                f"gravitational_constant must be positive, got {self.gravitational_constant}"
            )
        if self.escape_timer_budget < 1:
            raise ConfigurationError(
                f"escape_timer_budget must be at least 1 tick, got {self.escape_timer_budget}"
            )
        if self.reparent_threshold < 0:
            raise ConfigurationError(
                f"reparent_threshold must be >= 0, got {self.reparent_threshold}"
            )
        hx, hy = self.viewport_half_extents
        if hx < 0 or hy < 0:
            raise ConfigurationError(
                f"viewport_half_extents must be non-negative, got {self.viewport_half_extents}"
            )

    def is_far_away(self, position: Tuple[float, float]) -> bool:
        """True when position lies beyond the viewport half-extent on both axes."""
        hx, hy = self.viewport_half_extents
        return abs(position[0]) > hx and abs(position[1]) > hy

    def __repr__(self) -> str:
        return (
            f"SimulationSettings(gravitational_constant={self.gravitational_constant}, "
            f"escape_timer_budget={self.escape_timer_budget}, "
            f"reparent_threshold={self.reparent_threshold}, "
            f"viewport_half_extents={self.viewport_half_extents}, "
            f"anchor_first_primary={self.anchor_first_primary})"
        )
