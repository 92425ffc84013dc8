#!/usr/bin/env python3
"""
Keplerian elements of a body relative to its reference body.

compute_orbital_elements turns a relative state vector into the eccentricity
vector and the semi-major/semi-minor axes of the osculating ellipse.
ellipse_geometry turns those elements into the centre, rotation and half-axes
a renderer needs to draw the orbit.

Conventions
- The velocity passed in is the body's own velocity, not its velocity relative
  to the reference body. The drawn ellipses therefore drift slowly when the
  reference itself moves.
- At exactly parabolic speed the semi-major axis is infinite and the semi-minor
  axis may be NaN. Both are derived values only and never feed back into the
  integration.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .vector_utils import (
    vec_cross,
    vec_heading,
    vec_len,
    vec_len_sq,
    vec_norm,
    vec_scale,
    vec_sub,
)


@dataclass(frozen=True)
class OrbitalElements:
    eccentricity_vector: Tuple[float, float]
    eccentricity: float
    semi_major_axis: float
    semi_minor_axis: float
    standard_gravitational_parameter: float


@dataclass(frozen=True)
class OrbitEllipse:
    """Ellipse placement in world coordinates; rotation in radians."""
    center: Tuple[float, float]
    rotation: float
    semi_major_axis: float
    semi_minor_axis: float


def compute_orbital_elements(
    relative_position: Tuple[float, float],
    velocity: Tuple[float, float],
    gravitational_parameter: float,
) -> OrbitalElements:
    """
    Compute the orbital elements for a body at relative_position moving with velocity.

    In the plane the specific angular momentum is the scalar h = r x v, and
    v x h reduces to (v.y * h, -v.x * h). Then

        e = (v x h) / mu - r_hat
        a = -(mu * |r|) / (|r| * |v|^2 - 2 * mu)
        b = a * sqrt(max(0, 1 - e^2))

    Args:
        relative_position: body position minus reference position
        velocity: body velocity
        gravitational_parameter: mu = G * (M_reference + m_body), must be positive

    Returns:
        OrbitalElements for the osculating orbit.
    """
    mu = gravitational_parameter
    r = relative_position
    v = velocity

    h = vec_cross(r, v)
    v_cross_h = (v[1] * h, -v[0] * h)
    r_hat = vec_norm(r)
    e_vec = (v_cross_h[0] / mu - r_hat[0], v_cross_h[1] / mu - r_hat[1])
    e = vec_len(e_vec)

    r_len = vec_len(r)
    denominator = r_len * vec_len_sq(v) - 2.0 * mu
    if denominator == 0:
        semi_major = math.inf
    else:
        semi_major = -(mu * r_len) / denominator

    # Rounding can push e a hair past 1 on nearly parabolic orbits
    semi_minor = semi_major * math.sqrt(max(0.0, 1.0 - e * e))

    return OrbitalElements(
        eccentricity_vector=e_vec,
        eccentricity=e,
        semi_major_axis=semi_major,
        semi_minor_axis=semi_minor,
        standard_gravitational_parameter=mu,
    )


def ellipse_geometry(
    reference_position: Tuple[float, float],
    eccentricity_vector: Tuple[float, float],
    semi_major_axis: float,
    semi_minor_axis: float,
) -> OrbitEllipse:
    """
    Place the orbit ellipse in world coordinates.

    The reference body sits at one focus; the centre lies a * |e| away from
    it, opposite the periapsis, and the major axis points along e.
    """
    center = vec_sub(reference_position, vec_scale(eccentricity_vector, semi_major_axis))
    return OrbitEllipse(
        center=center,
        rotation=vec_heading(eccentricity_vector),
        semi_major_axis=semi_major_axis,
        semi_minor_axis=semi_minor_axis,
    )
