#!/usr/bin/env python3
"""
Scene presets and scene JSON loading utilities.

A scene is one primary body plus a list of satellites placed at a random
distance from their parent. The built-in DEFAULT_SCENE is a central star with
two planets and a moon; users can drop their own JSON files into scenes/.

Schema
======
Scene JSON (scenes/*.json):
{
  "name": "Human-friendly scene name",
  "primary": {
    "mass": 5000,
    "size": 50,
    "color": [255, 255, 0],
    "position": [0.0, 0.0],          # optional, default origin
    "velocity": [0.0, 0.0]           # optional, default at rest
  },
  "satellites": [
    {
      "mass": 500,
      "size": 20,
      "color": [0, 128, 0],
      "distance": {"min": 300, "max": 400},
      "eccentricity": 0.0,            # optional; 0 = circular, start at apoapsis
      "parent": 0                     # optional index into bodies created so far
    }
  ]
}
"""
import json
import logging
import math
import os
import random
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_COLOR, DEFAULT_SIZE, VIEW_HALF_EXTENTS
from .errors import OrbitalError
from .system import OrbitalSystem
from .vector_utils import vec_add, vec_len

logger = logging.getLogger(__name__)

SCENES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "scenes")

DEFAULT_SCENE: Dict = {
  "name": "Central star",
  "primary": {
    "mass": 5000,
    "size": 50,
    "color": [255, 255, 0],
    "position": [0.0, 0.0],
    "velocity": [0.0, 0.0],
  },
  "satellites": [
    {"mass": 500, "size": 20, "color": [0, 128, 0], "distance": {"min": 300, "max": 400}, "eccentricity": 0.0},
    {"mass": 10, "size": 20, "color": [255, 0, 0], "distance": {"min": 100, "max": 100}, "eccentricity": 0.0, "parent": 1},
    {"mass": 100, "size": 10, "color": [0, 0, 255], "distance": {"min": 100, "max": 200}, "eccentricity": 0.6},
  ],
}


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read scene file %s: %s", path, exc)
    return None


def _coerce_color(c) -> Tuple[int, int, int]:
  try:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
  except (TypeError, ValueError, IndexError):
    return DEFAULT_COLOR
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def _coerce_vec(v, default=(0.0, 0.0)) -> Tuple[float, float]:
  if v is None:
    return default
  return (float(v[0]), float(v[1]))


def random_offset(
  reference_position: Tuple[float, float],
  min_distance: float = 0.0,
  max_distance: Optional[float] = None,
  half_extents: Tuple[float, float] = VIEW_HALF_EXTENTS,
  rng: Optional[random.Random] = None,
) -> Tuple[float, float]:
  """
  Random offset from reference_position that stays inside the viewport.

  min_distance is halved to a safe value when it exceeds the smaller
  half-extent; max_distance is capped by the distance from the reference to
  the nearest viewport edge.
  """
  rng = rng if rng is not None else random.Random()
  hx, hy = half_extents
  if min_distance > min(hx, hy):
    min_distance = min(hx, hy) / 2

  closest_edge = min(hx - abs(reference_position[0]), hy - abs(reference_position[1]))
  max_distance = min(max_distance, closest_edge) if max_distance else closest_edge

  angle = rng.uniform(0.0, 2.0 * math.pi)
  distance = rng.uniform(min_distance, max_distance)
  return (distance * math.cos(angle), distance * math.sin(angle))


def list_scenes() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available scene files."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(SCENES_DIR):
    return items
  for fn in sorted(os.listdir(SCENES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(SCENES_DIR, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_scene(path: str) -> Optional[Dict]:
  """
  Load a scene JSON by path, or by file name inside scenes/.
  Returns None when the file cannot be read, has no primary body, or the
  primary mass is missing or not positive.
  """
  if not os.path.isfile(path):
    path = os.path.join(SCENES_DIR, path)
  data = _read_json(path)
  if not data or not isinstance(data.get("primary"), dict):
    logger.warning("Scene %s has no primary body", path)
    return None
  mass = data["primary"].get("mass")
  if isinstance(mass, bool) or not isinstance(mass, (int, float)) or not mass > 0:
    logger.warning("Scene %s has an invalid primary mass: %r", path, mass)
    return None
  data.setdefault("name", os.path.splitext(os.path.basename(path))[0])
  data.setdefault("satellites", [])
  return data


def build_scene(system: OrbitalSystem, scene: Dict = DEFAULT_SCENE, rng: Optional[random.Random] = None) -> List[int]:
  """
  Populate system with the bodies of a scene.

  Satellites whose definition is malformed or cannot be placed are skipped
  with a warning. Returns the ids of the bodies created, primary first.
  """
  rng = rng if rng is not None else system.rng
  p = scene["primary"]
  ids = [system.add_primary(
    mass=float(p["mass"]),
    position=_coerce_vec(p.get("position")),
    velocity=_coerce_vec(p.get("velocity")),
    size=float(p.get("size", DEFAULT_SIZE)),
    color=_coerce_color(p.get("color", DEFAULT_COLOR)),
  )]

  for i, s in enumerate(scene.get("satellites", [])):
    try:
      parent_index = int(s.get("parent") or 0)
      parent_id = ids[parent_index] if 0 <= parent_index < len(ids) else ids[0]
      parent = system.body(parent_id)
      distance = s.get("distance", {})
      offset = random_offset(
        parent.position,
        float(distance.get("min", 0.0)),
        distance.get("max"),
        system.settings.viewport_half_extents,
        rng,
      )
      eccentricity = float(s.get("eccentricity", 0.0))
      ids.append(system.add_satellite(
        reference=parent_id,
        mass=float(s["mass"]),
        size=float(s.get("size", DEFAULT_SIZE)),
        color=_coerce_color(s.get("color", DEFAULT_COLOR)),
        position=vec_add(parent.position, offset),
        semi_major_axis=vec_len(offset) / (1.0 + eccentricity),
        direction=1 if rng.random() > 0.5 else -1,
      ))
    except (KeyError, TypeError, ValueError, OrbitalError) as exc:
      logger.warning("Skipping satellite %d of scene %r: %s", i, scene.get("name"), exc)
      continue

  logger.info("Built scene %r with %d bodies", scene.get("name"), len(ids))
  return ids
