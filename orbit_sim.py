#!/usr/bin/env python3
"""
Orbital simulator headless entry point.

What this module does
- Builds a scene (the built-in central star system, or a JSON scene file) in an
  OrbitalSystem and advances it tick by tick.
- Logs a one-line summary of every body at a fixed tick interval and a final
  report, so runs can be compared without a viewport.

Units and conventions
- Simulation units: pixels and ticks. The viewport half-extents decide when an
  escaping body is far enough away to be removed.
- Colors are RGB tuples in 0..255.

Running
1) Run this module: `python orbit_sim.py --ticks 2000 --seed 7`
2) Load a scene: `python orbit_sim.py --scene scenes/binary_planets.json`
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from orbital.errors import ConfigurationError, OrbitalError
from orbital.presets_loader import DEFAULT_SCENE, build_scene, list_scenes, load_scene
from orbital.settings import SimulationSettings
from orbital.system import OrbitalSystem

logger = logging.getLogger("orbit_sim")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s - %(message)s"


def format_body(view) -> str:
    if view.reference is None:
        return f"#{view.body_id} primary m={view.mass:g} pos=({view.position[0]:.1f}, {view.position[1]:.1f})"
    return (
        f"#{view.body_id} -> #{view.reference} m={view.mass:g} "
        f"pos=({view.position[0]:.1f}, {view.position[1]:.1f}) "
        f"e={view.eccentricity:.4f} a={view.semi_major_axis:.1f} b={view.semi_minor_axis:.1f}"
    )


def run(system: OrbitalSystem, ticks: int, report_every: int = 0) -> None:
    """Advance system by ticks steps, logging a summary every report_every ticks."""
    for _ in range(ticks):
        system.tick()
        if report_every and system.tick_count % report_every == 0:
            logger.info("tick %d: %d bodies", system.tick_count, len(system))
            for view in system.bodies():
                logger.debug("  %s", format_body(view))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the orbital simulator without a viewport.")
    parser.add_argument("--ticks", type=int, default=1000, help="number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    parser.add_argument("--scene", default=None, help="scene JSON file (default: built-in central star)")
    parser.add_argument("--list-scenes", action="store_true", help="list scene files and exit")
    parser.add_argument("--gravity", type=float, default=None, help="gravitational constant")
    parser.add_argument("--escape-budget", type=int, default=None, help="ticks before an escaping body may be removed")
    parser.add_argument("--anchor", action="store_true", help="pin the first primary in place")
    parser.add_argument("--report-every", type=int, default=100, help="log a summary every N ticks (0 = never)")
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    if args.list_scenes:
        for file_name, display in list_scenes():
            print(f"{file_name}\t{display}")
        return 0

    overrides = {}
    if args.gravity is not None:
        overrides["gravitational_constant"] = args.gravity
    if args.escape_budget is not None:
        overrides["escape_timer_budget"] = args.escape_budget
    try:
        settings = SimulationSettings(anchor_first_primary=args.anchor, **overrides)
    except ConfigurationError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    scene = DEFAULT_SCENE
    if args.scene:
        scene = load_scene(args.scene)
        if scene is None:
            logger.error("Could not load scene %s", args.scene)
            return 1

    system = OrbitalSystem(settings, rng=random.Random(args.seed))
    try:
        build_scene(system, scene)
    except (KeyError, TypeError, ValueError, OrbitalError) as exc:
        logger.error("Could not build scene %s: %s", scene.get("name"), exc)
        return 1
    run(system, args.ticks, args.report_every)

    logger.info("Finished %d ticks with %d bodies", system.tick_count, len(system))
    for view in system.bodies():
        logger.info("  %s", format_body(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
