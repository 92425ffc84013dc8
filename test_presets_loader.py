import json
import math
import os
import random
import tempfile
import unittest

from orbital.presets_loader import (
    DEFAULT_SCENE,
    _coerce_color,
    build_scene,
    list_scenes,
    load_scene,
    random_offset,
)
from orbital.settings import SimulationSettings
from orbital.system import OrbitalSystem


class TestRandomOffset(unittest.TestCase):

    def test_distance_within_bounds(self):
        rng = random.Random(7)
        for _ in range(200):
            offset = random_offset((0.0, 0.0), 100.0, 200.0, (550.0, 400.0), rng)
            self.assertGreaterEqual(math.hypot(*offset), 100.0 - 1e-9)
            self.assertLessEqual(math.hypot(*offset), 200.0 + 1e-9)

    def test_max_distance_capped_by_nearest_edge(self):
        rng = random.Random(7)
        for _ in range(50):
            offset = random_offset((0.0, 300.0), 10.0, 500.0, (550.0, 400.0), rng)
            self.assertLessEqual(math.hypot(*offset), 100.0 + 1e-9)

    def test_oversized_min_distance_is_reduced(self):
        rng = random.Random(7)
        offset = random_offset((0.0, 0.0), 1000.0, None, (550.0, 400.0), rng)
        self.assertLessEqual(math.hypot(*offset), 400.0 + 1e-9)
        self.assertGreaterEqual(math.hypot(*offset), 200.0 - 1e-9)


class TestBuildScene(unittest.TestCase):

    def test_default_scene(self):
        system = OrbitalSystem(rng=random.Random(3))
        ids = build_scene(system, DEFAULT_SCENE)
        self.assertEqual(len(ids), 4)
        self.assertEqual(system.primary_ids(), [ids[0]])

        star, planet, moon, comet = (system.body(i) for i in ids)
        self.assertEqual(star.mass, 5000.0)
        self.assertEqual(star.color, (255, 255, 0))
        self.assertEqual(planet.reference, star.body_id)
        self.assertEqual(moon.reference, planet.body_id)
        self.assertEqual(comet.reference, star.body_id)

        self.assertAlmostEqual(planet.eccentricity, 0.0, places=9)
        self.assertAlmostEqual(comet.eccentricity, 0.6, places=9)
        moon_distance = math.hypot(moon.position[0] - planet.position[0], moon.position[1] - planet.position[1])
        self.assertGreater(moon_distance, 0.0)
        self.assertLessEqual(moon_distance, 100.0 + 1e-9)

    def test_same_seed_same_scene(self):
        positions = []
        for _ in range(2):
            system = OrbitalSystem(rng=random.Random(11))
            build_scene(system)
            positions.append([v.position for v in system.bodies()])
        self.assertEqual(positions[0], positions[1])

    def test_malformed_satellite_is_skipped(self):
        scene = {
            "name": "broken",
            "primary": {"mass": 1000, "size": 30, "color": [255, 255, 0]},
            "satellites": [
                {"size": 10, "distance": {"min": 100, "max": 150}},
                {"mass": -3, "size": 10, "distance": {"min": 100, "max": 150}},
                {"mass": 5, "size": 10, "distance": {"min": 100, "max": 150}},
            ],
        }
        system = OrbitalSystem(rng=random.Random(5))
        with self.assertLogs("orbital.presets_loader", level="WARNING") as logs:
            ids = build_scene(system, scene)
        self.assertEqual(len(ids), 2)
        self.assertEqual(len(logs.records), 2)

    def test_scene_respects_viewport_setting(self):
        system = OrbitalSystem(SimulationSettings(viewport_half_extents=(120.0, 120.0)), rng=random.Random(5))
        ids = build_scene(system)
        x, y = system.body(ids[1]).position
        self.assertLessEqual(abs(x), 120.0 + 1e-9)
        self.assertLessEqual(abs(y), 120.0 + 1e-9)


class TestSceneFiles(unittest.TestCase):

    def test_bundled_scene_is_listed_and_loads(self):
        names = dict(list_scenes())
        self.assertEqual(names.get("binary_planets.json"), "Binary planets")
        scene = load_scene("binary_planets.json")
        self.assertEqual(scene["primary"]["mass"], 8000)

        system = OrbitalSystem(rng=random.Random(2))
        self.assertEqual(len(build_scene(system, scene)), 4)

    def test_load_scene_from_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "solo.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"primary": {"mass": 10}}, f)
            scene = load_scene(path)
        self.assertEqual(scene["name"], "solo")
        self.assertEqual(scene["satellites"], [])

    def test_missing_or_invalid_scene(self):
        with self.assertLogs("orbital.presets_loader", level="WARNING"):
            self.assertIsNone(load_scene("does_not_exist.json"))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertLogs("orbital.presets_loader", level="WARNING"):
                self.assertIsNone(load_scene(path))

    def test_invalid_primary_mass_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            for i, primary in enumerate([{"mass": 0}, {"mass": -5}, {"size": 10}, {"mass": "heavy"}, {"mass": True}]):
                path = os.path.join(tmp, f"bad_{i}.json")
                with open(path, "w", encoding="utf-8") as f:
                    json.dump({"name": "bad", "primary": primary}, f)
                with self.assertLogs("orbital.presets_loader", level="WARNING"):
                    self.assertIsNone(load_scene(path), primary)

    def test_coerce_color(self):
        self.assertEqual(_coerce_color([300, -5, 12]), (255, 0, 12))
        self.assertEqual(_coerce_color("red"), (200, 200, 255))


if __name__ == "__main__":
    unittest.main()
