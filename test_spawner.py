import math
import random
import unittest

from orbital.errors import UnknownBodyError
from orbital.spawner import AUTO_SIZE, SatelliteSpawner, map_range, random_int
from orbital.system import OrbitalSystem


class TestHelpers(unittest.TestCase):

    def test_random_int_range(self):
        rng = random.Random(1)
        values = {random_int(rng, 25, 30) for _ in range(200)}
        self.assertTrue(values <= {25, 26, 27, 28, 29})

    def test_random_int_inverted_range(self):
        self.assertEqual(random_int(random.Random(1), 50, 10), 50)

    def test_map_range(self):
        self.assertEqual(map_range(25, 25, 500, 10, 40), 10)
        self.assertEqual(map_range(500, 25, 500, 10, 40), 40)
        self.assertAlmostEqual(map_range(262.5, 25, 500, 10, 40), 25.0)
        self.assertEqual(map_range(7, 7, 7, 10, 40), 10)


class TestSatelliteSpawner(unittest.TestCase):

    def setUp(self):
        self.system = OrbitalSystem(rng=random.Random(9))
        self.star = self.system.add_primary(5000.0, (0.0, 0.0), (0.0, 0.0), 50, (255, 255, 0))
        self.spawner = SatelliteSpawner(rng=random.Random(4))

    def test_spawn_circular_satellite(self):
        color = self.spawner.color
        body_id = self.spawner.spawn(self.system, (0.0, 250.0))
        view = self.system.body(body_id)

        self.assertEqual(view.reference, self.star)
        self.assertGreaterEqual(view.mass, 25)
        self.assertLess(view.mass, 500)
        self.assertGreaterEqual(view.size, 10.0)
        self.assertLessEqual(view.size, 40.0)
        self.assertEqual(view.color, color)
        self.assertNotEqual(self.spawner.color, color)
        self.assertAlmostEqual(view.eccentricity, 0.0, places=9)

    def test_spawn_eccentric_satellite(self):
        self.spawner.eccentricity = 0.5
        body_id = self.spawner.spawn(self.system, (300.0, 0.0))
        self.assertAlmostEqual(self.system.body(body_id).eccentricity, 0.5, places=9)

    def test_fixed_size(self):
        spawner = SatelliteSpawner(size=12, rng=random.Random(4))
        body_id = spawner.spawn(self.system, (0.0, 250.0))
        self.assertEqual(self.system.body(body_id).size, 12.0)
        self.assertNotEqual(spawner.size, AUTO_SIZE)

    def test_spawn_without_primary(self):
        with self.assertRaises(UnknownBodyError):
            self.spawner.spawn(OrbitalSystem(), (0.0, 250.0))

    def test_spawned_satellite_orbits(self):
        body_id = self.spawner.spawn(self.system, (0.0, 250.0))
        for _ in range(100):
            self.system.tick()
        view = self.system.body(body_id)
        star = self.system.body(self.star)
        distance = math.hypot(view.position[0] - star.position[0], view.position[1] - star.position[1])
        self.assertEqual(view.reference, self.star)
        self.assertLess(view.eccentricity, 1.0)
        self.assertAlmostEqual(distance, 250.0, delta=30.0)


if __name__ == "__main__":
    unittest.main()
