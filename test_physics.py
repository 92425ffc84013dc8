import math
import unittest

from orbital.data_models import Body
from orbital.errors import DegenerateOrbitError
from orbital.physics import (
    NBodyPhysics,
    circular_orbit_velocity,
    escape_velocity,
    vis_viva_speed,
)
from orbital.vector_utils import vec_cross


class TestGravity(unittest.TestCase):

    def setUp(self):
        self.physics = NBodyPhysics(0.1)

    def test_newtons_third_law(self):
        a = Body(0, 5000.0, (0.0, 0.0), (0.0, 0.0))
        b = Body(1, 10.0, (100.0, 50.0), (0.0, 0.0))
        self.physics.apply_gravity([a, b])

        self.assertAlmostEqual(a.mass * a.acceleration[0], -b.mass * b.acceleration[0], places=9)
        self.assertAlmostEqual(a.mass * a.acceleration[1], -b.mass * b.acceleration[1], places=9)
        # Accelerations are antiparallel and along the separation
        self.assertAlmostEqual(vec_cross(a.acceleration, (100.0, 50.0)), 0.0, places=12)
        self.assertGreater(a.acceleration[0], 0.0)
        self.assertLess(b.acceleration[0], 0.0)

    def test_inverse_square_magnitude(self):
        a = Body(0, 5000.0, (0.0, 0.0), (0.0, 0.0))
        b = Body(1, 10.0, (100.0, 0.0), (0.0, 0.0))
        self.physics.apply_gravity([a, b])
        # G * M / r^2
        self.assertAlmostEqual(b.acceleration[0], -0.1 * 5000.0 / 100.0 ** 2)
        self.assertAlmostEqual(b.acceleration[1], 0.0)

    def test_acceleration_is_reset_each_pass(self):
        a = Body(0, 5000.0, (0.0, 0.0), (0.0, 0.0), acceleration=(99.0, 99.0))
        self.physics.apply_gravity([a])
        self.assertEqual(a.acceleration, (0.0, 0.0))

    def test_coincident_bodies_contribute_nothing(self):
        a = Body(0, 10.0, (5.0, 5.0), (0.0, 0.0))
        b = Body(1, 20.0, (5.0, 5.0), (0.0, 0.0))
        self.physics.apply_gravity([a, b])
        self.assertEqual(a.acceleration, (0.0, 0.0))
        self.assertEqual(b.acceleration, (0.0, 0.0))

    def test_result_does_not_depend_on_order(self):
        def make():
            return [
                Body(0, 5000.0, (0.0, 0.0), (0.0, 0.0)),
                Body(1, 300.0, (120.0, -40.0), (0.0, 0.0)),
                Body(2, 20.0, (-70.0, 90.0), (0.0, 0.0)),
            ]

        forward = make()
        backward = list(reversed(make()))
        accel_forward = {b.body_id: acc for b, acc in zip(forward, self.physics.compute_accelerations(forward))}
        accel_backward = {b.body_id: acc for b, acc in zip(backward, self.physics.compute_accelerations(backward))}
        for body_id in accel_forward:
            self.assertAlmostEqual(accel_forward[body_id][0], accel_backward[body_id][0], places=12)
            self.assertAlmostEqual(accel_forward[body_id][1], accel_backward[body_id][1], places=12)


class TestEulerStep(unittest.TestCase):

    def test_velocity_then_position(self):
        body = Body(0, 1.0, (0.0, 0.0), (1.0, 0.0), acceleration=(0.0, 1.0))
        NBodyPhysics().euler_integration_step([body])
        self.assertEqual(body.velocity, (1.0, 1.0))
        self.assertEqual(body.position, (1.0, 1.0))

    def test_deterministic(self):
        def run():
            bodies = [
                Body(0, 5000.0, (0.0, 0.0), (0.0, 0.0)),
                Body(1, 1.0, (200.0, 0.0), (0.0, 1.5)),
            ]
            physics = NBodyPhysics(0.1)
            for _ in range(50):
                physics.apply_gravity(bodies)
                physics.euler_integration_step(bodies)
            return [b.position for b in bodies]

        self.assertEqual(run(), run())


class TestOrbitalSpeeds(unittest.TestCase):

    def test_circular_orbit_velocity(self):
        self.assertAlmostEqual(circular_orbit_velocity(400.0, 100.0), 2.0)
        self.assertEqual(circular_orbit_velocity(400.0, 0.0), 0.0)

    def test_vis_viva_matches_circular_when_a_equals_r(self):
        self.assertAlmostEqual(vis_viva_speed(500.0, 250.0, 250.0), circular_orbit_velocity(500.0, 250.0))

    def test_vis_viva_at_apoapsis(self):
        # a = r / (1 + e) puts the body at apoapsis: v^2 = mu (1 - e) / r
        mu, r, e = 500.0, 200.0, 0.6
        self.assertAlmostEqual(vis_viva_speed(mu, r, r / (1 + e)), math.sqrt(mu * (1 - e) / r))

    def test_vis_viva_rejects_unreachable_orbit(self):
        with self.assertRaises(DegenerateOrbitError):
            vis_viva_speed(500.0, 200.0, 50.0)
        with self.assertRaises(DegenerateOrbitError):
            vis_viva_speed(500.0, 200.0, 0.0)

    def test_escape_velocity(self):
        self.assertAlmostEqual(escape_velocity(400.0, 100.0), 2.0 * math.sqrt(2.0))
        self.assertEqual(escape_velocity(400.0, 0.0), 0.0)
        self.assertEqual(escape_velocity(0.0, 100.0), 0.0)


if __name__ == "__main__":
    unittest.main()
