"""
Tests for the mean-element ephemeris.

The expected values are coarse checks against well-known geometry: Earth stays
near 1 AU, lies in the ecliptic, and sits at a heliocentric longitude of about
100.4 deg at J2000 (the Sun appears at about 280.4 deg).
"""
import math
import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from orrery import DEFAULT_CATALOG, EphemerisError, J2000, KeplerianEphemeris, OBLIQUITY_DEG, julian_centuries
from orrery.ephemeris import as_utc, mean_elements_to_position, solve_kepler

import jax.numpy as jnp


def ecliptic(vec):
    """Rotate a J2000 equatorial vector back into the ecliptic."""
    eps = math.radians(OBLIQUITY_DEG)
    return (vec.x,
            vec.y * math.cos(eps) + vec.z * math.sin(eps),
            -vec.y * math.sin(eps) + vec.z * math.cos(eps))


class TestKeplerianEphemeris(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.ephem = KeplerianEphemeris(DEFAULT_CATALOG)

    def test_serves_all_planets(self):
        self.assertEqual(self.ephem.body_names, DEFAULT_CATALOG.names[1:])

    def test_earth_distance(self):
        for year in (1970, 1995, 2000, 2024, 2049):
            for month in (1, 4, 7, 10):
                vec = self.ephem.heliocentric_vector('Earth', datetime(year, month, 1, tzinfo=timezone.utc))
                r = math.sqrt(vec.x ** 2 + vec.y ** 2 + vec.z ** 2)
                self.assertGreater(r, 0.98)
                self.assertLess(r, 1.02)

    def test_earth_longitude_at_j2000(self):
        x, y, _ = ecliptic(self.ephem.heliocentric_vector('Earth', J2000))
        longitude = math.degrees(math.atan2(y, x)) % 360.0
        self.assertAlmostEqual(longitude, 100.4, delta=1.0)

    def test_earth_lies_in_ecliptic(self):
        for days in (0, 91, 182, 273):
            _, _, z = ecliptic(self.ephem.heliocentric_vector('Earth', J2000 + timedelta(days=days)))
            self.assertLess(abs(z), 1e-4)

    def test_outer_planet_distances(self):
        instant = datetime(2010, 6, 1, tzinfo=timezone.utc)
        bounds = {
            'Mars': (1.37, 1.68),
            'Jupiter': (4.90, 5.50),
            'Neptune': (29.7, 30.4),
            'Pluto': (29.6, 49.4),
        }
        for name, (lo, hi) in bounds.items():
            vec = self.ephem.heliocentric_vector(name, instant)
            r = math.sqrt(vec.x ** 2 + vec.y ** 2 + vec.z ** 2)
            self.assertGreater(r, lo, name)
            self.assertLess(r, hi, name)

    def test_repeatable(self):
        instant = datetime(1984, 2, 29, 6, 30, tzinfo=timezone.utc)
        first = self.ephem.heliocentric_vector('Mars', instant)
        fresh = KeplerianEphemeris(DEFAULT_CATALOG).heliocentric_vector('Mars', instant)
        self.assertEqual(first, fresh)
        self.assertEqual(first, self.ephem.heliocentric_vector('Mars', instant))

    def test_naive_instants_are_utc(self):
        aware = datetime(2001, 5, 5, 12, tzinfo=timezone.utc)
        self.assertEqual(self.ephem.heliocentric_vector('Venus', aware),
                         self.ephem.heliocentric_vector('Venus', aware.replace(tzinfo=None)))

    def test_far_dates_are_finite(self):
        for year in (1, 1600, 2500, 9999):
            vec = self.ephem.heliocentric_vector('Saturn', datetime(year, 1, 1, tzinfo=timezone.utc))
            self.assertTrue(all(math.isfinite(c) for c in vec))

    def test_sun_is_not_served(self):
        with self.assertRaises(EphemerisError):
            self.ephem.heliocentric_vector('Sun', J2000)

    def test_unknown_body(self):
        with self.assertRaises(EphemerisError):
            self.ephem.heliocentric_vector('Vulcan', J2000)


class TestTimeHelpers(unittest.TestCase):

    def test_julian_centuries(self):
        self.assertEqual(julian_centuries(J2000), 0.0)
        self.assertAlmostEqual(julian_centuries(J2000 + timedelta(days=36525)), 1.0)
        self.assertAlmostEqual(julian_centuries(J2000 - timedelta(days=365.25)), -0.01)

    def test_as_utc_converts_offsets(self):
        local = datetime(2000, 1, 1, 14, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(as_utc(local), datetime(2000, 1, 1, 12, tzinfo=timezone.utc))


class TestSolveKepler(unittest.TestCase):

    def test_residual(self):
        M = jnp.array([-3.0, -1.0, 0.0, 0.5, 2.0, 3.1])
        e = jnp.array([0.0, 0.2, 0.5, 0.9, 0.25, 0.05])
        E = solve_kepler(M, e)
        residual = np.asarray(E - e * jnp.sin(E) - M)
        self.assertLess(np.max(np.abs(residual)), 1e-10)


class TestMeanElementsKernel(unittest.TestCase):

    def test_rates_advance_elements(self):
        elements = jnp.array([[1.0, 0.0, 0.0, 0.0, 0.0, 0.0]])
        rates = jnp.array([[0.0, 0.0, 0.0, 9000.0, 0.0, 0.0]])
        pos = np.asarray(mean_elements_to_position(elements, rates, 0.01))[0]
        eps = math.radians(OBLIQUITY_DEG)
        np.testing.assert_allclose(pos, [0.0, math.cos(eps), math.sin(eps)], atol=1e-12)

    def test_zero_rates_hold_elements(self):
        elements = jnp.array([[2.0, 0.0, 0.0, 180.0, 0.0, 0.0]])
        pos = np.asarray(mean_elements_to_position(elements, jnp.zeros_like(elements), 5.0))[0]
        np.testing.assert_allclose(pos, [-2.0, 0.0, 0.0], atol=1e-12)


if __name__ == '__main__':
    unittest.main()
