"""Tests for per-frame computation and the input facade."""
import unittest
from datetime import datetime, timedelta, timezone

from orrery import (
    DEFAULT_CATALOG,
    DisplayOptions,
    EphemerisError,
    Orrery,
    TimeModel,
    ViewMode,
    compute_state,
    ring_radius,
)
from orrery.tests.fakes import BrokenEphemeris, CircularEphemeris, PLANET_ORBITS

INSTANT = datetime(2003, 8, 27, 10, tzinfo=timezone.utc)


class TestComputeState(unittest.TestCase):

    def setUp(self):
        self.ephem = CircularEphemeris(PLANET_ORBITS)

    def test_deterministic(self):
        for mode in ViewMode:
            for align in (True, False):
                args = (INSTANT, 4, mode, True, 2.5, align)
                first = compute_state(*args, ephemeris=self.ephem)
                second = compute_state(*args, ephemeris=CircularEphemeris(PLANET_ORBITS))
                self.assertEqual(first, second)

    def test_deterministic_with_default_ephemeris(self):
        first = compute_state(INSTANT, 3, ViewMode.FOCUS_POLAR, True, 1.0, True)
        second = compute_state(INSTANT, 3, ViewMode.FOCUS_POLAR, True, 1.0, True)
        self.assertEqual(first, second)
        self.assertEqual(len(first.bodies), len(DEFAULT_CATALOG))
        self.assertEqual(first.bodies[3].trail[0], (0.0, 0.0))

    def test_out_of_range_focus_falls_back_to_sun(self):
        with self.assertLogs('orrery.engine', level='WARNING'):
            state = compute_state(INSTANT, 42, ViewMode.SCHEMATIC, False, 1.0, True, ephemeris=self.ephem)
        self.assertEqual((state.bodies[0].x, state.bodies[0].y), (0.0, 0.0))
        expected = compute_state(INSTANT, 0, ViewMode.SCHEMATIC, False, 1.0, True, ephemeris=self.ephem)
        self.assertEqual(state, expected)

    def test_ephemeris_failure_is_fatal(self):
        with self.assertRaises(EphemerisError):
            compute_state(INSTANT, 0, ViewMode.SCHEMATIC, False, 1.0, True,
                          ephemeris=BrokenEphemeris('Neptune', RuntimeError('no data')))

    def test_frame_at_earliest_instant(self):
        earliest = datetime.min.replace(tzinfo=timezone.utc)
        for speed in (1.0, 1e6):
            state = compute_state(earliest, 3, ViewMode.SCHEMATIC, True, speed, True, ephemeris=self.ephem)
            self.assertEqual(len(state.bodies), len(DEFAULT_CATALOG))
            self.assertFalse(any(body.is_retrograde for body in state.bodies))
            self.assertEqual(len(set(state.bodies[4].trail)), 1)

    def test_inner_system_scenario(self):
        catalog = DEFAULT_CATALOG.subset(['Sun', 'Mercury', 'Venus', 'Earth'])
        state = compute_state(INSTANT, 3, ViewMode.SCHEMATIC, False, 1.0, True,
                              catalog=catalog, ephemeris=self.ephem)
        self.assertEqual((state.bodies[3].x, state.bodies[3].y), (0.0, 0.0))
        self.assertEqual([r.radius for r in state.rings], [ring_radius(1), ring_radius(2), ring_radius(3)])
        self.assertEqual(ring_radius(0), 0.0)


class TestOrrery(unittest.TestCase):

    def setUp(self):
        start = datetime(2000, 1, 1, tzinfo=timezone.utc)
        self.orrery = Orrery(
            ephemeris=CircularEphemeris(PLANET_ORBITS),
            time_model=TimeModel(start, start + timedelta(days=1000)),
        )

    def test_defaults(self):
        o = self.orrery
        self.assertEqual(o.focus_name, 'Sun')
        self.assertEqual(o.focus_index, 0)
        self.assertIs(o.view_mode, ViewMode.FOCUS_POLAR)
        self.assertTrue(o.align_ecliptic)
        self.assertEqual(o.display_options, DisplayOptions(
            show_orbits=False, show_trails=True, show_retrograde=True, show_labels=True, show_stars=True))
        self.assertIsNone(o.hovered_body)
        self.assertEqual(o.available_bodies, DEFAULT_CATALOG.names)
        self.assertEqual(o.max_schematic_radius, ring_radius(9))

    def test_set_focus(self):
        self.orrery.set_focus('Mars')
        self.assertEqual(self.orrery.focus_index, 4)
        state = self.orrery.state()
        self.assertEqual((state.bodies[4].x, state.bodies[4].y), (0.0, 0.0))

    def test_unknown_focus_resolves_to_sun(self):
        self.orrery.set_focus('Mars')
        with self.assertLogs('orrery.bodies', level='WARNING'):
            self.orrery.set_focus('Nibiru')
        self.assertEqual(self.orrery.focus_name, 'Sun')
        self.assertEqual(self.orrery.focus_index, 0)

    def test_toggles(self):
        o = self.orrery
        o.toggle_view_mode()
        self.assertIs(o.view_mode, ViewMode.SCHEMATIC)
        o.toggle_align_ecliptic()
        self.assertFalse(o.align_ecliptic)
        o.toggle_trails()
        o.toggle_orbits()
        o.toggle_retrograde()
        o.toggle_labels()
        o.toggle_stars()
        self.assertEqual(o.display_options, DisplayOptions(
            show_orbits=True, show_trails=False, show_retrograde=False, show_labels=False, show_stars=False))

    def test_trail_toggle_reaches_state(self):
        self.assertIsNotNone(self.orrery.state().bodies[1].trail)
        self.orrery.toggle_trails()
        self.assertIsNone(self.orrery.state().bodies[1].trail)

    def test_hovered_body(self):
        self.orrery.set_hovered_body('Venus')
        self.assertEqual(self.orrery.hovered_body, 'Venus')
        self.orrery.set_hovered_body('Nibiru')
        self.assertIsNone(self.orrery.hovered_body)
        self.orrery.set_hovered_body(None)
        self.assertIsNone(self.orrery.hovered_body)

    def test_frame_advances_only_while_playing(self):
        o = self.orrery
        start = o.time.current
        o.frame(16.0)
        self.assertEqual(o.time.current, start)
        o.toggle_play()
        o.set_speed(10.0)
        o.frame(16.0)
        self.assertAlmostEqual(o.time.elapsed_days, 16.0 * 10.0 * 365.25 / 3000.0, places=9)

    def test_time_controls_forwarded(self):
        o = self.orrery
        o.set_current_by_days_elapsed(500)
        self.assertEqual(o.time.elapsed_days, 500)
        o.set_end(o.time.start + timedelta(days=100))
        self.assertEqual(o.time.elapsed_days, 100)
        o.set_start(o.time.start + timedelta(days=200))
        self.assertEqual(o.time.total_days, 0)
        with self.assertRaises(ValueError):
            o.set_speed(-2.0)
        o.toggle_play()
        o.tick(50.0)
        self.assertEqual(o.time.current, o.time.start)

    def test_state_in_first_year(self):
        utc = timezone.utc
        o = Orrery(time_model=TimeModel(datetime(1, 1, 1, tzinfo=utc), datetime(1, 12, 31, tzinfo=utc)))
        state = o.state()
        self.assertEqual(len(state.bodies), len(DEFAULT_CATALOG))
        self.assertEqual(len(state.bodies[3].trail), 51)
        o.set_current_by_days_elapsed(30)
        o.set_speed(1e4)
        self.assertEqual(len(o.state().bodies), len(DEFAULT_CATALOG))

    def test_state_matches_compute_state(self):
        o = self.orrery
        o.set_focus('Earth')
        o.toggle_view_mode()
        expected = compute_state(o.time.current, 3, ViewMode.SCHEMATIC, True, 1.0, True, ephemeris=o.ephemeris)
        self.assertEqual(o.state(), expected)


if __name__ == '__main__':
    unittest.main()
