"""
Physical, display and playback constants for the orrery engine.

This module contains all constants used throughout the position, projection and time engine.
"""
import math
from datetime import datetime, timezone

# Basic astronomical and time constants
DAY = 86400.0  # seconds per day
MS_PER_DAY = DAY * 1000.0  # milliseconds per day
DAYS_PER_YEAR = 365.25  # days per (Julian) year
DAYS_PER_CENTURY = 36525.0  # days per Julian century
J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)  # reference epoch of the mean elements

# Mean obliquity of the ecliptic (Earth's axial tilt) at J2000
OBLIQUITY_DEG = 23.43928
OBLIQUITY_RAD = math.radians(OBLIQUITY_DEG)

# Schematic ring ladder (scene units)
SCHEMATIC_BASE_RADIUS = 90.0
SCHEMATIC_RING_GAP = 65.0

# Below this heliocentric-frame distance the bearing of an offset is undefined
DEGENERATE_DISTANCE = 1e-6

# Trail sampling
BASE_TRAIL_DURATION_DAYS = 50.0
BASE_DT_DAYS = 1.0
MAX_TRAIL_STEPS = 300
MIN_TRAIL_SPEED = 0.1
TRAIL_DURATION_EXPONENT = 0.7
TRAIL_STEP_EXPONENT = 0.3

# Playback pacing: wall-clock milliseconds per simulated year at speed 1
REALTIME_MS_PER_YEAR = 3000.0

# Default playback range
DEFAULT_START = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Earliest representable instant; back-sampling never reaches further
EARLIEST_INSTANT = datetime.min.replace(tzinfo=timezone.utc)
