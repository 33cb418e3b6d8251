"""
Mean orbital elements for the solar-system bodies.
"""
from typing import NamedTuple


class OrbitalElements(NamedTuple):
    """
    JPL-style mean Keplerian elements of a planet about the Sun.

    The same tuple type is used for the element values at J2000 and for their
    linear rates of change per Julian century. All angular quantities are in degrees.

    Attributes:
        a: Semi-major axis (AU)
        e: Eccentricity (dimensionless)
        i: Inclination to the ecliptic (deg)
        L: Mean longitude (deg)
        varpi: Longitude of perihelion (deg)
        Omega: Longitude of the ascending node (deg)
    """
    a: float  # semi-major axis (AU)
    e: float  # eccentricity
    i: float  # inclination (deg)
    L: float  # mean longitude (deg)
    varpi: float  # longitude of perihelion (deg)
    Omega: float  # longitude of ascending node (deg)
