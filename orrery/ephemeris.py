"""
Heliocentric ephemeris adapters.

The engine only needs ``heliocentric_vector(body_name, instant) -> Vector3``: the
position of a body relative to the Sun, in AU, in the J2000 equatorial frame.
``KeplerianEphemeris`` provides it from the JPL approximate mean elements of the
catalog (E.M. Standish, "Keplerian Elements for Approximate Positions of the
Major Planets"), evaluated for every body at once with JAX.
"""
import functools
import logging
import math
from datetime import datetime, timezone
from typing import Iterable, NamedTuple, Protocol

import jax
import jax.numpy as jnp
from jax import jit
import numpy as np

from orrery.bodies import Body
from orrery.constants import DAY, DAYS_PER_CENTURY, J2000, OBLIQUITY_RAD

logger = logging.getLogger(__name__)


class Vector3(NamedTuple):
    """Heliocentric position (AU), J2000 equatorial axes."""
    x: float
    y: float
    z: float


class EphemerisError(RuntimeError):
    """Raised when a heliocentric position cannot be produced for a body and instant."""


class EphemerisAdapter(Protocol):

    def heliocentric_vector(self, body_name: str, instant: datetime) -> Vector3:
        ...


def as_utc(instant: datetime) -> datetime:
    """Return `instant` as an aware UTC datetime; naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def julian_centuries(instant: datetime) -> float:
    """Julian centuries elapsed from J2000 to `instant`."""
    return (as_utc(instant) - J2000).total_seconds() / DAY / DAYS_PER_CENTURY


def solve_kepler(M, e, max_iter: int = 30):
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E (radians)
    using a fixed number of Newton-Raphson iterations with jax.lax.scan.
    Works elementwise on arrays of M and e.
    """
    E = jnp.where(e < 0.8, M, jnp.pi * jnp.ones_like(M))

    def body_fn(E, _):
        f = E - e * jnp.sin(E) - M
        fp = 1.0 - e * jnp.cos(E)
        E_new = E - f / fp
        return E_new, None

    E_final, _ = jax.lax.scan(body_fn, E, None, length=max_iter)
    return E_final


@jit
def mean_elements_to_position(elements: jnp.ndarray, rates: jnp.ndarray, T: float) -> jnp.ndarray:
    """
    Heliocentric J2000 equatorial positions from mean elements.

    Parameters
    ----------
    elements : jnp.ndarray
        Shape (n, 6) array of [a, e, i, L, varpi, Omega] at J2000 (AU, degrees).
    rates : jnp.ndarray
        Shape (n, 6) array of the per-century rates of the same elements.
    T : float
        Julian centuries past J2000.

    Returns
    -------
    jnp.ndarray
        Shape (n, 3) array of positions in AU.
    """
    current = elements + rates * T
    a, e = current[:, 0], current[:, 1]
    inc, L, varpi, Omega = (jnp.deg2rad(current[:, k]) for k in range(2, 6))

    omega = varpi - Omega
    M = L - varpi
    M = jnp.mod(M + jnp.pi, 2.0 * jnp.pi) - jnp.pi

    E = solve_kepler(M, e)

    # Position in the orbital plane
    x_orb = a * (jnp.cos(E) - e)
    y_orb = a * jnp.sqrt(1.0 - e ** 2) * jnp.sin(E)

    cos_w, sin_w = jnp.cos(omega), jnp.sin(omega)
    cos_O, sin_O = jnp.cos(Omega), jnp.sin(Omega)
    cos_i, sin_i = jnp.cos(inc), jnp.sin(inc)

    # Rotate from the orbital plane to the J2000 ecliptic
    # R = R3(-Omega) * R1(-i) * R3(-omega)
    x_ecl = (cos_w * cos_O - sin_w * sin_O * cos_i) * x_orb + \
            (-sin_w * cos_O - cos_w * sin_O * cos_i) * y_orb
    y_ecl = (cos_w * sin_O + sin_w * cos_O * cos_i) * x_orb + \
            (-sin_w * sin_O + cos_w * cos_O * cos_i) * y_orb
    z_ecl = (sin_w * sin_i) * x_orb + (cos_w * sin_i) * y_orb

    # Ecliptic to equatorial: rotate about x by the obliquity
    cos_eps, sin_eps = jnp.cos(OBLIQUITY_RAD), jnp.sin(OBLIQUITY_RAD)
    x_eq = x_ecl
    y_eq = y_ecl * cos_eps - z_ecl * sin_eps
    z_eq = y_ecl * sin_eps + z_ecl * cos_eps

    return jnp.stack([x_eq, y_eq, z_eq], axis=-1)


class KeplerianEphemeris:
    """
    Ephemeris adapter built on the mean elements carried by catalog bodies.

    Bodies without elements (the Sun) are not served; asking for them, or for a
    name that is not in the catalog, raises EphemerisError. Accuracy is about an
    arcminute for the inner planets over 1800-2050 and degrades smoothly outside
    that span, but every date yields a finite position.
    """

    def __init__(self, bodies: Iterable[Body], cache_size: int = 4096):
        served = [body for body in bodies if body.has_elements()]
        self._row = {body.name: row for row, body in enumerate(served)}
        self._elements = jnp.array([tuple(body.elements) for body in served], dtype=jnp.float64)
        self._rates = jnp.array([tuple(body.element_rates) for body in served], dtype=jnp.float64)
        self._positions_at = functools.lru_cache(maxsize=cache_size)(self._compute_positions)
        logger.debug("Keplerian ephemeris serving %d bodies", len(served))

    @property
    def body_names(self) -> tuple[str, ...]:
        return tuple(self._row)

    def _compute_positions(self, T: float) -> np.ndarray:
        positions = np.asarray(mean_elements_to_position(self._elements, self._rates, T))
        if not np.all(np.isfinite(positions)):
            raise EphemerisError(f"Non-finite mean-element position at T={T!r} centuries")
        return positions

    def heliocentric_vector(self, body_name: str, instant: datetime) -> Vector3:
        row = self._row.get(body_name)
        if row is None:
            raise EphemerisError(f"No mean elements for body {body_name!r}")
        T = julian_centuries(instant)
        if not math.isfinite(T):
            raise EphemerisError(f"Cannot evaluate ephemeris at {instant!r}")
        x, y, z = self._positions_at(T)[row]
        return Vector3(float(x), float(y), float(z))
