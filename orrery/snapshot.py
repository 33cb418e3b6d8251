"""
Ecliptic-aligned 2D positions of every catalog body at one instant.
"""
import logging
import math
from datetime import datetime
from typing import NamedTuple, Optional

from orrery.bodies import BodyCatalog
from orrery.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from orrery.ephemeris import EphemerisAdapter, EphemerisError, Vector3

logger = logging.getLogger(__name__)


class EclipticPosition(NamedTuple):
    name: str
    x: float
    y: float


class Snapshot(NamedTuple):
    """
    Positions of all bodies at one instant, indexed by catalog index.

    Attributes:
        instant: The instant the positions belong to
        align_ecliptic: Whether the obliquity rotation was applied
        positions: One EclipticPosition per catalog body, Sun first
    """
    instant: datetime
    align_ecliptic: bool
    positions: tuple[EclipticPosition, ...]


def to_ecliptic_plane(vec: Vector3, align_ecliptic: bool, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> tuple[float, float]:
    """
    Project a heliocentric vector onto the 2D display plane.

    With alignment the vector is rotated about x by the obliquity so the plane
    matches Earth's orbit; without it ``z`` is simply discarded.
    """
    if align_ecliptic:
        return vec.x, vec.y * config.cos_obliquity + vec.z * config.sin_obliquity
    return vec.x, vec.y


class SnapshotBuilder:
    """
    Builds Snapshots from an ephemeris adapter for a fixed catalog.

    A builder returned by ``for_frame()`` memoizes snapshots by
    ``(instant, align_ecliptic)`` for its own lifetime; the trails of every body
    in one frame sample the same instants.
    """

    def __init__(self, catalog: BodyCatalog, ephemeris: EphemerisAdapter,
                 config: EngineConfig = DEFAULT_ENGINE_CONFIG, memo: Optional[dict] = None):
        self.catalog = catalog
        self.ephemeris = ephemeris
        self.config = config
        self._memo = memo

    def for_frame(self) -> "SnapshotBuilder":
        return SnapshotBuilder(self.catalog, self.ephemeris, self.config, memo={})

    @property
    def memo_size(self) -> int:
        return 0 if self._memo is None else len(self._memo)

    def _vector(self, name: str, instant: datetime) -> Vector3:
        try:
            x, y, z = (float(c) for c in self.ephemeris.heliocentric_vector(name, instant))
        except EphemerisError:
            raise
        except Exception as exc:
            raise EphemerisError(f"Ephemeris failed for {name} at {instant.isoformat()}") from exc
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            raise EphemerisError(f"Ephemeris returned a non-finite position for {name} at {instant.isoformat()}")
        return Vector3(x, y, z)

    def snapshot(self, instant: datetime, align_ecliptic: bool) -> Snapshot:
        """
        Positions of every catalog body at `instant`.

        The Sun is pinned at the origin; every other body is looked up in the
        ephemeris. Any ephemeris failure raises EphemerisError for the whole
        snapshot.
        """
        key = (instant, bool(align_ecliptic))
        if self._memo is not None and key in self._memo:
            return self._memo[key]

        positions = []
        for body in self.catalog:
            if body.index == 0:
                positions.append(EclipticPosition(body.name, 0.0, 0.0))
                continue
            x, y = to_ecliptic_plane(self._vector(body.name, instant), align_ecliptic, self.config)
            positions.append(EclipticPosition(body.name, x, y))

        snap = Snapshot(instant=instant, align_ecliptic=bool(align_ecliptic), positions=tuple(positions))
        if self._memo is not None:
            self._memo[key] = snap
        return snap
