"""
Projection of snapshots into render-ready scene coordinates.

Two view modes share one data model:

- ``ViewMode.SCHEMATIC``: heliocentric schematic. Every body sits on a fixed
  ring chosen by catalog order, at the true bearing of its ecliptic position,
  and the whole scene is shifted so the focus body lands at the origin.
- ``ViewMode.FOCUS_POLAR``: focus-centric polar remap. The true offset of each
  body from the focus keeps its direction but its length is replaced by a ring
  radius from the same ladder, with one slot reserved inside the focus.

Neither mode is to scale; only bearings are physical. All emitted coordinates
use the screen convention of y increasing downwards, i.e. ``y_screen = -y``.
"""
import math
from enum import Enum
from typing import NamedTuple, Optional

from orrery.bodies import BodyCatalog
from orrery.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from orrery.constants import DEGENERATE_DISTANCE
from orrery.retrograde import is_retrograde
from orrery.snapshot import Snapshot

Point = tuple[float, float]


class ViewMode(Enum):
    SCHEMATIC = "schematic"
    FOCUS_POLAR = "focus_polar"

    def toggled(self) -> "ViewMode":
        return ViewMode.FOCUS_POLAR if self is ViewMode.SCHEMATIC else ViewMode.SCHEMATIC


class RenderBody(NamedTuple):
    name: str
    color: str
    radius: float
    x: float
    y: float
    is_retrograde: bool
    trail: Optional[tuple[Point, ...]] = None


class RenderRing(NamedTuple):
    center_x: float
    center_y: float
    radius: float


class RenderState(NamedTuple):
    """Everything the rendering layer needs for one frame."""
    bodies: tuple[RenderBody, ...]
    rings: tuple[RenderRing, ...]


def ring_radius(index: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    """Schematic ring radius for catalog index `index`; the Sun sits at radius 0."""
    if index == 0:
        return 0.0
    return config.base_radius + (index - 1) * config.ring_gap


def mapped_ring_radius(target_index: int, focus_index: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    """
    Ring radius of `target_index` in the focus-centric polar remap.

    The focus takes radius 0. Bodies before the focus in catalog order move out
    by one slot, so the slot the focus vacated is filled by whatever sits inside it.
    """
    if target_index == focus_index:
        return 0.0
    effective_index = target_index + 1 if target_index < focus_index else target_index
    return ring_radius(effective_index, config)


def max_schematic_radius(catalog: BodyCatalog, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    return ring_radius(len(catalog) - 1, config)


def polar_to_cartesian(r: float, rx: float, ry: float) -> Point:
    """Point at distance `r` from the origin in the direction of ``(rx, ry)``."""
    if r == 0:
        return 0.0, 0.0
    dist = math.hypot(rx, ry)
    if dist < DEGENERATE_DISTANCE:
        return r, 0.0
    return (rx / dist) * r, (ry / dist) * r


def schematic_position(snap: Snapshot, index: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Point:
    pos = snap.positions[index]
    return polar_to_cartesian(ring_radius(index, config), pos.x, pos.y)


def project_position(snap: Snapshot, body_index: int, focus_index: int, view_mode: ViewMode,
                     config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Point:
    """
    Scene coordinates of one body relative to the focus, in screen orientation.

    This is the single placement rule shared by live bodies and trail samples.
    """
    if view_mode is ViewMode.SCHEMATIC:
        bx, by = schematic_position(snap, body_index, config)
        fx, fy = schematic_position(snap, focus_index, config)
        x, y = bx - fx, by - fy
    elif view_mode is ViewMode.FOCUS_POLAR:
        p = snap.positions[body_index]
        c = snap.positions[focus_index]
        r = mapped_ring_radius(body_index, focus_index, config)
        x, y = polar_to_cartesian(r, p.x - c.x, p.y - c.y)
    else:
        raise ValueError(f"Unknown view mode {view_mode!r}")
    return x, -y


def orbit_rings(snap: Snapshot, focus_index: int, view_mode: ViewMode,
                config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> tuple[RenderRing, ...]:
    n_bodies = len(snap.positions)
    if view_mode is ViewMode.SCHEMATIC:
        fx, fy = schematic_position(snap, focus_index, config)
        return tuple(RenderRing(-fx, fy, ring_radius(i, config)) for i in range(1, n_bodies))
    if view_mode is ViewMode.FOCUS_POLAR:
        rings = []
        for i in range(n_bodies):
            if i == focus_index:
                continue
            r = mapped_ring_radius(i, focus_index, config)
            if r > 0:
                rings.append(RenderRing(0.0, 0.0, r))
        return tuple(rings)
    raise ValueError(f"Unknown view mode {view_mode!r}")


def project(now: Snapshot, prev: Snapshot, focus_index: int, view_mode: ViewMode, catalog: BodyCatalog,
            config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> RenderState:
    """
    Render-ready bodies and rings for one frame, without trails.

    Parameters
    ----------
    now : Snapshot
        Positions at the frame instant.
    prev : Snapshot
        Positions exactly one day earlier, used for retrograde classification.
    focus_index : int
        Catalog index of the body placed at the origin.
    view_mode : ViewMode
        Placement algorithm.
    catalog : BodyCatalog
        Supplies names, colors and marker radii.
    """
    bodies = []
    for body in catalog:
        x, y = project_position(now, body.index, focus_index, view_mode, config)
        bodies.append(RenderBody(
            name=body.name,
            color=body.color,
            radius=body.display_radius,
            x=x,
            y=y,
            is_retrograde=is_retrograde(body.index, focus_index, now, prev),
        ))
    return RenderState(bodies=tuple(bodies), rings=orbit_rings(now, focus_index, view_mode, config))
