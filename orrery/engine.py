"""
Per-frame computation and the input-layer facade.

``compute_state`` is a pure function of the frame inputs: call it once per
frame from an external scheduler. ``Orrery`` holds those inputs (time model,
focus, view mode and display toggles) and validates every change coming from
the input layer before it reaches the computation.
"""
import functools
import logging
from datetime import datetime
from typing import NamedTuple, Optional

from orrery.bodies import DEFAULT_CATALOG, SUN_NAME, BodyCatalog
from orrery.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from orrery.ephemeris import EphemerisAdapter, KeplerianEphemeris, as_utc
from orrery.projection import RenderState, ViewMode, max_schematic_radius, project
from orrery.snapshot import SnapshotBuilder
from orrery.timeline import TimeModel, days_before
from orrery.trails import compute_trail

logger = logging.getLogger(__name__)


def compute_state(
    instant: datetime,
    focus_index: int,
    view_mode: ViewMode,
    show_trails: bool,
    speed: float,
    align_ecliptic: bool,
    *,
    catalog: BodyCatalog = DEFAULT_CATALOG,
    ephemeris: Optional[EphemerisAdapter] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> RenderState:
    """
    Compute the complete render state for one frame.

    Args:
        instant: Frame instant
        focus_index: Catalog index of the body drawn at the origin; out of range falls back to the Sun
        view_mode: ViewMode.SCHEMATIC or ViewMode.FOCUS_POLAR
        show_trails: Attach a trail to every body
        speed: Playback speed, only used for trail cadence
        align_ecliptic: Rotate positions into Earth's orbital plane
        catalog: Bodies to place
        ephemeris: Heliocentric position source; defaults to the catalog's mean elements
        config: Ring ladder and trail tunables

    Returns:
        RenderState with one RenderBody per catalog body and the orbit rings of the view mode

    Raises:
        EphemerisError: if any position needed by the frame cannot be computed
    """
    if not 0 <= focus_index < len(catalog):
        logger.warning("Focus index %d out of range, falling back to %s", focus_index, SUN_NAME)
        focus_index = 0
    if ephemeris is None:
        ephemeris = _default_ephemeris(catalog)

    instant = as_utc(instant)
    snapshots = SnapshotBuilder(catalog, ephemeris, config).for_frame()
    now = snapshots.snapshot(instant, align_ecliptic)
    prev = snapshots.snapshot(days_before(instant, 1.0), align_ecliptic)

    state = project(now, prev, focus_index, view_mode, catalog, config)
    if show_trails:
        state = state._replace(bodies=tuple(
            body._replace(trail=compute_trail(instant, index, focus_index, view_mode, speed,
                                              align_ecliptic, snapshots))
            for index, body in enumerate(state.bodies)
        ))
    logger.debug("Frame at %s used %d snapshots", instant, snapshots.memo_size)
    return state


@functools.lru_cache(maxsize=8)
def _default_ephemeris(catalog: BodyCatalog) -> KeplerianEphemeris:
    return KeplerianEphemeris(catalog)


class DisplayOptions(NamedTuple):
    show_orbits: bool = False
    show_trails: bool = True
    show_retrograde: bool = True
    show_labels: bool = True
    show_stars: bool = True


class Orrery:
    """
    Input-layer facade over the time model and the per-frame inputs.

    Examples:
        >>> orrery = Orrery()
        >>> orrery.set_focus("Earth")
        >>> orrery.toggle_play()
        >>> state = orrery.frame(16.7)  # advance one 60 Hz frame and recompute
    """

    def __init__(
        self,
        catalog: Optional[BodyCatalog] = None,
        ephemeris: Optional[EphemerisAdapter] = None,
        config: Optional[EngineConfig] = None,
        time_model: Optional[TimeModel] = None,
    ) -> None:
        self.catalog = DEFAULT_CATALOG if catalog is None else catalog
        self.config = DEFAULT_ENGINE_CONFIG if config is None else config
        self.ephemeris = _default_ephemeris(self.catalog) if ephemeris is None else ephemeris
        self.time = TimeModel(config=self.config) if time_model is None else time_model
        self._focus_name = SUN_NAME
        self._view_mode = ViewMode.FOCUS_POLAR
        self._align_ecliptic = True
        self._display = DisplayOptions()
        self._hovered_body: Optional[str] = None

    @property
    def available_bodies(self) -> tuple[str, ...]:
        return self.catalog.names

    @property
    def focus_name(self) -> str:
        return self._focus_name

    @property
    def focus_index(self) -> int:
        return self.catalog.index_of(self._focus_name)

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def align_ecliptic(self) -> bool:
        return self._align_ecliptic

    @property
    def display_options(self) -> DisplayOptions:
        return self._display

    @property
    def hovered_body(self) -> Optional[str]:
        return self._hovered_body

    @property
    def max_schematic_radius(self) -> float:
        return max_schematic_radius(self.catalog, self.config)

    # Time controls

    def set_start(self, d: datetime) -> None:
        self.time.set_start(d)

    def set_end(self, d: datetime) -> None:
        self.time.set_end(d)

    def set_current_by_days_elapsed(self, days: float) -> None:
        self.time.set_current_by_days_elapsed(days)

    def toggle_play(self) -> None:
        self.time.toggle_play()

    def set_speed(self, speed: float) -> None:
        self.time.set_speed(speed)

    def tick(self, delta_ms: float) -> None:
        self.time.tick(delta_ms)

    # View controls

    def set_focus(self, name: str) -> None:
        """Focus the named body; unknown names focus the Sun."""
        self._focus_name = self.catalog[self.catalog.index_of(name)].name

    def toggle_view_mode(self) -> None:
        self._view_mode = self._view_mode.toggled()

    def toggle_align_ecliptic(self) -> None:
        self._align_ecliptic = not self._align_ecliptic

    def toggle_trails(self) -> None:
        self._display = self._display._replace(show_trails=not self._display.show_trails)

    def toggle_orbits(self) -> None:
        self._display = self._display._replace(show_orbits=not self._display.show_orbits)

    def toggle_retrograde(self) -> None:
        self._display = self._display._replace(show_retrograde=not self._display.show_retrograde)

    def toggle_labels(self) -> None:
        self._display = self._display._replace(show_labels=not self._display.show_labels)

    def toggle_stars(self) -> None:
        self._display = self._display._replace(show_stars=not self._display.show_stars)

    def set_hovered_body(self, name: Optional[str]) -> None:
        if name is not None and name not in self.catalog.names:
            name = None
        self._hovered_body = name

    # Frame computation

    def state(self) -> RenderState:
        return compute_state(
            self.time.current,
            self.focus_index,
            self._view_mode,
            self._display.show_trails,
            self.time.speed,
            self._align_ecliptic,
            catalog=self.catalog,
            ephemeris=self.ephemeris,
            config=self.config,
        )

    def frame(self, delta_ms: float) -> RenderState:
        """Advance the clock by one frame of wall-clock time and recompute."""
        self.time.tick(delta_ms)
        return self.state()
