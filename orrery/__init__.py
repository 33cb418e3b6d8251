# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElements

from .constants import (
    # Constants
    DAY,
    MS_PER_DAY,
    DAYS_PER_YEAR,
    J2000,
    OBLIQUITY_DEG,
    SCHEMATIC_BASE_RADIUS,
    SCHEMATIC_RING_GAP,
    BASE_TRAIL_DURATION_DAYS,
    BASE_DT_DAYS,
    MAX_TRAIL_STEPS,
    REALTIME_MS_PER_YEAR,
)

from .config import (
    EngineConfig,
    DEFAULT_ENGINE_CONFIG,
    make_engine_config,
)

from .bodies import (
    # Body catalog
    Body,
    BodyCatalog,
    load_bodies_data,
    bodies_data,
    DEFAULT_CATALOG,
    SUN_NAME,
)

from .ephemeris import (
    # Ephemeris adapters
    Vector3,
    EphemerisAdapter,
    EphemerisError,
    KeplerianEphemeris,
    julian_centuries,
)

from .snapshot import (
    EclipticPosition,
    Snapshot,
    SnapshotBuilder,
)

from .projection import (
    # Projection
    ViewMode,
    RenderBody,
    RenderRing,
    RenderState,
    ring_radius,
    mapped_ring_radius,
    polar_to_cartesian,
    project_position,
    project,
    max_schematic_radius,
)

from .retrograde import is_retrograde

from .trails import (
    TrailParameters,
    trail_parameters,
    compute_trail,
    trail_to_path,
)

from .timeline import (
    TimeRange,
    PlaybackState,
    TimeModel,
)

from .engine import (
    DisplayOptions,
    Orrery,
    compute_state,
)

__all__ = [
    # Constants
    "DAY",
    "MS_PER_DAY",
    "DAYS_PER_YEAR",
    "J2000",
    "OBLIQUITY_DEG",
    "SCHEMATIC_BASE_RADIUS",
    "SCHEMATIC_RING_GAP",
    "BASE_TRAIL_DURATION_DAYS",
    "BASE_DT_DAYS",
    "MAX_TRAIL_STEPS",
    "REALTIME_MS_PER_YEAR",

    # Configuration
    "EngineConfig",
    "DEFAULT_ENGINE_CONFIG",
    "make_engine_config",

    # Bodies
    "OrbitalElements",
    "Body",
    "BodyCatalog",
    "load_bodies_data",
    "bodies_data",
    "DEFAULT_CATALOG",
    "SUN_NAME",

    # Ephemeris
    "Vector3",
    "EphemerisAdapter",
    "EphemerisError",
    "KeplerianEphemeris",
    "julian_centuries",

    # Snapshots
    "EclipticPosition",
    "Snapshot",
    "SnapshotBuilder",

    # Projection and retrograde
    "ViewMode",
    "RenderBody",
    "RenderRing",
    "RenderState",
    "ring_radius",
    "mapped_ring_radius",
    "polar_to_cartesian",
    "project_position",
    "project",
    "max_schematic_radius",
    "is_retrograde",

    # Trails
    "TrailParameters",
    "trail_parameters",
    "compute_trail",
    "trail_to_path",

    # Time
    "TimeRange",
    "PlaybackState",
    "TimeModel",

    # Engine
    "DisplayOptions",
    "Orrery",
    "compute_state",
]
