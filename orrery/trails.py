"""
Historical trails: back-sampled positions of a body in the live frame.

Faster playback lengthens the trail (in simulated days) and coarsens its
sampling, so the on-screen arc stays about the same length:

    duration = BASE_TRAIL_DURATION_DAYS * speed**0.7
    step     = BASE_DT_DAYS * speed**0.3
    steps    = min(MAX_TRAIL_STEPS, ceil(duration / step))

with speed floored at MIN_TRAIL_SPEED. Every sample is projected independently
with the same rule as the live bodies, so trails join their body without a seam.
"""
import math
from datetime import datetime
from typing import Iterable, NamedTuple

from orrery.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from orrery.projection import Point, ViewMode, project_position
from orrery.snapshot import SnapshotBuilder
from orrery.timeline import days_before


class TrailParameters(NamedTuple):
    duration_days: float
    step_days: float
    steps: int


def trail_parameters(speed: float, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> TrailParameters:
    if not math.isfinite(speed):
        raise ValueError(f"speed must be finite, got {speed!r}")
    effective_speed = max(config.min_trail_speed, speed)
    duration_days = config.base_trail_duration_days * effective_speed ** config.trail_duration_exponent
    step_days = config.base_dt_days * effective_speed ** config.trail_step_exponent
    steps = min(config.max_trail_steps, math.ceil(duration_days / step_days))
    return TrailParameters(duration_days, step_days, steps)


def sample_instants(instant: datetime, params: TrailParameters) -> list[datetime]:
    """
    The instant itself followed by one instant per step back in time.

    Steps that would fall before the earliest representable instant repeat it.
    """
    return [days_before(instant, s * params.step_days) for s in range(params.steps + 1)]


def compute_trail(instant: datetime, body_index: int, focus_index: int, view_mode: ViewMode, speed: float,
                  align_ecliptic: bool, snapshots: SnapshotBuilder) -> tuple[Point, ...]:
    """
    Trail of `body_index` ending at `instant`, newest point first.

    The first point is the body's current position; at most
    ``config.max_trail_steps`` older points follow.
    """
    config = snapshots.config
    params = trail_parameters(speed, config)
    return tuple(
        project_position(snapshots.snapshot(t, align_ecliptic), body_index, focus_index, view_mode, config)
        for t in sample_instants(instant, params)
    )


def trail_to_path(points: Iterable[Point]) -> str:
    """Serialize trail points as ``"x,y x,y ..."`` for path-based renderers."""
    return " ".join(f"{x},{y}" for x, y in points)
