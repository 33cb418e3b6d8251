from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from orrery.constants import (
    BASE_DT_DAYS,
    BASE_TRAIL_DURATION_DAYS,
    DAYS_PER_YEAR,
    MAX_TRAIL_STEPS,
    MIN_TRAIL_SPEED,
    OBLIQUITY_DEG,
    REALTIME_MS_PER_YEAR,
    SCHEMATIC_BASE_RADIUS,
    SCHEMATIC_RING_GAP,
    TRAIL_DURATION_EXPONENT,
    TRAIL_STEP_EXPONENT,
)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    base_radius: float = SCHEMATIC_BASE_RADIUS
    ring_gap: float = SCHEMATIC_RING_GAP
    base_trail_duration_days: float = BASE_TRAIL_DURATION_DAYS
    base_dt_days: float = BASE_DT_DAYS
    max_trail_steps: int = MAX_TRAIL_STEPS
    min_trail_speed: float = MIN_TRAIL_SPEED
    trail_duration_exponent: float = TRAIL_DURATION_EXPONENT
    trail_step_exponent: float = TRAIL_STEP_EXPONENT
    realtime_ms_per_year: float = REALTIME_MS_PER_YEAR
    obliquity_deg: float = OBLIQUITY_DEG

    @property
    def cos_obliquity(self) -> float:
        return math.cos(math.radians(self.obliquity_deg))

    @property
    def sin_obliquity(self) -> float:
        return math.sin(math.radians(self.obliquity_deg))

    @property
    def sim_days_per_ms(self) -> float:
        """Simulated days advanced per wall-clock millisecond at speed 1."""
        return DAYS_PER_YEAR / self.realtime_ms_per_year


DEFAULT_ENGINE_CONFIG = EngineConfig()


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


def make_engine_config(
    base_radius: Optional[float] = None,
    ring_gap: Optional[float] = None,
    *,
    base_trail_duration_days: Optional[float] = None,
    base_dt_days: Optional[float] = None,
    max_trail_steps: Optional[int] = None,
    min_trail_speed: Optional[float] = None,
    realtime_ms_per_year: Optional[float] = None,
    obliquity_deg: Optional[float] = None,
) -> EngineConfig:
    """Normalize caller overrides into an EngineConfig, filling in defaults."""
    d = DEFAULT_ENGINE_CONFIG
    steps = d.max_trail_steps if max_trail_steps is None else int(max_trail_steps)
    if steps < 1:
        raise ValueError(f"max_trail_steps must be at least 1, got {steps}")
    obliquity = d.obliquity_deg if obliquity_deg is None else float(obliquity_deg)
    if not math.isfinite(obliquity):
        raise ValueError("obliquity_deg must be finite")
    return EngineConfig(
        base_radius=_require_positive("base_radius", d.base_radius if base_radius is None else base_radius),
        ring_gap=_require_positive("ring_gap", d.ring_gap if ring_gap is None else ring_gap),
        base_trail_duration_days=_require_positive(
            "base_trail_duration_days",
            d.base_trail_duration_days if base_trail_duration_days is None else base_trail_duration_days,
        ),
        base_dt_days=_require_positive("base_dt_days", d.base_dt_days if base_dt_days is None else base_dt_days),
        max_trail_steps=steps,
        min_trail_speed=_require_positive(
            "min_trail_speed", d.min_trail_speed if min_trail_speed is None else min_trail_speed
        ),
        realtime_ms_per_year=_require_positive(
            "realtime_ms_per_year", d.realtime_ms_per_year if realtime_ms_per_year is None else realtime_ms_per_year
        ),
        obliquity_deg=obliquity,
    )
