"""Simulated time: playback range, play/pause, speed and looping."""
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from orrery.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from orrery.constants import DEFAULT_START, EARLIEST_INSTANT, MS_PER_DAY
from orrery.ephemeris import as_utc

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
_ONE_MS = timedelta(milliseconds=1)


class TimeRange(NamedTuple):
    start: datetime
    end: datetime
    current: datetime


class PlaybackState(NamedTuple):
    is_playing: bool
    speed: float


def days_before(instant: datetime, days: float) -> datetime:
    """`days` before `instant`, clamped to the earliest representable instant."""
    instant = as_utc(instant)
    if days >= (instant - EARLIEST_INSTANT) / ONE_DAY:
        return EARLIEST_INSTANT
    return instant - timedelta(days=days)


def _validate_speed(speed: float) -> float:
    speed = float(speed)
    if not math.isfinite(speed) or speed <= 0.0:
        raise ValueError(f"speed must be a positive finite multiplier, got {speed!r}")
    return speed


class TimeModel:
    """
    Owns the playback range and the play/pause state.

    ``start <= current <= end`` holds after every operation; each mutation
    replaces the whole TimeRange or PlaybackState tuple.
    """

    def __init__(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        current: Optional[datetime] = None,
        *,
        speed: float = 1.0,
        is_playing: bool = False,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        self.config = config
        start = DEFAULT_START if start is None else as_utc(start)
        end = datetime.now(timezone.utc) if end is None else as_utc(end)
        end = max(start, end)
        current = start if current is None else min(max(as_utc(current), start), end)
        self._range = TimeRange(start, end, current)
        self._playback = PlaybackState(bool(is_playing), _validate_speed(speed))

    def __repr__(self) -> str:
        r, p = self._range, self._playback
        return (f"TimeModel(start={r.start.isoformat()}, end={r.end.isoformat()}, "
                f"current={r.current.isoformat()}, playing={p.is_playing}, speed={p.speed})")

    @property
    def range(self) -> TimeRange:
        return self._range

    @property
    def playback(self) -> PlaybackState:
        return self._playback

    @property
    def start(self) -> datetime:
        return self._range.start

    @property
    def end(self) -> datetime:
        return self._range.end

    @property
    def current(self) -> datetime:
        return self._range.current

    @property
    def is_playing(self) -> bool:
        return self._playback.is_playing

    @property
    def speed(self) -> float:
        return self._playback.speed

    @property
    def elapsed_days(self) -> float:
        return (self.current - self.start) / ONE_DAY

    @property
    def total_days(self) -> int:
        return math.floor((self.end - self.start) / ONE_DAY)

    def set_start(self, d: datetime) -> None:
        d = as_utc(d)
        start, end, current = self._range
        if d > end:
            end = d
        start = d
        if current < start:
            current = start
        self._range = TimeRange(start, end, current)

    def set_end(self, d: datetime) -> None:
        d = as_utc(d)
        start, end, current = self._range
        if d < start:
            start = d
        end = d
        if current > end:
            current = end
        self._range = TimeRange(start, end, current)

    def set_current_by_days_elapsed(self, days: float) -> None:
        """Move the current instant `days` after start, clamped to the range."""
        days = float(days)
        if math.isnan(days):
            raise ValueError("days must be a number")
        start, end, _ = self._range
        span_days = (end - start) / ONE_DAY
        days = min(max(days, 0.0), span_days)
        target = min(max(start + timedelta(days=days), start), end)
        self._range = TimeRange(start, end, target)

    def toggle_play(self) -> None:
        self._playback = self._playback._replace(is_playing=not self._playback.is_playing)

    def set_speed(self, speed: float) -> None:
        self._playback = self._playback._replace(speed=_validate_speed(speed))

    def tick(self, delta_ms: float) -> None:
        """
        Advance simulated time by `delta_ms` of wall clock.

        At speed 1 one simulated year passes every ``config.realtime_ms_per_year``
        milliseconds. Stepping past the end restarts playback from start.
        """
        if not self._playback.is_playing:
            return
        delta_ms = float(delta_ms)
        if not math.isfinite(delta_ms) or delta_ms < 0.0:
            raise ValueError(f"delta_ms must be a non-negative finite duration, got {delta_ms!r}")

        days_per_ms = self.config.sim_days_per_ms * self._playback.speed
        sim_ms = delta_ms * days_per_ms * MS_PER_DAY

        start, end, current = self._range
        remaining = end - current
        # sim_ms is bounded by the range before it becomes a timedelta
        if sim_ms > remaining / _ONE_MS + 1.0 or timedelta(milliseconds=sim_ms) > remaining:
            logger.debug("Playback passed %s, looping back to %s", end.isoformat(), start.isoformat())
            self._range = TimeRange(start, end, start)
        else:
            self._range = TimeRange(start, end, current + timedelta(milliseconds=sim_ms))
