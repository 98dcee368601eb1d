"""In-memory per-sensor measurement cache with a bounded sliding window."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Dict, List, Mapping, Optional

from models.catalog import DEFAULT_THRESHOLD, THRESHOLDS
from models.records import Measurement
from services.generator import (
    LIVE_SPIKE_PROBABILITY,
    SAMPLE_SPACING,
    displacement_value,
    format_timestamp,
    generate_measurements,
    parse_timestamp,
)
from settings import get_settings

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MeasurementCache:
    """Owns one measurement series per sensor id.

    Series are generated on the first :meth:`fetch` for a sensor and are never
    invalidated. Callers always receive copies of the stored lists.
    """

    def __init__(
        self,
        thresholds: Optional[Mapping[str, float]] = None,
        default_threshold: float = DEFAULT_THRESHOLD,
        latency_seconds: float = 0.4,
        max_points: int = 100,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.thresholds: Dict[str, float] = dict(THRESHOLDS if thresholds is None else thresholds)
        self.default_threshold = default_threshold
        self.latency_seconds = latency_seconds
        self.max_points = max_points
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self._series: Dict[str, List[Measurement]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def __contains__(self, sensor_id: object) -> bool:
        return sensor_id in self._series

    def sensor_ids(self) -> list[str]:
        return sorted(self._series)

    def threshold_for(self, sensor_id: str) -> float:
        return self.thresholds.get(sensor_id, self.default_threshold)

    async def fetch(self, sensor_id: str) -> List[Measurement]:
        """Return the cached series, generating it on first access."""
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

        lock = self._locks.get(sensor_id)
        if lock is None:
            lock = self._locks[sensor_id] = asyncio.Lock()
        async with lock:
            series = self._series.get(sensor_id)
            if series is None:
                threshold = self.threshold_for(sensor_id)
                series = generate_measurements(
                    threshold,
                    rng=self.rng,
                    now=self.clock(),
                    count=self.max_points,
                )
                self._series[sensor_id] = series
                logger.info(
                    "Generated measurement series",
                    extra={
                        "sensor_id": sensor_id,
                        "threshold": threshold,
                        "point_count": len(series),
                    },
                )
            return list(series)

    def append(self, sensor_id: str) -> Optional[Measurement]:
        """Extend a cached series by one reading, evicting the oldest beyond the cap."""
        series = self._series.get(sensor_id)
        if not series:
            logger.debug("No cached series to append to", extra={"sensor_id": sensor_id})
            return None

        next_moment = parse_timestamp(series[-1].timestamp) + SAMPLE_SPACING
        measurement = Measurement(
            timestamp=format_timestamp(next_moment),
            disp_mm=displacement_value(
                self.threshold_for(sensor_id),
                self.rng,
                spike_probability=LIVE_SPIKE_PROBABILITY,
            ),
        )
        series.append(measurement)
        del series[:-self.max_points]

        logger.debug(
            "Appended measurement",
            extra={
                "sensor_id": sensor_id,
                "disp_mm": measurement.disp_mm,
                "timestamp": measurement.timestamp,
                "series_length": len(series),
            },
        )
        return measurement

    def last_value(self, sensor_id: str) -> float:
        series = self._series.get(sensor_id)
        if not series:
            return 0.0
        return series[-1].disp_mm


@lru_cache
def build_default_cache(seed: Optional[int] = None) -> MeasurementCache:
    settings = get_settings()
    rng_seed = settings.random_seed if seed is None else seed
    return MeasurementCache(
        latency_seconds=settings.fetch_latency_seconds,
        max_points=settings.max_points,
        rng=random.Random(rng_seed),
    )
