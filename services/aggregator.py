"""Queries spanning every known sensor."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from datastore.measurement_cache import MeasurementCache
from models.catalog import KNOWN_SENSOR_IDS
from models.records import Measurement


class SensorAggregator:
    """Reads and advances the cache for a fixed set of sensor ids."""

    def __init__(
        self,
        cache: MeasurementCache,
        sensor_ids: Optional[Iterable[str]] = None,
    ) -> None:
        self.cache = cache
        self.sensor_ids: Tuple[str, ...] = tuple(
            KNOWN_SENSOR_IDS if sensor_ids is None else sensor_ids
        )

    async def all_last_values(self) -> Dict[str, float]:
        values: Dict[str, float] = {}
        for sensor_id in self.sensor_ids:
            await self.cache.fetch(sensor_id)
            values[sensor_id] = self.cache.last_value(sensor_id)
        return values

    def append_to_all(self) -> Dict[str, Measurement]:
        appended: Dict[str, Measurement] = {}
        for sensor_id in self.sensor_ids:
            measurement = self.cache.append(sensor_id)
            if measurement is not None:
                appended[sensor_id] = measurement
        return appended
