"""Presentation state and the live-update orchestration around it."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from app.schemas import (
    ChartResponse,
    DashboardSnapshot,
    MeasurementOut,
    SensorStatus,
    SensorSummary,
)
from datastore.measurement_cache import MeasurementCache, build_default_cache
from models.catalog import SENSORS, get_sensor
from models.records import Measurement, Sensor
from services.aggregator import SensorAggregator
from services.charts import CHART_CONFIG, build_figure, prepare_chart_data
from services.scheduler import LiveUpdateScheduler
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    """What the dashboard currently displays.

    ``last_values`` is a copy derived from the cache, never the series itself.
    """

    last_values: Dict[str, float] = field(default_factory=dict)
    is_live_updating: bool = False
    latest_measurements: Dict[str, Measurement] = field(default_factory=dict)

    def last_value_for(self, sensor_id: str) -> float:
        return self.last_values.get(sensor_id, 0.0)

    def status_for(self, sensor: Sensor) -> SensorStatus:
        if self.last_value_for(sensor.id) > sensor.threshold:
            return SensorStatus.alarm
        return SensorStatus.ok


class DashboardService:
    """Wires the cache, aggregation queries and scheduler to the presentation state."""

    def __init__(
        self,
        cache: MeasurementCache,
        sensors: Tuple[Sensor, ...] = SENSORS,
        update_interval_seconds: float = 10.0,
    ) -> None:
        self.cache = cache
        self.sensors = sensors
        self.aggregator = SensorAggregator(cache, [sensor.id for sensor in sensors])
        self.state = DashboardState()
        self.scheduler = LiveUpdateScheduler(self.advance, update_interval_seconds)

    async def initialize(self) -> None:
        self.state.last_values = await self.aggregator.all_last_values()
        logger.info(
            "Dashboard initialized",
            extra={"updated_count": len(self.state.last_values)},
        )

    def advance(self) -> Dict[str, Measurement]:
        """Append one reading per sensor and refresh the affected last values."""
        appended = self.aggregator.append_to_all()
        self.state.latest_measurements = appended
        for sensor_id in appended:
            self.state.last_values[sensor_id] = self.cache.last_value(sensor_id)
        logger.info("Live update applied", extra={"updated_count": len(appended)})
        return appended

    def trigger_manual_update(self) -> Dict[str, Measurement]:
        return self.advance()

    def start_live_updates(self) -> None:
        self.scheduler.start()
        self.state.is_live_updating = True

    def stop_live_updates(self) -> None:
        self.scheduler.stop()
        self.state.is_live_updating = False

    async def shutdown(self) -> None:
        await self.scheduler.shutdown()
        self.state.is_live_updating = False

    def status_for(self, sensor: Sensor) -> SensorStatus:
        return self.state.status_for(sensor)

    def sensor(self, sensor_id: str) -> Sensor:
        return get_sensor(sensor_id, self.sensors)

    async def measurements(self, sensor_id: str) -> List[Measurement]:
        sensor = self.sensor(sensor_id)
        return await self.cache.fetch(sensor.id)

    async def chart(self, sensor_id: str) -> ChartResponse:
        sensor = self.sensor(sensor_id)
        series = await self.cache.fetch(sensor.id)
        figure = build_figure(prepare_chart_data(series, sensor))
        return ChartResponse(
            sensor_id=sensor.id,
            figure=json.loads(figure.to_json()),
            config=dict(CHART_CONFIG),
        )

    def summaries(self) -> List[SensorSummary]:
        return [
            SensorSummary.from_sensor(
                sensor,
                last_value=self.state.last_value_for(sensor.id),
                status=self.state.status_for(sensor),
            )
            for sensor in self.sensors
        ]

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            is_live_updating=self.state.is_live_updating,
            last_values=dict(self.state.last_values),
            latest_measurements={
                sensor_id: MeasurementOut.from_record(measurement)
                for sensor_id, measurement in self.state.latest_measurements.items()
            },
            sensors=self.summaries(),
        )


@lru_cache
def build_default_dashboard(
    update_interval_seconds: Optional[float] = None,
) -> DashboardService:
    """Factory that wires the dashboard with the default cache."""
    settings = get_settings()
    interval = update_interval_seconds or settings.update_interval_seconds
    return DashboardService(
        cache=build_default_cache(),
        update_interval_seconds=interval,
    )

