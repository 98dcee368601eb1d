"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from models.records import Measurement, Sensor


class SensorStatus(str, Enum):
    """Alarm state derived from a sensor's last value and threshold."""

    ok = "OK"
    alarm = "ALARM"


class MeasurementOut(BaseModel):
    """A single displacement reading."""

    timestamp: str = Field(..., description="ISO-8601 UTC timestamp.")
    disp_mm: float = Field(..., description="Displacement in millimetres.")

    @classmethod
    def from_record(cls, measurement: Measurement) -> "MeasurementOut":
        return cls(timestamp=measurement.timestamp, disp_mm=measurement.disp_mm)


class MeasurementResponse(BaseModel):
    """Cached series for one sensor."""

    sensor_id: str
    measurements: List[MeasurementOut] = Field(default_factory=list)


class SensorSummary(BaseModel):
    """Catalog entry enriched with the current presentation state."""

    id: str
    name: str
    location: str
    threshold: float
    last_value: float = 0.0
    status: SensorStatus = SensorStatus.ok

    @classmethod
    def from_sensor(
        cls, sensor: Sensor, last_value: float, status: SensorStatus
    ) -> "SensorSummary":
        return cls(
            id=sensor.id,
            name=sensor.name,
            location=sensor.location,
            threshold=sensor.threshold,
            last_value=last_value,
            status=status,
        )


class DashboardSnapshot(BaseModel):
    """Full presentation state returned by dashboard and live-update routes."""

    is_live_updating: bool
    last_values: Dict[str, float] = Field(default_factory=dict)
    latest_measurements: Dict[str, MeasurementOut] = Field(default_factory=dict)
    sensors: List[SensorSummary] = Field(default_factory=list)


class ChartResponse(BaseModel):
    """Plotly figure description for a sensor chart."""

    sensor_id: str
    figure: Dict[str, Any]
    config: Dict[str, Any]
