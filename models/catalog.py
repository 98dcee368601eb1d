"""Static sensor reference data."""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

from models.records import Sensor

DEFAULT_THRESHOLD = 3.0

SENSORS: Tuple[Sensor, ...] = (
    Sensor(id="SEN-001", name="Bridge Pier North", location="River crossing A1", threshold=3.5),
    Sensor(id="SEN-002", name="Retaining Wall East", location="Embankment km 4.2", threshold=2.0),
    Sensor(id="SEN-003", name="Tunnel Portal South", location="Portal S, ring 12", threshold=4.0),
)

KNOWN_SENSOR_IDS: Tuple[str, ...] = tuple(sensor.id for sensor in SENSORS)

THRESHOLDS: Dict[str, float] = {sensor.id: sensor.threshold for sensor in SENSORS}


def get_sensor(sensor_id: str, sensors: Iterable[Sensor] = SENSORS) -> Sensor:
    for sensor in sensors:
        if sensor.id == sensor_id:
            return sensor
    raise KeyError(f"Sensor {sensor_id!r} is not in the catalog.")
