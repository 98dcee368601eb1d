"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Sensor:
    """A monitored point with its alarm threshold in millimetres."""

    id: str
    name: str
    location: str
    threshold: float


@dataclass(frozen=True, slots=True)
class Measurement:
    """A single displacement reading.

    ``timestamp`` is an ISO-8601 UTC string with millisecond precision and a
    ``Z`` suffix, ``disp_mm`` is rounded to two decimals.
    """

    timestamp: str
    disp_mm: float
