"""Synthetic displacement series generation."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from models.records import Measurement

SAMPLE_COUNT = 100
SAMPLE_SPACING = timedelta(minutes=45)
HISTORY_SPAN = timedelta(days=3)
INITIAL_SPIKE_PROBABILITY = 0.1
LIVE_SPIKE_PROBABILITY = 0.08

_BASE_FACTOR = 0.7
_VARIATION_FACTOR = 0.8
_SPIKE_FACTOR = 0.4


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as a UTC ISO-8601 string with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def displacement_value(
    threshold: float,
    rng: random.Random,
    spike_probability: float = INITIAL_SPIKE_PROBABILITY,
) -> float:
    """Draw one value in ``[0.7t, 1.9t]``, mostly below the threshold."""
    base = threshold * _BASE_FACTOR
    variation = rng.random() * threshold * _VARIATION_FACTOR
    spike = threshold * _SPIKE_FACTOR if rng.random() < spike_probability else 0.0
    return round(base + variation + spike, 2)


def generate_measurements(
    threshold: float,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    count: int = SAMPLE_COUNT,
) -> List[Measurement]:
    """Produce ``count`` readings starting ``HISTORY_SPAN`` before ``now``."""
    source = rng if rng is not None else random.Random()
    anchor = now if now is not None else datetime.now(timezone.utc)
    start = anchor - HISTORY_SPAN

    return [
        Measurement(
            timestamp=format_timestamp(start + SAMPLE_SPACING * index),
            disp_mm=displacement_value(threshold, source),
        )
        for index in range(count)
    ]
