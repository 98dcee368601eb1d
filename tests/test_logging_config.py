from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="datastore.measurement_cache",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Generated measurement series",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    text = formatter.format(_record(sensor_id="SEN-001", threshold=3.5, point_count=100, ignored="x"))

    assert text == "Generated measurement series | sensor_id=SEN-001 threshold=3.5 point_count=100"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["sensor_id", "disp_mm"])

    text = formatter.format(_record(sensor_id=None))

    assert text == "Generated measurement series"
