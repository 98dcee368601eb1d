from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _status_color(status: Any) -> str:
    return typer.colors.RED if status == "ALARM" else typer.colors.GREEN


def render_dashboard(payload: Dict[str, Any]) -> None:
    echo_heading("Dashboard")
    live = "running" if payload.get("is_live_updating") else "stopped"
    echo_key_values([("live_updates", live)])

    typer.echo()
    echo_heading("Sensors")
    sensors = payload.get("sensors") or []
    if not sensors:
        typer.echo("No sensors reported.")
    for sensor in sensors:
        status = sensor.get("status")
        typer.echo(
            f"  - {sensor.get('id')} {sensor.get('name')} ({sensor.get('location')}): "
            f"{sensor.get('last_value')} mm / threshold {sensor.get('threshold')} mm ",
            nl=False,
        )
        typer.secho(str(status), fg=_status_color(status))

    latest = payload.get("latest_measurements") or {}
    if latest:
        typer.echo()
        echo_heading("Latest measurements")
        for sensor_id, measurement in latest.items():
            typer.echo(
                f"  - {sensor_id}: {measurement.get('disp_mm')} mm at {measurement.get('timestamp')}"
            )


def render_measurements(payload: Dict[str, Any], limit: int | None = None) -> None:
    measurements = payload.get("measurements") or []
    echo_heading(f"Measurements for {payload.get('sensor_id')}")
    echo_key_values([("count", len(measurements))])
    shown = measurements[-limit:] if limit else measurements
    for measurement in shown:
        typer.echo(f"  {measurement.get('timestamp')}  {measurement.get('disp_mm')}")
