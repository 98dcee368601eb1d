from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_dashboard, render_measurements


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor displacement dashboard.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show last values and alarm status for every sensor."""
    state = _get_state(ctx)
    render_dashboard(state.client.get_dashboard())


@app.command("measurements")
def measurements_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Sensor identifier, e.g. SEN-001."),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Only print the most recent N measurements.",
    ),
) -> None:
    """Print the cached measurement series for a sensor."""
    state = _get_state(ctx)
    render_measurements(state.client.get_measurements(sensor_id), limit=limit)


@app.command("start")
def start_command(ctx: typer.Context) -> None:
    """Start periodic live updates on the server."""
    state = _get_state(ctx)
    payload = state.client.start_live_updates()
    typer.secho("Live updates running.", fg=typer.colors.GREEN)
    render_dashboard(payload)


@app.command("stop")
def stop_command(ctx: typer.Context) -> None:
    """Stop periodic live updates on the server."""
    state = _get_state(ctx)
    payload = state.client.stop_live_updates()
    typer.secho("Live updates stopped.", fg=typer.colors.YELLOW)
    render_dashboard(payload)


@app.command("update")
def update_command(ctx: typer.Context) -> None:
    """Append one reading to every sensor immediately."""
    state = _get_state(ctx)
    render_dashboard(state.client.trigger_update())


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        help="Seconds between refreshes (defaults to CLI_WATCH_INTERVAL or 10).",
    ),
    count: int = typer.Option(
        0,
        "--count",
        "-c",
        min=0,
        help="Stop after N refreshes; 0 keeps polling until interrupted.",
    ),
) -> None:
    """Poll the dashboard and print it repeatedly."""
    state = _get_state(ctx)
    delay = interval if interval is not None else state.config.watch_interval
    iteration = 0
    while True:
        iteration += 1
        render_dashboard(state.client.get_dashboard())
        if count and iteration >= count:
            return
        typer.echo()
        time.sleep(delay)
