"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import (
    ChartResponse,
    DashboardSnapshot,
    MeasurementOut,
    MeasurementResponse,
    SensorSummary,
)
from services.dashboard import DashboardService, build_default_dashboard

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.get(
    "/sensors",
    response_model=List[SensorSummary],
    summary="List known sensors with their last value and alarm status.",
)
async def list_sensors(
    dashboard: DashboardService = Depends(get_dashboard),
) -> List[SensorSummary]:
    return dashboard.summaries()


@router.get(
    "/sensors/{sensor_id}/measurements",
    response_model=MeasurementResponse,
    summary="Fetch the cached measurement series for a sensor.",
)
async def get_measurements(
    sensor_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> MeasurementResponse:
    try:
        series = await dashboard.measurements(sensor_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sensor {sensor_id!r} not found.",
        ) from exc
    return MeasurementResponse(
        sensor_id=sensor_id,
        measurements=[MeasurementOut.from_record(item) for item in series],
    )


@router.get(
    "/sensors/{sensor_id}/chart",
    response_model=ChartResponse,
    summary="Plotly figure for a sensor's displacement series.",
)
async def get_chart(
    sensor_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> ChartResponse:
    try:
        return await dashboard.chart(sensor_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sensor {sensor_id!r} not found.",
        ) from exc


@router.get(
    "/dashboard",
    response_model=DashboardSnapshot,
    summary="Current presentation state.",
)
async def get_snapshot(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardSnapshot:
    return dashboard.snapshot()


@router.post(
    "/live/start",
    response_model=DashboardSnapshot,
    summary="Start periodic live updates (no-op when already running).",
)
async def start_live_updates(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardSnapshot:
    dashboard.start_live_updates()
    return dashboard.snapshot()


@router.post(
    "/live/stop",
    response_model=DashboardSnapshot,
    summary="Stop periodic live updates (no-op when idle).",
)
async def stop_live_updates(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardSnapshot:
    dashboard.stop_live_updates()
    return dashboard.snapshot()


@router.post(
    "/live/trigger",
    response_model=DashboardSnapshot,
    summary="Append one reading to every sensor immediately.",
)
async def trigger_update(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardSnapshot:
    dashboard.trigger_manual_update()
    return dashboard.snapshot()


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the dashboard and /health for service status."}
