from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from services.dashboard import DashboardService, build_default_dashboard


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    charts = [await dashboard.chart(sensor.id) for sensor in dashboard.sensors]
    snapshot = dashboard.snapshot()
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "snapshot": snapshot,
            "charts": {chart.sensor_id: chart for chart in charts},
            "should_poll": snapshot.is_live_updating,
        },
    )


@router.get("/ui/sensors/{sensor_id}", name="ui_sensor_detail", response_class=HTMLResponse)
async def ui_sensor_detail(
    request: Request,
    sensor_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    try:
        sensor = dashboard.sensor(sensor_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    chart = await dashboard.chart(sensor.id)
    series = await dashboard.measurements(sensor.id)
    snapshot = dashboard.snapshot()
    summary = next(item for item in snapshot.sensors if item.id == sensor.id)

    return templates.TemplateResponse(
        request,
        "ui/detail.html",
        {
            "sensor": summary,
            "chart": chart,
            "recent": list(reversed(series[-10:])),
            "should_poll": snapshot.is_live_updating,
        },
    )
