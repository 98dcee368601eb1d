"""Translate measurement series into Plotly figures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import plotly.graph_objects as go

from models.records import Measurement, Sensor

LINE_COLOR = "#3B82F6"
OK_COLOR = "#10B981"
ALARM_COLOR = "#EF4444"
THRESHOLD_COLOR = "#F59E0B"

CHART_CONFIG: Dict[str, Any] = {"responsive": True, "displayModeBar": False}


@dataclass
class ChartData:
    """Column-oriented view of one sensor's series."""

    sensor_name: str
    threshold: float
    timestamps: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)


def prepare_chart_data(measurements: Iterable[Measurement], sensor: Sensor) -> ChartData:
    data = ChartData(sensor_name=sensor.name, threshold=sensor.threshold)
    for measurement in measurements:
        data.timestamps.append(measurement.timestamp)
        data.values.append(measurement.disp_mm)
    return data


def marker_colors(values: Iterable[float], threshold: float) -> List[str]:
    return [ALARM_COLOR if value > threshold else OK_COLOR for value in values]


def measurement_trace(data: ChartData) -> go.Scatter:
    return go.Scatter(
        x=data.timestamps,
        y=data.values,
        mode="lines+markers",
        name="Displacement",
        line={"color": LINE_COLOR, "width": 2},
        marker={
            "size": 6,
            "color": marker_colors(data.values, data.threshold),
            "line": {"width": 1, "color": "#ffffff"},
        },
    )


def threshold_trace(data: ChartData) -> go.Scatter:
    """Horizontal dashed line spanning the series at the threshold value."""
    if data.timestamps:
        x = [data.timestamps[0], data.timestamps[-1]]
        y = [data.threshold, data.threshold]
    else:
        x, y = [], []
    return go.Scatter(
        x=x,
        y=y,
        mode="lines",
        name="Threshold",
        line={"color": THRESHOLD_COLOR, "dash": "dash", "width": 3},
    )


def chart_layout(sensor_name: str) -> go.Layout:
    return go.Layout(
        title={
            "text": f"{sensor_name} - Displacement Monitoring",
            "font": {"size": 18, "color": "#1F2937"},
        },
        xaxis={"title": {"text": "Time"}, "gridcolor": "#F3F4F6", "showgrid": True},
        yaxis={
            "title": {"text": "Displacement (mm)"},
            "gridcolor": "#F3F4F6",
            "showgrid": True,
        },
        margin={"t": 60, "r": 50, "b": 60, "l": 60},
        height=400,
        autosize=True,
        plot_bgcolor="#FAFAFA",
        paper_bgcolor="#FFFFFF",
        legend={"orientation": "h", "x": 0, "y": -0.2},
    )


def build_figure(data: ChartData) -> go.Figure:
    return go.Figure(
        data=[measurement_trace(data), threshold_trace(data)],
        layout=chart_layout(data.sensor_name),
    )
