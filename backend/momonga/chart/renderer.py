"""Radar chart renderer — five flavor axes drawn into a ChartCanvas.

Draw order: background disc, grid rings, spokes, data polygon, vertex
markers, axis labels. Every call resets the target first, so rendering the
same scores twice leaves exactly the same drawing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
from numpy.typing import NDArray

from momonga.chart.canvas import ChartCanvas
from momonga.chart.geometry import ChartLayout, compute_layout
from momonga.chart.options import ChartOptions
from momonga.models.catalog import AXES, ScoreVector


def _points_attr(points: NDArray[np.float64]) -> str:
    return " ".join(f"{x:.2f},{y:.2f}" for x, y in points)


def as_score_vector(scores: ScoreVector | Mapping[str, Any] | None) -> ScoreVector:
    """Accept a ScoreVector or a plain axis mapping; missing/None axes are 0."""
    if isinstance(scores, ScoreVector):
        return scores
    scores = scores or {}
    return ScoreVector(**{axis: scores.get(axis) or 0 for axis in AXES})


def _draw_background(target: ChartCanvas, layout: ChartLayout, options: ChartOptions) -> None:
    cx, cy = layout.center
    target.add({
        "tag": "circle",
        "cx": round(cx, 2),
        "cy": round(cy, 2),
        "r": round(layout.background_radius, 2),
        "fill": options.bg_color,
    })


def _draw_grid(target: ChartCanvas, layout: ChartLayout, options: ChartOptions) -> None:
    last = len(layout.rings) - 1
    for i, ring in enumerate(layout.rings):
        target.add({
            "tag": "polygon",
            "points": _points_attr(ring),
            "fill": "none",
            "stroke": options.grid_color,
            "stroke-width": options.outer_ring_width if i == last else options.inner_ring_width,
        })

    cx, cy = layout.center
    for x, y in layout.spoke_ends:
        target.add({
            "tag": "line",
            "x1": round(cx, 2),
            "y1": round(cy, 2),
            "x2": round(float(x), 2),
            "y2": round(float(y), 2),
            "stroke": options.grid_color,
            "stroke-width": options.spoke_width,
        })


def _draw_data(target: ChartCanvas, layout: ChartLayout, options: ChartOptions) -> None:
    target.add({
        "tag": "polygon",
        "points": _points_attr(layout.data_points),
        "fill": options.fill_color,
        "stroke": options.color,
        "stroke-width": options.data_line_width,
    })
    for x, y in layout.data_points:
        target.add({
            "tag": "circle",
            "cx": round(float(x), 2),
            "cy": round(float(y), 2),
            "r": options.marker_radius,
            "fill": options.color,
            "stroke": options.marker_stroke,
            "stroke-width": options.marker_stroke_width,
        })


def _draw_labels(target: ChartCanvas, layout: ChartLayout, options: ChartOptions) -> None:
    for label, (x, y) in zip(options.labels, layout.label_points):
        target.add({
            "tag": "text",
            "x": round(float(x), 2),
            "y": round(float(y), 2),
            "text-anchor": "middle",
            "dominant-baseline": "central",
            "font-family": options.font_family,
            "font-size": options.font_size,
            "font-weight": options.font_weight,
            "fill": options.label_color,
            "text": label,
        })


def render(
    scores: ScoreVector | Mapping[str, Any] | None,
    target: ChartCanvas,
    options: ChartOptions | None = None,
) -> None:
    """Draw the radar chart for `scores` into `target`, replacing its content."""
    options = options or ChartOptions()
    layout = compute_layout(as_score_vector(scores), options)

    target.reset(options.size, options.pixel_ratio)
    _draw_background(target, layout, options)
    _draw_grid(target, layout, options)
    _draw_data(target, layout, options)
    _draw_labels(target, layout, options)


def render_svg(
    scores: ScoreVector | Mapping[str, Any] | None,
    options: ChartOptions | None = None,
    title: str = "",
) -> str:
    """Render into a fresh canvas and return the SVG markup."""
    canvas = ChartCanvas(title=title)
    render(scores, canvas, options)
    return canvas.to_svg()
