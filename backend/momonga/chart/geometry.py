"""Radar chart geometry — polar layout of an N-axis chart in screen space.

Screen space has y pointing down, so increasing angle runs clockwise. Axis 0
sits at the top (-90°) and the rest follow every 360°/N degrees.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from momonga.chart.options import ChartOptions
from momonga.models.catalog import AXES, MAX_SCORE, ScoreVector

START_ANGLE = -math.pi / 2


@dataclass(frozen=True)
class ChartLayout:
    """Everything the renderer needs, in logical px."""

    center: tuple[float, float]
    outer_radius: float
    background_radius: float
    # Axis angles in radians, len N
    angles: NDArray[np.float64]
    # Axis values after clamping to [0, MAX_SCORE], len N
    values: NDArray[np.float64]
    # Data polygon vertices, Nx2
    data_points: NDArray[np.float64]
    # One Nx2 pentagon per score step, innermost first
    rings: list[NDArray[np.float64]]
    # Spoke end points on the outer ring, Nx2
    spoke_ends: NDArray[np.float64]
    # Label anchor points, Nx2
    label_points: NDArray[np.float64]


def axis_angles(n_axes: int, start: float = START_ANGLE) -> NDArray[np.float64]:
    """Evenly spaced axis angles starting at `start`."""
    return start + np.arange(n_axes, dtype=np.float64) * (2 * math.pi / n_axes)


def polar_to_cartesian(
    radii: NDArray[np.float64] | float,
    angles: NDArray[np.float64],
    center: tuple[float, float],
) -> NDArray[np.float64]:
    """Project (radius, angle) pairs around `center` to an Nx2 array of x, y."""
    r = np.broadcast_to(np.asarray(radii, dtype=np.float64), angles.shape)
    xs = center[0] + r * np.cos(angles)
    ys = center[1] + r * np.sin(angles)
    return np.column_stack((xs, ys))


def clamp_scores(values: list[float] | NDArray[np.float64], max_score: float = MAX_SCORE) -> NDArray[np.float64]:
    """Clamp axis values into [0, max_score]. NaN counts as 0."""
    arr = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    return np.clip(arr, 0.0, max_score)


def value_radii(values: NDArray[np.float64], outer_radius: float, max_score: float = MAX_SCORE) -> NDArray[np.float64]:
    """r = (v / MAX_SCORE) * R for already-clamped values."""
    return values / max_score * outer_radius


def grid_rings(
    angles: NDArray[np.float64],
    center: tuple[float, float],
    outer_radius: float,
    steps: int = MAX_SCORE,
) -> list[NDArray[np.float64]]:
    """Concentric regular polygons at k/steps * R for k = 1..steps."""
    return [
        polar_to_cartesian(k / steps * outer_radius, angles, center)
        for k in range(1, steps + 1)
    ]


def compute_layout(scores: ScoreVector, options: ChartOptions | None = None) -> ChartLayout:
    options = options or ChartOptions()
    size = float(options.size)
    center = (size / 2, size / 2)
    radius = options.outer_radius

    angles = axis_angles(len(AXES))
    values = clamp_scores(scores.as_list())

    return ChartLayout(
        center=center,
        outer_radius=radius,
        background_radius=radius + options.background_margin,
        angles=angles,
        values=values,
        data_points=polar_to_cartesian(value_radii(values, radius), angles, center),
        rings=grid_rings(angles, center, radius),
        spoke_ends=polar_to_cartesian(radius, angles, center),
        label_points=polar_to_cartesian(radius + options.label_offset, angles, center),
    )
