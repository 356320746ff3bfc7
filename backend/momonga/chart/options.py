"""Radar chart options with documented defaults."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from momonga.models.catalog import AXES

DEFAULT_LABELS: tuple[str, ...] = ("酸味", "苦味", "コク", "香り", "甘み")


@dataclass(frozen=True)
class ChartOptions:
    # Logical size of the square chart, in px
    size: float = 280.0
    # Device pixel ratio; backing raster = size * pixel_ratio
    pixel_ratio: float = 1.0
    # Outer grid ring radius as a fraction of size
    radius_scale: float = 0.36
    # Background disc extends this far beyond the outer ring
    background_margin: float = 10.0
    # Label anchors sit this far beyond the outer ring
    label_offset: float = 24.0
    marker_radius: float = 4.0

    color: str = "#4FB8E0"
    bg_color: str = "#F8FBFD"
    grid_color: str = "#E3EDF3"
    label_color: str = "#2C3E50"
    fill_color: str = "rgba(79, 184, 224, 0.2)"
    marker_stroke: str = "#FFFFFF"

    outer_ring_width: float = 1.5
    inner_ring_width: float = 0.8
    spoke_width: float = 0.8
    data_line_width: float = 2.5
    marker_stroke_width: float = 2.0

    font_family: str = '"Noto Sans JP", sans-serif'
    font_size: float = 12.0
    font_weight: str = "500"
    labels: tuple[str, ...] = DEFAULT_LABELS

    def __post_init__(self) -> None:
        if len(self.labels) != len(AXES):
            raise ValueError(f"Expected {len(AXES)} axis labels, got {len(self.labels)}")

    @property
    def outer_radius(self) -> float:
        return self.size * self.radius_scale

    def with_overrides(self, **overrides: Any) -> ChartOptions:
        """Copy with the given fields replaced; None values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown chart options: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
