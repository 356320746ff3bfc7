"""ChartCanvas — the drawing target the radar renderer paints into.

Layout is in logical px. The backing raster (PNG export) is the logical size
multiplied by the device pixel ratio, so charts stay crisp on dense displays.
"""

from __future__ import annotations

import logging
from typing import Any

from momonga.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)


class ChartCanvas:
    def __init__(self, size: float = 280.0, pixel_ratio: float = 1.0, title: str = "") -> None:
        self.title = title
        self.elements: list[dict[str, Any]] = []
        self.reset(size, pixel_ratio)

    def reset(self, size: float, pixel_ratio: float = 1.0) -> None:
        """Resize and wipe all previous drawing."""
        if size <= 0:
            raise ValueError(f"Canvas size must be positive, got {size}")
        if pixel_ratio <= 0:
            raise ValueError(f"Pixel ratio must be positive, got {pixel_ratio}")
        self.width = float(size)
        self.height = float(size)
        self.pixel_ratio = float(pixel_ratio)
        self.elements = []

    @property
    def backing_width(self) -> int:
        return round(self.width * self.pixel_ratio)

    @property
    def backing_height(self) -> int:
        return round(self.height * self.pixel_ratio)

    def add(self, element: dict[str, Any]) -> None:
        self.elements.append(element)

    def to_svg(self) -> str:
        return serialize_svg(self.elements, self.width, self.height, title=self.title)

    def to_png(self) -> bytes:
        """Rasterize at backing resolution using cairosvg."""
        import cairosvg

        try:
            return cairosvg.svg2png(
                bytestring=self.to_svg().encode("utf-8"),
                output_width=self.backing_width,
                output_height=self.backing_height,
            )
        except Exception as e:
            logger.warning("Failed to render chart to PNG: %s", e)
            raise
