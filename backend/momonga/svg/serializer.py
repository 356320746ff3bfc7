"""Write SVG markup from element dictionaries."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape

# Keys of an element dict that are not SVG attributes
_RESERVED = ("tag", "text")

_ATTR_ENTITIES = {'"': "&quot;"}


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        text = f"{value:.2f}".rstrip("0").rstrip(".")
        return "0" if text in ("", "-0") else text
    return str(value)


def serialize_element(elem: dict[str, Any]) -> str:
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED}
    attr_str = " ".join(f'{k}="{escape(_fmt(v), _ATTR_ENTITIES)}"' for k, v in attrs.items())
    text = elem.get("text")
    if text is not None:
        return f"<{tag} {attr_str}>{escape(str(text))}</{tag}>"
    return f"<{tag} {attr_str} />"


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 280.0,
    canvas_h: float = 280.0,
    title: str = "",
) -> str:
    """Generate SVG markup; width/height are the logical size in px."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{_fmt(canvas_w)}" height="{_fmt(canvas_h)}"'
        f' viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}" xmlns="http://www.w3.org/2000/svg"'
        f' role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    for elem in elements:
        lines.append("  " + serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
