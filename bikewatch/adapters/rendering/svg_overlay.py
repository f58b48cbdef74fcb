from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable

from bikewatch.domain.models import Marker

SVG_NS = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_markers_svg(markers: Iterable[Marker], *, width: int, height: int) -> str:
    """Render markers as an SVG overlay sized to the map viewport.

    The flow bucket is carried in the `--departure-ratio` style property so
    that the stylesheet picks the colour. Unpositioned markers are skipped.
    """

    svg = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(width),
            "height": str(height),
            "viewBox": f"0 0 {width} {height}",
        },
    )
    for marker in markers:
        if not marker.is_positioned:
            continue
        circle = ET.SubElement(
            svg,
            "circle",
            {
                "data-station": marker.key,
                "cx": _fmt(marker.cx),
                "cy": _fmt(marker.cy),
                "r": _fmt(marker.radius),
                "opacity": _fmt(marker.opacity),
                "style": f"--departure-ratio: {_fmt(marker.flow)}",
            },
        )
        title = ET.SubElement(circle, "title")
        title.text = marker.tooltip
    return ET.tostring(svg, encoding="unicode")
