"""Sample basic SVG shapes (rect, circle, ellipse, polygon) into closed point loops."""

from __future__ import annotations

import math
import re
from typing import List, Optional

from contour_geometry import Point2, dedupe_consecutive, same_point
from curve_flatten import CURVE_STEP
from svg_errors import ContourTooComplexError


MIN_ELLIPSE_STEPS = 24

NUMBER_SPLIT_RE = re.compile(r"[\s,]+")


def parse_number_attr(text: Optional[str], fallback: float = 0.0) -> float:
    if text is None:
        return fallback
    try:
        value = float(text.strip())
    except ValueError:
        return fallback
    return value if math.isfinite(value) else fallback


def parse_points_attr(points_text: str) -> List[Point2]:
    vals: List[float] = []
    for part in NUMBER_SPLIT_RE.split(points_text.strip()):
        try:
            value = float(part)
        except ValueError:
            continue
        if math.isfinite(value):
            vals.append(value)
    pts: List[Point2] = []
    for i in range(0, len(vals) - 1, 2):
        pts.append((vals[i], vals[i + 1]))
    return dedupe_consecutive(pts)


def rect_points(x: float, y: float, width: float, height: float) -> List[Point2]:
    if width <= 0 or height <= 0:
        return []
    return [
        (x, y),
        (x + width, y),
        (x + width, y + height),
        (x, y + height),
        (x, y),
    ]


def ellipse_points(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    step: float = CURVE_STEP,
    max_points: Optional[int] = None,
) -> List[Point2]:
    """Closed loop: the first angle (0) and the last one (2*pi) are both emitted."""
    if rx <= 0 or ry <= 0:
        return []
    steps = max(MIN_ELLIPSE_STEPS, math.ceil((2.0 * math.pi * max(rx, ry)) / step))
    if max_points is not None and steps + 1 > max_points:
        raise ContourTooComplexError(steps + 1, max_points)
    pts: List[Point2] = []
    for i in range(steps + 1):
        a = (i / steps) * math.pi * 2.0
        pts.append((cx + rx * math.cos(a), cy + ry * math.sin(a)))
    return pts


def circle_points(
    cx: float, cy: float, r: float, step: float = CURVE_STEP, max_points: Optional[int] = None
) -> List[Point2]:
    return ellipse_points(cx, cy, r, r, step, max_points)


def polygon_points(points: List[Point2]) -> List[Point2]:
    if len(points) < 3:
        return []
    pts = list(points)
    if not same_point(pts[0], pts[-1]):
        pts.append(pts[0])
    return pts
