"""
Flatten Bezier and elliptical-arc path segments into line segments.

Sampling is proportional to the control-polygon length, not the true arc
length: ``steps = max(4, ceil(control_polygon_length / step))``. Flat
control polygons around tight bends are therefore under-sampled; callers
rely on the exact point counts, so keep it that way.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from svgelements import Arc, Path as SvgPath

from contour_geometry import Point2
from svg_errors import ContourTooComplexError


logger = logging.getLogger(__name__)

CURVE_STEP = 0.5
MIN_CURVE_STEPS = 4

Cubic = Tuple[Point2, Point2, Point2, Point2]


def dist(a: Point2, b: Point2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def bezier_cubic(p0: Point2, p1: Point2, p2: Point2, p3: Point2, t: float) -> Point2:
    u = 1.0 - t
    b0 = u * u * u
    b1 = 3.0 * u * u * t
    b2 = 3.0 * u * t * t
    b3 = t * t * t
    return (
        b0 * p0[0] + b1 * p1[0] + b2 * p2[0] + b3 * p3[0],
        b0 * p0[1] + b1 * p1[1] + b2 * p2[1] + b3 * p3[1],
    )


def bezier_quad(p0: Point2, p1: Point2, p2: Point2, t: float) -> Point2:
    u = 1.0 - t
    b0 = u * u
    b1 = 2.0 * u * t
    b2 = t * t
    return (b0 * p0[0] + b1 * p1[0] + b2 * p2[0], b0 * p0[1] + b1 * p1[1] + b2 * p2[1])


def curve_steps(control_length: float, step: float = CURVE_STEP, max_steps: Optional[int] = None) -> int:
    """``max_steps`` caps the result before any point is computed; ``None`` means no cap."""
    steps = max(MIN_CURVE_STEPS, math.ceil(control_length / step))
    if max_steps is not None and steps > max_steps:
        raise ContourTooComplexError(steps, max_steps)
    return steps


def sample_cubic(
    p0: Point2,
    p1: Point2,
    p2: Point2,
    p3: Point2,
    step: float = CURVE_STEP,
    max_steps: Optional[int] = None,
) -> List[Point2]:
    """Points at t = 1/steps .. 1; the start point ``p0`` is not repeated."""
    steps = curve_steps(dist(p0, p1) + dist(p1, p2) + dist(p2, p3), step, max_steps)
    return [bezier_cubic(p0, p1, p2, p3, i / steps) for i in range(1, steps + 1)]


def sample_quadratic(
    p0: Point2,
    p1: Point2,
    p2: Point2,
    step: float = CURVE_STEP,
    max_steps: Optional[int] = None,
) -> List[Point2]:
    steps = curve_steps(dist(p0, p1) + dist(p1, p2), step, max_steps)
    return [bezier_quad(p0, p1, p2, i / steps) for i in range(1, steps + 1)]


def arc_to_cubics(
    start: Point2,
    rx: float,
    ry: float,
    rotation: float,
    large_arc: float,
    sweep: float,
    end: Point2,
) -> List[Cubic]:
    """
    Convert one SVG elliptical arc into cubic segments (p0, c1, c2, p3).

    Zero radii or coincident endpoints describe no arc and yield nothing.
    Radii that are too small to span the endpoints are scaled up as SVG
    requires.
    """
    if rx == 0 or ry == 0 or (start[0] == end[0] and start[1] == end[1]):
        logger.debug("Skipping degenerate arc from %s to %s (rx=%s, ry=%s)", start, end, rx, ry)
        return []

    d = (
        f"M {start[0]!r},{start[1]!r} "
        f"A {abs(rx)!r},{abs(ry)!r} {rotation!r} {1 if large_arc else 0},{1 if sweep else 0} "
        f"{end[0]!r},{end[1]!r}"
    )
    cubics: List[Cubic] = []
    for segment in SvgPath(d):
        if not isinstance(segment, Arc):
            continue
        for curve in segment.as_cubic_curves():
            cubics.append(
                (
                    (float(curve.start.x), float(curve.start.y)),
                    (float(curve.control1.x), float(curve.control1.y)),
                    (float(curve.control2.x), float(curve.control2.y)),
                    (float(curve.end.x), float(curve.end.y)),
                )
            )
    return cubics


def sample_arc(
    start: Point2,
    rx: float,
    ry: float,
    rotation: float,
    large_arc: float,
    sweep: float,
    end: Point2,
    step: float = CURVE_STEP,
    max_steps: Optional[int] = None,
) -> List[Point2]:
    points: List[Point2] = []
    current = start
    for _, c1, c2, p3 in arc_to_cubics(start, rx, ry, rotation, large_arc, sweep, end):
        budget = None if max_steps is None else max_steps - len(points)
        try:
            points.extend(sample_cubic(current, c1, c2, p3, step, budget))
        except ContourTooComplexError as exc:
            raise ContourTooComplexError(len(points) + exc.count, max_steps) from exc
        current = points[-1]
    return points
