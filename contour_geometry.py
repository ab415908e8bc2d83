"""Planar polygon helpers shared by the contour builder and the classifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


Point2 = Tuple[float, float]

POINT_EPS = 1e-6


@dataclass
class BBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> Dict[str, float]:
        return {"minX": self.min_x, "minY": self.min_y, "maxX": self.max_x, "maxY": self.max_y}


def same_point(a: Point2, b: Point2, eps: float = POINT_EPS) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps


def dedupe_consecutive(points: Sequence[Point2], eps: float = POINT_EPS) -> List[Point2]:
    if not points:
        return []
    out = [points[0]]
    for p in points[1:]:
        if not same_point(p, out[-1], eps):
            out.append(p)
    return out


def is_closed(points: Sequence[Point2], eps: float = POINT_EPS) -> bool:
    return len(points) >= 2 and same_point(points[0], points[-1], eps)


def ensure_closed(points: Sequence[Point2], eps: float = POINT_EPS) -> List[Point2]:
    if len(points) < 2 or is_closed(points, eps):
        return list(points)
    return list(points) + [points[0]]


def polygon_area(points: Sequence[Point2]) -> float:
    """Signed shoelace area; positive when the points run x-towards-y."""
    poly = ensure_closed(points)
    if len(poly) < 4:
        return 0.0
    area2 = 0.0
    for i in range(len(poly) - 1):
        x0, y0 = poly[i]
        x1, y1 = poly[i + 1]
        area2 += x0 * y1 - x1 * y0
    return 0.5 * area2


def point_in_polygon(pt: Point2, poly: Sequence[Point2]) -> bool:
    """Odd-crossing test with a horizontal ray pointing towards +x."""
    x, y = pt
    p = ensure_closed(poly)
    inside = False
    for i in range(len(p) - 1):
        x0, y0 = p[i]
        x1, y1 = p[i + 1]
        if (y0 > y) == (y1 > y):
            continue
        den = (y1 - y0) or 1e-12
        x_cross = x0 + (y - y0) * (x1 - x0) / den
        if x < x_cross:
            inside = not inside
    return inside


def orient(a: Point2, b: Point2, c: Point2) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def segments_intersect(a: Point2, b: Point2, c: Point2, d: Point2) -> bool:
    # Proper crossings only: touching or collinear overlap does not count.
    o1 = orient(a, b, c)
    o2 = orient(a, b, d)
    o3 = orient(c, d, a)
    o4 = orient(c, d, b)
    return o1 * o2 < 0 and o3 * o4 < 0


def is_self_intersecting(points: Sequence[Point2]) -> bool:
    """Check every non-adjacent edge pair of a closed contour."""
    poly = ensure_closed(points)
    last = len(poly) - 2
    for i in range(len(poly) - 1):
        for j in range(i + 2, len(poly) - 1):
            if i == 0 and j == last:
                continue
            if segments_intersect(poly[i], poly[i + 1], poly[j], poly[j + 1]):
                return True
    return False


def bounding_box(points: Sequence[Point2]) -> BBox:
    if not points:
        raise ValueError("Cannot compute the bounding box of an empty contour.")
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return BBox(min(xs), min(ys), max(xs), max(ys))


def ensure_orientation(points: Sequence[Point2], positive: bool) -> List[Point2]:
    """Return an open contour whose signed area has the requested sign."""
    area = polygon_area(points)
    if (area > 0) == positive:
        return list(points)
    return list(reversed(points))


def translate_points(points: Sequence[Point2], dx: float, dy: float) -> List[Point2]:
    return [(x + dx, y + dy) for x, y in points]
