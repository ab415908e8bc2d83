"""
Pick the outer boundary among raw contours, validate the rest as holes and
normalize winding.

The largest contour by |area| is the outer boundary. Every contour is
checked for self-intersection, every other contour must have all of its
vertices inside the outer one. Problems are collected for all contours and
raised together; nothing is returned unless every contour passes.

Known gaps, kept as-is:
- holes are never tested against each other, so overlapping holes pass;
- containment only looks at vertices, so a hole edge that leaves and
  re-enters the outer contour between two inside vertices passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from contour_geometry import (
    BBox,
    Point2,
    bounding_box,
    dedupe_consecutive,
    ensure_orientation,
    is_closed,
    is_self_intersecting,
    point_in_polygon,
    polygon_area,
)
from svg_errors import (
    ContourIssue,
    ContourValidationError,
    DegenerateOuterContourError,
    NoClosedContoursError,
    outside_outer_issue,
    self_intersecting_issue,
    too_complex_issue,
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTOUR_VERTICES = 20000


@dataclass
class ContourEntry:
    index: int
    points: List[Point2]
    area: float

    @property
    def abs_area(self) -> float:
        return abs(self.area)


@dataclass
class ContourClassification:
    outer: List[Point2]
    holes: List[List[Point2]]
    bbox: BBox
    outer_area: float


def closed_candidates(raw_contours: Sequence[Sequence[Point2]]) -> List[List[Point2]]:
    out: List[List[Point2]] = []
    for contour in raw_contours:
        pts = dedupe_consecutive(contour)
        if len(pts) >= 4 and is_closed(pts):
            out.append(pts)
    return out


def rank_by_area(contours: Sequence[List[Point2]]) -> List[ContourEntry]:
    entries = [ContourEntry(index=i, points=c, area=polygon_area(c)) for i, c in enumerate(contours)]
    entries.sort(key=lambda e: e.abs_area, reverse=True)
    return entries


def exceeds_vertex_limit(entry: ContourEntry, max_vertices: int) -> bool:
    return max_vertices > 0 and len(entry.points) > max_vertices


def vertex_limit_issues(entry: ContourEntry, max_vertices: int) -> List[ContourIssue]:
    if exceeds_vertex_limit(entry, max_vertices):
        return [too_complex_issue(entry.index, len(entry.points), max_vertices)]
    return []


def self_intersection_issues(entry: ContourEntry) -> List[ContourIssue]:
    if is_self_intersecting(entry.points):
        return [self_intersecting_issue(entry.index)]
    return []


def containment_issues(entry: ContourEntry, outer: ContourEntry) -> List[ContourIssue]:
    # The closing vertex repeats the first one; test it only once.
    for pt in entry.points[:-1]:
        if not point_in_polygon(pt, outer.points):
            return [outside_outer_issue(entry.index)]
    return []


def validate_entries(
    entries: Sequence[ContourEntry], max_vertices: int
) -> Tuple[List[ContourEntry], List[ContourIssue]]:
    """Return the accepted holes and every issue found, in visiting order."""
    outer = entries[0]
    outer_too_big = exceeds_vertex_limit(outer, max_vertices)
    holes: List[ContourEntry] = []
    issues: List[ContourIssue] = []

    for pos, entry in enumerate(entries):
        limit_issues = vertex_limit_issues(entry, max_vertices)
        issues.extend(limit_issues)
        if limit_issues:
            continue
        issues.extend(self_intersection_issues(entry))
        if pos == 0 or outer_too_big:
            continue
        outside = containment_issues(entry, outer)
        issues.extend(outside)
        if not outside:
            holes.append(entry)

    return holes, issues


def classify_contours(
    raw_contours: Sequence[Sequence[Point2]],
    max_vertices: int = DEFAULT_MAX_CONTOUR_VERTICES,
) -> ContourClassification:
    contours = closed_candidates(raw_contours)
    if not contours:
        raise NoClosedContoursError("No closed contours.")

    entries = rank_by_area(contours)
    outer = entries[0]
    if outer.abs_area <= 0:
        raise DegenerateOuterContourError()

    holes, issues = validate_entries(entries, max_vertices)
    if issues:
        logger.debug("Contour validation failed with %d issue(s)", len(issues))
        raise ContourValidationError(issues)

    bbox = bounding_box(outer.points)
    outer_points = ensure_orientation(outer.points[:-1], positive=True)
    hole_points = [ensure_orientation(h.points[:-1], positive=False) for h in holes]
    logger.debug(
        "Outer contour %d (%d points, area %.3f), %d hole(s)",
        outer.index,
        len(outer_points),
        outer.abs_area,
        len(hole_points),
    )
    return ContourClassification(
        outer=outer_points,
        holes=hole_points,
        bbox=bbox,
        outer_area=outer.abs_area,
    )

