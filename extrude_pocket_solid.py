"""
Build the printable base + pocket solid from a validated contour result.

Layout along +Z:
- 0 .. base_depth - pocket_depth: the outer footprint, no holes;
- base_depth - pocket_depth .. base_depth: the outer footprint with every
  hole cut through.

SVG y grows downwards, so contours are flipped into a y-up frame whose
origin is the lower-left corner of the outer bbox.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import cadquery as cq

from contour_geometry import BBox, Point2
from svg_to_pocket_solid import PocketSolidResult


HOLE_CUT_MARGIN = 1.0


def to_local(points: Sequence[Point2], bbox: BBox) -> List[Point2]:
    return [(x - bbox.min_x, bbox.max_y - y) for x, y in points]


def footprint_prism(points: Sequence[Point2], height: float, z0: float = 0.0) -> cq.Workplane:
    if len(points) < 3:
        raise ValueError("Contour must have at least 3 points")
    return (
        cq.Workplane("XY")
        .polyline(list(points))
        .close()
        .extrude(height)
        .translate((0.0, 0.0, z0))
    )


def build_pocket_solid(result: PocketSolidResult) -> cq.Workplane:
    if not result.ok or result.classification is None:
        raise ValueError("Cannot build a solid from a failed contour result.")

    c = result.classification
    cfg = result.config
    slab_height = cfg.base_depth - cfg.pocket_depth

    outer = to_local(c.outer, c.bbox)
    base = footprint_prism(outer, slab_height)
    pocket = footprint_prism(outer, cfg.pocket_depth, z0=slab_height)
    for hole in c.holes:
        # Overshoot both caps so the cut never leaves coplanar skins behind.
        cutter = footprint_prism(
            to_local(hole, c.bbox),
            cfg.pocket_depth + 2.0 * HOLE_CUT_MARGIN,
            z0=slab_height - HOLE_CUT_MARGIN,
        )
        pocket = pocket.cut(cutter)
    return base.union(pocket)


def export_pocket_solid(result: PocketSolidResult, path: Path) -> Path:
    solid = build_pocket_solid(result)
    path.parent.mkdir(parents=True, exist_ok=True)
    cq.exporters.export(solid, str(path))
    return path
