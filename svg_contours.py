"""
Turn an SVG document into raw closed contours.

The document side is reduced to a small capability: ``SvgDocument`` lists the
path/polygon/rect/circle/ellipse elements in document order and exposes
their attributes by name. Path data goes through ``ContourBuilder``, basic
shapes through the samplers in ``svg_shapes``. Every contour is finally
shifted so the viewBox origin becomes (0, 0).

Transforms, groups, strokes and styling are ignored on purpose.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence
from xml.parsers import expat

from contour_geometry import Point2, dedupe_consecutive, same_point, translate_points
from curve_flatten import CURVE_STEP, sample_arc, sample_cubic, sample_quadratic
from svg_errors import ContourTooComplexError, NoClosedContoursError, NoRootElementError, UnhandledParseError
from svg_path_commands import (
    ARC_TO,
    CLOSE_PATH,
    CUBIC_CURVE_TO,
    HORIZONTAL_LINE_TO,
    LINE_TO,
    MOVE_TO,
    QUADRATIC_CURVE_TO,
    VERTICAL_LINE_TO,
    PathCommand,
    parse_path_commands,
)
from svg_shapes import (
    circle_points,
    ellipse_points,
    parse_number_attr,
    parse_points_attr,
    polygon_points,
    rect_points,
)


logger = logging.getLogger(__name__)

SHAPE_TAGS = ("path", "polygon", "rect", "circle", "ellipse")

NO_ELEMENTS_CODE = expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]


@dataclass
class ViewBox:
    min_x: float
    min_y: float
    width: float
    height: float


@dataclass
class ShapeElement:
    tag: str
    attrib: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrib.get(name, default)

    def number(self, name: str, fallback: float = 0.0) -> float:
        return parse_number_attr(self.attrib.get(name), fallback)


def local_tag(tag: str) -> str:
    return tag.split("}", 1)[-1]


def parse_viewbox(value: Optional[str]) -> Optional[ViewBox]:
    if not value:
        return None
    parts = re.split(r"[\s,]+", value.strip())
    if len(parts) != 4:
        return None
    try:
        nums = [float(p) for p in parts]
    except ValueError:
        return None
    if any(n != n for n in nums):
        return None
    return ViewBox(nums[0], nums[1], nums[2], nums[3])


class SvgDocument:
    def __init__(self, root: ET.Element) -> None:
        self.root = root
        self.view_box = parse_viewbox(root.attrib.get("viewBox"))

    @classmethod
    def from_text(cls, svg_text: str) -> "SvgDocument":
        try:
            root = ET.fromstring(svg_text)
        except ET.ParseError as exc:
            if exc.code == NO_ELEMENTS_CODE:
                raise NoRootElementError() from exc
            raise UnhandledParseError(str(exc)) from exc
        if not isinstance(root.tag, str) or local_tag(root.tag) != "svg":
            raise NoRootElementError()
        return cls(root)

    def shape_elements(self) -> Iterator[ShapeElement]:
        for elem in self.root.iter():
            if not isinstance(elem.tag, str):
                continue
            tag = local_tag(elem.tag)
            if tag in SHAPE_TAGS:
                yield ShapeElement(tag, dict(elem.attrib))


class ContourBuilder:
    """
    Walk a path command stream and collect one closed contour per subpath.

    Points are deduplicated against their predecessor as they are appended.
    A subpath starts at its ``M`` point, or at the first drawn point when it
    has none (no leading ``M``, or drawing resumed after ``Z``). It is kept
    only if it has at least 3 points and is closed by repeating its first
    point when needed.

    With ``max_vertices`` set, a subpath that would grow past it raises
    ``ContourTooComplexError`` before the offending points are sampled.
    """

    def __init__(self, step: float = CURVE_STEP, max_vertices: Optional[int] = None) -> None:
        self.step = step
        self.max_vertices = max_vertices
        self.current: Point2 = (0.0, 0.0)
        self.start: Optional[Point2] = None
        self.points: List[Point2] = []
        self.contours: List[List[Point2]] = []

    def resolve(self, x: float, y: float, relative: bool) -> Point2:
        if relative:
            return (self.current[0] + x, self.current[1] + y)
        return (x, y)

    def budget(self) -> Optional[int]:
        if self.max_vertices is None:
            return None
        return self.max_vertices - len(self.points)

    def too_complex(self, count: int) -> ContourTooComplexError:
        return ContourTooComplexError(count, self.max_vertices, len(self.contours))

    def append(self, pt: Point2) -> None:
        if not self.points or not same_point(pt, self.points[-1]):
            if self.max_vertices is not None and len(self.points) >= self.max_vertices:
                raise self.too_complex(len(self.points) + 1)
            self.points.append(pt)
        self.current = pt

    def extend(self, pts: Sequence[Point2]) -> None:
        for pt in pts:
            self.append(pt)

    def sample(self, sampler: Callable[..., List[Point2]], *args: object) -> List[Point2]:
        try:
            return sampler(*args, self.step, self.budget())
        except ContourTooComplexError as exc:
            raise self.too_complex(len(self.points) + exc.count) from exc

    def flush(self) -> None:
        pts = self.points
        self.points = []
        if len(pts) < 3:
            return
        if not same_point(pts[0], pts[-1]):
            pts.append(pts[0])
        self.contours.append(pts)

    def apply(self, cmd: PathCommand) -> None:
        kind = cmd.kind
        args = cmd.args
        rel = cmd.relative

        if kind == MOVE_TO:
            self.flush()
            pt = self.resolve(args[0], args[1], rel)
            self.points = [pt]
            self.start = pt
            self.current = pt
            return

        if kind == CLOSE_PATH:
            if self.points and self.start is not None:
                self.append(self.start)
            self.flush()
            if self.start is not None:
                self.current = self.start
            self.start = None
            return

        # Curves start from the current point even when the accumulator is
        # empty; that point itself is not recorded.
        cx, cy = self.current
        if kind == LINE_TO:
            self.append(self.resolve(args[0], args[1], rel))
        elif kind == HORIZONTAL_LINE_TO:
            self.append((cx + args[0] if rel else args[0], cy))
        elif kind == VERTICAL_LINE_TO:
            self.append((cx, cy + args[0] if rel else args[0]))
        elif kind == CUBIC_CURVE_TO:
            p1 = self.resolve(args[0], args[1], rel)
            p2 = self.resolve(args[2], args[3], rel)
            p3 = self.resolve(args[4], args[5], rel)
            self.extend(self.sample(sample_cubic, self.current, p1, p2, p3))
        elif kind == QUADRATIC_CURVE_TO:
            p1 = self.resolve(args[0], args[1], rel)
            p2 = self.resolve(args[2], args[3], rel)
            self.extend(self.sample(sample_quadratic, self.current, p1, p2))
        elif kind == ARC_TO:
            rx, ry, rotation, large_arc, sweep = args[:5]
            end = self.resolve(args[5], args[6], rel)
            # A skipped (degenerate) arc leaves the current point where it was.
            self.extend(self.sample(sample_arc, self.current, rx, ry, rotation, large_arc, sweep, end))
        else:
            raise ValueError(f"Unhandled path command kind: {kind}")

    def build(self, commands: Sequence[PathCommand]) -> List[List[Point2]]:
        for cmd in commands:
            self.apply(cmd)
        self.flush()
        return self.contours


def path_contours(d: str, step: float = CURVE_STEP, max_vertices: Optional[int] = None) -> List[List[Point2]]:
    return ContourBuilder(step, max_vertices).build(parse_path_commands(d))


def element_contours(
    element: ShapeElement, step: float = CURVE_STEP, max_vertices: Optional[int] = None
) -> List[List[Point2]]:
    tag = element.tag
    if tag == "path":
        d = element.get("d")
        return path_contours(d, step, max_vertices) if d else []

    if tag == "polygon":
        raw = element.get("points")
        pts = polygon_points(parse_points_attr(raw)) if raw else []
        if max_vertices is not None and len(pts) > max_vertices:
            raise ContourTooComplexError(len(pts), max_vertices)
    elif tag == "rect":
        pts = rect_points(
            element.number("x"),
            element.number("y"),
            element.number("width"),
            element.number("height"),
        )
    elif tag == "circle":
        pts = circle_points(element.number("cx"), element.number("cy"), element.number("r"), step, max_vertices)
    elif tag == "ellipse":
        pts = ellipse_points(
            element.number("cx"),
            element.number("cy"),
            element.number("rx"),
            element.number("ry"),
            step,
            max_vertices,
        )
    else:
        return []
    return [pts] if pts else []


def normalize_contour(points: Sequence[Point2], view_box: Optional[ViewBox]) -> List[Point2]:
    if view_box is not None:
        points = translate_points(points, -view_box.min_x, -view_box.min_y)
    return dedupe_consecutive(points)


def load_svg_contours(svg_text: str, step: float = CURVE_STEP, max_vertices: int = 0) -> List[List[Point2]]:
    """
    Raw contours of every shape element, in document order.

    ``max_vertices <= 0`` disables the per-contour vertex limit. An element
    that would exceed it fails the whole load with ``ContourTooComplexError``
    indexed by its position among the raw contours.
    """
    limit = max_vertices if max_vertices > 0 else None
    doc = SvgDocument.from_text(svg_text)
    contours: List[List[Point2]] = []
    elements = 0
    for element in doc.shape_elements():
        elements += 1
        try:
            found = element_contours(element, step, limit)
        except ContourTooComplexError as exc:
            logger.debug("Shape <%s> exceeds the vertex limit (%d > %d)", element.tag, exc.count, exc.limit)
            raise ContourTooComplexError(exc.count, exc.limit, len(contours) + exc.index) from exc
        for contour in found:
            contours.append(normalize_contour(contour, doc.view_box))

    logger.debug("Found %d shape elements, %d contours (viewBox=%s)", elements, len(contours), doc.view_box)
    if not contours:
        raise NoClosedContoursError()
    return contours
