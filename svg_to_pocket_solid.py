#!/usr/bin/env python3
"""
Convert SVG artwork into one outer contour plus holes for a pocketed solid.

The result describes two stacked extrusions sharing the outer footprint:
a full-depth base and, replacing its top ``pocket_depth``, a layer where the
holes are cut out. Every request is processed on its own; a single bad
contour fails the whole conversion and no partial geometry is returned.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from classify_contours import DEFAULT_MAX_CONTOUR_VERTICES, ContourClassification, classify_contours
from curve_flatten import CURVE_STEP
from svg_contours import load_svg_contours
from svg_errors import MissingFileError, NotSvgLikeError, SvgContourError, UnhandledParseError


logger = logging.getLogger(__name__)

BASE_DEPTH = 35.0
POCKET_DEPTH = 20.0


@dataclass(frozen=True)
class PocketSolidConfig:
    base_depth: float = BASE_DEPTH
    pocket_depth: float = POCKET_DEPTH
    curve_step: float = CURVE_STEP
    max_contour_vertices: int = DEFAULT_MAX_CONTOUR_VERTICES

    def __post_init__(self) -> None:
        if self.pocket_depth <= 0.0:
            raise ValueError("pocket_depth must be > 0.")
        if self.pocket_depth >= self.base_depth:
            raise ValueError("pocket_depth must be smaller than base_depth.")
        if self.curve_step <= 0.0:
            raise ValueError("curve_step must be > 0.")

    def extrusion_dict(self) -> Dict[str, float]:
        return {"baseDepth": self.base_depth, "pocketDepth": self.pocket_depth}


@dataclass
class PocketSolidResult:
    ok: bool
    errors: List[str] = field(default_factory=list)
    classification: Optional[ContourClassification] = None
    config: PocketSolidConfig = field(default_factory=PocketSolidConfig)

    @classmethod
    def failure(cls, messages: Sequence[str], config: PocketSolidConfig) -> "PocketSolidResult":
        return cls(ok=False, errors=list(messages), classification=None, config=config)

    @property
    def holes_count(self) -> int:
        return len(self.classification.holes) if self.classification else 0

    def to_dict(self) -> Dict[str, Any]:
        c = self.classification
        meta = None
        if c is not None:
            meta = {"bbox": c.bbox.to_dict(), "outerArea": c.outer_area, "holesCount": len(c.holes)}
        return {
            "ok": self.ok,
            "errors": list(self.errors),
            "meta": meta,
            "geometry": {
                "outer": [[x, y] for x, y in c.outer] if c else [],
                "holes": [[[x, y] for x, y in hole] for hole in c.holes] if c else [],
                "extrusion": self.config.extrusion_dict(),
            },
        }


def looks_like_svg(text: str) -> bool:
    return "<svg" in text


def process_svg_text(svg_text: str, config: Optional[PocketSolidConfig] = None) -> PocketSolidResult:
    cfg = config or PocketSolidConfig()
    try:
        if not looks_like_svg(svg_text):
            raise NotSvgLikeError()
        contours = load_svg_contours(svg_text, step=cfg.curve_step, max_vertices=cfg.max_contour_vertices)
        classification = classify_contours(contours, max_vertices=cfg.max_contour_vertices)
    except SvgContourError as exc:
        logger.debug("SVG rejected: %s", exc.messages)
        return PocketSolidResult.failure(exc.messages, cfg)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure while processing SVG")
        return PocketSolidResult.failure(UnhandledParseError(str(exc)).messages, cfg)
    return PocketSolidResult(ok=True, errors=[], classification=classification, config=cfg)


def process_svg_file(svg_path: Optional[Path], config: Optional[PocketSolidConfig] = None) -> PocketSolidResult:
    cfg = config or PocketSolidConfig()
    if svg_path is None or not svg_path.is_file():
        return PocketSolidResult.failure(MissingFileError().messages, cfg)
    text = svg_path.read_bytes().decode("utf-8", errors="replace")
    return process_svg_text(text, cfg)


def write_result_json(result: PocketSolidResult, output: str) -> None:
    payload = json.dumps(result.to_dict(), indent=2)
    if output == "-":
        print(payload)
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload + "\n", encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("svg", type=Path, nargs="?", default=None, help="Input SVG file.")
    parser.add_argument(
        "--output-json",
        default=None,
        help="Write the contour result as JSON to this path ('-' for stdout).",
    )
    parser.add_argument(
        "--output-solid",
        type=Path,
        default=None,
        help="Optional: export the base+pocket solid with CadQuery (STL/STEP by extension).",
    )
    parser.add_argument("--base-depth", type=float, default=BASE_DEPTH, help="Full solid depth.")
    parser.add_argument("--pocket-depth", type=float, default=POCKET_DEPTH, help="Depth of the hole-bearing top layer.")
    parser.add_argument("--curve-step", type=float, default=CURVE_STEP, help="Curve flattening resolution in SVG units.")
    parser.add_argument(
        "--max-contour-vertices",
        type=int,
        default=DEFAULT_MAX_CONTOUR_VERTICES,
        help="Reject contours with more vertices than this (<=0 disables the limit).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")
    if args.base_depth <= 0.0:
        raise ValueError("--base-depth must be > 0.")
    if args.pocket_depth <= 0.0 or args.pocket_depth >= args.base_depth:
        raise ValueError("--pocket-depth must be > 0 and smaller than --base-depth.")
    if args.curve_step <= 0.0:
        raise ValueError("--curve-step must be > 0.")

    config = PocketSolidConfig(
        base_depth=args.base_depth,
        pocket_depth=args.pocket_depth,
        curve_step=args.curve_step,
        max_contour_vertices=args.max_contour_vertices,
    )
    result = process_svg_file(args.svg, config)

    if args.output_json is not None:
        write_result_json(result, args.output_json)

    if not result.ok:
        for message in result.errors:
            print(f"Error: {message}", file=sys.stderr)
        return 1

    c = result.classification
    if args.output_json != "-":
        print(f"Outer contour points: {len(c.outer)}")
        print(f"Holes: {len(c.holes)}")
        print(f"Outer area: {c.outer_area:.4f}")
        b = c.bbox
        print(f"BBox: ({b.min_x:.4f}, {b.min_y:.4f}) - ({b.max_x:.4f}, {b.max_y:.4f})")
        print(f"Size: {b.width:.4f} x {b.height:.4f}")
        print(f"Extrusion: base={config.base_depth}, pocket={config.pocket_depth}")
        if args.output_json is not None:
            print(f"Wrote JSON: {args.output_json}")

    if args.output_solid is not None:
        from extrude_pocket_solid import export_pocket_solid

        export_pocket_solid(result, args.output_solid)
        print(f"Wrote solid: {args.output_solid}", file=sys.stderr if args.output_json == "-" else sys.stdout)

    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)
