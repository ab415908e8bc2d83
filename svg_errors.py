"""Error kinds raised while turning an SVG into validated pocket-solid contours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


SELF_INTERSECTING = "SelfIntersectingContour"
OUTSIDE_OUTER = "ContourOutsideOuter"
TOO_COMPLEX = "ContourTooComplex"


@dataclass(frozen=True)
class ContourIssue:
    kind: str
    index: int
    message: str


def self_intersecting_issue(index: int) -> ContourIssue:
    return ContourIssue(SELF_INTERSECTING, index, f"Contour {index} is self-intersecting.")


def outside_outer_issue(index: int) -> ContourIssue:
    return ContourIssue(OUTSIDE_OUTER, index, f"Contour {index} lies outside the outer contour.")


def too_complex_issue(index: int, count: int, limit: int) -> ContourIssue:
    return ContourIssue(
        TOO_COMPLEX,
        index,
        f"Contour {index} has {count} vertices (limit is {limit}).",
    )


class SvgContourError(ValueError):
    """Base class; ``messages`` is what gets reported back to the caller."""

    default_message = "SVG could not be converted to contours."

    def __init__(self, message: Optional[str] = None) -> None:
        text = message or self.default_message
        super().__init__(text)
        self.messages: List[str] = [text]


class MissingFileError(SvgContourError):
    default_message = "No SVG file was provided."


class NotSvgLikeError(SvgContourError):
    default_message = "The file does not look like an SVG."


class NoRootElementError(SvgContourError):
    default_message = "Root <svg> element not found."


class NoClosedContoursError(SvgContourError):
    default_message = "No closed contours found (path/polygon/rect/circle/ellipse)."


class DegenerateOuterContourError(SvgContourError):
    default_message = "Could not determine the outer contour."


class UnhandledParseError(SvgContourError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to process SVG: {message}")


class ContourTooComplexError(SvgContourError):
    """Raised while sampling, before an over-limit point list is built."""

    def __init__(self, count: int, limit: int, index: int = 0) -> None:
        self.count = count
        self.limit = limit
        self.index = index
        super().__init__(too_complex_issue(index, count, limit).message)


class ContourValidationError(SvgContourError):
    def __init__(self, issues: Sequence[ContourIssue]) -> None:
        if not issues:
            raise ValueError("ContourValidationError needs at least one issue.")
        super().__init__(issues[0].message)
        self.issues: List[ContourIssue] = list(issues)
        self.messages = [issue.message for issue in self.issues]

    def __str__(self) -> str:
        return " ".join(self.messages)
