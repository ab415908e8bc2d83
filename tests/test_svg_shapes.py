import math

import pytest

from svg_errors import ContourTooComplexError
from svg_shapes import (
    circle_points,
    ellipse_points,
    parse_number_attr,
    parse_points_attr,
    polygon_points,
    rect_points,
)


def test_rect_is_a_five_point_loop():
    assert rect_points(0.0, 0.0, 100.0, 50.0) == [
        (0.0, 0.0),
        (100.0, 0.0),
        (100.0, 50.0),
        (0.0, 50.0),
        (0.0, 0.0),
    ]


def test_rect_without_extent_is_dropped():
    assert rect_points(0.0, 0.0, 0.0, 10.0) == []
    assert rect_points(0.0, 0.0, 10.0, -1.0) == []


def test_small_circle_uses_minimum_step_count():
    pts = circle_points(0.0, 0.0, 1.0)
    assert len(pts) == 25
    assert pts[0] == pytest.approx(pts[-1])


def test_circle_step_count_scales_with_radius():
    pts = circle_points(5.0, 5.0, 10.0)
    assert len(pts) == math.ceil(2.0 * math.pi * 10.0 / 0.5) + 1
    for x, y in pts:
        assert math.hypot(x - 5.0, y - 5.0) == pytest.approx(10.0)


def test_ellipse_uses_larger_radius_for_steps():
    pts = ellipse_points(0.0, 0.0, 20.0, 2.0)
    assert len(pts) == math.ceil(2.0 * math.pi * 20.0 / 0.5) + 1
    assert max(p[0] for p in pts) == pytest.approx(20.0)
    assert max(p[1] for p in pts) == pytest.approx(2.0, abs=1e-3)


def test_ellipse_needs_both_radii():
    assert ellipse_points(0.0, 0.0, 0.0, 5.0) == []
    assert circle_points(0.0, 0.0, 0.0) == []


def test_circle_over_the_point_limit_is_rejected_up_front():
    with pytest.raises(ContourTooComplexError) as info:
        circle_points(0.0, 0.0, 1e9, max_points=1000)
    assert info.value.count == math.ceil(2.0 * math.pi * 1e9 / 0.5) + 1
    assert info.value.limit == 1000
    assert len(circle_points(0.0, 0.0, 1.0, max_points=25)) == 25


def test_parse_points_attr():
    assert parse_points_attr("0,0 10,0 10,10 0,10") == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    assert parse_points_attr(" 0 0, 10 0 10 ") == [(0.0, 0.0), (10.0, 0.0)]
    assert parse_points_attr("0,0 0,0 5,5") == [(0.0, 0.0), (5.0, 5.0)]


def test_parse_points_attr_skips_non_finite_numbers():
    assert parse_points_attr("0,0 10,0 nan,inf 10,10") == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
    assert parse_points_attr("-inf 0,0 NaN") == [(0.0, 0.0)]


def test_polygon_points_closes_the_loop():
    assert polygon_points([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]) == [
        (0.0, 0.0),
        (10.0, 0.0),
        (10.0, 10.0),
        (0.0, 0.0),
    ]
    closed = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]
    assert polygon_points(closed) == closed
    assert polygon_points([(0.0, 0.0), (1.0, 1.0)]) == []


def test_parse_number_attr_falls_back():
    assert parse_number_attr(None) == 0.0
    assert parse_number_attr("5px") == 0.0
    assert parse_number_attr("nan", 3.0) == 3.0
    assert parse_number_attr(" 1e2 ") == 100.0
