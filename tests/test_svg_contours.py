import pytest

from contour_geometry import is_closed, polygon_area
from svg_contours import (
    ContourBuilder,
    SvgDocument,
    ViewBox,
    load_svg_contours,
    normalize_contour,
    parse_viewbox,
    path_contours,
)
from svg_errors import ContourTooComplexError, NoClosedContoursError, NoRootElementError, UnhandledParseError
from svg_path_commands import parse_path_commands


def test_closed_square_path():
    contours = path_contours("M0 0 L10 0 L10 10 L0 10 Z")
    assert contours == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]]


def test_open_subpath_is_closed_implicitly():
    assert path_contours("M0 0 L10 0 10 10") == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]]


def test_extra_move_pairs_draw_lines():
    assert path_contours("M0 0 10 0 10 10 z") == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]]


def test_each_subpath_is_its_own_contour():
    contours = path_contours("M0 0 h10 v10 h-10 z M20 20 h5 v5 h-5 z")
    assert len(contours) == 2
    assert contours[1][0] == (20.0, 20.0)
    assert contours[1][2] == (25.0, 25.0)


def test_short_subpaths_are_dropped():
    contours = path_contours("M0 0 L5 5 M10 10 L20 10 L20 20 Z")
    assert contours == [[(10.0, 10.0), (20.0, 10.0), (20.0, 20.0), (10.0, 10.0)]]


def test_drawing_after_close_starts_at_first_drawn_point():
    contours = path_contours("M10 10 h10 v10 z l5 0 l0 5 l-5 0 z")
    assert len(contours) == 2
    assert contours[1] == [(15.0, 10.0), (15.0, 15.0), (10.0, 15.0), (15.0, 10.0)]


def test_two_points_drawn_after_close_are_dropped():
    contours = path_contours("M10 10 h10 v10 z l5 0 l0 5 z")
    assert contours == [[(10.0, 10.0), (20.0, 10.0), (20.0, 20.0), (10.0, 10.0)]]


def test_path_without_move_starts_at_first_drawn_point():
    contours = path_contours("L10 0 L10 10 L0 10")
    assert contours == [[(10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (10.0, 0.0)]]
    assert polygon_area(contours[0]) == pytest.approx(50.0)


def test_coincident_points_collapse_while_building():
    contours = path_contours("M0 0 L0 0 L10 0 L10 0.0000001 L10 10 Z")
    assert contours == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]]


def test_cubic_segments_are_flattened():
    contours = path_contours("M0 0 C0 0 10 0 10 0 L10 10 Z")
    # control polygon length 10 -> 20 samples
    assert len(contours[0]) == 1 + 20 + 1 + 1
    assert contours[0][20] == pytest.approx((10.0, 0.0))


def test_relative_quadratic_uses_current_point():
    contours = path_contours("M10 10 q5 10 10 0 z")
    assert contours[0][0] == (10.0, 10.0)
    assert contours[0][-2] == (20.0, 10.0)
    assert contours[0][-1] == (10.0, 10.0)


def test_smooth_shorthand_is_ignored():
    contours = path_contours("M0 0 L10 0 S 20 20 10 10 L10 10 L0 10 Z")
    assert contours == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]]


def test_arc_half_disc():
    contours = path_contours("M0 0 A5 5 0 0 1 10 0 Z")
    assert len(contours) == 1
    assert is_closed(contours[0])
    assert abs(polygon_area(contours[0])) == pytest.approx(39.27, rel=1e-2)


def test_zero_radius_arc_is_skipped_and_keeps_current_point():
    contours = path_contours("M0 0 L10 0 A0 0 0 0 1 20 20 L10 10 Z")
    assert contours == [[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0)]]


def test_builder_can_be_fed_commands_directly():
    builder = ContourBuilder()
    contours = builder.build(parse_path_commands("M0 0 H4 V4 H0"))
    assert contours == [[(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]]
    assert builder.current == (0.0, 4.0)


def test_parse_viewbox():
    assert parse_viewbox("0 0 100 50") == ViewBox(0.0, 0.0, 100.0, 50.0)
    assert parse_viewbox("10,20, 30 40") == ViewBox(10.0, 20.0, 30.0, 40.0)
    assert parse_viewbox("1 2 3") is None
    assert parse_viewbox("a b c d") is None
    assert parse_viewbox(None) is None


def test_normalize_contour_translates_by_viewbox_origin():
    pts = [(10.0, 20.0), (15.0, 20.0)]
    assert normalize_contour(pts, ViewBox(10.0, 20.0, 5.0, 5.0)) == [(0.0, 0.0), (5.0, 0.0)]
    assert normalize_contour(pts, None) == pts


def test_document_lists_shapes_in_order_at_any_depth():
    doc = SvgDocument.from_text(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">'
        '<g><g><rect width="1" height="2"/></g><text>skip</text></g>'
        '<circle r="3"/><polyline points="0,0 1,1"/><path d="M0 0"/>'
        "</svg>"
    )
    elements = list(doc.shape_elements())
    assert [e.tag for e in elements] == ["rect", "circle", "path"]
    assert elements[0].number("height") == 2.0
    assert elements[0].number("x") == 0.0
    assert doc.view_box == ViewBox(0.0, 0.0, 10.0, 10.0)


def test_missing_root_element():
    with pytest.raises(NoRootElementError):
        SvgDocument.from_text("<!-- not an <svg> document -->")
    with pytest.raises(NoRootElementError):
        SvgDocument.from_text("<html><body><svg/></body></html>")


def test_malformed_markup_is_wrapped():
    with pytest.raises(UnhandledParseError) as info:
        SvgDocument.from_text("<svg><rect></svg>")
    assert info.value.messages[0].startswith("Failed to process SVG:")


def test_load_applies_viewbox_to_every_contour():
    contours = load_svg_contours(
        '<svg viewBox="10 20 100 100">'
        '<rect x="10" y="20" width="5" height="5"/>'
        '<polygon points="20,30 30,30 30,40"/>'
        "</svg>"
    )
    assert contours[0][0] == (0.0, 0.0)
    assert contours[1] == [(10.0, 10.0), (20.0, 10.0), (20.0, 20.0), (10.0, 10.0)]


def test_load_without_shapes_fails():
    with pytest.raises(NoClosedContoursError):
        load_svg_contours('<svg><rect width="0" height="5"/><line x1="0" x2="5"/></svg>')


def test_builder_stops_at_the_vertex_limit():
    with pytest.raises(ContourTooComplexError) as info:
        path_contours("M0 0 H10 V10 H0 V5 H5", max_vertices=4)
    assert (info.value.count, info.value.limit, info.value.index) == (5, 4, 0)
    assert info.value.messages == ["Contour 0 has 5 vertices (limit is 4)."]


def test_builder_rejects_a_curve_before_sampling_it():
    with pytest.raises(ContourTooComplexError) as info:
        path_contours("M0 0 h10 v10 z M0 0 C0 0 10 0 10 0 z", max_vertices=10)
    # second subpath: the M point plus 20 curve samples
    assert (info.value.count, info.value.index) == (21, 1)


def test_load_rejects_huge_circle_without_sampling_it():
    with pytest.raises(ContourTooComplexError) as info:
        load_svg_contours('<svg><rect width="5" height="5"/><circle r="1e9"/></svg>', max_vertices=1000)
    assert info.value.index == 1
    assert info.value.limit == 1000
    assert info.value.count > 10**10


def test_load_vertex_limit_covers_polygons_and_can_be_disabled():
    text = '<svg><polygon points="0,0 10,0 10,10 0,10"/></svg>'
    with pytest.raises(ContourTooComplexError):
        load_svg_contours(text, max_vertices=4)
    assert len(load_svg_contours(text, max_vertices=0)[0]) == 5
