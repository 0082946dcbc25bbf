"""
Unit tests for dchart_dataviz

Covers the canvas to SVG coordinate transform, arc path data, element
builders and whole-document rendering.
"""

import pytest

from dchart.modules import dchart_charts as charts
from dchart.modules.dchart_canvas import Canvas
from dchart.modules.dchart_dataviz import (
    arc_path_data,
    combine_svg,
    convert_color_to_svg,
    render_svg,
    save_svg,
    svg_circle,
    svg_element,
    svg_text,
    transform_point_to_svg,
)


def test_transform_flips_y():
    assert transform_point_to_svg(50, 25, 800, 600) == (400.0, 450.0)
    assert transform_point_to_svg(0, 100, 800, 600) == (0.0, 0.0)
    assert transform_point_to_svg(100, 0, 800, 600) == (800.0, 600.0)


def test_convert_color():
    assert convert_color_to_svg("", 50) == ("black", 0.5)
    assert convert_color_to_svg("red", 150) == ("red", 1.0)
    assert convert_color_to_svg("red", None) == ("red", 1.0)


class TestArcPath:

    def test_quarter_turn(self):
        # 0 to 90 degrees: from 3 o'clock up to 12 o'clock in SVG coordinates
        assert arc_path_data(100, 100, 10, 0, 90) == "M 110 100 A 10 10 0 0 0 100 90"

    def test_large_arc_flag(self):
        assert " 0 1 0 " in arc_path_data(100, 100, 10, 0, 270)

    def test_full_turn_is_two_halves(self):
        path = arc_path_data(100, 100, 10, 0, 360)
        assert path.count(" A ") == 2
        assert path.startswith("M 110 100")

    def test_zero_sweep(self):
        assert arc_path_data(100, 100, 10, 45, 45) == ""


def test_svg_circle_skips_non_positive_radius():
    assert svg_circle(1, 1, 0, fill="red") == ""
    assert 'r="2"' in svg_circle(1, 1, 2, fill="red")


def test_svg_text_rotation():
    element = svg_text(10, 20, "label", rotation=-45)
    assert 'transform="translate(10,20) rotate(-45)"' in element
    assert element.endswith(">label</text>")


class TestSvgElement:

    def test_line_scales_with_width(self):
        canvas = Canvas()
        canvas.line(0, 0, 50, 50, 1, "red", 50)
        element = svg_element(canvas.primitives[0], 800, 600)
        assert 'x1="0" y1="600" x2="400" y2="300"' in element
        assert 'stroke-width="8"' in element
        assert 'stroke-opacity="0.50"' in element

    def test_text_anchor_and_font(self):
        canvas = Canvas()
        canvas.text_end(50, 50, "right", "mono", 2)
        element = svg_element(canvas.primitives[0], 800, 600)
        assert 'text-anchor="end"' in element
        assert 'font-family="monospace"' in element
        assert 'fill="black"' in element

    def test_rect_from_center(self):
        canvas = Canvas()
        canvas.rect(50, 50, 20, 10, "blue")
        element = svg_element(canvas.primitives[0], 800, 600)
        assert 'x="320" y="270" width="160" height="60"' in element

    def test_non_finite_is_skipped(self):
        canvas = Canvas()
        canvas.line(0, float("nan"), 1, 1, 1, "red")
        assert svg_element(canvas.primitives[0], 800, 600) == ""

    def test_rotated_text_turns_clockwise_in_svg(self):
        canvas = Canvas()
        canvas.text_rotate(10, 10, "tilted", "", "sans", 30, 1)
        assert "rotate(-30)" in svg_element(canvas.primitives[0], 800, 600)


def test_render_svg_document(full_box_chart):
    canvas = Canvas()
    charts.bar(canvas, full_box_chart, 2)
    charts.donut(canvas, full_box_chart, 20, 3, False, False)
    svg = render_svg(canvas.primitives, 400, 300)
    assert svg.startswith('<?xml version="1.0"')
    assert 'width="400" height="300"' in svg
    assert svg.count("<line ") == 3
    assert svg.count("<path ") == 3
    assert 'fill="white"' in svg


def test_combine_svg_without_background():
    svg = combine_svg(["<line/>", ""], 100, 100)
    assert "<rect" not in svg
    assert "<line/>" in svg


def test_save_svg_creates_directory(tmp_path):
    target = tmp_path / "out" / "chart.svg"
    save_svg(combine_svg([], 10, 10), str(target))
    assert target.read_text(encoding="utf-8").startswith("<?xml")
