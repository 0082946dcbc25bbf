"""
Unit tests for dchart_settings

Covers new_chart defaults, generate_chart dispatch and drawing order,
error reporting, and YAML settings loading.
"""

import io
import logging

import pytest

from dchart.modules.dchart_canvas import Canvas
from dchart.modules.dchart_primitives import ConditionError
from dchart.modules.dchart_settings import (
    ChartKind,
    DonutChart,
    EmptyChartError,
    PGridChart,
    SeriesChart,
    Settings,
    SettingsError,
    SlopeChart,
    generate_chart,
    load_settings,
    new_chart,
    parse_hline,
    settings_from_mapping,
)


DATA = "# Sales\nJan\t10\nFeb\t20\nMar\t30\n"


def generate(settings, data=DATA):
    canvas = Canvas()
    chart = generate_chart(settings, canvas, io.StringIO(data))
    return chart, canvas


class TestNewChart:

    def test_defaults(self):
        settings = new_chart("bar")
        assert isinstance(settings.spec, SeriesChart)
        assert settings.spec.show_bars
        assert (settings.top, settings.bottom, settings.left, settings.right) == (90, 30, 10, 90)
        assert settings.text_size == 1.5
        assert settings.line_spacing == 2.4
        assert settings.spec.xlabel_interval == 1
        assert settings.background_color == "white"
        assert settings.data_color == "lightsteelblue"
        assert settings.label_color == "rgb(75,75,75)"

    def test_box_fallback_per_edge(self):
        settings = new_chart("donut", 80, 0, 50, -1)
        assert isinstance(settings.spec, DonutChart)
        assert (settings.top, settings.bottom, settings.left, settings.right) == (80, 30, 50, 90)

    @pytest.mark.parametrize("name, flag", [
        ("line", "show_line"), ("scatter", "show_scatter"),
        ("area", "show_area"), ("volume", "show_area")])
    def test_overlay_kinds_hide_bars(self, name, flag):
        spec = new_chart(name).spec
        assert getattr(spec, flag)
        assert not spec.show_bars

    def test_unknown_type_makes_bar_chart(self, caplog):
        with caplog.at_level(logging.WARNING):
            settings = new_chart("sparkle")
        assert isinstance(settings.spec, SeriesChart)
        assert "unknown chart type" in caplog.text

    def test_chart_kind_parse(self):
        assert ChartKind.parse(" PGrid ") is ChartKind.PGRID
        with pytest.raises(ValueError):
            ChartKind.parse("sparkle")


class TestGenerateChart:

    def test_bar_chart(self):
        chart, canvas = generate(new_chart("bar"))
        bars = canvas.of_kind("line")
        assert len(bars) == 3
        # default bar width spreads the bars over the box
        assert all(b["width"] == pytest.approx(20) for b in bars)
        assert bars[0]["color"] == "lightsteelblue"
        assert [t["text"] for t in canvas.of_kind("text_rotate")] == ["Jan", "Feb", "Mar"]
        assert chart.title == "Sales"
        assert chart.text_size == 1.5

    def test_empty_data(self):
        with pytest.raises(EmptyChartError):
            generate(new_chart("bar"), "# nothing here\n")

    def test_bad_condition_raises_before_drawing(self):
        settings = new_chart("bar")
        settings.data_condition = "0,ten,red"
        canvas = Canvas()
        with pytest.raises(ConditionError):
            generate_chart(settings, canvas, io.StringIO(DATA))
        assert len(canvas) == 0

    @pytest.mark.parametrize("name, kind", [
        ("bar", "line"), ("line", "line"), ("scatter", "circle"), ("hbar", "line")])
    def test_data_color_without_condition(self, name, kind):
        settings = new_chart(name)
        settings.data_color = "navy"
        _, canvas = generate(settings)
        drawn = canvas.of_kind(kind)
        assert drawn
        assert all(p["color"] == "navy" for p in drawn)

    def test_condition_colors_bars(self):
        settings = new_chart("bar")
        settings.data_condition = "15,25,red"
        _, canvas = generate(settings)
        assert [b["color"] for b in canvas.of_kind("line")] == [
            "lightsteelblue", "red", "lightsteelblue"]

    def test_overrides(self):
        settings = new_chart("bar")
        settings.title = "Override"
        settings.data_minimum = True
        settings.data_format = "%.0f"
        chart, _ = generate(settings)
        assert chart.title == "Override"
        assert not chart.zero_based
        assert chart.data_format == "%.0f"

    def test_title_override_is_escaped(self):
        settings = new_chart("bar")
        settings.title = "Sales & Costs <2024>"
        chart, _ = generate(settings)
        assert chart.title == "Sales &amp; Costs &lt;2024&gt;"

    def test_automatic_axis(self):
        settings = new_chart("bar")
        settings.spec.show_axis = True
        _, canvas = generate(settings)
        ticks = [t["text"] for t in canvas.of_kind("text_end")]
        assert ticks == ["0.0", "6.0", "12.0", "18.0", "24.0", "30.0"]

    def test_explicit_axis_with_grid(self):
        settings = new_chart("bar")
        settings.yaxis_range = "0,40,10"
        settings.spec.show_axis = True
        settings.spec.show_grid = True
        _, canvas = generate(settings)
        assert len(canvas.of_kind("text_end")) == 5
        assert len([l for l in canvas.of_kind("line") if l["color"] == "gray"]) == 5

    def test_hline(self):
        settings = new_chart("line")
        settings.hline = "15,target"
        _, canvas = generate(settings)
        assert canvas.primitives[-1]["text"] == "target"

    def test_area_restores_opacity(self):
        settings = new_chart("area")
        settings.spec.area_opacity = 25
        chart, canvas = generate(settings)
        (polygon,) = canvas.of_kind("polygon")
        assert polygon["opacity"] == 25
        assert chart.opacity == 100

    def test_regression_color(self):
        settings = new_chart("scatter")
        settings.spec.show_regression = True
        settings.regression_color = "red"
        chart, canvas = generate(settings)
        (reg,) = canvas.of_kind("line")
        assert reg["color"] == "red"
        assert chart.data_color == "lightsteelblue"

    def test_title_frame_and_stagger(self):
        settings = new_chart("bar")
        settings.spec.show_title = True
        settings.spec.show_frame = True
        settings.spec.stagger_labels = True
        settings.spec.xlabel_interval = 2
        _, canvas = generate(settings)
        assert canvas.of_kind("rect")[0]["opacity"] == 10
        assert canvas.of_kind("text_mid")[0]["text"] == "Sales"
        assert canvas.of_kind("text_rotate") == []

    def test_csv_source(self):
        settings = new_chart("hbar")
        settings.read_csv = True
        settings.csv_cols = "Name,Score"
        chart, canvas = generate(settings, "Name,Age,Score\nAnn,31,7\nBob,45,9\n")
        assert chart.title == "Score"
        assert len(canvas.of_kind("line")) == 2

    def test_donut_dispatch(self):
        settings = new_chart("donut", 80, 20, 50, 90)
        settings.data_color = "std"
        _, canvas = generate(settings)
        assert len(canvas.of_kind("arc")) == 3

    def test_pgrid_dispatch(self):
        settings = new_chart("pgrid")
        assert isinstance(settings.spec, PGridChart)
        _, canvas = generate(settings, "A\t50\tred\nB\t50\tblue\n")
        assert len(canvas.of_kind("circle")) == 102

    def test_slope_with_one_record_draws_nothing(self, caplog):
        settings = new_chart("slope")
        assert isinstance(settings.spec, SlopeChart)
        with caplog.at_level(logging.ERROR):
            _, canvas = generate(settings, "A\t1\n")
        assert len(canvas) == 0
        assert "at least two" in caplog.text

    @pytest.mark.parametrize("name", ["hdot", "vdot", "wbar", "pmap", "radial"])
    def test_other_kinds_draw(self, name):
        _, canvas = generate(new_chart(name))
        assert len(canvas) > 0

    def test_unsupported_spec(self):
        with pytest.raises(SettingsError):
            generate(Settings(spec=object()))


def test_parse_hline():
    assert parse_hline("12.5,goal") == (12.5, "goal")
    assert parse_hline("7") == (7, "")
    with pytest.raises(SettingsError):
        parse_hline("goal,12")


class TestSettingsFromMapping:

    def test_mapping(self):
        settings = settings_from_mapping({
            "chart": "donut",
            "top": 80,
            "left": 50,
            "data_color": "std",
            "options": {"psize": 20, "show_values": True},
        })
        assert isinstance(settings.spec, DonutChart)
        assert settings.spec.psize == 20
        assert settings.spec.show_values
        assert settings.top == 80
        assert settings.bottom == 30
        assert settings.data_color == "std"

    def test_empty_document_is_bar_chart(self):
        assert isinstance(settings_from_mapping(None).spec, SeriesChart)

    @pytest.mark.parametrize("mapping", [
        {"chart": "sparkle"},
        {"colour": "red"},
        {"chart": "donut", "options": {"show_axis": True}},
        {"top": "high"},
        {"left": None},
        {"options": 5},
        ["not", "a", "mapping"],
    ])
    def test_invalid(self, mapping):
        with pytest.raises(SettingsError):
            settings_from_mapping(mapping)

    def test_load_settings(self, tmp_path):
        path = tmp_path / "chart.yaml"
        path.write_text(
            "chart: line\n"
            "data_condition: 0,15,red\n"
            "options:\n"
            "  show_axis: true\n"
            "  line_width: 0.5\n",
            encoding="utf-8",
        )
        settings = load_settings(str(path))
        assert settings.spec.show_line
        assert settings.spec.show_axis
        assert settings.spec.line_width == 0.5
        assert settings.data_condition == "0,15,red"

    def test_load_settings_bad_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("chart: [bar\n", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(str(path))
