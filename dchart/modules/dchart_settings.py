"""DChart Settings - Chart Specifications and Dispatch

The convenience layer above the renderers: describe a chart once, then let
generate_chart read the data and call the right renderers in order.

A chart specification is one of the *Chart dataclasses below. Each names a
chart family and carries only that family's parameters; generate_chart
dispatches on its type. Settings wraps the specification together with the
attributes every family shares (box, colors, number format, condition).

Specifications:
    SeriesChart  bar / line / scatter / area, with axis and label accessories
    HBarChart    horizontal bars
    HDotChart    dotted horizontal bars
    VDotChart    dotted vertical bars
    WBarChart    word bars
    DonutChart   donut or pie
    PMapChart    proportional map
    PGridChart   proportional grid
    RadialChart  radial markers or spokes
    SlopeChart   slope pairs

Typical Usage:
    settings = new_chart("donut", 80, 20, 50, 90)
    settings.spec.show_values = True
    canvas = Canvas()
    with open("browser.d") as f:
        chart = generate_chart(settings, canvas, f)

    settings = load_settings("chart.yaml")

Version: 1.0
Date: 2026/10/19
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum

import yaml

from dchart.modules import dchart_charts as charts
from dchart.modules.dchart_data import markup_escape, read_csv, read_tsv
from dchart.modules.dchart_primitives import (
    nice_range,
    parse_axis_range,
    parse_condition,
    zero_base,
)


logger = logging.getLogger(__name__)


class EmptyChartError(ValueError):
    """Raised when a chart is generated from input without records."""


class SettingsError(ValueError):
    """Raised when a settings mapping cannot be turned into Settings."""


###############################################################################
# CHART KINDS AND SPECIFICATIONS
###############################################################################

class ChartKind(Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    AREA = "area"
    SLOPE = "slope"
    WBAR = "wbar"
    HBAR = "hbar"
    HDOT = "hdot"
    VDOT = "vdot"
    DONUT = "donut"
    PMAP = "pmap"
    PGRID = "pgrid"
    RADIAL = "radial"

    @classmethod
    def parse(cls, name):
        """Look up a chart kind by name; "volume" is an alias for area."""
        name = name.strip().lower()
        if name == "volume":
            return cls.AREA
        return cls(name)


@dataclass
class SeriesChart:
    """Index-ordered charts: bars with optional scatter, line and area overlays."""

    show_bars: bool = True
    show_scatter: bool = False
    show_line: bool = False
    show_area: bool = False
    bar_width: float = 0.0
    line_width: float = 0.2
    dot_size: float = 0.5
    area_opacity: float = 50.0
    show_axis: bool = False
    show_grid: bool = False
    show_title: bool = False
    show_frame: bool = False
    show_regression: bool = False
    show_notes: bool = False
    stagger_labels: bool = False
    xlabel_interval: int = 1
    xlabel_rotation: float = 0.0


@dataclass
class HBarChart:
    bar_width: float = 1.0


@dataclass
class HDotChart:
    line_width: float = 0.3


@dataclass
class VDotChart:
    line_width: float = 0.5


@dataclass
class WBarChart:
    show_values: bool = False
    show_percentage: bool = False


@dataclass
class DonutChart:
    psize: float = 30.0
    pwidth: float = 3.0
    show_values: bool = False
    solid: bool = False


@dataclass
class PMapChart:
    pwidth: float = 5.0
    pmap_length: int = 20
    show_values: bool = False
    solid: bool = False


@dataclass
class PGridChart:
    rows: int = 10
    cols: int = 10
    show_values: bool = False


@dataclass
class RadialChart:
    psize: float = 4.0
    pwidth: float = 18.0
    show_spokes: bool = False
    show_values: bool = False


@dataclass
class SlopeChart:
    line_width: float = 0.2


SPEC_FOR_KIND = {
    ChartKind.BAR: SeriesChart,
    ChartKind.LINE: SeriesChart,
    ChartKind.SCATTER: SeriesChart,
    ChartKind.AREA: SeriesChart,
    ChartKind.SLOPE: SlopeChart,
    ChartKind.WBAR: WBarChart,
    ChartKind.HBAR: HBarChart,
    ChartKind.HDOT: HDotChart,
    ChartKind.VDOT: VDotChart,
    ChartKind.DONUT: DonutChart,
    ChartKind.PMAP: PMapChart,
    ChartKind.PGRID: PGridChart,
    ChartKind.RADIAL: RadialChart,
}


def default_spec(kind):
    """Return the default specification for a chart kind."""
    spec = SPEC_FOR_KIND[kind]()
    if kind is ChartKind.LINE:
        spec.show_bars, spec.show_line = False, True
    elif kind is ChartKind.SCATTER:
        spec.show_bars, spec.show_scatter = False, True
    elif kind is ChartKind.AREA:
        spec.show_bars, spec.show_area = False, True
    return spec


###############################################################################
# SETTINGS
###############################################################################

@dataclass
class Settings:
    """
    A chart specification plus the attributes shared by every chart family.

    Attributes:
        spec: One of the *Chart specification dataclasses
        top, bottom, left, right (float): Layout box
        text_size (float): Base text size
        line_spacing (float): Row spacing for horizontal and grid charts
        background_color, data_color, label_color, value_color (str): Colors;
            empty keeps the reader's default
        regression_color (str): Regression line color (data color if empty)
        title (str): Overrides the title read from the data
        data_format (str): Value label format, empty keeps "%.1f"
        data_condition (str): "low,high,color" conditional coloring
        yaxis_range (str): "min,max,step"; empty computes a rounded range
        hline (str): "value,label" horizontal reference line
        note_location (str): "l", "c" or "r"
        read_csv (bool): Read comma separated input instead of tab separated
        csv_cols (str): "LabelColumn,ValueColumn" header selector
        data_minimum (bool): Use the data minimum instead of zero as the base
    """

    spec: object = field(default_factory=SeriesChart)
    top: float = 90.0
    bottom: float = 30.0
    left: float = 10.0
    right: float = 90.0
    text_size: float = 1.5
    line_spacing: float = 2.4
    background_color: str = "white"
    data_color: str = "lightsteelblue"
    label_color: str = "rgb(75,75,75)"
    value_color: str = ""
    regression_color: str = ""
    title: str = ""
    data_format: str = ""
    data_condition: str = ""
    yaxis_range: str = ""
    hline: str = ""
    note_location: str = "c"
    read_csv: bool = False
    csv_cols: str = ""
    data_minimum: bool = False

    @property
    def kind_name(self):
        return type(self.spec).__name__


def new_chart(chart_type, top=0, bottom=0, left=0, right=0):
    """
    Initialize the settings for a chart type.

    Non-positive box values fall back to top 90, bottom 30, left 10,
    right 90. An unknown chart type falls back to a bar chart.

    Args:
        chart_type (str): bar, line, scatter, area (or volume), slope, wbar,
            hbar, hdot, vdot, donut, pmap, pgrid, radial
        top, bottom, left, right (float): Layout box

    Returns:
        Settings: Settings with the kind's default specification
    """
    try:
        kind = ChartKind.parse(chart_type)
    except ValueError:
        logger.warning("unknown chart type %r, making a bar chart", chart_type)
        kind = ChartKind.BAR

    return Settings(
        spec=default_spec(kind),
        top=top if top > 0 else 90.0,
        bottom=bottom if bottom > 0 else 30.0,
        left=left if left > 0 else 10.0,
        right=right if right > 0 else 90.0,
    )


###############################################################################
# GENERATION
###############################################################################

def apply_settings(chart, settings):
    """Copy the layout, colors and format of settings onto a chart."""
    chart.top = settings.top
    chart.bottom = settings.bottom
    chart.left = settings.left
    chart.right = settings.right
    chart.text_size = settings.text_size
    chart.zero_based = not settings.data_minimum
    if settings.data_color:
        chart.data_color = settings.data_color
    if settings.label_color:
        chart.label_color = settings.label_color
    if settings.value_color:
        chart.value_color = settings.value_color
    if settings.data_format:
        chart.data_format = settings.data_format
    if settings.title:
        chart.title = markup_escape(settings.title)


def parse_hline(s):
    """
    Parse a "value,label" reference line.

    Raises:
        SettingsError: If the value is not a number
    """
    value, _, label = s.partition(",")
    try:
        return float(value), label
    except ValueError:
        raise SettingsError("{} bad horizontal line, expected value,label".format(s))


def generate_chart(settings, canvas, source):
    """
    Read data from source and draw the chart described by settings.

    Args:
        settings (Settings): What to draw
        canvas (Canvas): Output surface
        source: Text stream with TSV or CSV data

    Returns:
        ChartBox: The chart as read and configured

    Raises:
        EmptyChartError: If the source has no records
        ConditionError: If settings.data_condition is malformed
        SettingsError: If settings.hline is malformed
    """
    if settings.read_csv:
        chart = read_csv(source, settings.csv_cols)
    else:
        chart = read_tsv(source)
    if not chart.records:
        raise EmptyChartError("no data to chart")

    clow, chigh, condcolor = parse_condition(settings.data_condition)
    hline = parse_hline(settings.hline) if settings.hline else None
    apply_settings(chart, settings)
    if not condcolor:
        # an empty condition matches every value
        condcolor = chart.data_color

    spec = settings.spec
    logger.debug("generating %s with %d records", type(spec).__name__, len(chart.records))
    ls = settings.line_spacing

    if isinstance(spec, SeriesChart):
        _series(canvas, chart, settings, spec, (clow, chigh, condcolor), hline)
    elif isinstance(spec, HBarChart):
        charts.conditional_hbar(canvas, chart, spec.bar_width, ls, clow, chigh, condcolor)
    elif isinstance(spec, HDotChart):
        charts.hdot(canvas, chart, spec.line_width, ls)
    elif isinstance(spec, VDotChart):
        charts.vdot(canvas, chart, spec.line_width)
    elif isinstance(spec, WBarChart):
        charts.wbar(canvas, chart, ls, spec.show_values, spec.show_percentage)
    elif isinstance(spec, DonutChart):
        charts.donut(canvas, chart, spec.psize, spec.pwidth, spec.show_values, spec.solid)
    elif isinstance(spec, PMapChart):
        charts.pmap(canvas, chart, spec.pwidth, spec.pmap_length, spec.show_values, spec.solid)
    elif isinstance(spec, PGridChart):
        charts.pgrid(canvas, chart, ls, spec.rows, spec.cols, spec.show_values)
    elif isinstance(spec, RadialChart):
        charts.radial(canvas, chart, spec.psize, spec.pwidth, spec.show_spokes, spec.show_values)
    elif isinstance(spec, SlopeChart):
        charts.slope(canvas, chart, spec.line_width)
    else:
        raise SettingsError("unsupported chart specification {}".format(type(spec).__name__))
    return chart


def _series(canvas, chart, settings, spec, condition, hline):
    """Draw a series chart and its accessories, in painter's order (internal)."""
    clow, chigh, condcolor = condition

    if spec.show_bars:
        bar_width = spec.bar_width
        if bar_width == 0:
            bar_width = (chart.right - chart.left) / (len(chart.records) + 1)
        charts.conditional_bar(canvas, chart, bar_width, clow, chigh, condcolor)
    if spec.show_scatter:
        charts.conditional_scatter(canvas, chart, spec.dot_size, clow, chigh, condcolor)
    if spec.show_line:
        charts.conditional_line(canvas, chart, spec.line_width, clow, chigh, condcolor)
    if spec.show_area:
        opacity = chart.opacity
        chart.opacity = spec.area_opacity
        charts.area(canvas, chart)
        chart.opacity = opacity
    if spec.show_regression:
        color = chart.data_color
        chart.data_color = settings.regression_color or color
        charts.regression_line(canvas, chart, spec.line_width)
        chart.data_color = color
    if spec.show_notes:
        charts.notes(canvas, chart, settings.note_location)

    if spec.show_title:
        chart.data_color = "black"
        charts.ctitle(canvas, chart, 5)
    if spec.show_frame:
        charts.frame(canvas, chart, 10)
    if spec.xlabel_interval > 0:
        if spec.stagger_labels:
            charts.x_stagger_label(canvas, chart, spec.xlabel_interval)
        else:
            charts.x_rotate_label(canvas, chart, spec.xlabel_rotation, spec.xlabel_interval)
    if spec.show_axis:
        if settings.yaxis_range:
            ymin, ymax, ystep = parse_axis_range(settings.yaxis_range)
        else:
            ymin, ymax, ystep = nice_range(zero_base(chart.zero_based, chart.min_value),
                                           chart.max_value, 5)
        charts.y_axis(canvas, chart, ymin, ymax, ystep, spec.show_grid)
    if hline is not None:
        value, label = hline
        charts.line_note(canvas, chart, value, label, chart.text_size)


###############################################################################
# YAML SETTINGS
###############################################################################

_BOX_KEYS = ("top", "bottom", "left", "right")


def settings_from_mapping(mapping):
    """
    Build Settings from a plain mapping.

    Keys:
        chart: chart type name (default "bar")
        top, bottom, left, right: layout box
        options: mapping applied to the chart specification
        any other Settings attribute, e.g. data_color, data_condition

    Args:
        mapping (dict): Parsed settings document

    Returns:
        Settings: Populated settings

    Raises:
        SettingsError: On an unknown chart type or key
    """
    if mapping is None:
        mapping = {}
    if not isinstance(mapping, dict):
        raise SettingsError("settings must be a mapping, got {}".format(type(mapping).__name__))

    mapping = dict(mapping)
    chart_type = str(mapping.pop("chart", "bar"))
    try:
        ChartKind.parse(chart_type)
    except ValueError:
        raise SettingsError("unknown chart type {!r}".format(chart_type))

    box = {}
    for k in _BOX_KEYS:
        if k in mapping:
            value = mapping.pop(k)
            try:
                box[k] = float(value)
            except (TypeError, ValueError):
                raise SettingsError("{} must be a number, got {!r}".format(k, value))
    settings = new_chart(chart_type, **box)

    options = mapping.pop("options", None) or {}
    if not isinstance(options, dict):
        raise SettingsError("options must be a mapping, got {}".format(type(options).__name__))
    spec_fields = {f.name for f in dataclasses.fields(settings.spec)}
    unknown = set(options) - spec_fields
    if unknown:
        raise SettingsError("unknown {} options: {}".format(
            settings.kind_name, ", ".join(sorted(unknown))))
    settings.spec = dataclasses.replace(settings.spec, **options)

    settings_fields = {f.name for f in dataclasses.fields(Settings)} - {"spec"}
    unknown = set(mapping) - settings_fields
    if unknown:
        raise SettingsError("unknown settings: {}".format(", ".join(sorted(unknown))))
    for key, value in mapping.items():
        setattr(settings, key, value)
    return settings


def load_settings(path):
    """
    Load Settings from a YAML file.

    Example file:
        chart: donut
        top: 80
        left: 50
        data_color: std
        options:
          psize: 30
          show_values: true

    Raises:
        SettingsError: If the document is not valid settings
        OSError: If the file cannot be read
    """
    with open(path, encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError("cannot parse {}: {}".format(path, e))
    logger.debug("loaded settings from %s", path)
    return settings_from_mapping(document)
