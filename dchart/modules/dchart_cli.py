"""DChart CLI - Command Line Chart Generation

Reads tab or comma separated data and writes the chart as SVG (and
optionally WKT).

Usage:
    dchart --chart bar --axis --grid data.d -o bar.svg
    dchart --chart donut --psize 30 --pwidth 5 --values browser.d > donut.svg
    dchart --csv --csvcols Date,Close --line --nobar AAPL.csv -o aapl.svg
    dchart --config chart.yaml data.d -o chart.svg --wkt chart.wkt

Settings come from --config (YAML) when given; command line flags override
them.

Version: 1.0
Date: 2026/10/19
"""

import argparse
import dataclasses
import logging
import sys

from dchart.modules.dchart_canvas import Canvas
from dchart.modules.dchart_dataviz import render_svg, save_svg
from dchart.modules.dchart_geometry import construct_wkt
from dchart.modules.dchart_settings import (
    ChartKind,
    generate_chart,
    load_settings,
    new_chart,
)


logger = logging.getLogger(__name__)

# Flags that set Settings attributes directly
_SETTINGS_FLAGS = {
    "top": "top",
    "bottom": "bottom",
    "left": "left",
    "right": "right",
    "textsize": "text_size",
    "linespacing": "line_spacing",
    "bgcolor": "background_color",
    "datacolor": "data_color",
    "labelcolor": "label_color",
    "valuecolor": "value_color",
    "rlcolor": "regression_color",
    "title": "title",
    "datafmt": "data_format",
    "condition": "data_condition",
    "yrange": "yaxis_range",
    "hline": "hline",
    "notes": "note_location",
    "csvcols": "csv_cols",
}

_TOGGLE_FLAGS = {
    "csv": "read_csv",
    "datamin": "data_minimum",
}

# Flags that set chart specification fields, applied when the field exists
_SPEC_FLAGS = {
    "barwidth": "bar_width",
    "linewidth": "line_width",
    "dotsize": "dot_size",
    "psize": "psize",
    "pwidth": "pwidth",
    "pmaplength": "pmap_length",
    "areaop": "area_opacity",
    "xlabel": "xlabel_interval",
    "xrotate": "xlabel_rotation",
    "rows": "rows",
    "cols": "cols",
}

_SPEC_TOGGLES = {
    "line": "show_line",
    "scatter": "show_scatter",
    "area": "show_area",
    "axis": "show_axis",
    "grid": "show_grid",
    "frame": "show_frame",
    "showtitle": "show_title",
    "regression": "show_regression",
    "shownotes": "show_notes",
    "stagger": "stagger_labels",
    "values": "show_values",
    "pct": "show_percentage",
    "solid": "solid",
    "spokes": "show_spokes",
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="dchart",
        description="Make charts from tab or comma separated data.",
    )
    parser.add_argument("file", nargs="?", help="data file (default: stdin)")
    parser.add_argument("--chart", choices=[k.value for k in ChartKind] + ["volume"],
                        help="chart type (default: bar)")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("-o", "--output", help="SVG output file (default: stdout)")
    parser.add_argument("--wkt", help="also write the drawing as WKT to this file")
    parser.add_argument("--width", type=int, default=800, help="SVG width in pixels")
    parser.add_argument("--height", type=int, default=600, help="SVG height in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    box = parser.add_argument_group("layout")
    for name in ("top", "bottom", "left", "right", "textsize", "linespacing"):
        box.add_argument("--" + name, type=float)

    attrs = parser.add_argument_group("attributes")
    for name in ("bgcolor", "datacolor", "labelcolor", "valuecolor", "rlcolor",
                 "title", "datafmt", "csvcols"):
        attrs.add_argument("--" + name)
    attrs.add_argument("--condition", help="low,high,color conditional coloring")
    attrs.add_argument("--yrange", help="min,max,step for the y axis")
    attrs.add_argument("--hline", help="value,label horizontal reference line")
    attrs.add_argument("--notes", choices=["l", "c", "r"], help="note alignment")

    measures = parser.add_argument_group("measures")
    for name in ("barwidth", "linewidth", "dotsize", "psize", "pwidth", "areaop", "xrotate"):
        measures.add_argument("--" + name, type=float)
    for name in ("pmaplength", "xlabel", "rows", "cols"):
        measures.add_argument("--" + name, type=int)

    toggles = parser.add_argument_group("toggles")
    for name in list(_TOGGLE_FLAGS) + list(_SPEC_TOGGLES):
        toggles.add_argument("--" + name, action="store_true", default=None)
    toggles.add_argument("--nobar", action="store_true", help="hide bars in series charts")
    return parser


def _set_spec(spec, name, value):
    if value is None:
        return
    fields = {f.name for f in dataclasses.fields(spec)}
    if name in fields:
        setattr(spec, name, value)
    else:
        logger.debug("%s has no %s, ignoring", type(spec).__name__, name)


def settings_from_args(args):
    """
    Build Settings from parsed arguments.

    Args:
        args (argparse.Namespace): Parsed command line

    Returns:
        Settings: Settings from --config or --chart, overridden by flags
    """
    if args.config:
        settings = load_settings(args.config)
        if args.chart:
            settings.spec = new_chart(args.chart).spec
    else:
        settings = new_chart(args.chart or "bar")

    for flag, attr in _SETTINGS_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            setattr(settings, attr, value)
    for flag, attr in _TOGGLE_FLAGS.items():
        if getattr(args, flag):
            setattr(settings, attr, True)

    spec = settings.spec
    for flag, name in _SPEC_FLAGS.items():
        _set_spec(spec, name, getattr(args, flag))
    for flag, name in _SPEC_TOGGLES.items():
        if getattr(args, flag):
            _set_spec(spec, name, True)
    if args.nobar:
        _set_spec(spec, "show_bars", False)
    return settings


def run(args):
    """Generate the chart described by args; returns the process exit code."""
    settings = settings_from_args(args)
    canvas = Canvas()

    if args.file:
        with open(args.file, encoding="utf-8", newline="") as f:
            chart = generate_chart(settings, canvas, f)
    else:
        chart = generate_chart(settings, canvas, sys.stdin)
    logger.info("%s: %d records, %d primitives", chart.title or "chart",
                len(chart.records), len(canvas))

    svg = render_svg(canvas.primitives, args.width, args.height,
                     background=settings.background_color or None)
    if args.output:
        save_svg(svg, args.output)
    else:
        sys.stdout.write(svg)

    if args.wkt:
        with open(args.wkt, "w", encoding="utf-8") as f:
            f.write(construct_wkt(canvas.primitives) + "\n")
        logger.info("wrote %s", args.wkt)
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        return run(args)
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
