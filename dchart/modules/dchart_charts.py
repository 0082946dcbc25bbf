"""DChart Charts - Chart Renderers

One function per chart type. Each reads a ChartBox and emits primitive draw
calls on a Canvas; none of them modify the chart. Charts are composed by
calling several renderers on the same canvas, moving or recoloring the
ChartBox between calls.

Module Structure:
    1. Coordinate Mapping: CoordinateMapper
    2. Sequential Charts: bar, line, scatter, area, vdot (+ conditional variants)
    3. Horizontal Charts: hbar, conditional_hbar, hdot, wbar
    4. Proportional Charts: pmap, donut, radial, pgrid
    5. Slope Chart: slope
    6. Axes and Labels: y_axis, x_label, x_stagger_label, x_rotate_label, values
    7. Accessories: regression_line, ctitle, frame, notes, line_note, grid
    8. Dotted Lines and Spokes: dotted_vline, dotted_hline, spokes

Typical Usage:
    from dchart.modules import dchart_charts as charts
    from dchart.modules.dchart_canvas import Canvas
    from dchart.modules.dchart_data import open_chart

    chart = open_chart("AAPL.d")
    canvas = Canvas()
    charts.ctitle(canvas, chart, 4)
    charts.bar(canvas, chart, 3)
    chart.data_color = "blue"
    charts.line(canvas, chart, 0.05)
    chart.data_format = "$ %.0f"
    charts.y_axis(canvas, chart, 0, 300, 50, True)

Sequential charts place record i at map_range(i, 0, n-1, left, right) and
its value at map_range(value, effective_min, max_value, bottom, top), where
effective_min is 0 for zero based charts and min_value otherwise.

Version: 1.0
Date: 2026/10/19
"""

import logging
import math

from dchart.modules.dchart_primitives import (
    FULL_CIRCLE,
    TOP_CLOCK,
    conditional_color,
    data_slope,
    data_sum,
    format_number,
    map_range,
    pct,
    polar,
    std_color,
    zero_base,
)


logger = logging.getLogger(__name__)

DOT_LINE_COLOR = "lightgray"
WBAR_OPACITY = 30.0
TRANSPARENCY = 50.0
PMAP_GAP = 0.10

# Slope chart skips between pairs, as fractions of the box width and height
SLOPE_HSKIP = 0.60
SLOPE_VSKIP = 1.40


###############################################################################
# COORDINATE MAPPING
###############################################################################

class CoordinateMapper:
    """
    Maps record indices and values into a chart's box.

    Applies the zero-basing policy once so every renderer sharing a box
    agrees on the value axis.

    Attributes:
        count (int): Number of records
        y_min (float): Effective value axis minimum
        y_max (float): Value axis maximum

    Example:
        >>> mapper = CoordinateMapper(chart)
        >>> x = mapper.map_x(2)
        >>> y = mapper.map_y(chart.records[2].value)
    """

    def __init__(self, chart):
        self.chart = chart
        self.count = len(chart.records)
        self.y_min = zero_base(chart.zero_based, chart.min_value)
        self.y_max = chart.max_value
        self._index_warned = False

        if self.count == 0:
            logger.warning("chart %r has no records", chart.title)
        elif self.y_max == self.y_min:
            logger.warning("chart %r has a zero-width value range [%s, %s]",
                           chart.title, self.y_min, self.y_max)

    def map_x(self, index):
        """Map a record index to an x coordinate across the box."""
        if self.count < 2 and not self._index_warned:
            self._index_warned = True
            logger.warning("chart %r: index axis needs at least two records, got %d",
                           self.chart.title, self.count)
        return map_range(index, 0, self.count - 1, self.chart.left, self.chart.right)

    def map_y(self, value):
        """Map a value to a y coordinate up the box."""
        return map_range(value, self.y_min, self.y_max, self.chart.bottom, self.chart.top)

    def map_h(self, value):
        """Map a value to an x coordinate across the box (horizontal charts)."""
        return map_range(value, self.y_min, self.y_max, self.chart.left, self.chart.right)

    def map_point(self, index, value):
        """Map a (record index, value) pair to (x, y)."""
        return self.map_x(index), self.map_y(value)


###############################################################################
# SEQUENTIAL CHARTS
###############################################################################

def bar(canvas, chart, size):
    """
    Make a (column) bar chart: one vertical line per record.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        size (float): Bar width
    """
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        canvas.line(x, chart.bottom, x, y, size, chart.data_color, chart.opacity)


def conditional_bar(canvas, chart, size, cmin, cmax, color):
    """Make a bar chart coloring values within [cmin, cmax] with color."""
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        c = conditional_color(r.value, cmin, cmax, color, chart.data_color)
        canvas.line(x, chart.bottom, x, y, size, c, chart.opacity)


def line(canvas, chart, size):
    """Make a line chart: one segment per adjacent pair of records."""
    mapper = CoordinateMapper(chart)
    records = chart.records
    for i in range(len(records) - 1):
        x1, y1 = mapper.map_point(i, records[i].value)
        x2, y2 = mapper.map_point(i + 1, records[i + 1].value)
        canvas.line(x1, y1, x2, y2, size, chart.data_color, chart.opacity)


def conditional_line(canvas, chart, size, cmin, cmax, color):
    """
    Make a line chart with conditional coloring.

    Each segment takes its color from the value at its starting point.
    """
    mapper = CoordinateMapper(chart)
    records = chart.records
    for i in range(len(records) - 1):
        v1 = records[i].value
        x1, y1 = mapper.map_point(i, v1)
        x2, y2 = mapper.map_point(i + 1, records[i + 1].value)
        c = conditional_color(v1, cmin, cmax, color, chart.data_color)
        canvas.line(x1, y1, x2, y2, size, c, chart.opacity)


def scatter(canvas, chart, size):
    """Make a scatter chart: one circle per record."""
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        canvas.circle(x, y, size, chart.data_color, chart.opacity)


def conditional_scatter(canvas, chart, size, cmin, cmax, color):
    """Make a scatter chart coloring values within [cmin, cmax] with color."""
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        c = conditional_color(r.value, cmin, cmax, color, chart.data_color)
        canvas.circle(x, y, size, c, chart.opacity)


def area(canvas, chart):
    """
    Make an area chart.

    The polygon runs (left, bottom), the mapped points, (right, bottom), so
    it is closed along the baseline whatever the first and last values are.
    """
    mapper = CoordinateMapper(chart)
    xs = [chart.left]
    ys = [chart.bottom]
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        xs.append(x)
        ys.append(y)
    xs.append(chart.right)
    ys.append(chart.bottom)
    canvas.polygon(xs, ys, chart.data_color, chart.opacity)


def vdot(canvas, chart, size):
    """Make a vertical dotted bar chart, capped with a circle of the given size."""
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        dotted_vline(canvas, x, chart.bottom, y, 0.25, 1, chart.data_color)
        canvas.circle(x, y, size, chart.data_color, chart.opacity)


###############################################################################
# HORIZONTAL CHARTS
###############################################################################

def hbar(canvas, chart, size, linespacing):
    """
    Make a horizontal bar chart, one row per record from the top down.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        size (float): Bar thickness
        linespacing (float): Distance between rows
    """
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    y = chart.top
    for r in chart.records:
        canvas.text_end(chart.left - textsize, y - size / 2, r.label, "sans",
                        textsize, chart.label_color)
        x2 = mapper.map_h(r.value)
        canvas.line(chart.left, y, x2, y, size, chart.data_color, chart.opacity)
        canvas.text(x2 + (textsize / 2), y - size / 2,
                    format_number(r.value, chart.data_format), "mono",
                    textsize * 0.75, chart.value_color)
        y -= linespacing


def conditional_hbar(canvas, chart, size, linespacing, cmin, cmax, color):
    """Make a horizontal bar chart coloring values within [cmin, cmax] with color."""
    mapper = CoordinateMapper(chart)
    y = chart.top
    for r in chart.records:
        canvas.text_end(chart.left - 2, y - size / 2, r.label, "sans",
                        chart.text_size, chart.label_color)
        x2 = mapper.map_h(r.value)
        c = conditional_color(r.value, cmin, cmax, color, chart.data_color)
        canvas.line(chart.left, y, x2, y, size, c, chart.opacity)
        y -= linespacing


def hdot(canvas, chart, size, linespacing):
    """Make a dotted horizontal bar chart."""
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    y = chart.top
    for r in chart.records:
        canvas.text_end(chart.left - textsize, y - size / 2, r.label, "sans",
                        textsize, chart.label_color)
        x2 = mapper.map_h(r.value)
        canvas.text(x2 + textsize / 2, y - size / 2,
                    format_number(r.value, chart.data_format), "mono",
                    textsize * 0.75, chart.value_color)
        dotted_hline(canvas, chart.left, y, x2, size, size * 4, chart.data_color)
        y -= linespacing


def wbar(canvas, chart, linespacing, showval, showpct):
    """
    Make a word bar chart: each label sits on a translucent bar.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        linespacing (float): Distance between rows
        showval (bool): Show values left of the bars
        showpct (bool): Append each value's percentage of the total
    """
    textsize = chart.text_size
    hts = textsize / 2
    total = data_sum(chart.values) if showpct else 0.0
    if showpct and total == 0:
        logger.warning("chart %r: percentages of a zero total", chart.title)

    mapper = CoordinateMapper(chart)
    left = chart.left
    y = chart.top
    for r in chart.records:
        canvas.text(left + hts, y, r.label, "sans", textsize, chart.label_color)
        bv = mapper.map_h(r.value)
        canvas.line(left + hts, y + hts, bv, y + hts, textsize * 1.5,
                    chart.data_color, WBAR_OPACITY)
        if showval:
            s = format_number(r.value, chart.data_format)
            if showpct:
                share = 100 * r.value / total if total else float('nan')
                s += " ({}%)".format(format_number(share, chart.data_format))
                canvas.text_end(left, y + (hts / 2), s, "mono", textsize, chart.value_color)
            else:
                canvas.text_end(left, y + (hts / 2), s, "mono", textsize, chart.data_color)
        y -= linespacing


###############################################################################
# PROPORTIONAL CHARTS
###############################################################################

def _shares(chart):
    """Percentages of the total, warning once when the total is zero (internal)."""
    values = chart.values
    if values and data_sum(values) == 0:
        logger.warning("chart %r: values sum to zero", chart.title)
    return pct(values)


def pmap(canvas, chart, pwidth, pmlen, showvalues, solid):
    """
    Make a proportional map: contiguous bands sized by share of the total.

    A band's percentage label moves above the band, joined by a dotted
    guide, when its share is under 3% or its label is longer than pmlen.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout; only top, left, right are used
        pwidth (float): Band thickness
        pmlen (float): Longest label kept inside a band
        showvalues (bool): Show record labels above the bands
        solid (bool): Draw record colors at full opacity
    """
    top = chart.top
    textsize = chart.text_size
    bl = (chart.right - chart.left) / 100.0
    x = chart.left
    for i, p in enumerate(_shares(chart)):
        r = chart.records[i]
        bx = p * bl
        if p < 3 or len(r.label) > pmlen:
            ty = top - pwidth * 1.2
            canvas.line(x + (bx / 2), ty + (textsize * 1.5), x + (bx / 2), top, 0.1,
                        DOT_LINE_COLOR)
        else:
            ty = top
        linecolor, lineop = std_color(i, r.note, chart.data_color, p, solid)
        canvas.line(x, top, bx + x, top, pwidth, linecolor, lineop)
        textcolor = "white" if lineop == 100 else "black"

        if showvalues:
            canvas.text_mid(x + (bx / 2), ty + pwidth, r.label, "sans",
                            textsize * 0.75, chart.value_color)
        canvas.text_mid(x + (bx / 2), ty - (textsize / 2),
                        format_number(p, chart.data_format) + "%", "sans",
                        textsize, textcolor)
        x += bx - PMAP_GAP


def donut(canvas, chart, psize, pwidth, showval, solid):
    """
    Make a donut (or pie) chart.

    Each record sweeps (share / 100) * 360 degrees, starting where the
    previous one ended. A stroke width near the radius gives a pie.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data; the center is (left, top - psize/2)
        psize (float): Outer diameter
        pwidth (float): Ring stroke width
        showval (bool): Label each segment with its share
        solid (bool): Draw record colors at full opacity
    """
    left = chart.left if chart.left >= 0 else 50.0
    dx = left
    dy = chart.top - (psize / 2)

    a1 = 0.0
    for i, p in enumerate(_shares(chart)):
        r = chart.records[i]
        a2 = a1 + (p / 100) * 360.0
        mid = (a1 + a2) / 2

        color, op = std_color(i, r.note, chart.data_color, p, solid)
        canvas.arc(dx, dy, psize, psize, pwidth, a1, a2, color, op)
        if showval:
            tx, ty = polar(dx, dy, psize * 0.85, math.radians(mid))
            canvas.text_mid(tx, ty, "{} {}%".format(r.label, format_number(p, chart.data_format)),
                            "sans", chart.text_size, "")
        a1 = a2


def radial(canvas, chart, psize, pwidth, showspokes, showvalues):
    """
    Make a radial chart: one marker per record around a circle.

    Records are spaced evenly clockwise from 12 o'clock regardless of value;
    the value sets the marker size, or the number of spokes drawn.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data; the center is (left, top)
        psize (float): Largest marker size
        pwidth (float): Radius of the ring of markers
        showspokes (bool): Draw int(value) spokes instead of a circle
        showvalues (bool): Show values at the markers
    """
    textsize = chart.text_size
    dx = chart.left if chart.left >= 0 else 50.0
    dy = chart.top

    canvas.circle(dx, dy, pwidth * 2, "silver", 10)
    if not chart.records:
        logger.warning("chart %r has no records", chart.title)
        return

    t = TOP_CLOCK
    step = FULL_CIRCLE / len(chart.records)
    for r in chart.records:
        cv = map_range(r.value, 0, chart.max_value, 2, psize)
        px, py = polar(dx, dy, pwidth, t)
        tx, ty = polar(dx, dy, pwidth + (psize / 2) + (textsize * 2), t)
        color = r.note if r.note else chart.data_color

        canvas.text_mid(tx, ty, r.label, "sans", textsize / 2, "black")
        if showvalues:
            canvas.text_mid(px, py - textsize / 3, format_number(r.value, chart.data_format),
                            "mono", textsize, chart.label_color)
        if showspokes:
            count = int(r.value) if math.isfinite(r.value) else 0
            spokes(canvas, px, py, psize / 2, 0.05, count, color)
        else:
            canvas.circle(px, py, cv, color, TRANSPARENCY)
            canvas.line(tx, ty, px, py, 0.05, "gray", 50)
        t -= step


def pgrid(canvas, chart, linespacing, rows, cols, showvalues):
    """
    Make a proportional grid of 100 cells with a legend below it.

    Each record fills floor(share) cells, row by row, in the record's note
    color. Cells left over by the rounding stay uncolored. A grid that is
    not exactly 100 cells draws nothing.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data; notes carry the cell colors
        linespacing (float): Cell spacing
        rows (int): Grid rows
        cols (int): Grid columns
        showvalues (bool): Show raw values in the legend
    """
    textsize = chart.text_size
    top = chart.top
    left = chart.left if chart.left >= 0 else 30.0

    if rows * cols != 100:
        logger.debug("pgrid needs rows*cols == 100, got %dx%d", rows, cols)
        return

    shares = [math.floor(p) if math.isfinite(p) else 0 for p in _shares(chart)]

    cells = [""] * 100
    cb = 0
    for r, share in zip(chart.records, shares):
        for _ in range(int(share)):
            if cb >= 100:
                break
            cells[cb] = r.note
            cb += 1

    n = 0
    y = top
    for _ in range(rows):
        x = left
        for _ in range(cols):
            canvas.circle(x, y, textsize, cells[n])
            n += 1
            x += linespacing
        y -= linespacing

    cx = ((cols - 1) * linespacing) + linespacing / 2
    for r, share in zip(chart.records, shares):
        y -= linespacing * 1.2
        canvas.circle(left, y, textsize, r.note)
        canvas.text(left + textsize, y - (textsize / 2),
                    "{} ({}%)".format(r.label, format_number(share, chart.data_format)),
                    "sans", textsize, "")
        if showvalues:
            canvas.text_end(left + cx, y - (textsize / 2),
                            format_number(r.value, chart.data_format), "sans",
                            textsize, chart.value_color)


###############################################################################
# SLOPE CHART
###############################################################################

def slope(canvas, chart, linewidth):
    """
    Make a slope chart from consecutive pairs of records.

    Each pair gets two vertical axes joined by a sloped segment. Pairs step
    right by the box width plus 60% of it, wrapping to a new row (down by
    the box height plus 40% of it) once past the right edge of the canvas.
    The note of the first record of a pair titles it.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        linewidth (float): Width of the sloped segment

    Returns:
        bool: False when there were fewer than two records and nothing was drawn
    """
    records = chart.records
    if len(records) < 2:
        logger.error("slope charts need at least two data points, got %d", len(records))
        return False

    textsize = chart.text_size
    ymin = zero_base(chart.zero_based, chart.min_value)
    top = chart.top
    bottom = chart.bottom
    left = chart.left
    right = chart.right
    datacolor = chart.data_color
    lw = linewidth / 2
    lsize = textsize * 0.75
    tsize = textsize * 1.5
    w = right - left
    h = top - bottom

    hskip = w * SLOPE_HSKIP
    vskip = h * SLOPE_VSKIP

    x1 = left
    x2 = right
    for i in range(0, len(records) - 1, 2):
        first, second = records[i], records[i + 1]
        if first.label:
            canvas.text_mid(x1 + (w / 2), top + (textsize / 2), first.note, "sans",
                            tsize, chart.label_color)
        v1y = map_range(first.value, ymin, chart.max_value, bottom, top)
        v2y = map_range(second.value, ymin, chart.max_value, bottom, top)
        canvas.line(x1, bottom, x1, top, lw, "black")
        canvas.line(x2, bottom, x2, top, lw, "black")
        canvas.circle(x1, v1y, textsize, datacolor)
        canvas.circle(x2, v2y, textsize, datacolor)
        canvas.line(x1, v1y, x2, v2y, linewidth, datacolor)
        canvas.text_mid(x1, bottom - 2, first.label, "sans", textsize, chart.label_color)
        canvas.text_mid(x2, bottom - 2, second.label, "sans", textsize, chart.label_color)

        # the axis maximum only means something on a zero based scale
        if chart.zero_based:
            canvas.text_end(x1 - 1, top, format_number(chart.max_value, chart.data_format),
                            "sans", lsize, chart.label_color)
        canvas.text_end(x1 - 1, v1y, format_number(first.value, chart.data_format),
                        "sans", lsize, chart.label_color)
        canvas.text(x2 + 1, v2y, format_number(second.value, chart.data_format),
                    "sans", lsize, chart.label_color)
        x1 += w + hskip
        x2 += w + hskip
        if x2 > 100:
            x1 = left
            x2 = right
            top -= vskip
            bottom -= vskip
    return True


###############################################################################
# AXES AND LABELS
###############################################################################

def y_axis(canvas, chart, minimum, maximum, step, gridlines):
    """
    Make the value axis labels from minimum to maximum by step.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        minimum (float): First tick value
        maximum (float): Last tick value (inclusive)
        step (float): Tick step; nothing is drawn unless positive
        gridlines (bool): Draw a horizontal gridline across the box per tick
    """
    if not step > 0:
        logger.warning("y axis step must be positive, got %s", step)
        return
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    v = minimum
    while v <= maximum:
        y = mapper.map_y(v)
        if gridlines:
            canvas.line(chart.left, y, chart.right, y, 0.05, "gray")
        canvas.text_end(chart.left - 2, y - (textsize / 3),
                        format_number(v, chart.data_format), "sans", textsize,
                        chart.label_color, chart.opacity)
        v += step


def x_label(canvas, chart, n):
    """Make x axis labels for every n-th record."""
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        if i % n == 0:
            canvas.text_mid(mapper.map_x(i), chart.bottom - (textsize * 2), r.label,
                            "sans", textsize, chart.label_color, chart.opacity)


def x_stagger_label(canvas, chart, n):
    """
    Make staggered x axis labels.

    Every n-th label sits on the first row; the rest drop to a second row.
    """
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        if i % n == 0:
            y = chart.bottom - (textsize * 2)
        else:
            y = chart.bottom - (textsize * 4)
        canvas.text_mid(mapper.map_x(i), y, r.label, "sans", textsize,
                        chart.label_color, chart.opacity)


def x_rotate_label(canvas, chart, angle, n):
    """Make x axis labels for every n-th record, rotated by angle degrees."""
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        if i % n == 0:
            canvas.text_rotate(mapper.map_x(i), chart.bottom - (textsize * 2), r.label, "",
                               "sans", angle, textsize, chart.label_color, chart.opacity)


def values(canvas, chart, offset):
    """Place each record's formatted value offset above its point."""
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        canvas.text_mid(x, y + offset, format_number(r.value, chart.data_format), "mono",
                        chart.text_size, chart.value_color, chart.opacity)


###############################################################################
# ACCESSORIES
###############################################################################

def regression_line(canvas, chart, size):
    """
    Make a least squares regression line over (index, value) pairs.

    The segment spans the first to the last record.
    """
    if not chart.records:
        logger.warning("chart %r has no records", chart.title)
        return
    x = [float(i) for i in range(len(chart.records))]
    y = chart.values
    m, b = data_slope(x, y)
    mapper = CoordinateMapper(chart)
    x1, x2 = x[0], x[-1]
    rx1, ry1 = mapper.map_point(x1, m * x1 + b)
    rx2, ry2 = mapper.map_point(x2, m * x2 + b)
    canvas.line(rx1, ry1, rx2, ry2, size, chart.data_color, chart.opacity)


def ctitle(canvas, chart, offset):
    """Make a centered title offset above the box."""
    midx = chart.left + ((chart.right - chart.left) / 2)
    canvas.text_mid(midx, chart.top + offset, chart.title, "sans", chart.text_size * 2,
                    chart.data_color, chart.opacity)


def frame(canvas, chart, opacity):
    """Make a filled rectangle covering the box at opacity (0-100)."""
    w = chart.right - chart.left
    h = chart.top - chart.bottom
    canvas.rect(chart.left + w / 2, chart.bottom + h / 2, w, h, chart.data_color, opacity)


def notes(canvas, chart, position):
    """
    Place each record's note at its point.

    Args:
        canvas (Canvas): Output surface
        chart (ChartBox): Data and layout
        position (str): "l" left, "r" right, anything else centered
    """
    textsize = chart.text_size
    mapper = CoordinateMapper(chart)
    for i, r in enumerate(chart.records):
        x, y = mapper.map_point(i, r.value)
        if position == "r":
            draw = canvas.text_end
        elif position == "l":
            draw = canvas.text
        else:
            draw = canvas.text_mid
        draw(x, y, r.note, "serif", textsize, chart.label_color, chart.opacity)


def line_note(canvas, chart, v, s, size):
    """Draw a horizontal reference line at value v, labeled s on the right."""
    y = CoordinateMapper(chart).map_y(v)
    canvas.line(chart.left, y, chart.right, y, 0.1, chart.data_color, chart.opacity)
    if s:
        canvas.text(chart.right + (size / 2), y - (size / 4), s, "serif",
                    chart.text_size * 0.75, chart.data_color, chart.opacity)


def grid(canvas, chart, size, step):
    """Make a crosshatch grid over the box every step units."""
    if not step > 0:
        logger.warning("grid step must be positive, got %s", step)
        return
    x = chart.left
    while x <= chart.right:
        canvas.line(x, chart.bottom, x, chart.top, size, chart.data_color, chart.opacity)
        x += step
    y = chart.bottom
    while y <= chart.top:
        canvas.line(chart.left, y, chart.right, y, size, chart.data_color, chart.opacity)
        y += step


###############################################################################
# DOTTED LINES AND SPOKES
###############################################################################

def dotted_vline(canvas, x, y1, y2, dotsize, step, color):
    """Make a vertical dotted line of circles, walking up from the lower end."""
    if not step > 0 or not (math.isfinite(y1) and math.isfinite(y2)):
        return
    y, end = (y1, y2) if y1 < y2 else (y2, y1)
    while y <= end:
        canvas.circle(x, y, dotsize, color)
        y += step


def dotted_hline(canvas, x1, y, x2, dotsize, step, color):
    """Make a horizontal dotted line of circles from x1 toward x2."""
    if not step > 0 or not (math.isfinite(x1) and math.isfinite(x2)):
        return
    x = x1
    while x < x2:
        canvas.circle(x, y, dotsize, color)
        x += step


def spokes(canvas, cx, cy, r, spokesize, n, color):
    """Make n spokes around (cx, cy), clockwise from 12 o'clock, each tipped with a dot."""
    if n <= 0:
        return
    t = TOP_CLOCK
    step = FULL_CIRCLE / n
    for _ in range(n):
        px, py = polar(cx, cy, r, t)
        canvas.line(cx, cy, px, py, spokesize, "lightgray")
        canvas.circle(px, py, 0.5, color)
        t -= step
