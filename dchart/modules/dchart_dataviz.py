"""DChart DataViz - SVG Generation and Export Module

Turns the primitives recorded on a Canvas into a standalone SVG document.

Canvas units run 0-100 on both axes with y pointing up; SVG runs in pixels
with y pointing down. Positions are scaled to the document size and the y
axis is flipped. Widths, radii, arc sizes and font sizes scale with the
document width; rectangle heights scale with the document height.

Core Functions:
    - render_svg: Build a complete SVG document from primitives
    - combine_svg: Wrap SVG elements in a document
    - save_svg: Save SVG string to file

Coordinate and Style Helpers:
    - transform_point_to_svg: Canvas units to SVG pixels
    - convert_color_to_svg: Canvas color and 0-100 opacity to SVG fill values
    - arc_path_data: SVG path data for a circular arc

SVG Element Generation:
    - svg_line, svg_circle, svg_polygon, svg_path, svg_rect
    - svg_text: Text with alignment, opacity and optional rotation

Version: 1.0
Date: 2026/10/19
"""

import logging
import math
import os


logger = logging.getLogger(__name__)

FONT_FAMILIES = {
    "sans": "sans-serif",
    "serif": "serif",
    "mono": "monospace",
}

TEXT_ANCHORS = {
    "text": "start",
    "text_mid": "middle",
    "text_end": "end",
    "text_rotate": "start",
}


###############################################################################
# COORDINATE AND STYLE HELPERS
###############################################################################

def transform_point_to_svg(x, y, width, height):
    """
    Transform canvas units to SVG coordinates.

    Performs two transformations:
    1. Scale: 0-100 canvas units to 0-width / 0-height pixels
    2. Y-axis flip: canvas y up to SVG y down

    Args:
        x (float): Canvas X (0-100)
        y (float): Canvas Y (0-100)
        width (float): Document width in pixels
        height (float): Document height in pixels

    Returns:
        tuple: (svg_x, svg_y)

    Examples:
        >>> transform_point_to_svg(50, 25, 800, 600)
        (400.0, 450.0)
    """
    svg_x = x * width / 100.0
    svg_y = (100.0 - y) * height / 100.0
    return svg_x, svg_y


def convert_color_to_svg(color, opacity=100):
    """
    Convert a canvas color and 0-100 opacity to SVG values.

    Args:
        color (str): Color name or rgb() string; empty means black
        opacity (float): 0-100

    Returns:
        tuple: (color_string, opacity) with opacity as 0-1
    """
    if not color:
        color = "black"
    if opacity is None:
        opacity = 100
    return color, max(0.0, min(1.0, opacity / 100.0))


def _num(value):
    """Format a coordinate compactly (internal)."""
    return "{:.3f}".format(value).rstrip("0").rstrip(".")


def arc_path_data(cx, cy, radius, start, end):
    """
    SVG path data for a circular arc in SVG coordinates.

    Angles are canvas degrees (counterclockwise from 3 o'clock); because the
    y axis is flipped the arc is drawn with the SVG sweep flag cleared. A
    full turn is split in two halves since a single SVG arc cannot close.

    Args:
        cx, cy (float): Center in SVG coordinates
        radius (float): Radius in pixels
        start (float): Start angle in degrees
        end (float): End angle in degrees

    Returns:
        str: Path data, empty for a zero sweep
    """
    sweep = end - start
    if sweep == 0 or radius <= 0 or not math.isfinite(sweep):
        return ""
    if abs(sweep) >= 360:
        mid = start + math.copysign(180, sweep)
        return "{} {}".format(
            arc_path_data(cx, cy, radius, start, mid),
            arc_path_data(cx, cy, radius, mid, end).replace("M", "L", 1),
        )

    a1 = math.radians(start)
    a2 = math.radians(end)
    x1 = cx + radius * math.cos(a1)
    y1 = cy - radius * math.sin(a1)
    x2 = cx + radius * math.cos(a2)
    y2 = cy - radius * math.sin(a2)
    large_arc = 1 if abs(sweep) > 180 else 0
    sweep_flag = 0 if sweep > 0 else 1
    return "M {} {} A {} {} 0 {} {} {} {}".format(
        _num(x1), _num(y1), _num(radius), _num(radius),
        large_arc, sweep_flag, _num(x2), _num(y2)
    )


###############################################################################
# SVG DOCUMENT FUNCTIONS
###############################################################################

def combine_svg(elements, width=800, height=600, background=None,
                xmlns="http://www.w3.org/2000/svg", version="1.1"):
    """
    Combine SVG elements into complete SVG document with proper headers.

    Args:
        elements (list[str]): List of SVG element strings
        width (int): Document width in pixels
        height (int): Document height in pixels
        background (str, optional): Fill color for a full-size background rect
        xmlns (str, optional): XML namespace
        version (str, optional): SVG version

    Returns:
        str: Complete SVG document as string
    """
    body = [e for e in elements if e]
    if background:
        body.insert(0, svg_rect(0, 0, width, height, fill=background, stroke_width=0))

    return '''<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<svg xmlns="{xmlns}" version="{version}" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
{body}
</svg>
'''.format(
        xmlns=xmlns,
        version=version,
        width=width,
        height=height,
        body="\n".join(body)
    )


def save_svg(svg_content, file_path):
    """
    Save SVG content to file, creating the directory if needed.

    Args:
        svg_content (str): Complete SVG document as string
        file_path (str): Absolute or relative file path for output

    Raises:
        OSError: If the file or its directory cannot be written
    """
    directory = os.path.dirname(file_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(svg_content)
    logger.info("wrote %s", file_path)


def render_svg(primitives, width=800, height=600, background="white"):
    """
    Render recorded primitives into an SVG document, in painter's order.

    Args:
        primitives (list[Primitive]): Canvas.primitives
        width (int): Document width in pixels
        height (int): Document height in pixels
        background (str, optional): Background fill; None for transparent

    Returns:
        str: Complete SVG document

    Example:
        >>> canvas = Canvas()
        >>> charts.bar(canvas, chart, 2)
        >>> svg = render_svg(canvas.primitives)
    """
    elements = []
    skipped = 0
    for p in primitives:
        element = svg_element(p, width, height)
        if element:
            elements.append(element)
        else:
            skipped += 1
    if skipped:
        logger.debug("skipped %d empty or non-finite primitives", skipped)
    return combine_svg(elements, width, height, background)


def svg_element(primitive, width, height):
    """
    Convert one primitive to an SVG element string.

    Returns an empty string for primitives with non-finite coordinates.
    """
    p = primitive.params
    kind = primitive.kind
    scale = width / 100.0
    color, opacity = convert_color_to_svg(p.get("color"), p.get("opacity"))

    if kind == "line":
        if not _finite(p["x1"], p["y1"], p["x2"], p["y2"]):
            return ""
        x1, y1 = transform_point_to_svg(p["x1"], p["y1"], width, height)
        x2, y2 = transform_point_to_svg(p["x2"], p["y2"], width, height)
        return svg_line(x1, y1, x2, y2, stroke=color, stroke_width=p["width"] * scale,
                        stroke_opacity=opacity)

    if kind == "circle":
        if not _finite(p["x"], p["y"], p["radius"]):
            return ""
        cx, cy = transform_point_to_svg(p["x"], p["y"], width, height)
        return svg_circle(cx, cy, p["radius"] * scale, fill=color, fill_opacity=opacity)

    if kind == "rect":
        if not _finite(p["cx"], p["cy"], p["width"], p["height"]):
            return ""
        x, y = transform_point_to_svg(p["cx"] - p["width"] / 2, p["cy"] + p["height"] / 2,
                                      width, height)
        return svg_rect(x, y, p["width"] * scale, p["height"] * height / 100.0,
                        fill=color, stroke_width=0, fill_opacity=opacity)

    if kind == "polygon":
        if not _finite(*(p["xs"] + p["ys"])):
            return ""
        points = [transform_point_to_svg(x, y, width, height) for x, y in zip(p["xs"], p["ys"])]
        return svg_polygon(points, fill=color, fill_opacity=opacity)

    if kind == "arc":
        if not _finite(p["cx"], p["cy"], p["width"], p["start"], p["end"]):
            return ""
        cx, cy = transform_point_to_svg(p["cx"], p["cy"], width, height)
        path = arc_path_data(cx, cy, p["width"] * scale / 2, p["start"], p["end"])
        return svg_path(path, stroke=color, stroke_width=p["stroke_width"] * scale,
                        stroke_opacity=opacity)

    if kind in TEXT_ANCHORS:
        if not _finite(p["x"], p["y"]):
            return ""
        x, y = transform_point_to_svg(p["x"], p["y"], width, height)
        # canvas angles turn counterclockwise, SVG rotate() turns clockwise
        rotation = -p.get("angle", 0)
        return svg_text(x, y, p["text"], font_family=FONT_FAMILIES.get(p["font"], p["font"]),
                        font_size=p["size"] * scale, fill=color,
                        text_anchor=TEXT_ANCHORS[kind], fill_opacity=opacity,
                        rotation=rotation)

    raise ValueError("Unsupported primitive kind: {}".format(kind))


def _finite(*values):
    return all(math.isfinite(v) for v in values)


###############################################################################
# SVG ELEMENT GENERATION FUNCTIONS
###############################################################################

def _opacity_attrs(attrs, fill_opacity, stroke_opacity):
    if fill_opacity is not None and fill_opacity < 1.0:
        attrs.append('fill-opacity="{:.2f}"'.format(fill_opacity))
    if stroke_opacity is not None and stroke_opacity < 1.0:
        attrs.append('stroke-opacity="{:.2f}"'.format(stroke_opacity))


def svg_line(x1, y1, x2, y2, stroke="black", stroke_width=1, stroke_opacity=None):
    """
    Generate SVG line element string.

    Args:
        x1, y1 (float): Start point (in SVG coordinates)
        x2, y2 (float): End point (in SVG coordinates)
        stroke (str): Stroke color
        stroke_width (float): Stroke width
        stroke_opacity (float, optional): Stroke opacity (0.0-1.0)

    Returns:
        str: SVG line element
    """
    attrs = [
        'x1="{}"'.format(_num(x1)),
        'y1="{}"'.format(_num(y1)),
        'x2="{}"'.format(_num(x2)),
        'y2="{}"'.format(_num(y2)),
        'stroke="{}"'.format(stroke),
        'stroke-width="{}"'.format(_num(stroke_width))
    ]
    _opacity_attrs(attrs, None, stroke_opacity)
    return '<line {}/>'.format(" ".join(attrs))


def svg_circle(cx, cy, r, stroke="none", fill="none", stroke_width=0,
               fill_opacity=None, stroke_opacity=None):
    """
    Generate SVG circle element string.

    Args:
        cx (float): Center X coordinate (in SVG coordinates)
        cy (float): Center Y coordinate (in SVG coordinates)
        r (float): Radius
        stroke (str): Stroke color
        fill (str): Fill color
        stroke_width (float): Stroke width
        fill_opacity (float, optional): Fill opacity (0.0-1.0)
        stroke_opacity (float, optional): Stroke opacity (0.0-1.0)

    Returns:
        str: SVG circle element, empty for a non-positive radius
    """
    if r <= 0:
        return ""

    attrs = [
        'cx="{}"'.format(_num(cx)),
        'cy="{}"'.format(_num(cy)),
        'r="{}"'.format(_num(r)),
        'fill="{}"'.format(fill),
        'stroke="{}"'.format(stroke),
        'stroke-width="{}"'.format(stroke_width)
    ]
    _opacity_attrs(attrs, fill_opacity, stroke_opacity)
    return '<circle {}/>'.format(" ".join(attrs))


def svg_polygon(points, stroke="none", fill="none", stroke_width=0, dash="",
                fill_opacity=None, stroke_opacity=None):
    """
    Generate SVG polygon element (always closed).

    Args:
        points (list): List of (x, y) coordinate tuples (in SVG coordinates)
        stroke (str): Stroke color
        fill (str): Fill color
        stroke_width (float): Stroke width
        dash (str): Stroke dash pattern
        fill_opacity (float, optional): Fill opacity (0.0-1.0)
        stroke_opacity (float, optional): Stroke opacity (0.0-1.0)

    Returns:
        str: SVG polygon element, empty for fewer than 3 points
    """
    if not points or len(points) < 3:
        return ""

    points_str = " ".join(["{},{}".format(_num(x), _num(y)) for x, y in points])

    attrs = [
        'points="{}"'.format(points_str),
        'fill="{}"'.format(fill),
        'stroke="{}"'.format(stroke),
        'stroke-width="{}"'.format(stroke_width)
    ]
    if dash and dash.strip():
        attrs.append('stroke-dasharray="{}"'.format(dash))
    _opacity_attrs(attrs, fill_opacity, stroke_opacity)
    return '<polygon {}/>'.format(" ".join(attrs))


def svg_path(path_data, stroke="none", fill="none", stroke_width=0, dash="",
             fill_opacity=None, stroke_opacity=None):
    """
    Generate SVG path element string.

    Args:
        path_data (str): SVG path data (already in SVG coordinates)
        stroke (str): Stroke color
        fill (str): Fill color
        stroke_width (float): Stroke width
        dash (str): Stroke dash pattern
        fill_opacity (float, optional): Fill opacity (0.0-1.0)
        stroke_opacity (float, optional): Stroke opacity (0.0-1.0)

    Returns:
        str: SVG path element, empty for empty path data
    """
    if not path_data or not path_data.strip():
        return ""

    attrs = [
        'd="{}"'.format(path_data),
        'fill="{}"'.format(fill),
        'stroke="{}"'.format(stroke),
        'stroke-width="{}"'.format(_num(stroke_width))
    ]
    if dash and dash.strip():
        attrs.append('stroke-dasharray="{}"'.format(dash))
    _opacity_attrs(attrs, fill_opacity, stroke_opacity)
    return '<path {}/>'.format(" ".join(attrs))


def svg_text(x, y, text, font_family="sans-serif", font_size=12, fill="black",
             text_anchor="start", dominant_baseline="auto", fill_opacity=None,
             rotation=0):
    """
    Generate SVG text element with alignment, opacity and rotation.

    Text is expected to be markup-safe already; the readers escape it.

    Args:
        x (float): X coordinate (in SVG coordinates)
        y (float): Y coordinate (in SVG coordinates)
        text (str): Text content
        font_family (str): Font family name
        font_size (float): Font size in pixels
        fill (str): Text color
        text_anchor (str): Horizontal alignment ("start", "middle", "end")
        dominant_baseline (str): Vertical alignment ("auto", "middle", "hanging")
        fill_opacity (float, optional): Text opacity (0.0-1.0)
        rotation (float): Clockwise rotation in degrees about (x, y)

    Returns:
        str: SVG text element
    """
    if rotation:
        position = [
            'x="0"',
            'y="0"',
            'transform="translate({},{}) rotate({})"'.format(_num(x), _num(y), _num(rotation)),
        ]
    else:
        position = ['x="{}"'.format(_num(x)), 'y="{}"'.format(_num(y))]

    attrs = position + [
        'font-family="{}"'.format(font_family),
        'font-size="{}px"'.format(_num(font_size)),
        'fill="{}"'.format(fill),
        'text-anchor="{}"'.format(text_anchor),
        'dominant-baseline="{}"'.format(dominant_baseline)
    ]
    _opacity_attrs(attrs, fill_opacity, None)
    return '<text {}>{}</text>'.format(" ".join(attrs), text)


def svg_rect(x, y, width, height, fill="black", stroke="none", stroke_width=1,
             fill_opacity=None, stroke_opacity=None):
    """
    Generate SVG rectangle element with optional opacity.

    Args:
        x (float): Top-left X coordinate (in SVG coordinates)
        y (float): Top-left Y coordinate (in SVG coordinates)
        width (float): Rectangle width
        height (float): Rectangle height
        fill (str): Fill color
        stroke (str): Stroke color
        stroke_width (float): Stroke width
        fill_opacity (float, optional): Fill opacity (0.0-1.0)
        stroke_opacity (float, optional): Stroke opacity (0.0-1.0)

    Returns:
        str: SVG rectangle element
    """
    attrs = [
        'x="{}"'.format(_num(x)),
        'y="{}"'.format(_num(y)),
        'width="{}"'.format(_num(width)),
        'height="{}"'.format(_num(height)),
        'fill="{}"'.format(fill),
        'stroke="{}"'.format(stroke),
        'stroke-width="{}"'.format(stroke_width)
    ]
    _opacity_attrs(attrs, fill_opacity, stroke_opacity)
    return '<rect {}/>'.format(" ".join(attrs))
