"""DChart Geometry - Shapely and WKT Conversion Module

Converts the primitives recorded on a Canvas into shapely geometries in
canvas units (0-100, y up), for spatial checks on a drawing or export as
Well-Known Text (WKT).

Primitive to Geometry:
    - line: LineString from end to end
    - circle: Point buffered by the radius
    - rect: box around the center
    - polygon: Polygon (LineString when fewer than 3 vertices)
    - arc: annular sector, the stroke centered on the arc radius
    - text kinds: Point at the text anchor

Functions:
    - primitive_to_geometry: One primitive to one shapely geometry
    - to_geometries: All primitives to (geometry, properties) pairs
    - construct_wkt: All primitives to a GEOMETRYCOLLECTION WKT string
    - parse_wkt: WKT string back to shapely geometry
    - drawing_bounds: Bounding box of everything drawn

Version: 1.0
Date: 2026/10/19
Requires: shapely
"""

import logging
import math

from shapely.geometry import GeometryCollection, LineString, Point, Polygon, box
from shapely.wkt import loads

from dchart.modules.dchart_canvas import TEXT_KINDS


logger = logging.getLogger(__name__)

# Vertices per full turn when sampling arcs
ARC_RESOLUTION = 72


###############################################################################
# PRIMITIVE TO GEOMETRY
###############################################################################

def annular_sector(cx, cy, outer, inner, start, end, resolution=ARC_RESOLUTION):
    """
    Build the polygon between two concentric arcs.

    Args:
        cx, cy (float): Center
        outer (float): Outer radius
        inner (float): Inner radius (0 gives a pie slice)
        start (float): Start angle in degrees, counterclockwise from 3 o'clock
        end (float): End angle in degrees
        resolution (int): Vertices per full turn

    Returns:
        Polygon: Sector polygon
    """
    sweep = end - start
    steps = max(2, int(math.ceil(abs(sweep) / 360.0 * resolution)) + 1)
    angles = [math.radians(start + sweep * i / (steps - 1)) for i in range(steps)]

    outer_ring = [(cx + outer * math.cos(a), cy + outer * math.sin(a)) for a in angles]
    if inner > 0:
        inner_ring = [(cx + inner * math.cos(a), cy + inner * math.sin(a))
                      for a in reversed(angles)]
    else:
        inner_ring = [(cx, cy)]
    return Polygon(outer_ring + inner_ring)


def primitive_to_geometry(primitive):
    """
    Convert one primitive to a shapely geometry.

    Args:
        primitive (Primitive): Recorded draw call

    Returns:
        shapely.geometry: Geometry in canvas units

    Raises:
        ValueError: If the primitive kind is unsupported
    """
    p = primitive.params
    kind = primitive.kind

    if kind == "line":
        return LineString([(p["x1"], p["y1"]), (p["x2"], p["y2"])])
    if kind == "circle":
        return Point(p["x"], p["y"]).buffer(p["radius"])
    if kind == "rect":
        hw = p["width"] / 2
        hh = p["height"] / 2
        return box(p["cx"] - hw, p["cy"] - hh, p["cx"] + hw, p["cy"] + hh)
    if kind == "polygon":
        coords = list(zip(p["xs"], p["ys"]))
        if len(coords) < 3:
            return LineString(coords)
        return Polygon(coords)
    if kind == "arc":
        radius = p["width"] / 2
        half_stroke = p["stroke_width"] / 2
        return annular_sector(p["cx"], p["cy"], radius + half_stroke,
                              max(radius - half_stroke, 0), p["start"], p["end"])
    if kind in TEXT_KINDS:
        return Point(p["x"], p["y"])
    raise ValueError("Unsupported primitive kind: {}".format(kind))


def _finite_params(primitive):
    for value in primitive.params.values():
        if isinstance(value, tuple):
            if not all(math.isfinite(v) for v in value):
                return False
        elif isinstance(value, (int, float)) and not math.isfinite(value):
            return False
    return True


def to_geometries(primitives):
    """
    Convert primitives to geometries, keeping their style as properties.

    Primitives with non-finite coordinates (degenerate data) are skipped.

    Args:
        primitives (list[Primitive]): Canvas.primitives

    Returns:
        list: (geometry, properties) pairs in drawing order; properties hold
            kind, color, opacity and, for text, the text
    """
    result = []
    skipped = 0
    for primitive in primitives:
        if not _finite_params(primitive):
            skipped += 1
            continue
        props = {
            "kind": primitive.kind,
            "color": primitive.params.get("color", ""),
            "opacity": primitive.params.get("opacity", 100),
        }
        if "text" in primitive.params:
            props["text"] = primitive.params["text"]
        result.append((primitive_to_geometry(primitive), props))
    if skipped:
        logger.warning("skipped %d primitives with non-finite coordinates", skipped)
    return result


###############################################################################
# WKT
###############################################################################

def construct_wkt(primitives):
    """
    Convert primitives to a single GEOMETRYCOLLECTION WKT string.

    Args:
        primitives (list[Primitive]): Canvas.primitives

    Returns:
        str: WKT representation
    """
    geometries = [g for g, _ in to_geometries(primitives)]
    return GeometryCollection(geometries).wkt


def parse_wkt(wkt_str):
    """
    Parse WKT string and return Shapely geometry object.

    Raises:
        ValueError: If WKT parsing fails
    """
    try:
        return loads(wkt_str)
    except Exception as e:
        raise ValueError("Failed to parse WKT string: {} ({})".format(wkt_str, e))


def drawing_bounds(primitives):
    """
    Bounding box of everything drawn.

    Returns:
        tuple: (minx, miny, maxx, maxy), or None when nothing was drawn
    """
    geometries = [g for g, _ in to_geometries(primitives) if not g.is_empty]
    if not geometries:
        return None
    return GeometryCollection(geometries).bounds
