"""DChart Canvas - Primitive Drawing Surface

The renderers' only output. Each call appends one Primitive, in order, so
later primitives paint over earlier ones. Coordinates and sizes are in
canvas units (0-100 on both axes), angles in degrees.

Primitive kinds and parameters:
    line         x1, y1, x2, y2, width, color, opacity
    circle       x, y, radius, color, opacity
    rect         cx, cy, width, height, color, opacity
    polygon      xs, ys, color, opacity
    arc          cx, cy, width, height, stroke_width, start, end, color, opacity
    text         x, y, text, font, size, color, opacity   (left aligned)
    text_mid     same as text                              (centered)
    text_end     same as text                              (right aligned)
    text_rotate  x, y, text, link, font, angle, size, color, opacity

An empty color means the output backend's default (black); an omitted
opacity means 100.

Output backends (dchart_dataviz for SVG, dchart_geometry for shapely) read
Canvas.primitives; nothing here knows about any output format.

Version: 1.0
Date: 2026/10/19
"""

from dataclasses import dataclass


TEXT_KINDS = ("text", "text_mid", "text_end", "text_rotate")


@dataclass(frozen=True)
class Primitive:
    """One recorded draw call."""

    kind: str
    params: dict

    def __getitem__(self, key):
        return self.params[key]


class Canvas:
    """
    Records primitive draw calls in painter's order.

    Example:
        >>> canvas = Canvas()
        >>> canvas.line(10, 10, 90, 10, 0.2, "gray")
        >>> canvas.primitives[0].kind
        'line'
    """

    def __init__(self):
        self.primitives = []

    def _emit(self, kind, **params):
        self.primitives.append(Primitive(kind, params))

    def __len__(self):
        return len(self.primitives)

    def of_kind(self, *kinds):
        """Return the recorded primitives of the given kinds, in order."""
        return [p for p in self.primitives if p.kind in kinds]

    # Shapes

    def line(self, x1, y1, x2, y2, width, color, opacity=100):
        self._emit("line", x1=x1, y1=y1, x2=x2, y2=y2, width=width,
                   color=color, opacity=opacity)

    def circle(self, x, y, radius, color, opacity=100):
        self._emit("circle", x=x, y=y, radius=radius, color=color, opacity=opacity)

    def rect(self, cx, cy, width, height, color, opacity=100):
        self._emit("rect", cx=cx, cy=cy, width=width, height=height,
                   color=color, opacity=opacity)

    def polygon(self, xs, ys, color, opacity=100):
        self._emit("polygon", xs=tuple(xs), ys=tuple(ys), color=color, opacity=opacity)

    def arc(self, cx, cy, width, height, stroke_width, start, end, color, opacity=100):
        self._emit("arc", cx=cx, cy=cy, width=width, height=height,
                   stroke_width=stroke_width, start=start, end=end,
                   color=color, opacity=opacity)

    # Text

    def text(self, x, y, s, font, size, color="", opacity=100):
        self._emit("text", x=x, y=y, text=s, font=font, size=size,
                   color=color, opacity=opacity)

    def text_mid(self, x, y, s, font, size, color="", opacity=100):
        self._emit("text_mid", x=x, y=y, text=s, font=font, size=size,
                   color=color, opacity=opacity)

    def text_end(self, x, y, s, font, size, color="", opacity=100):
        self._emit("text_end", x=x, y=y, text=s, font=font, size=size,
                   color=color, opacity=opacity)

    def text_rotate(self, x, y, s, link, font, angle, size, color="", opacity=100):
        self._emit("text_rotate", x=x, y=y, text=s, link=link, font=font,
                   angle=angle, size=size, color=color, opacity=opacity)
