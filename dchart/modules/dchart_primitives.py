"""DChart Primitives - Numeric Helpers for Chart Geometry

Pure functions shared by every chart renderer. Nothing here holds state or
draws anything: values go in, coordinates, colors and ranges come out.

Module Structure:
    1. Range Mapping: map_range, zero_base, polar
    2. Statistics: mean, data_sum, pct, data_slope
    3. Color Policies: conditional_color, std_color, BLUE7
    4. Axis Ranges and Expressions: nice_range, parse_axis_range, parse_condition
    5. Formatting: format_number

Degenerate input (empty data, zero sums, zero-width ranges) never raises:
the arithmetic helpers return inf or nan the way IEEE division would, and
callers decide whether to report it.

Typical Usage:
    from dchart.modules import dchart_primitives as prim

    y = prim.map_range(25, 0, 50, 10, 90)        # 50.0
    shares = prim.pct([r.value for r in records])
    m, b = prim.data_slope(xs, ys)

Version: 1.0
Date: 2026/10/19
"""

import math


LARGEST = float('inf')
SMALLEST = -LARGEST

TOP_CLOCK = math.pi / 2
FULL_CIRCLE = math.pi * 2

STD_COLOR = "std"

# Blue sequential palette used when the data color is "std"
BLUE7 = (
    "rgb(8,69,148)",
    "rgb(33,113,181)",
    "rgb(66,146,198)",
    "rgb(107,174,214)",
    "rgb(158,202,225)",
    "rgb(198,219,239)",
    "rgb(239,243,255)",
)


###############################################################################
# RANGE MAPPING
###############################################################################

def _divide(numerator, denominator):
    """Divide like IEEE floats: x/0 is +-inf, 0/0 is nan (internal)."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return float('nan')
        return math.copysign(float('inf'), numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def map_range(value, low1, high1, low2, high2):
    """
    Map value from the range (low1, high1) to the range (low2, high2).

    The single mapping primitive used by every positional renderer.
    A zero-width source range is not trapped: the result is inf or nan.

    Args:
        value (float): Value to map
        low1 (float): Source range low end
        high1 (float): Source range high end
        low2 (float): Destination range low end
        high2 (float): Destination range high end

    Returns:
        float: Mapped value

    Example:
        >>> map_range(5, 0, 10, 0, 100)
        50.0
    """
    return low2 + _divide((high2 - low2) * (value - low1), high1 - low1)


def zero_base(zero_based, minimum):
    """Return the effective lower bound of a value axis."""
    if zero_based:
        return 0
    return minimum


def polar(x, y, r, t):
    """
    Convert polar coordinates around (x, y) to Cartesian coordinates.

    Args:
        x (float): Center X
        y (float): Center Y
        r (float): Radius
        t (float): Angle in radians, counterclockwise from 3 o'clock

    Returns:
        tuple: (px, py)
    """
    return x + r * math.cos(t), y + r * math.sin(t)


###############################################################################
# STATISTICS
###############################################################################

def mean(values):
    """Arithmetic mean; nan for an empty sequence."""
    values = list(values)
    return _divide(math.fsum(values), len(values))


def data_sum(values):
    """Sum of a sequence of values."""
    total = 0.0
    for v in values:
        total += v
    return total


def pct(values):
    """
    Compute each value's percentage of the total.

    A zero total yields inf/nan entries rather than an error.

    Args:
        values (list): Numeric values

    Returns:
        list: Percentages, one per value

    Example:
        >>> pct([10, 30, 60])
        [10.0, 30.0, 60.0]
    """
    values = list(values)
    total = data_sum(values)
    return [_divide(v, total) * 100 for v in values]


def data_slope(x, y):
    """
    Ordinary least squares fit of y = m*x + b.

    Args:
        x (list): X values
        y (list): Y values (same length as x)

    Returns:
        tuple: (m, b) slope and intercept

    Example:
        >>> data_slope([0, 1, 2, 3], [3, 5, 7, 9])
        (2.0, 3.0)
    """
    xy = [a * b for a, b in zip(x, y)]
    sqx = [a * a for a in x]
    mean_xy = mean(xy)
    mean_x = mean(x)
    mean_y = mean(y)
    mean_xsq = mean(sqx)

    rise = mean_xy - (mean_x * mean_y)
    run = mean_xsq - (mean_x * mean_x)
    m = _divide(rise, run)
    b = mean_y - (m * mean_x)
    return m, b


###############################################################################
# COLOR POLICIES
###############################################################################

def conditional_color(value, minimum, maximum, true_color, false_color):
    """Return true_color when minimum <= value <= maximum, else false_color."""
    if minimum <= value <= maximum:
        return true_color
    return false_color


def std_color(index, record_color, color, opacity, solid):
    """
    Pick the fill color and opacity for a proportional chart segment.

    Rules, in order:
        - color == "std": cycle through BLUE7 at full opacity
        - record_color set: use it, full opacity when solid, else 40
        - otherwise: color and opacity unchanged

    Args:
        index (int): Segment index
        record_color (str): Per-record color override (the record's note)
        color (str): Nominal chart color
        opacity (float): Fallback opacity
        solid (bool): Draw record colors at full opacity

    Returns:
        tuple: (color, opacity)
    """
    if color == STD_COLOR:
        return BLUE7[index % len(BLUE7)], 100
    if record_color:
        if solid:
            return record_color, 100
        return record_color, 40
    return color, opacity


###############################################################################
# AXIS RANGES AND EXPRESSIONS
###############################################################################

class ConditionError(ValueError):
    """Raised when a conditional color expression is malformed."""


def nice_range(minimum, maximum, n):
    """
    Compute a rounded axis range for n labels.

    The maximum is rounded up at its own order of magnitude; the minimum
    passes through. A non-positive or non-finite maximum has no order of
    magnitude, so the step comes back as 0.

    Args:
        minimum (float): Axis minimum
        maximum (float): Data maximum
        n (int): Number of steps

    Returns:
        tuple: (minimum, rounded_max, step)

    Example:
        >>> nice_range(0, 273, 5)
        (0, 300.0, 60.0)
    """
    if not (maximum > 0 and math.isfinite(maximum)) or n <= 0:
        return minimum, maximum, 0.0
    p = math.pow(10, math.floor(math.log10(maximum)))
    ymax = math.ceil(maximum / p) * p
    return minimum, ymax, ymax / n


def parse_axis_range(s):
    """
    Parse "min,max,step" for axis labels.

    Returns (0, 0, 0) when the expression is not three numbers.
    """
    parts = s.split(",")
    if len(parts) != 3:
        return 0.0, 0.0, 0.0
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        return 0.0, 0.0, 0.0


def parse_condition(s):
    """
    Parse a conditional color expression "low,high,color".

    For example "0,10,red" colors values between 0 and 10 (inclusive) red.
    An empty expression matches every value with an empty color.

    Args:
        s (str): Condition expression

    Returns:
        tuple: (low, high, color)

    Raises:
        ConditionError: If the expression is not low,high,color with numeric bounds
    """
    if not s:
        return SMALLEST, LARGEST, ""
    parts = s.split(",")
    if len(parts) != 3:
        raise ConditionError("{} bad condition".format(s))
    try:
        low = float(parts[0])
        high = float(parts[1])
    except ValueError as e:
        raise ConditionError("{} bad condition: {}".format(s, e))
    return low, high, parts[2]


###############################################################################
# FORMATTING
###############################################################################

def format_number(value, fmt="%.1f"):
    """
    Format a value with a printf-style template or a formatter callable.

    Args:
        value (float): Number to format
        fmt (str or callable): "%.2f", "$ %.0f", or a function float -> str

    Returns:
        str: Formatted string

    Example:
        >>> format_number(3.14159, "%.2f")
        '3.14'
    """
    if callable(fmt):
        return fmt(value)
    return fmt % value
