"""DChart Data - Chart Data Model and Tabular Readers

Holds the parsed records and the mutable layout/format state that every
renderer reads. Also reads the two tabular input formats into a ChartBox.

Data Model:
    - Record: one (label, value, note) observation, immutable
    - ChartBox: records plus box, colors, format and value bounds

Readers:
    - read_tsv: label<TAB>value[<TAB>note], '#' lines are titles
    - read_csv: comma separated, optional header column selection
    - open_chart: open a file and pick the reader

A ChartBox is a plain value mutated by the caller between renderer calls
(move the box, change colors, change the number format). Renderers only
read it. It is not safe to mutate a ChartBox from one thread while another
is rendering it.

Version: 1.0
Date: 2026/10/19
"""

import csv
import logging
from dataclasses import dataclass
from xml.sax.saxutils import escape

from dchart.modules.dchart_primitives import LARGEST, SMALLEST


logger = logging.getLogger(__name__)

DEFAULT_DATA_COLOR = "rgb(128,128,128)"
DEFAULT_LABEL_COLOR = "rgb(75,75,75)"
DEFAULT_VALUE_COLOR = "rgb(128,0,0)"


###############################################################################
# DATA MODEL
###############################################################################

@dataclass(frozen=True)
class Record:
    """One observation in a chart's data series."""

    label: str
    value: float
    note: str = ""


@dataclass
class ChartBox:
    """
    The working unit of the chart engine.

    Attributes:
        records (tuple[Record]): Data series; position drives x placement
        title (str): Chart title
        data_format (str or callable): Value label format ("%.1f", "$ %.0f")
        data_color, label_color, value_color (str): Renderer color names
        opacity (float): 0-100
        text_size (float): Base text size in canvas units
        top, bottom, left, right (float): Layout box, 0-100 canvas units
        min_value, max_value (float): Value bounds observed at parse time
        zero_based (bool): Pin the value axis lower bound to 0

    Example:
        >>> chart = ChartBox.from_records([Record("A", 10), Record("B", 20)])
        >>> chart.top, chart.bottom = 80, 40
    """

    records: tuple = ()
    title: str = ""
    data_format: object = "%.1f"
    data_color: str = DEFAULT_DATA_COLOR
    label_color: str = DEFAULT_LABEL_COLOR
    value_color: str = DEFAULT_VALUE_COLOR
    opacity: float = 100
    text_size: float = 1.2
    top: float = 90
    bottom: float = 50
    left: float = 10
    right: float = 90
    min_value: float = LARGEST
    max_value: float = SMALLEST
    zero_based: bool = True

    @classmethod
    def from_records(cls, records, title="", **kwargs):
        """
        Build a chart from records, computing min_value and max_value.

        Args:
            records (iterable): Record values
            title (str): Chart title
            **kwargs: Any other ChartBox field

        Returns:
            ChartBox: New chart with reader defaults
        """
        records = tuple(records)
        minimum, maximum = value_bounds(records)
        return cls(records=records, title=title, min_value=minimum,
                   max_value=maximum, **kwargs)

    @property
    def values(self):
        """Record values in order."""
        return [r.value for r in self.records]

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.top - self.bottom


def value_bounds(records):
    """Return (min, max) of record values; (inf, -inf) when empty."""
    minimum = LARGEST
    maximum = SMALLEST
    for r in records:
        if r.value > maximum:
            maximum = r.value
        if r.value < minimum:
            minimum = r.value
    return minimum, maximum


###############################################################################
# READERS
###############################################################################

def markup_escape(s):
    """Escape &, < and > for embedding in markup."""
    return escape(s)


def _parse_value(s):
    try:
        return float(s)
    except ValueError:
        return 0.0


def get_header(fields, csv_cols):
    """
    Return the label and value column indices named by csv_cols.

    Given the header "first,second,third,sum", "first,sum" returns (0, 3).
    Defaults to (0, 1) when csv_cols is not exactly two names; a name not
    found keeps its default.

    Args:
        fields (list): Header row
        csv_cols (str): "LabelColumn,ValueColumn"

    Returns:
        tuple: (label_index, value_index)
    """
    li, vi = 0, 1
    cols = csv_cols.split(",")
    if len(cols) != 2:
        return li, vi
    for i, name in enumerate(fields):
        if name == cols[0]:
            li = i
        if name == cols[1]:
            vi = i
    return li, vi


def read_tsv(stream):
    """
    Read tab separated records into a ChartBox.

    Format:
        # Title line
        label<TAB>value
        label<TAB>value<TAB>note

    Blank lines and lines with fewer than two fields are skipped; a value
    that does not parse becomes 0.

    Args:
        stream: Text stream or iterable of lines

    Returns:
        ChartBox: Parsed chart with default layout
    """
    records = []
    title = ""
    for line in stream:
        t = line.rstrip("\r\n")
        if not t:
            continue
        if t[0] == "#" and len(t) > 2:
            title = t[1:].strip()
            continue
        fields = t.split("\t")
        if len(fields) < 2:
            continue
        note = fields[2] if len(fields) == 3 else ""
        records.append(Record(
            label=markup_escape(fields[0]),
            value=_parse_value(fields[1]),
            note=markup_escape(note),
        ))
    logger.debug("read %d tab separated records", len(records))
    return ChartBox.from_records(records, title=markup_escape(title))


def read_csv(stream, csv_cols=""):
    """
    Read comma separated records into a ChartBox.

    A row whose first field is "#" sets the title. When csv_cols names two
    header columns ("Date,Close") the first row is treated as the header,
    selects the label and value columns, and its value column name becomes
    the title.

    Args:
        stream: Text stream
        csv_cols (str): Optional "LabelColumn,ValueColumn" selector

    Returns:
        ChartBox: Parsed chart with default layout
    """
    records = []
    title = ""
    li, vi = 0, 1
    reader = csv.reader(stream)
    n = 0
    while True:
        n += 1
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            logger.warning("skipping malformed csv row %d: %s", n, e)
            continue

        if len(fields) < 2:
            continue
        if fields[0] == "#":
            title = fields[1]
            continue
        note = markup_escape(fields[2]) if len(fields) == 3 else ""
        if n == 1 and csv_cols:
            li, vi = get_header(fields, csv_cols)
            title = fields[vi]
            continue
        if max(li, vi) >= len(fields):
            logger.warning("skipping csv row %d: expected column %d", n, max(li, vi))
            continue
        records.append(Record(
            label=markup_escape(fields[li]),
            value=_parse_value(fields[vi]),
            note=note,
        ))
    logger.debug("read %d comma separated records", len(records))
    return ChartBox.from_records(records, title=markup_escape(title))


def open_chart(path, csv_cols=None):
    """
    Read a chart from a file.

    Args:
        path (str): File path
        csv_cols (str, optional): When given, read as CSV with this selector

    Returns:
        ChartBox: Parsed chart

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, encoding="utf-8", newline="") as f:
        if csv_cols is not None:
            return read_csv(f, csv_cols)
        return read_tsv(f)
