"""
Pytest configuration shared by the dchart tests.

Fixtures build small charts in a known box so expected coordinates can be
worked out by hand.
"""

import pytest

from dchart.modules.dchart_canvas import Canvas
from dchart.modules.dchart_data import ChartBox, Record


def make_chart(values, labels=None, notes=None, **kwargs):
    """Build a ChartBox from plain values."""
    labels = labels or ["r{}".format(i) for i in range(len(values))]
    notes = notes or [""] * len(values)
    records = [Record(l, float(v), n) for l, v, n in zip(labels, values, notes)]
    return ChartBox.from_records(records, **kwargs)


@pytest.fixture
def canvas():
    return Canvas()


@pytest.fixture
def full_box_chart():
    """Three records in the whole canvas: x at 0/50/100, zero based."""
    return make_chart([10, 20, 30], labels=["A", "B", "C"],
                      top=100, bottom=0, left=0, right=100)


@pytest.fixture
def browser_chart():
    """Shares of a whole, with per-record colors in the notes."""
    return make_chart([60, 25, 10, 5], labels=["Chrome", "Safari", "Edge", "Firefox"],
                      notes=["red", "green", "blue", "orange"],
                      top=80, bottom=20, left=50, right=90, title="Browsers")
