from __future__ import annotations

from typing import cast

import plotly.graph_objs as go
import pytest

from fungi_browser.core.columns import Column
from fungi_browser.core.frequency import FrequencyTable
from fungi_browser.views.bar_chart_view import BarChartView


def _make_table(n: int = 12) -> FrequencyTable:
    entries = tuple((f"Genus{i}", 100 - i) for i in range(n))
    return FrequencyTable(Column.GENUS, entries)


def test_bar_chart_compute_data_keeps_top_ten_by_default():
    view = BarChartView()
    data = view.compute_data(_make_table(12))

    assert len(data) == 10
    assert data.entries[0] == ("Genus0", 100)


def test_bar_chart_render_figure_basic():
    view = BarChartView(top_n=5)
    data = view.compute_data(_make_table())
    fig = cast(go.Figure, view.figure(data))

    assert isinstance(fig, go.Figure)
    traces = list(fig.data)
    assert len(traces) == 1
    assert traces[0].orientation == "h"
    assert list(traces[0].y) == ["Genus0", "Genus1", "Genus2", "Genus3", "Genus4"]
    # Most frequent value on top
    assert fig.layout.yaxis.autorange == "reversed"
    assert fig.layout.xaxis.title.text == "Number of records"


def test_bar_chart_year_values_are_categorical():
    view = BarChartView()
    table = FrequencyTable(Column.YEAR_COLLECTED, ((1999, 3), (2001, 1)))
    fig = view.figure(view.compute_data(table))
    assert list(fig.data[0].y) == ["1999", "2001"]


def test_bar_chart_empty_table_renders_placeholder():
    view = BarChartView()
    data = view.compute_data(FrequencyTable(Column.GENUS))
    fig = view.figure(data)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 0


def test_bar_chart_rejects_bad_top_n():
    with pytest.raises(ValueError):
        BarChartView(top_n=0)
