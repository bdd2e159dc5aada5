from __future__ import annotations

import plotly.graph_objs as go

from fungi_browser.core.columns import Column
from fungi_browser.core.frequency import FrequencyTable
from fungi_browser.views.word_cloud_view import WordCloudView


def _make_table() -> FrequencyTable:
    entries = tuple((f"Genus{i}", 20 - i) for i in range(15))
    return FrequencyTable(Column.GENUS, entries)


def test_word_cloud_compute_data_is_uncapped():
    table = _make_table()
    assert WordCloudView().compute_data(table) == table


def test_word_cloud_image_has_requested_size():
    view = WordCloudView(width=200, height=100)
    img = view.cloud_image(_make_table())
    assert img.shape == (100, 200, 3)


def test_word_cloud_render_figure_is_an_image_trace():
    view = WordCloudView(width=200, height=100)
    fig = view.figure(view.compute_data(_make_table()))

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert fig.data[0].type == "image"
    assert fig.layout.xaxis.visible is False


def test_word_cloud_handles_year_values():
    view = WordCloudView(width=200, height=100)
    table = FrequencyTable(Column.YEAR_COLLECTED, ((1999, 5), (2001, 2)))
    fig = view.figure(table)
    assert len(fig.data) == 1


def test_word_cloud_empty_table_renders_placeholder():
    view = WordCloudView()
    fig = view.figure(view.compute_data(FrequencyTable(Column.GENUS)))
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 0


def test_word_cloud_lays_out_more_than_200_values(monkeypatch):
    from fungi_browser.views import word_cloud_view

    laid_out = []

    class _RecordingWordCloud(word_cloud_view.WordCloud):
        def to_array(self):
            laid_out.append(len(self.layout_))
            return super().to_array()

    monkeypatch.setattr(word_cloud_view, "WordCloud", _RecordingWordCloud)

    entries = tuple((f"Genus{i:03d}", 300 - i) for i in range(300))
    view = WordCloudView(width=2000, height=2000)
    view.cloud_image(FrequencyTable(Column.GENUS, entries))

    assert laid_out == [300]
