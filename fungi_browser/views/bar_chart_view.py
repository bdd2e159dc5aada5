from __future__ import annotations

import plotly.express as px
import plotly.graph_objects as go

from fungi_browser.core.base_view import BaseView
from fungi_browser.core.frequency import FrequencyTable, top_n

DEFAULT_TOP_N = 10


class BarChartView(BaseView):
    """
    Horizontal bar ranking of the most frequent values, most frequent on top.
    """

    id = "barchart"
    label = "Bar chart"

    def __init__(self, top_n: int = DEFAULT_TOP_N):
        if top_n <= 0:
            raise ValueError(f"top_n must be positive, got {top_n}")
        self.top_n = top_n

    def compute_data(self, table: FrequencyTable) -> FrequencyTable:
        if table.is_empty:
            return table
        return top_n(table, self.top_n)

    def render_figure(self, data: FrequencyTable) -> go.Figure:
        df = data.to_frame()
        # Categorical axis even for years
        df["value"] = df["value"].astype(str)

        fig = px.bar(
            df,
            x="count",
            y="value",
            orientation="h",
            text="count",
        )
        fig.update_layout(
            height=500,
            margin=dict(l=40, r=40, t=60, b=40),
            title=f"Top {len(data)} values of {data.column.label}",
            xaxis_title="Number of records",
            yaxis_title=data.column.label,
        )
        fig.update_yaxes(autorange="reversed", type="category")
        return fig
