from __future__ import annotations

import numpy as np
import plotly.express as px
import plotly.graph_objects as go
from wordcloud import WordCloud

from fungi_browser.core.base_view import BaseView
from fungi_browser.core.frequency import FrequencyTable


class WordCloudView(BaseView):
    """
    Word cloud over every value in the table, text size proportional to count.

    The cloud is rasterised by `wordcloud` and shown as an image trace so it
    exports like any other Plotly figure.
    """

    id = "wordcloud"
    label = "Word cloud"

    def __init__(self, width: int = 800, height: int = 400, random_state: int = 42):
        self.width = width
        self.height = height
        self.random_state = random_state

    def compute_data(self, table: FrequencyTable) -> FrequencyTable:
        # No cap: every distinct value takes part
        return table

    def cloud_image(self, data: FrequencyTable) -> np.ndarray:
        frequencies = {str(value): count for value, count in data}
        cloud = WordCloud(
            width=self.width,
            height=self.height,
            # wordcloud keeps only 200 words by default
            max_words=len(frequencies),
            background_color="white",
            random_state=self.random_state,
            collocations=False,
            normalize_plurals=False,
        ).generate_from_frequencies(frequencies)
        return np.asarray(cloud.to_array())

    def render_figure(self, data: FrequencyTable) -> go.Figure:
        fig = px.imshow(self.cloud_image(data))
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        fig.update_layout(
            height=500,
            margin=dict(l=20, r=20, t=60, b=20),
            title=f"{data.column.label}: {len(data)} distinct values",
        )
        return fig
