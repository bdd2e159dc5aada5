from __future__ import annotations

from abc import ABC, abstractmethod

import plotly.graph_objs as go

from .frequency import FrequencyTable


class BaseView(ABC):
    """
    Abstract base class for all frequency visualisations.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally and in export file names
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to shape the FrequencyTable for this view
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    @abstractmethod
    def compute_data(self, table: FrequencyTable) -> FrequencyTable:
        """
        Shape the frequency table for this view (e.g. keep the top N)
        :param table: frequencies over the filtered view
        :return: the table to render
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: FrequencyTable) -> go.Figure:
        """
        Render the figure given the computed data. Only called with a
        non-empty table.
        :param data: the table provided by {@link compute_data()}
        :return: the Plotly figure
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def figure(self, data: FrequencyTable) -> go.Figure:
        """
        render_figure for data returned by compute_data, with the empty case
        handled in one place so no view has to guard against it.
        """
        if data.is_empty:
            return self.empty_figure("No records match the current filters")
        return self.render_figure(data)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
