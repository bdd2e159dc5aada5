from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
import plotly.graph_objs as go
from dash import Input, Output, exceptions

from fungi_browser.core.columns import Column, VISUALIZABLE_COLUMNS
from fungi_browser.core.exceptions import InvalidFilterError
from fungi_browser.ui.callbacks.callbacks_filters import filter_spec_from_state
from fungi_browser.ui.ids import IDs

if TYPE_CHECKING:
    from fungi_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this view.", details)


def build_main_figure(
        ctx: AppConfig,
        fs_data: Optional[dict[str, Any]],
        viz_kind: Optional[str],
        viz_column: Optional[str],
        session_id: Optional[str],
) -> go.Figure:
    if not fs_data or not session_id:
        raise exceptions.PreventUpdate

    if not viz_kind or not viz_column:
        return _message_figure(
            "No visualisation selected.",
            "Choose a visualisation and a column to see a plot.",
        )

    session = ctx.sessions.get(session_id)

    try:
        filters = filter_spec_from_state(fs_data)
        column = Column.parse(viz_column, allowed=VISUALIZABLE_COLUMNS)
        if viz_kind not in ctx.registry:
            raise KeyError(f"View '{viz_kind}' not found")
    except (KeyError, InvalidFilterError) as e:
        # InvalidColumnError is a KeyError
        logger.warning("Rejected visualisation request: %s", e, extra={"session_id": session_id})
        return _message_figure("Invalid selection.", str(e))

    try:
        logger.info(
            "render_start",
            extra={"view_id": viz_kind, "column": column.value, "session_id": session_id},
        )
        return session.render(filters, viz_kind, column)
    except Exception:
        logger.exception(
            "Error in update_main_graph",
            extra={"filter_state": fs_data, "view_id": viz_kind},
        )
        return _error_figure(
            "The app hit an unexpected error. "
            "If this keeps happening, grab the logs and open an issue."
        )


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # FilterState + visualisation controls -> figure
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAIN_GRAPH, "figure"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.VIZ_KIND_RADIO, "value"),
        Input(IDs.Control.VIZ_COLUMN_SELECT, "value"),
        Input(IDs.Store.SESSION_ID, "data"),
    )
    def update_main_graph(
            fs_data: Optional[dict[str, Any]],
            viz_kind: Optional[str],
            viz_column: Optional[str],
            session_id: Optional[str],
    ):
        return build_main_figure(ctx, fs_data, viz_kind, viz_column, session_id)
