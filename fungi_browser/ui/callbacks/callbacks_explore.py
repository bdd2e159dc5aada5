from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import Input, Output, exceptions, html

from fungi_browser.core.exceptions import InvalidColumnError, InvalidFilterError
from fungi_browser.core.filter_state import SortSpec
from fungi_browser.ui.callbacks.callbacks_filters import filter_spec_from_state
from fungi_browser.ui.helpers import records_table
from fungi_browser.ui.ids import IDs

if TYPE_CHECKING:
    from fungi_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def build_results(ctx: AppConfig, fs_data: Optional[dict[str, Any]], session_id: Optional[str]):
    """
    Body of the results callback: (count text, table, alert text, alert open).

    Rejected filters or sort columns are reported in the table area and leave
    the rest of the page as it was.
    """
    if not fs_data or not session_id:
        raise exceptions.PreventUpdate

    session = ctx.sessions.get(session_id)

    try:
        filters = filter_spec_from_state(fs_data)
        sort = fs_data.get("sort") or {}
        sort_spec = SortSpec.from_values(sort.get("column"), sort.get("direction"))
    except (InvalidColumnError, InvalidFilterError) as e:
        logger.warning("Rejected filter/sort request: %s", e, extra={"session_id": session_id})
        return dash.no_update, html.Div(str(e), className="text-danger p-3"), dash.no_update, dash.no_update

    try:
        count_text, displayed = session.results(filters, sort_spec)
        table = records_table(displayed)
    except Exception:
        logger.exception("Error building results table", extra={"session_id": session_id})
        return dash.no_update, html.Div("Something went wrong while building the table.", className="text-danger p-3"), dash.no_update, dash.no_update

    error = session.load_error
    return count_text, table, error, error is not None


def register_explore_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # FilterState -> count, table, load error banner
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULT_COUNT, "children"),
        Output(IDs.Control.RESULT_TABLE, "children"),
        Output(IDs.Control.LOAD_ALERT, "children"),
        Output(IDs.Control.LOAD_ALERT, "is_open"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Store.SESSION_ID, "data"),
    )
    def update_results(fs_data: Optional[dict[str, Any]], session_id: Optional[str]):
        return build_results(ctx, fs_data, session_id)
