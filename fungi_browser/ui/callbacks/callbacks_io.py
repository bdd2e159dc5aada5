from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc, exceptions

from fungi_browser.core.exceptions import ExportError
from fungi_browser.ui.ids import IDs

if TYPE_CHECKING:
    from fungi_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def export_current_image(ctx: AppConfig, n_clicks, session_id):
    """
    Body of the export callback: (download data, status text).

    Any failure ends up in the status line; the live graph is never touched.
    """
    if not n_clicks or not session_id:
        raise exceptions.PreventUpdate

    session = ctx.sessions.get(session_id)

    try:
        view_id, figure = session.current_figure()
        if view_id is None:
            return dash.no_update, "Select a visualisation first."
        image = ctx.export_service.export(figure, view_id)
    except ExportError as e:
        return dash.no_update, str(e)
    except Exception:
        logger.exception("Error exporting current view", extra={"session_id": session_id})
        return dash.no_update, "Export failed: the current view could not be rendered."

    return dcc.send_bytes(image.content, image.filename, type=image.mime_type), ""


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Export current visualisation as an image
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_IMAGE, "data"),
        Output(IDs.Control.EXPORT_STATUS, "children"),
        Input(IDs.Control.EXPORT_BTN, "n_clicks"),
        State(IDs.Store.SESSION_ID, "data"),
        prevent_initial_call=True,
    )
    def download_current_image(n_clicks, session_id):
        return export_current_image(ctx, n_clicks, session_id)
