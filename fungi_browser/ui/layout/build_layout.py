from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from fungi_browser.ui.ids import IDs
from fungi_browser.ui.layout.build_filter_panel import build_filter_panel
from fungi_browser.ui.layout.build_navbar import build_navbar
from fungi_browser.ui.layout.build_plot_panel import build_plot_panel
from fungi_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from fungi_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    """
    Called once per page load (Dash functional layout), so every browser tab
    gets a fresh session id.
    """
    return dbc.Container(
        fluid=True,
        className="fb-root",
        children=[
            build_navbar(ctx.global_config),

            dcc.Store(id=IDs.Store.SESSION_ID, data=uuid.uuid4().hex, storage_type="memory"),
            dcc.Store(id=IDs.Store.FILTER_STATE, storage_type="memory"),

            dbc.Alert(
                id=IDs.Control.LOAD_ALERT,
                color="danger",
                is_open=False,
                dismissable=True,
                className="mt-3",
            ),

            dbc.Row(
                [
                    dbc.Col(build_filter_panel(ctx.global_config), md=3, className="mt-3"),
                    dbc.Col(
                        dcc.Tabs(
                            id="page-tabs",
                            value="table",
                            children=[
                                dcc.Tab(label="Table", value="table", children=[build_table_panel()]),
                                dcc.Tab(label="Visualise", value="visualise", children=[build_plot_panel(ctx.registry)]),
                            ],
                            className="mt-3",
                        ),
                        md=9,
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
