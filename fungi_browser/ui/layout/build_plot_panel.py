from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from fungi_browser.core.view_registry import ViewRegistry
from fungi_browser.services.session_service import DEFAULT_VIEW_ID, DEFAULT_VIZ_COLUMN
from fungi_browser.ui.helpers import view_options, viz_column_options
from fungi_browser.ui.ids import IDs


def build_plot_panel(registry: ViewRegistry) -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                dbc.Row(
                    [
                        dbc.Col(
                            [
                                html.Label("Visualisation", className="form-label"),
                                dbc.RadioItems(
                                    id=IDs.Control.VIZ_KIND_RADIO,
                                    options=view_options(registry),
                                    value=DEFAULT_VIEW_ID,
                                    inline=True,
                                ),
                            ],
                            md=5,
                        ),
                        dbc.Col(
                            [
                                html.Label("Column", className="form-label"),
                                dcc.Dropdown(
                                    id=IDs.Control.VIZ_COLUMN_SELECT,
                                    options=viz_column_options(),
                                    value=DEFAULT_VIZ_COLUMN.value,
                                    clearable=False,
                                ),
                            ],
                            md=4,
                        ),
                        dbc.Col(
                            [
                                dbc.Button(
                                    "Download image",
                                    id=IDs.Control.EXPORT_BTN,
                                    color="primary",
                                    className="mt-4",
                                ),
                                dcc.Download(id=IDs.Control.DOWNLOAD_IMAGE),
                            ],
                            md=3,
                            className="text-end",
                        ),
                    ],
                    className="mb-2",
                ),
                html.Div(id=IDs.Control.EXPORT_STATUS, className="text-danger small"),
                dcc.Loading(
                    dcc.Graph(id=IDs.Control.MAIN_GRAPH, config={"displaylogo": False}),
                    type="default",
                ),
            ]
        ),
        className="mt-3",
    )
