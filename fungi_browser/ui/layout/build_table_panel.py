from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from fungi_browser.ui.ids import IDs


def build_table_panel() -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                html.H5(id=IDs.Control.RESULT_COUNT, className="mb-3"),
                dcc.Loading(
                    html.Div(
                        id=IDs.Control.RESULT_TABLE,
                        style={
                            "overflowX": "auto",
                            "overflowY": "auto",
                            "height": "600px",
                            "width": "100%",
                        },
                    ),
                    type="default",
                ),
            ]
        ),
        className="mt-3",
    )
