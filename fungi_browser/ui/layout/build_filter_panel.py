from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from fungi_browser.config.model import GlobalConfig
from fungi_browser.core.columns import Column
from fungi_browser.core.filter_state import SortDirection
from fungi_browser.ui.helpers import sort_column_options, year_marks
from fungi_browser.ui.ids import IDs


def build_filter_panel(global_config: GlobalConfig) -> dbc.Card:
    year_min, year_max = global_config.year_domain

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.P(
                        "Filter the dataset using one or more of the following columns",
                        className="text-muted",
                    ),
                    html.Label("Search by OccurrenceID", className="form-label"),
                    dbc.Input(
                        id=IDs.Control.OCCURRENCE_ID_INPUT,
                        type="text",
                        value="",
                        debounce=True,
                        placeholder="Any identifier",
                        className="mb-3",
                    ),
                    html.Label("Search by Genus", className="form-label"),
                    dbc.Input(
                        id=IDs.Control.GENUS_INPUT,
                        type="text",
                        value="",
                        debounce=True,
                        placeholder="Any genus",
                        className="mb-3",
                    ),
                    html.Label("Search by YearCollected", className="form-label"),
                    dcc.RangeSlider(
                        id=IDs.Control.YEAR_SLIDER,
                        min=year_min,
                        max=year_max,
                        step=1,
                        value=[year_min, year_max],
                        marks=year_marks(year_min, year_max),
                        tooltip={"placement": "bottom", "always_visible": False},
                        allowCross=False,
                    ),
                    html.Hr(),
                    html.Label("Sort by", className="form-label"),
                    dcc.Dropdown(
                        id=IDs.Control.SORT_COLUMN_SELECT,
                        options=sort_column_options(),
                        value=Column.OCCURRENCE_ID.value,
                        clearable=False,
                        className="mb-3",
                    ),
                    html.Label("Sort order", className="form-label"),
                    dbc.RadioItems(
                        id=IDs.Control.SORT_ORDER_RADIO,
                        options=[
                            {"label": "Ascending", "value": SortDirection.ASCENDING.value},
                            {"label": "Descending", "value": SortDirection.DESCENDING.value},
                        ],
                        value=SortDirection.ASCENDING.value,
                    ),
                ]
            ),
        ],
        className="fb-sidebar",
    )
