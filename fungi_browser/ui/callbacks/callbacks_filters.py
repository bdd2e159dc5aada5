from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import dash
from dash import Input, Output

from fungi_browser.core.filter_state import FilterSpec
from fungi_browser.ui.ids import IDs

if TYPE_CHECKING:
    from fungi_browser.ui.config import AppConfig


def build_filter_state(
        occurrence_id: Optional[str],
        genus: Optional[str],
        year_value: Optional[List[int]],
        sort_column: Optional[str],
        sort_order: Optional[str],
        year_domain: tuple,
) -> Dict[str, Any]:
    """
    Collapse raw control values into the JSON-serialisable filter state store.
    Values are not validated here; the session does that when applying them.
    """
    spec = {
        "occurrence_id": (occurrence_id or "").strip(),
        "genus": (genus or "").strip(),
        "year_range": list(year_value) if year_value else None,
        "year_domain": list(year_domain),
    }
    return {
        "filters": spec,
        "sort": {"column": sort_column, "direction": sort_order},
    }


def filter_spec_from_state(fs_data: Dict[str, Any]) -> FilterSpec:
    return FilterSpec.from_dict(fs_data.get("filters") or {})


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Controls -> FilterState store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.OCCURRENCE_ID_INPUT, "value"),
        Input(IDs.Control.GENUS_INPUT, "value"),
        Input(IDs.Control.YEAR_SLIDER, "value"),
        Input(IDs.Control.SORT_COLUMN_SELECT, "value"),
        Input(IDs.Control.SORT_ORDER_RADIO, "value"),
    )
    def update_filter_state(occurrence_id, genus, year_value, sort_column, sort_order):
        return build_filter_state(
            occurrence_id,
            genus,
            year_value,
            sort_column,
            sort_order,
            ctx.global_config.year_domain,
        )
