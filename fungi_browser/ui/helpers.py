from __future__ import annotations

from typing import Dict, List

import dash_bootstrap_components as dbc
import pandas as pd
from dash import html

from fungi_browser.core.columns import SORTABLE_COLUMNS, VISUALIZABLE_COLUMNS, ordered
from fungi_browser.core.view_registry import ViewRegistry


def sort_column_options() -> List[Dict[str, str]]:
    return [{"label": c.label, "value": c.value} for c in ordered(SORTABLE_COLUMNS)]


def viz_column_options() -> List[Dict[str, str]]:
    return [{"label": c.label, "value": c.value} for c in ordered(VISUALIZABLE_COLUMNS)]


def view_options(registry: ViewRegistry) -> List[Dict[str, str]]:
    return [{"label": cls.label, "value": cls.id} for cls in registry.all_classes()]


def year_marks(year_min: int, year_max: int, step: int = 25) -> Dict[int, str]:
    marks = {y: str(y) for y in range(year_min, year_max + 1, step)}
    marks[year_max] = str(year_max)
    return marks


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Missing values as blanks rather than 'nan' / '<NA>'."""
    return df.astype(object).where(df.notna(), "")


def records_table(df: pd.DataFrame):
    """Bootstrap table for the displayed rows."""
    if df.empty:
        return html.Div("No records match the current filters.", className="text-muted p-3")

    return dbc.Table.from_dataframe(
        display_frame(df),
        striped=True,
        bordered=False,
        hover=True,
        size="sm",
        className="mb-0",
    )
