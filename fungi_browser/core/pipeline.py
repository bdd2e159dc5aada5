"""
Filter -> sort -> limit stages over an occurrence DataFrame.

Every function here is pure: it never mutates its input and returns a new
(possibly empty) DataFrame view.
"""

from __future__ import annotations

import logging

import pandas as pd

from .columns import Column, SORTABLE_COLUMNS
from .filter_state import FilterSpec, SortDirection

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_CAP = 1000


def _contains(values: pd.Series, query: str) -> pd.Series:
    # Literal, unanchored, case-insensitive; missing values never match
    return values.astype("string").str.contains(query, case=False, regex=False, na=False)


def filter_records(dataset: pd.DataFrame, spec: FilterSpec) -> pd.DataFrame:
    """
    Apply every present constraint of the FilterSpec (logical AND).

    Null-year policy: a record without YearCollected is kept only while the
    active year range covers the whole `spec.year_domain`, which is the
    configured slider range rather than the years observed in `dataset`.
    Numeric years outside the active range are dropped even then, so a 1700
    record is excluded under the default (1850, 2023) range.
    """
    mask = pd.Series(True, index=dataset.index)

    if spec.occurrence_id:
        mask &= _contains(Column.OCCURRENCE_ID.series(dataset), spec.occurrence_id)

    if spec.genus:
        mask &= _contains(Column.GENUS.series(dataset), spec.genus)

    if spec.year_range is not None:
        lo, hi = spec.year_range
        years = Column.YEAR_COLLECTED.series(dataset)
        in_range = ((years >= lo) & (years <= hi)).fillna(spec.covers_year_domain)
        mask &= in_range.astype(bool)

    filtered = dataset.loc[mask.astype(bool).to_numpy()]
    logger.debug(
        "filter_records",
        extra={"n_in": len(dataset), "n_out": len(filtered), "filter_spec": spec.to_dict()},
    )
    return filtered


def sort_records(
        view: pd.DataFrame,
        column: "str | Column",
        direction: "str | SortDirection" = SortDirection.ASCENDING,
) -> pd.DataFrame:
    """
    Stable sort of the view on a single sortable column.

    Strings compare in their stored casing, YearCollected numerically.
    Missing values go last in both directions; ties keep input order.

    :raises InvalidColumnError: if column is unknown or not sortable
    """
    column = Column.parse(column, allowed=SORTABLE_COLUMNS)
    ascending = SortDirection.parse(direction) is SortDirection.ASCENDING

    if view.empty:
        return view

    # Sort on positions so duplicate index labels can't fan out rows
    key = column.series(view).reset_index(drop=True)
    order = key.sort_values(ascending=ascending, kind="mergesort", na_position="last").index
    return view.iloc[order.to_numpy()]


def limit_records(view: pd.DataFrame, cap: int = DEFAULT_DISPLAY_CAP) -> pd.DataFrame:
    """Leading `cap` rows of the view, for display only."""
    if cap < 0:
        raise ValueError(f"Display cap must be non-negative, got {cap}")
    return view.head(cap)


def result_count(view: pd.DataFrame) -> int:
    """Number of matching records. Call with the filtered view, not the limited one."""
    return int(len(view))


def format_result_count(count: int) -> str:
    return f"Number of results found: {count}"
