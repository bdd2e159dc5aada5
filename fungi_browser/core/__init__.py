"""
Core domain layer: columns, filter state, the filter/sort/limit pipeline,
frequency aggregation, the dataflow graph, and the view registry
"""

from .columns import Column, SORTABLE_COLUMNS, VISUALIZABLE_COLUMNS
from .filter_state import FilterSpec, SortDirection, SortSpec
from .frequency import FrequencyTable, aggregate, top_n
from .pipeline import filter_records, limit_records, result_count, sort_records
from .dataflow import DataflowGraph
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = [
    "Column",
    "SORTABLE_COLUMNS",
    "VISUALIZABLE_COLUMNS",
    "FilterSpec",
    "SortDirection",
    "SortSpec",
    "FrequencyTable",
    "aggregate",
    "top_n",
    "filter_records",
    "limit_records",
    "result_count",
    "sort_records",
    "DataflowGraph",
    "BaseView",
    "ViewRegistry",
]
