from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Any, Callable, Dict, Optional, Tuple

import pandas as pd
import plotly.graph_objs as go

from fungi_browser.config.model import GlobalConfig
from fungi_browser.core.base_view import BaseView
from fungi_browser.core.columns import Column, VISUALIZABLE_COLUMNS
from fungi_browser.core.dataflow import DataflowGraph
from fungi_browser.core.filter_state import FilterSpec, SortSpec
from fungi_browser.core.frequency import FrequencyTable, aggregate
from fungi_browser.core.pipeline import (
    filter_records,
    format_result_count,
    limit_records,
    result_count,
    sort_records,
)
from fungi_browser.core.view_registry import ViewRegistry
from fungi_browser.services.dataset_service import DatasetService, LoadResult

logger = logging.getLogger(__name__)

DEFAULT_VIEW_ID = "wordcloud"
DEFAULT_VIZ_COLUMN = Column.GENUS


class BrowserSession:
    """
    Per-session pipeline state.

    Wires the dataflow graph:

        load -> dataset -> filtered -> sorted -> displayed
                           filtered -> count
                           filtered -> frequencies -> visualization -> figure

    Inputs are filter_spec, sort_spec, viz_kind and viz_column. The dataset
    is fetched the first time any stage needs it and kept for the lifetime of
    the session.
    """

    def __init__(
            self,
            session_id: str,
            *,
            dataset_service: DatasetService,
            config: GlobalConfig,
            registry: ViewRegistry,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session_id = session_id
        self.config = config
        self._registry = registry
        self._view_options: Dict[str, Dict[str, Any]] = {
            "barchart": {"top_n": config.bar_chart_top_n},
        }
        self._clock = clock
        self._lock = threading.RLock()
        self.last_access = clock()

        g = DataflowGraph()
        g.add_input("filter_spec", FilterSpec(year_domain=config.year_domain))
        g.add_input("sort_spec", SortSpec())
        g.add_input("viz_kind", DEFAULT_VIEW_ID if DEFAULT_VIEW_ID in registry else None)
        g.add_input("viz_column", DEFAULT_VIZ_COLUMN)

        g.add_stage("load", dataset_service.load)
        g.add_stage("dataset", lambda result: result.data, ("load",))
        g.add_stage("filtered", filter_records, ("dataset", "filter_spec"))
        g.add_stage(
            "sorted",
            lambda view, spec: sort_records(view, spec.column, spec.direction),
            ("filtered", "sort_spec"),
        )
        g.add_stage("displayed", lambda view: limit_records(view, config.display_cap), ("sorted",))
        g.add_stage("count", result_count, ("filtered",))
        g.add_stage("frequencies", aggregate, ("filtered", "viz_column"))
        g.add_stage("view", self._create_view, ("viz_kind",))
        g.add_stage("visualization", lambda view, table: view.compute_data(table), ("view", "frequencies"))
        g.add_stage("figure", lambda view, data: view.figure(data), ("view", "visualization"))
        self.graph = g

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def set_filters(self, spec: FilterSpec) -> FilterSpec:
        """
        Specs are validated on construction (an inverted year range raises
        InvalidFilterError there). The year domain is always this session's.
        """
        if spec.year_domain != self.config.year_domain:
            spec = replace(spec, year_domain=self.config.year_domain)
        self._set("filter_spec", spec)
        return spec

    def set_sort(self, spec: SortSpec) -> SortSpec:
        self._set("sort_spec", spec)
        return spec

    def set_visualization(self, kind: str, column: "str | Column") -> None:
        """
        :raises KeyError: if kind is not a registered view
        :raises InvalidColumnError: if column can't be visualised
        """
        if kind not in self._registry:
            raise KeyError(f"View '{kind}' not found")
        parsed = Column.parse(column, allowed=VISUALIZABLE_COLUMNS)
        with self._lock:
            self.graph.set_input("viz_kind", kind)
            self.graph.set_input("viz_column", parsed)
            self.touch()

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------
    @property
    def load_result(self) -> LoadResult:
        return self._get("load")

    @property
    def load_error(self) -> Optional[str]:
        return self.load_result.error

    @property
    def filter_spec(self) -> FilterSpec:
        return self._get("filter_spec")

    @property
    def sort_spec(self) -> SortSpec:
        return self._get("sort_spec")

    @property
    def viz_kind(self) -> Optional[str]:
        return self._get("viz_kind")

    def dataset(self) -> pd.DataFrame:
        return self._get("dataset")

    def filtered(self) -> pd.DataFrame:
        return self._get("filtered")

    def displayed(self) -> pd.DataFrame:
        return self._get("displayed")

    def count(self) -> int:
        return self._get("count")

    def count_text(self) -> str:
        return format_result_count(self.count())

    def frequencies(self) -> FrequencyTable:
        return self._get("frequencies")

    def visualization(self) -> FrequencyTable:
        return self._get("visualization")

    def figure(self) -> go.Figure:
        return self._get("figure")

    # ------------------------------------------------------------------
    # Requests
    #
    # Each one sets its inputs and reads its outputs under a single lock
    # acquisition, so concurrent callbacks on the same session can't mix
    # one request's filters into another's results.
    # ------------------------------------------------------------------
    def results(self, filters: FilterSpec, sort: SortSpec) -> Tuple[str, pd.DataFrame]:
        """
        :return: (count text, displayed rows) for exactly these filters and sort
        """
        with self._lock:
            self.set_filters(filters)
            self.set_sort(sort)
            return self.count_text(), self.displayed()

    def render(self, filters: FilterSpec, kind: str, column: "str | Column") -> go.Figure:
        """
        :raises KeyError: if kind is not a registered view
        :raises InvalidColumnError: if column can't be visualised
        """
        with self._lock:
            self.set_filters(filters)
            self.set_visualization(kind, column)
            return self.figure()

    def current_figure(self) -> Tuple[Optional[str], Optional[go.Figure]]:
        """The selected view id and its figure, or (None, None) if nothing is selected."""
        with self._lock:
            kind = self.viz_kind
            if kind is None:
                return None, None
            return kind, self.figure()

    def runs(self, stage: str) -> int:
        return self.graph.runs(stage)

    def touch(self) -> None:
        """Mark the session as used now (idle eviction works off this)."""
        self.last_access = self._clock()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _create_view(self, kind: Optional[str]) -> BaseView:
        if kind is None:
            raise KeyError("No visualisation views are registered")
        return self._registry.create(kind, **self._view_options.get(kind, {}))

    def _set(self, name: str, value: Any) -> None:
        with self._lock:
            if self.graph.set_input(name, value):
                logger.debug("session_input_changed", extra={"session_id": self.session_id, "input": name})
            self.touch()

    def _get(self, name: str) -> Any:
        with self._lock:
            self.touch()
            return self.graph.get(name)


class SessionRegistry:
    """
    Owns one BrowserSession per session id.

    - a session is created on first access
    - close() tears it down
    - sessions idle for longer than ttl_seconds are evicted on the next access
    - beyond max_sessions the least recently used session is evicted

    Sessions never share a dataset or any pipeline state.
    """

    def __init__(
            self,
            factory: Callable[[str], BrowserSession],
            *,
            ttl_seconds: float = 3600,
            max_sessions: int = 32,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = factory
        self._ttl = ttl_seconds
        self._max = max_sessions
        self._clock = clock
        self._sessions: "OrderedDict[str, BrowserSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> BrowserSession:
        if not session_id:
            raise ValueError("session_id must be a non-empty string")

        with self._lock:
            self._evict_expired()

            session = self._sessions.get(session_id)
            if session is None:
                logger.info("Creating session", extra={"session_id": session_id})
                session = self._factory(session_id)
                self._sessions[session_id] = session
            self._sessions.move_to_end(session_id)
            session.touch()

            while len(self._sessions) > self._max:
                old_id, _ = self._sessions.popitem(last=False)
                logger.info("Evicting least recently used session", extra={"session_id": old_id})

            return session

    def close(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Closed session", extra={"session_id": session_id})
        return removed

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [
            sid for sid, s in self._sessions.items()
            if now - s.last_access > self._ttl
        ]
        for sid in expired:
            del self._sessions[sid]
            logger.info("Evicting idle session", extra={"session_id": sid})


