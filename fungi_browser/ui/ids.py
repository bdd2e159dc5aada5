from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        SESSION_ID = "session-id"
        FILTER_STATE = "filter-state"

    class Control:
        # Filters
        OCCURRENCE_ID_INPUT = "occurrence-id-input"
        GENUS_INPUT = "genus-input"
        YEAR_SLIDER = "year-slider"

        # Sorting
        SORT_COLUMN_SELECT = "sort-column-select"
        SORT_ORDER_RADIO = "sort-order-radio"

        # Results
        RESULT_COUNT = "result-count"
        RESULT_TABLE = "result-table"
        LOAD_ALERT = "load-alert"

        # Visualisation
        VIZ_KIND_RADIO = "viz-kind-radio"
        VIZ_COLUMN_SELECT = "viz-column-select"
        MAIN_GRAPH = "main-graph"

        # Export
        EXPORT_BTN = "export-btn"
        EXPORT_STATUS = "export-status"
        DOWNLOAD_IMAGE = "download-image"
