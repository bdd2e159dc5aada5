from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import pandas as pd

from fungi_browser.core.dataset_loader import empty_dataset, fetch_dataset
from fungi_browser.core.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], pd.DataFrame]


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: always a dataset, plus an error message on failure."""
    data: pd.DataFrame
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DatasetService:
    """
    Fetches the occurrence dataset for a session.

    Never raises: failures are logged and turned into an empty dataset with a
    user-facing message, so the filter/sort/visualise stages degrade to
    "no results" instead of crashing.
    """

    def __init__(self, source_url: str, timeout: float, fetcher: Fetcher = fetch_dataset):
        self.source_url = source_url
        self.timeout = timeout
        self._fetcher = fetcher

    def load(self) -> LoadResult:
        try:
            df = self._fetcher(self.source_url, self.timeout)
        except DatasetLoadError as e:
            logger.error(
                "Dataset load failed",
                extra={"url": self.source_url, "error": str(e)},
            )
            return LoadResult(data=empty_dataset(), error=f"Failed to load data: {e}")
        except Exception as e:  # hard guard against unexpected issues
            logger.exception(
                "Unexpected error while loading dataset",
                extra={"url": self.source_url},
            )
            return LoadResult(data=empty_dataset(), error=f"Failed to load data: {e}")

        return LoadResult(data=df)
