from __future__ import annotations

import csv
import io
import logging
import zipfile

import pandas as pd
import requests

from fungi_browser.core.columns import ALL_COLUMNS, Column
from fungi_browser.core.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)

OCCURRENCES_MEMBER = "occurrences.txt"
DEFAULT_TIMEOUT = 60.0


def empty_dataset() -> pd.DataFrame:
    """
    Zero-row dataset with every known column, used when loading fails so the
    rest of the pipeline degrades to "no results".
    """
    data = {
        c.value: pd.Series(dtype="Int64" if c.is_numeric else "object")
        for c in ALL_COLUMNS
    }
    return pd.DataFrame(data)


def _find_member(archive: zipfile.ZipFile) -> str:
    # The archive may nest the file in a folder
    for name in archive.namelist():
        if name.rsplit("/", 1)[-1] == OCCURRENCES_MEMBER:
            return name
    raise DatasetLoadError(f"'{OCCURRENCES_MEMBER}' not found in archive")


def parse_occurrences(raw: bytes | str) -> pd.DataFrame:
    """
    Parse tab-delimited occurrence text into a DataFrame holding only the known
    columns that are present.

    - quotes are not special
    - empty cells and "NA" become missing
    - YearCollected becomes a nullable integer column
    """
    buffer = io.BytesIO(raw.encode("utf-8") if isinstance(raw, str) else raw)
    try:
        df = pd.read_csv(
            buffer,
            sep="\t",
            quoting=csv.QUOTE_NONE,
            dtype=str,
            keep_default_na=False,
            na_values=["", "NA"],
            on_bad_lines="warn",
            encoding_errors="replace",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Could not parse occurrence data: {e}") from e

    keep = [c.value for c in ALL_COLUMNS if c.value in df.columns]
    missing = [c.value for c in ALL_COLUMNS if c.value not in df.columns]
    if missing:
        logger.warning("Occurrence data is missing columns", extra={"missing": missing})

    df = df[keep].copy()
    if Column.YEAR_COLLECTED.value in df.columns:
        df[Column.YEAR_COLLECTED.value] = Column.YEAR_COLLECTED.series(df)

    return df.reset_index(drop=True)


def read_archive(payload: bytes) -> pd.DataFrame:
    """Extract and parse the occurrence file from zip archive bytes."""
    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            member = _find_member(archive)
            raw = archive.read(member)
    except zipfile.BadZipFile as e:
        raise DatasetLoadError(f"Downloaded file is not a valid zip archive: {e}") from e

    return parse_occurrences(raw)


def fetch_dataset(url: str, timeout: float = DEFAULT_TIMEOUT) -> pd.DataFrame:
    """
    Download the zipped occurrence archive at `url` and return the parsed
    dataset.

    :raises DatasetLoadError: on any network, archive or parse failure
    """
    logger.info("Fetching occurrence archive", extra={"url": url})
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise DatasetLoadError(f"Timed out after {timeout}s fetching {url}") from e
    except requests.exceptions.RequestException as e:
        raise DatasetLoadError(f"Failed to fetch {url}: {e}") from e

    df = read_archive(response.content)
    logger.info(
        "Occurrence archive loaded",
        extra={"url": url, "n_records": len(df), "columns": list(df.columns)},
    )
    return df
