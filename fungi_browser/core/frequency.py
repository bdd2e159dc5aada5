from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np
import pandas as pd

from .columns import Column, VISUALIZABLE_COLUMNS


def _to_python(value: Any) -> Any:
    # numpy scalars (e.g. Int64 years) -> plain int/str for JSON and plotting
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(frozen=True)
class FrequencyTable:
    """
    Value -> count mapping over one column of a view.

    Entries are kept in a meaningful order: first-seen order straight out of
    `aggregate`, count-descending after `top_n`.
    """

    column: Column
    entries: Tuple[Tuple[Any, int], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Tuple[Any, int]]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def total(self) -> int:
        return sum(count for _, count in self.entries)

    def get(self, value: Any, default: int = 0) -> int:
        for v, count in self.entries:
            if v == value:
                return count
        return default

    def values(self) -> List[Any]:
        return [v for v, _ in self.entries]

    def to_dict(self) -> Dict[Any, int]:
        return dict(self.entries)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self.entries), columns=["value", "count"])


def aggregate(view: pd.DataFrame, column: "str | Column") -> FrequencyTable:
    """
    Count occurrences of each distinct value of `column` in the view.

    Pass the filtered view here, never the display-limited one, otherwise
    counts silently cap at the display size. Missing values are not counted.

    :raises InvalidColumnError: if column is not a visualisable column
    """
    column = Column.parse(column, allowed=VISUALIZABLE_COLUMNS)

    values = column.series(view).dropna()
    if values.empty:
        return FrequencyTable(column=column)

    # sort=False keeps groups in first-appearance order
    counts = values.groupby(values, sort=False).size()
    entries = tuple((_to_python(v), int(n)) for v, n in counts.items())
    return FrequencyTable(column=column, entries=entries)


def top_n(table: FrequencyTable, n: int) -> FrequencyTable:
    """
    The `n` most frequent entries, count descending.

    Ties keep the order of the input table (first-seen order for tables
    produced by `aggregate`).
    """
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")

    # sorted() is stable, reverse=True included
    ranked = sorted(table.entries, key=lambda entry: entry[1], reverse=True)
    return FrequencyTable(column=table.column, entries=tuple(ranked[:n]))
