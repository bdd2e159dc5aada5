from __future__ import annotations

from enum import Enum
from typing import FrozenSet, List

import pandas as pd

from .exceptions import InvalidColumnError


class Column(str, Enum):
    """
    Closed set of occurrence columns the browser knows about.

    The enum value is the column header used in the source archive, so a
    validated Column can always be used to index the DataFrame.
    """

    OCCURRENCE_ID = "OccurrenceID"
    ACCESSION = "Accession"
    GENUS = "Genus"
    SPECIFIC_EPITHET = "SpecificEpithet"
    YEAR_COLLECTED = "YearCollected"
    SPECIMEN_NOTES = "SpecimenNotes"

    @property
    def is_numeric(self) -> bool:
        return self is Column.YEAR_COLLECTED

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, selector: "str | Column", allowed: FrozenSet["Column"] | None = None) -> "Column":
        """
        Resolve a selector (enum member or header string) to a Column.

        :param selector: value coming from the UI or a caller
        :param allowed: optional subset the selector must belong to
        :raises InvalidColumnError: if the selector is unknown or not allowed
        """
        try:
            column = selector if isinstance(selector, Column) else cls(selector)
        except ValueError:
            raise InvalidColumnError(f"Unknown column '{selector}'") from None

        if allowed is not None and column not in allowed:
            names = ", ".join(c.value for c in ordered(allowed))
            raise InvalidColumnError(
                f"Column '{column.value}' is not allowed here (expected one of: {names})"
            )
        return column

    def series(self, df: pd.DataFrame) -> pd.Series:
        """
        Typed accessor for this column.

        A DataFrame without the column yields an all-missing Series aligned to
        its index, so predicates treat every record as lacking the field.
        """
        if self.value not in df.columns:
            dtype = "Int64" if self.is_numeric else "object"
            return pd.Series(pd.NA, index=df.index, dtype=dtype, name=self.value)

        values = df[self.value]
        if self.is_numeric:
            numeric = pd.to_numeric(values, errors="coerce")
            if not pd.api.types.is_integer_dtype(numeric):
                # Fractional years can't be cast safely; treat as missing
                numeric = numeric.where(numeric.mod(1).eq(0))
            return numeric.astype("Int64")
        return values


_LABELS = {
    Column.OCCURRENCE_ID: "Occurrence ID",
    Column.ACCESSION: "Accession",
    Column.GENUS: "Genus",
    Column.SPECIFIC_EPITHET: "Specific epithet",
    Column.YEAR_COLLECTED: "Year collected",
    Column.SPECIMEN_NOTES: "Specimen notes",
}

ALL_COLUMNS: List[Column] = list(Column)

# Free text notes are never sortable
SORTABLE_COLUMNS: FrozenSet[Column] = frozenset(
    {
        Column.OCCURRENCE_ID,
        Column.ACCESSION,
        Column.GENUS,
        Column.SPECIFIC_EPITHET,
        Column.YEAR_COLLECTED,
    }
)

# Identifiers are unique per record, so their frequencies are degenerate
VISUALIZABLE_COLUMNS: FrozenSet[Column] = frozenset(
    {
        Column.GENUS,
        Column.SPECIFIC_EPITHET,
        Column.YEAR_COLLECTED,
    }
)


def ordered(columns: FrozenSet[Column]) -> List[Column]:
    """Return a subset of columns in declaration order (for dropdowns, messages)."""
    return [c for c in ALL_COLUMNS if c in columns]
