from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .columns import Column, SORTABLE_COLUMNS
from .exceptions import InvalidFilterError

DEFAULT_YEAR_DOMAIN: Tuple[int, int] = (1850, 2023)


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: "str | SortDirection | None") -> "SortDirection":
        if value is None:
            return cls.ASCENDING
        try:
            return cls(value)
        except ValueError:
            raise InvalidFilterError(f"Unknown sort direction '{value}'") from None


@dataclass(frozen=True)
class FilterSpec:
    """
    Represents the current user filters.

    Fields:

    - occurrence_id: case-insensitive substring matched against OccurrenceID
    - genus: case-insensitive substring matched against Genus
    - year_range: inclusive (min, max) on YearCollected, None means no range
    - year_domain: the full range offered by the UI slider (config year_min,
      year_max). It is not derived from the years present in the data.

    Empty strings and a None range impose no restriction.
    """

    occurrence_id: str = ""
    genus: str = ""
    year_range: Optional[Tuple[int, int]] = None
    year_domain: Tuple[int, int] = DEFAULT_YEAR_DOMAIN

    def __post_init__(self) -> None:
        if self.year_range is not None:
            lo, hi = self.year_range
            if lo > hi:
                raise InvalidFilterError(
                    f"Year range minimum {lo} is greater than maximum {hi}"
                )
            object.__setattr__(self, "year_range", (int(lo), int(hi)))

    @property
    def covers_year_domain(self) -> bool:
        """True if the active range spans the whole domain (or there is no range)."""
        if self.year_range is None:
            return True
        lo, hi = self.year_range
        return lo <= self.year_domain[0] and hi >= self.year_domain[1]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["year_range"] = list(self.year_range) if self.year_range is not None else None
        data["year_domain"] = list(self.year_domain)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterSpec:
        year_range = data.get("year_range")
        year_domain = data.get("year_domain") or DEFAULT_YEAR_DOMAIN
        return cls(
            occurrence_id=(data.get("occurrence_id") or "").strip(),
            genus=(data.get("genus") or "").strip(),
            year_range=tuple(year_range) if year_range else None,
            year_domain=(int(year_domain[0]), int(year_domain[1])),
        )


@dataclass(frozen=True)
class SortSpec:
    column: Column = Column.OCCURRENCE_ID
    direction: SortDirection = SortDirection.ASCENDING

    @classmethod
    def from_values(cls, column: "str | Column", direction: "str | SortDirection | None" = None) -> SortSpec:
        """
        Build a SortSpec from raw UI values.

        :raises InvalidColumnError: if column is not sortable
        """
        return cls(
            column=Column.parse(column, allowed=SORTABLE_COLUMNS),
            direction=SortDirection.parse(direction),
        )
