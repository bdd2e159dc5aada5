from __future__ import annotations

import pandas as pd
import pytest

from fungi_browser.core.columns import Column
from fungi_browser.core.dataset_loader import empty_dataset
from fungi_browser.core.exceptions import InvalidColumnError, InvalidFilterError
from fungi_browser.core.filter_state import FilterSpec, SortDirection
from fungi_browser.core.pipeline import (
    filter_records,
    format_result_count,
    limit_records,
    result_count,
    sort_records,
)


def _make_occurrences() -> pd.DataFrame:
    """
    Six records:
    - two Ascomycetes-ish genera with mixed case
    - one record with no year
    - one record with no genus
    """
    return pd.DataFrame(
        {
            "OccurrenceID": ["UBC-F001", "UBC-F002", "ubc-f003", "UBC-F004", "UBC-F005", "UBC-F006"],
            "Accession": ["F1", "F2", "F3", "F4", "F5", "F6"],
            "Genus": ["Ascomycetes", "Boletus", "Amanita", "Boletus", None, "Russula"],
            "SpecificEpithet": ["sp.", "edulis", "muscaria", "edulis", "x", "emetica"],
            "YearCollected": pd.array([1920, 1975, 2001, pd.NA, 1999, 1860], dtype="Int64"),
            "SpecimenNotes": ["", "under pine", None, "moss", "", "wet"],
        }
    )


def _ids(df: pd.DataFrame) -> list:
    return list(df["OccurrenceID"])


# -----------------------------------------------------------------------------
# Filter Engine
# -----------------------------------------------------------------------------
def test_filter_empty_spec_keeps_everything():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec())
    assert _ids(out) == _ids(df)


def test_filter_genus_is_case_insensitive_substring():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(genus="asco"))
    assert list(out["Genus"]) == ["Ascomycetes"]

    out = filter_records(df, FilterSpec(genus="LET"))
    assert list(out["Genus"]) == ["Boletus", "Boletus"]


def test_filter_identifier_is_case_insensitive_and_unanchored():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(occurrence_id="F00"))
    assert len(out) == 6

    out = filter_records(df, FilterSpec(occurrence_id="c-f003"))
    assert _ids(out) == ["ubc-f003"]


def test_filter_query_is_literal_not_regex():
    df = _make_occurrences()
    df.loc[0, "OccurrenceID"] = "UBC.F001"
    out = filter_records(df, FilterSpec(occurrence_id="."))
    assert _ids(out) == ["UBC.F001"]


def test_filter_missing_genus_is_excluded_by_genus_query():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(genus="a"))
    assert "UBC-F005" not in _ids(out)


def test_filter_missing_column_excludes_all_when_queried():
    df = _make_occurrences().drop(columns=["Genus"])
    assert filter_records(df, FilterSpec(genus="bol")).empty
    # Not querying the field leaves records alone
    assert len(filter_records(df, FilterSpec())) == 6


def test_filter_year_range_inclusive_and_drops_null_years_when_narrowed():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(year_range=(1920, 2001)))

    assert _ids(out) == ["UBC-F001", "UBC-F002", "ubc-f003", "UBC-F005"]
    years = out["YearCollected"]
    assert years.notna().all()
    assert ((years >= 1920) & (years <= 2001)).all()


def test_filter_full_domain_range_keeps_null_years():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(year_range=(1850, 2023)))
    assert "UBC-F004" in _ids(out)
    assert len(out) == 6


def test_filter_full_domain_range_still_drops_out_of_domain_years():
    df = _make_occurrences()
    df["YearCollected"] = pd.array([1920, 1975, 2001, pd.NA, 1999, 1700], dtype="Int64")
    out = filter_records(df, FilterSpec(year_range=(1850, 2023)))
    assert "UBC-F006" not in _ids(out)
    assert "UBC-F004" in _ids(out)


def test_filter_year_domain_is_the_configured_range_not_the_observed_one():
    df = _make_occurrences()

    # Observed years span 1860..2001, narrower than the configured domain
    observed = filter_records(df, FilterSpec(year_range=(1860, 2001)))
    assert "UBC-F004" not in _ids(observed)

    configured = filter_records(
        df, FilterSpec(year_range=(1900, 2000), year_domain=(1900, 2000))
    )
    assert "UBC-F004" in _ids(configured)
    assert "UBC-F006" not in _ids(configured)


def test_filter_constraints_are_anded_and_commute():
    df = _make_occurrences()
    spec = FilterSpec(genus="bol", year_range=(1970, 1980))
    out = filter_records(df, spec)
    assert _ids(out) == ["UBC-F002"]

    # Applying the constraints one at a time, in either order, agrees
    a = filter_records(filter_records(df, FilterSpec(genus="bol")), FilterSpec(year_range=(1970, 1980)))
    b = filter_records(filter_records(df, FilterSpec(year_range=(1970, 1980))), FilterSpec(genus="bol"))
    assert _ids(a) == _ids(b) == _ids(out)


def test_filter_is_subset_and_idempotent():
    df = _make_occurrences()
    spec = FilterSpec(occurrence_id="ubc", genus="u", year_range=(1900, 2020))
    once = filter_records(df, spec)
    twice = filter_records(once, spec)

    assert set(_ids(once)) <= set(_ids(df))
    pd.testing.assert_frame_equal(once, twice)


def test_filter_zero_matches_is_empty_not_error():
    df = _make_occurrences()
    out = filter_records(df, FilterSpec(genus="nothing-like-this"))
    assert out.empty
    assert list(out.columns) == list(df.columns)


def test_filter_does_not_mutate_input():
    df = _make_occurrences()
    before = df.copy()
    filter_records(df, FilterSpec(genus="bol", year_range=(1900, 2000)))
    pd.testing.assert_frame_equal(df, before)


def test_filter_spec_rejects_inverted_range():
    with pytest.raises(InvalidFilterError):
        FilterSpec(year_range=(2000, 1990))


# -----------------------------------------------------------------------------
# Sort Engine
# -----------------------------------------------------------------------------
def test_sort_by_genus_ascending_and_descending_nulls_last():
    df = _make_occurrences()

    asc = sort_records(df, "Genus", "asc")
    assert list(asc["Genus"])[:5] == ["Amanita", "Ascomycetes", "Boletus", "Boletus", "Russula"]
    assert pd.isna(asc["Genus"].iloc[-1])

    desc = sort_records(df, Column.GENUS, SortDirection.DESCENDING)
    assert list(desc["Genus"])[:5] == ["Russula", "Boletus", "Boletus", "Ascomycetes", "Amanita"]
    assert pd.isna(desc["Genus"].iloc[-1])


def test_sort_ties_keep_original_order_in_both_directions():
    df = _make_occurrences()
    asc = sort_records(df, "SpecificEpithet", "asc")
    desc = sort_records(df, "SpecificEpithet", "desc")

    # UBC-F002 and UBC-F004 both have 'edulis'
    assert [i for i in _ids(asc) if i in ("UBC-F002", "UBC-F004")] == ["UBC-F002", "UBC-F004"]
    assert [i for i in _ids(desc) if i in ("UBC-F002", "UBC-F004")] == ["UBC-F002", "UBC-F004"]


def test_sort_year_is_numeric_with_nulls_last():
    df = _make_occurrences()
    out = sort_records(df, "YearCollected", "asc")
    years = list(out["YearCollected"])
    assert years[:5] == [1860, 1920, 1975, 1999, 2001]
    assert pd.isna(years[-1])

    out = sort_records(df, "YearCollected", "desc")
    years = list(out["YearCollected"])
    assert years[:5] == [2001, 1999, 1975, 1920, 1860]
    assert pd.isna(years[-1])


def test_sort_strings_keep_natural_casing():
    df = _make_occurrences()
    out = sort_records(df, "OccurrenceID", "asc")
    # Upper case sorts before lower case
    assert _ids(out)[-1] == "ubc-f003"


def test_sort_is_stable_on_already_sorted_view():
    df = _make_occurrences()
    once = sort_records(df, "Genus", "desc")
    twice = sort_records(once, "Genus", "desc")
    assert _ids(once) == _ids(twice)


def test_sort_reversal_without_ties():
    df = _make_occurrences()
    asc = sort_records(df, "Accession", "asc")
    desc = sort_records(asc, "Accession", "desc")
    assert _ids(desc) == list(reversed(_ids(asc)))


def test_sort_invalid_column_fails_fast():
    df = _make_occurrences()
    with pytest.raises(InvalidColumnError):
        sort_records(df, "Family", "asc")

    # Notes are deliberately not sortable
    with pytest.raises(InvalidColumnError):
        sort_records(df, "SpecimenNotes", "asc")


def test_sort_invalid_column_fails_even_on_empty_view():
    with pytest.raises(InvalidColumnError):
        sort_records(empty_dataset(), "Nope", "asc")


def test_sort_handles_duplicate_index_labels():
    df = _make_occurrences()
    df.index = [0, 0, 1, 1, 2, 2]
    out = sort_records(df, "Accession", "desc")
    assert len(out) == 6
    assert list(out["Accession"]) == ["F6", "F5", "F4", "F3", "F2", "F1"]


# -----------------------------------------------------------------------------
# Display Limiter + count
# -----------------------------------------------------------------------------
def test_limit_caps_rows_but_count_uses_filtered_view():
    n = 5000
    df = pd.DataFrame(
        {
            "OccurrenceID": [f"UBC-F{i:05d}" for i in range(n)],
            "Genus": ["Boletus"] * n,
            "YearCollected": pd.array([1950] * n, dtype="Int64"),
        }
    )

    filtered = filter_records(df, FilterSpec(genus="bol"))
    shown = limit_records(sort_records(filtered, "OccurrenceID", "asc"), 1000)

    assert len(shown) == 1000
    assert result_count(filtered) == 5000
    assert len(shown) != result_count(filtered)
    assert format_result_count(result_count(filtered)) == "Number of results found: 5000"


def test_limit_is_a_prefix_take():
    df = _make_occurrences()
    out = limit_records(df, 3)
    assert _ids(out) == _ids(df)[:3]
    assert len(limit_records(df, 1000)) == 6


def test_limit_rejects_negative_cap():
    with pytest.raises(ValueError):
        limit_records(_make_occurrences(), -1)


def test_empty_dataset_pipeline():
    df = empty_dataset()
    filtered = filter_records(df, FilterSpec(genus="bol", year_range=(1900, 1950)))
    shown = limit_records(sort_records(filtered, "YearCollected", "desc"))

    assert result_count(filtered) == 0
    assert shown.empty
    assert format_result_count(0) == "Number of results found: 0"
