import pytest

from backend.data_loader import properties_to_df
from backend.sorting import SortOption, sort_properties


def _ids(df):
    return df["id"].tolist()


def test_none_keeps_input_order(sample_properties_df):
    assert _ids(sort_properties(sample_properties_df, "none")) == ["a", "b", "c", "d"]


def test_ascending_is_stable_for_ties(sample_properties_df):
    out = sort_properties(sample_properties_df, SortOption.ASC)
    assert _ids(out) == ["a", "b", "d", "c"]
    assert out["price"].is_monotonic_increasing


def test_descending_is_stable_for_ties(sample_properties_df):
    out = sort_properties(sample_properties_df, "desc")
    assert _ids(out) == ["c", "b", "d", "a"]
    assert out["price"].is_monotonic_decreasing


def test_sort_is_idempotent(sample_properties_df):
    once = sort_properties(sample_properties_df, "asc")
    twice = sort_properties(once, "asc")
    assert _ids(once) == _ids(twice)


def test_input_is_not_modified(sample_properties_df):
    before = sample_properties_df.copy()
    sort_properties(sample_properties_df, "desc")
    assert _ids(sample_properties_df) == _ids(before)


def test_missing_prices_go_last():
    df = properties_to_df([{"_id": "x", "price": None}, {"_id": "y", "price": 5}, {"_id": "z", "price": 1}])
    assert _ids(sort_properties(df, "asc")) == ["z", "y", "x"]
    assert _ids(sort_properties(df, "desc")) == ["y", "z", "x"]


def test_unknown_option_is_rejected(sample_properties_df):
    with pytest.raises(ValueError):
        sort_properties(sample_properties_df, "newest")
