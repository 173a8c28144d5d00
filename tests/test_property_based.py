"""Property-based tests using Hypothesis.

Invariants of the listings pipeline: filter identity and bounds, sort
idempotence and reversal, pagination coverage.
"""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from backend import pagination
from backend.data_loader import properties_to_df
from backend.filters import FilterCriteria, filter_properties
from backend.sorting import sort_properties

prices = st.lists(st.integers(min_value=0, max_value=10_000_000), max_size=40)


def _df(price_list):
    return properties_to_df(
        [
            {"_id": f"p{i}", "price": p, "BHK": 1 + i % 4, "gym": i % 2 == 0, "parking": i % 3 == 0}
            for i, p in enumerate(price_list)
        ]
    )


@settings(deadline=None)
@given(prices)
def test_no_bounds_is_identity(price_list):
    df = _df(price_list)
    assert filter_properties(df, FilterCriteria())["id"].tolist() == df["id"].tolist()


@settings(deadline=None)
@given(prices, st.integers(min_value=0, max_value=10_000_000))
def test_min_price_partitions(price_list, m):
    df = _df(price_list)
    kept = filter_properties(df, FilterCriteria(min_price=m))
    assert (kept["price"] >= m).all()
    excluded = df[~df["id"].isin(kept["id"])]
    assert (excluded["price"] < m).all()


@settings(deadline=None)
@given(prices)
def test_sort_is_idempotent(price_list):
    once = sort_properties(_df(price_list), "asc")
    assert sort_properties(once, "asc")["id"].tolist() == once["id"].tolist()


@settings(deadline=None)
@given(st.lists(st.integers(min_value=0, max_value=10_000_000), unique=True, max_size=40))
def test_desc_reverses_asc_for_distinct_prices(price_list):
    df = _df(price_list)
    asc = sort_properties(df, "asc")["id"].tolist()
    desc = sort_properties(df, "desc")["id"].tolist()
    assert desc == asc[::-1]


@settings(deadline=None)
@given(prices)
def test_pages_reproduce_ordered_sequence(price_list):
    ordered = sort_properties(_df(price_list), "desc")
    pages = pagination.total_pages(len(ordered))
    assert pages == math.ceil(len(ordered) / 9)
    ids = []
    for n in pagination.page_numbers(pages):
        page = pagination.page_slice(ordered, n)
        assert 0 < len(page) <= 9
        ids.extend(page["id"].tolist())
    assert ids == ordered["id"].tolist()
