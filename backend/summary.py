"""Generate short grounded summaries from filtered listings."""

import pandas as pd

from .filters import AMENITY_FLAGS, FilterCriteria
from .format import price_format


def showing_text(n: int) -> str:
    return f"Showing {n} properties"


def generate_summary_from_df(df: pd.DataFrame, criteria: FilterCriteria) -> str:
    n = len(df)
    if n == 0:
        if criteria.is_empty:
            return "No properties listed yet."
        return "No matches found for the selected filters."

    prices = df["price"].dropna()
    parts = []
    # sentence 1: total matches
    parts.append(f"{n} matching propert{'ies' if n > 1 else 'y'} found.")

    # sentence 2: price range
    if not prices.empty:
        parts.append(
            f"Price range: {price_format(prices.min())} — {price_format(prices.max())}."
        )

    # sentence 3: amenity counts, only for amenities not already required
    counts = []
    for label, flag in AMENITY_FLAGS.items():
        if label in criteria.amenities:
            continue
        c = int(df[flag].fillna(False).astype(bool).sum())
        if c:
            counts.append(f"{label}: {c}")
    if counts:
        parts.append("With " + ", ".join(counts) + ".")

    return " ".join(parts)
