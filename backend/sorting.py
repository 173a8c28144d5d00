"""Price ordering of the filtered listings."""

from enum import Enum

import pandas as pd


class SortOption(str, Enum):
    NONE = "none"
    ASC = "asc"
    DESC = "desc"


# select box labels, in display order
SORT_LABELS = {
    SortOption.NONE: "Sort by Price",
    SortOption.ASC: "Price: Low to High",
    SortOption.DESC: "Price: High to Low",
}


def sort_properties(df: pd.DataFrame, option) -> pd.DataFrame:
    """Order ``df`` by price.

    Stable in both directions: rows with equal prices keep their input order.
    Descending sorts on the negated price. Rows without a price go last.
    """
    option = SortOption(option)
    if option is SortOption.NONE or df.empty:
        return df.reset_index(drop=True)
    if option is SortOption.ASC:
        out = df.sort_values("price", kind="stable", na_position="last")
    else:
        out = df.sort_values("price", key=lambda s: -s, kind="stable", na_position="last")
    return out.reset_index(drop=True)
