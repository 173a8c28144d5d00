"""Filter criteria and the filter engine over the in-memory collection."""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional

import pandas as pd

from .parsing import bhk_label, normalize_bhk_label, parse_price_bound

# amenity label shown in the UI -> boolean column on the property
AMENITY_FLAGS = {
    "Gym": "gym",
    "Parking": "parking",
}

BHK_OPTIONS = ["1 BHK", "2 BHK", "3 BHK", "4 BHK"]


def _check_amenities(amenities: Iterable[str]) -> FrozenSet[str]:
    amenities = frozenset(amenities)
    unknown = sorted(a for a in amenities if a not in AMENITY_FLAGS)
    if unknown:
        raise ValueError(f"unknown amenities: {', '.join(unknown)}")
    return amenities


@dataclass(frozen=True)
class FilterCriteria:
    """Conjunction of optional constraints; every field defaults to "no constraint"."""

    min_price: Optional[float] = None
    max_price: Optional[float] = None
    amenities: FrozenSet[str] = field(default_factory=frozenset)
    bhk: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "amenities", _check_amenities(self.amenities))
        object.__setattr__(self, "bhk", normalize_bhk_label(self.bhk))

    @property
    def is_empty(self) -> bool:
        return (
            self.min_price is None
            and self.max_price is None
            and not self.amenities
            and self.bhk is None
        )

    def with_amenity_toggled(self, amenity: str) -> "FilterCriteria":
        if amenity in self.amenities:
            return replace(self, amenities=self.amenities - {amenity})
        return replace(self, amenities=self.amenities | {amenity})


def criteria_from_inputs(min_price=None, max_price=None, amenities=(), bhk=None):
    """Build criteria from raw UI inputs.

    Returns ``(criteria, invalid)`` where ``invalid`` lists the names of price
    inputs that were not numeric and were therefore ignored.
    """
    lo, lo_ok = parse_price_bound(min_price)
    hi, hi_ok = parse_price_bound(max_price)
    invalid = [name for name, ok in (("min_price", lo_ok), ("max_price", hi_ok)) if not ok]
    return FilterCriteria(min_price=lo, max_price=hi, amenities=amenities, bhk=bhk), invalid


def filter_properties(properties_df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Return the rows satisfying every constraint in ``criteria``, input order kept.

    - price >= min_price / price <= max_price when set
    - every selected amenity's flag is true
    - ``f"{bhk} BHK"`` equals the criteria label when set
    """
    df = properties_df
    mask = pd.Series(True, index=df.index)
    if criteria.min_price is not None:
        mask &= (df["price"] >= criteria.min_price).fillna(False)
    if criteria.max_price is not None:
        mask &= (df["price"] <= criteria.max_price).fillna(False)
    for amenity in sorted(criteria.amenities):
        mask &= df[AMENITY_FLAGS[amenity]].fillna(False).astype(bool)
    if criteria.bhk is not None:
        labels = pd.Series(
            [None if pd.isna(n) else bhk_label(n) for n in df["bhk"]],
            index=df.index,
            dtype=object,
        )
        mask &= labels == criteria.bhk
    return df[mask].reset_index(drop=True)
