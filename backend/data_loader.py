"""Normalize property records into a DataFrame; seed the store from CSV."""

from __future__ import annotations
import logging
import os
import sys
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .parsing import parse_bhk

logger = logging.getLogger(__name__)

PROPERTY_COLUMNS = [
    "id",
    "title",
    "location",
    "price",
    "bhk",
    "gym",
    "parking",
    "image",
]

# raw field name candidates for each canonical column (already lowercased)
_COLUMN_CANDIDATES = {
    "id": ["_id", "id", "property_id"],
    "title": ["title", "name", "propertyname", "property_name"],
    "location": ["location", "address", "city"],
    "price": ["price", "amount", "rent"],
    "bhk": ["bhk", "bedrooms", "rooms"],
    "gym": ["gym", "has_gym"],
    "parking": ["parking", "has_parking"],
    "image": ["image", "images", "thumbnail", "cover_image"],
}

_TRUE_STRINGS = {"true", "1", "yes", "y", "t"}


def _repo_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _data_dir() -> str:
    return os.path.join(_repo_root(), "data")


def _read_csv(path: str) -> pd.DataFrame:
    if not os.path.isabs(path) and not os.path.exists(path):
        path = os.path.join(_data_dir(), path)
    # read loosely to tolerate minor CSV inconsistencies in the dataset
    return pd.read_csv(path, encoding="utf-8", on_bad_lines="skip")


def _first_existing_column(df: pd.DataFrame, candidates: List[str]) -> Optional[str]:
    """Return first candidate that exists in df.columns (case-insensitive already lowered)."""
    for c in candidates:
        if c in df.columns:
            return c
    return None


def _to_flag(v: Any) -> bool:
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    try:
        if pd.isna(v):
            return False
    except (TypeError, ValueError):
        pass
    if isinstance(v, (int, float)):
        return v != 0
    return str(v).strip().lower() in _TRUE_STRINGS


def _to_bhk(v: Any):
    if v is None:
        return None
    if isinstance(v, str):
        s = v.strip()
        if s.isdigit():
            return int(s)
        return parse_bhk(s)
    try:
        if pd.isna(v):
            return None
        return int(v)
    except (TypeError, ValueError):
        return None


def _first_image(v: Any):
    if isinstance(v, (list, tuple)):
        return v[0] if v else None
    try:
        if pd.isna(v):
            return None
    except (TypeError, ValueError):
        pass
    return v


def normalize_properties(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with the canonical property columns.

    - Lowercases column names (``BHK`` -> ``bhk``, ``_id`` -> ``id``)
    - Coerces ``price`` to float (unparseable -> NaN) and ``bhk`` to a nullable int
    - Coerces amenity flags to plain booleans (missing -> False)
    - Keeps any extra descriptive columns after the canonical ones
    """
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]

    for canonical, candidates in _COLUMN_CANDIDATES.items():
        src = _first_existing_column(df, candidates)
        if src is None:
            df[canonical] = None
        elif src != canonical:
            df[canonical] = df[src]

    df["id"] = df["id"].map(lambda v: None if _normalize_record_value(v) is None else str(v))
    df["price"] = pd.to_numeric(df["price"], errors="coerce").astype(float)
    df["bhk"] = pd.array([_to_bhk(v) for v in df["bhk"]], dtype="Int64")
    df["gym"] = df["gym"].map(_to_flag).astype(bool)
    df["parking"] = df["parking"].map(_to_flag).astype(bool)
    df["image"] = df["image"].map(_first_image)

    consumed = {c for cands in _COLUMN_CANDIDATES.values() for c in cands}
    extra = [c for c in df.columns if c not in PROPERTY_COLUMNS and c not in consumed]
    return df[PROPERTY_COLUMNS + extra].reset_index(drop=True)


def properties_to_df(records: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Build the in-memory collection from a list of property dicts."""
    records = list(records)
    if not records:
        return pd.DataFrame(
            {
                "id": pd.Series(dtype=object),
                "title": pd.Series(dtype=object),
                "location": pd.Series(dtype=object),
                "price": pd.Series(dtype=float),
                "bhk": pd.Series(dtype="Int64"),
                "gym": pd.Series(dtype=bool),
                "parking": pd.Series(dtype=bool),
                "image": pd.Series(dtype=object),
            }
        )
    return normalize_properties(pd.DataFrame.from_records(records))


def load_properties(collection) -> List[Dict[str, Any]]:
    """Read the whole property collection; ``_id`` is rendered as a string."""
    docs = []
    for doc in collection.find({}):
        doc = dict(doc)
        if "_id" in doc:
            doc["_id"] = str(doc["_id"])
        docs.append(doc)
    logger.info("loaded %d properties", len(docs))
    return docs


def read_properties_csv(path: str) -> List[Dict[str, Any]]:
    """Read sample listings from CSV as store-shaped documents (``BHK`` key)."""
    df = normalize_properties(_read_csv(path))
    df = df.drop(columns=["id"])
    records = []
    for r in df.to_dict(orient="records"):
        doc = {k: _normalize_record_value(v) for k, v in r.items()}
        doc["BHK"] = doc.pop("bhk")
        records.append(doc)
    return records


def _normalize_record_value(v: Any):
    """Convert pandas/numpy scalar values to native Python types and map NA -> None."""
    try:
        # pandas NA / numpy scalar
        if pd.isna(v):
            return None
    except (TypeError, ValueError):
        pass
    # numpy scalar to python scalar
    if hasattr(v, "item"):
        try:
            return v.item()
        except (TypeError, ValueError):
            return v
    return v


def df_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Serializable list of dicts (native Python values, NA -> None)."""
    return [
        {k: _normalize_record_value(v) for k, v in r.items()}
        for r in df.to_dict(orient="records")
    ]


def seed_properties(collection, records: List[Dict[str, Any]]) -> int:
    if not records:
        return 0
    result = collection.insert_many(records)
    n = len(result.inserted_ids)
    logger.info("seeded %d properties", n)
    return n


if __name__ == "__main__":
    from .config import configure_logging
    from .db import connect_db, get_property_collection

    configure_logging()
    csv_path = sys.argv[1] if len(sys.argv) > 1 else "properties.csv"
    seed_properties(get_property_collection(connect_db()), read_properties_csv(csv_path))
