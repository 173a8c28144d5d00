import pandas as pd

from backend.data_loader import (
    PROPERTY_COLUMNS,
    load_properties,
    normalize_properties,
    properties_to_df,
    read_properties_csv,
    seed_properties,
)


def test_store_documents_become_canonical_columns():
    df = properties_to_df(
        [
            {"_id": 7, "title": "Palm Court", "price": "4500000", "BHK": 2, "gym": "yes", "parking": 0, "furnished": True},
        ]
    )
    assert list(df.columns)[: len(PROPERTY_COLUMNS)] == PROPERTY_COLUMNS
    row = df.iloc[0]
    assert row["id"] == "7"
    assert row["price"] == 4500000.0
    assert row["bhk"] == 2
    assert bool(row["gym"]) is True
    assert bool(row["parking"]) is False
    assert "furnished" in df.columns


def test_bad_values_are_coerced():
    df = properties_to_df([{"price": "call us", "BHK": "3 BHK", "images": ["a.jpg", "b.jpg"]}])
    row = df.iloc[0]
    assert pd.isna(row["price"])
    assert row["bhk"] == 3
    assert row["image"] == "a.jpg"
    assert bool(row["gym"]) is False


def test_empty_collection_has_columns():
    df = properties_to_df([])
    assert df.empty
    assert list(df.columns) == PROPERTY_COLUMNS


def test_normalize_is_a_copy():
    raw = pd.DataFrame({"Price": [1, 2], "BHK": [1, 2]})
    normalize_properties(raw)
    assert list(raw.columns) == ["Price", "BHK"]


def test_read_sample_csv():
    records = read_properties_csv("properties.csv")
    assert len(records) == 6
    first = records[0]
    assert first["title"] == "Sunshine Residency"
    assert first["BHK"] == 2
    assert first["gym"] is True
    assert first["price"] == 4500000.0
    assert "id" not in first


def test_seed_then_load_round_trip(fake_collection):
    col = fake_collection()
    assert seed_properties(col, read_properties_csv("properties.csv")) == 6
    docs = load_properties(col)
    assert len(docs) == 6
    assert all(isinstance(d["_id"], str) for d in docs)
    assert seed_properties(col, []) == 0
