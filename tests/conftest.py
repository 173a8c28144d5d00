import itertools

import pandas as pd
import pytest
from pymongo.errors import DuplicateKeyError

from backend.data_loader import properties_to_df


class _InsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class _InsertManyResult:
    def __init__(self, inserted_ids):
        self.inserted_ids = inserted_ids


class _UpdateResult:
    def __init__(self, matched_count):
        self.matched_count = matched_count


def _matches(doc, query):
    for key, value in query.items():
        if key == "$or":
            if not any(_matches(doc, q) for q in value):
                return False
        elif doc.get(key) != value:
            return False
    return True


class FakeCollection:
    """Just enough of a pymongo collection for the store-facing code."""

    def __init__(self, docs=None):
        self.docs = []
        self.unique = set()
        self._ids = itertools.count(1)
        for d in docs or []:
            self.insert_one(dict(d))

    def create_index(self, name, unique=False):
        if unique:
            self.unique.add(name)
        return name

    def _check_unique(self, doc, skip=None):
        for name in self.unique:
            for other in self.docs:
                if other is not skip and name in doc and other.get(name) == doc[name]:
                    raise DuplicateKeyError(f"duplicate {name}")

    def find(self, query=None):
        return [dict(d) for d in self.docs if _matches(d, query or {})]

    def find_one(self, query=None):
        found = self.find(query)
        return found[0] if found else None

    def insert_one(self, doc):
        self._check_unique(doc)
        doc.setdefault("_id", f"id{next(self._ids)}")
        self.docs.append(dict(doc))
        return _InsertOneResult(doc["_id"])

    def insert_many(self, docs):
        return _InsertManyResult([self.insert_one(d).inserted_id for d in docs])

    def update_one(self, query, update):
        for d in self.docs:
            if _matches(d, query):
                merged = {**d, **update.get("$set", {})}
                self._check_unique(merged, skip=d)
                d.update(update.get("$set", {}))
                return _UpdateResult(1)
        return _UpdateResult(0)


@pytest.fixture
def fake_collection():
    return FakeCollection


def make_properties(prices, **overrides) -> pd.DataFrame:
    records = []
    for i, price in enumerate(prices):
        rec = {
            "_id": f"p{i}",
            "title": f"Home {i}",
            "location": "Baner, Pune",
            "price": price,
            "BHK": 2,
            "gym": False,
            "parking": False,
        }
        rec.update(overrides)
        records.append(rec)
    return properties_to_df(records)


@pytest.fixture
def sample_properties_df():
    return properties_to_df(
        [
            {"_id": "a", "title": "Palm Court", "location": "Kharadi, Pune", "price": 100, "BHK": 1, "gym": True, "parking": False},
            {"_id": "b", "title": "Green Acres", "location": "Whitefield, Bangalore", "price": 200, "BHK": 2, "gym": False, "parking": True},
            {"_id": "c", "title": "Skyline", "location": "Powai, Mumbai", "price": 300, "BHK": 3, "gym": True, "parking": True},
            {"_id": "d", "title": "Maple Homes", "location": "Hinjewadi, Pune", "price": 200, "BHK": 2, "gym": True, "parking": True},
        ]
    )


@pytest.fixture
def make_df():
    return make_properties
