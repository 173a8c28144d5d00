import pytest
from pymongo.errors import ServerSelectionTimeoutError

from backend import db


class FakeAdmin:
    def __init__(self, fail):
        self.fail = fail

    def command(self, name):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1}


class FakeClient:
    instances = []

    def __init__(self, url, fail=False, **kwargs):
        self.url = url
        self.kwargs = kwargs
        self.admin = FakeAdmin(fail)
        self.closed = False
        FakeClient.instances.append(self)

    def __getitem__(self, name):
        return {"db": name}

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_client():
    db.close_db()
    FakeClient.instances = []
    yield
    db.close_db()


def test_connect_once(monkeypatch):
    monkeypatch.setattr(db.pymongo, "MongoClient", FakeClient)
    first = db.connect_db("mongodb://example", "listings")
    second = db.connect_db("mongodb://example", "listings")
    assert first == {"db": "listings"}
    assert second == first
    assert len(FakeClient.instances) == 1


def test_failed_connection_is_logged_and_raised(monkeypatch, caplog):
    monkeypatch.setattr(db.pymongo, "MongoClient", lambda url, **kw: FakeClient(url, fail=True, **kw))
    with pytest.raises(ServerSelectionTimeoutError):
        db.connect_db("mongodb://down", "listings")
    assert "error while connecting to DB" in caplog.text
    assert FakeClient.instances[0].closed
    assert db._client is None


def test_collections():
    handle = {"properties": "P", "users": "U"}
    assert db.get_property_collection(handle) == "P"
    assert db.get_user_collection(handle) == "U"
