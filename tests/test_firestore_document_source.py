# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: test_firestore_document_source.py
# -----------------------------------------------------------------------------
import os

import pytest

from config.Config import Config
from loader.BatchLoader import BatchLoader
from mapping.FieldMapping import map_product
from source.DocumentSource import DocumentSource
from source.FirestoreDocumentSource import FirestoreDocumentSource


class _Snap:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return self._data


class _Query:
    """Minimal stand-in for a Firestore query chain over one collection."""

    def __init__(self, docs, calls, *, after=None, limit=None):
        self.docs = docs
        self.calls = calls
        self.after = after
        self.limit_n = limit

    def select(self, fields):
        self.calls.append(("select", list(fields)))
        return _Query(self.docs, self.calls, after=self.after, limit=self.limit_n)

    def order_by(self, field):
        self.calls.append(("order_by", field))
        return _Query(self.docs, self.calls, after=self.after, limit=self.limit_n)

    def start_after(self, fields):
        self.calls.append(("start_after", dict(fields)))
        return _Query(self.docs, self.calls, after=fields["__name__"], limit=self.limit_n)

    def limit(self, n):
        self.calls.append(("limit", n))
        return _Query(self.docs, self.calls, after=self.after, limit=n)

    def stream(self):
        ids = sorted(self.docs)
        if self.after is not None:
            ids = [i for i in ids if i > self.after]
        if self.limit_n is not None:
            ids = ids[: self.limit_n]
        for i in ids:
            yield _Snap(i, self.docs[i])


class _Client:
    def __init__(self, collections):
        self.collections_data = collections
        self.calls = []

    def collection(self, name):
        self.calls.append(("collection", name))
        return _Query(self.collections_data.get(name, {}), self.calls)

    def collections(self):
        return iter(self.collections_data)


@pytest.fixture
def cfg():
    return Config(firebase_service_account="{}", openai_api_key="sk-test")


@pytest.fixture
def client():
    return _Client({
        "productos": {
            "a": {"name": "Alpha"},
            "b": {"name": "Beta"},
            "c": {"name": "Gamma"},
            "d": None,
        }
    })


def test_is_a_document_source(cfg, client):
    assert isinstance(FirestoreDocumentSource(cfg, client=client), DocumentSource)


def test_count_streams_identities_only(cfg, client):
    source = FirestoreDocumentSource(cfg, client=client)

    assert source.count("productos") == 4
    assert ("select", []) in client.calls
    assert source.count("missing") == 0


def test_page_orders_by_id_and_continues_after_cursor(cfg, client):
    source = FirestoreDocumentSource(cfg, client=client)

    first = source.page("productos", page_size=2)
    assert [d.id for d in first.documents] == ["a", "b"]
    assert first.last_cursor == "b"
    assert not first.is_last_page
    assert ("order_by", "__name__") in client.calls

    second = source.page("productos", page_size=2, after=first.last_cursor)
    assert [d.id for d in second.documents] == ["c", "d"]
    assert ("start_after", {"__name__": "b"}) in client.calls
    # None payloads come back as empty dicts
    assert second.documents[1].data == {}

    third = source.page("productos", page_size=2, after=second.last_cursor)
    assert third.documents == []
    assert third.last_cursor == "d"
    assert third.is_last_page


def test_short_page_is_last(cfg, client):
    page = FirestoreDocumentSource(cfg, client=client).page("productos", page_size=10)
    assert len(page.documents) == 4
    assert page.is_last_page


def test_batch_loader_over_firestore_source(cfg, client):
    source = FirestoreDocumentSource(cfg, client=client)
    loader = BatchLoader(source=source, collection="productos", mapper=map_product, page_size=3)

    products = loader.load()

    assert [p.id for p in products] == ["a", "b", "c", "d"]
    assert products[3].name == ""
    assert sum(1 for c in client.calls if c[0] == "limit") == 2


def test_test_connection(cfg, client):
    assert FirestoreDocumentSource(cfg, client=client).test_connection() is True


@pytest.mark.integration
def test_live_firestore_count():
    if not os.getenv("FIREBASE_SERVICE_ACCOUNT"):
        pytest.skip("FIREBASE_SERVICE_ACCOUNT not set")

    source = FirestoreDocumentSource(Config.from_env())
    assert source.test_connection()
    assert source.count("productos") >= 0
