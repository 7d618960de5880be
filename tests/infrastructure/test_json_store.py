"""Tests for the JsonStore transaction semantics."""

import json

import pytest

from shopcore.domain.exceptions import StorageError
from shopcore.infrastructure.persistence.json_store import JsonStore, next_id


class TestJsonStore:

    def test_creates_empty_document(self, tmp_path):
        store = JsonStore(tmp_path / "data" / "store.json")
        doc = json.loads(store.file_path.read_text())
        assert doc["orders"] == []
        assert doc["sequences"]["cart"] == 0

    def test_commit_persists(self, tmp_path):
        store = JsonStore(tmp_path / "store.json")
        with store.transaction() as doc:
            doc["carts"].append({"id": next_id(doc, "cart")})
        assert json.loads(store.file_path.read_text())["carts"] == [{"id": 1}]

    def test_exception_rolls_back(self, tmp_path):
        store = JsonStore(tmp_path / "store.json")
        before = store.file_path.read_text()
        with pytest.raises(RuntimeError):
            with store.transaction() as doc:
                doc["carts"].append({"id": 1})
                raise RuntimeError("boom")
        assert store.file_path.read_text() == before

    def test_nested_transaction_joins_outer(self, tmp_path):
        store = JsonStore(tmp_path / "store.json")
        with pytest.raises(RuntimeError):
            with store.transaction() as outer:
                with store.transaction() as inner:
                    assert inner is outer
                    inner["carts"].append({"id": 1})
                raise RuntimeError("outer fails after inner finished")
        with store.transaction() as doc:
            assert doc["carts"] == []

    def test_two_stores_on_one_file_see_each_other(self, tmp_path):
        first = JsonStore(tmp_path / "store.json")
        second = JsonStore(tmp_path / "store.json")
        with first.transaction() as doc:
            doc["payments"].append({"payment_id": "p"})
        with second.transaction() as doc:
            assert doc["payments"] == [{"payment_id": "p"}]

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        store = JsonStore(path)
        with pytest.raises(StorageError, match="Cannot read store"):
            with store.transaction():
                pass
