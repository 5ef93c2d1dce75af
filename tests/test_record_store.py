import pytest

from src.exceptions import ConsistencyError
from store.record_store import InMemoryRecordStore, PRODUCTS, SETTINGS, SEEDED
from store.seed import seed_demo_data


class FailingFlushStore(InMemoryRecordStore):
    def __init__(self):
        super().__init__()
        self.fail = False

    def _flush(self, changes):
        if self.fail:
            raise IOError("disk full")
        super()._flush(changes)


def test_next_id_starts_at_one_and_follows_max(store):
    assert store.next_id(PRODUCTS) == 1
    store.append(PRODUCTS, {"id": 4, "name": "a"})
    store.append(PRODUCTS, {"id": 2, "name": "b"})
    assert store.next_id(PRODUCTS) == 5


def test_collection_crud(store):
    store.append(PRODUCTS, {"id": 1, "name": "Mouse", "stock": 5})

    updated = store.update(PRODUCTS, 1, {"stock": 4})
    assert updated == {"id": 1, "name": "Mouse", "stock": 4}
    assert store.find(PRODUCTS, 1)["stock"] == 4
    assert store.update(PRODUCTS, 9, {"stock": 1}) is None

    assert store.remove(PRODUCTS, 1) is True
    assert store.remove(PRODUCTS, 1) is False
    assert store.get_all(PRODUCTS) == []


def test_records_are_copies(store):
    record = store.append(PRODUCTS, {"id": 1, "name": "Mouse"})
    record["name"] = "changed"
    store.get_all(PRODUCTS)[0]["name"] = "changed again"
    assert store.find(PRODUCTS, 1)["name"] == "Mouse"


def test_unreadable_json_reads_as_missing(store):
    store._data[SETTINGS] = "{not json"
    assert store.get(SETTINGS) is None
    assert store.get_all(SETTINGS) == []


def test_transaction_applies_all_writes_on_exit(store):
    with store.transaction():
        store.append(PRODUCTS, {"id": 1})
        store.set(SETTINGS, {"current_invoice": 2})
        # reads inside the block see staged writes
        assert store.find(PRODUCTS, 1) == {"id": 1}
        assert SETTINGS not in store._data

    assert store.get(SETTINGS) == {"current_invoice": 2}
    assert store.find(PRODUCTS, 1) == {"id": 1}


def test_transaction_discards_writes_on_error(store):
    store.set(SETTINGS, {"current_invoice": 1})
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.append(PRODUCTS, {"id": 1})
            store.set(SETTINGS, {"current_invoice": 2})
            raise RuntimeError("boom")

    assert store.get_all(PRODUCTS) == []
    assert store.get(SETTINGS) == {"current_invoice": 1}
    assert not store.in_transaction


def test_nested_transaction_joins_outer(store):
    with pytest.raises(RuntimeError):
        with store.transaction():
            with store.transaction():
                store.append(PRODUCTS, {"id": 1})
            assert store._data.get(PRODUCTS) is None
            raise RuntimeError("boom")
    assert store.get_all(PRODUCTS) == []


def test_flush_failure_raises_consistency_error():
    store = FailingFlushStore()
    store.fail = True
    with pytest.raises(ConsistencyError):
        with store.transaction():
            store.append(PRODUCTS, {"id": 1})
    store.fail = False
    assert store.get_all(PRODUCTS) == []


def test_seed_runs_once(store):
    assert seed_demo_data(store) is True
    store.update(PRODUCTS, 1, {"stock": 0})
    assert seed_demo_data(store) is False
    assert store.get(SEEDED) is True
    assert store.find(PRODUCTS, 1)["stock"] == 0


def test_sql_store_round_trip(sql_store):
    sql_store.append(PRODUCTS, {"id": 1, "name": "Mouse"})
    sql_store.update(PRODUCTS, 1, {"stock": 3})
    assert sql_store.find(PRODUCTS, 1) == {"id": 1, "name": "Mouse", "stock": 3}


def test_sql_store_transaction_rolls_back(sql_store):
    sql_store.set(SETTINGS, {"current_invoice": 1})
    with pytest.raises(RuntimeError):
        with sql_store.transaction():
            sql_store.set(SETTINGS, {"current_invoice": 2})
            raise RuntimeError("boom")
    assert sql_store.get(SETTINGS) == {"current_invoice": 1}


def test_sql_store_commit_failure_rolls_back(sql_store, monkeypatch):
    sql_store.set(SETTINGS, {"current_invoice": 1})

    def broken_commit():
        raise RuntimeError("database is locked")

    monkeypatch.setattr(sql_store.session, "commit", broken_commit)
    with pytest.raises(ConsistencyError):
        with sql_store.transaction():
            sql_store.set(SETTINGS, {"current_invoice": 2})
    monkeypatch.undo()

    assert sql_store.get(SETTINGS) == {"current_invoice": 1}
