"""Tests for the generic JSON list store."""

import json

import pytest

from optimumlog.models import FoodEntry, JournalEntry, MoneyEntry
from optimumlog.store import JSONStore, open_stores
from optimumlog.config import StorageConfig


@pytest.fixture
def food_store(tmp_path):
    return JSONStore(FoodEntry, tmp_path / "food.json")


def test_starts_empty_without_file(food_store):
    assert food_store.items == ()
    assert len(food_store) == 0


def test_add_puts_newest_first(food_store):
    entries = [FoodEntry(food=f"dish {i}", calories=i) for i in range(5)]
    for e in entries:
        food_store.add(e)
    assert list(food_store.items) == list(reversed(entries))


def test_add_persists_full_snapshot(food_store, tmp_path):
    a = FoodEntry(food="Apple", calories=95)
    b = FoodEntry(food="Banana", calories=105)
    food_store.add(a)
    food_store.add(b)

    raw = json.loads((tmp_path / "food.json").read_text(encoding="utf-8"))
    assert [r["food"] for r in raw] == ["Banana", "Apple"]
    assert not (tmp_path / "food.json.tmp").exists()


@pytest.mark.parametrize(
    "entity_type, entries",
    [
        (JournalEntry, [JournalEntry(text="hello"), JournalEntry(audio_file="a.m4a")]),
        (MoneyEntry, [MoneyEntry(amount=3.5, method="Cash", note="tea")]),
        (FoodEntry, [FoodEntry(food="Ramen", calories=450)]),
    ],
)
def test_reload_returns_equal_items(tmp_path, entity_type, entries):
    path = tmp_path / "store.json"
    store = JSONStore(entity_type, path)
    for e in entries:
        store.add(e)

    reopened = JSONStore(entity_type, path)
    assert reopened.items == store.items


def test_update_replaces_in_place(food_store):
    a = FoodEntry(food="Apple", calories=95)
    b = FoodEntry(food="Banana", calories=105)
    food_store.add(a)
    food_store.add(b)

    changed = FoodEntry(food="Green apple", calories=80, id=a.id, timestamp=a.timestamp)
    food_store.update(changed)

    assert food_store.items == (b, changed)
    reopened = JSONStore(FoodEntry, food_store.path)
    assert reopened.items[1].food == "Green apple"


def test_update_unknown_id_is_noop(food_store):
    a = FoodEntry(food="Apple", calories=95)
    food_store.add(a)
    seen = []
    food_store.subscribe(seen.append)

    food_store.update(FoodEntry(food="Ghost", calories=1))

    assert food_store.items == (a,)
    assert seen == []


def test_remove_by_item(food_store):
    a = FoodEntry(food="Apple", calories=95)
    b = FoodEntry(food="Banana", calories=105)
    food_store.add(a)
    food_store.add(b)

    food_store.remove(a)
    assert food_store.items == (b,)

    # second removal is a no-op
    food_store.remove(a)
    assert food_store.items == (b,)
    assert JSONStore(FoodEntry, food_store.path).items == (b,)


def test_remove_at_positions(food_store):
    entries = [FoodEntry(food=f"dish {i}", calories=i) for i in range(4)]
    for e in entries:
        food_store.add(e)
    # items are dish 3, dish 2, dish 1, dish 0
    food_store.remove_at({0, 2, 99})
    assert [e.food for e in food_store.items] == ["dish 2", "dish 0"]


def test_get_by_id(food_store):
    a = FoodEntry(food="Apple", calories=95)
    food_store.add(a)
    assert food_store.get(a.id) == a
    assert food_store.get("missing") is None


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        '{"food": "Apple"}',
        '[{"food": "Apple", "calories": 95}]',
        '[{"food": "Apple", "calories": 95, "id": "x", "timestamp": "yesterday"}]',
    ],
)
def test_undecodable_file_loads_empty(tmp_path, content):
    path = tmp_path / "food.json"
    path.write_text(content, encoding="utf-8")
    store = JSONStore(FoodEntry, path)
    assert store.items == ()


def test_record_without_id_loads_empty(tmp_path):
    path = tmp_path / "food.json"
    record = FoodEntry(food="Apple", calories=95).to_dict()
    del record["id"]
    path.write_text(json.dumps([record]), encoding="utf-8")

    assert JSONStore(FoodEntry, path).items == ()
    assert JSONStore(FoodEntry, path).items == ()


def test_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way", encoding="utf-8")
    store = JSONStore(FoodEntry, blocker / "food.json")

    entry = FoodEntry(food="Apple", calories=95)
    store.add(entry)

    assert store.items == (entry,)
    assert isinstance(store.last_save_error, OSError)


def test_listeners_get_snapshot_after_each_change(food_store):
    snapshots = []
    unsubscribe = food_store.subscribe(snapshots.append)

    a = FoodEntry(food="Apple", calories=95)
    food_store.add(a)
    food_store.remove(a)
    unsubscribe()
    food_store.add(FoodEntry(food="Banana", calories=105))

    assert snapshots == [(a,), ()]


def test_failing_listener_does_not_block_others(food_store):
    def broken(_):
        raise RuntimeError("boom")

    seen = []
    food_store.subscribe(broken)
    food_store.subscribe(seen.append)
    food_store.add(FoodEntry(food="Apple", calories=95))
    assert len(seen) == 1


def test_open_stores_uses_configured_files(tmp_path):
    config = StorageConfig(data_dir=str(tmp_path), money_file="spend.json")
    journals, money, food = open_stores(config)
    money.add(MoneyEntry(amount=9.9, method="Card"))

    assert journals.path == tmp_path / "journals.json"
    assert food.path == tmp_path / "food.json"
    assert (tmp_path / "spend.json").exists()
