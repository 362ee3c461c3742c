"""Tests for the dish catalog."""

import json

from optimumlog.models import Dish
from optimumlog.store import DishCatalog


def test_bundled_catalog_loads():
    catalog = DishCatalog.load()
    assert len(catalog) > 0
    assert catalog.find("ramen") == Dish(name="Ramen", kcal=450)


def test_search_is_case_insensitive():
    catalog = DishCatalog([Dish("Apple", 95), Dish("Apple pie", 320), Dish("Banana", 105)])
    assert [d.name for d in catalog.search("APPLE")] == ["Apple", "Apple pie"]
    assert len(catalog.search("")) == 3
    assert catalog.search("kiwi") == []


def test_find_needs_full_name():
    catalog = DishCatalog([Dish("Apple pie", 320)])
    assert catalog.find("Apple") is None
    assert catalog.find(" apple PIE ") == Dish("Apple pie", 320)


def test_load_from_path(tmp_path):
    path = tmp_path / "dishes.json"
    path.write_text(json.dumps([{"name": "Congee", "kcal": 150}]), encoding="utf-8")
    assert DishCatalog.load(path).all == [Dish("Congee", 150)]


def test_unreadable_catalog_is_empty(tmp_path):
    assert len(DishCatalog.load(tmp_path / "missing.json")) == 0

    bad = tmp_path / "bad.json"
    bad.write_text('[{"name": "NoKcal"}]', encoding="utf-8")
    assert len(DishCatalog.load(bad)) == 0
