"""Local JSON persistence for journal, money and food entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import FoodEntry, JournalEntry, MoneyEntry
from .dishes import DishCatalog
from .json_store import JSONStore

if TYPE_CHECKING:
    from ..config import StorageConfig


def open_stores(
    config: StorageConfig,
) -> tuple[JSONStore[JournalEntry], JSONStore[MoneyEntry], JSONStore[FoodEntry]]:
    """Open the journal, money and food stores under the data directory."""
    return (
        JSONStore(JournalEntry, config.path_for(config.journals_file)),
        JSONStore(MoneyEntry, config.path_for(config.money_file)),
        JSONStore(FoodEntry, config.path_for(config.food_file)),
    )


__all__ = [
    "DishCatalog",
    "JSONStore",
    "open_stores",
]
