"""Personal wellbeing log: journal, spending and food intake tracking."""

from .charts import daily_totals, food_totals, money_totals
from .config import (
    AppConfig,
    ChartConfig,
    ImageConfig,
    ProfileConfig,
    RecognitionConfig,
    StorageConfig,
    load_config,
)
from .entries import (
    edit_food_entry,
    new_food_entry,
    new_journal_entry,
    new_money_entry,
    snap_food,
)
from .models import Dish, FoodEntry, JournalEntry, MoneyEntry
from .recognition import (
    FoodRecognizer,
    ImageTooLarge,
    ParseError,
    RecognitionError,
    TransportError,
    create_recognizer,
)
from .reminders import ReminderList
from .store import DishCatalog, JSONStore, open_stores

__all__ = [
    "JournalEntry",
    "MoneyEntry",
    "FoodEntry",
    "Dish",
    "JSONStore",
    "DishCatalog",
    "open_stores",
    "FoodRecognizer",
    "RecognitionError",
    "ImageTooLarge",
    "TransportError",
    "ParseError",
    "create_recognizer",
    "daily_totals",
    "money_totals",
    "food_totals",
    "new_journal_entry",
    "new_money_entry",
    "new_food_entry",
    "edit_food_entry",
    "snap_food",
    "ReminderList",
    "AppConfig",
    "StorageConfig",
    "RecognitionConfig",
    "ImageConfig",
    "ChartConfig",
    "ProfileConfig",
    "load_config",
]
