"""Build entries from user input, checking what the input forms require."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from .models import FoodEntry, JournalEntry, MoneyEntry

if TYPE_CHECKING:
    from .recognition import FoodRecognizer, ImageSource
    from .store import JSONStore

logger = logging.getLogger(__name__)


def new_journal_entry(
    text: str | None = None, audio_file: str | None = None
) -> JournalEntry:
    """Create a journal entry holding either text or an audio file name."""
    if text is not None and not text.strip():
        text = None
    if (text is None) == (audio_file is None):
        raise ValueError("A journal entry needs either text or an audio file, not both")
    return JournalEntry(text=text, audio_file=audio_file)


def new_money_entry(amount_text: str, method: str, note: str = "") -> MoneyEntry:
    try:
        amount = float(amount_text)
    except (TypeError, ValueError):
        raise ValueError(f"Amount must be a number: {amount_text!r}") from None
    return MoneyEntry(amount=amount, method=method, note=note)


def _parse_calories(calories_text: str) -> int:
    try:
        return int(str(calories_text).strip())
    except ValueError:
        raise ValueError(f"Calories must be a whole number: {calories_text!r}") from None


def new_food_entry(food: str, calories_text: str) -> FoodEntry:
    if not food.strip():
        raise ValueError("Food name must not be empty")
    return FoodEntry(food=food, calories=_parse_calories(calories_text))


def edit_food_entry(
    entry: FoodEntry,
    food: str | None = None,
    calories_text: str | None = None,
) -> FoodEntry:
    """Return a copy of ``entry`` with new values, keeping id and timestamp."""
    changes: dict = {}
    if food is not None:
        if not food.strip():
            raise ValueError("Food name must not be empty")
        changes["food"] = food
    if calories_text is not None:
        changes["calories"] = _parse_calories(calories_text)
    return dataclasses.replace(entry, **changes)


async def snap_food(
    recognizer: FoodRecognizer,
    store: JSONStore[FoodEntry],
    image: ImageSource,
) -> FoodEntry:
    """Recognise a meal photo and add the result to the food store.

    The store is only touched after the recognition has finished, back on
    the calling event loop. Recognition errors propagate unchanged.
    """
    entry = await recognizer.recognize(image)
    store.add(entry)
    logger.info("Logged %s (%d kcal) from photo", entry.food, entry.calories)
    return entry
