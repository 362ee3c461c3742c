"""Tests for building entries from user input and the photo snap flow."""

import pytest

from optimumlog.entries import (
    edit_food_entry,
    new_food_entry,
    new_journal_entry,
    new_money_entry,
    snap_food,
)
from optimumlog.models import FoodEntry
from optimumlog.recognition import FoodRecognizer, ParseError, TransportError
from optimumlog.store import JSONStore


class TestJournal:
    def test_text_entry(self):
        entry = new_journal_entry(text="Walked 5km")
        assert entry.text == "Walked 5km"
        assert entry.audio_file is None

    def test_audio_entry(self):
        entry = new_journal_entry(audio_file="journal-1.0.m4a")
        assert entry.text is None
        assert entry.audio_file == "journal-1.0.m4a"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"text": "   "},
            {"text": "hi", "audio_file": "journal-1.0.m4a"},
        ],
    )
    def test_needs_exactly_one_source(self, kwargs):
        with pytest.raises(ValueError):
            new_journal_entry(**kwargs)


class TestMoney:
    def test_amount_parsed(self):
        entry = new_money_entry("23.50", "Alipay", "noodles")
        assert entry.amount == 23.5
        assert entry.method == "Alipay"
        assert entry.note == "noodles"

    def test_bad_amount(self):
        with pytest.raises(ValueError, match="Amount must be a number"):
            new_money_entry("twelve", "Cash")


class TestFood:
    def test_manual_entry(self):
        entry = new_food_entry("Porridge", " 210 ")
        assert entry.food == "Porridge"
        assert entry.calories == 210

    @pytest.mark.parametrize("calories", ["", "12.5", "lots"])
    def test_calories_must_be_whole_number(self, calories):
        with pytest.raises(ValueError, match="whole number"):
            new_food_entry("Porridge", calories)

    def test_blank_name(self):
        with pytest.raises(ValueError, match="must not be empty"):
            new_food_entry("  ", "100")

    def test_edit_keeps_identity(self):
        entry = FoodEntry(food="Pasta", calories=600)
        edited = edit_food_entry(entry, food="Pasta salad", calories_text="450")
        assert edited.id == entry.id
        assert edited.timestamp == entry.timestamp
        assert (edited.food, edited.calories) == ("Pasta salad", 450)
        assert entry.food == "Pasta"

    def test_edit_partial(self):
        entry = FoodEntry(food="Pasta", calories=600)
        assert edit_food_entry(entry, calories_text="500").food == "Pasta"
        assert edit_food_entry(entry, food="Penne").calories == 600

    def test_edit_rejects_bad_input(self):
        entry = FoodEntry(food="Pasta", calories=600)
        with pytest.raises(ValueError):
            edit_food_entry(entry, food="")
        with pytest.raises(ValueError):
            edit_food_entry(entry, calories_text="abc")


class FakeRecognizer(FoodRecognizer):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.images = []

    async def recognize(self, image):
        self.images.append(image)
        if self.error is not None:
            raise self.error
        return self.result


class TestSnapFood:
    @pytest.mark.asyncio
    async def test_adds_recognised_entry(self, tmp_path):
        store = JSONStore(FoodEntry, tmp_path / "food.json")
        recognizer = FakeRecognizer(result=FoodEntry(food="Ramen", calories=450))

        entry = await snap_food(recognizer, store, b"photo")

        assert store.items == (entry,)
        assert recognizer.images == [b"photo"]
        assert JSONStore(FoodEntry, store.path).items == (entry,)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ParseError("nothing found"), TransportError(OSError("offline"))],
    )
    async def test_failure_leaves_store_alone(self, tmp_path, error):
        store = JSONStore(FoodEntry, tmp_path / "food.json")
        store.add(FoodEntry(food="Apple", calories=95))
        before = store.items

        with pytest.raises(type(error)):
            await snap_food(FakeRecognizer(error=error), store, b"photo")
        assert store.items == before
