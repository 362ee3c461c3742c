"""Data models for journal, money and food entries."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, TypeVar

E = TypeVar("E", bound="Entity")


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Entity:
    """Base for records persisted by a JSONStore.

    Every entity has a unique ``id`` and a creation ``timestamp``. The
    encoded form is a flat JSON object with the timestamp as ISO-8601 text.
    """

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            out[f.name] = value
        return out

    @classmethod
    def from_dict(cls: type[E], data: dict[str, Any]) -> E:
        """Decode a record, raising on any shape mismatch.

        Raises:
            TypeError: ``data`` is not a mapping, or has missing/unknown keys.
            ValueError: The timestamp is not ISO-8601 text.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        expected = {f.name for f in fields(cls)}
        missing = expected - data.keys()
        unknown = data.keys() - expected
        if missing or unknown:
            raise TypeError(
                f"{cls.__name__} record mismatch: "
                f"missing {sorted(missing)}, unknown {sorted(unknown)}"
            )
        kwargs = dict(data)
        ts = kwargs.get("timestamp")
        if not isinstance(ts, str):
            raise ValueError(f"timestamp must be ISO-8601 text, got {ts!r}")
        kwargs["timestamp"] = datetime.fromisoformat(ts)
        return cls(**kwargs)


@dataclass
class JournalEntry(Entity):
    """A journal entry: free text or a recorded audio file (by name)."""

    text: str | None = None
    audio_file: str | None = None
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)


@dataclass
class MoneyEntry(Entity):
    amount: float
    method: str
    note: str = ""
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)


@dataclass
class FoodEntry(Entity):
    food: str
    calories: int
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)


@dataclass
class Dish:
    """A catalog dish with a reference calorie count."""

    name: str
    kcal: int

    def to_food_entry(self) -> FoodEntry:
        return FoodEntry(food=self.name, calories=self.kcal)


def audio_filename(now: datetime | None = None) -> str:
    """Return the file name used for a recorded audio journal."""
    now = now or _now()
    return f"journal-{now.timestamp()}.m4a"
