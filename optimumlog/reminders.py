"""In-memory reminder checklist (not persisted)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass
class Reminder:
    title: str
    done: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


class ReminderList:
    """A checklist that lives only as long as the process."""

    def __init__(self) -> None:
        self._items: list[Reminder] = []

    @property
    def items(self) -> list[Reminder]:
        return list(self._items)

    @property
    def pending(self) -> list[Reminder]:
        return [r for r in self._items if not r.done]

    def add(self, title: str) -> Reminder | None:
        """Append a reminder; blank titles are ignored."""
        title = title.strip()
        if not title:
            return None
        reminder = Reminder(title=title)
        self._items.append(reminder)
        return reminder

    def toggle(self, reminder_id: str) -> None:
        for r in self._items:
            if r.id == reminder_id:
                r.done = not r.done
                return

    def remove(self, reminder_id: str) -> None:
        self._items = [r for r in self._items if r.id != reminder_id]
