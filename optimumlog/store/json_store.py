"""Generic ordered-list store mirrored to a single JSON document."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Generic, TypeVar

from ..models import Entity

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)

Listener = Callable[[tuple], None]


class JSONStore(Generic[T]):
    """Keeps the entries of one kind newest-first and persists every change.

    The backing file always holds a complete snapshot of the list. Reads
    and writes are best-effort: a document that cannot be decoded yields an
    empty store, and a failed write is logged and recorded on
    ``last_save_error`` instead of raised.

    Not thread-safe. Mutate only from the thread running the event loop.
    """

    def __init__(self, entity_type: type[T], path: str | Path) -> None:
        self._entity_type = entity_type
        self._path = Path(path).expanduser()
        self._items: list[T] = []
        self._listeners: list[Listener] = []
        self.last_save_error: OSError | None = None
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    def get(self, entry_id: str) -> T | None:
        for item in self._items:
            if item.id == entry_id:
                return item
        return None

    # ---------- mutations ----------

    def add(self, item: T) -> None:
        self._items.insert(0, item)
        self._commit()

    def update(self, item: T) -> None:
        """Replace the entry with the same id, keeping its position."""
        for ix, existing in enumerate(self._items):
            if existing.id == item.id:
                self._items[ix] = item
                self._commit()
                return

    def remove(self, item: T) -> None:
        kept = [e for e in self._items if e.id != item.id]
        if len(kept) == len(self._items):
            return
        self._items = kept
        self._commit()

    def remove_at(self, positions: Iterable[int]) -> None:
        """Remove the entries at the given offsets; unknown offsets are ignored."""
        drop = {p for p in positions if 0 <= p < len(self._items)}
        if not drop:
            return
        self._items = [e for ix, e in enumerate(self._items) if ix not in drop]
        self._commit()

    # ---------- observers ----------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new snapshot after every change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Store listener failed for %s", self._path.name)

    # ---------- persistence ----------

    def load(self) -> None:
        """Read the backing document, or start empty if it can't be decoded."""
        self._items = []
        if not self._path.exists():
            logger.debug("No store file at %s; starting empty", self._path)
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("top-level JSON value is not a list")
            self._items = [self._entity_type.from_dict(r) for r in raw]
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self._path, e)
            self._items = []

    def save(self) -> None:
        """Overwrite the backing document with the full list."""
        data = json.dumps(
            [item.to_dict() for item in self._items],
            ensure_ascii=False,
            indent=2,
        )
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(self._path)
        except OSError as e:
            logger.error("Failed to save %s: %s", self._path, e)
            self.last_save_error = e
        else:
            self.last_save_error = None

    def _commit(self) -> None:
        self.save()
        self._notify()
