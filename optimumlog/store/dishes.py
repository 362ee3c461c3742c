"""Read-only dish catalog for picking food entries by name."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path

from ..models import Dish

logger = logging.getLogger(__name__)


class DishCatalog:
    """Static table of dishes and their reference calories.

    Loads the catalog bundled with the package unless a path is given.
    A catalog that can't be read is treated as empty.
    """

    def __init__(self, dishes: list[Dish] | None = None) -> None:
        self._dishes = list(dishes or [])

    @classmethod
    def load(cls, path: str | Path | None = None) -> DishCatalog:
        try:
            if path:
                text = Path(path).expanduser().read_text(encoding="utf-8")
            else:
                text = (
                    resources.files("optimumlog")
                    .joinpath("data").joinpath("dishes.json")
                    .read_text(encoding="utf-8")
                )
            raw = json.loads(text)
            dishes = [Dish(name=str(d["name"]), kcal=int(d["kcal"])) for d in raw]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Dish catalog unavailable: %s", e)
            return cls()
        return cls(dishes)

    @property
    def all(self) -> list[Dish]:
        return list(self._dishes)

    def __len__(self) -> int:
        return len(self._dishes)

    def search(self, query: str = "") -> list[Dish]:
        """Return dishes whose name contains ``query``, ignoring case."""
        q = query.strip().casefold()
        if not q:
            return self.all
        return [d for d in self._dishes if q in d.name.casefold()]

    def find(self, name: str) -> Dish | None:
        key = name.strip().casefold()
        for d in self._dishes:
            if d.name.casefold() == key:
                return d
        return None
