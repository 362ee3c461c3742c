"""LogMeal API backend for dish recognition from meal photos."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..config import ImageConfig
from ..models import FoodEntry
from . import FoodRecognizer, ImageSource, ParseError, TransportError
from .image import normalize_image

logger = logging.getLogger(__name__)


class LogMealRecognizer(FoodRecognizer):
    """Recognise dishes with the LogMeal v2 REST API.

    One multipart POST to ``/recognition/dish`` per photo, plus at most one
    GET to ``/dish/{id}/info`` when the first candidate carries no calories.
    """

    def __init__(
        self,
        base_url: str = "https://api.logmeal.es/v2",
        user_key: str = "",
        token: str = "",
        *,
        timeout: float = 5.0,
        limits: ImageConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._user_key = user_key
        self._token = token
        self._timeout = timeout
        self._limits = limits or ImageConfig()
        self._transport = transport

    async def recognize(self, image: ImageSource) -> FoodEntry:
        if not self._token:
            raise ValueError(
                "LogMeal token is not configured. "
                "Set [recognition].token or the LOGMEAL_TOKEN environment variable."
            )

        jpeg = await asyncio.to_thread(normalize_image, image, self._limits)
        logger.info("Uploading %d byte photo for recognition", len(jpeg))

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers={"Authorization": f"Token {self._token}"},
        ) as client:
            payload = await self._post_image(client, jpeg)
            dish_id, name, calories = parse_recognition(payload)

            if calories is None:
                calories = await self._fetch_calories(client, dish_id)
                if calories is None:
                    logger.warning("No calories for dish %s (%s); using 0", dish_id, name)
                    calories = 0

        return FoodEntry(food=name, calories=int(calories))

    async def _post_image(self, client: httpx.AsyncClient, jpeg: bytes) -> Any:
        try:
            resp = await client.post(
                f"{self._base}/recognition/dish",
                data={"user_key": self._user_key},
                files={"image": ("m.jpg", jpeg, "image/jpeg")},
            )
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(e) from e

        try:
            return resp.json()
        except ValueError as e:
            raise ParseError(f"Recognition response is not JSON: {e}") from e

    async def _fetch_calories(
        self, client: httpx.AsyncClient, dish_id: int
    ) -> float | None:
        try:
            resp = await client.get(f"{self._base}/dish/{dish_id}/info")
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Dish info lookup for %s failed: %s", dish_id, e)
            return None
        return _calories_from(data)


def _calories_from(obj: Any) -> float | None:
    if not isinstance(obj, dict):
        return None
    info = obj.get("nutritional_info")
    if not isinstance(info, dict):
        return None
    kcal = info.get("calories")
    if isinstance(kcal, bool) or not isinstance(kcal, (int, float)):
        return None
    return float(kcal)


def parse_recognition(payload: Any) -> tuple[int, str, float | None]:
    """Extract ``(dish_id, name, calories)`` from a recognition response.

    ``calories`` is None when the first candidate has no nutritional info.

    Raises:
        ParseError: No candidates, or the first lacks a name or id.
    """
    if not isinstance(payload, dict):
        raise ParseError("Recognition response is not an object")
    results = payload.get("recognition_results")
    if not isinstance(results, list) or not results:
        raise ParseError("No dish recognised in the photo")

    first = results[0]
    if not isinstance(first, dict):
        raise ParseError("Malformed recognition candidate")
    name = first.get("name")
    dish_id = first.get("id")
    if not isinstance(name, str):
        raise ParseError("Recognition candidate has no name")
    if isinstance(dish_id, bool) or not isinstance(dish_id, int):
        raise ParseError("Recognition candidate has no id")

    return dish_id, name, _calories_from(first)
