"""Food recognition backend base class, errors, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    import numpy as np

    from ..config import AppConfig
    from ..models import FoodEntry

ImageSource = Union[str, Path, bytes, "np.ndarray"]


class RecognitionError(Exception):
    """A photo could not be turned into a food entry."""


class ImageTooLarge(RecognitionError):
    """The photo stays above the upload limit after recompression."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Image too large: {size} bytes (limit {limit})")
        self.size = size
        self.limit = limit


class InvalidImage(RecognitionError):
    """The input could not be decoded as an image."""


class TransportError(RecognitionError):
    """The recognition service could not be reached or rejected the request."""

    def __init__(self, underlying: Exception) -> None:
        super().__init__(f"Recognition request failed: {underlying}")
        self.underlying = underlying


class ParseError(RecognitionError):
    """The recognition response did not contain a usable dish."""


class FoodRecognizer(ABC):
    """Abstract base for photo-to-food-entry recognition."""

    @abstractmethod
    async def recognize(self, image: ImageSource) -> FoodEntry:
        """Recognise the dish in ``image`` and return a new food entry.

        Raises:
            RecognitionError: One of its subclasses; never retried.
        """
        ...


def create_recognizer(config: AppConfig) -> FoodRecognizer:
    """Create a recognition backend based on configuration."""
    backend_name = config.recognition.backend

    match backend_name:
        case "logmeal":
            from .logmeal import LogMealRecognizer

            return LogMealRecognizer(
                base_url=config.recognition.base_url,
                user_key=config.recognition.user_key,
                token=config.recognition.token,
                timeout=config.recognition.timeout,
                limits=config.image,
            )
        case _:
            raise ValueError(
                f"Unknown recognition backend: {backend_name!r} (choose: logmeal)"
            )


__all__ = [
    "FoodRecognizer",
    "ImageSource",
    "ImageTooLarge",
    "InvalidImage",
    "ParseError",
    "RecognitionError",
    "TransportError",
    "create_recognizer",
]
