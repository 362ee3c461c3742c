"""Meal photos from a USB camera, for the food snap flow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def _load_cv2():
    try:
        import cv2
    except ImportError:
        raise ImportError(
            "opencv-python is required: pip install opencv-python"
        ) from None
    return cv2


@dataclass
class MealPhoto:
    camera_index: int
    path: Path
    taken_at: datetime


class MealCamera:
    """Grab one frame per meal and keep it as a JPEG in ``save_dir``."""

    def __init__(self, camera_index: int = 0, save_dir: str = "/tmp/optimumlog") -> None:
        self.camera_index = camera_index
        self.save_dir = Path(save_dir).expanduser()
        self.save_dir.mkdir(parents=True, exist_ok=True)

    def take_photo(self) -> MealPhoto:
        """Read a single frame and write it next to earlier photos.

        Raises:
            RuntimeError: The camera is missing or returned no frame.
        """
        cv2 = _load_cv2()

        cap = cv2.VideoCapture(self.camera_index)
        try:
            if not cap.isOpened():
                raise RuntimeError(
                    f"Could not open camera {self.camera_index}. Check the connection."
                )
            ok, frame = cap.read()
            if not ok or frame is None:
                raise RuntimeError(
                    f"Could not read a frame from camera {self.camera_index}."
                )

            taken_at = datetime.now().astimezone()
            path = self.save_dir / f"meal-{taken_at:%Y%m%d-%H%M%S}.jpg"
            if not cv2.imwrite(str(path), frame):
                raise RuntimeError(f"Could not write photo to {path}")
            logger.info("Saved meal photo %s", path)
            return MealPhoto(self.camera_index, path, taken_at)
        finally:
            cap.release()

    @staticmethod
    def probe(max_index: int = 10) -> list[int]:
        """Return the indices of cameras that can be opened."""
        cv2 = _load_cv2()
        found = []
        for ix in range(max_index):
            cap = cv2.VideoCapture(ix)
            try:
                if cap.isOpened():
                    found.append(ix)
            finally:
                cap.release()
        return found
