"""Downscale and recompress meal photos to fit the upload limit."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import ImageConfig
from . import ImageSource, ImageTooLarge, InvalidImage

logger = logging.getLogger(__name__)


def _import_cv2():
    try:
        import cv2
    except ImportError:
        raise ImportError(
            "opencv-python is required: pip install opencv-python"
        ) from None
    return cv2


def _decode(cv2, image: ImageSource):
    import numpy as np

    if isinstance(image, np.ndarray):
        return image
    if isinstance(image, (str, Path)):
        try:
            # np.fromfile + imdecode copes with non-ASCII paths
            data = np.fromfile(str(image), dtype=np.uint8)
        except OSError as e:
            raise InvalidImage(f"Cannot read image {image}: {e}") from e
    else:
        data = np.frombuffer(image, dtype=np.uint8)

    img = cv2.imdecode(data, cv2.IMREAD_COLOR) if data.size else None
    if img is None:
        raise InvalidImage("Input is not a decodable image")
    return img


def _encode_jpeg(cv2, img, quality: float) -> bytes:
    ok, buf = cv2.imencode(
        ".jpg", img, [cv2.IMWRITE_JPEG_QUALITY, _jpeg_quality(quality)]
    )
    if not ok:
        raise InvalidImage("JPEG encoding failed")
    return buf.tobytes()


def _jpeg_quality(quality: float) -> int:
    return max(0, min(100, round(quality * 100)))


def resize_to_fit(img, max_side: int):
    """Scale ``img`` so its longest side is at most ``max_side`` pixels."""
    cv2 = _import_cv2()
    h, w = img.shape[:2]
    scale = min(1.0, max_side / max(w, h))
    if scale >= 1.0:
        return img
    size = (max(1, round(w * scale)), max(1, round(h * scale)))
    return cv2.resize(img, size, interpolation=cv2.INTER_AREA)


def normalize_image(image: ImageSource, limits: ImageConfig | None = None) -> bytes:
    """Return ``image`` as a JPEG no larger than ``limits.max_bytes``.

    Quality starts at ``initial_quality``; while the result exceeds
    ``target_bytes`` it drops by a step that halves on every pass, until
    it reaches ``min_quality`` or the encoder quality stops changing.

    Raises:
        InvalidImage: The input can't be decoded.
        ImageTooLarge: The best encoding is still above ``max_bytes``.
    """
    limits = limits or ImageConfig()
    cv2 = _import_cv2()

    img = resize_to_fit(_decode(cv2, image), limits.max_side)

    quality = limits.initial_quality
    step = limits.quality_step
    data = _encode_jpeg(cv2, img, quality)
    last_q = _jpeg_quality(quality)

    while len(data) > limits.target_bytes and quality > limits.min_quality:
        quality -= step
        step *= 0.5
        q = _jpeg_quality(quality)
        if q == last_q:
            break
        last_q = q
        data = _encode_jpeg(cv2, img, quality)
        logger.debug("Re-encoded at quality %d: %d bytes", q, len(data))

    if len(data) > limits.max_bytes:
        raise ImageTooLarge(len(data), limits.max_bytes)
    return data
