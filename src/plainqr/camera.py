"""Camera frame source."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .config import AppConfig, CameraConfig

logger = logging.getLogger(__name__)

_ROTATIONS = (0, 90, 180, 270)


class CameraUnavailableError(RuntimeError):
    """Raised when no camera device could be opened."""


@dataclass(frozen=True, slots=True)
class Frame:
    """A single camera frame ready for decoding.

    ``luminance`` is a 2-D ``uint8`` array (one byte per pixel, row major),
    which is exactly the planar Y buffer barcode decoders consume.
    ``rotation`` records how far the image must be turned clockwise to be
    upright; decoders ignore it, the preview honours it.
    """

    luminance: Any
    rotation: int = 0
    preview: Optional[Any] = None

    def __post_init__(self) -> None:
        if getattr(self.luminance, "ndim", None) != 2:
            raise ValueError("Frame luminance must be a 2-D array")
        if self.rotation not in _ROTATIONS:
            raise ValueError(f"Unsupported rotation: {self.rotation}")

    @property
    def width(self) -> int:
        return int(self.luminance.shape[1])

    @property
    def height(self) -> int:
        return int(self.luminance.shape[0])


def _open_capture(cv2, camera_config: CameraConfig):
    default_backend = getattr(cv2, "CAP_ANY", 0)
    for backend in camera_config.get_backends() or [default_backend]:
        for index in camera_config.get_indices():
            try:
                capture = cv2.VideoCapture(index, backend)
            except TypeError:
                capture = cv2.VideoCapture(index)
            if not capture or not capture.isOpened():
                if capture:
                    capture.release()
                continue

            capture.set(cv2.CAP_PROP_FRAME_WIDTH, camera_config.width)
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_config.height)
            logger.info("Opened camera %d (backend %d)", index, backend)
            return capture
    return None


def _resize(cv2, image, limit: int):
    max_dim = max(image.shape[:2])
    if max_dim <= limit:
        return image

    scale = limit / float(max_dim)
    new_size = (int(image.shape[1] * scale), int(image.shape[0] * scale))
    return cv2.resize(image, new_size)


def to_frame(image, rotation: int = 0, max_size: Optional[int] = None) -> Frame:
    """Build a :class:`Frame` from a BGR or grayscale OpenCV image."""

    try:
        import cv2  # type: ignore
    except ImportError as exc:
        raise RuntimeError("Camera support requires opencv-python") from exc

    if max_size:
        image = _resize(cv2, image, max_size)

    if image.ndim == 2:
        return Frame(luminance=image, rotation=rotation, preview=cv2.cvtColor(image, cv2.COLOR_GRAY2BGR))

    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return Frame(luminance=gray, rotation=rotation, preview=image)


def camera_frames(config: AppConfig, camera_config: CameraConfig) -> Iterator[Frame]:
    """Yield frames from the first camera that opens.

    The generator is lazy and cannot be restarted.  The device is released
    when the generator is exhausted, closed or garbage collected.
    """

    try:
        import cv2  # type: ignore
    except ImportError as exc:
        raise RuntimeError("Camera support requires opencv-python") from exc

    capture = _open_capture(cv2, camera_config)
    if capture is None:
        raise CameraUnavailableError("Unable to access camera")

    try:
        while True:
            success, image = capture.read()
            if not success or image is None:
                logger.warning("Camera feed unavailable")
                return
            yield to_frame(image, camera_config.rotation, config.max_frame_size)
    finally:
        capture.release()
        logger.debug("Camera released")


__all__ = ["CameraUnavailableError", "Frame", "camera_frames", "to_frame"]
