"""Barcode decoding backed by OpenCV and :mod:`pyzbar`."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .camera import Frame

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BarcodeDecoder:
    """Decode QR symbols from :class:`~plainqr.camera.Frame` objects.

    Both libraries are imported on first use so that headless tests can run
    without zbar installed.
    """

    encoding: str = "utf-8"
    preprocess: bool = True
    _cv2: object = field(default=None, init=False, repr=False)
    _pyzbar: object = field(default=None, init=False, repr=False)

    def is_available(self) -> bool:
        try:
            self._load()
        except RuntimeError:
            return False
        return True

    def _load(self) -> None:
        if self._pyzbar is not None:
            return

        try:
            import cv2  # type: ignore
            from pyzbar import pyzbar  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "QR decoding requires opencv-python and pyzbar (and the zbar library)"
            ) from exc

        self._cv2 = cv2
        self._pyzbar = pyzbar

    def _variants(self, gray):
        yield gray
        if not self.preprocess:
            return

        cv2 = self._cv2
        yield cv2.GaussianBlur(gray, (5, 5), 0)
        yield cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)[1]

    def decode(self, frame: Frame) -> Optional[str]:
        """Return the text of the first QR code in ``frame`` or ``None``."""

        self._load()
        pyzbar = self._pyzbar

        for processed in self._variants(frame.luminance):
            symbols = pyzbar.decode(processed, symbols=[pyzbar.ZBarSymbol.QRCODE])
            for symbol in symbols:
                try:
                    return bytes(symbol.data).decode(self.encoding)
                except UnicodeDecodeError:
                    logger.debug("Skipping QR payload that is not %s", self.encoding)
        return None


__all__ = ["BarcodeDecoder"]
