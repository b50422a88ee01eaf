"""Configuration data structures for PlainQR."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(slots=True)
class AppConfig:
    """Static configuration options used across the application."""

    app_name: str = "PlainQR"
    app_version: str = "1.0"
    log_level: str = "INFO"
    allowed_schemes: Tuple[str, ...] = ("http", "https")
    camera_frame_skip: int = 1
    max_frame_size: int = 1_280
    splash_delay_ms: int = 300
    splash_fade_in_ms: int = 600
    splash_hold_ms: int = 1_200
    splash_fade_out_ms: int = 400
    resume_check_ms: int = 1_500
    button_cooldown_ms: int = 200
    button_press_ms: int = 150
    glow_period_ms: int = 4_000
    glow_steps: int = 60


@dataclass(slots=True)
class CameraConfig:
    """Runtime camera configuration used by the frame source."""

    width: int = 1_280
    height: int = 720
    rotation: int = 0

    def get_backends(self) -> List[int]:
        """Return a list of OpenCV backend identifiers to try.

        OpenCV is imported lazily so that the pure parts of the package can be
        tested without a camera stack installed.
        """

        try:
            import cv2  # type: ignore
        except ImportError:
            return []

        try:
            return [cv2.CAP_DSHOW, cv2.CAP_MSMF, cv2.CAP_V4L2, cv2.CAP_ANY]
        except AttributeError:  # pragma: no cover - depends on the OpenCV build
            return [getattr(cv2, "CAP_ANY", 0)]

    def get_indices(self) -> List[int]:
        """Return candidate camera indices."""

        return [0, 1, 2]


@dataclass(slots=True)
class StyleConfig:
    """Simple grouping of UI styling constants."""

    bg_primary: str = "#181818"
    bg_panel: str = "#2C2C2C"
    bg_overlay: str = "rgba(0, 0, 0, 170)"
    bg_splash: str = "#FFFFFF"
    fg_primary: str = "#FFFFFF"
    accent_primary: str = "#40C4FF"
    glow_colors: Tuple[str, ...] = (
        "#BB86FC",
        "#8C9EFF",
        "#64B5F6",
        "#40C4FF",
        "#80D8FF",
        "#BB86FC",
    )
    font_family: str = "Segoe UI, sans-serif"
    font_size: int = 16
    host_font_size: int = 20
    button_font_size: int = 20
    button_radius: int = 16
    button_height: int = 56


__all__ = ["AppConfig", "CameraConfig", "StyleConfig"]
