"""PlainQR: scan QR codes and open the web links they carry."""
from __future__ import annotations

from .animation import Cooldown, glow_stops, lerp_color, press_scale
from .camera import CameraUnavailableError, Frame, camera_frames, to_frame
from .config import AppConfig, CameraConfig, StyleConfig
from .decoder import BarcodeDecoder
from .links import format_host, is_valid_url
from .opener import LinkOpener
from .scanner import Scanner
from .state import AppState, ScanPhase, ScanSession, TransitionError

__all__ = [
    "AppConfig",
    "CameraConfig",
    "StyleConfig",
    "AppState",
    "ScanPhase",
    "ScanSession",
    "TransitionError",
    "BarcodeDecoder",
    "CameraUnavailableError",
    "Frame",
    "camera_frames",
    "to_frame",
    "Scanner",
    "LinkOpener",
    "format_host",
    "is_valid_url",
    "Cooldown",
    "glow_stops",
    "lerp_color",
    "press_scale",
]

__version__ = "1.0"
