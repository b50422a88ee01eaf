from __future__ import annotations

import sys
import types

import numpy as np
import pytest

from plainqr.camera import CameraUnavailableError, Frame, camera_frames
from plainqr.config import AppConfig, CameraConfig


class FakeCapture:
    instances = []

    def __init__(self, index, backend=None, frames=2, opened=True):
        self.index = index
        self.remaining = frames
        self.opened = opened
        self.released = False
        self.settings = {}
        FakeCapture.instances.append(self)

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        self.settings[prop] = value

    def read(self):
        if self.remaining <= 0:
            return False, None
        self.remaining -= 1
        return True, np.full((40, 60, 3), 7, dtype=np.uint8)

    def release(self):
        self.released = True


def install_cv2(monkeypatch, opened=True):
    FakeCapture.instances = []

    def video_capture(index, backend=None):
        return FakeCapture(index, backend, opened=opened)

    module = types.SimpleNamespace(
        CAP_ANY=0,
        CAP_PROP_FRAME_WIDTH=3,
        CAP_PROP_FRAME_HEIGHT=4,
        COLOR_BGR2GRAY=6,
        COLOR_GRAY2BGR=8,
        VideoCapture=video_capture,
        cvtColor=lambda image, _code: image[..., 0],
        resize=lambda image, size: image[: size[1], : size[0]],
    )
    monkeypatch.setitem(sys.modules, "cv2", module)


def test_frame_reports_dimensions():
    frame = Frame(luminance=np.zeros((3, 5), dtype=np.uint8), rotation=90)

    assert (frame.width, frame.height) == (5, 3)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"luminance": np.zeros((3, 5, 3), dtype=np.uint8)},
        {"luminance": np.zeros((3, 5), dtype=np.uint8), "rotation": 45},
    ],
)
def test_frame_rejects_bad_input(kwargs):
    with pytest.raises(ValueError):
        Frame(**kwargs)


def test_camera_frames_yield_luminance_and_release(monkeypatch):
    install_cv2(monkeypatch)
    camera_config = CameraConfig(width=60, height=40, rotation=180)

    frames = list(camera_frames(AppConfig(), camera_config))

    assert len(frames) == 2
    assert all(frame.luminance.ndim == 2 for frame in frames)
    assert frames[0].rotation == 180
    capture = FakeCapture.instances[0]
    assert capture.released
    assert capture.settings == {3: 60, 4: 40}


def test_camera_frames_downscale_large_images(monkeypatch):
    install_cv2(monkeypatch)

    frame = next(camera_frames(AppConfig(max_frame_size=30), CameraConfig()))

    assert max(frame.width, frame.height) == 30


def test_closing_the_stream_releases_the_camera(monkeypatch):
    install_cv2(monkeypatch)

    frames = camera_frames(AppConfig(), CameraConfig())
    next(frames)
    frames.close()

    assert FakeCapture.instances[0].released


def test_unavailable_camera_raises(monkeypatch):
    install_cv2(monkeypatch, opened=False)

    with pytest.raises(CameraUnavailableError):
        next(camera_frames(AppConfig(), CameraConfig()))

    assert FakeCapture.instances
    assert all(capture.released for capture in FakeCapture.instances)


def test_backends_empty_without_opencv(monkeypatch):
    monkeypatch.setitem(sys.modules, "cv2", None)

    assert CameraConfig().get_backends() == []
