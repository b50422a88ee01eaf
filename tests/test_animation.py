from __future__ import annotations

import pytest

from plainqr.animation import PRESSED_SCALE, Cooldown, glow_stops, lerp_color, press_scale
from plainqr.config import StyleConfig


def test_lerp_color_blends_channels():
    assert lerp_color("#000000", "#FFFFFF", 0.0) == "#000000"
    assert lerp_color("#000000", "#FFFFFF", 1.0) == "#FFFFFF"
    assert lerp_color("#000000", "#FFFFFF", 0.5) == "#808080"
    assert lerp_color("#102030", "#102030", 0.3) == "#102030"


def test_lerp_color_clamps_and_validates():
    assert lerp_color("#000000", "#FFFFFF", 2.0) == "#FFFFFF"
    with pytest.raises(ValueError):
        lerp_color("#FFF", "#000000", 0.5)


def test_glow_stops_shift_with_progress():
    colors = ["#000000", "#FFFFFF"]

    assert glow_stops(0.0, colors, steps=2) == [(0.0, "#000000"), (0.5, "#808080")]
    assert glow_stops(0.75, colors, steps=2) == [(0.25, "#808080"), (0.75, "#000000")]


def test_glow_stops_cover_the_ring():
    stops = glow_stops(0.3, StyleConfig().glow_colors)

    positions = [position for position, _ in stops]
    assert len(stops) == 60
    assert positions == sorted(positions)
    assert all(0.0 <= position < 1.0 for position in positions)


def test_glow_stops_rejects_empty_palette():
    with pytest.raises(ValueError):
        glow_stops(0.0, [])


def test_press_scale():
    assert press_scale(True) == PRESSED_SCALE
    assert press_scale(False) == 1.0


def test_cooldown_blocks_rapid_presses():
    now = [10.0]
    cooldown = Cooldown(200, clock=lambda: now[0])

    assert cooldown.try_acquire()
    now[0] += 0.1
    assert not cooldown.try_acquire()
    now[0] += 0.15
    assert cooldown.try_acquire()
