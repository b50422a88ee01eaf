from __future__ import annotations

import numpy as np

from plainqr.camera import Frame
from plainqr.scanner import Scanner


class ScriptedDecoder:
    """Return one scripted payload per decoded frame."""

    def __init__(self, payloads):
        self._payloads = list(payloads)
        self.calls = 0

    def decode(self, frame):
        self.calls += 1
        return self._payloads.pop(0) if self._payloads else None


def make_frames(count):
    return [Frame(luminance=np.full((4, 4), index, dtype=np.uint8)) for index in range(count)]


def test_inspect_keeps_only_links():
    scanner = Scanner(ScriptedDecoder(["hello", "https://example.com", None]))
    frame = make_frames(1)[0]

    assert scanner.inspect(frame) is None
    assert scanner.inspect(frame) == "https://example.com"
    assert scanner.inspect(frame) is None


def test_candidates_skip_rejected_payloads_in_order():
    decoder = ScriptedDecoder([None, "ftp://example.com", "https://a.example", "http://b.example"])
    scanner = Scanner(decoder)

    assert list(scanner.candidates(make_frames(4))) == ["https://a.example", "http://b.example"]
    assert decoder.calls == 4


def test_candidates_honour_frame_skip():
    decoder = ScriptedDecoder(["https://a.example", "https://b.example"])
    scanner = Scanner(decoder, frame_skip=3)

    found = list(scanner.candidates(make_frames(6)))

    assert decoder.calls == 2
    assert found == ["https://a.example", "https://b.example"]


def test_candidates_pull_frames_lazily():
    pulled = []

    def source():
        for frame in make_frames(10):
            pulled.append(frame)
            yield frame

    scanner = Scanner(ScriptedDecoder([None, "https://example.com"]))
    links = scanner.candidates(source())

    assert next(links) == "https://example.com"
    assert len(pulled) == 2
    links.close()


def test_candidates_use_configured_schemes():
    scanner = Scanner(ScriptedDecoder(["http://plain.example", "https://tls.example"]), schemes=("https",))

    assert list(scanner.candidates(make_frames(2))) == ["https://tls.example"]
