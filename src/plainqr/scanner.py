"""Turn a stream of frames into validated links."""
from __future__ import annotations

import logging
from typing import Collection, Iterable, Iterator, Optional, Protocol

from .camera import Frame
from .links import DEFAULT_SCHEMES, is_valid_url

logger = logging.getLogger(__name__)


class Decoder(Protocol):
    def decode(self, frame: Frame) -> Optional[str]:
        ...


class Scanner:
    """Decode frames one at a time and keep only navigable links."""

    def __init__(
        self,
        decoder: Decoder,
        frame_skip: int = 1,
        schemes: Collection[str] = DEFAULT_SCHEMES,
    ):
        self._decoder = decoder
        self._frame_skip = max(1, frame_skip)
        self._schemes = tuple(schemes)

    def inspect(self, frame: Frame) -> Optional[str]:
        """Return the decoded payload of ``frame`` if it is a web link."""

        payload = self._decoder.decode(frame)
        if payload is None:
            return None

        if not is_valid_url(payload, self._schemes):
            logger.debug("Ignoring non-link payload %r", payload[:80])
            return None
        return payload

    def candidates(self, frames: Iterable[Frame]) -> Iterator[str]:
        """Lazily yield links found in ``frames``, in arrival order.

        Only every ``frame_skip``-th frame is decoded.  Nothing is read from
        ``frames`` until the caller asks for the next link, so closing the
        returned generator stops consuming the source.
        """

        for counter, frame in enumerate(frames, start=1):
            if counter % self._frame_skip:
                continue
            url = self.inspect(frame)
            if url is not None:
                yield url


__all__ = ["Decoder", "Scanner"]
