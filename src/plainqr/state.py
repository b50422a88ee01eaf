"""Runtime state containers used by PlainQR."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TransitionError(RuntimeError):
    """Raised when a scan session is asked for a move its phase forbids."""


class ScanPhase(enum.Enum):
    SCANNING = "scanning"
    PRESENTED = "presented"
    AWAY = "away"


@dataclass(slots=True)
class ScanSession:
    """Track the single link that may be in front of the user.

    ``SCANNING`` accepts new candidates.  ``PRESENTED`` holds exactly one
    candidate until the user visits or dismisses it.  ``AWAY`` means the link
    was handed to the browser and the camera waits for the window to be
    focused again.
    """

    phase: ScanPhase = ScanPhase.SCANNING
    candidate: Optional[str] = None

    @property
    def camera_active(self) -> bool:
        return self.phase is ScanPhase.SCANNING

    @property
    def dialog_visible(self) -> bool:
        return self.phase is ScanPhase.PRESENTED

    def present(self, url: str) -> bool:
        """Show ``url`` to the user unless another link is already pending."""

        if self.phase is not ScanPhase.SCANNING:
            logger.debug("Ignoring %r while %s", url, self.phase.value)
            return False

        self.phase = ScanPhase.PRESENTED
        self.candidate = url
        logger.info("Presenting scanned link %s", url)
        return True

    def visit(self) -> str:
        """Hand the pending link over and return it."""

        url = self._require_candidate("visit")
        self.phase = ScanPhase.AWAY
        self.candidate = None
        return url

    def dismiss(self) -> None:
        """Drop the pending link and go back to scanning."""

        self._require_candidate("dismiss")
        self.phase = ScanPhase.SCANNING
        self.candidate = None

    def follow(self, open_link: Callable[[str], bool]) -> bool:
        """Hand the pending link to ``open_link`` and leave the app.

        When ``open_link`` reports failure nobody is coming back from a
        browser, so scanning resumes straight away and ``False`` is returned.
        """

        url = self.visit()
        if open_link(url):
            return True
        logger.warning("Could not open %s, scanning again", url)
        self.resume()
        return False

    def resume(self) -> bool:
        """Restart scanning after returning from the browser."""

        if self.phase is not ScanPhase.AWAY:
            return False
        self.phase = ScanPhase.SCANNING
        logger.debug("Scanning resumed")
        return True

    def _require_candidate(self, action: str) -> str:
        if self.phase is not ScanPhase.PRESENTED or self.candidate is None:
            raise TransitionError(f"Cannot {action} while {self.phase.value}")
        return self.candidate


@dataclass(slots=True)
class AppState:
    """Mutable state shared between UI components."""

    session: ScanSession = field(default_factory=ScanSession)
    camera_available: bool = False
    decoder_available: bool = False

    def on_activated(self) -> bool:
        """Return ``True`` if the camera should start now that the window has focus.

        That covers coming back from the browser and retrying a camera that
        failed to open, for example before access was granted.
        """

        if self.session.resume():
            return True
        return self.session.camera_active and not self.camera_available


__all__ = ["AppState", "ScanPhase", "ScanSession", "TransitionError"]
