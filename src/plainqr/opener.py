"""Open confirmed links in the system browser."""
from __future__ import annotations

import logging
import webbrowser
from dataclasses import dataclass
from typing import Collection

from .links import DEFAULT_SCHEMES, is_valid_url

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LinkOpener:
    schemes: Collection[str] = DEFAULT_SCHEMES
    new_tab: bool = True

    def open(self, url: str) -> bool:
        """Open ``url`` in the default browser.

        Only links that pass :func:`~plainqr.links.is_valid_url` are handed to
        the browser; anything else is refused.
        """

        if not is_valid_url(url, self.schemes):
            logger.warning("Refusing to open %r", url)
            return False

        opened = webbrowser.open(url, new=2 if self.new_tab else 0)
        if not opened:
            logger.warning("No browser accepted %s", url)
        return opened


__all__ = ["LinkOpener"]
