"""Helpers for winding down worker threads."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def shutdown_thread(thread, timeout_ms: int = 1500) -> bool:
    """Stop a ``QThread`` and make sure it is no longer running.

    The thread's event loop is asked to quit first.  A worker stuck in a
    blocking call (a camera ``read()`` that never returns) cannot see that
    request, so after ``timeout_ms`` the thread is terminated and joined.
    Returns ``True`` when the thread finished on its own.
    """

    if thread is None or not thread.isRunning():
        return True

    thread.quit()
    if thread.wait(timeout_ms):
        return True

    logger.warning("Worker thread did not stop within %d ms, terminating", timeout_ms)
    thread.terminate()
    thread.wait()
    return False


__all__ = ["shutdown_thread"]
