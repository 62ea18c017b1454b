#!/usr/bin/env python3
"""
Signal handler for interrupted deployments.

On SIGINT or SIGTERM the registered callback saves the run record, then
the process exits with the conventional interrupt status.
"""

import logging
import signal
import sys
from types import FrameType
from typing import Any, Callable, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"

logger = logging.getLogger(__name__)

INTERRUPTED_EXIT_CODE = 130


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "signal_handler",
        "description": "Signal handler for interrupted deployments",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class ShutdownCoordinator:
    """Runs a callback and exits 130 on SIGINT/SIGTERM.

    Usable as a context manager: handlers are installed on entry and the
    previous handlers restored on exit.
    """

    def __init__(self, callback: Optional[Callable[[], None]] = None) -> None:
        self._shutdown_requested = False
        self._shutdown_callback = callback
        self._original_handlers: dict[int, Any] = {}

    def is_shutdown_requested(self) -> bool:
        """Check if shutdown has been requested."""
        return self._shutdown_requested

    def register_shutdown_callback(self, callback: Callable[[], None]) -> None:
        """Register the callback run before exiting.

        Args:
            callback: Function to call when a signal arrives
        """
        self._shutdown_callback = callback

    def setup_signal_handlers(self) -> None:
        """Install handlers for SIGINT and SIGTERM."""
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._original_handlers[signum] = signal.signal(signum, self._signal_handler)

    def restore_signal_handlers(self) -> None:
        """Restore the handlers that were active before setup."""
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

    def __enter__(self) -> "ShutdownCoordinator":
        self.setup_signal_handlers()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.restore_signal_handlers()

    def _signal_handler(self, signum: int, frame: FrameType | None) -> None:
        """Handle SIGINT and SIGTERM.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        self._shutdown_requested = True
        logger.warning(f"Received {signal.Signals(signum).name}, saving run record and exiting")

        if self._shutdown_callback is not None:
            try:
                self._shutdown_callback()
            except Exception as e:
                logger.error(f"Error during shutdown: {e}")

        self.restore_signal_handlers()
        sys.exit(INTERRUPTED_EXIT_CODE)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
