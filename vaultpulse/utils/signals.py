"""Shutdown and reload signal handling."""

import signal
import logging
from threading import Event
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def install_signal_handlers(
    shutdown_event: Optional[Event] = None,
    reload_callback: Optional[Callable[[], None]] = None,
) -> Event:
    """
    Install handlers for SIGINT and SIGTERM, and SIGHUP when reloading.

    Args:
        shutdown_event: Event to set on shutdown (a new one if omitted).
        reload_callback: Called on SIGHUP to re-read configuration.

    Returns:
        Event that will be set when shutdown is requested.
    """
    if shutdown_event is None:
        shutdown_event = Event()

    def handler(signum, frame):
        sig_name = signal.Signals(signum).name
        logger.info(f"Received {sig_name}, initiating shutdown...")
        shutdown_event.set()

    def reload_handler(signum, frame):
        logger.info("Received SIGHUP, reloading configuration...")
        try:
            reload_callback()
        except Exception as e:
            logger.error(f"Failed to reload configuration: {e}")

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)

    # SIGHUP does not exist on Windows
    if reload_callback is not None and hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, reload_handler)
        logger.debug("Signal handlers installed for SIGINT, SIGTERM and SIGHUP")
    else:
        logger.debug("Signal handlers installed for SIGINT and SIGTERM")
    return shutdown_event
