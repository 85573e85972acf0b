"""Base detector interface for VaultPulse."""

from abc import ABC, abstractmethod
from typing import Callable
from threading import Event

# Delivers (vault path, reader returning the note's current text)
ModifiedCallback = Callable[[str, Callable[[], str]], None]

# Delivers (old vault path, new vault path, reader for the new path)
MovedCallback = Callable[[str, str, Callable[[], str]], None]


class BaseDetector(ABC):
    """Abstract base class for note modification detectors."""

    def __init__(
        self,
        callback: ModifiedCallback,
        shutdown_event: Event,
    ):
        """
        Initialize the detector.

        Args:
            callback: Function to call when a note is modified.
                      Signature: (path: str, reader: () -> str)
            shutdown_event: Event to signal shutdown.
        """
        self.callback = callback
        self.shutdown_event = shutdown_event

    @abstractmethod
    def start(self) -> None:
        """Start the detector. This may block or run in background."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the detector and clean up resources."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return detector name for logging."""
        pass
