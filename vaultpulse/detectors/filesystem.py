"""File system monitoring detector for vault notes."""

import logging
import threading
from typing import Callable, Optional
from threading import Event

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler, FileSystemEvent

from ..filters.eligibility import is_markdown
from ..store.vault import Vault
from .base import BaseDetector, ModifiedCallback, MovedCallback

logger = logging.getLogger(__name__)


class VaultFileHandler(FileSystemEventHandler):
    """Handle file system events in the vault directory."""

    def __init__(
        self,
        vault: Vault,
        callback: ModifiedCallback,
        moved_callback: Optional[MovedCallback] = None,
    ):
        """
        Initialize the file handler.

        Args:
            vault: Vault being watched.
            callback: Function to call with (path, reader) for each note change.
            moved_callback: Function to call with (src, dest, reader) when a
                note is moved within the vault. Moves are reported through
                callback as a change of dest when omitted.
        """
        super().__init__()
        self._vault = vault
        self._callback = callback
        self._moved_callback = moved_callback
        self._lock = threading.Lock()

    def _reader(self, path: str) -> Callable[[], str]:
        return lambda: self._vault.read(path)

    def _note_path(self, fs_path: str) -> Optional[str]:
        """Vault path of a watched note, or None for anything else."""
        path = self._vault.relative_path(fs_path)
        if path is None or not is_markdown(path):
            return None
        if self._vault.should_ignore(path):
            return None
        return path

    def _deliver(self, path: str, call: Callable[[], None]) -> None:
        """Run one callback, one at a time in arrival order."""
        with self._lock:
            try:
                call()
            except Exception as e:
                logger.error(f"Error handling change to {path}: {e}")

    def _dispatch_note(self, fs_path: str) -> None:
        path = self._note_path(fs_path)
        if path is None:
            return

        logger.debug(f"Note changed: {path}")
        self._deliver(path, lambda: self._callback(path, self._reader(path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file modification events."""
        if event.is_directory:
            return
        self._dispatch_note(event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation events."""
        if event.is_directory:
            return
        self._dispatch_note(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle renames and atomic saves that move a temp file over the note."""
        if event.is_directory:
            return

        dest = self._note_path(event.dest_path)
        if dest is None:
            return

        src = self._vault.relative_path(event.src_path)
        if self._moved_callback is None or src is None:
            self._dispatch_note(event.dest_path)
            return

        logger.debug(f"Note moved: {src} -> {dest}")
        self._deliver(dest, lambda: self._moved_callback(src, dest, self._reader(dest)))


class VaultDetector(BaseDetector):
    """
    Detector using file system monitoring.

    Watches the vault directory and reports every created, modified, moved
    or replaced Markdown note. Filtering down to date notes is left to the
    monitor.
    """

    def __init__(
        self,
        callback: ModifiedCallback,
        shutdown_event: Event,
        vault: Vault,
        moved_callback: Optional[MovedCallback] = None,
    ):
        """
        Initialize the vault detector.

        Args:
            callback: Function to call with (path, reader) for each note change.
            shutdown_event: Event to signal shutdown.
            vault: Vault to watch.
            moved_callback: Function to call with (src, dest, reader) for moves.
        """
        super().__init__(callback, shutdown_event)
        self.vault = vault
        self.moved_callback = moved_callback
        self._observer: Optional[Observer] = None
        self._handler: Optional[VaultFileHandler] = None

    @property
    def name(self) -> str:
        return "VaultDetector"

    def start(self) -> None:
        """Start watching the vault directory."""
        if not self.vault.root.is_dir():
            logger.warning(f"Vault directory not found: {self.vault.root}")
            logger.warning("Note monitoring disabled.")
            return

        self._handler = VaultFileHandler(
            vault=self.vault,
            callback=self.callback,
            moved_callback=self.moved_callback,
        )

        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            str(self.vault.root),
            recursive=True,
        )
        self._observer.start()
        logger.info(f"Started {self.name} watching: {self.vault.root}")

    def stop(self) -> None:
        """Stop the filesystem observer."""
        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=2.0)
            self._observer = None
        logger.info(f"Stopped {self.name}")
