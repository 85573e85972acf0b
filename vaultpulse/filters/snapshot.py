"""Last-seen content of every watched note."""

import logging
from threading import Lock
from typing import Dict, Optional

from ..store.base import DocumentStore
from .eligibility import is_eligible

logger = logging.getLogger(__name__)


class SnapshotTracker:
    """
    Content snapshot per date-named note.

    Holds the text of each note as of the last processed modification so the
    next version can be diffed against it. Entries are never removed; a
    deleted note simply stops receiving events.
    """

    def __init__(self):
        self._snapshots: Dict[str, str] = {}
        self._lock = Lock()

    def initialize(self, store: DocumentStore) -> int:
        """
        Load the current content of every eligible note.

        Notes that cannot be read are skipped; their first modification
        event will populate them.

        Args:
            store: Document store to scan.

        Returns:
            Number of notes loaded.
        """
        loaded = 0
        for path in store.list_documents():
            if not is_eligible(path):
                continue
            try:
                content = store.read(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.debug(f"Skipping unreadable note {path}: {e}")
                continue

            with self._lock:
                self._snapshots[path] = content
            loaded += 1

        logger.info(f"Loaded snapshots for {loaded} date note(s)")
        return loaded

    def on_modified(self, path: str, new_content: str) -> str:
        """
        Swap in the new content of a note.

        The read of the old content and the write of the new one happen
        under one lock acquisition.

        Args:
            path: Vault path of the note.
            new_content: Full text after the modification.

        Returns:
            Previous content, or "" if the note had no snapshot.
        """
        if not is_eligible(path):
            return ""

        with self._lock:
            previous = self._snapshots.get(path, "")
            self._snapshots[path] = new_content
        return previous

    def carry_over(self, src_path: str, dest_path: str) -> bool:
        """
        Give a moved note the snapshot of its old path.

        The old entry is left in place, like any note that stops receiving
        events.

        Args:
            src_path: Vault path before the move.
            dest_path: Vault path after the move.

        Returns:
            True if src_path was tracked and dest_path is eligible.
        """
        if not is_eligible(dest_path):
            return False

        with self._lock:
            if src_path not in self._snapshots:
                return False
            self._snapshots[dest_path] = self._snapshots[src_path]
        return True

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            return self._snapshots.get(path)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._snapshots

    def __len__(self) -> int:
        """Return number of tracked notes."""
        with self._lock:
            return len(self._snapshots)
