"""Local directory vault."""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .base import DocumentStore

logger = logging.getLogger(__name__)


class Vault(DocumentStore):
    """
    Document store over a vault directory on disk.

    Document and attachment paths are POSIX strings relative to the vault
    root, e.g. ``Daily/2026-01-05.md``.
    """

    DEFAULT_IGNORE_PATTERNS = (".obsidian", ".trash")

    def __init__(
        self,
        root: Path,
        ignore_patterns: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the vault.

        Args:
            root: Vault root directory.
            ignore_patterns: Directory names whose contents are never scanned.
        """
        self.root = Path(root).expanduser()
        self.ignore_patterns = set(
            ignore_patterns if ignore_patterns is not None else self.DEFAULT_IGNORE_PATTERNS
        )

    def should_ignore(self, relative_path: str) -> bool:
        """Check if any component of this path is ignored."""
        parts = Path(relative_path).parts
        return any(part in self.ignore_patterns for part in parts)

    def relative_path(self, path: Path) -> Optional[str]:
        """Return the vault-relative POSIX path, or None if outside the vault."""
        try:
            return Path(path).resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return None

    def _iter_files(self, pattern: str) -> Iterator[Path]:
        for path in self.root.rglob(pattern):
            if not path.is_file():
                continue
            if self.should_ignore(path.relative_to(self.root).as_posix()):
                continue
            yield path

    def list_documents(self) -> List[str]:
        if not self.root.is_dir():
            logger.warning(f"Vault directory not found: {self.root}")
            return []
        return sorted(
            path.relative_to(self.root).as_posix() for path in self._iter_files("*.md")
        )

    def read(self, path: str) -> str:
        return (self.root / path).read_text(encoding="utf-8")

    def find_attachment(self, name: str) -> Optional[str]:
        # Embeds name attachments by bare file name, wherever they live
        if not name or "/" in name or not self.root.is_dir():
            return None
        for path in sorted(self._iter_files("*")):
            if path.name == name:
                return path.relative_to(self.root).as_posix()
        return None

    def read_binary(self, path: str) -> bytes:
        return (self.root / path).read_bytes()
