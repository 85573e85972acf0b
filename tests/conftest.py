"""Shared fixtures."""

from typing import Dict, List, Optional

import pytest

from vaultpulse.store.base import DocumentStore


class MemoryStore(DocumentStore):
    """In-memory document store."""

    def __init__(
        self,
        documents: Optional[Dict[str, str]] = None,
        attachments: Optional[Dict[str, bytes]] = None,
        unreadable: Optional[List[str]] = None,
    ):
        self.documents = dict(documents or {})
        self.attachments = dict(attachments or {})
        self.unreadable = set(unreadable or [])

    def list_documents(self) -> List[str]:
        return sorted(self.documents)

    def read(self, path: str) -> str:
        if path in self.unreadable:
            raise OSError(f"cannot read {path}")
        return self.documents[path]

    def find_attachment(self, name: str) -> Optional[str]:
        for path in self.attachments:
            if path.rsplit("/", 1)[-1] == name:
                return path
        return None

    def read_binary(self, path: str) -> bytes:
        return self.attachments[path]


@pytest.fixture
def make_store():
    """Factory for in-memory stores."""
    return MemoryStore
