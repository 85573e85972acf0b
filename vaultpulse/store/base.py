"""Document store interface for VaultPulse."""

from abc import ABC, abstractmethod
from typing import List, Optional


class DocumentStore(ABC):
    """Abstract read-only view of the notes and attachments being watched."""

    @abstractmethod
    def list_documents(self) -> List[str]:
        """Return the paths of all Markdown documents."""
        pass

    @abstractmethod
    def read(self, path: str) -> str:
        """Return the full text of a document."""
        pass

    @abstractmethod
    def find_attachment(self, name: str) -> Optional[str]:
        """Return the path of the attachment with this bare file name, if any."""
        pass

    @abstractmethod
    def read_binary(self, path: str) -> bytes:
        """Return the raw bytes of an attachment."""
        pass
