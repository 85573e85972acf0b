"""Document stores for VaultPulse."""

from .base import DocumentStore
from .vault import Vault

__all__ = ["DocumentStore", "Vault"]
