"""Note modification detectors for VaultPulse."""

from .base import BaseDetector
from .filesystem import VaultDetector

__all__ = [
    "BaseDetector",
    "VaultDetector",
]
