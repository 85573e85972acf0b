"""Core monitoring module for VaultPulse."""

from .notification import VoiceNoteNotification
from .recordings import AudioReference, extract_references, diff
from .monitor import VaultMonitor

__all__ = [
    "VoiceNoteNotification",
    "AudioReference",
    "extract_references",
    "diff",
    "VaultMonitor",
]
