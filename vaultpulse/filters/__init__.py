"""Note filters for VaultPulse."""

from .eligibility import is_eligible, is_markdown, note_stem
from .snapshot import SnapshotTracker

__all__ = ["is_eligible", "is_markdown", "note_stem", "SnapshotTracker"]
