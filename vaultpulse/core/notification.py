"""Notification data structures."""

from dataclasses import dataclass, field
from datetime import datetime

from ..filters.eligibility import note_stem
from .recordings import AudioReference


@dataclass
class VoiceNoteNotification:
    """A recording newly embedded in a date note, ready to dispatch."""

    note_path: str
    reference: AudioReference
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def note_name(self) -> str:
        return note_stem(self.note_path)

    @property
    def note_date(self) -> str:
        # Date notes are named after their date
        return self.note_name

    def __str__(self) -> str:
        return f"{self.note_name}: {self.reference.raw}"

    def __repr__(self) -> str:
        return (
            f"VoiceNoteNotification(note_path={self.note_path!r}, "
            f"reference={self.reference.raw!r})"
        )
