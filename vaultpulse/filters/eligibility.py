"""Which notes are watched for new recordings."""

import re
from pathlib import PurePosixPath

# Daily notes are named after their date, e.g. 2026-01-05.md
DATE_NAME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def note_stem(name: str) -> str:
    """Base name of a note with directories and extension stripped."""
    return PurePosixPath(name.replace("\\", "/")).stem


def is_eligible(name: str) -> bool:
    """
    Check if a note is a date-named note.

    Args:
        name: Note name or vault path, with or without extension.

    Returns:
        True if the base name is exactly YYYY-MM-DD.
    """
    return bool(DATE_NAME_PATTERN.fullmatch(note_stem(name)))


def is_markdown(name: str) -> bool:
    return PurePosixPath(name.replace("\\", "/")).suffix.lower() == ".md"
