"""Audio recording embeds and the diff between note versions."""

import re
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, List

# Matches embeds like: ![[Recording 20260105012858.m4a]]
RECORDING_PATTERN = re.compile(
    r"!\[\[Recording[^\]]+\.(m4a|mp3|wav|webm|ogg)\]\]",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AudioReference:
    """An audio recording embedded in a note, compared by its raw text."""

    raw: str

    @property
    def file_name(self) -> str:
        """Attachment file name, e.g. ``Recording 20260105012858.m4a``."""
        return self.raw[3:-2]

    @property
    def extension(self) -> str:
        return self.file_name.rsplit(".", 1)[-1].lower()

    def __str__(self) -> str:
        return self.raw


def extract_references(content: str) -> FrozenSet[AudioReference]:
    """Return every distinct recording embed found in content."""
    return frozenset(
        AudioReference(match.group(0)) for match in RECORDING_PATTERN.finditer(content)
    )


def diff(old_content: str, new_content: str) -> FrozenSet[AudioReference]:
    """
    Return recordings present in new_content but not in old_content.

    Position is ignored: a recording moved within the note is not new,
    while one that was removed earlier and added back is.
    """
    return extract_references(new_content) - extract_references(old_content)


def order_by_position(
    references: Iterable[AudioReference],
    content: str,
) -> List[AudioReference]:
    """Sort references by where they first appear in content."""
    return sorted(references, key=lambda ref: (content.find(ref.raw), ref.raw))


def describe(references: AbstractSet[AudioReference]) -> str:
    """Comma-separated embed text, for log lines."""
    return ", ".join(sorted(ref.raw for ref in references))
