"""
Data models for generated commit messages.

The :class:`CommitMessageResult` couples a synthesized commit message
with the commit type it was built for and the line statistics of the
change set it describes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiffStats:
    """Line statistics of a change set.

    Attributes
    ----------
    added : int
        Number of added lines across all diffs.
    removed : int
        Number of removed lines across all diffs.
    files_changed : int
        Number of files in the change set.
    """

    added: int = 0
    removed: int = 0
    files_changed: int = 0

    def to_dict(self) -> dict:
        return {"added": self.added, "removed": self.removed, "files_changed": self.files_changed}


@dataclass(frozen=True)
class CommitMessageResult:
    """A synthesized commit message.

    Attributes
    ----------
    message : str
        The full multi-line commit message.
    commit_type : str
        The Conventional Commit type used in the header.
    stats : DiffStats
        Line statistics of the described change set.
    """

    message: str
    commit_type: str
    stats: DiffStats

    @property
    def header(self) -> str:
        return self.message.splitlines()[0]

    def to_dict(self) -> dict:
        return {"message": self.message, "type": self.commit_type, "stats": self.stats.to_dict()}
