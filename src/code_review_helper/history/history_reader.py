"""
Recent commit history lookup.

History is supplementary context for a review. A failed lookup (not a
repository, no commits yet, git missing) is therefore reported in the
returned :class:`HistoryResult` rather than raised, so that it never
aborts an otherwise successful review.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from code_review_helper.vcs.git_client import CommitRecord, GitClient, GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_MAX_COUNT = 10


@dataclass(frozen=True)
class HistoryResult:
    """Commits newest first, or an empty list and an error description."""

    commits: List[CommitRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data = {"commits": [commit.to_dict() for commit in self.commits]}
        if self.error is not None:
            data["error"] = self.error
        return data


def read_history(root_dir: Union[str, Path], max_count: int = DEFAULT_MAX_COUNT) -> HistoryResult:
    """Return up to ``max_count`` most recent commits of ``root_dir``'s repository.

    Raises
    ------
    ValueError
        If ``max_count`` is not a positive integer.
    """
    if isinstance(max_count, bool) or not isinstance(max_count, int) or max_count < 1:
        raise ValueError(f"max_count must be a positive integer, got {max_count!r}")
    try:
        client = GitClient.for_directory(Path(root_dir))
        commits = client.get_log(max_count)
    except GitError as exc:
        error = str(exc) or "Failed to get git history"
        logger.warning("Could not read git history for '%s': %s", root_dir, error)
        return HistoryResult(commits=[], error=error)
    return HistoryResult(commits=commits[:max_count])
