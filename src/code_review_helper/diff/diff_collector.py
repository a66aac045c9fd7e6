"""
Diff collection for the review pipeline.

The :class:`DiffCollector` asks Git for the files changed in a working
tree and fetches the unified diff of each one. Paths listed in the
collector's exclusion set are skipped. Unlike per-file classification
helpers, collection failures are never hidden: without diffs there is
nothing to review, so :class:`~code_review_helper.vcs.git_client.GitError`
propagates to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from code_review_helper.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Build output directory and lock file. Matched against the full path.
DEFAULT_EXCLUDED_FILES = ("dist", "bun.lock")


@dataclass(frozen=True)
class FileChange:
    """A changed file and its unified diff against the index."""

    path: str
    diff: str

    def to_dict(self) -> dict:
        return {"path": self.path, "diff": self.diff}


class DiffCollector:
    """Collect file-level diffs from a Git working tree.

    Parameters
    ----------
    exclude_files : Iterable[str], optional
        Paths to skip. A file is excluded only when its repository
        relative path equals an entry exactly.
    """

    def __init__(self, exclude_files: Iterable[str] = DEFAULT_EXCLUDED_FILES) -> None:
        self.exclude_files = frozenset(exclude_files)

    def is_excluded(self, path: str) -> bool:
        return path in self.exclude_files

    def collect(self, root_dir: Union[str, Path]) -> List[FileChange]:
        """Return the pending changes of the repository containing ``root_dir``.

        Parameters
        ----------
        root_dir : str or Path
            A directory inside a Git working tree.

        Returns
        -------
        List[FileChange]
            One entry per changed, non-excluded file in the order Git
            reports them. An empty list means there are no pending changes.

        Raises
        ------
        NotARepositoryError
            If ``root_dir`` is missing or not under version control.
        GitError
            If any Git query fails.
        """
        client = GitClient.for_directory(Path(root_dir))
        changes: List[FileChange] = []
        for path in client.get_changed_files():
            if self.is_excluded(path):
                logger.debug("Skipping excluded path: %s", path)
                continue
            changes.append(FileChange(path=path, diff=client.get_diff(path)))
        logger.debug("Collected %d changed file(s) in %s", len(changes), client.repo_root)
        return changes


def collect_changes(
    root_dir: Union[str, Path],
    exclude_files: Optional[Iterable[str]] = None,
) -> List[FileChange]:
    """Collect changes with a one-off :class:`DiffCollector`."""
    if exclude_files is None:
        exclude_files = DEFAULT_EXCLUDED_FILES
    return DiffCollector(exclude_files).collect(root_dir)
