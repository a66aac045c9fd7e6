"""
Git client implementation for code_review_helper.

This module wraps the read-only Git queries required by the review
pipeline: the changed-file summary, per-file unified diffs, and the
commit log. No method stages, commits, or otherwise mutates the
repository. All subprocess calls go through :meth:`GitClient._run` so
that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Separators for the ``git log`` pretty format. ASCII unit/record separators
# never appear in commit metadata.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%aI", "%s", "%an", "%ae"]) + _RECORD_SEP


@dataclass(frozen=True)
class CommitRecord:
    """A single commit as reported by ``git log``."""

    hash: str
    date: str
    message: str
    author_name: str
    author_email: str

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "date": self.date,
            "message": self.message,
            "author_name": self.author_name,
            "author_email": self.author_email,
        }


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class NotARepositoryError(GitError):
    """Raised when a directory is missing or not inside a Git work tree."""

    pass


class GitClient:
    """Read-only client for a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if GitClient.is_repo(current):
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    @classmethod
    def for_directory(cls, root_dir: Path) -> "GitClient":
        """Return a client for the repository containing ``root_dir``.

        Raises
        ------
        NotARepositoryError
            If ``root_dir`` does not exist, is not a directory, or has no
            ``.git`` entry at or above it.
        """
        root_dir = Path(root_dir)
        if not root_dir.is_dir():
            raise NotARepositoryError(f"Directory does not exist: {root_dir}")
        repo_root = cls.find_repo_root(root_dir)
        if repo_root is None:
            raise NotARepositoryError(f"Not a git repository: {root_dir}")
        return cls(repo_root)

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status, or if the ``git`` executable cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Unable to run git: %s", e)
            raise GitError(f"Unable to run git: {e}") from e

        if result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------
    def get_changed_files(self) -> List[str]:
        """Return the paths changed between the working tree and the index.

        Uses ``git diff --numstat -z --no-renames`` so that each path is
        reported verbatim (no quoting, no ``old => new`` rename syntax).
        Paths are relative to the repository root and returned in the
        order Git reports them, each at most once.

        Raises
        ------
        GitError
            If the diff summary command fails.
        """
        result = self._run(["diff", "--no-color", "--numstat", "-z", "--no-renames"])
        paths: List[str] = []
        for record in result.stdout.split("\0"):
            if not record:
                continue
            # numstat record: <added>\t<removed>\t<path>; binary files
            # report '-' for both counts.
            parts = record.split("\t", 2)
            if len(parts) != 3:
                logger.debug("Skipping unexpected numstat record: %r", record)
                continue
            path = parts[2]
            if path not in paths:
                paths.append(path)
        return paths

    def get_diff(self, path: str) -> str:
        """Return the unified diff of a single file.

        The ``--`` separator limits output to ``path`` even when the path
        looks like a revision or an option, and ``--literal-pathspecs``
        stops Git from reading ``:``, ``*``, ``?`` or ``[`` in the name as
        pathspec magic or globs. Colour and external diff drivers from the
        user's configuration are switched off so the output is always a
        plain unified diff.
        """
        result = self._run(["--literal-pathspecs", "diff", "--no-color", "--no-ext-diff", "--", path])
        return result.stdout

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_log(self, max_count: int) -> List[CommitRecord]:
        """Return up to ``max_count`` most recent commits, newest first.

        Raises
        ------
        GitError
            If the log cannot be read (e.g. the repository has no commits).
        """
        result = self._run(
            ["log", "--no-color", f"--max-count={max_count}", f"--pretty=format:{_LOG_FORMAT}"]
        )
        commits: List[CommitRecord] = []
        for record in result.stdout.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            fields = record.split(_FIELD_SEP)
            if len(fields) != 5:
                logger.debug("Skipping malformed log record: %r", record)
                continue
            commits.append(CommitRecord(*fields))
        return commits
