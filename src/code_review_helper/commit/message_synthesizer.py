"""
Conventional commit message synthesis.

This module builds a commit message from a change set and a commit type
without consulting a language model. All commit messages follow the
format::

  <type>(<scope>): <description>

  - Modified <n> file(s)
  - Added <a> lines, removed <r> lines
  - Files: <path>, <path>, ...

The ``(<scope>)`` segment is omitted when no scope can be derived.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Optional, Sequence, Tuple

from code_review_helper.commit.change_classifier import classify_changes
from code_review_helper.commit.commit_model import CommitMessageResult, DiffStats
from code_review_helper.diff.diff_collector import FileChange


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DESCRIPTIONS = {
    "feat": "add new functionality",
    "fix": "resolve issues",
    "docs": "update documentation",
    "refactor": "improve code structure",
    "test": "add/update tests",
}
DEFAULT_DESCRIPTION = "update code"

# Change sets larger than this get the generic "multiple" scope.
MAX_NAMED_FILES = 3


def derive_scope(changes: Sequence[FileChange]) -> str:
    """Return the commit scope for a change set, or an empty string.

    A single file gives its base name up to the first period
    (``src/auth.ts`` -> ``auth``); more than three files give
    ``multiple``; two or three distinct files give ``files``.
    """
    if len(changes) == 1:
        name = PurePosixPath(changes[0].path).name
        return name.split(".", 1)[0]
    if len(changes) > MAX_NAMED_FILES:
        return "multiple"
    if len({change.path for change in changes}) > 1:
        return "files"
    return ""


def count_changed_lines(diff: str) -> Tuple[int, int]:
    """Count added and removed lines in a unified diff.

    Header lines (``+++``/``---``) are not counted.
    """
    added = 0
    removed = 0
    for line in diff.splitlines():
        if line.startswith("+") and not line.startswith("++"):
            added += 1
        elif line.startswith("-") and not line.startswith("--"):
            removed += 1
    return added, removed


def compute_stats(changes: Sequence[FileChange]) -> DiffStats:
    added = 0
    removed = 0
    for change in changes:
        file_added, file_removed = count_changed_lines(change.diff)
        added += file_added
        removed += file_removed
    return DiffStats(added=added, removed=removed, files_changed=len(changes))


def synthesize_commit_message(changes: Sequence[FileChange], commit_type: str) -> CommitMessageResult:
    """Compose a conventional commit message for ``changes``.

    Parameters
    ----------
    changes : Sequence[FileChange]
        The change set to describe. May be empty.
    commit_type : str
        The Conventional Commit type to put in the header.

    Returns
    -------
    CommitMessageResult
        The message together with its type and line statistics.
    """
    scope = derive_scope(changes)
    scope_text = f"({scope})" if scope else ""
    description = DESCRIPTIONS.get(commit_type, DEFAULT_DESCRIPTION)
    stats = compute_stats(changes)
    file_names = ", ".join(change.path for change in changes)
    plural = "s" if stats.files_changed > 1 else ""

    message = (
        f"{commit_type}{scope_text}: {description}\n"
        "\n"
        f"- Modified {stats.files_changed} file{plural}\n"
        f"- Added {stats.added} lines, removed {stats.removed} lines\n"
        f"- Files: {file_names}"
    )
    logger.debug("Synthesized commit header: %s%s: %s", commit_type, scope_text, description)
    return CommitMessageResult(message=message, commit_type=commit_type, stats=stats)


def generate_commit_message(
    changes: Sequence[FileChange],
    commit_type: Optional[str] = None,
) -> CommitMessageResult:
    """Classify ``changes`` (unless ``commit_type`` is given) and synthesize a message."""
    resolved = classify_changes(changes, hint=commit_type)
    return synthesize_commit_message(changes, resolved)
