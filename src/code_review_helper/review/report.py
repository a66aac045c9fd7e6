"""
Deterministic markdown report for a set of pending changes.

The report is the body handed to
:func:`~code_review_helper.review.artifact_writer.write_review`. It
lists per-file line statistics, the proposed commit message and,
when available, the recent commit history.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from code_review_helper.commit.commit_model import CommitMessageResult
from code_review_helper.commit.message_synthesizer import count_changed_lines
from code_review_helper.diff.diff_collector import FileChange
from code_review_helper.history.history_reader import HistoryResult


def _summary_section(commit: CommitMessageResult) -> List[str]:
    stats = commit.stats
    return [
        "## Summary",
        "",
        f"- Commit type: `{commit.commit_type}`",
        f"- Files changed: {stats.files_changed}",
        f"- Lines: +{stats.added} / -{stats.removed}",
    ]


def _changes_section(changes: Sequence[FileChange]) -> List[str]:
    lines = ["## Changes", ""]
    if not changes:
        lines.append("_No pending changes._")
        return lines
    lines.append("| File | Added | Removed |")
    lines.append("| --- | ---: | ---: |")
    for change in changes:
        added, removed = count_changed_lines(change.diff)
        lines.append(f"| `{change.path}` | {added} | {removed} |")
    return lines


def _history_section(history: HistoryResult) -> List[str]:
    lines = ["## Recent history", ""]
    if not history.ok:
        lines.append(f"_History unavailable: {history.error}_")
        return lines
    if not history.commits:
        lines.append("_No commits._")
        return lines
    for commit in history.commits:
        lines.append(f"- `{commit.hash[:7]}` {commit.date} {commit.message} ({commit.author_name})")
    return lines


def build_review_report(
    changes: Sequence[FileChange],
    commit: CommitMessageResult,
    history: Optional[HistoryResult] = None,
) -> str:
    """Render the markdown body of a review."""
    sections = [
        _summary_section(commit),
        _changes_section(changes),
        ["## Proposed commit message", "", "```text", commit.message, "```"],
    ]
    if history is not None:
        sections.append(_history_section(history))
    return "\n\n".join("\n".join(section) for section in sections) + "\n"
