"""
Heuristics for classifying a change set into a Conventional Commit type.

The classifier is intentionally simple and deterministic so that it can
be unit tested without a language model. Rules are evaluated in a fixed
priority order over the whole change set; the first rule satisfied by
any single file wins. The ordering is part of the contract: a change set
that both adds a class and mentions "fix" is a ``feat``.

The keyword checks are plain case-sensitive substring matches. For
example any diff mentioning ``error`` is classified as ``fix`` unless a
higher priority rule matched first.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from code_review_helper.diff.diff_collector import FileChange


COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore")

DEFAULT_COMMIT_TYPE = "chore"

_FEATURE_KEYWORDS = ("function", "class", "export")
_FIX_KEYWORDS = ("fix", "bug", "error")
_DOC_TAGS = ("@param", "@returns")
_TEST_PATH_MARKERS = ("test", "spec")


def _added_lines(diff: str) -> List[str]:
    return [line for line in diff.splitlines() if line.startswith("+") and not line.startswith("++")]


def _adds_declaration(change: FileChange) -> bool:
    return any(
        keyword in line for line in _added_lines(change.diff) for keyword in _FEATURE_KEYWORDS
    )


def _mentions_fix(change: FileChange) -> bool:
    return any(keyword in change.diff for keyword in _FIX_KEYWORDS)


def _touches_docs(change: FileChange) -> bool:
    if "README" in change.path or change.path.endswith(".md"):
        return True
    return any(tag in change.diff for tag in _DOC_TAGS)


def _touches_tests(change: FileChange) -> bool:
    return any(marker in change.path for marker in _TEST_PATH_MARKERS)


# Evaluated top to bottom; the first matching rule decides the type.
RULES: List[Tuple[str, Callable[[FileChange], bool]]] = [
    ("feat", _adds_declaration),
    ("fix", _mentions_fix),
    ("docs", _touches_docs),
    ("test", _touches_tests),
]


def classify_changes(changes: Sequence[FileChange], hint: Optional[str] = None) -> str:
    """Classify a change set into a Conventional Commit type.

    Parameters
    ----------
    changes : Sequence[FileChange]
        The change set to classify.
    hint : str, optional
        A commit type chosen by the caller. When given it is returned
        unchanged and no heuristics run.

    Returns
    -------
    str
        One of :data:`COMMIT_TYPES`. ``chore`` when no rule matches,
        including for an empty change set.

    Raises
    ------
    ValueError
        If ``hint`` is not one of :data:`COMMIT_TYPES`.
    """
    if hint is not None:
        if hint not in COMMIT_TYPES:
            raise ValueError(
                f"Unknown commit type {hint!r}; expected one of: {', '.join(COMMIT_TYPES)}"
            )
        return hint
    for commit_type, rule in RULES:
        if any(rule(change) for change in changes):
            return commit_type
    return DEFAULT_COMMIT_TYPE
