"""
Utilities for collecting diffs from a Git working tree.

The :mod:`code_review_helper.diff.diff_collector` module defines the
:class:`DiffCollector` which returns one :class:`FileChange` per changed
file.
"""

from .diff_collector import DEFAULT_EXCLUDED_FILES, DiffCollector, FileChange, collect_changes  # noqa: F401
