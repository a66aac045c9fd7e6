"""
Commit history lookup for review context.
"""

from .history_reader import DEFAULT_MAX_COUNT, HistoryResult, read_history  # noqa: F401
