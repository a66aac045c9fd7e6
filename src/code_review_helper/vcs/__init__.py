"""
Version control system (VCS) integrations.

This package contains the read-only Git client used by the review
pipeline to list changed files, read per-file diffs and read the commit
log.
"""

from .git_client import CommitRecord, GitClient, GitError, NotARepositoryError  # noqa: F401
