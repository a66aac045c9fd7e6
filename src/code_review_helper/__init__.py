"""
Top-level package for code_review_helper.

The package turns a Git working tree's pending changes into a diff
summary, a conventional commit message and a markdown review artifact.
The command line entry point lives in :mod:`code_review_helper.cli`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
