"""
Configuration loading for code_review_helper.

Provides a loader for the optional ``.codereview.json`` file located in
the repository root. See :mod:`code_review_helper.config.loader` for
implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
