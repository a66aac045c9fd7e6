"""
Commit type classification and commit message synthesis.

See :mod:`code_review_helper.commit.change_classifier` and
:mod:`code_review_helper.commit.message_synthesizer` for details.
"""

from .change_classifier import COMMIT_TYPES, classify_changes  # noqa: F401
from .commit_model import CommitMessageResult, DiffStats  # noqa: F401
from .message_synthesizer import generate_commit_message, synthesize_commit_message  # noqa: F401
