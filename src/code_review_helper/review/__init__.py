"""
Review artifacts.

:mod:`code_review_helper.review.artifact_writer` persists markdown
reviews with a metadata header and
:mod:`code_review_helper.review.report` renders the deterministic
review body.
"""

from .artifact_writer import (  # noqa: F401
    ReviewDocument,
    WriteFailure,
    WriteResult,
    WriteSuccess,
    default_review_path,
    parse_review,
    write_review,
)
from .report import build_review_report  # noqa: F401
