"""
Persistence of markdown review artifacts.

A review artifact is a UTF-8 markdown file that starts with a small
metadata header::

  ---
  generated: 2026-01-01T12:00:00.000Z
  type: code-review
  ---

  # Optional title

  Review body...

Writing is best effort: filesystem errors are logged and reported back
as a :class:`WriteFailure` instead of being raised, so that a review can
still be shown when it cannot be saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


HEADER_DELIMITER = "---"
ARTIFACT_TYPE = "code-review"


@dataclass(frozen=True)
class WriteSuccess:
    """The artifact was written. ``size`` is the number of bytes written."""

    file_path: str
    size: int
    message: str
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class WriteFailure:
    """The artifact could not be written."""

    file_path: str
    error: str
    success: bool = field(default=False, init=False)


WriteResult = Union[WriteSuccess, WriteFailure]


@dataclass(frozen=True)
class ReviewDocument:
    """A review artifact read back from disk."""

    generated: str
    type: str
    title: Optional[str]
    body: str


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Return ``moment`` (default: now) as a UTC ISO-8601 string with milliseconds."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def render_review(content: str, title: Optional[str] = None, generated: Optional[datetime] = None) -> str:
    """Assemble the full text of a review artifact."""
    body = f"# {title}\n\n{content}" if title else content
    return (
        f"{HEADER_DELIMITER}\n"
        f"generated: {format_timestamp(generated)}\n"
        f"type: {ARTIFACT_TYPE}\n"
        f"{HEADER_DELIMITER}\n"
        "\n"
        f"{body}"
    )


def write_review(
    file_path: Union[str, Path],
    content: str,
    title: Optional[str] = None,
) -> WriteResult:
    """Write a review artifact to ``file_path``, replacing any existing file.

    Parent directories are created as needed.

    Parameters
    ----------
    file_path : str or Path
        Destination of the markdown file.
    content : str
        Markdown body of the review.
    title : str, optional
        When given, the body is prefixed with a level-1 heading.

    Returns
    -------
    WriteResult
        :class:`WriteSuccess` with the number of bytes written, or
        :class:`WriteFailure` with a readable error message. This function
        does not raise for filesystem errors.
    """
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = render_review(content, title).encode("utf-8")
        path.write_bytes(data)
    except (OSError, ValueError) as exc:
        error = str(exc) or exc.__class__.__name__
        logger.warning("Failed to write review to '%s': %s", file_path, error)
        return WriteFailure(file_path=str(file_path), error=error)

    logger.debug("Wrote %d bytes to %s", len(data), path)
    return WriteSuccess(
        file_path=str(file_path),
        size=len(data),
        message=f"Successfully wrote {len(data)} bytes to {file_path}",
    )


def parse_review(text: str) -> ReviewDocument:
    """Split review artifact text into its metadata, title and body.

    A body that starts with a ``# `` heading followed by a blank line is
    reported as the title.

    Raises
    ------
    ValueError
        If the text does not start with a complete metadata header.
    """
    lines = text.split("\n")
    if lines[0] != HEADER_DELIMITER:
        raise ValueError("Review artifact does not start with a metadata header")
    try:
        end = lines.index(HEADER_DELIMITER, 1)
    except ValueError:
        raise ValueError("Review artifact metadata header is not terminated") from None

    metadata: Dict[str, str] = {}
    for line in lines[1:end]:
        key, sep, value = line.partition(":")
        if not sep:
            raise ValueError(f"Malformed metadata line: {line!r}")
        metadata[key.strip()] = value.strip()

    rest = "\n".join(lines[end + 1:])
    if rest.startswith("\n"):
        rest = rest[1:]

    title = None
    if rest.startswith("# "):
        heading, sep, remainder = rest.partition("\n\n")
        if sep and "\n" not in heading:
            title = heading[2:]
            rest = remainder

    return ReviewDocument(
        generated=metadata.get("generated", ""),
        type=metadata.get("type", ""),
        title=title,
        body=rest,
    )


def default_review_path(reviews_dir: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """Return ``<reviews_dir>/review-<epoch milliseconds>.md``."""
    if now is None:
        now = datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return Path(reviews_dir) / f"review-{millis}.md"
