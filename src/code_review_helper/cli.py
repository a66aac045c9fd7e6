"""
Command line interface for the code_review_helper tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``codereview`` command. It resolves the
repository, loads the optional configuration and runs one of the
review types:

- ``summary``: list changed files with their line statistics
- ``commit``: print a conventional commit message for the changes
- ``history``: list recent commits
- ``full``: write a markdown review artifact combining all of the above

Collecting diffs is essential and its failures abort the command. Reading
history and saving the review artifact are best effort: their failures
are reported as warnings and the command still succeeds.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import click

from code_review_helper import __version__
from code_review_helper.commit.change_classifier import COMMIT_TYPES
from code_review_helper.commit.message_synthesizer import count_changed_lines, generate_commit_message
from code_review_helper.config.loader import ConfigError, load_config
from code_review_helper.diff.diff_collector import DiffCollector, FileChange
from code_review_helper.history.history_reader import HistoryResult, read_history
from code_review_helper.review.artifact_writer import default_review_path, write_review
from code_review_helper.review.report import build_review_report
from code_review_helper.vcs.git_client import GitClient, GitError, NotARepositoryError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_VCS_FAILURE = 5

REVIEW_TYPES = ("summary", "commit", "history", "full")


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def resolve_repo(directory: Path) -> Path:
    """Return the root of the Git repository containing ``directory``.

    Raises
    ------
    click.exceptions.Exit
        With code EXIT_NO_REPO if the directory does not exist or is not
        inside a Git repository.
    """
    if not directory.is_dir():
        print_error(f"Directory '{directory}' does not exist.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    repo_root = GitClient.find_repo_root(directory)
    if repo_root is None:
        print_error(f"No Git repository found at '{directory}' or its parent directories.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    return repo_root


def collect(directory: Path, exclude_files: List[str]) -> List[FileChange]:
    """Collect pending changes, mapping Git failures to exit codes."""
    try:
        return DiffCollector(exclude_files).collect(directory)
    except NotARepositoryError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_NO_REPO)
    except GitError as exc:
        print_error(f"VCS error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)


def show_summary(changes: List[FileChange], as_json: bool) -> None:
    rows = []
    for change in changes:
        added, removed = count_changed_lines(change.diff)
        rows.append({"path": change.path, "added": added, "removed": removed})
    if as_json:
        print_json({"files": rows})
        return
    if not rows:
        print_warning("No pending changes found.")
        return
    for row in rows:
        click.echo(f"{row['path']}  +{row['added']} -{row['removed']}")
    total_added = sum(row["added"] for row in rows)
    total_removed = sum(row["removed"] for row in rows)
    click.echo(f"{len(rows)} file{'s' if len(rows) != 1 else ''} changed, +{total_added} -{total_removed}")


def show_history(history: HistoryResult, as_json: bool) -> None:
    if as_json:
        print_json(history.to_dict())
        return
    if not history.ok:
        print_warning(f"Could not read history: {history.error}")
        return
    for commit in history.commits:
        click.echo(f"{commit.hash[:7]} {commit.date} {commit.message} <{commit.author_email}>")


def run_full_review(
    directory: Path,
    repo_root: Path,
    config: dict,
    commit_type: Optional[str],
    title: Optional[str],
    output: Optional[str],
    max_count: int,
) -> None:
    print_info(f"Repository: {repo_root}")
    changes = collect(directory, config["exclude_files"])
    if not changes:
        print_warning("No pending changes found.")
    print_success(f"Collected {len(changes)} changed file{'s' if len(changes) != 1 else ''}")

    commit = generate_commit_message(changes, commit_type)
    print_success(f"Proposed commit: {commit.header}")

    history = read_history(repo_root, max_count)
    if not history.ok:
        print_warning(f"Continuing without history: {history.error}")

    report = build_review_report(changes, commit, history)
    if output:
        target = Path(output)
    else:
        target = default_review_path(repo_root / config["reviews_dir"])

    result = write_review(target, report, title)
    if result.success:
        print_success(f"Review saved to {result.file_path} ({result.size} bytes)")
    else:
        print_warning(f"Review could not be saved: {result.error}")
        click.echo("")
        click.echo(report)


@click.command()
@click.argument("directory", required=False, default=".", type=click.Path(file_okay=False))
@click.option(
    "-t", "--type", "review_type",
    type=click.Choice(REVIEW_TYPES, case_sensitive=False),
    default="full",
    show_default=True,
    help="Type of review to perform.",
)
@click.option("-c", "--commit-type", type=click.Choice(COMMIT_TYPES), help="Force the commit type instead of inferring it.")
@click.option("-T", "--title", help="Title for the review (used with 'full').")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Path of the review markdown file (used with 'full').")
@click.option("-n", "--max-count", type=click.IntRange(min=1), help="Number of commits to read from history.")
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON (summary, commit, history).")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="codereview")
def main(
    directory: str,
    review_type: str,
    commit_type: Optional[str],
    title: Optional[str],
    output: Optional[str],
    max_count: Optional[int],
    as_json: bool,
    verbose: bool,
) -> None:
    """Summarize pending changes, propose a commit message and write a review.

    DIRECTORY is the working tree to review (default: current directory).
    """
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        target_dir = Path(directory)
        repo_root = resolve_repo(target_dir)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_config(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        history_count = max_count or config["history_count"]
        review_type = review_type.lower()

        if review_type == "summary":
            show_summary(collect(target_dir, config["exclude_files"]), as_json)
        elif review_type == "commit":
            changes = collect(target_dir, config["exclude_files"])
            if not changes:
                print_warning("No pending changes found.")
            result = generate_commit_message(changes, commit_type)
            if as_json:
                print_json(result.to_dict())
            else:
                click.echo(result.message)
        elif review_type == "history":
            show_history(read_history(repo_root, history_count), as_json)
        else:
            run_full_review(target_dir, repo_root, config, commit_type, title, output, history_count)

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
