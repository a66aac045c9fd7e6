import os
import shutil
import tempfile
from pathlib import Path

import pytest


GIT_ENV = {
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_AUTHOR_NAME": "Test Author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_COMMITTER_NAME": "Test Author",
    "GIT_COMMITTER_EMAIL": "author@example.com",
}


@pytest.fixture(scope="session", autouse=True)
def isolate_git_config():
    """Keep the user's and system's git configuration out of the tests.

    Integration tests create throwaway repositories and commit to them.
    A global config with signing, hooks or a custom diff driver would
    change git's output, so an empty global config file is used for the
    duration of the test session and the environment is restored
    afterwards.
    """
    config_dir = Path(tempfile.mkdtemp(prefix="git_config_"))
    config_path = config_dir / "gitconfig"
    config_path.write_text("", encoding="utf-8")

    overrides = dict(GIT_ENV, GIT_CONFIG_GLOBAL=str(config_path))
    saved = {key: os.environ.get(key) for key in overrides}
    os.environ.update(overrides)

    try:
        yield
    finally:
        for key, value in saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        shutil.rmtree(str(config_dir), ignore_errors=True)
