#!/usr/bin/env python
"""
Thin wrapper script to invoke the code_review_helper CLI.

Running ``python codereview.py`` is equivalent to running the
``codereview`` console script installed via ``pyproject.toml``.
"""

from code_review_helper.cli import main


if __name__ == "__main__":
    main(prog_name="codereview")
