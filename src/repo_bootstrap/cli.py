"""Console script entrypoint.

The command itself is implemented in `repo_bootstrap.bootstrap.main`.
"""

from __future__ import annotations

from repo_bootstrap.bootstrap.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
