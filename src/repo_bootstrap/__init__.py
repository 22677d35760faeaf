"""Repository bootstrap.

Forks a fixed list of repositories into the authenticated user's account and
copies each source repository's open issues (with their labels) into the fork.
"""

__version__ = "0.1.0"

from repo_bootstrap.bootstrap.config import BootstrapSettings

__all__ = ["__version__", "BootstrapSettings"]
