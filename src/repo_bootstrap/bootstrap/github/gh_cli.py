"""GitHub CLI (`gh`) wrapper used for the authentication flow.

All REST calls go through `GitHubClient`; `gh` is only used to log the user in
and to hand back the resulting token.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

INSTALL_INSTRUCTIONS = """Install instructions:
  Ubuntu/Debian: sudo apt install gh
  macOS:         brew install gh
  Other:         https://cli.github.com/"""


class GhCliError(RuntimeError):
    """Raised when the GitHub CLI is missing or authentication fails."""


Runner = Callable[..., subprocess.CompletedProcess[str]]


class GhCli:
    def __init__(
        self,
        *,
        executable: str = "gh",
        hostname: str = "github.com",
        runner: Runner = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._executable = executable
        self._hostname = hostname
        self._run = runner
        self._which = which

    def is_installed(self) -> bool:
        return self._which(self._executable) is not None

    def _gh(self, *args: str, interactive: bool = False) -> subprocess.CompletedProcess[str]:
        cmd: Sequence[str] = [self._executable, *args]
        logger.debug("Running gh", extra={"args": list(args)})
        if interactive:
            # Inherit the terminal so the user can follow the browser/device prompt.
            return self._run(cmd, text=True, check=False)
        return self._run(cmd, capture_output=True, text=True, check=False)

    def logout(self) -> None:
        r = self._gh("auth", "logout", "--hostname", self._hostname)
        if r.returncode != 0:
            # Nothing to log out from is the common case.
            logger.debug("gh auth logout failed", extra={"stderr": (r.stderr or "").strip()})

    def login(self) -> bool:
        r = self._gh(
            "auth",
            "login",
            "--hostname",
            self._hostname,
            "--git-protocol",
            "https",
            "--web",
            "--skip-ssh-key",
            interactive=True,
        )
        return r.returncode == 0

    def status(self) -> bool:
        r = self._gh("auth", "status", "--hostname", self._hostname)
        return r.returncode == 0

    def token(self) -> str:
        r = self._gh("auth", "token", "--hostname", self._hostname)
        token = (r.stdout or "").strip()
        if r.returncode != 0 or not token:
            raise GhCliError("Could not read the GitHub token from gh")
        return token

    def authenticate(self, *, force_login: bool = True) -> str:
        """Run the login flow and return the session token.

        With `force_login` any existing session is logged out first so the user
        explicitly picks the account to fork into.
        """

        if not self.is_installed():
            raise GhCliError("GitHub CLI (gh) is not installed")

        if force_login:
            self.logout()

        if force_login or not self.status():
            print("Please login with your GitHub account:")
            if not self.login():
                raise GhCliError("Authentication failed")

        if not self.status():
            raise GhCliError("Authentication verification failed")

        return self.token()
