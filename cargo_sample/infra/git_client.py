"""
Git client infrastructure for cargo-sample.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import Optional, List, Tuple
import logging

from ..exit_codes import CloneError, RevisionCheckoutError, GitNotAvailableError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        client.clone("https://github.com/owner/repo", "/tmp/checkout")
        client.checkout("/tmp/checkout", "3f2a9c1")
    """

    def __init__(self, timeout: int = 300):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 300)
        """
        self.timeout = timeout

    def _run(
        self,
        args: List[str],
        cwd: Optional[str] = None,
        capture_stderr: bool = False
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Arguments passed to git
            cwd: Working directory
            capture_stderr: Include stderr in output

        Returns:
            Tuple of (output, returncode); returncode is -1 if git could not run
        """
        cmd = ['git'] + args
        logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )

            output = result.stdout
            if capture_stderr and result.stderr:
                output += result.stderr

            return output.strip() if output else None, result.returncode

        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return "timed out", -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return str(e), -1

    def is_available(self) -> bool:
        """Check that git can be executed on this host."""
        _, code = self._run(['--version'])
        return code == 0

    def require(self) -> None:
        """Raise GitNotAvailableError unless git is installed."""
        if not self.is_available():
            raise GitNotAvailableError()

    def clone(self, url: str, destination: str) -> None:
        """
        Clone a repository into destination.

        Raises:
            CloneError: If git exits non-zero
        """
        output, code = self._run(['clone', url, str(destination)], capture_stderr=True)
        if code != 0:
            detail = f": {output}" if output else ""
            raise CloneError(f"Failed to clone repository {url}{detail}")

    def checkout(self, path: str, commit_id: str) -> None:
        """
        Check out a specific commit in an existing clone.

        Raises:
            RevisionCheckoutError: If git exits non-zero
        """
        output, code = self._run(['checkout', commit_id], cwd=str(path), capture_stderr=True)
        if code != 0:
            detail = f": {output}" if output else ""
            raise RevisionCheckoutError(f"Failed to checkout commit {commit_id}{detail}")
