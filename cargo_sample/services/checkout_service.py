"""
Ephemeral checkouts for cargo-sample.
"""

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..domain import ResolvedReference
from ..infra import GitClient

logger = logging.getLogger(__name__)


class CheckoutProvider:
    """
    Clones a resolved reference into a temporary directory.

    The checkout only lives for the duration of the `with` block; anything
    needed from it must be copied out before the block exits.

    Example:
        provider = CheckoutProvider(GitClient())
        with provider.checkout(resolved) as root:
            ...
    """

    def __init__(self, git_client: Optional[GitClient] = None, temp_prefix: str = "cargo-sample-"):
        self.git = git_client or GitClient()
        self.temp_prefix = temp_prefix

    @contextmanager
    def checkout(self, resolved: ResolvedReference) -> Iterator[Path]:
        """
        Yield the root of a fresh checkout of `resolved`.

        Raises:
            CloneError: If the repository cannot be cloned
            RevisionCheckoutError: If the pinned commit cannot be checked out
        """
        with tempfile.TemporaryDirectory(prefix=self.temp_prefix) as temp_dir:
            root = Path(temp_dir)
            logger.debug(f"Cloning {resolved.repository_url} into {root}")
            self.git.clone(resolved.repository_url, str(root))

            if resolved.commit_id:
                logger.debug(f"Checking out {resolved.commit_id}")
                self.git.checkout(str(root), resolved.commit_id)

            yield root
        logger.debug(f"Removed checkout {temp_dir}")
