"""
Example catalog for cargo-sample.

Lists what a checked-out repository offers under its examples directory.
"""

import logging
from pathlib import Path
from typing import List

from ..domain import ExampleEntry
from ..exit_codes import ExampleNotFound, NoExamplesDirectory

logger = logging.getLogger(__name__)


class ExampleCatalog:
    """
    Enumerates the immediate entries of `<checkout>/examples`.

    Both files and directories count as examples. Order is whatever the
    filesystem returns; sort for display, never for correctness.
    """

    def __init__(self, examples_directory: str = "examples"):
        self.examples_directory = examples_directory

    def examples_dir(self, checkout_root: Path) -> Path:
        """Absolute path of the examples directory, which must exist."""
        path = Path(checkout_root).resolve() / self.examples_directory
        if not path.is_dir():
            raise NoExamplesDirectory(path)
        return path

    def list_examples(self, checkout_root: Path) -> List[ExampleEntry]:
        """
        List every example in a checkout.

        Raises:
            NoExamplesDirectory: If the checkout has no examples directory
        """
        examples_dir = self.examples_dir(checkout_root)
        entries = [ExampleEntry(name=p.name, path=p) for p in examples_dir.iterdir()]
        logger.debug(f"Found {len(entries)} examples in {examples_dir}")
        return entries

    def names(self, checkout_root: Path) -> List[str]:
        """Example names, sorted for presentation."""
        return sorted(entry.name for entry in self.list_examples(checkout_root))

    def resolve_choice(self, checkout_root: Path, name: str) -> Path:
        """
        Resolve a selected example name to its absolute path.

        Raises:
            NoExamplesDirectory: If the checkout has no examples directory
            ExampleNotFound: If name is not one of the listed examples
        """
        for entry in self.list_examples(checkout_root):
            if entry.name == name:
                return entry.path
        raise ExampleNotFound(name)
