"""
Infrastructure layer for cargo-sample.

Contains abstractions for external systems:
- GitClient: Git command execution
- CargoClient: cargo add / cargo metadata

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .cargo_client import CargoClient, read_source_revision

__all__ = [
    'GitClient',
    'CargoClient',
    'read_source_revision',
]
