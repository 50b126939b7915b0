"""
Example catalog entries.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExampleEntry:
    """
    One entry directly under a checkout's examples directory.

    The path points into an ephemeral checkout and is only valid while that
    checkout exists.
    """
    name: str
    path: Path
