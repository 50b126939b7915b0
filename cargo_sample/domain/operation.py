"""
Operation result domain objects for cargo-sample.

Records what materializing an example did to each path in the destination,
so the CLI can report it as text or JSONL.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional


class FileAction(Enum):
    """What happened to a single destination path."""
    CREATED_DIR = "created_dir"
    COPIED = "copied"
    MERGED = "merged"


@dataclass
class FileDetail:
    """
    Details of a single file or directory written during materialization.
    """
    source: str
    target: str
    action: FileAction
    bytes_written: int = 0
    overwritten: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'source': self.source,
            'target': self.target,
            'action': self.action.value,
        }
        if self.action != FileAction.CREATED_DIR:
            result['bytes'] = self.bytes_written
            result['overwritten'] = self.overwritten
        if self.metadata:
            result.update(self.metadata)
        return result


@dataclass
class MaterializeResult:
    """
    Summary of copying one example into a destination directory.
    """
    source: str
    destination: str
    example: Optional[str] = None
    files_copied: int = 0
    manifests_merged: int = 0
    directories_created: int = 0
    bytes_written: int = 0
    details: List[FileDetail] = field(default_factory=list)

    def add_detail(self, detail: FileDetail) -> None:
        """Add a file detail and update counts."""
        self.details.append(detail)

        if detail.action == FileAction.COPIED:
            self.files_copied += 1
            self.bytes_written += detail.bytes_written
        elif detail.action == FileAction.MERGED:
            self.manifests_merged += 1
            self.bytes_written += detail.bytes_written
        elif detail.action == FileAction.CREATED_DIR:
            self.directories_created += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'type': 'summary',
            'source': self.source,
            'destination': self.destination,
            'files_copied': self.files_copied,
            'manifests_merged': self.manifests_merged,
            'directories_created': self.directories_created,
            'bytes_written': self.bytes_written,
        }
        if self.example:
            result['example'] = self.example
        return result
