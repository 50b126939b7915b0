"""
Package reference domain objects for cargo-sample.

A reference is what the operator types on the command line: either a
repository URL or the name of a published crate. Resolution turns it into
a ResolvedReference naming exactly one repository state.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlparse

# git@github.com:owner/repo.git
_SCP_LIKE = re.compile(r"^[\w.-]+@[\w.-]+:[^\s]+$")


def is_url(identifier: str) -> bool:
    """
    Check whether an identifier is a syntactically valid repository URL.

    Accepts ``scheme://host/path`` URLs, ``file://`` URLs and the scp-like
    SSH form git understands (``git@host:owner/repo``).
    """
    if not identifier:
        return False

    if _SCP_LIKE.match(identifier):
        return True

    parsed = urlparse(identifier)
    if not parsed.scheme or len(parsed.scheme) < 2:
        # Single-letter schemes are Windows drive letters, not URLs
        return False
    if parsed.scheme == 'file':
        return bool(parsed.path)
    return bool(parsed.netloc)


@dataclass(frozen=True)
class PackageReference:
    """An unresolved reference as given by the operator."""
    identifier: str

    @property
    def is_url(self) -> bool:
        return is_url(self.identifier)


@dataclass(frozen=True)
class ResolvedReference:
    """
    A concrete repository state.

    commit_id is None when the operator passed a raw URL; the checkout then
    uses the default branch head.
    """
    repository_url: str
    commit_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'repository': self.repository_url}
        if self.commit_id:
            result['commit'] = self.commit_id
        return result


@dataclass(frozen=True)
class PackageInfo:
    """One package from the local project's resolved dependency graph."""
    name: str
    manifest_path: str
    repository: Optional[str] = None
    source_revision: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackageInfo':
        return cls(
            name=data['name'],
            manifest_path=data.get('manifest_path', ''),
            repository=data.get('repository'),
            source_revision=data.get('source_revision'),
        )
