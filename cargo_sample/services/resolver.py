"""
Reference resolution for cargo-sample.

Turns what the operator typed into a concrete (repository, commit) pair.
URLs pass straight through. Crate names are looked up in the local project's
package metadata, which tells us where the crate's source lives and which
commit it was published from.
"""

import logging
from typing import Any, Dict, List, Protocol

from ..domain import PackageInfo, PackageReference, ResolvedReference
from ..exit_codes import (
    AmbiguousPackage,
    MissingRepositoryMetadata,
    MissingRevisionMetadata,
    PackageNotFound,
)

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    """Anything that can snapshot the current project's dependency graph."""

    def current_project_metadata(self) -> Dict[str, Any]:
        ...


class ReferenceResolver:
    """
    Resolves package references using a metadata provider.

    Example:
        resolver = ReferenceResolver(CargoClient(cwd="my-project"))
        resolved = resolver.resolve("serde")
        print(resolved.repository_url, resolved.commit_id)
    """

    def __init__(self, metadata_provider: MetadataProvider):
        self.metadata_provider = metadata_provider

    def resolve(self, identifier: str) -> ResolvedReference:
        """
        Resolve an identifier to a repository URL and commit.

        Raises:
            AmbiguousPackage: More than one package has this name
            PackageNotFound: No package has this name
            MissingRepositoryMetadata: The package declares no repository
            MissingRevisionMetadata: The package has no recorded revision
        """
        reference = PackageReference(identifier)
        if reference.is_url:
            logger.debug(f"{identifier} is a URL, using default branch")
            return ResolvedReference(repository_url=identifier)

        package = self._find_package(identifier)

        if not package.repository:
            raise MissingRepositoryMetadata(identifier)
        if not package.source_revision:
            raise MissingRevisionMetadata(identifier)

        logger.debug(f"Resolved {identifier} to {package.repository}@{package.source_revision}")
        return ResolvedReference(
            repository_url=package.repository,
            commit_id=package.source_revision,
        )

    def _find_package(self, name: str) -> PackageInfo:
        metadata = self.metadata_provider.current_project_metadata()
        matches = [p for p in self._packages(metadata) if p.name == name]

        if len(matches) > 1:
            raise AmbiguousPackage(name, len(matches))
        if not matches:
            raise PackageNotFound(name)
        return matches[0]

    @staticmethod
    def _packages(metadata: Dict[str, Any]) -> List[PackageInfo]:
        return [
            p if isinstance(p, PackageInfo) else PackageInfo.from_dict(p)
            for p in metadata.get('packages', [])
        ]
