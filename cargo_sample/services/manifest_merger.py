"""
Manifest merging for cargo-sample.

When an example is copied into a project that already has a Cargo.toml, the
two manifests are reconciled instead of the example overwriting the project's:

- the project's package name is kept,
- the project's dependencies win over the example's for the same crate,
- dependencies only the example declares are added,
- everything else (features, profiles, [[bin]] targets, ...) comes from the
  example, because the example needs its own build configuration to run.

Destination values are grafted into the *source* document and the source
document is what gets written. Parsing uses tomlkit, so comments and layout
of untouched parts of the example's manifest survive unchanged.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Table

from ..exit_codes import ManifestIOError, ManifestParseError

logger = logging.getLogger(__name__)


@dataclass
class MergeReport:
    """What a merge changed in the incoming manifest."""
    name: Optional[str] = None
    overridden: List[str] = field(default_factory=list)
    inserted: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'overridden': self.overridden,
            'inserted': self.inserted,
        }
        if self.name is not None:
            result['name'] = self.name
        return result


def _plain(item: Any) -> Any:
    """Strip tomlkit formatting so values can be compared."""
    unwrap = getattr(item, 'unwrap', None)
    return unwrap() if unwrap else item


def _lookup(doc, path: str):
    """Find a (possibly dotted) table path, or None if any part is missing."""
    current = doc
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current if isinstance(current, dict) else None


def _ensure(doc, path: str):
    """Find a (possibly dotted) table path, creating missing tables."""
    current = doc
    for part in path.split('.'):
        if part not in current:
            current[part] = tomlkit.table()
        current = current[part]
    return current


class ManifestMerger:
    """
    Reconciles a destination manifest with an incoming one.

    Example:
        merger = ManifestMerger()
        merger.merge(Path("my-project/Cargo.toml"), Path("example/Cargo.toml"))
    """

    def __init__(
        self,
        identity_section: str = "package",
        identity_key: str = "name",
        dependency_sections: Sequence[str] = ("dependencies",),
    ):
        self.identity_section = identity_section
        self.identity_key = identity_key
        self.dependency_sections = list(dependency_sections)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ManifestMerger':
        merge_config = config.get('merge', {})
        return cls(
            identity_section=merge_config.get('identity_section', 'package'),
            identity_key=merge_config.get('identity_key', 'name'),
            dependency_sections=merge_config.get('dependency_sections', ['dependencies']),
        )

    def merge(self, destination_path: Path, source_path: Path) -> MergeReport:
        """
        Merge source_path into destination_path, rewriting destination_path.

        Raises:
            ManifestParseError: If either file is not valid TOML
            ManifestIOError: If a file cannot be read or written
        """
        destination_path = Path(destination_path)
        source_path = Path(source_path)

        destination = self._parse(destination_path)
        source = self._parse(source_path)

        report = self.merge_documents(destination, source)

        self._write(destination_path, tomlkit.dumps(source))
        logger.debug(
            f"Merged {source_path} into {destination_path}: "
            f"{len(report.overridden)} overridden, {len(report.inserted)} inserted"
        )
        return report

    def merge_text(self, destination_text: str, source_text: str) -> str:
        """Merge two manifests given as text and return the resulting text."""
        destination = self._loads(destination_text, '<destination>')
        source = self._loads(source_text, '<source>')
        self.merge_documents(destination, source)
        return tomlkit.dumps(source)

    def merge_documents(self, destination, source) -> MergeReport:
        """
        Graft the destination's identity and dependencies into source.

        The source document is mutated in place; the destination is only read.
        """
        report = MergeReport()

        name = self._identity(destination)
        if name is not None:
            report.name = str(name)
            identity = _ensure(source, self.identity_section)
            if _plain(identity.get(self.identity_key)) != _plain(name):
                identity[self.identity_key] = name

        for section in self.dependency_sections:
            self._reconcile(
                _lookup(destination, section),
                source,
                section,
                report,
            )

        return report

    def _identity(self, doc):
        section = _lookup(doc, self.identity_section)
        if section is None:
            return None
        return section.get(self.identity_key)

    def _reconcile(self, destination_deps, source, section: str, report: MergeReport) -> None:
        if not destination_deps:
            return

        source_deps = _lookup(source, section)
        if source_deps is None:
            source_deps = _ensure(source, section)

        for key, value in destination_deps.items():
            if key in source_deps:
                existing = source_deps[key]
                if _plain(existing) == _plain(value):
                    report.unchanged.append(key)
                    continue
                report.overridden.append(key)
                if isinstance(existing, Table) != isinstance(value, Table):
                    # A [dependencies.x] table cannot replace a key/value in place
                    del source_deps[key]
            else:
                report.inserted.append(key)
            # Item assignment, not .add(): split tables come back as proxies
            source_deps[key] = value

    def _parse(self, path: Path):
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestIOError(f"Could not read manifest {path}: {e}")
        return self._loads(text, str(path))

    def _loads(self, text: str, label: str):
        try:
            return tomlkit.parse(text)
        except TOMLKitError as e:
            raise ManifestParseError(f"Invalid TOML in {label}: {e}")

    def _write(self, path: Path, text: str) -> None:
        """Write atomically: temp file in the same directory, then rename."""
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            raise ManifestIOError(f"Could not write manifest {path}: {e}")

        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
            os.replace(temp_path, path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise ManifestIOError(f"Could not write manifest {path}: {e}")
