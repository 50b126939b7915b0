"""
Cargo client infrastructure for cargo-sample.

Wraps the two cargo invocations the sampler needs: adding a dependency and
reading the resolved package metadata of the current project. Published
crates carry a .cargo_vcs_info.json next to their Cargo.toml recording the
git commit they were packaged from; that is the revision we pin checkouts to.
"""

import json
import subprocess
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain import PackageInfo
from ..exit_codes import ResolutionError

logger = logging.getLogger(__name__)

VCS_INFO_FILENAME = '.cargo_vcs_info.json'


def read_source_revision(manifest_path: str) -> Optional[str]:
    """
    Read the git revision recorded by `cargo publish` for a package.

    Args:
        manifest_path: Path to the package's Cargo.toml

    Returns:
        Commit hash, or None if the package has no VCS info
    """
    vcs_info = Path(manifest_path).parent / VCS_INFO_FILENAME
    if not vcs_info.exists():
        return None

    try:
        data = json.loads(vcs_info.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {vcs_info}: {e}")
        return None

    return data.get('git', {}).get('sha1')


class CargoClient:
    """
    Abstraction over cargo commands.

    Example:
        client = CargoClient()
        client.add("serde", cwd="my-project")
        metadata = client.current_project_metadata(cwd="my-project")
    """

    def __init__(self, timeout: int = 300, cwd: Optional[str] = None):
        """
        Initialize CargoClient.

        Args:
            timeout: Command timeout in seconds (default: 300)
            cwd: Default project directory for commands
        """
        self.timeout = timeout
        self.cwd = cwd

    def _run(self, args: List[str], cwd: Optional[str] = None) -> str:
        cmd = ['cargo'] + args
        cwd = cwd or self.cwd
        logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise ResolutionError(f"cargo {args[0]} timed out after {self.timeout}s")
        except OSError as e:
            raise ResolutionError(f"Could not run cargo: {e}")

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ''
            raise ResolutionError(f"cargo {args[0]} failed: {stderr or result.returncode}")

        return result.stdout

    def add(self, name: str, cwd: Optional[str] = None) -> None:
        """Declare `name` as a dependency of the project in cwd."""
        self._run(['add', name], cwd=cwd)

    def current_project_metadata(self, cwd: Optional[str] = None) -> Dict[str, Any]:
        """
        Snapshot of the project's resolved dependency graph.

        Returns:
            {"packages": [PackageInfo, ...]}
        """
        output = self._run(['metadata', '--format-version', '1'], cwd=cwd)
        try:
            raw = json.loads(output)
        except json.JSONDecodeError as e:
            raise ResolutionError(f"cargo metadata returned invalid JSON: {e}")

        return {'packages': parse_packages(raw)}


def parse_packages(raw: Dict[str, Any]) -> List[PackageInfo]:
    """Convert `cargo metadata` JSON into PackageInfo entries."""
    packages = []
    for pkg in raw.get('packages', []):
        manifest_path = pkg.get('manifest_path', '')
        packages.append(PackageInfo(
            name=pkg.get('name', ''),
            manifest_path=manifest_path,
            repository=pkg.get('repository') or None,
            source_revision=read_source_revision(manifest_path) if manifest_path else None,
        ))
    return packages
