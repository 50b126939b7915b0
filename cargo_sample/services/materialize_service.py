"""
Tree materializer for cargo-sample.

Copies a chosen example into the destination project. Ordinary files are
copied byte-for-byte and overwrite whatever is there; the manifest is merged
into an existing one instead of replacing it.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Generator, Optional

from ..domain import FileAction, FileDetail, MaterializeResult
from ..exit_codes import DestinationWriteError, SourceUnreadable
from .manifest_merger import ManifestMerger

logger = logging.getLogger(__name__)


class TreeMaterializer:
    """
    Recursive copy with manifest merging.

    Example:
        materializer = TreeMaterializer(ManifestMerger())

        for progress in materializer.materialize(src, dst, "Cargo.toml"):
            print(progress)

        result = materializer.last_result
        print(f"Copied {result.files_copied} files")

    Failures raise immediately; files already written are left in place.
    """

    def __init__(self, merger: Optional[ManifestMerger] = None):
        self.merger = merger or ManifestMerger()
        self.last_result: Optional[MaterializeResult] = None

    def run(self, source_dir: Path, destination_dir: Path, manifest_filename: str) -> MaterializeResult:
        """Materialize without progress reporting."""
        for _ in self.materialize(source_dir, destination_dir, manifest_filename):
            pass
        return self.last_result

    def materialize(
        self,
        source_dir: Path,
        destination_dir: Path,
        manifest_filename: str
    ) -> Generator[str, None, MaterializeResult]:
        """
        Copy source_dir into destination_dir.

        Yields progress messages, returns MaterializeResult.

        Raises:
            SourceUnreadable: If the example cannot be read
            DestinationWriteError: If the destination cannot be written
            MergeError: If the manifests cannot be merged
        """
        source_dir = Path(source_dir)
        destination_dir = Path(destination_dir)

        result = MaterializeResult(source=str(source_dir), destination=str(destination_dir))
        self.last_result = result

        self._make_dir(destination_dir, result)

        if source_dir.is_file():
            # Single-file example
            yield from self._place_file(
                source_dir, destination_dir / source_dir.name, manifest_filename, result
            )
            return result

        yield from self._copy_tree(source_dir, destination_dir, manifest_filename, result)
        return result

    def _copy_tree(
        self,
        source: Path,
        destination: Path,
        manifest_filename: str,
        result: MaterializeResult
    ) -> Generator[str, None, None]:
        try:
            entries = list(os.scandir(source))
        except OSError as e:
            raise SourceUnreadable(f"Cannot read directory {source}: {e}")

        for entry in entries:
            src_path = Path(entry.path)
            dst_path = destination / entry.name

            try:
                is_dir = entry.is_dir()
            except OSError as e:
                raise SourceUnreadable(f"Cannot stat {src_path}: {e}")

            if is_dir:
                self._make_dir(dst_path, result)
                yield from self._copy_tree(src_path, dst_path, manifest_filename, result)
            else:
                yield from self._place_file(src_path, dst_path, manifest_filename, result)

    def _place_file(
        self,
        src_path: Path,
        dst_path: Path,
        manifest_filename: str,
        result: MaterializeResult
    ) -> Generator[str, None, None]:
        existed = dst_path.exists()

        if src_path.name == manifest_filename and existed:
            yield f"Merging {dst_path}"
            report = self.merger.merge(dst_path, src_path)
            result.add_detail(FileDetail(
                source=str(src_path),
                target=str(dst_path),
                action=FileAction.MERGED,
                bytes_written=dst_path.stat().st_size,
                overwritten=True,
                metadata=report.to_dict(),
            ))
            return

        yield f"Copying {dst_path}"
        bytes_written = self._copy_file(src_path, dst_path)
        result.add_detail(FileDetail(
            source=str(src_path),
            target=str(dst_path),
            action=FileAction.COPIED,
            bytes_written=bytes_written,
            overwritten=existed,
        ))

    def _copy_file(self, src_path: Path, dst_path: Path) -> int:
        """Copy one file byte-for-byte, returning its size."""
        try:
            src = open(src_path, 'rb')
        except OSError as e:
            raise SourceUnreadable(f"Cannot read {src_path}: {e}")

        with src:
            try:
                with open(dst_path, 'wb') as dst:
                    shutil.copyfileobj(src, dst)
            except OSError as e:
                raise DestinationWriteError(f"Cannot write {dst_path}: {e}")

        return dst_path.stat().st_size

    def _make_dir(self, path: Path, result: MaterializeResult) -> None:
        if path.is_dir():
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationWriteError(f"Cannot create directory {path}: {e}")
        result.add_detail(FileDetail(source='', target=str(path), action=FileAction.CREATED_DIR))
