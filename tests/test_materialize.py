"""
Tests for copying examples into a destination tree.
"""

import tomllib
from unittest.mock import MagicMock

import pytest

from cargo_sample.domain import FileAction, MaterializeResult
from cargo_sample.exit_codes import (
    DestinationWriteError,
    ManifestParseError,
    MaterializationError,
    SourceUnreadable,
)
from cargo_sample.services.manifest_merger import ManifestMerger, MergeReport
from cargo_sample.services.materialize_service import TreeMaterializer


@pytest.fixture
def example(checkout_root):
    return checkout_root / 'examples' / 'hello'


class TestTreeMaterializer:
    """Tests for TreeMaterializer."""

    def test_copy_into_empty_destination(self, example, tmp_path):
        """Everything is copied verbatim when nothing exists yet."""
        dest = tmp_path / 'project'

        result = TreeMaterializer().run(example, dest, 'Cargo.toml')

        assert (dest / 'src' / 'main.rs').read_text() == 'fn main() { println!("hello"); }\n'
        assert (dest / 'Cargo.toml').read_bytes() == (example / 'Cargo.toml').read_bytes()
        assert result.files_copied == 2
        assert result.manifests_merged == 0
        # dest and dest/src
        assert result.directories_created == 2

    def test_existing_manifest_is_merged(self, example, tmp_path):
        dest = tmp_path / 'project'
        dest.mkdir()
        (dest / 'Cargo.toml').write_text(
            '[package]\nname = "my-app"\n\n[dependencies]\nserde = "1.0"\nanyhow = "1"\n'
        )

        result = TreeMaterializer().run(example, dest, 'Cargo.toml')

        manifest = tomllib.loads((dest / 'Cargo.toml').read_text())
        assert manifest['package']['name'] == 'my-app'
        assert manifest['package']['version'] == '0.1.0'
        assert manifest['dependencies'] == {'serde': '1.0', 'rand': '0.8', 'anyhow': '1'}
        assert result.manifests_merged == 1
        assert result.files_copied == 1

        merged = [d for d in result.details if d.action == FileAction.MERGED]
        assert len(merged) == 1
        assert merged[0].overwritten is True
        assert merged[0].to_dict()['name'] == 'my-app'

    def test_ordinary_files_are_overwritten(self, example, tmp_path):
        dest = tmp_path / 'project'
        (dest / 'src').mkdir(parents=True)
        (dest / 'src' / 'main.rs').write_text('old contents')
        (dest / 'src' / 'lib.rs').write_text('untouched')

        result = TreeMaterializer().run(example, dest, 'Cargo.toml')

        assert (dest / 'src' / 'main.rs').read_text() == 'fn main() { println!("hello"); }\n'
        assert (dest / 'src' / 'lib.rs').read_text() == 'untouched'
        copied = {d.target: d for d in result.details if d.action == FileAction.COPIED}
        assert copied[str(dest / 'src' / 'main.rs')].overwritten is True
        # Existing directories are not reported as created
        assert result.directories_created == 0

    def test_nested_manifests_are_merged_where_they_exist(self, tmp_path):
        source = tmp_path / 'workspace-example'
        (source / 'crates' / 'core').mkdir(parents=True)
        (source / 'Cargo.toml').write_text('[workspace]\nmembers = ["crates/core"]\n')
        (source / 'crates' / 'core' / 'Cargo.toml').write_text(
            '[package]\nname = "core"\n\n[dependencies]\nlog = "0.4"\n'
        )

        dest = tmp_path / 'project'
        (dest / 'crates' / 'core').mkdir(parents=True)
        (dest / 'crates' / 'core' / 'Cargo.toml').write_text(
            '[package]\nname = "my-core"\n\n[dependencies]\nlog = "0.3"\n'
        )

        result = TreeMaterializer().run(source, dest, 'Cargo.toml')

        nested = tomllib.loads((dest / 'crates' / 'core' / 'Cargo.toml').read_text())
        assert nested['package']['name'] == 'my-core'
        assert nested['dependencies'] == {'log': '0.3'}
        # Top-level had no manifest at the destination, so it is a plain copy
        assert (dest / 'Cargo.toml').read_text() == '[workspace]\nmembers = ["crates/core"]\n'
        assert result.manifests_merged == 1
        assert result.files_copied == 1

    def test_other_manifest_filename(self, tmp_path):
        source = tmp_path / 'src-tree'
        source.mkdir()
        (source / 'Manifest.toml').write_text('[dependencies]\nb = "2"\n')
        dest = tmp_path / 'dest'
        dest.mkdir()
        (dest / 'Manifest.toml').write_text('[dependencies]\na = "1"\n')

        TreeMaterializer().run(source, dest, 'Manifest.toml')

        manifest = tomllib.loads((dest / 'Manifest.toml').read_text())
        assert manifest['dependencies'] == {'a': '1', 'b': '2'}

    def test_manifest_name_only_matches_exactly(self, tmp_path):
        source = tmp_path / 'src-tree'
        source.mkdir()
        (source / 'Cargo.toml.orig').write_text('new')
        dest = tmp_path / 'dest'
        dest.mkdir()
        (dest / 'Cargo.toml.orig').write_text('old')

        TreeMaterializer().run(source, dest, 'Cargo.toml')

        assert (dest / 'Cargo.toml.orig').read_text() == 'new'

    def test_single_file_example(self, checkout_root, tmp_path):
        dest = tmp_path / 'project'

        result = TreeMaterializer().run(checkout_root / 'examples' / 'standalone.rs', dest, 'Cargo.toml')

        assert (dest / 'standalone.rs').read_text() == 'fn main() {}\n'
        assert result.files_copied == 1

    def test_progress_messages(self, example, tmp_path):
        materializer = TreeMaterializer()

        messages = list(materializer.materialize(example, tmp_path / 'project', 'Cargo.toml'))

        assert len(messages) == 2
        assert all(m.startswith('Copying ') for m in messages)
        assert isinstance(materializer.last_result, MaterializeResult)

    def test_bytes_written(self, example, tmp_path):
        result = TreeMaterializer().run(example, tmp_path / 'project', 'Cargo.toml')

        expected = sum(p.stat().st_size for p in example.rglob('*') if p.is_file())
        assert result.bytes_written == expected

    def test_merger_called_once_per_manifest(self, example, tmp_path):
        dest = tmp_path / 'project'
        dest.mkdir()
        (dest / 'Cargo.toml').write_text('[package]\nname = "x"\n')
        merger = MagicMock(spec=ManifestMerger)
        merger.merge.return_value = MergeReport()

        TreeMaterializer(merger).run(example, dest, 'Cargo.toml')

        merger.merge.assert_called_once_with(dest / 'Cargo.toml', example / 'Cargo.toml')


class TestTreeMaterializerErrors:

    def test_missing_source(self, tmp_path):
        with pytest.raises(SourceUnreadable):
            TreeMaterializer().run(tmp_path / 'nope', tmp_path / 'dest', 'Cargo.toml')

    def test_destination_is_a_file(self, example, tmp_path):
        dest = tmp_path / 'project'
        dest.write_text('not a directory')

        with pytest.raises(DestinationWriteError):
            TreeMaterializer().run(example, dest, 'Cargo.toml')

    def test_errors_are_materialization_errors(self):
        assert issubclass(SourceUnreadable, MaterializationError)
        assert issubclass(DestinationWriteError, MaterializationError)

    def test_merge_failure_propagates(self, example, tmp_path):
        dest = tmp_path / 'project'
        dest.mkdir()
        (dest / 'Cargo.toml').write_text('this is [not toml')

        with pytest.raises(ManifestParseError):
            TreeMaterializer().run(example, dest, 'Cargo.toml')
