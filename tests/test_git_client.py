"""
Tests for the git client and checkout provider.
"""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cargo_sample.domain import ResolvedReference
from cargo_sample.exit_codes import (
    CheckoutError,
    CloneError,
    GitNotAvailableError,
    RevisionCheckoutError,
)
from cargo_sample.infra.git_client import GitClient
from cargo_sample.services.checkout_service import CheckoutProvider


def completed(returncode=0, stdout='', stderr=''):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestGitClient:

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_is_available(self, mock_run):
        mock_run.return_value = completed(stdout='git version 2.43.0\n')

        assert GitClient().is_available() is True
        assert mock_run.call_args[0][0] == ['git', '--version']

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_not_installed(self, mock_run):
        mock_run.side_effect = FileNotFoundError('git')

        client = GitClient()
        assert client.is_available() is False
        with pytest.raises(GitNotAvailableError):
            client.require()

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_clone_passes_arguments_as_list(self, mock_run):
        mock_run.return_value = completed()

        GitClient(timeout=42).clone('https://github.com/a/b; rm -rf /', '/tmp/dest')

        args, kwargs = mock_run.call_args
        assert args[0] == ['git', 'clone', 'https://github.com/a/b; rm -rf /', '/tmp/dest']
        assert kwargs['timeout'] == 42
        assert 'shell' not in kwargs

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_clone_failure(self, mock_run):
        mock_run.return_value = completed(returncode=128, stderr='fatal: repository not found')

        with pytest.raises(CloneError) as excinfo:
            GitClient().clone('https://github.com/a/missing', '/tmp/dest')

        assert 'repository not found' in str(excinfo.value)

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_clone_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired('git', 1)

        with pytest.raises(CloneError):
            GitClient(timeout=1).clone('https://github.com/a/b', '/tmp/dest')

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_checkout(self, mock_run):
        mock_run.return_value = completed()

        GitClient().checkout('/tmp/repo', 'abc123')

        args, kwargs = mock_run.call_args
        assert args[0] == ['git', 'checkout', 'abc123']
        assert kwargs['cwd'] == '/tmp/repo'

    @patch('cargo_sample.infra.git_client.subprocess.run')
    def test_checkout_failure(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="error: pathspec 'abc' did not match")

        with pytest.raises(RevisionCheckoutError):
            GitClient().checkout('/tmp/repo', 'abc')

    def test_errors_are_checkout_errors(self):
        assert issubclass(CloneError, CheckoutError)
        assert issubclass(RevisionCheckoutError, CheckoutError)
        assert issubclass(GitNotAvailableError, CheckoutError)


class FakeGit:
    """Clones by writing an examples directory."""

    def __init__(self, fail_checkout=False):
        self.fail_checkout = fail_checkout
        self.cloned = []
        self.checked_out = []

    def clone(self, url, destination):
        self.cloned.append((url, destination))
        (Path(destination) / 'examples' / 'demo').mkdir(parents=True)

    def checkout(self, path, commit_id):
        if self.fail_checkout:
            raise RevisionCheckoutError(f"Failed to checkout commit {commit_id}")
        self.checked_out.append((path, commit_id))


class TestCheckoutProvider:

    def test_checkout_pins_commit(self):
        git = FakeGit()
        provider = CheckoutProvider(git)

        with provider.checkout(ResolvedReference('https://x/repo', 'abc123')) as root:
            assert (root / 'examples' / 'demo').is_dir()
            assert git.checked_out == [(str(root), 'abc123')]

    def test_default_branch_for_urls(self):
        git = FakeGit()

        with CheckoutProvider(git).checkout(ResolvedReference('https://x/repo')):
            pass

        assert len(git.cloned) == 1
        assert git.checked_out == []

    def test_checkout_removed_afterwards(self):
        with CheckoutProvider(FakeGit()).checkout(ResolvedReference('https://x/repo')) as root:
            pass

        assert not root.exists()

    def test_checkout_removed_on_failure(self):
        git = FakeGit(fail_checkout=True)

        with pytest.raises(RevisionCheckoutError):
            with CheckoutProvider(git).checkout(ResolvedReference('https://x/repo', 'bad')):
                pass

        clone_dir = Path(git.cloned[0][1])
        assert not clone_dir.exists()

    def test_temp_prefix(self):
        with CheckoutProvider(FakeGit(), temp_prefix='sample-test-').checkout(
            ResolvedReference('https://x/repo')
        ) as root:
            assert root.name.startswith('sample-test-')
