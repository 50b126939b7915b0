"""
Shared fixtures for cargo-sample tests.
"""

from contextlib import contextmanager
from pathlib import Path

import pytest

from cargo_sample.config import get_default_config


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so no real config is picked up."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.delenv('CARGO_SAMPLE_CONFIG', raising=False)
    return home


@pytest.fixture
def config():
    return get_default_config()


@pytest.fixture
def checkout_root(tmp_path):
    """A fake checkout with two examples and a single-file example."""
    root = tmp_path / 'checkout'
    examples = root / 'examples'

    hello = examples / 'hello'
    (hello / 'src').mkdir(parents=True)
    (hello / 'Cargo.toml').write_text(
        '[package]\n'
        'name = "hello"\n'
        'version = "0.1.0"\n'
        '\n'
        '[dependencies]\n'
        'serde = "2.0"\n'
        'rand = "0.8"\n'
    )
    (hello / 'src' / 'main.rs').write_text('fn main() { println!("hello"); }\n')

    server = examples / 'server'
    (server / 'src').mkdir(parents=True)
    (server / 'Cargo.toml').write_text('[package]\nname = "server"\n\n[dependencies]\ntokio = "1"\n')
    (server / 'src' / 'main.rs').write_text('fn main() {}\n')

    (examples / 'standalone.rs').write_text('fn main() {}\n')

    return root


class FakeCheckoutProvider:
    """Yields a prepared directory instead of cloning."""

    def __init__(self, root: Path):
        self.root = root
        self.checked_out = []

    @contextmanager
    def checkout(self, resolved):
        self.checked_out.append(resolved)
        yield self.root


class FakeMetadataProvider:
    def __init__(self, packages):
        self.packages = packages
        self.calls = 0

    def current_project_metadata(self):
        self.calls += 1
        return {'packages': self.packages}


class FakeDependencyAdder:
    def __init__(self):
        self.added = []

    def add(self, name):
        self.added.append(name)


@pytest.fixture
def fake_checkouts(checkout_root):
    return FakeCheckoutProvider(checkout_root)


@pytest.fixture
def metadata_provider():
    """Factory for fake package metadata providers."""
    return FakeMetadataProvider


@pytest.fixture
def dependency_adder():
    return FakeDependencyAdder()
