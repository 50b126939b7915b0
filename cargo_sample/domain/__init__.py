"""
Domain layer for cargo-sample.

Contains pure domain objects with no I/O or side effects:
- PackageReference / ResolvedReference: what to sample from
- PackageInfo: one entry of the local package metadata
- ExampleEntry: one example in a checkout
- MaterializeResult: what copying an example did
"""

from .reference import PackageReference, ResolvedReference, PackageInfo, is_url
from .example import ExampleEntry
from .operation import FileAction, FileDetail, MaterializeResult

__all__ = [
    'PackageReference',
    'ResolvedReference',
    'PackageInfo',
    'is_url',
    'ExampleEntry',
    'FileAction',
    'FileDetail',
    'MaterializeResult',
]
