"""
Service layer for cargo-sample.

Contains the logic that orchestrates domain objects and infrastructure:
- ReferenceResolver: identifier -> (repository, commit)
- CheckoutProvider: ephemeral git checkouts
- ExampleCatalog: listing and choosing examples
- TreeMaterializer: copying an example into a project
- ManifestMerger: reconciling Cargo.toml files
- SampleService: the whole pipeline

Services are the primary API for commands to use.
"""

from .resolver import ReferenceResolver
from .checkout_service import CheckoutProvider
from .catalog_service import ExampleCatalog
from .manifest_merger import ManifestMerger, MergeReport
from .materialize_service import TreeMaterializer
from .sample_service import SampleService

__all__ = [
    'ReferenceResolver',
    'CheckoutProvider',
    'ExampleCatalog',
    'ManifestMerger',
    'MergeReport',
    'TreeMaterializer',
    'SampleService',
]
