"""
cargo-sample - Always sample before you buy.

Copies an example out of a crate's upstream repository into your project.
Crate names are resolved through `cargo metadata` to the exact commit the
crate was published from; the example's Cargo.toml is merged into the
project's own instead of replacing it.

Quick Start:
    from cargo_sample import ManifestMerger

    # Merge an example manifest into a project manifest
    ManifestMerger().merge(Path("Cargo.toml"), Path("example/Cargo.toml"))

    # Or run the whole pipeline with your own collaborators
    service = SampleService(resolver, checkouts, catalog, materializer, prompter)
    for progress in service.run("serde", Path(".")):
        print(progress)
"""

__version__ = "0.3.0"

from .domain import (
    PackageReference,
    ResolvedReference,
    PackageInfo,
    ExampleEntry,
    MaterializeResult,
)

from .services import (
    ReferenceResolver,
    CheckoutProvider,
    ExampleCatalog,
    ManifestMerger,
    TreeMaterializer,
    SampleService,
)

from .config import load_config, save_config

__all__ = [
    "__version__",
    "PackageReference",
    "ResolvedReference",
    "PackageInfo",
    "ExampleEntry",
    "MaterializeResult",
    "ReferenceResolver",
    "CheckoutProvider",
    "ExampleCatalog",
    "ManifestMerger",
    "TreeMaterializer",
    "SampleService",
    "load_config",
    "save_config",
]
