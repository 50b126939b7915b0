"""
The sampling pipeline: resolve, check out, choose, copy.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Generator, Optional, Protocol

from ..config import load_config
from ..domain import MaterializeResult, PackageReference, ResolvedReference
from ..exit_codes import ConfirmationDeclined
from ..prompts import Prompter
from .catalog_service import ExampleCatalog
from .checkout_service import CheckoutProvider
from .materialize_service import TreeMaterializer
from .resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class DependencyAdder(Protocol):
    def add(self, name: str) -> None:
        ...


class SampleService:
    """
    Runs one sampling session end to end.

    Every collaborator is injected so the pipeline can run against fakes.

    Example:
        service = SampleService(resolver, checkouts, catalog, materializer, prompter)
        for progress in service.run("serde", Path(".")):
            print(progress)
        print(service.last_result.files_copied)
    """

    def __init__(
        self,
        resolver: ReferenceResolver,
        checkouts: CheckoutProvider,
        catalog: ExampleCatalog,
        materializer: TreeMaterializer,
        prompter: Prompter,
        dependency_adder: Optional[DependencyAdder] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        self.resolver = resolver
        self.checkouts = checkouts
        self.catalog = catalog
        self.materializer = materializer
        self.prompter = prompter
        self.dependency_adder = dependency_adder
        self.config = config or load_config()
        self.last_result: Optional[MaterializeResult] = None
        self.last_resolved: Optional[ResolvedReference] = None

    @property
    def manifest_filename(self) -> str:
        return self.config.get('general', {}).get('manifest_filename', 'Cargo.toml')

    def run(
        self,
        identifier: str,
        output: Path,
        example: Optional[str] = None,
        assume_yes: bool = False,
    ) -> Generator[str, None, MaterializeResult]:
        """
        Sample one example from `identifier` into `output`.

        Yields progress messages, returns MaterializeResult.

        Raises:
            CommandError: Any failure; the run is not resumable
        """
        output = Path(output)
        reference = PackageReference(identifier)

        if not reference.is_url and self.dependency_adder is not None:
            yield f"Adding dependency: {identifier}"
            self.dependency_adder.add(identifier)

        resolved = self.resolver.resolve(identifier)
        self.last_resolved = resolved
        if resolved.commit_id:
            yield f"Cloning repository: {resolved.repository_url} @ {resolved.commit_id}"
        else:
            yield f"Cloning repository: {resolved.repository_url}"

        with self.checkouts.checkout(resolved) as root:
            if example is None:
                example = self.prompter.select("Which example to use?", self.catalog.names(root))
            source = self.catalog.resolve_choice(root, example)

            if not assume_yes:
                confirmed = self.prompter.confirm(f"Copy example to {output}?", default=False)
                if not confirmed:
                    raise ConfirmationDeclined()

            yield f"Copying example to {output}"
            result = yield from self.materializer.materialize(source, output, self.manifest_filename)

        result.example = example
        self.last_result = result
        return result
