"""
Sample command for cargo-sample.

Copies one example from an upstream repository into a project, merging
Cargo.toml into the project's existing manifest.
"""

import click
import json
import sys
from pathlib import Path
from typing import Optional

from ..config import load_config, configure_logging
from ..exit_codes import CommandError, INTERRUPTED
from ..infra import CargoClient, GitClient
from ..prompts import ClickPrompter, ScriptedPrompter
from ..services import (
    CheckoutProvider,
    ExampleCatalog,
    ManifestMerger,
    ReferenceResolver,
    SampleService,
    TreeMaterializer,
)


def _format_bytes(bytes_val: int) -> str:
    """Format bytes as human-readable string."""
    size: float = float(bytes_val)
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def build_service(config, example: Optional[str], assume_yes: bool, json_mode: bool) -> SampleService:
    """Wire the real git/cargo clients and prompts into a SampleService."""
    git = GitClient(timeout=config['git']['timeout_seconds'])
    git.require()

    # cargo add and cargo metadata run in the invoking project, not in output
    cargo = CargoClient(timeout=config['cargo']['timeout_seconds'])

    if json_mode:
        # stdout carries JSONL, so never prompt
        prompter = ScriptedPrompter(selection=example, confirm_answer=assume_yes)
    else:
        prompter = ClickPrompter()

    return SampleService(
        resolver=ReferenceResolver(cargo),
        checkouts=CheckoutProvider(git, temp_prefix=config['git']['temp_prefix']),
        catalog=ExampleCatalog(config['general']['examples_directory']),
        materializer=TreeMaterializer(ManifestMerger.from_config(config)),
        prompter=prompter,
        dependency_adder=cargo if config['resolver']['add_dependency'] else None,
        config=config,
    )


@click.command('sample')
@click.argument('repo')
@click.argument('output', required=False, type=click.Path(file_okay=False))
@click.option('--example', '-e', help='Example to copy (skips the selection prompt)')
@click.option('--yes', '-y', 'assume_yes', is_flag=True, help='Do not ask for confirmation')
@click.option('--json', 'output_json', is_flag=True,
              help='Output as JSONL (non-interactive: needs --example and --yes)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def sample_handler(
    repo: str,
    output: Optional[str],
    example: Optional[str],
    assume_yes: bool,
    output_json: bool,
    debug: bool,
):
    """
    Copy an example from REPO into OUTPUT (default: current directory).

    REPO is a git URL or the name of a crate. Crates are added to the
    project with `cargo add` and the example is taken from the exact commit
    the crate was published from.

    Examples:

        # Pick an example from a crate interactively
        cargo sample tokio

        # Straight from a repository, into a new directory
        cargo sample https://github.com/serde-rs/serde my-project

        # Non-interactive
        cargo sample clap --example derive --yes
    """
    config = load_config()
    configure_logging(config, debug=debug)

    output_path = Path(output or config['general']['default_output'])

    try:
        service = build_service(config, example, assume_yes, output_json)
        if output_json:
            _sample_json(service, repo, output_path, example, assume_yes)
        else:
            _sample_pretty(service, repo, output_path, example, assume_yes)
    except CommandError as e:
        if output_json:
            print(json.dumps({
                'error': str(e),
                'type': type(e).__name__,
                'exit_code': e.exit_code,
            }), flush=True)
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("Interrupted by user", file=sys.stderr)
        sys.exit(INTERRUPTED)


def _sample_pretty(service: SampleService, repo: str, output: Path,
                   example: Optional[str], assume_yes: bool):
    """Rich formatted output for sample."""
    from rich.console import Console

    console = Console()
    for message in service.run(repo, output, example=example, assume_yes=assume_yes):
        console.print(message, markup=False)

    result = service.last_result
    console.print(
        f"\n[bold green]✓[/bold green] Copied [bold]{result.example}[/bold] to {output}: "
        f"{result.files_copied} files, {result.manifests_merged} manifests merged, "
        f"{_format_bytes(result.bytes_written)}"
    )


def _sample_json(service: SampleService, repo: str, output: Path,
                 example: Optional[str], assume_yes: bool):
    """JSONL output for sample."""
    for message in service.run(repo, output, example=example, assume_yes=assume_yes):
        print(json.dumps({'progress': message}), flush=True)

    print(json.dumps({'type': 'resolved', **service.last_resolved.to_dict()}), flush=True)

    result = service.last_result
    for detail in result.details:
        print(json.dumps(detail.to_dict()), flush=True)
    print(json.dumps(result.to_dict()), flush=True)
