import click
import json

from ..config import get_config_path, get_default_config, load_config, save_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("init")
@click.option("--format", "fmt", type=click.Choice(["json", "toml", "yaml"]), default="json",
              help="File format for the new configuration (default: json)")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
def init_config(fmt, force):
    """Write the default configuration to ~/.cargo-sample/."""
    current = get_config_path()
    if current.exists() and not force:
        click.echo(f"Configuration already exists at {current} (use --force to overwrite)", err=True)
        raise SystemExit(1)

    target = current.parent / f"config.{fmt}"
    save_config(get_default_config(), target)
    click.echo(f"Default configuration written to {target}")
