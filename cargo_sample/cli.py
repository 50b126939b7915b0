#!/usr/bin/env python3

import click

from cargo_sample.commands.sample import sample_handler
from cargo_sample.commands.config import config_cmd


@click.group()
@click.version_option(package_name="cargo-sample")
def cli():
    """cargo-sample - Always sample before you buy.

    Copies an example from a crate's repository into your project,
    merging its Cargo.toml with yours.

    Installed as a cargo subcommand, `cargo sample <repo>` runs
    `cargo-sample sample <repo>`.
    """
    pass


cli.add_command(sample_handler, name='sample')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
