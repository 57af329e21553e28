#!/usr/bin/env python3

import click

from belay import __version__
from belay.cli_utils import add_common_options
from belay.commands.run import run_handler
from belay.commands.list import list_handler
from belay.commands.hook import hook_handler
from belay.commands.config import config_cmd


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@add_common_options('dir', 'dry_run', 'verbose')
@click.pass_context
def cli(ctx, directory, dry_run, verbose):
    """Run your CI checks locally before you push.

    Without a subcommand, runs the checks (same as `belay run`). Options given
    here become the defaults of the subcommand.
    """
    shared = {'directory': directory, 'verbose': verbose}
    ctx.default_map = {
        'run': dict(shared, dry_run=dry_run),
        'list': dict(shared),
        'hook': dict(shared),
    }

    if ctx.invoked_subcommand is None:
        ctx.invoke(run_handler, directory=directory, dry_run=dry_run, verbose=verbose)


cli.add_command(run_handler, name='run')
cli.add_command(list_handler, name='list')
cli.add_command(hook_handler, name='hook')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
