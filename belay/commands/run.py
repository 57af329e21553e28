"""
Handles the 'run' command, the default action of belay.

Runs every applicable CI check of the current repository in order and
stops at the first failure. Progress lines and task output go to stdout,
errors to stderr.
"""

import click

from ..cli_utils import standard_command, add_common_options, require_git_root
from ..pipeline import run_checks


@click.command(name='run')
@add_common_options('dir', 'dry_run', 'verbose')
@standard_command
def run_handler(directory, dry_run, verbose):
    """Run the CI checks that apply to the current branch.

    \b
    Examples:

    \b
        belay                   # Run the checks
        belay run --dry-run     # Show what would run
        belay run -d ../other   # Run the checks of another repository
    """
    root = require_git_root(directory)
    run_checks(root, dry_run=dry_run)
