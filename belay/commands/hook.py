import click

from ..cli_utils import standard_command, add_common_options, require_git_root
from ..hooks import HOOK_FILENAMES, install_hook


@click.command("hook")
@click.argument('hook_type', type=click.Choice(sorted(HOOK_FILENAMES)))
@add_common_options('dir', 'verbose')
@standard_command
def hook_handler(hook_type, directory, verbose):
    """Install belay as a git pre-commit or pre-push hook."""
    root = require_git_root(directory)
    hook_path = install_hook(root, hook_type)
    click.echo(f"Created hook `{hook_path.as_posix()}`")
