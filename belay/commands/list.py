import sys

import click

from ..cli_utils import standard_command, add_common_options, require_git_root
from ..pipeline import build_task_list
from ..render import render_task_table


@click.command("list")
@click.option('--table/--no-table', default=None, help='Display as formatted table (auto-detected by default)')
@add_common_options('dir', 'verbose')
@standard_command
def list_handler(table, directory, verbose):
    """List the checks that would run, without running them.

    Output is a table in an interactive terminal and JSONL otherwise.
    """
    if table is None:
        table = sys.stdout.isatty()

    root = require_git_root(directory)
    task_list = build_task_list(root)

    if table:
        render_task_table(task_list)
        return None

    return task_list.to_dicts()
