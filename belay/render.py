"""
Output rendering functions for belay.
"""
from rich.console import Console
from rich.table import Table


def render_task_table(task_list, console=None):
    """
    Render the scheduled tasks as a table.

    Args:
        task_list: TaskList to display
        console: Rich console to print on (stdout by default)
    """
    console = console or Console()

    if not len(task_list):
        console.print("No checks apply to this branch.")
        return

    table = Table(title="Scheduled checks")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Command", style="green")
    table.add_column("Source", style="magenta")

    for index, task in enumerate(task_list, 1):
        table.add_row(str(index), task.display_name or "-", task.command, task.source)

    console.print(table)
