"""
Sequential task executor.

Tasks run one at a time in list order, sharing the working tree. The first
task that exits non-zero (or cannot be started) ends the run.
"""

import logging
from typing import Callable, Optional

import click

from .models import ExecutionOutcome, TaskDefinition, TaskList, TaskOutcome
from .utils import run_shell

logger = logging.getLogger(__name__)

Runner = Callable[[str, Optional[str]], int]


class ConsoleReporter:
    """Print progress lines around each task's own output."""

    def task_started(self, task: TaskDefinition):
        if task.display_name:
            click.echo(f"Checking '{task.display_name}':")
        else:
            click.echo("Checking:")

    def task_succeeded(self, task: TaskDefinition):
        click.echo("Success!")

    def task_failed(self, task: TaskDefinition, outcome: TaskOutcome):
        if outcome.error:
            logger.debug(f"Task '{task.command}' could not be started: {outcome.error}")
        else:
            logger.debug(f"Task '{task.command}' exited with status {outcome.returncode}")


class DryRunReporter(ConsoleReporter):
    """Describe each task instead of announcing its execution."""

    def task_started(self, task: TaskDefinition):
        label = f"'{task.display_name}'" if task.display_name else "(unnamed)"
        click.echo(f"Would check {label}: {task.command}")

    def task_succeeded(self, task: TaskDefinition):
        pass


def run_task(task: TaskDefinition, runner: Runner, cwd: Optional[str] = None) -> TaskOutcome:
    """Run one task and capture how it ended."""
    try:
        returncode = runner(task.command, cwd)
    except (OSError, ValueError) as e:
        return TaskOutcome(task=task, success=False, error=str(e))
    return TaskOutcome(task=task, success=returncode == 0, returncode=returncode)


def execute(task_list: TaskList,
            runner: Optional[Runner] = None,
            reporter: Optional[ConsoleReporter] = None,
            cwd: Optional[str] = None,
            dry_run: bool = False) -> ExecutionOutcome:
    """Run every task in order, stopping at the first failure.

    Args:
        task_list: Tasks to run.
        runner: Callable taking (command, cwd) and returning the exit status.
        reporter: Receives started/succeeded/failed notifications.
        cwd: Working directory for every task.
        dry_run: If True, report the tasks without running them.

    Returns:
        Aggregate outcome; `failed_task` names the task that stopped the run.
    """
    runner = runner or run_shell
    if reporter is None:
        reporter = DryRunReporter() if dry_run else ConsoleReporter()

    outcomes = []
    for task in task_list:
        reporter.task_started(task)

        if dry_run:
            outcome = TaskOutcome(task=task, success=True, returncode=0)
        else:
            outcome = run_task(task, runner, cwd)
        outcomes.append(outcome)

        if not outcome.success:
            reporter.task_failed(task, outcome)
            return ExecutionOutcome(success=False, outcomes=outcomes, failed_task=task)

        reporter.task_succeeded(task)

    return ExecutionOutcome(success=True, outcomes=outcomes)
