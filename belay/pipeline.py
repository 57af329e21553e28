"""
Connect discovery, parsing, applicability, assembly and execution.
"""

import functools
import logging
from typing import Optional

from .assembler import assemble
from .config import load_config
from .discovery import load_workflows
from .executor import ConsoleReporter, Runner, execute
from .exit_codes import TaskFailedError
from .models import ExecutionOutcome, RepositoryContext, TaskList
from .resolver import eligible_workflows
from .utils import get_repository_context, run_shell

logger = logging.getLogger(__name__)


def build_task_list(root, context: Optional[RepositoryContext] = None) -> TaskList:
    """Return the tasks that apply to the repository at `root`."""
    context = context or get_repository_context(root)
    workflows = load_workflows(root)
    eligible = eligible_workflows(workflows, context)
    logger.debug(f"{len(eligible)} of {len(workflows)} workflow(s) apply on '{context.current_branch}'")
    return assemble(eligible)


def run_checks(root,
               context: Optional[RepositoryContext] = None,
               runner: Optional[Runner] = None,
               reporter: Optional[ConsoleReporter] = None,
               dry_run: bool = False,
               config: Optional[dict] = None) -> ExecutionOutcome:
    """
    Run the applicable CI tasks of the repository at `root`.

    Raises:
        ConfigNotFoundError: If the repository has no CI configuration.
        MalformedConfigError: If a configuration file cannot be parsed.
        TaskFailedError: If a task fails; no later task is started.
    """
    task_list = build_task_list(root, context)

    if runner is None:
        config = config or load_config()
        shell = config.get('execution', {}).get('shell', 'sh')
        runner = functools.partial(run_shell, shell=shell)

    outcome = execute(task_list, runner=runner, reporter=reporter, cwd=str(root), dry_run=dry_run)
    if not outcome.success:
        raise TaskFailedError(outcome.failed_task)
    return outcome
