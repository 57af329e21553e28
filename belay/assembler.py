"""
Flatten eligible workflows into a single task list.
"""

import logging
from typing import Iterable

from .models import TaskList, WorkflowDefinition

logger = logging.getLogger(__name__)


def assemble(workflows: Iterable[WorkflowDefinition]) -> TaskList:
    """
    Merge the tasks of `workflows` into one ordered, duplicate-free list.

    Workflows are walked in source order and their tasks in declared order.
    A command already scheduled by an earlier task is dropped, so the first
    occurrence keeps its name and position.
    """
    task_list = TaskList()
    for workflow in sorted(workflows, key=lambda w: w.source):
        for task in workflow.tasks:
            if not task_list.add(task):
                logger.debug(f"Skipping duplicate command from {workflow.source}: {task.command}")
    return task_list
