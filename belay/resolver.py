"""
Decide which workflows apply to the local repository.

A local run stands in for one of two hosted events: a plain push when the
repository has no remote, or a pull request when it does. Only the rule for
that event is consulted.
"""

import logging
from typing import Iterable, List

from .models import RepositoryContext, WorkflowDefinition

logger = logging.getLogger(__name__)

DIRECT_UPDATE_EVENT = "push"
PROPOSED_CHANGE_EVENT = "pull_request"


def active_event(ctx: RepositoryContext) -> str:
    """Return the event name the current repository state corresponds to."""
    if ctx.has_configured_remote:
        return PROPOSED_CHANGE_EVENT
    return DIRECT_UPDATE_EVENT


def is_eligible(workflow: WorkflowDefinition, ctx: RepositoryContext) -> bool:
    """Return True if every task of `workflow` should run in `ctx`."""
    event = active_event(ctx)
    rule = workflow.rule_for(event)
    if rule is None:
        logger.debug(f"{workflow.source}: no '{event}' trigger")
        return False
    if not rule.matches_branch(ctx.current_branch):
        logger.debug(f"{workflow.source}: '{event}' does not cover branch '{ctx.current_branch}'")
        return False
    return True


def eligible_workflows(workflows: Iterable[WorkflowDefinition],
                       ctx: RepositoryContext) -> List[WorkflowDefinition]:
    """Filter `workflows` to the eligible ones, ordered by source."""
    return [
        workflow
        for workflow in sorted(workflows, key=lambda w: w.source)
        if is_eligible(workflow, ctx)
    ]
