"""
Tests for belay.resolver
"""
import pytest

from belay.models import Provider, RepositoryContext, TaskDefinition, TriggerRule, WorkflowDefinition
from belay.parser import parse_workflow
from belay.resolver import (
    DIRECT_UPDATE_EVENT,
    PROPOSED_CHANGE_EVENT,
    active_event,
    eligible_workflows,
    is_eligible,
)


def make_workflow(source="ci.yml", triggers=(), provider=Provider.GITHUB):
    return WorkflowDefinition(
        source=source,
        provider=provider,
        triggers=list(triggers),
        tasks=[TaskDefinition(command=f"echo {source}", source=source)],
    )


MAIN_ONLY_PUSH = TriggerRule(DIRECT_UPDATE_EVENT, frozenset(["main"]))


def test_active_event_follows_remote_presence():
    assert active_event(RepositoryContext("main", False)) == DIRECT_UPDATE_EVENT
    assert active_event(RepositoryContext("main", True)) == PROPOSED_CHANGE_EVENT


@pytest.mark.parametrize("branch, expected", [("main", True), ("develop", False)])
def test_branch_filter_without_remote(branch, expected):
    workflow = make_workflow(triggers=[MAIN_ONLY_PUSH])
    assert is_eligible(workflow, RepositoryContext(branch, False)) is expected


def test_proposed_change_takes_precedence_with_remote():
    workflow = make_workflow(triggers=[MAIN_ONLY_PUSH, TriggerRule(PROPOSED_CHANGE_EVENT)])

    assert not is_eligible(workflow, RepositoryContext("develop", False))
    assert is_eligible(workflow, RepositoryContext("develop", True))


def test_proposed_change_branch_filter():
    workflow = make_workflow(triggers=[TriggerRule(PROPOSED_CHANGE_EVENT, frozenset(["main"]))])

    assert is_eligible(workflow, RepositoryContext("main", True))
    assert not is_eligible(workflow, RepositoryContext("feature", True))


def test_push_only_workflow_with_remote_is_not_eligible():
    """Only the active event's rule is consulted"""
    workflow = make_workflow(triggers=[TriggerRule(DIRECT_UPDATE_EVENT)])
    assert not is_eligible(workflow, RepositoryContext("main", True))


def test_no_triggers_never_eligible():
    workflow = make_workflow(triggers=[])
    assert not is_eligible(workflow, RepositoryContext("main", False))
    assert not is_eligible(workflow, RepositoryContext("main", True))


@pytest.mark.parametrize("remote", [False, True])
def test_always_rule_is_eligible(remote):
    workflow = make_workflow(triggers=[TriggerRule.always()], provider=Provider.GITLAB)
    assert is_eligible(workflow, RepositoryContext("anything", remote))


def test_eligible_workflows_sorted_and_filtered():
    b = make_workflow("b.yml", [TriggerRule(DIRECT_UPDATE_EVENT)])
    a = make_workflow("a.yml", [TriggerRule(DIRECT_UPDATE_EVENT)])
    skipped = make_workflow("c.yml", [MAIN_ONLY_PUSH])

    result = eligible_workflows([b, skipped, a], RepositoryContext("develop", False))

    assert [w.source for w in result] == ["a.yml", "b.yml"]


def test_restricted_push_only_workflow_with_remote_is_not_eligible():
    """A remote makes the pull_request rule the only one consulted, on any branch"""
    workflow = make_workflow(triggers=[MAIN_ONLY_PUSH])

    assert not is_eligible(workflow, RepositoryContext("main", True))
    assert not is_eligible(workflow, RepositoryContext("develop", True))


@pytest.mark.parametrize("push_value", ["[master]", "master"])
def test_parsed_branch_list_restricts_push(push_value):
    text = f"on:\n  push: {push_value}\njobs:\n  a:\n    steps:\n      - run: make\n"
    workflow = parse_workflow(Provider.GITHUB, text, "ci.yml")

    assert is_eligible(workflow, RepositoryContext("master", False))
    assert not is_eligible(workflow, RepositoryContext("develop", False))
