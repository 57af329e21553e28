"""
Data model shared by the belay pipeline.

A CI configuration file is parsed into a WorkflowDefinition (trigger rules
plus ordered tasks). Eligible workflows are flattened into a TaskList, and
running that list produces an ExecutionOutcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Iterable, Iterator, List, Optional, FrozenSet

ALWAYS_EVENT = "*"


class Provider(Enum):
    """Supported CI configuration formats."""

    GITHUB = "github"
    GITLAB = "gitlab"


@dataclass(frozen=True)
class RepositoryContext:
    """Local facts used to decide which workflows apply."""

    current_branch: str
    has_configured_remote: bool = False


@dataclass(frozen=True)
class TriggerRule:
    """
    A named event that enables a workflow.

    `branches` of None means the rule matches every branch.
    """

    event: str
    branches: Optional[FrozenSet[str]] = None

    @classmethod
    def always(cls) -> 'TriggerRule':
        """Rule used by formats that have no trigger concept."""
        return cls(event=ALWAYS_EVENT)

    @property
    def is_always(self) -> bool:
        return self.event == ALWAYS_EVENT

    def matches_branch(self, branch: str) -> bool:
        if self.branches is None:
            return True
        return branch in self.branches


@dataclass(frozen=True)
class TaskDefinition:
    """One executable check. Only `command` takes part in deduplication."""

    command: str
    name: Optional[str] = None
    position: int = 0
    source: str = ""

    @property
    def display_name(self) -> Optional[str]:
        return self.name or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'command': self.command,
            'source': self.source,
            'position': self.position,
        }


@dataclass
class WorkflowDefinition:
    """One parsed CI configuration file."""

    source: str
    provider: Provider
    triggers: List[TriggerRule] = field(default_factory=list)
    tasks: List[TaskDefinition] = field(default_factory=list)

    def rule_for(self, event: str) -> Optional[TriggerRule]:
        """Return the rule enabling `event`, if any."""
        for rule in self.triggers:
            if rule.is_always or rule.event == event:
                return rule
        return None


class TaskList:
    """Ordered, duplicate-free sequence of tasks scheduled for one run."""

    def __init__(self, tasks: Iterable[TaskDefinition] = ()):
        self._tasks: List[TaskDefinition] = []
        self._commands = set()
        for task in tasks:
            self.add(task)

    def add(self, task: TaskDefinition) -> bool:
        """Append `task` unless its command is already scheduled."""
        if task.command in self._commands:
            return False
        self._commands.add(task.command)
        self._tasks.append(task)
        return True

    def commands(self) -> List[str]:
        return [task.command for task in self._tasks]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self._tasks]

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __getitem__(self, index):
        return self._tasks[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"


@dataclass
class TaskOutcome:
    """Result of running a single task."""

    task: TaskDefinition
    success: bool
    returncode: Optional[int] = None
    error: Optional[str] = None


@dataclass
class ExecutionOutcome:
    """Aggregate result of a run: success, or the first task that failed."""

    success: bool
    outcomes: List[TaskOutcome] = field(default_factory=list)
    failed_task: Optional[TaskDefinition] = None

    @property
    def succeeded(self) -> List[TaskDefinition]:
        return [o.task for o in self.outcomes if o.success]
