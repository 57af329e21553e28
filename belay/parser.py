"""
CI configuration parser for GitHub Actions and GitLab CI YAML files.
"""

import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

import yaml

from .exit_codes import MalformedConfigError
from .models import Provider, TaskDefinition, TriggerRule, WorkflowDefinition

logger = logging.getLogger(__name__)

# Top-level GitLab keys that configure the pipeline rather than define a job
GITLAB_RESERVED_KEYS = frozenset([
    'stages', 'variables', 'image', 'services', 'cache', 'include',
    'default', 'workflow', 'before_script', 'after_script', 'types',
])


class WorkflowParser:
    """Normalize provider-specific CI configuration into WorkflowDefinitions."""

    @staticmethod
    def load_workflow(file_path: str, provider: Provider, source: Optional[str] = None) -> WorkflowDefinition:
        """Load a workflow definition from a YAML file.

        Args:
            file_path: Path to the configuration file.
            provider: Format of the file.
            source: Identifier used for ordering; defaults to the file name.

        Returns:
            Parsed workflow definition.
        """
        path = Path(file_path)
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()

        return WorkflowParser.parse(provider, text, source or path.name)

    @staticmethod
    def parse(provider: Provider, text: str, source: str) -> WorkflowDefinition:
        """Parse raw configuration text.

        Args:
            provider: Format of the text.
            text: Raw YAML.
            source: Identifier of the originating file.

        Raises:
            MalformedConfigError: If the text is not a valid configuration.
        """
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedConfigError(source, f"invalid YAML ({e})") from e

        if not isinstance(document, dict):
            raise MalformedConfigError(source, "top level must be a mapping")

        if provider is Provider.GITHUB:
            workflow = WorkflowParser.parse_github(document, source)
        elif provider is Provider.GITLAB:
            workflow = WorkflowParser.parse_gitlab(document, source)
        else:
            raise ValueError(f"Unsupported provider: {provider!r}")

        logger.debug(
            f"Parsed {source}: {len(workflow.triggers)} trigger(s), {len(workflow.tasks)} task(s)"
        )
        return workflow

    @staticmethod
    def parse_github(document: Dict[Any, Any], source: str) -> WorkflowDefinition:
        """Build a workflow from a GitHub Actions document."""
        jobs = document.get('jobs')
        if not isinstance(jobs, dict) or not jobs:
            raise MalformedConfigError(source, "missing 'jobs' mapping")

        # YAML 1.1 reads an unquoted `on` key as boolean True
        triggers_section = document.get('on', document.get(True))
        triggers = WorkflowParser._parse_github_triggers(triggers_section, source)

        tasks = []
        for job_name, job in jobs.items():
            if not isinstance(job, dict):
                raise MalformedConfigError(source, f"job '{job_name}' must be a mapping")
            steps = job.get('steps')
            if not isinstance(steps, list) or not steps:
                raise MalformedConfigError(source, f"job '{job_name}' has no steps")

            for index, step in enumerate(steps):
                command, name = WorkflowParser._parse_github_step(step, job_name, index, source)
                if command is None:
                    continue
                tasks.append(TaskDefinition(
                    command=command,
                    name=name,
                    position=len(tasks),
                    source=source,
                ))

        return WorkflowDefinition(
            source=source,
            provider=Provider.GITHUB,
            triggers=triggers,
            tasks=tasks,
        )

    @staticmethod
    def _parse_github_triggers(section: Any, source: str) -> List[TriggerRule]:
        if section is None:
            return []
        if isinstance(section, str):
            return [TriggerRule(event=section)]
        if isinstance(section, list):
            return [TriggerRule(event=str(event)) for event in section]
        if not isinstance(section, dict):
            raise MalformedConfigError(source, "'on' must be an event name, a list or a mapping")

        rules = []
        for event, settings in section.items():
            if isinstance(settings, dict):
                settings = settings.get('branches')
            branches = WorkflowParser._parse_branch_filter(settings, event, source)
            rules.append(TriggerRule(event=str(event), branches=branches))
        return rules

    @staticmethod
    def _parse_branch_filter(value: Any, event: Any, source: str) -> Optional[FrozenSet[str]]:
        """Read a branch restriction: None matches all, a name or list restricts."""
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise MalformedConfigError(source, f"branches of '{event}' must be a branch name or a list")
        return frozenset(str(branch) for branch in value)

    @staticmethod
    def _parse_github_step(step: Any, job_name: str, index: int, source: str):
        """Return (command, name) for a step; command is None for non-shell steps."""
        if isinstance(step, str):
            return step, None
        if not isinstance(step, dict):
            raise MalformedConfigError(source, f"step {index} of job '{job_name}' must be a mapping")

        command = step.get('run')
        if command is None:
            # `uses:` actions have no local shell equivalent
            logger.debug(f"Skipping step {index} of job '{job_name}' in {source}: no 'run' command")
            return None, None

        name = step.get('name')
        return str(command), str(name) if name is not None else None

    @staticmethod
    def parse_gitlab(document: Dict[Any, Any], source: str) -> WorkflowDefinition:
        """Build a workflow from a GitLab CI document."""
        tasks = []
        for job_name, job in document.items():
            job_name = str(job_name)
            if job_name in GITLAB_RESERVED_KEYS or job_name.startswith('.'):
                continue

            script = job.get('script') if isinstance(job, dict) else job
            if isinstance(script, str):
                lines = [script]
            elif isinstance(script, list):
                lines = [str(line) for line in script]
            else:
                lines = []

            if not lines or not all(line.strip() for line in lines):
                raise MalformedConfigError(source, f"job '{job_name}' has no script")

            for line in lines:
                tasks.append(TaskDefinition(
                    command=line,
                    name=job_name,
                    position=len(tasks),
                    source=source,
                ))

        if not tasks:
            raise MalformedConfigError(source, "no jobs defined")

        return WorkflowDefinition(
            source=source,
            provider=Provider.GITLAB,
            triggers=[TriggerRule.always()],
            tasks=tasks,
        )


def parse_workflow(provider: Provider, text: str, source: str) -> WorkflowDefinition:
    """Parse `text` in the given provider format."""
    return WorkflowParser.parse(provider, text, source)
