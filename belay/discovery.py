"""
Locate CI configuration files inside a repository.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .exit_codes import ConfigNotFoundError
from .models import Provider, WorkflowDefinition
from .parser import WorkflowParser

logger = logging.getLogger(__name__)

GITHUB_WORKFLOWS_DIR = Path(".github") / "workflows"
GITLAB_CONFIG_FILE = ".gitlab-ci.yml"
WORKFLOW_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class ConfigSource:
    """A located configuration file and the format it is written in."""

    path: Path
    provider: Provider
    source: str


def discover_configs(root) -> List[ConfigSource]:
    """Find every CI configuration file under the repository `root`.

    Args:
        root: Repository root directory.

    Returns:
        Configuration files ordered by their path relative to `root`.

    Raises:
        ConfigNotFoundError: If no configuration file exists.
    """
    root = Path(root)
    found = []

    workflows_dir = root / GITHUB_WORKFLOWS_DIR
    if workflows_dir.is_dir():
        for path in workflows_dir.iterdir():
            if path.is_file() and path.suffix in WORKFLOW_SUFFIXES:
                found.append(ConfigSource(path, Provider.GITHUB, path.relative_to(root).as_posix()))

    gitlab_path = root / GITLAB_CONFIG_FILE
    if gitlab_path.is_file():
        found.append(ConfigSource(gitlab_path, Provider.GITLAB, GITLAB_CONFIG_FILE))

    if not found:
        raise ConfigNotFoundError()

    found.sort(key=lambda config: config.source)
    logger.debug(f"Found CI configuration: {', '.join(c.source for c in found)}")
    return found


def load_workflows(root) -> List[WorkflowDefinition]:
    """Discover and parse every CI configuration file under `root`."""
    return [
        WorkflowParser.load_workflow(config.path, config.provider, config.source)
        for config in discover_configs(root)
    ]
