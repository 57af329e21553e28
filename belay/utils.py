"""
Shared utility functions for belay.
"""
import subprocess
from pathlib import Path

from .config import logger
from .models import RepositoryContext


def run_command(command, cwd=".", dry_run=False, capture_output=False, check=True, log_stderr=True):
    """
    Runs a shell command and logs the output.

    Args:
        command (str): The command to run.
        cwd (str): The working directory.
        dry_run (bool): If True, log the command without executing.
        capture_output (bool): If True, return stdout.
        check (bool): If True, raise CalledProcessError on non-zero exit codes.
        log_stderr (bool): If False, do not log stderr as an error.

    Returns:
        str: The command's stdout if capture_output is True, otherwise None.
    """
    if dry_run:
        logger.info(f"[Dry Run] Would run command in '{cwd}': {command}")
        return "Dry run output" if capture_output else None

    logger.debug(f"Running command in '{cwd}': {command}")
    result = subprocess.run(
        command,
        shell=True,
        capture_output=True,
        text=True,
        cwd=cwd,
        check=False,  # Disable check here to handle output manually
        encoding='utf-8'
    )

    if result.stdout and result.stdout.strip():
        logger.debug(result.stdout.strip())

    # Log stderr only if the command failed
    if result.returncode != 0:
        if log_stderr and result.stderr and result.stderr.strip():
            logger.error(result.stderr.strip())
        if check:
            raise subprocess.CalledProcessError(
                result.returncode, command, output=result.stdout, stderr=result.stderr
            )

    return result.stdout.strip() if capture_output else None


def run_shell(command, cwd=None, shell="sh"):
    """
    Runs a task command through `shell -c`, letting its output stream through.

    Args:
        command (str): The shell command line.
        cwd (str): The working directory, or None for the current one.
        shell (str): The shell executable.

    Returns:
        int: The process exit status.

    Raises:
        OSError: If the shell cannot be launched.
    """
    logger.debug(f"Running task in '{cwd or '.'}': {command}")
    return subprocess.run([shell, "-c", command], cwd=cwd, check=False).returncode


def is_git_repo(repo_path):
    """
    Checks if a directory is a Git repository.

    Args:
        repo_path (str): The directory path to check.

    Returns:
        bool: True if the directory contains a `.git` entry.
    """
    return (Path(repo_path) / ".git").exists()


def find_git_root(start):
    """
    Walks up from `start` to the nearest directory containing `.git`.

    Args:
        start (str): Directory to start from.

    Returns:
        Path: The repository root, or None outside of a repository.
    """
    directory = Path(start).resolve()
    for candidate in [directory, *directory.parents]:
        if is_git_repo(candidate):
            return candidate
    return None


def get_current_branch(repo_path):
    """
    Gets the name of the checked-out branch.

    `git symbolic-ref` also works on a branch with no commits yet; a
    detached HEAD falls back to `rev-parse`, which reports "HEAD".
    """
    branch = run_command(
        "git symbolic-ref --short HEAD",
        cwd=repo_path,
        capture_output=True,
        check=False,
        log_stderr=False
    )
    if branch:
        return branch

    branch = run_command(
        "git rev-parse --abbrev-ref HEAD",
        cwd=repo_path,
        capture_output=True,
        check=False,
        log_stderr=False
    )
    return branch or "HEAD"


def get_remote_names(repo_path):
    """Lists the remotes registered in the repository."""
    output = run_command("git remote", cwd=repo_path, capture_output=True, check=False, log_stderr=False)
    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def has_configured_remote(repo_path):
    return bool(get_remote_names(repo_path))


def get_repository_context(repo_path):
    """
    Snapshots the facts used to decide which workflows apply.

    Args:
        repo_path (str): Path to the Git repository.

    Returns:
        RepositoryContext: Current branch and remote presence.
    """
    context = RepositoryContext(
        current_branch=get_current_branch(repo_path),
        has_configured_remote=has_configured_remote(repo_path),
    )
    logger.debug(
        f"Repository context: branch={context.current_branch} remote={context.has_configured_remote}"
    )
    return context
