"""
Exit codes and error types for belay.

Every fatal condition in belay is a CommandError carrying the process exit
code the CLI should use. Nothing is retried: the first error ends the run.
"""

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
CONFIG_ERROR = 3
TASK_FAILED = 4
NOT_A_REPO = 5
INTERRUPTED = 130


class CommandError(Exception):
    """Base class for errors that map onto a specific exit code."""

    exit_code = GENERAL_ERROR

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class GitRootNotFoundError(CommandError):
    """Raised when no enclosing git repository could be found."""

    exit_code = NOT_A_REPO

    def __init__(self, message="Failed to find git root"):
        super().__init__(message)


class ConfigNotFoundError(CommandError):
    """Raised when the repository has no recognizable CI configuration."""

    exit_code = CONFIG_ERROR

    def __init__(self, message="Unable to find CI configuration"):
        super().__init__(message)


class MalformedConfigError(CommandError):
    """Raised when a CI configuration file cannot be turned into a workflow."""

    exit_code = CONFIG_ERROR

    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed CI configuration '{source}': {reason}")


class TaskFailedError(CommandError):
    """Raised when a scheduled task exits non-zero or cannot be launched."""

    exit_code = TASK_FAILED

    def __init__(self, task=None, message="Failed"):
        self.task = task
        super().__init__(message)


def get_exit_code_for_exception(exc):
    """Map an arbitrary exception onto an exit code."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    if isinstance(exc, (FileNotFoundError, PermissionError)):
        return CONFIG_ERROR
    return GENERAL_ERROR
