"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from typing import Generator

from .config import configure_logging, logger
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError, GitRootNotFoundError
)
from .utils import find_git_root


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Logging level from --verbose/-v
    - JSONL output for generator, list and dict results
    - `Error: ...` on stderr and a specific exit code for failures
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        configure_logging(verbose=kwargs.get('verbose', False))

        try:
            result = func(*args, **kwargs)
            output_result(result)
            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            click.echo("Error: Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Unexpected failure", exc_info=True)
            click.echo(f"Error: {e}", err=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def output_result(result):
    """
    Standard output handler for results.

    Args:
        result: None (command printed its own output), a dict, a list or a generator
    """
    if result is None:
        return
    if isinstance(result, (Generator, list, tuple)):
        for item in result:
            print(json.dumps(item, ensure_ascii=False), flush=True)
    elif isinstance(result, dict):
        print(json.dumps(result, ensure_ascii=False), flush=True)
    else:
        print(result, flush=True)


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                           help='Show debug logging on stderr'),
    'dry_run': click.option('--dry-run', is_flag=True,
                           help='List the checks that would run without running them'),
    'dir': click.option('-d', '--dir', 'directory', default='.', type=click.Path(file_okay=False),
                       help='Directory inside the repository (default: current directory)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'dry_run')
        def my_command(verbose, dry_run):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator


def require_git_root(directory):
    """Return the repository root containing `directory` or fail."""
    root = find_git_root(directory)
    if root is None:
        raise GitRootNotFoundError()
    return root
