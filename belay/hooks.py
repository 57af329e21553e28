"""
Install belay as a git hook.
"""

import os
from pathlib import Path

from .config import load_config, logger

HOOK_FILENAMES = {
    'commit': 'pre-commit',
    'push': 'pre-push',
}


def hook_script(interpreter="/usr/bin/sh", command="belay"):
    return f"#!{interpreter}\n{command}"


def install_hook(root, hook_type, config=None):
    """
    Write an executable hook that runs belay.

    Args:
        root (str): Repository root directory.
        hook_type (str): 'commit' or 'push'.
        config (dict): Configuration; loaded from disk when omitted.

    Returns:
        Path: The hook file, relative to `root`.
    """
    if hook_type not in HOOK_FILENAMES:
        raise ValueError(f"Unknown hook type: {hook_type}")

    config = config or load_config()
    hook_config = config.get('hooks', {})

    relative_path = Path(".git") / "hooks" / HOOK_FILENAMES[hook_type]
    hook_path = Path(root) / relative_path
    hook_path.parent.mkdir(parents=True, exist_ok=True)

    hook_path.write_text(hook_script(
        hook_config.get('interpreter', '/usr/bin/sh'),
        hook_config.get('command', 'belay'),
    ))
    os.chmod(hook_path, 0o755)

    logger.debug(f"Wrote {hook_path}")
    return relative_path
