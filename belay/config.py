import copy
import json
import logging
import os
from pathlib import Path

import toml
from rich.console import Console
from rich.logging import RichHandler

# Task output owns stdout, so diagnostics go to stderr
console = Console(stderr=True)

handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)

LOG_DATEFMT = "[%X]"

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt=LOG_DATEFMT,
    handlers=[handler]
)

logger = logging.getLogger("belay")

ENV_PREFIX = "BELAY_"


def get_default_config():
    """Return the built-in configuration."""
    return {
        "execution": {
            "shell": "sh",
        },
        "hooks": {
            "interpreter": "/usr/bin/sh",
            "command": "belay",
        },
        "logging": {
            "level": "INFO",
            "format": "%(message)s",
        },
    }


def get_config_path(suffix=""):
    return Path.home() / f".belayrc{suffix}"


def merge_configs(base, override):
    """
    Recursively merge two configuration dictionaries.

    Values from `override` win; nested dictionaries are merged key by key.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _coerce_env_value(value):
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    return value


def _apply_env_overrides(config):
    """Apply BELAY_<SECTION>_<KEY> environment variables onto the config."""
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_")
        node = config
        # Walk the existing structure, joining parts when a key itself has underscores
        while parts:
            for i in range(len(parts), 0, -1):
                key = "_".join(parts[:i])
                if key in node:
                    break
            else:
                break
            parts = parts[i:]
            if not parts:
                if not isinstance(node[key], dict):
                    node[key] = _coerce_env_value(value)
            elif isinstance(node[key], dict):
                node = node[key]
            else:
                break
    return config


def load_config():
    """
    Load the user configuration.

    Reads ~/.belayrc (JSON) or ~/.belayrc.toml, merges it over the defaults
    and finally applies environment overrides.
    """
    config = get_default_config()

    json_path = get_config_path()
    toml_path = get_config_path(".toml")
    try:
        if json_path.exists():
            with open(json_path, "r") as f:
                config = merge_configs(config, json.load(f))
        elif toml_path.exists():
            config = merge_configs(config, toml.load(toml_path))
    except (json.JSONDecodeError, toml.TomlDecodeError) as e:
        logger.warning(f"Ignoring unreadable configuration file: {e}")

    return _apply_env_overrides(config)


def save_config(config):
    """Write the configuration to ~/.belayrc as JSON."""
    config_path = get_config_path()
    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)
    return config_path


def generate_config_example():
    """Write an example configuration next to the real one."""
    example_path = get_config_path(".example")
    with open(example_path, "w") as f:
        json.dump(get_default_config(), f, indent=2)
    console.print(f"An example configuration file has been saved to {example_path}")
    return example_path


def configure_logging(config=None, verbose=False):
    """Apply the configured log format and level; verbose forces DEBUG."""
    config = config or load_config()
    logging_config = config.get("logging", {})

    handler.setFormatter(logging.Formatter(logging_config.get("format", "%(message)s"), datefmt=LOG_DATEFMT))

    level_name = "DEBUG" if verbose else str(logging_config.get("level", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
