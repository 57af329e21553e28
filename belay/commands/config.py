import click
import json

from belay.config import load_config, generate_config_example


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("generate")
def generate_config():
    """Generate an example configuration file."""
    generate_config_example()


@config_cmd.command("show")
def show_config():
    """Show the current configuration with all merges applied."""
    click.echo(json.dumps(load_config(), indent=2, ensure_ascii=False))
