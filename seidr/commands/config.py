import click

from ..cli_utils import standard_command
from ..config import load_config, dump_config, get_config_path


@click.group("config")
def config_cmd():
    """Configuration commands."""
    pass


@config_cmd.command("show")
@click.pass_context
@standard_command
def show_config(ctx):
    """Print the loaded configuration as YAML."""
    config = load_config(ctx.obj.get('config_path'))
    click.echo(dump_config(config), nl=False)


@config_cmd.command("path")
@click.pass_context
@standard_command
def config_path(ctx):
    """Print the config file path being used."""
    click.echo(str(get_config_path(ctx.obj.get('config_path'))))
