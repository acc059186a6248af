"""
Jump command for seidr.

Prints where a declared repository or link lives, for use as
``cd "$(seidr jump repo dots nvim)"``.
"""

import click

from ..cli_utils import standard_command, open_seidr


@click.group('jump')
def jump_cmd():
    """Print the path of a repository or link."""
    pass


@jump_cmd.command('repo')
@click.argument('category')
@click.argument('name')
@click.pass_context
@standard_command
def jump_repo(ctx, category, name):
    """Print the working directory of repository NAME in CATEGORY."""
    click.echo(open_seidr(ctx).jump_repo(category, name))


@jump_cmd.command('link')
@click.argument('category')
@click.argument('name')
@click.pass_context
@standard_command
def jump_link(ctx, category, name):
    """Print the symlink location of link NAME in CATEGORY."""
    click.echo(open_seidr(ctx).jump_link(category, name))
