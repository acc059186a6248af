#!/usr/bin/env python3

import copy
import logging

import click

from .config import RunSettings, configure_logging
from .strings import INTERACTIVE_LICENSE, INTERACTIVE_WARRANTY
from .commands.git import (
    clone_cmd, pull_cmd, add_cmd, commit_cmd, commit_msg_cmd,
    push_cmd, quick_cmd, fast_cmd,
)
from .commands.link import link_cmd
from .commands.jump import jump_cmd
from .commands.config import config_cmd


def _print_and_exit(text):
    def callback(ctx, param, value):
        if not value or ctx.resilient_parsing:
            return
        click.echo(text, nl=False)
        ctx.exit()
    return callback


@click.group()
@click.version_option(package_name="seidr")
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False),
              help='The config file to use (default: ~/.config/seidr/config.yaml)')
@click.option('-q', '--quiet', is_flag=True, envvar='SEIDR_QUIET',
              help='Only report errors')
@click.option('--no-emoji', is_flag=True, envvar='SEIDR_NO_EMOJI',
              help='Plain text status markers')
@click.option('-f', '--force', is_flag=True, envvar='SEIDR_FORCE',
              help='Replace conflicting link targets')
@click.option('--backup', is_flag=True, envvar='SEIDR_BACKUP',
              help='With --force, keep replaced files as .bak')
@click.option('--unlink', is_flag=True, envvar='SEIDR_UNLINK',
              help='Remove declared links instead of creating them')
@click.option('-j', '--parallel', type=click.IntRange(min=1), default=1, show_default=True,
              envvar='SEIDR_PARALLEL', help='Repositories to process concurrently')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              envvar='SEIDR_TIMEOUT', help='Kill a git step after this many seconds')
@click.option('--strict', is_flag=True, envvar='SEIDR_STRICT',
              help='Exit non-zero when any step or link fails')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--license', is_flag=True, expose_value=False, is_eager=True,
              callback=_print_and_exit(INTERACTIVE_LICENSE), help='Print license information')
@click.option('--warranty', is_flag=True, expose_value=False, is_eager=True,
              callback=_print_and_exit(INTERACTIVE_WARRANTY), help='Print warranty information')
@click.pass_context
def cli(ctx, config_path, quiet, no_emoji, force, backup, unlink, parallel, timeout, strict, debug):
    """seidr - GitOps for the masses.

    A GitOps and symlink farm orchestrator inspired by GNU Stow. Every
    command works on all repositories or links declared in the config.

    \b
    Short aliases:
        l link   q quick   f fast   c clone   p pull
        a add    ct commit   m commit-msg   ps push   j jump
    """
    if debug:
        configure_logging(logging.DEBUG)
    elif quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging()

    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['settings'] = RunSettings(
        quiet=quiet,
        emoji=not no_emoji,
        force=force,
        unlink=unlink,
        backup=backup,
        parallel=parallel,
        timeout=timeout,
        strict=strict,
    )


def add_alias(group, command, alias):
    """Register a hidden short alias for ``command``."""
    aliased = copy.copy(command)
    aliased.name = alias
    aliased.hidden = True
    group.add_command(aliased, name=alias)


COMMANDS = [
    (link_cmd, 'l'),
    (quick_cmd, 'q'),
    (fast_cmd, 'f'),
    (clone_cmd, 'c'),
    (pull_cmd, 'p'),
    (add_cmd, 'a'),
    (commit_cmd, 'ct'),
    (commit_msg_cmd, 'm'),
    (push_cmd, 'ps'),
    (jump_cmd, 'j'),
]

for _command, _alias in COMMANDS:
    cli.add_command(_command)
    add_alias(cli, _command, _alias)

cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
