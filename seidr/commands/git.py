"""
Git batch commands for seidr.

Each command applies one git operation, or the quick/fast sequence, to
every repository declared in the config. A repository without the
matching capability flag is skipped and reported as not permitted.
"""

import click

from ..api import DEFAULT_QUICK_MESSAGE, DEFAULT_FAST_MESSAGE
from ..cli_utils import standard_command, run_steps, json_option


@click.command('clone')
@json_option
@click.pass_context
@standard_command
def clone_cmd(ctx, output_json):
    """Clone all repositories."""
    run_steps(ctx, lambda sd: sd.clone_all(), output_json)


@click.command('pull')
@json_option
@click.pass_context
@standard_command
def pull_cmd(ctx, output_json):
    """Pull all repositories."""
    run_steps(ctx, lambda sd: sd.pull_all(), output_json)


@click.command('add')
@json_option
@click.pass_context
@standard_command
def add_cmd(ctx, output_json):
    """Add all files in repositories."""
    run_steps(ctx, lambda sd: sd.add_all(), output_json)


@click.command('commit')
@json_option
@click.pass_context
@standard_command
def commit_cmd(ctx, output_json):
    """Perform a git commit in all repositories.

    git opens the configured editor for the message of each commit.
    """
    run_steps(ctx, lambda sd: sd.commit_all(), output_json)


@click.command('commit-msg')
@click.argument('msg')
@json_option
@click.pass_context
@standard_command
def commit_msg_cmd(ctx, msg, output_json):
    """Perform a git commit in all repositories with MSG."""
    run_steps(ctx, lambda sd: sd.commit_all_msg(msg), output_json)


@click.command('push')
@json_option
@click.pass_context
@standard_command
def push_cmd(ctx, output_json):
    """Push all repositories."""
    run_steps(ctx, lambda sd: sd.push_all(), output_json)


@click.command('quick')
@click.argument('msg', required=False, default=DEFAULT_QUICK_MESSAGE)
@json_option
@click.pass_context
@standard_command
def quick_cmd(ctx, msg, output_json):
    """Pull, add, commit with MSG and push every repository.

    Every step is attempted even when an earlier one failed.
    """
    run_steps(ctx, lambda sd: sd.quick(msg), output_json)


@click.command('fast')
@click.argument('msg', required=False, default=DEFAULT_FAST_MESSAGE)
@json_option
@click.pass_context
@standard_command
def fast_cmd(ctx, msg, output_json):
    """Pull, add, commit with MSG and push every repository.

    A repository stops at its first failing step; the others continue.
    """
    run_steps(ctx, lambda sd: sd.fast(msg), output_json)
