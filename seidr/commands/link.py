"""
Link command for seidr.

Creates (or with --unlink removes) every symlink declared in the config.
"""

import click

from ..cli_utils import standard_command, open_seidr, get_settings, check_strict, json_option
from ..output import emit_one
from ..progress import StepReporter


@click.command('link')
@json_option
@click.pass_context
@standard_command
def link_cmd(ctx, output_json):
    """Link all declared links.

    \b
    An existing rx is never replaced unless --force is given:
        - a symlink to tx is left alone
        - a symlink elsewhere, a file, or a broken symlink is reported
    With --force --backup the replaced path is kept as rx.bak.
    """
    settings = get_settings(ctx)
    reporter = StepReporter(settings)
    sd = open_seidr(ctx)

    stream = sd.link_all()
    for result in stream:
        reporter.link_finished(result)
        if output_json:
            emit_one(result)

    summary = sd.link_service.last_result
    if output_json:
        emit_one(summary)
    elif not settings.quiet and summary.total > 1:
        reporter.console.print(reporter.summary_table(
            "link", summary.successful, summary.failed,
        ))

    check_strict(settings, "link", summary.successful, summary.failed)
