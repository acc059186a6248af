"""
Common CLI utilities and decorators for consistent command behavior.
"""

import logging
import sys
import click
from functools import wraps

from .api import Seidr
from .config import RunSettings, load_config
from .exit_codes import (
    INTERRUPTED, CommandError, PartialSuccessError, get_exit_code_for_exception,
)
from .output import emit_error, emit_one
from .progress import StepReporter

logger = logging.getLogger(__name__)


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - CommandError subclasses exit with their own code
    - Ctrl+C exits with 130
    - Any other exception exits with its mapped code instead of a traceback
    - Errors are reported as JSON on stderr
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            emit_error("Interrupted by user", type="interrupted")
            sys.exit(INTERRUPTED)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except CommandError as e:
            context = None
            if isinstance(e, PartialSuccessError):
                context = {'succeeded': e.succeeded, 'failed': e.failed}
            emit_error(str(e), type=type(e).__name__, context=context)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            emit_error(str(e), type=type(e).__name__)
            sys.exit(get_exit_code_for_exception(e))
    return wrapper


def get_settings(ctx: click.Context) -> RunSettings:
    return ctx.obj['settings']


def open_seidr(ctx: click.Context, reporter: StepReporter = None) -> Seidr:
    """
    Load the config selected on the command line.

    Raises:
        ConfigError: if the config cannot be loaded
    """
    config = load_config(ctx.obj.get('config_path'))
    return Seidr(
        config,
        settings=get_settings(ctx),
        on_step_start=reporter.step_started if reporter else None,
    )


def check_strict(settings: RunSettings, operation: str, succeeded: int, failed: int) -> None:
    """In strict mode, turn any failure into a non-zero exit."""
    if settings.strict and failed:
        raise PartialSuccessError(
            f"{operation}: {failed} failed, {succeeded} succeeded",
            succeeded=succeeded,
            failed=failed,
        )


def run_steps(ctx: click.Context, operation, output_json: bool) -> None:
    """
    Run a batch git operation and report every step.

    Args:
        ctx: Click context carrying settings and config path
        operation: Callable taking a Seidr and returning its step stream
        output_json: Emit JSONL on stdout
    """
    settings = get_settings(ctx)
    reporter = StepReporter(settings)
    sd = open_seidr(ctx, reporter)

    stream = operation(sd)
    try:
        for result in stream:
            reporter.step_finished(result)
            if output_json:
                emit_one(result)
    except KeyboardInterrupt:
        sd.cancel()
        raise
    finally:
        reporter.close()

    summary = sd.runner.last_result
    if output_json:
        emit_one(summary)
    elif not settings.quiet and summary.total > 1:
        reporter.console.print(reporter.summary_table(
            summary.operation, summary.successful, summary.failed,
            summary.denied, summary.aborted,
        ))

    check_strict(settings, summary.operation, summary.successful, summary.failed)


def json_option(func):
    return click.option('--json', 'output_json', is_flag=True,
                        help='Output results as JSONL')(func)
