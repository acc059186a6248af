"""
Progress reporting for seidr.

Shows a spinner per repository step on stderr and persists the outcome
of each step or link as one line, keeping stdout clean for data.
"""

import threading
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from .config import RunSettings
from .domain import Repository, StepResult, LinkResult
from .domain.operation import OperationStatus

EMOJI_MARKS = {
    OperationStatus.SUCCESS: "✔",
    OperationStatus.FAILED: "❎",
    OperationStatus.DENIED: "➖",
}

PLAIN_MARKS = {
    OperationStatus.SUCCESS: "ok",
    OperationStatus.FAILED: "FAIL",
    OperationStatus.DENIED: "skip",
}

_STYLES = {
    OperationStatus.SUCCESS: "green",
    OperationStatus.FAILED: "red",
    OperationStatus.DENIED: "dim",
}


class StepReporter:
    """
    Reports step and link outcomes.

    Spinners are only shown on a terminal and when repositories run one
    at a time; otherwise each outcome is printed as a plain line.
    """

    def __init__(self, settings: Optional[RunSettings] = None,
                 console: Optional[Console] = None):
        self.settings = settings or RunSettings()
        self.console = console or Console(stderr=True)
        self.marks = EMOJI_MARKS if self.settings.emoji else PLAIN_MARKS
        self.animate = (
            self.console.is_terminal
            and self.settings.parallel <= 1
            and not self.settings.quiet
        )
        self._status: Optional[Status] = None
        self._lock = threading.Lock()

    def _stop_spinner(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def step_started(self, category: str, repo: Repository, operation: str) -> None:
        """Start a spinner keyed by repository and operation name."""
        if not self.animate:
            return
        with self._lock:
            self._stop_spinner()
            self._status = self.console.status(f"{repo.name}: {operation}", spinner="dots")
            self._status.start()

    def step_finished(self, result: StepResult) -> None:
        """Replace the spinner with the step's outcome."""
        with self._lock:
            self._stop_spinner()
            if self.settings.quiet:
                return
            mark = self.marks[result.status]
            line = f"[{_STYLES[result.status]}]{mark}[/] {escape(result.repo_name)}: {result.operation}"
            if result.error:
                line += f" [dim]({escape(result.error)})[/dim]"
            self.console.print(line, highlight=False)

    def link_finished(self, result: LinkResult) -> None:
        if self.settings.quiet:
            return
        status = OperationStatus.SUCCESS if result.ok else OperationStatus.FAILED
        self.console.print(
            f"[{_STYLES[status]}]{self.marks[status]}[/] {escape(result.message)}",
            highlight=False,
        )

    def close(self) -> None:
        with self._lock:
            self._stop_spinner()

    def summary_table(self, title: str, successful: int, failed: int,
                      denied: int = 0, aborted: int = 0) -> Table:
        """Build a small summary table for the end of a batch run."""
        table = Table(title=title, show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")
        table.add_row("Succeeded", str(successful))
        table.add_row("Failed", str(failed))
        if denied:
            table.add_row("Not permitted", str(denied))
        if aborted:
            table.add_row("Skipped after failure", str(aborted))
        return table
