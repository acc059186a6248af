"""
Pipeline runner for seidr.

Applies an ordered list of named steps to every repository of every
category. Two failure policies are supported:

- CONTINUE ("all on all"): every step runs for every repository, failures
  are only reported.
- STOP ("series on all"): the first failing step abandons the remaining
  steps for that repository; other repositories are unaffected.

Repositories can be processed concurrently, but the steps of a single
repository always run in order on one worker.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, List, Optional, Sequence, Tuple

from ..domain.config import Config
from ..domain.repository import Repository
from ..domain.operation import OperationSummary, StepResult

logger = logging.getLogger(__name__)

# (repository, category name) -> result
StepAction = Callable[[Repository, str], StepResult]


class FailurePolicy(Enum):
    """What to do with the remaining steps of a repository after a failure."""
    CONTINUE = "continue"
    STOP = "stop"


@dataclass(frozen=True)
class Step:
    """A named operation applied to one repository."""
    name: str
    action: StepAction


class PipelineRunner:
    """
    Runs step pipelines across all repositories in a Config.

    ``run`` is a generator: it yields each StepResult as it completes and
    returns the OperationSummary, which is also kept on ``last_result``.

    Example:
        runner = PipelineRunner(parallel=4)
        steps = [Step("pull", actions.pull), Step("push", actions.push)]

        for result in runner.run(config, steps, FailurePolicy.STOP, "sync"):
            print(result.repo_name, result.operation, result.ok)

        print(f"{runner.last_result.failed} steps failed")
    """

    def __init__(
        self,
        parallel: int = 1,
        cancel_event: Optional[threading.Event] = None,
        on_step_start: Optional[Callable[[str, Repository, str], None]] = None,
    ):
        """
        Initialize PipelineRunner.

        Args:
            parallel: Number of repositories processed concurrently
            cancel_event: Event that, once set, prevents further steps
                from starting
            on_step_start: Called with (category, repository, step name)
                before a step runs
        """
        self.parallel = max(1, parallel)
        self.cancel_event = cancel_event or threading.Event()
        self.on_step_start = on_step_start
        self.last_result: Optional[OperationSummary] = None

    def cancel(self) -> None:
        """
        Stop starting new steps in the current run. Running git processes
        are left to finish.
        """
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def _iter_repo(
        self,
        category: str,
        repo: Repository,
        steps: Sequence[Step],
        policy: FailurePolicy,
        aborted: List[int],
    ) -> Generator[StepResult, None, None]:
        """Run the steps of one repository in order."""
        for index, step in enumerate(steps):
            if self.cancelled:
                return
            if self.on_step_start:
                self.on_step_start(category, repo, step.name)

            result = step.action(repo, category)
            yield result

            if not result.ok and policy == FailurePolicy.STOP:
                remaining = len(steps) - index - 1
                if remaining:
                    logger.info(
                        f"{repo.name}: {step.name} did not succeed, "
                        f"skipping {', '.join(s.name for s in steps[index + 1:])}"
                    )
                aborted[0] += remaining
                return

    def _run_repo(
        self,
        category: str,
        repo: Repository,
        steps: Sequence[Step],
        policy: FailurePolicy,
    ) -> Tuple[List[StepResult], int]:
        aborted = [0]
        results = list(self._iter_repo(category, repo, steps, policy, aborted))
        return results, aborted[0]

    def run(
        self,
        config: Config,
        steps: Sequence[Step],
        policy: FailurePolicy = FailurePolicy.CONTINUE,
        operation: str = "",
    ) -> Generator[StepResult, None, OperationSummary]:
        """
        Apply ``steps`` to every repository in ``config``.

        Categories without repositories contribute no work. A cancellation
        applies to one run only: the event is cleared once the run ends, so
        the runner can be used again.

        Yields:
            StepResult for each step that ran

        Returns:
            OperationSummary with counts and details
        """
        summary = OperationSummary(
            operation=operation or "+".join(s.name for s in steps)
        )
        self.last_result = summary
        repos = list(config.iter_repos())

        try:
            if not repos:
                logger.debug("No repositories declared, nothing to do")
            elif self.parallel > 1 and len(repos) > 1:
                yield from self._run_parallel(repos, steps, policy, summary)
            else:
                yield from self._run_sequential(repos, steps, policy, summary)
        finally:
            summary.cancelled = self.cancelled
            self.cancel_event.clear()
        return summary

    def _run_sequential(
        self,
        repos: List[Tuple[str, Repository]],
        steps: Sequence[Step],
        policy: FailurePolicy,
        summary: OperationSummary,
    ) -> Generator[StepResult, None, None]:
        for category, repo in repos:
            if self.cancelled:
                break
            aborted = [0]
            for result in self._iter_repo(category, repo, steps, policy, aborted):
                summary.add_detail(result)
                yield result
            summary.aborted += aborted[0]

    def _run_parallel(
        self,
        repos: List[Tuple[str, Repository]],
        steps: Sequence[Step],
        policy: FailurePolicy,
        summary: OperationSummary,
    ) -> Generator[StepResult, None, None]:
        workers = min(self.parallel, len(repos))
        logger.debug(f"Running {len(repos)} repositories on {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self._run_repo, category, repo, steps, policy): repo
                for category, repo in repos
            }
            try:
                for future in as_completed(futures):
                    results, aborted = future.result()
                    summary.aborted += aborted
                    for result in results:
                        summary.add_detail(result)
                        yield result
            except BaseException:
                # let running steps finish, start no new ones
                self.cancel()
                raise
