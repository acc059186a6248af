"""
High-level Python API for seidr.

Wraps a loaded Config with the batch operations the CLI exposes.

Example:
    import seidr

    sd = seidr.create("~/.config/seidr/config.yaml")

    # Batch operations stream results as they complete
    for result in sd.pull_all():
        print(result.repo_name, result.ok)
    print(sd.runner.last_result.failed, "pulls failed")

    # Pull, add, commit and push; stop per repo on the first failure
    for result in sd.fast("update dotfiles"):
        print(result.to_dict())

    # Materialize declared symlinks
    for result in sd.link_all():
        print(result.message)

    # Where does a repository live?
    print(sd.jump_repo("dots", "nvim"))
"""

from typing import Callable, Generator, Optional, Union
from pathlib import Path
import logging

from .config import RunSettings, load_config
from .domain import Config, Repository, StepResult, OperationSummary, LinkResult, LinkSummary
from .exit_codes import LookupFailedError
from .infra import GitClient
from .services import RepositoryActions, PipelineRunner, Step, FailurePolicy, LinkService

logger = logging.getLogger(__name__)

DEFAULT_QUICK_MESSAGE = "seidr: quick commit"
DEFAULT_FAST_MESSAGE = "seidr: fast commit"

StepStream = Generator[StepResult, None, OperationSummary]


class Seidr:
    """
    Batch operations over a Config.

    Git operations return generators of StepResult (the summary is the
    generator's return value and ``runner.last_result``); ``link_all``
    returns a generator of LinkResult.
    """

    def __init__(
        self,
        config: Config,
        settings: Optional[RunSettings] = None,
        git_client: Optional[GitClient] = None,
        on_step_start: Optional[Callable[[str, Repository, str], None]] = None,
    ):
        """
        Initialize Seidr.

        Args:
            config: Loaded config aggregate
            settings: Run settings (defaults if None)
            git_client: GitClient instance (creates one honoring
                ``settings.timeout`` if None)
            on_step_start: Callback invoked before each git step
        """
        self.config = config
        self.settings = settings or RunSettings()
        self._git_client = git_client or GitClient(timeout=self.settings.timeout)
        self.actions = RepositoryActions(self._git_client)
        self.runner = PipelineRunner(
            parallel=self.settings.parallel,
            on_step_start=on_step_start,
        )
        self.link_service = LinkService()

    def cancel(self) -> None:
        """Stop starting new steps in the running batch operation."""
        self.runner.cancel()

    def _all(self, step: Step) -> StepStream:
        return self.runner.run(self.config, [step], FailurePolicy.CONTINUE, step.name)

    def _sync_steps(self, msg: str):
        return [
            Step("pull", self.actions.pull),
            Step("add", self.actions.add_all),
            Step("commit", lambda repo, cat: self.actions.commit_with_message(repo, msg, cat)),
            Step("push", self.actions.push),
        ]

    # =========================================================================
    # GIT OPERATIONS
    # =========================================================================

    def clone_all(self) -> StepStream:
        """Clone every repository that has the Clone flag."""
        return self._all(Step("clone", self.actions.clone))

    def pull_all(self) -> StepStream:
        return self._all(Step("pull", self.actions.pull))

    def add_all(self) -> StepStream:
        return self._all(Step("add", self.actions.add_all))

    def commit_all(self) -> StepStream:
        return self._all(Step("commit", self.actions.commit))

    def commit_all_msg(self, msg: str) -> StepStream:
        return self._all(Step(
            "commit",
            lambda repo, cat: self.actions.commit_with_message(repo, msg, cat),
        ))

    def push_all(self) -> StepStream:
        return self._all(Step("push", self.actions.push))

    def quick(self, msg: str = DEFAULT_QUICK_MESSAGE) -> StepStream:
        """Pull, add, commit and push everything, continuing past failures."""
        return self.runner.run(self.config, self._sync_steps(msg), FailurePolicy.CONTINUE, "quick")

    def fast(self, msg: str = DEFAULT_FAST_MESSAGE) -> StepStream:
        """Pull, add, commit and push; a repository stops at its first failure."""
        return self.runner.run(self.config, self._sync_steps(msg), FailurePolicy.STOP, "fast")

    # =========================================================================
    # LINKS
    # =========================================================================

    def link_all(self) -> Generator[LinkResult, None, LinkSummary]:
        """Create (or with ``settings.unlink``, remove) every declared link."""
        return self.link_service.link_all(
            self.config,
            force=self.settings.force,
            backup=self.settings.backup,
            unlink=self.settings.unlink,
        )

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def jump_repo(self, category: str, name: str) -> str:
        """Working directory of a declared repository."""
        repo = self.config.get_repo(category, name)
        if repo is None:
            raise LookupFailedError(f"No repository {name!r} in category {category!r}")
        return repo.workdir

    def jump_link(self, category: str, name: str) -> str:
        """Symlink location (``rx``) of a declared link."""
        link = self.config.get_link(category, name)
        if link is None:
            raise LookupFailedError(f"No link {name!r} in category {category!r}")
        return link.rx


def create(
    config_path: Optional[Union[str, Path]] = None,
    settings: Optional[RunSettings] = None,
) -> Seidr:
    """
    Load the config file and build a Seidr instance.

    Raises:
        ConfigError: if the config cannot be loaded
    """
    return Seidr(load_config(config_path), settings=settings)
