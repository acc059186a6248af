"""
Repository action set for seidr.

The primitive git operations run against a single repository. Each one
first checks the repository's capability flags: a repository that lacks
the flag is left alone and the step is reported as DENIED without
spawning anything.
"""

import logging
from typing import List, Optional

from ..domain.repository import Repository, RepoFlag
from ..domain.operation import OperationStatus, StepResult
from ..infra.git_client import GitClient

logger = logging.getLogger(__name__)


class RepositoryActions:
    """
    Primitive git operations gated by capability flags.

    Example:
        actions = RepositoryActions(GitClient())
        result = actions.pull(repo, category="dots")
        if result.ok:
            print(f"{repo.name} pulled")
    """

    def __init__(self, git_client: Optional[GitClient] = None):
        self.git = git_client or GitClient()

    def _run(
        self,
        repo: Repository,
        category: str,
        operation: str,
        flag: RepoFlag,
        args: List[str],
        cwd: str,
    ) -> StepResult:
        if not repo.permits(flag):
            logger.info(f"{repo.name} does not have the {flag.value} flag, not running {operation}")
            return StepResult(
                category=category,
                repo_name=repo.name,
                operation=operation,
                status=OperationStatus.DENIED,
                workdir=cwd,
                message=f"{flag.value} not permitted",
            )

        result = self.git.run(args, cwd=cwd)
        if result.ok:
            return StepResult(
                category=category,
                repo_name=repo.name,
                operation=operation,
                status=OperationStatus.SUCCESS,
                workdir=cwd,
                message=result.stdout.strip() or None,
            )

        logger.warning(f"{repo.name}: git {' '.join(args)} failed: {result.error}")
        return StepResult(
            category=category,
            repo_name=repo.name,
            operation=operation,
            status=OperationStatus.FAILED,
            workdir=cwd,
            error=result.error,
        )

    def clone(self, repo: Repository, category: str = "") -> StepResult:
        """Clone ``url`` into ``path`` under the directory ``name``."""
        return self._run(repo, category, "clone", RepoFlag.CLONE,
                         ["clone", repo.url, repo.name], cwd=repo.path)

    def pull(self, repo: Repository, category: str = "") -> StepResult:
        return self._run(repo, category, "pull", RepoFlag.PULL,
                         ["pull"], cwd=repo.workdir)

    def add_all(self, repo: Repository, category: str = "") -> StepResult:
        """Stage everything in the working tree."""
        return self._run(repo, category, "add", RepoFlag.ADD,
                         ["add", "."], cwd=repo.workdir)

    def commit(self, repo: Repository, category: str = "") -> StepResult:
        """Commit staged changes, letting git ask for the message."""
        return self._run(repo, category, "commit", RepoFlag.COMMIT,
                         ["commit"], cwd=repo.workdir)

    def commit_with_message(self, repo: Repository, msg: str, category: str = "") -> StepResult:
        return self._run(repo, category, "commit", RepoFlag.COMMIT,
                         ["commit", "-m", msg], cwd=repo.workdir)

    def push(self, repo: Repository, category: str = "") -> StepResult:
        return self._run(repo, category, "push", RepoFlag.PUSH,
                         ["push"], cwd=repo.workdir)
