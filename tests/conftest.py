"""
Shared fixtures for seidr tests.
"""

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from seidr.domain import Config, Category, Repository, RepoFlag
from seidr.infra.git_client import GitClient, GitResult


class RecordingGitClient(GitClient):
    """
    Stands in for the git binary: records every invocation instead of
    spawning a process.

    ``fail_when`` receives (args, cwd) and returns True to simulate a
    non-zero exit.
    """

    def __init__(self, fail_when: Optional[Callable[[Tuple[str, ...], str], bool]] = None):
        super().__init__()
        self.calls: List[Tuple[Tuple[str, ...], str]] = []
        self.fail_when = fail_when

    def run(self, args: Sequence[str], cwd: str) -> GitResult:
        args = tuple(args)
        self.calls.append((args, cwd))
        if self.fail_when and self.fail_when(args, cwd):
            return GitResult(args=args, cwd=cwd, returncode=1, stderr="fatal: simulated")
        return GitResult(args=args, cwd=cwd, returncode=0)

    def subcommands(self) -> List[str]:
        return [args[0] for args, _ in self.calls]


@pytest.fixture
def git_spy():
    return RecordingGitClient()


def make_repo(name: str, path: str = "/tmp/", flags=None, url: Optional[str] = None) -> Repository:
    return Repository(
        name=name,
        path=path,
        url=url or f"git@example.com:me/{name}.git",
        flags=None if flags is None else tuple(flags),
    )


def make_config(**categories) -> Config:
    """make_config(dots=[repo, ...]) -> Config with one category per keyword."""
    return Config(categories={
        name: Category(repos={repo.name: repo for repo in repos})
        for name, repos in categories.items()
    })


ALL_FLAGS = (RepoFlag.CLONE, RepoFlag.PULL, RepoFlag.ADD, RepoFlag.COMMIT, RepoFlag.PUSH)
