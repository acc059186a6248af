"""
Per-kind repository validators.

Each RepoKind maps to one validator. Only plain git repositories are
supported; the hosted-provider kinds are declared in the schema but have
no validator yet and are rejected when a config uses them.
"""

import os
from typing import Callable, Dict, List

from .repository import Repository, RepoKind


class UnsupportedKindError(Exception):
    """Raised when a repository kind has no validator."""

    def __init__(self, kind: RepoKind):
        super().__init__(f"repository kind {kind.value} is not implemented")
        self.kind = kind


def validate_git_repo(repo: Repository) -> List[str]:
    """Return the problems found in a plain git repository entry."""
    problems = []
    if not repo.name:
        problems.append("name is empty")
    elif os.sep in repo.name:
        problems.append(f"name {repo.name!r} contains a path separator")
    if not repo.path:
        problems.append("path is empty")
    elif not repo.path.endswith(os.sep):
        problems.append(f"path {repo.path!r} must end with {os.sep!r}")
    if not repo.url:
        problems.append("url is empty")
    return problems


def _unimplemented(kind: RepoKind) -> Callable[[Repository], List[str]]:
    def validator(repo: Repository) -> List[str]:
        raise UnsupportedKindError(kind)
    return validator


VALIDATORS: Dict[RepoKind, Callable[[Repository], List[str]]] = {
    RepoKind.GIT_REPO: validate_git_repo,
    RepoKind.GITHUB_REPO: _unimplemented(RepoKind.GITHUB_REPO),
    RepoKind.GITLAB_REPO: _unimplemented(RepoKind.GITLAB_REPO),
    RepoKind.GITEA_REPO: _unimplemented(RepoKind.GITEA_REPO),
    RepoKind.URL_REPO: _unimplemented(RepoKind.URL_REPO),
    RepoKind.LINK: _unimplemented(RepoKind.LINK),
}


def validate(repo: Repository) -> List[str]:
    """
    Validate a repository with the validator for its kind.

    Returns:
        List of human-readable problems (empty when valid)

    Raises:
        UnsupportedKindError: if the kind has no validator
    """
    return VALIDATORS[repo.kind](repo)
