"""
Repository domain object for seidr.

A Repository is one checkout declared in the config file. It carries the
capability flags that decide which git operations seidr may run in it.
Repositories are immutable for the duration of a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Tuple


class RepoFlag(Enum):
    """Capability tags a repository can carry."""
    CLONE = "Clone"
    PULL = "Pull"
    ADD = "Add"
    COMMIT = "Commit"
    PUSH = "Push"
    QUICK = "Quick"
    FAST = "Fast"


class RepoKind(Enum):
    """Kind of repository. Only GIT_REPO has a validator."""
    GIT_REPO = "GitRepo"
    GITHUB_REPO = "GitHubRepo"
    GITLAB_REPO = "GitLabRepo"
    GITEA_REPO = "GiteaRepo"
    URL_REPO = "UrlRepo"
    LINK = "Link"


# Shorthand flags that also grant an operation.
_GRANTED_BY = {
    RepoFlag.CLONE: frozenset(),
    RepoFlag.PULL: frozenset({RepoFlag.FAST}),
    RepoFlag.ADD: frozenset({RepoFlag.QUICK, RepoFlag.FAST}),
    RepoFlag.COMMIT: frozenset({RepoFlag.QUICK, RepoFlag.FAST}),
    RepoFlag.PUSH: frozenset({RepoFlag.QUICK, RepoFlag.FAST}),
}


def string_field(data: Dict[str, Any], key: str, where: str) -> str:
    """Fetch a required string field. A missing key raises KeyError."""
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be a mapping, got {type(data).__name__}")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key} must be a string, got {type(value).__name__}")
    return value


def parse_flags(values) -> Optional[Tuple[RepoFlag, ...]]:
    """Parse a list of flag names, keeping order. None stays None."""
    if values is None:
        return None
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"flags must be a list, got {type(values).__name__}")
    return tuple(RepoFlag(v) for v in values)


@dataclass(frozen=True)
class Repository:
    """
    Immutable representation of a declared git repository.

    ``path`` is the parent directory and is used verbatim: the working
    directory is ``path + name``, so ``path`` is expected to end with a
    separator.
    """
    name: str
    path: str
    url: str
    flags: Optional[Tuple[RepoFlag, ...]] = None
    kind: RepoKind = RepoKind.GIT_REPO

    @property
    def workdir(self) -> str:
        """Working directory of the checkout."""
        return f"{self.path}{self.name}"

    def permits(self, op: RepoFlag) -> bool:
        """
        Check whether this repository may perform ``op``.

        ``op`` must be one of Clone, Pull, Add, Commit or Push. Quick
        grants Add/Commit/Push, Fast additionally grants Pull. A
        repository without a flags collection permits nothing.
        """
        if self.flags is None:
            return False
        if op not in _GRANTED_BY:
            raise ValueError(f"{op.value} is not a primitive operation")
        held = set(self.flags)
        return op in held or bool(held & _GRANTED_BY[op])

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'name': self.name,
            'path': self.path,
            'url': self.url,
            'kind': self.kind.value,
        }
        if self.flags is not None:
            result['flags'] = [f.value for f in self.flags]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "repo") -> 'Repository':
        """
        Build a repository from its config mapping.

        Raises:
            KeyError: if name, path or url is missing
            ValueError: if one of them is not a string, or a flag or
                kind name is unknown
        """
        return cls(
            name=string_field(data, 'name', where),
            path=string_field(data, 'path', where),
            url=string_field(data, 'url', where),
            flags=parse_flags(data.get('flags')),
            kind=RepoKind(data.get('kind', RepoKind.GIT_REPO.value)),
        )
