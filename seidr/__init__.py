"""
seidr - declarative GitOps and symlink farm orchestrator.

A single YAML file declares git repositories, grouped into categories,
and the symlinks that should point into them. seidr clones, pulls,
commits and pushes those repositories and materializes the links.

Quick Start:
    import seidr

    sd = seidr.create()          # ~/.config/seidr/config.yaml

    for result in sd.clone_all():
        print(result.repo_name, result.ok)

    for result in sd.link_all():
        print(result.message)

Domain Objects:
    Config / Category - the declarative file
    Repository - a checkout plus its capability flags
    Link - a (tx, rx) symlink pair

Services:
    RepositoryActions - capability-gated git primitives
    PipelineRunner - ordered steps across all repositories
    LinkService - symlink classification and creation
"""

__version__ = "0.2.0"

from .api import Seidr, create

from .domain import (
    Config,
    Category,
    Repository,
    RepoFlag,
    RepoKind,
    Link,
    LinkState,
    LinkOutcome,
)

from .services import (
    RepositoryActions,
    PipelineRunner,
    FailurePolicy,
    LinkService,
)

from .config import RunSettings, load_config, save_config

__all__ = [
    "__version__",
    "Seidr",
    "create",
    "Config",
    "Category",
    "Repository",
    "RepoFlag",
    "RepoKind",
    "Link",
    "LinkState",
    "LinkOutcome",
    "RepositoryActions",
    "PipelineRunner",
    "FailurePolicy",
    "LinkService",
    "RunSettings",
    "load_config",
    "save_config",
]
