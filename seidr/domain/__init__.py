"""
Domain layer for seidr.

Contains pure domain objects with no I/O or side effects:
- Repository: a declared checkout and its capability flags
- Link: a declared (tx, rx) symlink pair
- Category / Config: the aggregate read from the config file
- StepResult / OperationSummary: results of batch operations
"""

from .repository import Repository, RepoFlag, RepoKind
from .link import Link, LinkState, LinkOutcome, LinkResult
from .config import Category, Config
from .operation import OperationStatus, StepResult, OperationSummary, LinkSummary

__all__ = [
    'Repository',
    'RepoFlag',
    'RepoKind',
    'Link',
    'LinkState',
    'LinkOutcome',
    'LinkResult',
    'Category',
    'Config',
    'OperationStatus',
    'StepResult',
    'OperationSummary',
    'LinkSummary',
]
