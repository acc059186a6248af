"""
Infrastructure layer for seidr.

Contains abstractions for external systems:
- GitClient: git command execution

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, GitResult

__all__ = [
    'GitClient',
    'GitResult',
]
