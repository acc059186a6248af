"""
Service layer for seidr.

Contains the logic that applies the config to the machine:
- RepositoryActions: capability-gated git primitives
- PipelineRunner: ordered steps across all repositories
- LinkService: symlink classification and creation

Services are the primary API for commands to use.
"""

from .actions_service import RepositoryActions
from .pipeline_service import PipelineRunner, Step, FailurePolicy
from .link_service import LinkService, classify

__all__ = [
    'RepositoryActions',
    'PipelineRunner',
    'Step',
    'FailurePolicy',
    'LinkService',
    'classify',
]
