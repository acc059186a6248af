"""
Operation result domain objects for seidr.

Every git step run against a repository produces a StepResult; a batch
operation across the whole config collects them in an OperationSummary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional


class OperationStatus(Enum):
    """Status of an individual step."""
    SUCCESS = "success"
    FAILED = "failed"
    DENIED = "denied"  # capability flag missing, nothing was run


@dataclass
class StepResult:
    """
    Result of one operation on one repository.

    ``ok`` is the boolean success signal consumed by the pipeline: only
    SUCCESS counts, a DENIED step is reported as not performed.
    """
    category: str
    repo_name: str
    operation: str
    status: OperationStatus
    workdir: str = ""
    message: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'type': 'step',
            'category': self.category,
            'name': self.repo_name,
            'operation': self.operation,
            'status': self.status.value,
            'ok': self.ok,
        }
        if self.workdir:
            result['workdir'] = self.workdir
        if self.message:
            result['message'] = self.message
        if self.error:
            result['error'] = self.error
        return result


@dataclass
class OperationSummary:
    """
    Summary of a batch operation across all repositories.

    ``aborted`` counts steps skipped because an earlier step of the same
    repository failed under the stop-on-error policy.
    """
    operation: str
    total: int = 0
    successful: int = 0
    failed: int = 0
    denied: int = 0
    aborted: int = 0
    cancelled: bool = False
    details: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every step that was attempted succeeded."""
        return self.failed == 0 and self.denied == 0 and not self.cancelled

    def add_detail(self, detail: StepResult) -> None:
        """Add a step result and update counts."""
        self.details.append(detail)
        self.total += 1

        if detail.status == OperationStatus.SUCCESS:
            self.successful += 1
        elif detail.status == OperationStatus.DENIED:
            self.denied += 1
        else:
            self.failed += 1
            self.errors.append(
                f"{detail.repo_name}: {detail.operation}: {detail.error or 'failed'}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'summary',
            'operation': self.operation,
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
            'denied': self.denied,
            'aborted': self.aborted,
            'cancelled': self.cancelled,
            'errors': self.errors,
        }


@dataclass
class LinkSummary:
    """Summary of a link_all run."""
    total: int = 0
    successful: int = 0
    failed: int = 0
    details: List[Any] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0

    def add_detail(self, detail) -> None:
        self.details.append(detail)
        self.total += 1
        if detail.ok:
            self.successful += 1
        else:
            self.failed += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'summary',
            'operation': 'link',
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
        }
