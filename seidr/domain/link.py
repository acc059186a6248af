"""
Link domain objects for seidr.

A Link declares that ``rx`` should be a symlink pointing at the existing
file ``tx``. The resolver reports what it found and what it did through
LinkState and LinkOutcome.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from .repository import string_field


@dataclass(frozen=True)
class Link:
    """A declared (tx, rx) symlink pair."""
    name: str
    tx: str
    rx: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'rx': self.rx, 'tx': self.tx}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "link") -> 'Link':
        return cls(
            name=string_field(data, 'name', where),
            tx=string_field(data, 'tx', where),
            rx=string_field(data, 'rx', where),
        )


class LinkState(Enum):
    """What currently occupies a link's ``rx`` path."""
    NOT_PRESENT = "not_present"
    ALREADY_LINKED = "already_linked"
    DIFFERENT_LINK = "different_link"
    BROKEN_SYMLINK_EXISTS = "broken_symlink_exists"
    FILE_EXISTS = "file_exists"
    IO_ERROR = "io_error"


class LinkOutcome(Enum):
    """Result of a link or unlink operation."""
    CREATED = "created"
    ALREADY_LINKED = "already_linked"
    REPLACED = "replaced"
    UNLINKED = "unlinked"
    NOT_LINKED = "not_linked"
    DIFFERENT_LINK = "different_link"
    BROKEN_SYMLINK_EXISTS = "broken_symlink_exists"
    FILE_EXISTS = "file_exists"
    IO_ERROR = "io_error"
    FAILED_CREATING_LINK = "failed_creating_link"

    @property
    def ok(self) -> bool:
        return self in _SUCCESSFUL_OUTCOMES


_SUCCESSFUL_OUTCOMES = frozenset({
    LinkOutcome.CREATED,
    LinkOutcome.ALREADY_LINKED,
    LinkOutcome.REPLACED,
    LinkOutcome.UNLINKED,
    LinkOutcome.NOT_LINKED,
})

_UNLINK_OUTCOMES = frozenset({LinkOutcome.UNLINKED, LinkOutcome.NOT_LINKED})

_MESSAGES = {
    LinkOutcome.CREATED: "linked",
    LinkOutcome.ALREADY_LINKED: "file already linked",
    LinkOutcome.REPLACED: "existing file replaced by link",
    LinkOutcome.UNLINKED: "link removed",
    LinkOutcome.NOT_LINKED: "nothing to unlink",
    LinkOutcome.DIFFERENT_LINK: "link to different file exists",
    LinkOutcome.BROKEN_SYMLINK_EXISTS: "broken symlink",
    LinkOutcome.FILE_EXISTS: "file exists",
    LinkOutcome.IO_ERROR: "could not inspect target",
    LinkOutcome.FAILED_CREATING_LINK: "failed creating link",
}


@dataclass(frozen=True)
class LinkResult:
    """Outcome of resolving a single link."""
    category: str
    link: Link
    outcome: LinkOutcome
    error: Optional[str] = None
    backup_path: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def message(self) -> str:
        verb = "Unlinking" if self.outcome in _UNLINK_OUTCOMES else "Linking"
        joiner = ":" if self.ok else " failed:"
        text = f"{verb} {self.link.tx} -> {self.link.rx}{joiner} {_MESSAGES[self.outcome]}"
        if self.error:
            text += f" ({self.error})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'type': 'link',
            'category': self.category,
            'name': self.link.name,
            'tx': self.link.tx,
            'rx': self.link.rx,
            'outcome': self.outcome.value,
            'ok': self.ok,
        }
        if self.error:
            result['error'] = self.error
        if self.backup_path:
            result['backup'] = self.backup_path
        return result
