"""
Link service for seidr.

Materializes declared links as symlinks. Before touching anything the
state of ``rx`` is classified, and every conflicting or ambiguous state is
rejected rather than overwritten: the file at ``rx`` is usually a real
dotfile. Replacing a conflicting ``rx`` only happens when the caller asks
for it with ``force``.
"""

import errno
import logging
import os
import stat
from typing import Generator, Optional, Tuple

from ..domain.config import Config
from ..domain.link import Link, LinkState, LinkOutcome, LinkResult
from ..domain.operation import LinkSummary

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"

_MISSING_ERRNOS = (errno.ENOENT, errno.ENOTDIR, errno.ELOOP)

_STATE_OUTCOMES = {
    LinkState.ALREADY_LINKED: LinkOutcome.ALREADY_LINKED,
    LinkState.DIFFERENT_LINK: LinkOutcome.DIFFERENT_LINK,
    LinkState.BROKEN_SYMLINK_EXISTS: LinkOutcome.BROKEN_SYMLINK_EXISTS,
    LinkState.FILE_EXISTS: LinkOutcome.FILE_EXISTS,
    LinkState.IO_ERROR: LinkOutcome.IO_ERROR,
}


def classify(link: Link) -> Tuple[LinkState, Optional[str]]:
    """
    Classify what currently occupies ``link.rx``.

    Never modifies the filesystem.

    Returns:
        (state, error) where error is set only for IO_ERROR
    """
    try:
        st = os.lstat(link.rx)
    except OSError as e:
        if e.errno in (errno.ENOENT, errno.ENOTDIR):
            return LinkState.NOT_PRESENT, None
        return LinkState.IO_ERROR, str(e)

    if not stat.S_ISLNK(st.st_mode):
        return LinkState.FILE_EXISTS, None

    try:
        os.stat(link.rx)
    except OSError as e:
        if e.errno in _MISSING_ERRNOS:
            return LinkState.BROKEN_SYMLINK_EXISTS, None
        return LinkState.IO_ERROR, str(e)

    try:
        same = os.path.realpath(link.rx) == os.path.realpath(link.tx)
    except OSError as e:
        return LinkState.IO_ERROR, str(e)
    return (LinkState.ALREADY_LINKED if same else LinkState.DIFFERENT_LINK), None


def backup_path_for(rx: str) -> str:
    """First free ``rx.bak``, ``rx.bak.1``, ... path."""
    candidate = rx + BACKUP_SUFFIX
    counter = 0
    while os.path.lexists(candidate):
        counter += 1
        candidate = f"{rx}{BACKUP_SUFFIX}.{counter}"
    return candidate


class LinkService:
    """
    Service for creating and removing declared symlinks.

    Example:
        service = LinkService()

        for result in service.link_all(config):
            print(result.message)

        summary = service.last_result
        print(f"{summary.failed} links failed")
    """

    def __init__(self):
        self.last_result: Optional[LinkSummary] = None

    def _create(self, link: Link, category: str, outcome: LinkOutcome,
                backup: Optional[str] = None) -> LinkResult:
        if not os.path.lexists(link.tx):
            logger.warning(f"Link source {link.tx} does not exist, link will dangle")
        try:
            os.symlink(link.tx, link.rx)
        except OSError as e:
            logger.error(f"Linking {link.tx} -> {link.rx} failed: {e}")
            return LinkResult(category, link, LinkOutcome.FAILED_CREATING_LINK,
                              error=str(e), backup_path=backup)
        return LinkResult(category, link, outcome, backup_path=backup)

    def _replace(self, link: Link, category: str, state: LinkState,
                 backup: bool) -> LinkResult:
        """Move or remove a conflicting ``rx`` and link in its place."""
        moved_to = None
        try:
            if backup:
                moved_to = backup_path_for(link.rx)
                os.rename(link.rx, moved_to)
                logger.info(f"Moved {link.rx} to {moved_to}")
            elif state == LinkState.FILE_EXISTS and os.path.isdir(link.rx):
                return LinkResult(category, link, LinkOutcome.FILE_EXISTS,
                                  error="refusing to delete a directory, use backup")
            else:
                os.unlink(link.rx)
                logger.info(f"Removed {link.rx}")
        except OSError as e:
            logger.error(f"Could not clear {link.rx}: {e}")
            return LinkResult(category, link, LinkOutcome.IO_ERROR, error=str(e))

        return self._create(link, category, LinkOutcome.REPLACED, backup=moved_to)

    def link(self, link: Link, category: str = "", force: bool = False,
             backup: bool = False) -> LinkResult:
        """
        Make ``link.rx`` a symlink to ``link.tx``.

        Args:
            link: Link to materialize
            category: Category name, for reporting
            force: Replace a different symlink or an existing file
            backup: With force, move the replaced path aside instead of
                deleting it

        Returns:
            LinkResult; ALREADY_LINKED is a successful no-op
        """
        state, error = classify(link)

        if state == LinkState.NOT_PRESENT:
            result = self._create(link, category, LinkOutcome.CREATED)
        elif force and state in (LinkState.DIFFERENT_LINK, LinkState.FILE_EXISTS):
            result = self._replace(link, category, state, backup)
        else:
            result = LinkResult(category, link, _STATE_OUTCOMES[state], error=error)

        if result.outcome == LinkOutcome.ALREADY_LINKED:
            logger.debug(result.message)
        elif not result.ok:
            logger.error(result.message)
        return result

    def unlink(self, link: Link, category: str = "") -> LinkResult:
        """
        Remove ``link.rx`` if, and only if, it is a symlink to ``link.tx``.
        """
        state, error = classify(link)

        if state == LinkState.NOT_PRESENT:
            return LinkResult(category, link, LinkOutcome.NOT_LINKED)
        if state != LinkState.ALREADY_LINKED:
            result = LinkResult(category, link, _STATE_OUTCOMES[state], error=error)
            logger.error(result.message)
            return result

        try:
            os.unlink(link.rx)
        except OSError as e:
            logger.error(f"Could not remove {link.rx}: {e}")
            return LinkResult(category, link, LinkOutcome.IO_ERROR, error=str(e))
        return LinkResult(category, link, LinkOutcome.UNLINKED)

    def link_all(
        self,
        config: Config,
        force: bool = False,
        backup: bool = False,
        unlink: bool = False,
    ) -> Generator[LinkResult, None, LinkSummary]:
        """
        Resolve every link in every category.

        One link's failure never blocks another.

        Yields:
            LinkResult per declared link

        Returns:
            LinkSummary with counts
        """
        summary = LinkSummary()
        self.last_result = summary

        for category, link in config.iter_links():
            if unlink:
                result = self.unlink(link, category)
            else:
                result = self.link(link, category, force=force, backup=backup)
            summary.add_detail(result)
            yield result

        return summary
