"""
Git client infrastructure for seidr.

Provides a thin abstraction over the external git executable.
All git invocations go through this client, making them:
- Easy to replace with a spy in tests
- Consistent in how spawn failures and timeouts are reported
- Independent of the process-wide current directory
"""

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitResult:
    """Result of one git invocation."""
    args: Tuple[str, ...]
    cwd: str
    returncode: int
    stdout: str = ""
    stderr: str = ""
    spawned: bool = True
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """True only if the process ran to completion with status 0."""
        return self.spawned and not self.timed_out and self.returncode == 0

    @property
    def error(self) -> Optional[str]:
        """Short description of why the invocation failed."""
        if self.ok:
            return None
        if not self.spawned:
            return self.stderr or "could not spawn git"
        if self.timed_out:
            return "timed out"
        lines = [line for line in self.stderr.strip().splitlines() if line.strip()]
        detail = lines[-1] if lines else ""
        return f"exit {self.returncode}" + (f": {detail}" if detail else "")


class GitClient:
    """
    Abstraction over git commands.

    Every call gets an explicit working directory; the client never
    changes the current directory of the process.

    Example:
        client = GitClient(timeout=60)
        result = client.run(["pull"], cwd="/home/me/.dots/")
        if result.ok:
            print("pulled")
    """

    def __init__(self, binary: str = "git", timeout: Optional[float] = None):
        """
        Initialize GitClient.

        Args:
            binary: Executable to invoke (default: "git")
            timeout: Per-invocation timeout in seconds; the subprocess is
                killed when it expires (default: no limit)
        """
        self.binary = binary
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: str) -> GitResult:
        """
        Run ``git <args...>`` in ``cwd``.

        Never raises for process-level failures: a binary or directory
        that cannot be used is reported as ``spawned=False``.
        """
        cmd = [self.binary, *args]
        logger.debug(f"Running {' '.join(cmd)} in {cwd}")

        try:
            proc = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            # subprocess.run kills the child before re-raising
            logger.warning(f"Git command timed out after {self.timeout}s: {' '.join(cmd)}")
            return GitResult(args=tuple(args), cwd=cwd, returncode=-1, timed_out=True)
        except OSError as e:
            logger.warning(f"Could not run {' '.join(cmd)} in {cwd}: {e}")
            return GitResult(
                args=tuple(args), cwd=cwd, returncode=-1,
                stderr=str(e), spawned=False,
            )

        if proc.returncode != 0:
            logger.debug(f"{' '.join(cmd)} exited {proc.returncode}: {proc.stderr.strip()}")

        return GitResult(
            args=tuple(args),
            cwd=cwd,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
