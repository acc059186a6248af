"""
Tests for the git client.

The Python interpreter stands in for the git binary so exit codes,
output and timeouts can be controlled without a real repository.
"""

import sys

import pytest

from seidr.infra.git_client import GitClient, GitResult


@pytest.fixture
def fake_git():
    return GitClient(binary=sys.executable)


class TestGitClient:
    """Tests for GitClient.run."""

    def test_success(self, fake_git, tmp_path):
        result = fake_git.run(["-c", "print('Already up to date.')"], cwd=str(tmp_path))
        assert result.ok
        assert result.returncode == 0
        assert result.stdout.strip() == "Already up to date."
        assert result.error is None

    def test_runs_in_cwd(self, fake_git, tmp_path):
        result = fake_git.run(["-c", "import os; print(os.getcwd())"], cwd=str(tmp_path))
        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_nonzero_exit(self, fake_git, tmp_path):
        script = "import sys; sys.stderr.write('hint: x\\nfatal: not a git repository\\n'); sys.exit(128)"
        result = fake_git.run(["-c", script], cwd=str(tmp_path))
        assert not result.ok
        assert result.spawned
        assert result.returncode == 128
        assert result.error == "exit 128: fatal: not a git repository"

    def test_timeout_kills_process(self, tmp_path):
        client = GitClient(binary=sys.executable, timeout=0.5)
        result = client.run(["-c", "import time; time.sleep(30)"], cwd=str(tmp_path))
        assert result.timed_out
        assert not result.ok
        assert result.error == "timed out"

    def test_missing_binary(self, tmp_path):
        client = GitClient(binary=str(tmp_path / "no-such-git"))
        result = client.run(["pull"], cwd=str(tmp_path))
        assert not result.spawned
        assert not result.ok
        assert result.error

    def test_missing_cwd(self, fake_git, tmp_path):
        """A working directory that does not exist is a spawn failure, not an exception."""
        result = fake_git.run(["-c", "pass"], cwd=str(tmp_path / "gone"))
        assert not result.spawned
        assert not result.ok

    def test_args_are_recorded(self, fake_git, tmp_path):
        result = fake_git.run(["-c", "pass"], cwd=str(tmp_path))
        assert result.args == ("-c", "pass")
        assert result.cwd == str(tmp_path)


class TestGitResult:

    def test_error_without_stderr(self):
        assert GitResult(args=("push",), cwd="/", returncode=1).error == "exit 1"
