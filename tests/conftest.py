"""Shared test fixtures for PunchTrunk tests."""

import shutil
import subprocess
from pathlib import Path

import pytest

GIT_AVAILABLE = shutil.which("git") is not None

requires_git = pytest.mark.skipif(not GIT_AVAILABLE, reason="git not found")


class GitRepo:
    """Throwaway repository driven through the git CLI."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", "-C", str(self.root), *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def write(self, rel_path: str, content) -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    def commit(self, message: str) -> str:
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository with a committer identity configured."""
    if not GIT_AVAILABLE:
        pytest.skip("git not found")
    root = tmp_path / "repo"
    root.mkdir()
    repo = GitRepo(root)
    repo.git("init", "-q")
    repo.git("config", "user.email", "test@test.com")
    repo.git("config", "user.name", "Test")
    repo.git("config", "commit.gpgsign", "false")
    return repo


class FakeVcs:
    """Scripted VersionControl: each call pops the next canned outcome.

    Outcomes are strings (stdout) or exceptions (raised).
    """

    def __init__(self, diffs=None, logs=None):
        self.diffs = list(diffs or [])
        self.logs = list(logs or [])
        self.diff_calls = []
        self.log_calls = []

    def diff_name_only(self, revspec):
        self.diff_calls.append(revspec)
        return self._next(self.diffs)

    def log_numstat(self, since=None):
        self.log_calls.append(since)
        return self._next(self.logs)

    @staticmethod
    def _next(outcomes):
        outcome = outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_vcs():
    return FakeVcs
