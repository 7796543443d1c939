"""Tests for change-set resolution and its fallback chain."""

import pytest

from punchtrunk.exceptions import ChangeSetError, DeadlineExceeded, VcsError, VcsErrorKind
from punchtrunk.hotspots.changeset import diff_attempts, parse_name_only, resolve_changed_files
from punchtrunk.vcs import GitClient


def no_history(args=("diff",)):
    return VcsError(VcsErrorKind.NO_HISTORY, list(args), stderr="fatal: bad revision")


def failure(args=("diff",)):
    return VcsError(VcsErrorKind.FAILED, list(args), stderr="fatal: something broke")


class TestDiffAttempts:
    def test_base_ref_first(self):
        assert diff_attempts("origin/main") == [
            "origin/main...HEAD",
            "HEAD~1...HEAD",
            "HEAD^..HEAD",
        ]

    def test_blank_base_skipped(self):
        assert diff_attempts("   ") == ["HEAD~1...HEAD", "HEAD^..HEAD"]
        assert diff_attempts(None) == ["HEAD~1...HEAD", "HEAD^..HEAD"]


class TestParseNameOnly:
    def test_nul_separated_paths_verbatim(self):
        output = "a.go\0 lead space.go\0tab\there.go\0"
        assert parse_name_only(output) == frozenset({"a.go", " lead space.go", "tab\there.go"})

    def test_strips_and_drops_blanks(self):
        assert parse_name_only("a.go\n\n  b.go  \n") == frozenset({"a.go", "b.go"})


class TestResolveChangedFiles:
    def test_first_attempt_wins(self, fake_vcs):
        vcs = fake_vcs(diffs=["a.go\nb.go\n"])
        result = resolve_changed_files(vcs, "origin/main")
        assert result.files == frozenset({"a.go", "b.go"})
        assert result.degraded is False
        assert vcs.diff_calls == ["origin/main...HEAD"]

    def test_falls_back_and_marks_degraded(self, fake_vcs):
        vcs = fake_vcs(diffs=[no_history(), "c.go\n"])
        result = resolve_changed_files(vcs, "origin/main")
        assert result.files == frozenset({"c.go"})
        assert result.degraded is True
        assert vcs.diff_calls == ["origin/main...HEAD", "HEAD~1...HEAD"]

    def test_all_no_history_returns_empty_degraded(self, fake_vcs):
        vcs = fake_vcs(diffs=[no_history(), no_history(), no_history()])
        result = resolve_changed_files(vcs, "origin/main")
        assert result.files == frozenset()
        assert result.degraded is True

    def test_last_failure_decides(self, fake_vcs):
        vcs = fake_vcs(diffs=[no_history(), no_history(), failure()])
        with pytest.raises(ChangeSetError):
            resolve_changed_files(vcs, "origin/main")

    def test_deadline_is_not_absorbed(self, fake_vcs):
        vcs = fake_vcs(diffs=[DeadlineExceeded("git diff", 5)])
        with pytest.raises(DeadlineExceeded):
            resolve_changed_files(vcs, "origin/main")

    def test_one_commit_repo_without_base(self, git_repo):
        git_repo.write("main.go", "package main\n")
        git_repo.commit("initial")
        result = resolve_changed_files(GitClient(git_repo.root), "origin/main")
        assert result.files == frozenset()
        assert result.degraded is True

    def test_two_commit_repo_uses_previous_commit(self, git_repo):
        git_repo.write("main.go", "package main\n")
        git_repo.write("util.go", "package main\n")
        git_repo.commit("initial")
        git_repo.write("main.go", "package main\n\nfunc main() {}\n")
        git_repo.commit("update main")
        result = resolve_changed_files(GitClient(git_repo.root), "")
        assert result.files == frozenset({"main.go"})
        assert result.degraded is False
