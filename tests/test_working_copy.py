"""Tests for working copy preparation and revert branches."""

import os

import pytest

from revert_agent.errors import ConfigurationError, OperationError
from revert_agent.models import (
    CallerSupplied,
    Managed,
    RepositoryRef,
    WorkingCopyHandle,
    revert_branch_name,
)
from revert_agent.pipeline.working_copy import WorkingCopyManager


FORK = RepositoryRef("alice", "r", "git@github.com:alice/r.git")


class TestRevertBranchName:
    """Tests for revert branch naming."""

    def test_format(self):
        """Given a PR number and time, should name the branch revert-<n>-<ms>."""
        assert revert_branch_name(7, clock=lambda: 1700000000.5) == "revert-7-1700000000500"

    def test_distinct_across_milliseconds(self):
        """Given two calls more than a millisecond apart, should produce distinct names."""
        # Given
        times = iter([1700000000.000, 1700000000.002])

        # When
        first = revert_branch_name(42, clock=lambda: next(times))
        second = revert_branch_name(42, clock=lambda: next(times))

        # Then
        assert first != second


class TestPrepare:
    """Tests for WorkingCopyManager.prepare."""

    def test_caller_supplied_handle_is_used_verbatim(self, git, merged_pr):
        """Given a local checkout, should not clone or add remotes."""
        # Given
        handle = WorkingCopyHandle("/src/r", upstream_remote="upstream", fork_remote="mine")

        # When
        copy = WorkingCopyManager(git).prepare(merged_pr, None, handle)

        # Then
        assert copy == CallerSupplied(handle)
        assert copy.owned is False
        assert git.commands == []

    def test_managed_clone(self, git, merged_pr):
        """Given no local checkout, should clone upstream at the base branch and add the fork remote."""
        # Given
        manager = WorkingCopyManager(git)

        # When
        copy = manager.prepare(merged_pr, FORK)

        # Then
        try:
            assert isinstance(copy, Managed)
            assert copy.owned is True
            assert os.path.basename(copy.temp_dir).startswith("revert_agent_")
            assert git.commands == [
                ("clone", "https://github.com/o/r.git", "main", copy.temp_dir),
                ("add_remote", copy.temp_dir, "fork", FORK.url),
            ]
            assert copy.handle == WorkingCopyHandle(copy.temp_dir, "origin", "fork")
        finally:
            manager.cleanup(copy)

    def test_failed_clone_removes_temp_dir(self, git, merged_pr, monkeypatch, tmp_path):
        """Given a failing clone, should raise OperationError and leave no temp dir behind."""
        # Given
        git.fail_on["clone"] = 128
        target = tmp_path / "clone"
        target.mkdir()
        monkeypatch.setattr("tempfile.mkdtemp", lambda prefix: str(target))

        # When/Then
        with pytest.raises(OperationError):
            WorkingCopyManager(git).prepare(merged_pr, FORK)

        assert not target.exists()

    def test_custom_upstream_url_template(self, git, merged_pr):
        """Given a GitHub Enterprise template, should clone from it."""
        # Given
        manager = WorkingCopyManager(git, upstream_url_template="https://ghe.example.com/{owner}/{repo}.git")

        # When
        copy = manager.prepare(merged_pr, FORK)

        # Then
        manager.cleanup(copy)
        assert git.commands[0][1] == "https://ghe.example.com/o/r.git"

    def test_unknown_template_field_creates_no_temp_dir(self, git, merged_pr, monkeypatch):
        """Given a template with an unknown field, should raise ConfigurationError before cloning."""
        # Given
        created = []
        monkeypatch.setattr("tempfile.mkdtemp", lambda prefix: created.append(prefix) or "/nonexistent")
        manager = WorkingCopyManager(git, upstream_url_template="https://ghe.example.com/{org}/{repo}.git")

        # When/Then
        with pytest.raises(ConfigurationError):
            manager.prepare(merged_pr, FORK)

        assert created == []
        assert git.commands == []


class TestCreateBranch:
    """Tests for revert branch creation."""

    def test_fetches_then_branches_from_upstream_base(self, git, merged_pr):
        # Given
        handle = WorkingCopyHandle("/src/r", upstream_remote="upstream", fork_remote="mine")
        manager = WorkingCopyManager(git, clock=lambda: 1.5)

        # When
        branch = manager.create_branch(handle, merged_pr)

        # Then
        assert branch == "revert-7-1500"
        assert git.commands == [
            ("fetch", "/src/r", "upstream"),
            ("create_branch", "/src/r", "revert-7-1500", "upstream/main"),
        ]

    def test_fetch_failure_is_fatal(self, git, merged_pr):
        """Given a failing fetch, should not try to branch."""
        # Given
        git.fail_on["fetch"] = 1

        # When/Then
        with pytest.raises(OperationError):
            WorkingCopyManager(git).create_branch(WorkingCopyHandle("/src/r"), merged_pr)

        assert git.names() == ["fetch"]


class TestCleanup:
    """Tests for working copy cleanup."""

    def test_caller_supplied_is_never_removed(self, git, tmp_path):
        # Given
        checkout = tmp_path / "checkout"
        checkout.mkdir()

        # When
        WorkingCopyManager(git).cleanup(CallerSupplied(WorkingCopyHandle(str(checkout))))

        # Then
        assert checkout.exists()

    def test_managed_is_removed(self, git, tmp_path):
        # Given
        clone = tmp_path / "clone"
        (clone / ".git").mkdir(parents=True)

        # When
        WorkingCopyManager(git).cleanup(Managed(WorkingCopyHandle(str(clone)), str(clone)))

        # Then
        assert not clone.exists()
