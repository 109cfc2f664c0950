"""Tests for seeding new worktrees"""
import os
from pathlib import Path

import pytest

from sprout.exceptions import CopyError
from sprout.services.seed_service import LocalFileSystem, SeedService


@pytest.fixture
def repo(temp_dir):
    root = temp_dir / "repo"
    root.mkdir()
    return root


@pytest.fixture
def worktree(temp_dir):
    root = temp_dir / "worktree"
    root.mkdir()
    return root


def reasons(result):
    return dict(result.skipped)


class TestSeedFiles:
    """Test copying regular files."""

    def test_copies_file_with_parents(self, repo, worktree):
        (repo / "config").mkdir()
        (repo / "config" / "local.yml").write_text("debug: true\n")

        result = SeedService().seed(repo, worktree, ["config/local.yml"])

        assert (worktree / "config" / "local.yml").read_text() == "debug: true\n"
        assert result.copied == ["config/local.yml"]
        assert result.skipped == []

    def test_existing_destination_file_is_not_overwritten(self, repo, worktree):
        (repo / ".env").write_text("SECRET=new\n")
        (worktree / ".env").write_text("SECRET=old\n")

        result = SeedService().seed(repo, worktree, [".env"])

        assert (worktree / ".env").read_text() == "SECRET=old\n"
        assert reasons(result) == {".env": "destination already exists"}

    def test_missing_source_is_skipped(self, repo, worktree):
        (repo / ".env").write_text("A=1\n")
        result = SeedService().seed(repo, worktree, ["missing.txt", ".env"])
        assert "missing.txt" in reasons(result)
        assert result.copied == [".env"]

    def test_absolute_entry_is_skipped(self, repo, worktree, temp_dir):
        outside = temp_dir / "outside.txt"
        outside.write_text("x")
        result = SeedService().seed(repo, worktree, [str(outside)])
        assert reasons(result) == {str(outside): "absolute paths are not allowed"}
        assert list(worktree.iterdir()) == []

    def test_escaping_entry_is_skipped(self, repo, worktree, temp_dir):
        (temp_dir / "outside.txt").write_text("x")
        result = SeedService().seed(repo, worktree, ["../outside.txt", "a/../../outside.txt"])
        assert len(result.skipped) == 2
        assert result.copied == []

    def test_empty_entry_is_skipped(self, repo, worktree):
        (repo / "file").write_text("x")
        result = SeedService().seed(repo, worktree, ["", "."])
        assert result.copied == []
        assert len(result.skipped) == 2

    def test_entry_resolving_to_repo_root_is_skipped(self, repo, worktree):
        (repo / "a").mkdir()
        (repo / "untracked.bin").write_text("big")
        result = SeedService().seed(repo, worktree, ["a/..", "./", "a/./.."])
        assert result.copied == []
        assert set(reasons(result).values()) == {"empty path"}
        assert list(worktree.iterdir()) == []


class TestSeedSymlinks:
    """Test that symlinks are never copied."""

    def test_symlinked_file_is_skipped(self, repo, worktree):
        (repo / "real.txt").write_text("secret")
        (repo / "secrets.txt").symlink_to(repo / "real.txt")

        result = SeedService().seed(repo, worktree, ["secrets.txt"])

        assert not os.path.lexists(worktree / "secrets.txt")
        assert reasons(result) == {"secrets.txt": "symlinks are not copied"}

    def test_symlinked_directory_is_skipped(self, repo, worktree):
        (repo / "real").mkdir()
        (repo / "real" / "f").write_text("x")
        (repo / "linked").symlink_to(repo / "real", target_is_directory=True)

        result = SeedService().seed(repo, worktree, ["linked"])

        assert not os.path.lexists(worktree / "linked")
        assert result.copied == []

    def test_symlink_inside_directory_is_skipped(self, repo, worktree):
        (repo / "dir").mkdir()
        (repo / "dir" / "keep.txt").write_text("keep")
        (repo / "dir" / "link.txt").symlink_to(repo / "dir" / "keep.txt")

        result = SeedService().seed(repo, worktree, ["dir"])

        assert (worktree / "dir" / "keep.txt").read_text() == "keep"
        assert not os.path.lexists(worktree / "dir" / "link.txt")
        assert reasons(result) == {os.path.join("dir", "link.txt"): "symlinks are not copied"}

    def test_entry_through_symlinked_parent_is_skipped(self, repo, worktree, temp_dir):
        elsewhere = temp_dir / "elsewhere"
        elsewhere.mkdir()
        (elsewhere / "f.txt").write_text("x")
        (repo / "via").symlink_to(elsewhere, target_is_directory=True)

        result = SeedService().seed(repo, worktree, ["via/f.txt"])

        assert result.copied == []
        assert not os.path.lexists(worktree / "via")


class TestSeedDirectories:
    """Test recursive directory seeding."""

    def test_copies_tree(self, repo, worktree):
        (repo / ".vscode" / "nested").mkdir(parents=True)
        (repo / ".vscode" / "settings.json").write_text("{}")
        (repo / ".vscode" / "nested" / "a.txt").write_text("a")
        (repo / ".vscode" / "empty").mkdir()

        result = SeedService().seed(repo, worktree, [".vscode"])

        assert (worktree / ".vscode" / "settings.json").read_text() == "{}"
        assert (worktree / ".vscode" / "nested" / "a.txt").read_text() == "a"
        assert (worktree / ".vscode" / "empty").is_dir()
        assert sorted(result.copied) == sorted([
            os.path.join(".vscode", "nested", "a.txt"),
            os.path.join(".vscode", "settings.json"),
        ])

    def test_existing_directory_is_merged(self, repo, worktree):
        (repo / "conf").mkdir()
        (repo / "conf" / "a").write_text("new a")
        (repo / "conf" / "b").write_text("new b")
        (worktree / "conf").mkdir()
        (worktree / "conf" / "a").write_text("old a")

        result = SeedService().seed(repo, worktree, ["conf"])

        assert (worktree / "conf" / "a").read_text() == "old a"
        assert (worktree / "conf" / "b").read_text() == "new b"
        assert result.copied == [os.path.join("conf", "b")]
        assert os.path.join("conf", "a") in reasons(result)

    def test_directory_over_existing_file_is_skipped(self, repo, worktree):
        (repo / "conf").mkdir()
        (repo / "conf" / "a").write_text("a")
        (worktree / "conf").write_text("i am a file")

        result = SeedService().seed(repo, worktree, ["conf"])

        assert (worktree / "conf").read_text() == "i am a file"
        assert "conf" in reasons(result)


class FailingFileSystem(LocalFileSystem):
    """Local filesystem whose copies always fail."""

    def copy_file(self, source: Path, destination: Path) -> None:
        raise PermissionError(13, "Permission denied", str(destination))


class TestSeedFailures:
    """Test structural I/O failures."""

    def test_copy_failure_raises_copy_error(self, repo, worktree):
        (repo / "dir").mkdir()
        (repo / "dir" / "f.txt").write_text("x")

        with pytest.raises(CopyError) as exc_info:
            SeedService(fs=FailingFileSystem()).seed(repo, worktree, ["dir"])
        assert exc_info.value.path == os.path.join("dir", "f.txt")
        assert "Permission denied" in str(exc_info.value)
