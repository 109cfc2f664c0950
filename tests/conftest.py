"""Pytest fixtures for sprout tests"""
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import git
import pytest

from sprout.config import ConfigStore
from sprout.core import WorktreeManager
from sprout.exceptions import GitOperationError
from sprout.models.worktree import Metadata
from sprout.paths import SproutPaths
from sprout.services.metadata_store import MetadataStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def sprout_paths(temp_dir, monkeypatch):
    """Sprout root inside the temp directory, also exported as SPROUT_HOME."""
    root = temp_dir / "sprout-home"
    monkeypatch.setenv("SPROUT_HOME", str(root))
    return SproutPaths(root)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


class InMemoryMetadataStore(MetadataStore):
    """Metadata store that keeps a copy of the collection in memory."""

    def __init__(self, metadata: Optional[Metadata] = None):
        self.metadata = Metadata(list(metadata.worktrees)) if metadata else Metadata()
        self.save_count = 0

    def load(self) -> Metadata:
        return Metadata(list(self.metadata.worktrees))

    def save(self, metadata: Metadata) -> None:
        self.metadata = Metadata(list(metadata.worktrees))
        self.save_count += 1


class FakeWorktreeService:
    """Stands in for WorktreeService without running git.

    add_worktree creates the directory so canonicalization works;
    remove_worktree deletes it.
    """

    def __init__(self, repo_root: Path):
        self.root = repo_root
        self.timestamps: Dict[str, Optional[int]] = {}
        self.added: List[tuple] = []
        self.removed: List[tuple] = []
        self.fail_remove = False
        self.fail_add = False

    def repo_root(self, cwd=None) -> Path:
        return self.root

    def add_worktree(self, repo_root, branch, path) -> None:
        if self.fail_add:
            raise GitOperationError("worktree add", status=128, stderr="fatal: branch exists")
        Path(path).mkdir(parents=True)
        self.added.append((Path(repo_root), branch, Path(path)))

    def remove_worktree(self, repo_root, path, force=False) -> None:
        if self.fail_remove:
            raise GitOperationError(
                "worktree remove", status=128, stderr="fatal: contains modified or untracked files"
            )
        self.removed.append((str(repo_root), str(path), force))

    def last_commit_timestamp(self, path) -> Optional[int]:
        return self.timestamps.get(Path(path).name)


@pytest.fixture
def source_repo(temp_dir):
    """A plain directory playing the source repository for fake git."""
    repo = temp_dir / "source"
    repo.mkdir()
    return repo


@pytest.fixture
def fake_git(source_repo):
    return FakeWorktreeService(source_repo)


@pytest.fixture
def metadata_store():
    return InMemoryMetadataStore()


@pytest.fixture
def manager(sprout_paths, fake_git, metadata_store):
    """WorktreeManager wired to fake git and in-memory metadata."""
    return WorktreeManager(
        sprout_paths,
        git_service=fake_git,
        metadata_store=metadata_store,
        config_store=ConfigStore(sprout_paths.config_path),
        clock=lambda: 1700000000,
    )
