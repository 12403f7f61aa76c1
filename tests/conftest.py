"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test User", "test@example.com")


def init_repo(path: Path) -> Repo:
    """Create a repository with one commit on ``main`` and no switch history."""
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    repo.config_writer().set_value("user", "email", AUTHOR.email).release()

    # Name the unborn branch directly so no checkout shows up in the reflog
    repo.git.symbolic_ref("HEAD", "refs/heads/main")

    readme = path / "README.md"
    readme.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit", author=AUTHOR, committer=AUTHOR)
    return repo


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[str], Repo]:
    """Factory for fresh repositories under ``tmp_path``."""

    def factory(name: str = "repo") -> Repo:
        return init_repo(tmp_path / name)

    return factory


@pytest.fixture
def fresh_repo(make_repo: Callable[[str], Repo]) -> Repo:
    """Repository with several branches but no checkout history."""
    repo = make_repo("fresh")
    for name in ("zeta", "alpha", "feature/login"):
        repo.create_head(name)
    return repo


@pytest.fixture
def test_repo(make_repo: Callable[[str], Repo]) -> Repo:
    """Repository whose reflog records a series of branch switches.

    Switch order: main -> feature/login -> feature/search -> main -> hotfix
    -> feature/login -> main. The repository ends on ``main``.
    """
    repo = make_repo("switched")
    for name in ("feature/login", "feature/search", "hotfix", "stale"):
        repo.create_head(name)
    for name in ("feature/login", "feature/search", "main", "hotfix", "feature/login", "main"):
        repo.git.checkout(name)
    return repo


@pytest.fixture
def repo_path(test_repo: Repo) -> Path:
    return Path(test_repo.working_tree_dir)
