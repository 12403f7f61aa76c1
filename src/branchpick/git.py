"""Git repository operations."""

import logging
from pathlib import Path
from typing import Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)

# Upper bound on branches taken from the reflog
MAX_RECENT_BRANCHES = 17

CHECKOUT_PREFIX = "checkout: moving from "


class GitError(Exception):
    """Git operation error."""


def checkout_target(subject: str) -> Optional[str]:
    """Branch switched to by a reflog subject, or None for other entries.

    Only subjects of the form ``checkout: moving from <old> to <new>`` count.
    """
    if not subject.startswith(CHECKOUT_PREFIX):
        return None
    _, sep, target = subject[len(CHECKOUT_PREFIX) :].rpartition(" to ")
    target = target.strip()
    if not sep or not target:
        return None
    return target


def collect_recent_branches(switched: list[str], current: str, limit: int = MAX_RECENT_BRANCHES) -> list[str]:
    """Deduplicate recently checked-out branch names.

    Args:
        switched: Checkout targets, most recent first, possibly repeated
        current: Branch to leave out of the result
        limit: Maximum number of names to return

    Returns:
        Distinct branch names in first-seen order
    """
    branches: list[str] = []
    seen: set[str] = set()
    for branch in switched:
        if branch == current or branch in seen:
            continue
        seen.add(branch)
        branches.append(branch)
        if len(branches) >= limit:
            break
    return branches


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
            if self.repo.bare:
                raise GitError("Cannot operate on bare repository")
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err

    def current_branch_name(self) -> str:
        """Get current branch name, or an empty string on detached HEAD."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            # Detached HEAD has no branch to exclude
            return ""
        except (GitCommandError, ValueError) as err:
            logger.debug("Could not determine current branch: %s", err)
            return ""

    def recently_switched_branches(self) -> list[str]:
        """Get branches HEAD was switched to, most recent first.

        Names may repeat and may include the current branch.
        """
        try:
            output = self.repo.git.reflog("show", "--pretty=format:%gs")
        except GitCommandError as err:
            logger.debug("git reflog failed: %s", err)
            return []
        targets = (checkout_target(line) for line in output.splitlines())
        return [target for target in targets if target]

    def all_branch_names(self) -> list[str]:
        """Get all local branch names in git's default order."""
        try:
            output = self.repo.git.branch("--format=%(refname:short)")
        except GitCommandError as err:
            logger.debug("git branch failed: %s", err)
            return []
        return [branch.strip() for branch in output.splitlines() if branch.strip()]

    def load_branches(self) -> list[str]:
        """Get the candidate branches to offer, most likely first.

        Recently checked-out branches come first, capped at
        ``MAX_RECENT_BRANCHES``. Without any switch history this falls back
        to every local branch. The current branch is never included.
        """
        current = self.current_branch_name()
        branches = collect_recent_branches(self.recently_switched_branches(), current)
        if branches:
            logger.debug("Loaded %d branches from reflog", len(branches))
            return branches

        branches = []
        for branch in self.all_branch_names():
            if branch != current and branch not in branches:
                branches.append(branch)
        logger.debug("No switch history, loaded %d branches from refs", len(branches))
        return branches

    def is_dirty(self) -> bool:
        """Check if any tracked file has uncommitted modifications."""
        try:
            return self.repo.is_dirty(index=True, working_tree=True, untracked_files=False)
        except GitCommandError as err:
            logger.debug("git status check failed: %s", err)
            return False

    def stash(self) -> None:
        """Stash uncommitted changes.

        Raises:
            GitError: If git refuses to stash
        """
        try:
            self.repo.git.stash("push")
        except GitCommandError as err:
            raise GitError(f"Failed to stash changes: {err}") from err

    def checkout(self, branch_name: str) -> None:
        """Switch the working tree to ``branch_name``.

        Raises:
            GitError: If the checkout fails
        """
        try:
            self.repo.git.checkout(branch_name)
        except GitCommandError as err:
            raise GitError(f"Failed to checkout branch {branch_name}: {err}") from err
