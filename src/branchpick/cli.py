"""Command line interface for branchpick."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from branchpick import __version__
from branchpick.git import GitError, GitRepo
from branchpick.logging import configure_logging
from branchpick.selector import Status
from branchpick.terminal import select_branch

app = typer.Typer(help="Interactively pick a git branch and check it out")
console = Console()
logger = logging.getLogger(__name__)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


def confirm_stash() -> bool:
    """Ask whether to stash before switching. Anything but "n" means yes."""
    console.print("\n[bright_red]Your working directory has uncommitted changes.[/bright_red]")
    try:
        answer = input("Stash changes before switching? (Y/n): ")
    except (EOFError, KeyboardInterrupt):
        console.print()
        raise typer.Exit(code=0) from None
    return answer.strip().lower() != "n"


def switch_branch(repo: GitRepo, branch: str) -> None:
    """Check out ``branch``, offering to stash local changes first."""
    if repo.is_dirty():
        if not confirm_stash():
            console.print("\n[red]Branch switch canceled due to uncommitted changes.[/red]")
            raise typer.Exit(code=0)
        console.print("\n[bright_blue]Stashing changes...[/bright_blue]")
        try:
            repo.stash()
        except GitError as err:
            logger.debug("Stash failed", exc_info=True)
            console.print(f"[red]{escape(str(err))}[/red]\n[red]Aborting branch switch.[/red]")
            raise typer.Exit(code=1) from err

    console.print(f"\n[bright_green]Switching to branch: {escape(branch)}...[/bright_green]")
    try:
        repo.checkout(branch)
    except GitError as err:
        logger.debug("Checkout failed", exc_info=True)
        console.print(f"[red]{escape(str(err))}[/red]")
        raise typer.Exit(code=1) from err


def version_callback(value: bool) -> None:
    if value:
        print(f"branchpick {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    log_level: Annotated[
        str, typer.Option("--log-level", envvar="BRANCHPICK_LOG_LEVEL", help="Diagnostic log level")
    ] = "WARNING",
    version: Annotated[
        Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version")
    ] = None,
) -> None:
    """Pick a recently used branch and switch to it."""
    configure_logging(log_level)
    repo = get_repo(path)

    branches = repo.load_branches()
    if not branches:
        console.print("\n[red]No branches found.[/red]")
        raise typer.Exit(code=1)

    result = select_branch(branches, console)
    if result.status is not Status.CONFIRMED or result.selected is None:
        logger.debug("Selection cancelled")
        return

    switch_branch(repo, result.selected)


if __name__ == "__main__":
    app()
