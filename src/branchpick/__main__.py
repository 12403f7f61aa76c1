"""Module entrypoint for `python -m branchpick`."""

from branchpick.cli import app

if __name__ == "__main__":
    app(prog_name="branchpick")
