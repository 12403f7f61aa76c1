"""Interactive git branch switcher.

Features:
- Recently checked-out branches first, falling back to all local branches
- Live, case-insensitive filtering as you type
- Scrolling list that adapts to the terminal size
- Offers to stash uncommitted changes before switching
"""

__version__ = "0.1.0"
