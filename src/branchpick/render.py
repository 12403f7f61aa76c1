"""Rendering of the selector state."""

from rich.console import Group
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from branchpick.selector import SelectorState

TITLE = "Select a branch"
NO_MATCHES = "No matches found."


def render_row(name: str, selected: bool) -> Text:
    """Render one branch row, marking the row under the cursor."""
    if selected:
        return Text(f"> {name}", style="bold bright_green", no_wrap=True, overflow="ellipsis")
    return Text(f"  {name}", no_wrap=True, overflow="ellipsis")


def render_filter(filter_text: str) -> Text:
    line = Text("Filter: ", style="grey50", no_wrap=True, overflow="ellipsis")
    line.append(filter_text, style="bright_white")
    return line


def render_view(state: SelectorState) -> Panel:
    """Render the filter line and the visible part of the list."""
    if state.matches:
        rows = [
            render_row(name, index == state.cursor)
            for index, name in enumerate(state.visible, start=state.visible_start)
        ]
    else:
        rows = [Text(NO_MATCHES, style="bright_red")]

    return Panel(
        Group(render_filter(state.filter_text), Rule(style="bright_cyan"), *rows),
        title=f"[bold bright_white]{TITLE}[/bold bright_white]",
        title_align="left",
        border_style="bright_cyan",
        padding=(0, 1),
    )
