"""Interactive selection state machine.

The selector keeps the candidate list, the filter text, the cursor and the
scrolling viewport consistent with each other. All transitions go through
:func:`reduce`, which takes the current state and one event and returns the
next state. The state itself is immutable.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Union

# Panel top border with title, filter line, separator, panel bottom border
CHROME_ROWS = 4


class Status(Enum):
    """Selector status."""

    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Key(Enum):
    """Named keys the selector reacts to."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    INTERRUPT = "interrupt"
    BACKSPACE = "backspace"
    CLEAR_FILTER = "clear_filter"


@dataclass(frozen=True)
class Insert:
    """Text typed into the filter."""

    text: str


@dataclass(frozen=True)
class Resize:
    """Terminal geometry changed."""

    width: int
    height: int


Event = Union[Key, Insert, Resize]


@dataclass(frozen=True)
class SelectorState:
    """Snapshot of the selector.

    ``matches`` is the filtered view of ``candidates`` and the viewport is the
    half-open range ``[visible_start, visible_end)`` into ``matches``.
    """

    candidates: tuple[str, ...]
    matches: tuple[str, ...]
    page_size: int
    filter_text: str = ""
    cursor: int = 0
    visible_start: int = 0
    visible_end: int = 0
    status: Status = Status.RUNNING
    selected: Optional[str] = None

    @property
    def visible(self) -> tuple[str, ...]:
        """Rows inside the viewport."""
        return self.matches[self.visible_start : self.visible_end]

    @property
    def done(self) -> bool:
        return self.status is not Status.RUNNING


def page_size_for(height: int) -> int:
    """Number of list rows that fit in a terminal ``height`` rows tall."""
    return max(1, height - CHROME_ROWS)


def filter_branches(candidates: Sequence[str], text: str) -> tuple[str, ...]:
    """Keep candidates containing ``text``, ignoring case, in their original order."""
    if not text:
        return tuple(candidates)
    needle = text.lower()
    return tuple(name for name in candidates if needle in name.lower())


def create_state(candidates: Sequence[str], height: int) -> SelectorState:
    """Build the initial state for a terminal ``height`` rows tall."""
    items = tuple(candidates)
    page_size = page_size_for(height)
    return normalize(
        SelectorState(
            candidates=items,
            matches=items,
            page_size=page_size,
            visible_end=min(page_size, len(items)),
        )
    )


def normalize(state: SelectorState) -> SelectorState:
    """Restore the cursor and viewport invariants.

    The cursor is clamped before the viewport, since the viewport is placed
    around the cursor.
    """
    count = len(state.matches)
    if count == 0:
        return replace(state, cursor=0, visible_start=0, visible_end=0)

    page = state.page_size
    cursor = 0 if state.cursor >= count else max(0, state.cursor)
    end = min(state.visible_end, count)
    start = max(0, min(state.visible_start, end - page))

    # Keep the cursor inside the window and fill the window as far as possible
    if cursor < start:
        start = cursor
    elif cursor >= end:
        start = max(0, cursor + 1 - page)
    end = min(count, start + page)
    start = max(0, min(start, end - page))

    return replace(state, cursor=cursor, visible_start=start, visible_end=end)


def _move_up(state: SelectorState) -> SelectorState:
    cursor = max(0, state.cursor - 1)
    if cursor < state.visible_start:
        return replace(state, cursor=cursor, visible_start=cursor, visible_end=cursor + state.page_size)
    return replace(state, cursor=cursor)


def _move_down(state: SelectorState) -> SelectorState:
    cursor = max(0, min(len(state.matches) - 1, state.cursor + 1))
    if cursor >= state.visible_end:
        end = cursor + 1
        return replace(state, cursor=cursor, visible_start=end - state.page_size, visible_end=end)
    return replace(state, cursor=cursor)


def _resize(state: SelectorState, height: int) -> SelectorState:
    page_size = page_size_for(height)
    return replace(
        state,
        page_size=page_size,
        visible_start=0,
        visible_end=min(page_size, len(state.matches)),
    )


def _set_filter(state: SelectorState, text: str) -> SelectorState:
    return replace(state, filter_text=text, matches=filter_branches(state.candidates, text))


def _confirm(state: SelectorState) -> SelectorState:
    if not state.matches:
        return replace(state, status=Status.CANCELLED)
    return replace(state, status=Status.CONFIRMED, selected=state.matches[state.cursor])


def reduce(state: SelectorState, event: Event) -> SelectorState:
    """Apply one event and return the next normalized state.

    Events arriving after the selector has been confirmed or cancelled are
    ignored.
    """
    if state.done:
        return state

    if event is Key.INTERRUPT:
        return replace(state, status=Status.CANCELLED)
    if event is Key.ENTER:
        return _confirm(state)

    if event is Key.UP:
        state = _move_up(state)
    elif event is Key.DOWN:
        state = _move_down(state)
    elif event is Key.BACKSPACE:
        state = _set_filter(state, state.filter_text[:-1])
    elif event is Key.CLEAR_FILTER:
        state = _set_filter(state, "")
    elif isinstance(event, Insert):
        state = _set_filter(state, state.filter_text + event.text)
    elif isinstance(event, Resize):
        state = _resize(state, event.height)

    return normalize(state)
