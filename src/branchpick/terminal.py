"""Terminal event loop for the branch selector."""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

import readchar
from rich.console import Console
from rich.live import Live

from branchpick.logging import hold_output
from branchpick.render import render_view
from branchpick.selector import Event, Insert, Key, Resize, SelectorState, create_state, reduce

logger = logging.getLogger(__name__)

KEY_EVENTS = {
    readchar.key.UP: Key.UP,
    readchar.key.DOWN: Key.DOWN,
    readchar.key.ENTER: Key.ENTER,
    readchar.key.CR: Key.ENTER,
    readchar.key.LF: Key.ENTER,
    readchar.key.BACKSPACE: Key.BACKSPACE,
    readchar.key.CTRL_H: Key.BACKSPACE,
    readchar.key.CTRL_C: Key.INTERRUPT,
    readchar.key.CTRL_U: Key.CLEAR_FILTER,
}


def translate_key(key: str) -> Optional[Event]:
    """Map a key read from the terminal to a selector event.

    Returns ``None`` for keys the selector does not handle.
    """
    event = KEY_EVENTS.get(key)
    if event is not None:
        return event
    if key and key.isprintable():
        return Insert(key)
    return None


class Selector:
    """Runs the selector until a branch is confirmed or the user cancels.

    Terminal size is checked after every key. On platforms with ``SIGWINCH``
    a resize is also applied and redrawn while the loop is waiting for input.
    """

    def __init__(
        self,
        branches: Sequence[str],
        console: Console,
        read_key: Callable[[], str] = readchar.readkey,
        screen: bool = True,
    ) -> None:
        self.console = console
        self.read_key = read_key
        self.screen = screen
        self._size = console.size
        self._live: Optional[Live] = None
        self._waiting = False
        self.state: SelectorState = create_state(branches, self._size.height)

    def dispatch(self, event: Event) -> None:
        self.state = reduce(self.state, event)

    def redraw(self) -> None:
        if self._live is not None:
            self._live.update(render_view(self.state), refresh=True)

    def _check_resize(self) -> bool:
        size = self.console.size
        if size == self._size:
            return False
        logger.debug("Terminal resized to %dx%d", size.width, size.height)
        self._size = size
        self.dispatch(Resize(size.width, size.height))
        return True

    def _on_resize_signal(self, signum: int, frame: object) -> None:
        # Outside read_key the loop itself polls the size after the current key
        if self._waiting and self._check_resize():
            self.redraw()

    @contextmanager
    def _resize_signal(self) -> Iterator[None]:
        if not hasattr(signal, "SIGWINCH") or threading.current_thread() is not threading.main_thread():
            yield
            return
        previous = signal.signal(signal.SIGWINCH, self._on_resize_signal)
        try:
            yield
        finally:
            signal.signal(signal.SIGWINCH, previous)

    def _next_event(self) -> Optional[Event]:
        self._waiting = True
        try:
            key = self.read_key()
        except (KeyboardInterrupt, EOFError):
            return Key.INTERRUPT
        finally:
            self._waiting = False
        return translate_key(key)

    def run(self) -> SelectorState:
        """Process input until the selector reaches a final status."""
        live = Live(
            render_view(self.state),
            console=self.console,
            auto_refresh=False,
            screen=self.screen,
            transient=True,
        )
        with hold_output(), live, self._resize_signal():
            self._live = live
            try:
                while not self.state.done:
                    event = self._next_event()
                    resized = self._check_resize()
                    if event is not None:
                        self.dispatch(event)
                    elif not resized:
                        continue
                    self.redraw()
            finally:
                self._live = None
        logger.debug("Selector finished with status %s", self.state.status.value)
        return self.state


def select_branch(branches: Sequence[str], console: Console) -> SelectorState:
    """Let the user pick one of ``branches`` interactively."""
    return Selector(branches, console).run()
