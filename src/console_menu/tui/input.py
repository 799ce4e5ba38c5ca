"""
Keyboard event sources.

A ``KeySource`` delivers :class:`~console_menu.tui.keys.RawKeyEvent` objects
to subscribed handlers, one at a time, on the asyncio event loop.

Example:
    source = TerminalKeySource()
    token = source.subscribe(lambda event: print(event.raw_code))
    source.start()
    ...
    source.unsubscribe(token)
    source.stop()
"""

from __future__ import annotations

import asyncio
import itertools
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from console_menu.logging import get_logger
from console_menu.tui.keys import RawKeyEvent, decode_key, iter_key_sequences

logger = get_logger("tui.input")

KeyHandler = Callable[[RawKeyEvent], None]


class KeySource(ABC):
    """
    Base class for key event sources.

    Subclasses produce events and hand them to :meth:`dispatch`; handlers
    are called synchronously, in subscription order.
    """

    def __init__(self) -> None:
        self._handlers: dict[int, KeyHandler] = {}
        self._tokens = itertools.count(1)
        self._running = False

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, handler: KeyHandler) -> int:
        """Register *handler* and return a token for :meth:`unsubscribe`."""
        token = next(self._tokens)
        self._handlers[token] = handler
        return token

    def unsubscribe(self, token: int) -> None:
        """Remove the handler registered under *token*.  Unknown tokens are ignored."""
        self._handlers.pop(token, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def dispatch(self, event: RawKeyEvent) -> None:
        """Deliver *event* to every handler still subscribed when its turn comes."""
        for token in list(self._handlers):
            handler = self._handlers.get(token)
            if handler is not None:
                handler(event)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @abstractmethod
    def start(self) -> None:
        """Begin producing events."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop producing events and release any resource held."""
        ...


# ---------------------------------------------------------------------------
# Scripted source
# ---------------------------------------------------------------------------

class ScriptedKeySource(KeySource):
    """
    Replays a fixed sequence of events.

    After :meth:`start`, one event is dispatched per event loop iteration
    until the sequence is exhausted or :meth:`stop` is called.

    Parameters
    ----------
    events:
        The events to deliver, in order.
    """

    def __init__(self, events: Iterable[RawKeyEvent]) -> None:
        super().__init__()
        self._pending: list[RawKeyEvent] = list(events)
        self._delivered: list[RawKeyEvent] = []
        self._handle: asyncio.Handle | None = None

    @property
    def delivered(self) -> list[RawKeyEvent]:
        """Events dispatched so far."""
        return list(self._delivered)

    @property
    def remaining(self) -> list[RawKeyEvent]:
        return list(self._pending)

    def start(self) -> None:
        self._running = True
        self._schedule()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        if self._running and self._pending:
            self._handle = asyncio.get_running_loop().call_soon(self._deliver_next)
        else:
            self._handle = None

    def _deliver_next(self) -> None:
        self._handle = None
        if not self._running or not self._pending:
            return
        event = self._pending.pop(0)
        self._delivered.append(event)
        self.dispatch(event)
        self._schedule()


# ---------------------------------------------------------------------------
# Terminal source
# ---------------------------------------------------------------------------

class TerminalKeySource(KeySource):
    """
    Reads keys from a TTY in raw mode on the asyncio event loop.

    Echo, line buffering and signal keys are disabled while running, so
    Ctrl+C arrives as a key press instead of ``SIGINT``.  Output
    processing is left alone so newlines still return the carriage.
    The previous terminal attributes are restored by :meth:`stop`.

    Parameters
    ----------
    input:
        Readable stream backed by a TTY, defaults to ``sys.stdin``.
    """

    def __init__(self, input: TextIO | None = None) -> None:
        super().__init__()
        self._input: TextIO = input or sys.stdin
        self._fd: int | None = None
        self._saved_attrs: list[Any] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def start(self) -> None:
        if self._running:
            return
        import termios

        fd = self._input.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        attrs[0] &= ~(termios.ICRNL | termios.IXON)
        attrs[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

        self._fd = fd
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(fd, self._on_readable)
        self._running = True
        logger.debug("Terminal key source started on fd %d", fd)

    def stop(self) -> None:
        if not self._running:
            return
        import termios

        self._running = False
        if self._loop is not None and self._fd is not None:
            self._loop.remove_reader(self._fd)
        if self._fd is not None and self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_attrs)
        self._loop = None
        self._saved_attrs = None
        logger.debug("Terminal key source stopped")

    def _on_readable(self) -> None:
        if self._fd is None:
            return
        data = os.read(self._fd, 64)
        if not data:
            logger.debug("End of input on fd %d", self._fd)
            self.stop()
            return
        for sequence in iter_key_sequences(data):
            if not self._running:
                break
            event = decode_key(sequence)
            if event is None:
                logger.debug("Ignoring unrecognised key sequence %r", sequence)
                continue
            self.dispatch(event)
