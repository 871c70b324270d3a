"""A small thread-safe event dispatcher and the argument types the engine sends."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A")


@dataclass(frozen=True)
class MouseWheelEventArg:
    """Mouse wheel rotation; positive values mean rotation away from the user."""

    value: float


@dataclass(frozen=True)
class MouseEventArg:
    """Mouse cursor position in window coordinates."""

    x: int
    y: int


@dataclass(frozen=True)
class KeyEventArg:
    """Virtual key code of a pressed or released key."""

    key: int


class Event(Generic[S, A]):
    """An ordered list of handlers called as ``handler(sender, arg)`` on emit."""

    def __init__(self) -> None:
        self._handlers: list[Callable[[S, A], Any]] = []
        self._lock = threading.RLock()

    def reaction(self, func: Callable[[S, A], Any]) -> Callable[[S, A], Any]:
        """Append a handler and return it, so it can later be removed."""
        with self._lock:
            self._handlers.append(func)
        return func

    def remove_reaction(self, func: Callable[[S, A], Any]) -> None:
        """Remove every registration equal to ``func``; unknown handlers are ignored."""
        with self._lock:
            self._handlers = [h for h in self._handlers if h != func]

    def remove_all_reactions(self) -> None:
        """Drop all handlers."""
        with self._lock:
            self._handlers.clear()

    def emit(self, sender: S, arg: A) -> None:
        """Call all handlers in registration order."""
        with self._lock:
            for handler in tuple(self._handlers):
                handler(sender, arg)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)