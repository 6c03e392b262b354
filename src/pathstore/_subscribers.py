"""Subscriber registry — path-keyed observer callbacks with cascading notify.

subscribe() returns a function that removes the callback. Removal is
idempotent and safe after the store has stopped notifying. The callback set
for a path is dropped once it is empty.
"""

from __future__ import annotations

from typing import Callable, Iterable

from pathstore._paths import PathResolver

Callback = Callable[[], None]
Unsubscribe = Callable[[], None]


class CallbackSet:
    """A set of zero-argument callbacks notified together."""

    __slots__ = ("_callbacks",)

    def __init__(self) -> None:
        self._callbacks: set[Callback] = set()

    def add(self, callback: Callback) -> Unsubscribe:
        self._callbacks.add(callback)

        def _unsubscribe() -> None:
            self._callbacks.discard(callback)

        return _unsubscribe

    def discard(self, callback: Callback) -> None:
        self._callbacks.discard(callback)

    def notify(self) -> None:
        # Snapshot: callbacks may unsubscribe while being notified.
        for callback in list(self._callbacks):
            callback()

    def __len__(self) -> int:
        return len(self._callbacks)

    def __bool__(self) -> bool:
        return bool(self._callbacks)


class SubscriberRegistry:
    """Maps exact path strings to CallbackSets."""

    __slots__ = ("_paths", "_subscribers")

    def __init__(self, paths: PathResolver) -> None:
        self._paths = paths
        self._subscribers: dict[str, CallbackSet] = {}

    def subscribe(self, path: str, callback: Callback) -> Unsubscribe:
        # Resolving registers path in the dependency graph, so writes to an
        # ancestor reach it even if it is never read.
        self._paths.resolve(path)
        callbacks = self._subscribers.get(path)
        if callbacks is None:
            callbacks = self._subscribers[path] = CallbackSet()
        callbacks.add(callback)

        def _unsubscribe() -> None:
            current = self._subscribers.get(path)
            if current is None:
                return
            current.discard(callback)
            if not current:
                del self._subscribers[path]

        return _unsubscribe

    def notify_exact(self, path: str) -> None:
        callbacks = self._subscribers.get(path)
        if callbacks is not None:
            callbacks.notify()

    def notify_many(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.notify_exact(path)

    def notify_cascade(self, path: str) -> None:
        """Notify path, then each of its ancestors, shortest first."""
        info = self._paths.resolve(path)
        self.notify_exact(path)
        self.notify_many(info.parent_paths)

    def notify_dependents(self, path: str) -> None:
        """Notify every path resolved beneath path."""
        self.notify_many(self._paths.dependents(path))

    def notify_all(self) -> None:
        self.notify_many(list(self._subscribers))

    @property
    def paths(self) -> list[str]:
        return list(self._subscribers)

    def __contains__(self, path: object) -> bool:
        return path in self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)
