"""Scoped stores — one store instance per scope instead of one global.

A ScopedStore creates a fresh store each time a scope is entered and makes
it the current store for code running inside that scope (including tasks
and threads that copy the context). Asking for the store outside any scope
is a usage error.

    todos = create_scoped_store(initial_data={"items": []})

    with todos.provide():
        todos.use_store().set("items.0", "write docs")
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, TypeVar

from pathstore.map_store import MapStore
from pathstore.store import Store

S = TypeVar("S")


class StoreScopeError(RuntimeError):
    """A scoped store was used outside of its provide() block."""


class ScopedStore(Generic[S]):
    """Factory plus context variable holding the current scope's store."""

    __slots__ = ("_factory", "_current")

    def __init__(self, factory: Callable[[], S], name: str = "store") -> None:
        self._factory = factory
        self._current: contextvars.ContextVar[S | None] = contextvars.ContextVar(
            name, default=None
        )

    @contextmanager
    def provide(self) -> Iterator[S]:
        """Enter a scope with its own store. Nested scopes shadow outer ones."""
        store = self._factory()
        token = self._current.set(store)
        try:
            yield store
        finally:
            self._current.reset(token)

    def use_store(self) -> S:
        store = self._current.get()
        if store is None:
            raise StoreScopeError("use_store must be used within a provide() block")
        return store


def create_scoped_store(**config: Any) -> ScopedStore[Store]:
    """ScopedStore whose scopes each get a Store(**config)."""
    return ScopedStore(lambda: Store(**config), name="pathstore.store")


def create_scoped_map_store(**config: Any) -> ScopedStore[MapStore]:
    """ScopedStore whose scopes each get a MapStore(**config)."""
    return ScopedStore(lambda: MapStore(**config), name="pathstore.map_store")
