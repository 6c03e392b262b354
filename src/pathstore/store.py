"""Store — a single nested record addressed by dotted paths.

    store = Store(initial_data={"user": {"name": "Ana"}})
    store.get("user.name")            # "Ana"
    unsubscribe = store.subscribe("user", lambda: print("user changed"))
    store.set("user.name", "Bo")      # prints "user changed"
    store.reset()                     # back to "Ana"
    unsubscribe()

Reads never raise: a path into missing structure returns the fallback value
at that path, or None. Mutations into missing structure are no-ops, except
set(), which creates missing intermediate dicts.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import MutableSequence
from typing import Any, Callable

from pathstore import _access
from pathstore._access import MISSING
from pathstore._engine import T, _StoreEngine
from pathstore._paths import PathInfo
from pathstore._subscribers import Callback, Unsubscribe
from pathstore.devtools import DevToolsExtension

logger = logging.getLogger("pathstore.store")


class Store(_StoreEngine[T]):
    """Path-addressable reactive store over one nested record."""

    def __init__(
        self,
        initial_data: Any = None,
        fallback_data: Any = None,
        *,
        devtools: str | None = None,
        devtools_extension: DevToolsExtension | None = None,
    ) -> None:
        self._data = copy.deepcopy(initial_data) if initial_data is not None else {}
        self._initial_data = copy.deepcopy(self._data)
        super().__init__(
            keyed=False,
            fallback_data=fallback_data,
            live_root=lambda map_key: self._data,
            initial_root=lambda map_key: self._initial_data,
        )
        self._connect_devtools(devtools, devtools_extension)

    def get(self, path: str) -> Any:
        """Value at path; the fallback value if undefined; else None."""
        return self._read(path)

    def set(self, path: str, value: Any, notify: bool = True) -> None:
        """Assign value at path, creating missing intermediate dicts."""
        info, prop = self._resolve(path)
        parent, created = prop.live, None
        if parent is MISSING:
            parent, created = self._materialize(info)
        if created is not None:
            # New containers change what every path beneath them resolves to.
            self._invalidate(created)
        if parent is MISSING or not _access.write(parent, info.current_key, value):
            logger.debug("Cannot set %r: parent is not a container", path)
            return
        self._invalidate(path)
        self._changed("SET", path, value, notify)

    def _materialize(self, info: PathInfo) -> tuple[Any, str | None]:
        """Walk to the container of info.current_key, creating missing dicts.

        Returns that container (MISSING if a non-container blocks the walk)
        and the shortest path that had to be created, if any.
        """
        parent: Any = self._data
        created = None
        for parent_path, key in zip(info.parent_paths, info.parent_keys):
            child = _access.read(parent, key)
            if child is MISSING or child is None:
                child = {}
                if not _access.write(parent, key, child):
                    return MISSING, created
                created = created or parent_path
            parent = child
        return parent, created

    def update(
        self, path: str, value: Any | Callable[[Any], Any], notify: bool = True
    ) -> None:
        """Replace the value at path, or apply value(previous) if callable.

        No-op unless the parent container already exists.
        """
        info, prop = self._resolve(path)
        parent = prop.live
        if not _access.writable(parent, info.current_key):
            return
        if callable(value):
            previous = _access.read(parent, info.current_key)
            value = value(None if previous is MISSING else previous)
        _access.write(parent, info.current_key, value)
        self._invalidate(path)
        self._changed("UPDATE", path, value, notify)

    def remove(self, path: str, notify: bool = True) -> None:
        """Delete the value at path. No-op if there is none."""
        info, prop = self._resolve(path)
        if not _access.delete(prop.live, info.current_key):
            return
        if not isinstance(prop.live, MutableSequence):
            self._invalidate(path)
            self._changed("REMOVE", path, None, notify)
        elif info.parent_paths:
            # Later items shifted down one index: refresh the whole list.
            scope = info.parent_paths[-1]
            self._invalidate(scope)
            self._changed("REMOVE", path, None, notify, scope=scope)
        else:
            self._replaced("REMOVE", notify, path)

    def reset(self, notify: bool = True) -> None:
        """Restore the data the store was constructed with."""
        self._data = copy.deepcopy(self._initial_data)
        self._replaced("RESET", notify)

    def subscribe(self, path: str, callback: Callback) -> Unsubscribe:
        """Call callback whenever the value at or beneath path changes."""
        return self._subscribers.subscribe(path, callback)

    def _serialize_state(self) -> Any:
        return copy.deepcopy(self._data)

    def _replace_state(self, state: Any) -> bool:
        if not isinstance(state, dict):
            return False
        self._data = state
        return True

    def __repr__(self) -> str:
        return f"Store({self._data!r})"
