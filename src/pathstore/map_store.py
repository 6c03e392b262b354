"""MapStore — a collection of nested records keyed by identifier.

Each record is addressed like a Store's data, with the identifier as the
first path segment:

    users = MapStore(fallback_data={"role": "guest"})
    users.key("u1").set({"name": "Ana"})
    users.key("u1").get("name")       # "Ana"
    users.key("u1").get("role")       # "guest" (fallback)
    users.get_keys()                  # ["u1"]

Besides per-path observers, MapStore has keys and size observers that fire
when identifiers are added or removed.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, Generic

from pathstore import _access
from pathstore._access import MISSING
from pathstore._engine import T, _StoreEngine
from pathstore._paths import join
from pathstore._subscribers import Callback, CallbackSet, Unsubscribe
from pathstore.devtools import DevToolsExtension

# Outbound devtools history depth for collections.
DEVTOOLS_MAX_AGE = 50


class KeyHandle(Generic[T]):
    """Accessor for one identifier's record in a MapStore."""

    __slots__ = ("_store", "_map_key")

    def __init__(self, store: MapStore[T], map_key: str) -> None:
        self._store = store
        self._map_key = map_key

    @property
    def map_key(self) -> str:
        return self._map_key

    def get(self, path: str | None = None) -> Any:
        """The whole record, or the value at path inside it."""
        return self._store._get(self._map_key, path)

    def set(self, value: T, notify: bool = True) -> None:
        """Replace the whole record."""
        self._store._set(self._map_key, value, notify)

    def update(
        self,
        path: str | None,
        value: Any | Callable[[Any], Any],
        notify: bool = True,
    ) -> None:
        """Update a value inside an existing record; path=None updates the record."""
        self._store._update(self._map_key, path, value, notify)

    def remove(self, notify: bool = True) -> None:
        self._store._remove(self._map_key, notify)

    def subscribe(self, callback: Callback, path: str | None = None) -> Unsubscribe:
        return self._store._subscribe(self._map_key, path, callback)

    def __repr__(self) -> str:
        return f"KeyHandle({self._map_key!r})"


class MapStore(_StoreEngine[T]):
    """Path-addressable reactive store over a keyed collection of records."""

    def __init__(
        self,
        initial_data: Mapping[str, T] | None = None,
        fallback_data: Any = None,
        *,
        devtools: str | None = None,
        devtools_extension: DevToolsExtension | None = None,
    ) -> None:
        self._data: dict[str, T] = copy.deepcopy(dict(initial_data or {}))
        self._initial_data: dict[str, T] = copy.deepcopy(self._data)
        super().__init__(
            keyed=True,
            fallback_data=fallback_data,
            live_root=lambda map_key: self._data.get(map_key, MISSING),
            initial_root=lambda map_key: self._initial_data.get(map_key, MISSING),
        )
        self._keys_subscribers = CallbackSet()
        self._size_subscribers = CallbackSet()
        self._keys: list[str] = list(self._data)
        self._connect_devtools(devtools, devtools_extension, max_age=DEVTOOLS_MAX_AGE)

    # --- Collection level ---

    def key(self, map_key: str) -> KeyHandle[T]:
        return KeyHandle(self, map_key)

    def get_keys(self) -> list[str]:
        return list(self._keys)

    def get_size(self) -> int:
        return len(self._data)

    def subscribe_keys(self, callback: Callback) -> Unsubscribe:
        return self._keys_subscribers.add(callback)

    def subscribe_size(self, callback: Callback) -> Unsubscribe:
        return self._size_subscribers.add(callback)

    def reset(self, notify: bool = True) -> None:
        """Restore the records the store was constructed with."""
        self._data = copy.deepcopy(self._initial_data)
        self._keys = list(self._data)
        self._replaced("RESET", notify)

    def clear(self, notify: bool = True) -> None:
        """Remove every record. The initial snapshot is kept for reset()."""
        self._data.clear()
        self._keys = []
        self._replaced("CLEAR", notify)

    def _notify_count(self) -> None:
        self._keys_subscribers.notify()
        self._size_subscribers.notify()

    def _notify_all(self) -> None:
        super()._notify_all()
        self._notify_count()

    # --- Per record ---

    def _get(self, map_key: str, path: str | None) -> Any:
        full_path = join(map_key, path)
        info, prop = self._resolve(full_path)
        if info.current_key:
            return self._read(full_path)
        # Identifier-only path: the live container is the record itself.
        return None if prop.live is MISSING else prop.live

    def _set(self, map_key: str, value: T, notify: bool) -> None:
        is_new = map_key not in self._data
        self._data[map_key] = value
        if is_new:
            self._keys = list(self._data)
        self._invalidate(map_key)
        self._changed("SET", map_key, value, notify)
        if is_new and notify:
            self._notify_count()

    def _update(
        self,
        map_key: str,
        path: str | None,
        value: Any | Callable[[Any], Any],
        notify: bool,
    ) -> None:
        if map_key not in self._data:
            return
        full_path = join(map_key, path)
        info, prop = self._resolve(full_path)
        if not info.current_key:
            if callable(value):
                value = value(self._data[map_key])
            self._data[map_key] = value
        else:
            parent = prop.live
            if not _access.writable(parent, info.current_key):
                return
            if callable(value):
                previous = _access.read(parent, info.current_key)
                value = value(None if previous is MISSING else previous)
            _access.write(parent, info.current_key, value)
        self._invalidate(full_path)
        self._changed("UPDATE", full_path, value, notify)

    def _remove(self, map_key: str, notify: bool) -> None:
        if map_key not in self._data:
            return
        del self._data[map_key]
        self._keys = list(self._data)
        self._invalidate(map_key)
        self._changed("REMOVE", map_key, None, notify)
        if notify:
            self._notify_count()

    def _subscribe(self, map_key: str, path: str | None, callback: Callback) -> Unsubscribe:
        return self._subscribers.subscribe(join(map_key, path), callback)

    # --- Devtools ---

    def _serialize_state(self) -> Any:
        return copy.deepcopy(self._data)

    def _replace_state(self, state: Any) -> bool:
        if not isinstance(state, dict):
            return False
        self._data = dict(state)
        self._keys = list(self._data)
        return True

    def __repr__(self) -> str:
        return f"MapStore({self._data!r})"
