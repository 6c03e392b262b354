"""Store engine — the machinery shared by Store and MapStore.

Both variants resolve paths, cache container lookups, cascade notifications
and talk to the debugging bridge the same way. They differ only in how a
path's first segment maps to a root container (root accessors passed to the
PropertyResolver) and in the collection bookkeeping MapStore adds.
"""

from __future__ import annotations

import copy
from typing import Any, Generic, TypeVar

from pathstore import _access
from pathstore._access import MISSING
from pathstore._paths import PathInfo, PathResolver
from pathstore._properties import PropertyInfo, PropertyResolver, RootAccessor
from pathstore._subscribers import SubscriberRegistry
from pathstore.devtools import DevToolsBridge, DevToolsExtension, connect_devtools

T = TypeVar("T")


class _StoreEngine(Generic[T]):
    """Caches, subscribers and devtools wiring for one store instance."""

    def __init__(
        self,
        *,
        keyed: bool,
        fallback_data: Any,
        live_root: RootAccessor,
        initial_root: RootAccessor,
    ) -> None:
        self._fallback_data = copy.deepcopy(fallback_data) if fallback_data else {}
        self._paths = PathResolver(keyed=keyed)
        self._properties = PropertyResolver(
            self._paths,
            live_root=live_root,
            fallback_root=lambda map_key: self._fallback_data,
            initial_root=initial_root,
        )
        self._subscribers = SubscriberRegistry(self._paths)
        self._devtools: DevToolsBridge | None = None

    def _connect_devtools(
        self, name: str | None, extension: DevToolsExtension | None, **options: Any
    ) -> None:
        self._devtools = connect_devtools(
            name,
            serialize=self._serialize_state,
            apply_state=self._apply_state,
            reset=self.reset,
            extension=extension,
            **options,
        )

    # --- Subclass hooks ---

    def _serialize_state(self) -> Any:
        raise NotImplementedError

    def _replace_state(self, state: Any) -> bool:
        raise NotImplementedError

    def reset(self, notify: bool = True) -> None:
        raise NotImplementedError

    # --- Resolution ---

    def _resolve(self, path: str) -> tuple[PathInfo, PropertyInfo]:
        return self._paths.resolve(path), self._properties.resolve(path)

    def _read(self, path: str) -> Any:
        """Live value at path, else fallback value, else None."""
        info, prop = self._resolve(path)
        value = _access.read(prop.live, info.current_key)
        if value is MISSING:
            value = _access.read(prop.fallback, info.current_key)
        return None if value is MISSING else value

    def _invalidate(self, path: str) -> None:
        self._properties.invalidate(path)

    # --- Notification ---

    def _changed(
        self, verb: str, path: str, value: Any, notify: bool, scope: str | None = None
    ) -> None:
        """Report a write at path to devtools, then to observers.

        scope widens notification to an ancestor whose whole subtree moved,
        e.g. the list a deleted item was shifted out of.
        """
        if self._devtools is not None:
            self._devtools.send(verb, path, value)
        if notify:
            self._subscribers.notify_cascade(scope or path)
            self._subscribers.notify_dependents(scope or path)

    def _replaced(self, verb: str, notify: bool, path: str = "") -> None:
        """Report a change that invalidates the whole store (reset, clear)."""
        self._properties.clear()
        if self._devtools is not None:
            self._devtools.send(verb, path)
        if notify:
            self._notify_all()

    def _notify_all(self) -> None:
        self._subscribers.notify_all()

    def _apply_state(self, state: Any) -> bool:
        if not self._replace_state(state):
            return False
        self._properties.clear()
        self._notify_all()
        return True

    @property
    def devtools(self) -> DevToolsBridge | None:
        return self._devtools
