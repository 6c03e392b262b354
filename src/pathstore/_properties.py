"""Property resolution — locate the containers that hold a path's value.

The same walk runs over three roots: live data, fallback data and the
initial snapshot. Each walk short-circuits to MISSING independently, so a
path into missing structure resolves to MISSING rather than raising.

Entries hold container references, not values. A write that replaces a
container on the way to a cached path makes that entry stale; the store
calls invalidate() for the written path and its dependents.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from pathstore import _access
from pathstore._access import MISSING
from pathstore._paths import PathResolver

# map_key (None for single-record stores) -> root container
RootAccessor = Callable[[str | None], object]


class PropertyInfo(NamedTuple):
    live: object
    fallback: object
    initial: object


def _walk(root: object, keys: tuple[str, ...]) -> object:
    current = root
    for key in keys:
        if current is MISSING or current is None:
            return MISSING
        current = _access.read(current, key)
    return MISSING if current is None else current


class PropertyResolver:
    """Caches PropertyInfo per path string."""

    __slots__ = ("_paths", "_live_root", "_fallback_root", "_initial_root", "_cache")

    def __init__(
        self,
        paths: PathResolver,
        *,
        live_root: RootAccessor,
        fallback_root: RootAccessor,
        initial_root: RootAccessor,
    ) -> None:
        self._paths = paths
        self._live_root = live_root
        self._fallback_root = fallback_root
        self._initial_root = initial_root
        self._cache: dict[str, PropertyInfo] = {}

    def resolve(self, path: str, flush: bool = False) -> PropertyInfo:
        info = self._cache.get(path)
        if info is None or flush:
            path_info = self._paths.resolve(path)
            keys = path_info.parent_keys
            map_key = path_info.map_key
            info = PropertyInfo(
                live=_walk(self._live_root(map_key), keys),
                fallback=_walk(self._fallback_root(map_key), keys),
                initial=_walk(self._initial_root(map_key), keys),
            )
            self._cache[path] = info
        return info

    def invalidate(self, path: str) -> None:
        """Drop path and every dependent path from the cache."""
        self._cache.pop(path, None)
        for dependent in self._paths.dependents(path):
            self._cache.pop(dependent, None)

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._cache
