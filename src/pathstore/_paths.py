"""Path resolution and the dependency graph.

A dotted path is decomposed once into a PathInfo and cached by its string.
Every fresh decomposition also records the path as a dependent of each of
its ancestors. That graph is how a write to "user" reaches observers of
"user.address.city" without scanning every subscribed path.

The graph only grows: a path that was resolved once stays a dependent.
"""

from __future__ import annotations

from typing import NamedTuple

SEPARATOR = "."


class PathInfo(NamedTuple):
    """Structural decomposition of one path string."""

    segments: tuple[str, ...]
    # Segments walked from the root to reach the container of current_key.
    parent_keys: tuple[str, ...]
    # Every proper ancestor path, shortest first.
    parent_paths: tuple[str, ...]
    current_key: str
    # First segment for keyed stores, None otherwise.
    map_key: str | None = None


def join(map_key: str, path: str | None = None) -> str:
    """Full path for a record field in a keyed store."""
    return f"{map_key}{SEPARATOR}{path}" if path else map_key


def _ancestors(segments: tuple[str, ...]) -> tuple[str, ...]:
    paths = []
    for index in range(1, len(segments)):
        paths.append(SEPARATOR.join(segments[:index]))
    return tuple(paths)


class PathResolver:
    """Caches PathInfo per path string and owns the dependency graph.

    With keyed=True the first segment names a record in a collection: it is
    excluded from parent_keys (the walk starts inside the record) but kept
    in parent_paths so observers of the whole record are cascaded to.
    """

    __slots__ = ("_keyed", "_cache", "_dependents")

    def __init__(self, *, keyed: bool = False) -> None:
        self._keyed = keyed
        self._cache: dict[str, PathInfo] = {}
        self._dependents: dict[str, set[str]] = {}

    @property
    def keyed(self) -> bool:
        return self._keyed

    def resolve(self, path: str, flush: bool = False) -> PathInfo:
        info = self._cache.get(path)
        if info is None or flush:
            info = self._decompose(path)
            self._cache[path] = info
            for parent_path in info.parent_paths:
                self._dependents.setdefault(parent_path, set()).add(path)
        return info

    def _decompose(self, path: str) -> PathInfo:
        segments = tuple(path.split(SEPARATOR))
        parent_paths = _ancestors(segments)
        if self._keyed:
            return PathInfo(
                segments=segments,
                parent_keys=segments[1:-1],
                parent_paths=parent_paths,
                current_key=segments[-1] if len(segments) > 1 else "",
                map_key=segments[0],
            )
        return PathInfo(
            segments=segments,
            parent_keys=segments[:-1],
            parent_paths=parent_paths,
            current_key=segments[-1],
        )

    def dependents(self, path: str) -> frozenset[str]:
        """Every path resolved so far beneath path."""
        return frozenset(self._dependents.get(path, ()))

    def __contains__(self, path: object) -> bool:
        return path in self._cache

    def __len__(self) -> int:
        return len(self._cache)
