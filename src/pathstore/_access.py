"""Container access — read, write and delete one segment of a record tree.

Mappings are indexed by key, mutable sequences by a decimal segment, and
plain objects by attribute. Anything else is not a container: reads resolve
to MISSING and writes are refused, so a malformed path never raises.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence


class _Missing:
    """Sentinel for 'undefined': a missing key or an unreachable container."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _index(key: str) -> int | None:
    if not key.isdecimal():
        return None
    try:
        return int(key)
    except ValueError:
        return None


def _is_object(container: object) -> bool:
    return hasattr(container, "__dict__") and not isinstance(container, type)


def read(container: object, key: str) -> object:
    """Value at key inside container, or MISSING."""
    if container is MISSING or container is None:
        return MISSING
    if isinstance(container, Mapping):
        return container.get(key, MISSING)
    if isinstance(container, (str, bytes, bytearray)):
        return MISSING
    if isinstance(container, Sequence):
        index = _index(key)
        if index is None or index >= len(container):
            return MISSING
        return container[index]
    if _is_object(container):
        return getattr(container, key, MISSING)
    return MISSING


def has(container: object, key: str) -> bool:
    return read(container, key) is not MISSING


def writable(container: object, key: str) -> bool:
    """Could write(container, key, ...) succeed?"""
    if isinstance(container, MutableMapping):
        return True
    if isinstance(container, MutableSequence):
        index = _index(key)
        return index is not None and index <= len(container)
    return container is not None and container is not MISSING and _is_object(container)


def write(container: object, key: str, value: object) -> bool:
    """Assign value at key. Returns False if container can't hold it."""
    if isinstance(container, MutableMapping):
        container[key] = value
        return True
    if isinstance(container, MutableSequence):
        index = _index(key)
        if index is None or index > len(container):
            return False
        if index == len(container):
            container.append(value)
        else:
            container[index] = value
        return True
    if container is None or container is MISSING or not _is_object(container):
        return False
    try:
        setattr(container, key, value)
    except (AttributeError, TypeError):
        return False
    return True


def delete(container: object, key: str) -> bool:
    """Remove key from container. Returns False if there was nothing to remove."""
    if not has(container, key):
        return False
    if isinstance(container, MutableMapping):
        del container[key]
        return True
    if isinstance(container, MutableSequence):
        del container[_index(key)]
        return True
    if isinstance(container, (Mapping, Sequence)):
        return False
    try:
        delattr(container, key)
    except (AttributeError, TypeError):
        return False
    return True
