"""pathstore: reactive, path-addressable key-value stores for Python."""

from importlib.metadata import version as _version

__version__ = _version("pathstore")

from pathstore._paths import PathInfo, PathResolver
from pathstore._properties import PropertyInfo, PropertyResolver
from pathstore._subscribers import CallbackSet, SubscriberRegistry
from pathstore.store import Store
from pathstore.map_store import KeyHandle, MapStore
from pathstore.devtools import DevToolsBridge, set_devtools_extension
from pathstore.scoped import (
    ScopedStore,
    StoreScopeError,
    create_scoped_map_store,
    create_scoped_store,
)
# textual is opt-in and not imported here

__all__ = [
    "Store",
    "MapStore",
    "KeyHandle",
    "PathInfo",
    "PathResolver",
    "PropertyInfo",
    "PropertyResolver",
    "CallbackSet",
    "SubscriberRegistry",
    "DevToolsBridge",
    "set_devtools_extension",
    "ScopedStore",
    "StoreScopeError",
    "create_scoped_store",
    "create_scoped_map_store",
]
