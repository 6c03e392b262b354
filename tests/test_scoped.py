"""Tests for scoped stores."""

import contextvars

import pytest

from pathstore import (
    MapStore,
    Store,
    StoreScopeError,
    create_scoped_map_store,
    create_scoped_store,
)


class TestScopedStore:
    def test_use_outside_scope_raises(self):
        scoped = create_scoped_store(initial_data={"a": 1})
        with pytest.raises(StoreScopeError, match="within a provide"):
            scoped.use_store()

    def test_provide(self):
        scoped = create_scoped_store(initial_data={"a": 1})
        with scoped.provide() as store:
            assert isinstance(store, Store)
            assert scoped.use_store() is store
            assert store.get("a") == 1
        with pytest.raises(StoreScopeError):
            scoped.use_store()

    def test_scopes_are_independent(self):
        scoped = create_scoped_store(initial_data={"a": 1})
        with scoped.provide() as first:
            first.set("a", 2)
        with scoped.provide() as second:
            assert second is not first
            assert second.get("a") == 1

    def test_nested_scope_shadows(self):
        scoped = create_scoped_store()
        with scoped.provide() as outer:
            with scoped.provide() as inner:
                assert scoped.use_store() is inner
            assert scoped.use_store() is outer

    def test_scope_restored_on_exception(self):
        scoped = create_scoped_store()
        with pytest.raises(RuntimeError):
            with scoped.provide():
                raise RuntimeError("oops")
        with pytest.raises(StoreScopeError):
            scoped.use_store()

    def test_copied_context_sees_store(self):
        scoped = create_scoped_store(initial_data={"a": 1})
        with scoped.provide() as store:
            ctx = contextvars.copy_context()
        assert ctx.run(scoped.use_store) is store

    def test_map_store(self):
        scoped = create_scoped_map_store(initial_data={"u1": {"name": "Ana"}})
        with scoped.provide() as store:
            assert isinstance(store, MapStore)
            assert scoped.use_store().key("u1").get("name") == "Ana"
