"""Tests for PropertyResolver and container access."""

from pathstore import PathResolver, PropertyResolver
from pathstore import _access
from pathstore._access import MISSING


def _resolver(live, fallback=None, initial=None, keyed=False):
    paths = PathResolver(keyed=keyed)
    if keyed:
        return PropertyResolver(
            paths,
            live_root=lambda k: live.get(k, MISSING),
            fallback_root=lambda k: fallback or {},
            initial_root=lambda k: (initial or {}).get(k, MISSING),
        )
    return PropertyResolver(
        paths,
        live_root=lambda k: live,
        fallback_root=lambda k: fallback or {},
        initial_root=lambda k: initial or {},
    )


class TestPropertyResolver:
    def test_finds_parent_containers(self):
        live = {"user": {"address": {"city": "Porto"}}}
        fallback = {"user": {"address": {"zip": "4000"}}}
        props = _resolver(live, fallback, initial=live)
        info = props.resolve("user.address.city")
        assert info.live is live["user"]["address"]
        assert info.fallback is fallback["user"]["address"]
        assert info.initial is live["user"]["address"]

    def test_missing_structure_is_missing(self):
        props = _resolver({"user": {}})
        info = props.resolve("user.address.city")
        assert info.live is MISSING
        assert info.fallback is MISSING
        assert info.initial is MISSING

    def test_none_intermediate_is_missing(self):
        props = _resolver({"user": None})
        assert props.resolve("user.name").live is MISSING

    def test_walks_are_independent(self):
        props = _resolver({}, fallback={"a": {"b": 1}})
        info = props.resolve("a.b")
        assert info.live is MISSING
        assert info.fallback == {"b": 1}

    def test_cached_until_invalidated(self):
        live = {"a": {"b": 1}}
        props = _resolver(live)
        first = props.resolve("a.b")
        live["a"] = {"b": 2}
        assert props.resolve("a.b") is first
        props.invalidate("a")
        assert props.resolve("a.b").live == {"b": 2}

    def test_flush(self):
        live = {"a": {"b": 1}}
        props = _resolver(live)
        props.resolve("a.b")
        live["a"] = {"b": 2}
        assert props.resolve("a.b", flush=True).live == {"b": 2}

    def test_clear(self):
        props = _resolver({"a": {}})
        props.resolve("a.b")
        props.clear()
        assert "a.b" not in props

    def test_keyed_root(self):
        live = {"u1": {"address": {"city": "Porto"}}}
        props = _resolver(live, fallback={"address": {"city": "?"}}, keyed=True)
        info = props.resolve("u1.address.city")
        assert info.live is live["u1"]["address"]
        assert info.fallback == {"city": "?"}
        assert props.resolve("u2.address.city").live is MISSING
        assert props.resolve("u1").live is live["u1"]


class _Record:
    def __init__(self):
        self.name = "Ana"


class TestAccess:
    def test_mapping(self):
        d = {"a": 1}
        assert _access.read(d, "a") == 1
        assert _access.read(d, "b") is MISSING
        assert _access.write(d, "b", 2)
        assert _access.delete(d, "a")
        assert d == {"b": 2}
        assert not _access.delete(d, "a")

    def test_list(self):
        items = ["x", "y"]
        assert _access.read(items, "1") == "y"
        assert _access.read(items, "5") is MISSING
        assert _access.read(items, "first") is MISSING
        assert _access.read(items, "²") is MISSING
        assert _access.read(items, "-1") is MISSING
        assert not _access.write(items, "²", "z")
        assert not _access.writable(items, "²")
        assert not _access.delete(items, "²")
        assert _access.writable(items, "2")
        assert not _access.writable(items, "3")
        assert _access.write(items, "2", "z")
        assert items == ["x", "y", "z"]
        assert not _access.write(items, "9", "w")
        assert _access.delete(items, "0")
        assert items == ["y", "z"]

    def test_object_attributes(self):
        record = _Record()
        assert _access.read(record, "name") == "Ana"
        assert _access.write(record, "age", 3)
        assert record.age == 3
        assert _access.delete(record, "age")
        assert not hasattr(record, "age")

    def test_primitives_are_not_containers(self):
        assert _access.read(5, "a") is MISSING
        assert _access.read("abc", "0") is MISSING
        assert not _access.write(5, "a", 1)
        assert not _access.write("abc", "0", "z")
        assert not _access.write(None, "a", 1)
        assert not _access.delete(5, "a")

    def test_tuple_is_read_only(self):
        assert _access.read((1, 2), "0") == 1
        assert not _access.write((1, 2), "0", 9)
        assert not _access.delete((1, 2), "0")

    def test_missing_is_falsy(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
