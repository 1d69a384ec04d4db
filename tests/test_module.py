"""
Tests for module registration of the builtins.
"""

import pytest

from sunlark.core.value import Builtin, hash_value
from sunlark.count import CountObject
from sunlark.iteration import take
from sunlark.map import MapObject
from sunlark.module import (
    BUILTINS_MODULE,
    ITERTOOLS_MODULE,
    Module,
    load_module,
    universe,
)
from sunlark.thread import call


class TestModules:
    def test_builtins_members(self):
        assert BUILTINS_MODULE.attr_names() == ["map"]
        fn = BUILTINS_MODULE.get("map")
        assert isinstance(fn, Builtin)
        assert fn.name == "map"

    def test_itertools_members(self):
        assert ITERTOOLS_MODULE.attr_names() == ["count"]
        assert ITERTOOLS_MODULE.get("count").name == "itertools.count"

    def test_unknown_member(self):
        with pytest.raises(KeyError, match="module itertools has no .cycle field or method"):
            ITERTOOLS_MODULE.get("cycle")

    def test_module_value_capabilities(self):
        assert ITERTOOLS_MODULE.string() == "<module 'itertools'>"
        assert ITERTOOLS_MODULE.type_name() == "module"
        assert ITERTOOLS_MODULE.truth() is True
        ITERTOOLS_MODULE.freeze()
        assert hash_value(ITERTOOLS_MODULE) == hash_value(Module("itertools", {}))

    def test_load_module(self):
        assert load_module("itertools") is ITERTOOLS_MODULE
        assert load_module("builtins") is BUILTINS_MODULE
        with pytest.raises(KeyError, match="no module named 'os'"):
            load_module("os")


class TestUniverse:
    def test_predeclared_names(self):
        names = universe()
        assert set(names) == {"map", "itertools"}
        assert names["itertools"] is ITERTOOLS_MODULE

    def test_universe_is_a_copy(self):
        universe()["map"] = None
        assert isinstance(universe()["map"], Builtin)

    def test_end_to_end(self, thread):
        names = universe()
        co = call(thread, names["itertools"].get("count"), (1, 2))
        mo = call(thread, names["map"], (lambda x: x * 10, co))
        assert isinstance(co, CountObject)
        assert isinstance(mo, MapObject)
        assert take(mo, 3) == [10, 30, 50]
