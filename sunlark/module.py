"""
Named modules exposing sunlark builtins to a host.

    builtins.map          -> sunlark.map.map_
    itertools.count       -> sunlark.count.count_

A host predeclares BUILTINS_MODULE members directly (universe()) and
makes ITERTOOLS_MODULE loadable as "itertools".
"""

from __future__ import annotations

from typing import Any

from sunlark.core.value import Builtin, Value
from sunlark.count import count_
from sunlark.map import map_


class Module(Value):
    """An immutable, named collection of members."""

    def __init__(self, name: str, members: dict[str, Any]):
        self.name = name
        self.members = dict(members)

    def get(self, name: str) -> Any:
        """
        Look up a member.

        Raises:
            KeyError: if the module has no such member.
        """
        try:
            return self.members[name]
        except KeyError:
            raise KeyError(f"module {self.name} has no .{name} field or method") from None

    def attr_names(self) -> list[str]:
        return sorted(self.members)

    def string(self) -> str:
        return f"<module {self.name!r}>"

    def type_name(self) -> str:
        return "module"

    def freeze(self) -> None:
        # Members are builtins; nothing to freeze.
        pass

    def truth(self) -> bool:
        return True

    def hash(self) -> int:
        return hash(("module", self.name))


BUILTINS_MODULE = Module("builtins", {
    "map": Builtin("map", map_),
})

ITERTOOLS_MODULE = Module("itertools", {
    "count": Builtin("itertools.count", count_),
})

MODULES: dict[str, Module] = {
    BUILTINS_MODULE.name: BUILTINS_MODULE,
    ITERTOOLS_MODULE.name: ITERTOOLS_MODULE,
}


def universe() -> dict[str, Any]:
    """Predeclared names for a host environment: builtins members plus modules."""
    names: dict[str, Any] = dict(BUILTINS_MODULE.members)
    names[ITERTOOLS_MODULE.name] = ITERTOOLS_MODULE
    return names


def load_module(name: str) -> Module:
    """
    Return a registered module by name.

    Raises:
        KeyError: unknown module name.
    """
    try:
        return MODULES[name]
    except KeyError:
        raise KeyError(f"no module named {name!r}; known: {sorted(MODULES)}") from None
