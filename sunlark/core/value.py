"""
Host value model for sunlark.

Host values are ordinary Python values wherever Python already has the
right shape:

    int     exact integer (bool is NOT an int here)
    float   IEEE double
    str, bool, None
    tuple   immutable sequence (iterable, hashable if its elements are)
    list    plain Python list (iterable, unhashable, cannot be frozen)

Anything with behaviour of its own (freezing, iteration state, hashing
rules) is a Value subclass. Iterables hand out Iterator objects that follow
a pull protocol:

    value, ok = it.next()   # ok is False once the sequence is exhausted
    it.done()               # release resources; safe to call again

Plain Python callables are accepted wherever a host callable is expected.
"""

from __future__ import annotations

import json
from typing import Any, Callable as PyCallable

from sunlark.errors import UnhashableTypeError


# =============================================================================
# Protocol base classes
# =============================================================================


class Value:
    """A host value with its own string/type/freeze/truth/hash behaviour."""

    def string(self) -> str:
        raise NotImplementedError

    def type_name(self) -> str:
        raise NotImplementedError

    def freeze(self) -> None:
        raise NotImplementedError

    def truth(self) -> bool:
        raise NotImplementedError

    def hash(self) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return self.string()


class Iterable(Value):
    """A Value that can produce iterators."""

    def iterate(self, thread: Any = None) -> "Iterator":
        raise NotImplementedError


class Iterator:
    """Pull-based cursor over an Iterable."""

    def next(self) -> tuple[Any, bool]:
        raise NotImplementedError

    def done(self) -> None:
        raise NotImplementedError

    def dispose(self) -> None:
        """Alias for done()."""
        self.done()


class Callable(Value):
    """A Value that can be invoked through sunlark.thread.call()."""

    name: str = "?"

    def call_internal(self, thread: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
        raise NotImplementedError


# =============================================================================
# Builtin functions
# =============================================================================


BuiltinFn = PyCallable[[Any, "Builtin", tuple, dict], Any]


class Builtin(Callable):
    """
    A named function implemented in Python.

    The wrapped function receives (thread, builtin, args, kwargs), which lets
    one implementation serve several names and lets it report errors using
    the name it was called by.
    """

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def string(self) -> str:
        return f"<built-in function {self.name}>"

    def type_name(self) -> str:
        return "builtin_function_or_method"

    def freeze(self) -> None:
        pass

    def truth(self) -> bool:
        return True

    def hash(self) -> int:
        return hash(("builtin", self.name))

    def call_internal(self, thread: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
        return self.fn(thread, self, tuple(args), dict(kwargs))


# =============================================================================
# Lists
# =============================================================================


class HostList(Iterable):
    """
    A mutable list that can be frozen.

    While any iterator is open over an unfrozen list, mutation is refused,
    so an iterator never observes the list changing under it.
    """

    def __init__(self, elems: Any = ()):
        self.elems: list[Any] = list(elems)
        self.frozen = False
        self.itercount = 0

    def __len__(self) -> int:
        return len(self.elems)

    def __getitem__(self, i: int) -> Any:
        return self.elems[i]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HostList):
            return self.elems == other.elems
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def _check_mutable(self, verb: str) -> None:
        if self.frozen:
            raise ValueError(f"cannot {verb} frozen list")
        if self.itercount > 0:
            raise ValueError(f"cannot {verb} list during iteration")

    def append(self, x: Any) -> None:
        self._check_mutable("append to")
        self.elems.append(x)

    def string(self) -> str:
        return "[" + ", ".join(to_string(x) for x in self.elems) + "]"

    def type_name(self) -> str:
        return "list"

    def freeze(self) -> None:
        if not self.frozen:
            self.frozen = True
            for x in self.elems:
                freeze_value(x)

    def truth(self) -> bool:
        return len(self.elems) > 0

    def hash(self) -> int:
        raise UnhashableTypeError("list")

    def iterate(self, thread: Any = None) -> "Iterator":
        return _HostListIterator(self)


class _HostListIterator(Iterator):
    def __init__(self, lst: HostList):
        self._list = lst
        self._i = 0
        self._counted = not lst.frozen
        if self._counted:
            lst.itercount += 1

    def next(self) -> tuple[Any, bool]:
        if self._i < len(self._list.elems):
            x = self._list.elems[self._i]
            self._i += 1
            return x, True
        return None, False

    def done(self) -> None:
        if self._counted:
            self._counted = False
            self._list.itercount -= 1


class SequenceIterator(Iterator):
    """Iterator over a snapshot of a Python tuple or list."""

    def __init__(self, elems: Any):
        self._elems = tuple(elems)
        self._i = 0

    def next(self) -> tuple[Any, bool]:
        if self._i < len(self._elems):
            x = self._elems[self._i]
            self._i += 1
            return x, True
        return None, False

    def done(self) -> None:
        pass


# =============================================================================
# Kind queries and generic operations
# =============================================================================


def is_int(value: Any) -> bool:
    """True for exact integers. bool is excluded even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: Any) -> bool:
    return isinstance(value, float)


def is_callable(value: Any) -> bool:
    if isinstance(value, Callable):
        return True
    if isinstance(value, Value):
        return False
    return callable(value)


def is_iterable(value: Any) -> bool:
    return isinstance(value, (Iterable, tuple, list))


def type_name(value: Any) -> str:
    """
    Return the host type name of a value.

    One of "NoneType", "bool", "int", "float", "string", "tuple", "list",
    "function", or the Value's own type_name().
    """
    if isinstance(value, Value):
        return value.type_name()
    if value is None:
        return "NoneType"
    # Check bool before int (bool is subclass of int in Python)
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, tuple):
        return "tuple"
    if isinstance(value, list):
        return "list"
    if callable(value):
        return "function"
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a host value the way the scripting language prints it."""
    if isinstance(value, Value):
        return value.string()
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, tuple):
        if len(value) == 1:
            return "(" + to_string(value[0]) + ",)"
        return "(" + ", ".join(to_string(x) for x in value) + ")"
    if isinstance(value, list):
        return "[" + ", ".join(to_string(x) for x in value) + "]"
    if callable(value):
        return f"<function {getattr(value, '__name__', '?')}>"
    return repr(value)


def truth_value(value: Any) -> bool:
    if isinstance(value, Value):
        return value.truth()
    return bool(value)


def freeze_value(value: Any) -> None:
    """Freeze a host value. Values without mutable state are left alone."""
    if isinstance(value, Value):
        value.freeze()
    elif isinstance(value, tuple):
        for x in value:
            freeze_value(x)


def hash_value(value: Any) -> int:
    """
    Hash a host value.

    Raises:
        UnhashableTypeError: for lists and for Values that refuse hashing.
    """
    if isinstance(value, Value):
        return value.hash()
    if isinstance(value, list):
        raise UnhashableTypeError("list")
    if isinstance(value, tuple):
        return hash(tuple(hash_value(x) for x in value))
    return hash(value)


def iterate_value(value: Any, thread: Any = None) -> Iterator:
    """
    Return a fresh iterator over a host iterable.

    Raises:
        TypeError: if value is not iterable.
    """
    if isinstance(value, Iterable):
        return value.iterate(thread)
    if isinstance(value, (tuple, list)):
        return SequenceIterator(value)
    raise TypeError(f"{type_name(value)} value is not iterable")
