"""
Positional argument unpacking for builtins.

unpack_positional_args() checks arity and converts each supplied argument
with an unpacker. An unpacker is either one of the named kinds below or a
function value -> converted value that raises TypeError/ArgumentError on a
kind mismatch.

    "any"        value passed through
    "callable"   must satisfy is_callable()
    "iterable"   must satisfy is_iterable()
    "numeric"    converted with NumericUnion.coerce()

Missing optional arguments come back as None.
"""

from __future__ import annotations

from typing import Any, Callable as PyCallable, Union

from sunlark.core.numeric import NumericUnion
from sunlark.core.value import is_callable, is_iterable, type_name
from sunlark.errors import ArgumentError

Unpacker = Union[str, PyCallable[[Any], Any]]


def _want(kind: str, check: PyCallable[[Any], bool]) -> PyCallable[[Any], Any]:
    def unpack(value: Any) -> Any:
        if not check(value):
            raise ArgumentError(f"got {type_name(value)}, want {kind}")
        return value
    return unpack


UNPACKERS: dict[str, PyCallable[[Any], Any]] = {
    "any": lambda v: v,
    "callable": _want("callable", is_callable),
    "iterable": _want("iterable", is_iterable),
    "numeric": NumericUnion.coerce,
}


def _resolve(unpacker: Unpacker) -> PyCallable[[Any], Any]:
    if isinstance(unpacker, str):
        try:
            return UNPACKERS[unpacker]
        except KeyError:
            raise ValueError(f"unknown unpacker kind: {unpacker!r}") from None
    return unpacker


def unpack_positional_args(
    fn_name: str,
    args: tuple,
    kwargs: dict[str, Any] | None,
    min_count: int,
    *unpackers: Unpacker,
) -> list[Any]:
    """
    Unpack positional args for a builtin.

    Args:
        fn_name: Builtin name used in error messages.
        args: Positional arguments as received.
        kwargs: Keyword arguments as received; must be empty.
        min_count: Number of required leading arguments.
        *unpackers: One unpacker per accepted position.

    Returns:
        List with one entry per unpacker; None where the argument was omitted.

    Raises:
        ArgumentError: on keyword arguments, wrong arity, or wrong kind.
    """
    if kwargs:
        raise ArgumentError(f"{fn_name}: unexpected keyword arguments")
    nargs = len(args)
    if nargs < min_count:
        raise ArgumentError(f"{fn_name}: got {nargs} arguments, want at least {min_count}")
    if nargs > len(unpackers):
        raise ArgumentError(f"{fn_name}: got {nargs} arguments, want at most {len(unpackers)}")

    out: list[Any] = [None] * len(unpackers)
    for i, value in enumerate(args):
        try:
            out[i] = _resolve(unpackers[i])(value)
        except TypeError as e:
            raise ArgumentError(f"{fn_name}: for parameter {i + 1}: {e}") from e
    return out
