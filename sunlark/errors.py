"""
Exception types raised by sunlark primitives.

Factory-boundary problems (wrong arity, wrong argument kind) surface as
ArgumentError before any object is built. Hashing a map object raises
UnhashableTypeError. A failing user callable surfaces as EvalError.

TypeUnionConflict marks a broken NumericUnion invariant. It signals a bug
in this package, not bad input, and callers are not expected to catch it.
"""

from __future__ import annotations


class SunlarkError(Exception):
    """Base class for all sunlark errors."""
    pass


class ArgumentError(SunlarkError, TypeError):
    """Wrong number or kind of arguments passed to a builtin."""
    pass


class UnhashableTypeError(SunlarkError, TypeError):
    """Hash requested for a value whose type is not hashable."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"unhashable type: {type_name}")


class EvalError(SunlarkError):
    """
    A callable invoked through the host failed.

    The original exception (if any) is chained as __cause__.
    """

    def __init__(self, message: str, callable_name: str | None = None):
        self.callable_name = callable_name
        super().__init__(message)


class TypeUnionConflict(SunlarkError, AssertionError):
    """A NumericUnion ended up with something other than exactly one payload."""
    pass
