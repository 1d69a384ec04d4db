"""
NumericUnion: one number that is either an exact int or a float.

Lets ints and floats be mixed in one progression, e.g. count(0, 0.1).
The active variant lives in a single payload slot, so a union is always
exactly one of:

    ExactInt(value: int)      unbounded precision
    Float64(value: float)     IEEE double

Promotion rules for add():

    int   + int   -> int    (exact)
    int   + float -> float  (int converted first)
    float + int   -> float
    float + float -> float

Once a union becomes a float it stays a float.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Union

from sunlark.core.value import is_float, is_int, type_name
from sunlark.errors import ArgumentError, TypeUnionConflict


@dataclass(frozen=True, slots=True)
class ExactInt:
    value: int


@dataclass(frozen=True, slots=True)
class Float64:
    value: float


Payload = Union[ExactInt, Float64]


def _int_to_float(n: int) -> float:
    """Convert an exact int to float; out-of-range magnitudes become infinities."""
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


class NumericUnion:
    """Mutable holder of exactly one ExactInt or Float64 payload."""

    __slots__ = ("_payload",)

    def __init__(self, payload: Payload):
        if not isinstance(payload, (ExactInt, Float64)):
            raise TypeUnionConflict(
                f"NumericUnion payload must be ExactInt or Float64, got {type(payload).__name__}"
            )
        self._payload = payload

    # ---------- construction ----------

    @classmethod
    def coerce(cls, value: Any) -> "NumericUnion":
        """
        Build a union from a host int or float.

        Raises:
            ArgumentError: for any other kind (including bool).
        """
        if is_int(value):
            return cls(ExactInt(value))
        if is_float(value):
            return cls(Float64(value))
        raise ArgumentError(f"got {type_name(value)}, want float or int")

    # ---------- queries ----------

    @property
    def payload(self) -> Payload:
        return self._payload

    @property
    def kind(self) -> str:
        return "int" if self.is_int() else "float"

    @property
    def value(self) -> int | float:
        """The active payload as a plain host value."""
        return self._payload.value

    def is_int(self) -> bool:
        return isinstance(self._payload, ExactInt)

    def is_float(self) -> bool:
        return isinstance(self._payload, Float64)

    # ---------- arithmetic ----------

    def add(self, other: "NumericUnion") -> "NumericUnion":
        """Add other into self in place and return self."""
        a, b = self._payload, other._payload
        if isinstance(a, ExactInt) and isinstance(b, ExactInt):
            self._payload = ExactInt(a.value + b.value)
        elif isinstance(a, ExactInt) and isinstance(b, Float64):
            # The int payload is replaced, not kept alongside the float.
            self._payload = Float64(_int_to_float(a.value) + b.value)
        elif isinstance(a, Float64) and isinstance(b, ExactInt):
            self._payload = Float64(a.value + _int_to_float(b.value))
        elif isinstance(a, Float64) and isinstance(b, Float64):
            self._payload = Float64(a.value + b.value)
        else:
            raise TypeUnionConflict(
                f"cannot add {type(a).__name__} and {type(b).__name__}"
            )
        return self

    # ---------- comparison / display ----------

    def equals(self, raw: Any) -> bool:
        """
        Same-kind equality only.

        An int literal matches only an ExactInt, a float literal only a
        Float64. equals(1) is False for Float64(1.0).
        """
        if isinstance(raw, NumericUnion):
            return raw.kind == self.kind and raw.value == self.value
        if is_int(raw):
            return self.is_int() and self.value == raw
        if is_float(raw):
            return self.is_float() and self.value == raw
        return False

    def display(self) -> str:
        if self.is_int():
            return str(self.value)
        return repr(self.value)

    def __repr__(self) -> str:
        return f"NumericUnion({self._payload!r})"
