"""
itertools.count: an unbounded arithmetic progression.

    count()          0, 1, 2, 3, ...
    count(5)         5, 6, 7, ...
    count(0, 2)      0, 2, 4, ...
    count(1, 0.5)    1, 1.5, 2.0, 2.5, ...

start and step may each be an int or a float. The progression stays exact
while both are ints and switches to float for good after the first
float-producing addition.

Every iterator obtained from one count object shares that object's cursor:
advancing any of them advances all of them. A frozen count yields nothing.
"""

from __future__ import annotations

from typing import Any

from sunlark.args import unpack_positional_args
from sunlark.core.numeric import ExactInt, NumericUnion
from sunlark.core.value import Builtin, Iterable, Iterator, to_string
from sunlark.errors import ArgumentError
from sunlark.logger import get_logger

log = get_logger(__name__)

TYPE_NAME = "itertools.count"

# Placeholder hash shared by every count object.
COUNT_HASH = 10


class CountObject(Iterable):
    """State for one count(start, step) value."""

    def __init__(self, start: NumericUnion | None = None, step: NumericUnion | None = None):
        self.current = start if start is not None else NumericUnion(ExactInt(0))
        self.step = step if step is not None else NumericUnion(ExactInt(1))
        self.frozen = False

    def string(self) -> str:
        # An int step of exactly 1 is the default and is not shown.
        if self.step.equals(1):
            return f"count({self.current.display()})"
        return f"count({self.current.display()}, {self.step.display()})"

    def type_name(self) -> str:
        return TYPE_NAME

    def freeze(self) -> None:
        if not self.frozen:
            self.frozen = True
            log.debug("froze %s", self.string())

    def truth(self) -> bool:
        return True

    def hash(self) -> int:
        return COUNT_HASH

    def iterate(self, thread: Any = None) -> "CountIterator":
        return CountIterator(self)


class CountIterator(Iterator):
    """A view onto a CountObject's cursor. Holds no position of its own."""

    def __init__(self, co: CountObject):
        self.co = co

    def next(self) -> tuple[Any, bool]:
        if self.co.frozen:
            return None, False
        value = self.co.current.value
        self.co.current.add(self.co.step)
        return value, True

    def done(self) -> None:
        pass


def count_(thread: Any, builtin: Builtin, args: tuple, kwargs: dict[str, Any]) -> CountObject:
    """
    count(start=0, step=1)

    Raises:
        ArgumentError: more than two arguments, keyword arguments, or a
            non-numeric argument.
    """
    try:
        start, step = unpack_positional_args(
            builtin.name, args, kwargs, 0, "numeric", "numeric",
        )
    except ArgumentError as e:
        raise ArgumentError(
            f"Got {to_string(tuple(args))} but expected no args, or one or two valid numbers"
        ) from e

    co = CountObject(start, step)
    log.debug("constructed %s", co.string())
    return co
