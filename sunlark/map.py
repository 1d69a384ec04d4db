"""
map(function, *iterables): apply function to the items of several
iterables in lock-step.

    map(square, [1, 2, 3])            -> 1, 4, 9
    map(add, [1, 2, 3], [10, 20])     -> 11, 22

Iteration stops as soon as any source runs out. Sources earlier in the
argument list have already been advanced on that final step and stay
advanced.

Each iterate() call opens fresh iterators on every source, so two
iterators over one map object are independent. Disposing a MapIterator
disposes each of its source iterators exactly once.

Once next() has reported exhaustion it keeps doing so without pulling
from any source again.

If function fails, the outcome depends on the thread's MapErrorPolicy:
RAISE (default) lets the error out of next(), either EvalError wrapping
a non-sunlark exception or a SunlarkError the callee raised itself;
STOP logs it and ends the sequence. TypeUnionConflict always propagates.
"""

from __future__ import annotations

from typing import Any

from sunlark.args import unpack_positional_args
from sunlark.config import MapErrorPolicy
from sunlark.core.value import (
    Builtin,
    Iterable,
    Iterator,
    freeze_value,
    iterate_value,
    to_string,
)
from sunlark.errors import ArgumentError, SunlarkError, TypeUnionConflict, UnhashableTypeError
from sunlark.logger import get_logger
from sunlark.thread import Thread, call, callable_name

log = get_logger(__name__)

TYPE_NAME = "map"


class MapObject(Iterable):
    """A lazily mapped view over one or more iterables."""

    def __init__(self, thread: Thread, function: Any, iterables: tuple):
        self.thread = thread
        self.function = function
        self.iterables = tuple(iterables)

    def string(self) -> str:
        return "<map object>"

    def type_name(self) -> str:
        return TYPE_NAME

    def freeze(self) -> None:
        freeze_value(self.function)
        for iterable in self.iterables:
            freeze_value(iterable)

    def truth(self) -> bool:
        return True

    def hash(self) -> int:
        raise UnhashableTypeError(TYPE_NAME)

    def iterate(self, thread: Thread | None = None) -> "MapIterator":
        """
        Open one iterator per source, in argument order.

        Args:
            thread: Context the function is called under. Defaults to the
                thread map() was called on.
        """
        iterators: list[Iterator] = []
        try:
            for iterable in self.iterables:
                iterators.append(iterate_value(iterable, thread))
        except BaseException:
            for it in iterators:
                it.done()
            raise
        return MapIterator(thread or self.thread, self.function, iterators)


class MapIterator(Iterator):
    """Lock-step cursor over a MapObject's sources."""

    def __init__(self, thread: Thread, function: Any, iterators: list[Iterator]):
        self.thread = thread
        self.function = function
        self.iterators = iterators
        self.buf: list[Any] = []
        self._exhausted = False
        self._disposed = False

    def next(self) -> tuple[Any, bool]:
        """
        Pull one item from each source and call function on them.

        Returns:
            (result, True) when a value was produced, (None, False) when a
            source is exhausted (or, under MapErrorPolicy.STOP, when function
            failed).

        Raises:
            EvalError: function raised a non-sunlark exception and the
                policy is RAISE.
            SunlarkError: function raised one itself and the policy is
                RAISE. TypeUnionConflict is raised under either policy.
        """
        if self._disposed or self._exhausted:
            return None, False

        self.buf.clear()
        for it in self.iterators:
            x, ok = it.next()
            if not ok:
                self._exhausted = True
                return None, False
            self.buf.append(x)

        try:
            return call(self.thread, self.function, tuple(self.buf)), True
        except TypeUnionConflict:
            raise
        except SunlarkError as e:
            if self.thread.map_errors is MapErrorPolicy.STOP:
                log.warning(
                    "map: %s failed, ending iteration: %s",
                    callable_name(self.function), e,
                )
                self._exhausted = True
                return None, False
            raise

    def done(self) -> None:
        """
        Release every source iterator once.

        A source whose done() raises does not stop the others from being
        released; the first such error is re-raised afterwards.
        """
        if self._disposed:
            return
        self._disposed = True
        first_error: BaseException | None = None
        for it in self.iterators:
            try:
                it.done()
            except BaseException as e:
                if first_error is None:
                    first_error = e
                else:
                    log.warning("map: releasing a source iterator failed: %s", e)
        log.debug("map iterator released %d source iterator(s)", len(self.iterators))
        if first_error is not None:
            raise first_error


def map_(thread: Thread, builtin: Builtin, args: tuple, kwargs: dict[str, Any]) -> MapObject:
    """
    map(function, iterable, *iterables)

    Raises:
        ArgumentError: fewer than two arguments, keyword arguments, a
            non-callable function or a non-iterable source. The message
            includes the arguments received.
    """
    unpackers = ["callable"] + ["iterable"] * (len(args) - 1)
    try:
        function, *iterables = unpack_positional_args(
            builtin.name, args, kwargs, 2, *unpackers,
        )
    except ArgumentError as e:
        raise ArgumentError(f"{e} (got {to_string(tuple(args))})") from e

    mo = MapObject(thread, function, tuple(iterables))
    log.debug("constructed map over %d source(s)", len(mo.iterables))
    return mo
