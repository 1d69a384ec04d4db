"""
Python-side drivers for sunlark iterables.

These wrap the next()/done() protocol so Python code can consume host
iterables with ordinary for-loops while still releasing every iterator,
whether the loop finishes, breaks early, or raises.
"""

from __future__ import annotations

from typing import Any, Generator

from sunlark.core.value import iterate_value


def iter_values(iterable: Any, thread: Any = None) -> Generator[Any, None, None]:
    """
    Yield the values of a host iterable.

    The underlying iterator is released when the generator finishes or is
    closed. Infinite iterables (count) never finish on their own; bound
    consumption with take() or itertools.islice.
    """
    it = iterate_value(iterable, thread)
    try:
        while True:
            x, ok = it.next()
            if not ok:
                return
            yield x
    finally:
        it.done()


def take(iterable: Any, n: int, thread: Any = None) -> list[Any]:
    """
    Return up to n values from a host iterable.

    Raises:
        ValueError: if n is negative.
    """
    if n < 0:
        raise ValueError(f"take: n must be >= 0, got {n}")
    out: list[Any] = []
    if n == 0:
        return out
    it = iterate_value(iterable, thread)
    try:
        while len(out) < n:
            x, ok = it.next()
            if not ok:
                break
            out.append(x)
    finally:
        it.done()
    return out
