"""
Execution context and call dispatch.

A Thread is the explicit context every evaluation runs under. It carries:

- a call stack (names of callables currently executing)
- a maximum call depth
- the map error policy (see sunlark.config.MapErrorPolicy)

call(thread, fn, args) is the single way sunlark invokes a host callable.
Failures inside the callee come back as EvalError with the original
exception chained.
"""

from __future__ import annotations

from typing import Any

from sunlark import config
from sunlark.config import MapErrorPolicy
from sunlark.core.value import Callable, is_callable, type_name
from sunlark.errors import EvalError, SunlarkError
from sunlark.logger import get_logger

log = get_logger(__name__)


class Thread:
    """
    Execution context for sunlark evaluation.

    Not safe to share between OS threads: a Thread assumes one logical
    caller at a time.
    """

    def __init__(
        self,
        name: str = "main",
        *,
        max_call_depth: int | None = None,
        map_errors: MapErrorPolicy | None = None,
    ) -> None:
        self.name = name
        self.max_call_depth = max_call_depth if max_call_depth is not None else config.MAX_CALL_DEPTH
        self.map_errors = map_errors if map_errors is not None else config.MAP_ERROR_POLICY
        self._stack: list[str] = []

    @property
    def call_depth(self) -> int:
        return len(self._stack)

    @property
    def call_stack(self) -> list[str]:
        """Names of the callables currently executing, outermost first."""
        return list(self._stack)

    def __repr__(self) -> str:
        return f"Thread({self.name!r}, depth={self.call_depth})"


def callable_name(fn: Any) -> str:
    if isinstance(fn, Callable):
        return fn.name
    return getattr(fn, "__name__", type_name(fn))


def call(thread: Thread, fn: Any, args: tuple = (), kwargs: dict[str, Any] | None = None) -> Any:
    """
    Invoke a host callable under thread.

    Args:
        thread: Execution context.
        fn: A sunlark Callable (e.g. Builtin) or a plain Python callable.
        args: Positional arguments.
        kwargs: Keyword arguments (optional).

    Returns:
        Whatever the callable returns.

    Raises:
        EvalError: if fn is not callable, the call depth limit is hit, or the
            callee raises a non-sunlark exception.
        SunlarkError: sunlark errors raised by the callee propagate unchanged.
    """
    name = callable_name(fn)
    if not is_callable(fn):
        raise EvalError(f"invalid call of non-function ({type_name(fn)})", callable_name=name)
    if thread.call_depth >= thread.max_call_depth:
        raise EvalError(
            f"{name}: call stack depth exceeds {thread.max_call_depth}",
            callable_name=name,
        )

    kwargs = kwargs or {}
    thread._stack.append(name)
    try:
        if isinstance(fn, Callable):
            return fn.call_internal(thread, tuple(args), kwargs)
        return fn(*args, **kwargs)
    except SunlarkError:
        raise
    except Exception as e:
        log.debug("call to %s failed on thread %s: %s", name, thread.name, e)
        raise EvalError(f"{name}: {e}", callable_name=name) from e
    finally:
        thread._stack.pop()
