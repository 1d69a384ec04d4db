# sunlark/functions.py
"""
In-memory registry of named host functions.

Lets the CLI (and tests) refer to map functions by name, e.g.
`map add [1,2,3] [10,20]`, instead of passing Python callables around.

- register_function(name, fn)
- get_function(name)
- has_function(name)
- clear_registry()
- list_function_names()

The default functions are seeded lazily on first lookup.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from sunlark.core.value import to_string

_REGISTRY: Dict[str, Callable[..., Any]] = {}


def register_function(name: str, fn: Callable[..., Any]) -> None:
    """Register (or overwrite) a named function."""
    _REGISTRY[name] = fn


def get_function(name: str) -> Callable[..., Any] | None:
    """Return the named function, or None if not registered."""
    _ensure_defaults()
    return _REGISTRY.get(name)


def has_function(name: str) -> bool:
    _ensure_defaults()
    return name in _REGISTRY


def clear_registry() -> None:
    """Remove all registered functions. Defaults come back on next lookup."""
    _REGISTRY.clear()


def list_function_names() -> list[str]:
    """Registered names, sorted for stability."""
    _ensure_defaults()
    return sorted(_REGISTRY.keys())


# ---------------------------------------------------------------------------
# Default functions
# ---------------------------------------------------------------------------

def _add(*xs: Any) -> Any:
    total = 0
    for x in xs:
        total = total + x
    return total


def _mul(*xs: Any) -> Any:
    product = 1
    for x in xs:
        product = product * x
    return product


def _square(x: Any) -> Any:
    return x * x


def _neg(x: Any) -> Any:
    return -x


def _pair(*xs: Any) -> tuple:
    return tuple(xs)


def _str(x: Any) -> str:
    return to_string(x)


def _ensure_defaults() -> None:
    defaults = {
        "add": _add,
        "mul": _mul,
        "square": _square,
        "neg": _neg,
        "pair": _pair,
        "str": _str,
    }
    for name, fn in defaults.items():
        _REGISTRY.setdefault(name, fn)
