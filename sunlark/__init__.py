# sunlark/__init__.py
"""
sunlark public API surface.

Lazy sequence primitives for an embedded scripting host:

    - Builtins / modules: BUILTINS_MODULE (map), ITERTOOLS_MODULE (count),
                          universe(), load_module()
    - Sequences: CountObject, CountIterator, MapObject, MapIterator
    - Numbers: NumericUnion, ExactInt, Float64
    - Host: Thread, call, Builtin, HostList, iter_values, take
    - Errors: ArgumentError, UnhashableTypeError, EvalError, TypeUnionConflict
"""

from __future__ import annotations

from .config import MapErrorPolicy
from .errors import (
    SunlarkError,
    ArgumentError,
    UnhashableTypeError,
    EvalError,
    TypeUnionConflict,
)

# ---------------------------------------------------------------------------
# Host values and execution context
# ---------------------------------------------------------------------------

from .core.value import (
    Value,
    Iterable,
    Iterator,
    Callable,
    Builtin,
    HostList,
    to_string,
    type_name,
    hash_value,
    freeze_value,
    iterate_value,
)
from .thread import Thread, call
from .iteration import iter_values, take

# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

from .core.numeric import NumericUnion, ExactInt, Float64

# ---------------------------------------------------------------------------
# Sequences and modules
# ---------------------------------------------------------------------------

from .count import CountObject, CountIterator, count_
from .map import MapObject, MapIterator, map_
from .module import Module, BUILTINS_MODULE, ITERTOOLS_MODULE, universe, load_module


__all__ = [
    # config / errors
    "MapErrorPolicy",
    "SunlarkError",
    "ArgumentError",
    "UnhashableTypeError",
    "EvalError",
    "TypeUnionConflict",

    # host
    "Value",
    "Iterable",
    "Iterator",
    "Callable",
    "Builtin",
    "HostList",
    "to_string",
    "type_name",
    "hash_value",
    "freeze_value",
    "iterate_value",
    "Thread",
    "call",
    "iter_values",
    "take",

    # numbers
    "NumericUnion",
    "ExactInt",
    "Float64",

    # sequences / modules
    "CountObject",
    "CountIterator",
    "count_",
    "MapObject",
    "MapIterator",
    "map_",
    "Module",
    "BUILTINS_MODULE",
    "ITERTOOLS_MODULE",
    "universe",
    "load_module",
]
