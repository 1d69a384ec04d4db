from __future__ import annotations

"""
sunlark iterator CLI

Builds a count or map object through the registered builtins, pulls up to
--take values from it and emits one JSON document.

    python3 -m sunlark.iter_cli count 1 0.5 --take 4
    python3 -m sunlark.iter_cli map add "[1,2,3]" "[10,20]"
    python3 -m sunlark.iter_cli count --take 5 --freeze-after 2

Contract: emits JSON with schema tag + schema_doc.
Exit codes: 0 ok, 1 evaluation failed, 2 invalid input.
"""

import argparse
import datetime
import hashlib
import json
import math
import sys
from typing import Any, List, Optional

from sunlark.config import MapErrorPolicy
from sunlark.core.value import HostList, Value, to_string
from sunlark.errors import ArgumentError, EvalError
from sunlark.functions import get_function, list_function_names
from sunlark.logger import configure_logging, get_logger
from sunlark.module import BUILTINS_MODULE, ITERTOOLS_MODULE
from sunlark.thread import Thread, call

SCHEMA_TAG = "sunlark-iter-run.v1"
SCHEMA_DOC = "docs/iter_run_schema.md"

DEFAULT_TAKE = 10

log = get_logger(__name__)


def _utc_now_z() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _inputs_hash(primitive: str, operands: List[Any], take: int) -> str:
    payload = json.dumps(
        {"primitive": primitive, "operands": operands, "take": take},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _parse_json_operand(i: int, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"operand[{i}] must be JSON. Parse error: {e}") from e


def _to_json(value: Any) -> Any:
    """Map host values onto JSON-compatible values. Non-finite floats become "inf", "-inf" or "nan"."""
    if isinstance(value, (list, tuple, HostList)):
        return [_to_json(x) for x in value]
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, Value):
        return to_string(value)
    return value


def _build_args(primitive: str, operands: List[str]) -> tuple[Any, tuple, list[Any]]:
    """
    Resolve (builtin, host args, JSON echo of operands) for a primitive.

    Raises:
        ValueError: unknown primitive, unknown function or malformed JSON.
    """
    if primitive == "count":
        values = [_parse_json_operand(i, t) for i, t in enumerate(operands)]
        return ITERTOOLS_MODULE.get("count"), tuple(values), values

    if primitive == "map":
        if not operands:
            raise ValueError("map needs a function name, e.g. map square \"[1,2,3]\"")
        fn_name, rest = operands[0], operands[1:]
        fn = get_function(fn_name)
        if fn is None:
            raise ValueError(f"unknown function {fn_name!r}; known: {list_function_names()}")
        values = [_parse_json_operand(i + 1, t) for i, t in enumerate(rest)]
        sources = tuple(HostList(v) if isinstance(v, list) else v for v in values)
        return BUILTINS_MODULE.get("map"), (fn, *sources), [fn_name, *values]

    raise ValueError(f"unknown primitive {primitive!r}; expected 'count' or 'map'")


def _drive(obj: Any, thread: Thread, take: int, freeze_after: Optional[int]) -> tuple[List[Any], bool]:
    """Pull up to take values; returns (values, exhausted)."""
    out: List[Any] = []
    it = obj.iterate(thread)
    try:
        while len(out) < take:
            if freeze_after is not None and len(out) == freeze_after:
                obj.freeze()
            x, ok = it.next()
            if not ok:
                return out, True
            out.append(x)
        return out, False
    finally:
        it.done()


def _emit(payload: dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, ensure_ascii=False, allow_nan=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False, allow_nan=False))


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="iter_cli",
        description="Build a sunlark count/map object, pull values from it and emit JSON.",
    )
    ap.add_argument("--schema", action="store_true", help="Print schema tag + schema doc path and exit.")
    ap.add_argument("--list", action="store_true", help="List named map functions and exit.")
    ap.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    ap.add_argument("--take", type=int, default=DEFAULT_TAKE, help=f"Maximum values to pull (default {DEFAULT_TAKE}).")
    ap.add_argument("--freeze-after", type=int, default=None, help="Freeze the object after this many values.")
    ap.add_argument(
        "--map-errors",
        choices=[p.value for p in MapErrorPolicy],
        default=None,
        help="What map does when its function fails (default from SUNLARK_MAP_ERRORS).",
    )
    ap.add_argument("--log-level", default=None, help="Log level for sunlark loggers (stderr).")
    ap.add_argument("primitive", nargs="?", help="count or map")
    ap.add_argument("operands", nargs="*", help="count: [START [STEP]]; map: FUNC JSON_LIST [JSON_LIST ...]")

    args = ap.parse_args(argv)
    configure_logging(args.log_level)

    if args.schema:
        print(f"{SCHEMA_TAG} {SCHEMA_DOC}")
        return 0

    if args.list:
        for name in list_function_names():
            print(name)
        return 0

    if not args.primitive:
        ap.error("primitive is required unless --schema or --list is used")
    if args.take < 0:
        ap.error("--take must be >= 0")

    policy = MapErrorPolicy(args.map_errors) if args.map_errors else None
    thread = Thread("iter_cli", map_errors=policy)

    try:
        builtin, host_args, echo = _build_args(args.primitive, args.operands)
        obj = call(thread, builtin, host_args)
    except (ValueError, ArgumentError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    initial_repr = obj.string()
    warnings: List[str] = []
    try:
        out, exhausted = _drive(obj, thread, args.take, args.freeze_after)
        ok = True
    except EvalError as e:
        log.debug("evaluation failed: %s", e)
        out, exhausted = [], False
        ok = False
        warnings.append(str(e))

    payload: dict[str, Any] = {
        "schema": SCHEMA_TAG,
        "schema_doc": SCHEMA_DOC,
        "primitive": args.primitive,
        "args": _to_json(echo),
        "repr": initial_repr,
        "type": obj.type_name(),
        "output": _to_json(out),
        "exhausted": bool(exhausted),
        "ok": bool(ok),
        "warnings": warnings,
        "meta": {
            "tool": "iter_cli",
            "generated_at": _utc_now_z(),
            "determinism": {
                "inputs_hash": _inputs_hash(args.primitive, _to_json(echo), args.take),
            },
        },
    }

    _emit(payload, pretty=bool(args.pretty))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
