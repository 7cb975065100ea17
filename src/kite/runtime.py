from __future__ import annotations

import importlib
import logging
from typing import Callable, List, Optional, Sequence
from .types import (
    KtInteger, KtString, KtBool, KtNull, KtArray, KtFunction, KtBuiltin, KtReturn, KtError,
    KtValue, Kind, Environment, Builtins, BuiltinFn,
    TRUE, FALSE, NULL, native_bool,
    new_environment, new_enclosed_environment,
    KiteError, KiteParseError, KiteRuntimeError,
)

logger = logging.getLogger(__name__)

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load the builtin library (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("kite.stdlib")
    _STDLIB_INITIALIZED = True
    logger.debug("builtin library loaded (%d names)", len(Builtins.functions))

def register_builtin(name: str, *aliases: str) -> Callable[[BuiltinFn], BuiltinFn]:
    def dec(fn: BuiltinFn) -> BuiltinFn:
        builtin = KtBuiltin(name=name, fn=fn)

        for key in (name, *aliases):
            Builtins.functions[key] = builtin

        return fn

    return dec

def lookup_builtin(name: str) -> Optional[KtBuiltin]:
    init_stdlib()
    return Builtins.functions.get(name)

def apply_function(fn: KtValue, args: Sequence[KtValue]) -> KtValue:
    """Apply a user function or builtin to already-evaluated arguments."""
    match fn:
        case KtFunction():
            return _call_ktfn(fn, list(args))
        case KtBuiltin():
            return fn.fn(list(args))
        case _:
            return KtError(f"not a function: {fn.kind()}")

def _call_ktfn(fn: KtFunction, args: List[KtValue]) -> KtValue:
    from .evaluator import eval_node  # local import to avoid cycle

    if len(args) != len(fn.params):
        logger.debug("arity mismatch calling %r with %d args", fn, len(args))
        return KtError(f"wrong number of arguments: expected {len(fn.params)}, got {len(args)}")

    # activation scope hangs off the captured env, not the caller's
    callee_env = Environment(outer=fn.env)

    for name, val in zip(fn.params, args):
        callee_env.set(name, val)

    return unwrap_return(eval_node(fn.body, callee_env))

def unwrap_return(value: KtValue) -> KtValue:
    if isinstance(value, KtReturn):
        return value.value

    return value
