"""Kite: a small dynamically-typed language with a tree-walking evaluator."""

import logging

from .runtime import (
    Builtins,
    Environment,
    FALSE,
    KiteError,
    KiteParseError,
    KiteRuntimeError,
    Kind,
    KtArray,
    KtBool,
    KtBuiltin,
    KtError,
    KtFunction,
    KtInteger,
    KtNull,
    KtReturn,
    KtString,
    KtValue,
    NULL,
    TRUE,
    apply_function,
    new_enclosed_environment,
    new_environment,
    register_builtin,
)
from .evaluator import evaluate
from .runner import parse_source, run

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Builtins",
    "Environment",
    "FALSE",
    "KiteError",
    "KiteParseError",
    "KiteRuntimeError",
    "Kind",
    "KtArray",
    "KtBool",
    "KtBuiltin",
    "KtError",
    "KtFunction",
    "KtInteger",
    "KtNull",
    "KtReturn",
    "KtString",
    "KtValue",
    "NULL",
    "TRUE",
    "apply_function",
    "evaluate",
    "new_enclosed_environment",
    "new_environment",
    "parse_source",
    "register_builtin",
    "run",
]
