"""Builtin library registered via kite.runtime.

Every builtin validates its own argument count and kinds and reports
violations as KtError values; nothing here raises into the host.
"""

from __future__ import annotations

import re
import sys
from typing import List, Optional

from .runtime import (
    register_builtin,
    apply_function,
    KtArray,
    KtError,
    KtInteger,
    KtString,
    KtValue,
    Kind,
    KtBool,
    NULL,
)
from .utils import decimal_to_int

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

def _expect_arity(name: str, args: List[KtValue], expected: int) -> Optional[KtError]:
    if len(args) != expected:
        return KtError(f"wrong number of arguments to `{name}`: expected {expected}, got {len(args)}")

    return None

def _wrong_kind(name: str, expected: str, got: KtValue) -> KtError:
    return KtError(f"argument to `{name}` must be {expected}, got {got.kind()}")

# ---------- length ----------

@register_builtin("length", "len", "string.length", "list.length")
def std_length(args: List[KtValue]) -> KtValue:
    err = _expect_arity("length", args, 1)
    if err:
        return err

    match args[0]:
        case KtString(value=text):
            return KtInteger(len(text))
        case KtArray(elements=items):
            return KtInteger(len(items))
        case other:
            return _wrong_kind("length", "STRING or ARRAY", other)

# ---------- list group ----------

@register_builtin("list.first", "first")
def std_first(args: List[KtValue]) -> KtValue:
    err = _expect_arity("first", args, 1)
    if err:
        return err

    arr = args[0]
    if not isinstance(arr, KtArray):
        return _wrong_kind("first", "ARRAY", arr)

    if not arr.elements:
        return KtError("`first` called on an empty array")

    return arr.elements[0]

@register_builtin("list.last", "last")
def std_last(args: List[KtValue]) -> KtValue:
    err = _expect_arity("last", args, 1)
    if err:
        return err

    arr = args[0]
    if not isinstance(arr, KtArray):
        return _wrong_kind("last", "ARRAY", arr)

    if not arr.elements:
        return KtError("`last` called on an empty array")

    return arr.elements[-1]

@register_builtin("list.push", "push")
def std_push(args: List[KtValue]) -> KtValue:
    err = _expect_arity("push", args, 2)
    if err:
        return err

    arr, value = args
    if not isinstance(arr, KtArray):
        return _wrong_kind("push", "ARRAY", arr)

    return KtArray(arr.elements + [value])

@register_builtin("list.reverse", "reverse")
def std_reverse(args: List[KtValue]) -> KtValue:
    err = _expect_arity("reverse", args, 1)
    if err:
        return err

    arr = args[0]
    if not isinstance(arr, KtArray):
        return _wrong_kind("reverse", "ARRAY", arr)

    return KtArray(list(reversed(arr.elements)))

@register_builtin("list.concat")
def std_list_concat(args: List[KtValue]) -> KtValue:
    err = _expect_arity("list.concat", args, 2)
    if err:
        return err

    left, right = args
    if not isinstance(left, KtArray):
        return _wrong_kind("list.concat", "ARRAY", left)
    if not isinstance(right, KtArray):
        return _wrong_kind("list.concat", "ARRAY", right)

    return KtArray(left.elements + right.elements)

@register_builtin("list.partition", "partition")
def std_partition(args: List[KtValue]) -> KtValue:
    err = _expect_arity("partition", args, 2)
    if err:
        return err

    arr, predicate = args
    if not isinstance(arr, KtArray):
        return _wrong_kind("partition", "ARRAY", arr)
    if predicate.kind() not in (Kind.FUNCTION, Kind.BUILTIN):
        return _wrong_kind("partition", "FUNCTION", predicate)

    matched: List[KtValue] = []
    rest: List[KtValue] = []

    for item in arr.elements:
        verdict = apply_function(predicate, [item])

        if isinstance(verdict, KtError):
            return verdict

        if not isinstance(verdict, KtBool):
            return KtError(f"`partition` predicate must return BOOLEAN, got {verdict.kind()}")

        (matched if verdict.value else rest).append(item)

    return KtArray([KtArray(matched), KtArray(rest)])

# ---------- string group ----------

@register_builtin("string.concat", "concat")
def std_string_concat(args: List[KtValue]) -> KtValue:
    err = _expect_arity("string.concat", args, 2)
    if err:
        return err

    left, right = args
    if not isinstance(left, KtString):
        return _wrong_kind("string.concat", "STRING", left)
    if not isinstance(right, KtString):
        return _wrong_kind("string.concat", "STRING", right)

    return KtString(left.value + right.value)

# ---------- integers ----------

@register_builtin("int.parse")
def std_int_parse(args: List[KtValue]) -> KtValue:
    err = _expect_arity("int.parse", args, 1)
    if err:
        return err

    text = args[0]
    if not isinstance(text, KtString):
        return _wrong_kind("int.parse", "STRING", text)

    if not _INT_RE.fullmatch(text.value):
        return KtError("could not parse integer")

    try:
        return KtInteger(decimal_to_int(text.value))
    except ValueError:
        return KtError("could not parse integer")

# ---------- host I/O ----------

@register_builtin("print")
def std_print(args: List[KtValue]) -> KtValue:
    err = _expect_arity("print", args, 1)
    if err:
        return err

    sys.stdout.write(args[0].render() + "\n")
    sys.stdout.flush()
    return NULL

@register_builtin("readline")
def std_readline(args: List[KtValue]) -> KtValue:
    err = _expect_arity("readline", args, 0)
    if err:
        return err

    line = sys.stdin.readline()

    return KtString(line[:-1] if line.endswith("\n") else line)
