from __future__ import annotations

from typing import List

from lark import Tree

from ..runtime import (
    Environment,
    KtArray,
    KtBool,
    KtError,
    KtInteger,
    KtNull,
    KtString,
    KtValue,
    native_bool,
)
from .common import EvalFunc
from .helpers import is_truthy

def eval_prefix(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    op_tok, operand = n.children
    right = eval_func(operand, env)

    if isinstance(right, KtError):
        return right

    return apply_prefix_operator(str(op_tok), right)

def apply_prefix_operator(op: str, right: KtValue) -> KtValue:
    match op:
        case '!':
            return native_bool(not is_truthy(right))
        case '-':
            if isinstance(right, KtInteger):
                return KtInteger(-right.value)
            return KtError(f"unknown operator: -{right.kind()}")

    return KtError(f"unknown operator: {op}{right.kind()}")

def eval_infix(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    left_node, op_tok, right_node = n.children

    # left to right; a left-hand Error stops before the right side runs
    left = eval_func(left_node, env)
    if isinstance(left, KtError):
        return left

    right = eval_func(right_node, env)
    if isinstance(right, KtError):
        return right

    return apply_infix_operator(str(op_tok), left, right)

def apply_infix_operator(op: str, left: KtValue, right: KtValue) -> KtValue:
    match (left, right):
        case (KtInteger(value=a), KtInteger(value=b)):
            return _integer_infix(op, a, b)
        case (KtString(), KtString()):
            return _string_infix(op, left, right)
        case (KtArray(), KtArray()):
            return _array_infix(op, left, right)

    match op:
        case '==':
            return native_bool(_same(left, right))
        case '!=':
            return native_bool(not _same(left, right))

    if left.kind() != right.kind():
        return KtError(f"type mismatch: {left.kind()} {op} {right.kind()}")

    return KtError(f"unknown operator: {left.kind()} {op} {right.kind()}")

def _integer_infix(op: str, a: int, b: int) -> KtValue:
    match op:
        case '+':
            return KtInteger(a + b)
        case '-':
            return KtInteger(a - b)
        case '*':
            return KtInteger(a * b)
        case '/':
            if b == 0:
                return KtError("division by zero")
            return KtInteger(_trunc_div(a, b))
        case '<':
            return native_bool(a < b)
        case '>':
            return native_bool(a > b)
        case '==':
            return native_bool(a == b)
        case '!=':
            return native_bool(a != b)

    return KtError(f"unknown operator: INTEGER {op} INTEGER")

def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q

def _string_infix(op: str, left: KtString, right: KtString) -> KtValue:
    match op:
        case '+':
            return KtString(left.value + right.value)
        case '==':
            return native_bool(left.value == right.value)

    return KtError(f"unknown operator: STRING {op} STRING")

def _array_infix(op: str, left: KtArray, right: KtArray) -> KtValue:
    match op:
        case '+':
            return KtArray(left.elements + right.elements)
        case '==':
            return native_bool(arrays_equal(left.elements, right.elements))

    return KtError(f"unknown operator: ARRAY {op} ARRAY")

def arrays_equal(lhs: List[KtValue], rhs: List[KtValue]) -> bool:
    if len(lhs) != len(rhs):
        return False

    for a, b in zip(lhs, rhs):
        eq = apply_infix_operator('==', a, b)

        if not (isinstance(eq, KtBool) and eq.value):
            return False

    return True

def _same(left: KtValue, right: KtValue) -> bool:
    match (left, right):
        case (KtBool(value=a), KtBool(value=b)):
            return a == b
        case (KtNull(), KtNull()):
            return True

    return left is right
