from __future__ import annotations

from typing import List

from lark import Tree

from ..runtime import Environment, KtError, KtReturn, KtValue, NULL
from ..tree import Node
from .common import EvalFunc

def eval_program(statements: List[Node], env: Environment, eval_func: EvalFunc) -> KtValue:
    """Run top-level statements, unwrapping `return` at the program boundary."""
    result: KtValue = NULL

    for stmt in statements:
        result = eval_func(stmt, env)

        if isinstance(result, KtReturn):
            return result.value

        if isinstance(result, KtError):
            return result

    return result

def eval_block(statements: List[Node], env: Environment, eval_func: EvalFunc) -> KtValue:
    """Run a block; return signals and errors stop it and travel upward untouched."""
    result: KtValue = NULL

    for stmt in statements:
        result = eval_func(stmt, env)

        if isinstance(result, (KtReturn, KtError)):
            return result

    return result

def eval_return_stmt(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    val = eval_func(n.children[0], env)

    if isinstance(val, KtError):
        return val

    return KtReturn(val)
