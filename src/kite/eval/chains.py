from __future__ import annotations

from lark import Tree

from ..runtime import Environment, KtArray, KtError, KtInteger, KtValue, NULL, apply_function
from .common import EvalFunc, eval_expressions

def eval_call(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    callee_node, args_node = n.children
    callee = eval_func(callee_node, env)

    if isinstance(callee, KtError):
        return callee

    args = eval_expressions(args_node.children, env, eval_func)
    if isinstance(args, KtError):
        return args

    return apply_function(callee, args)

def eval_index(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    left_node, index_node = n.children
    left = eval_func(left_node, env)

    if isinstance(left, KtError):
        return left

    index = eval_func(index_node, env)
    if isinstance(index, KtError):
        return index

    return index_value(left, index)

def index_value(left: KtValue, index: KtValue) -> KtValue:
    match (left, index):
        case (KtArray(elements=items), KtInteger(value=i)):
            if 0 <= i < len(items):
                return items[i]
            return NULL

    return KtError(f"index operator not supported: {left.kind()}[{index.kind()}]")
