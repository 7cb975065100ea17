from __future__ import annotations

from typing import List

from lark import Tree

from ..runtime import Environment, KtArray, KtError, KtInteger, KtReturn, KtValue, NULL
from .blocks import eval_block
from .common import EvalFunc, expect_ident
from .helpers import is_truthy

def eval_if_expr(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    cond_node, consequence, alternative = n.children
    cond = eval_func(cond_node, env)

    if isinstance(cond, KtError):
        return cond

    if is_truthy(cond):
        return eval_func(consequence, env)

    if alternative is not None:
        return eval_func(alternative, env)

    return NULL

def eval_for_stmt(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    """`for (elem[, idx] in source) { ... }` over an array bound in scope.

    Element and index are bound in the current scope for each pass and
    stay bound after the loop, so closures made in the body keep seeing
    them. A name already visible anywhere up the chain is rejected. The
    loop itself yields null; an Error or return signal from the body stops
    the loop and is passed up.
    """
    source_tok, elem_tok, index_tok, body = n.children
    source_name = expect_ident(source_tok, "Loop source")
    elem_name = expect_ident(elem_tok, "Loop variable")
    index_name = expect_ident(index_tok, "Loop index") if index_tok is not None else None

    source = env.get(source_name)

    if source is None:
        return KtError(f"identifier not found: {source_name}")

    if not isinstance(source, KtArray):
        return KtError(f"cannot iterate over {source.kind()}: loop source must be an ARRAY")

    if elem_name == index_name:
        return KtError(f"loop variable and index share the name: {elem_name}")

    binders: List[str] = [elem_name] + ([index_name] if index_name is not None else [])

    for name in binders:
        if env.get(name) is not None:
            return KtError(f"loop variable already in use: {name}")

    for idx, item in enumerate(list(source.elements)):
        if index_name is not None:
            env.set(index_name, KtInteger(idx))
        env.set(elem_name, item)

        result = eval_block(body.children, env, eval_func)

        if isinstance(result, (KtError, KtReturn)):
            return result

    return NULL
