from __future__ import annotations

import logging
from typing import Callable, Optional

from lark import Token, Tree

from .runtime import (
    Environment,
    KtArray,
    KtError,
    KtValue,
    FALSE,
    TRUE,
    KiteRuntimeError,
    init_stdlib,
    unwrap_return,
)
from .tree import Node, is_token, is_tree

from .eval.bind import eval_assign_stmt, eval_identifier, eval_var_stmt
from .eval.blocks import eval_block, eval_program, eval_return_stmt
from .eval.chains import eval_call, eval_index
from .eval.common import describe, eval_expressions, token_int, token_string
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_fn_lit
from .eval.loops import eval_for_stmt, eval_if_expr

logger = logging.getLogger(__name__)

# ---------------- Public API ----------------

def evaluate(ast: Node, env: Optional[Environment]=None) -> KtValue:
    """Evaluate a syntax tree; never hands a return signal back to the caller."""
    init_stdlib()

    if env is None:
        env = Environment()

    try:
        result = eval_node(ast, env)
    except RecursionError:
        logger.debug("recursion limit hit while evaluating %s", describe_node(ast))
        return KtError("maximum recursion depth exceeded")

    return unwrap_return(result)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> KtValue:
    if is_token(n):
        return _eval_token(n, env)

    if not is_tree(n):
        raise KiteRuntimeError(f"Unknown node: {describe(n)}")

    handler = _NODE_DISPATCH.get(n.data)
    if handler is None:
        raise KiteRuntimeError(f"Unknown node: {n.data}")

    return handler(n, env)

def describe_node(n: Node) -> str:
    return str(n.data) if is_tree(n) else describe(n)

# ---------------- Tokens ----------------

def _eval_token(t: Token, env: Environment) -> KtValue:
    handler = _TOKEN_DISPATCH.get(t.type)
    if handler is None:
        raise KiteRuntimeError(f"Unhandled token {t.type}:{t.value}")

    return handler(t, env)

def _eval_array(n: Tree, env: Environment) -> KtValue:
    elements = eval_expressions(n.children, env, eval_node)

    if isinstance(elements, KtError):
        return elements

    return KtArray(elements)

# ---------------- Dispatch tables ----------------

_NODE_DISPATCH: dict[str, Callable[[Tree, Environment], KtValue]] = {
    'program': lambda n, env: eval_program(n.children, env, eval_node),
    'block': lambda n, env: eval_block(n.children, env, eval_node),
    'expr_stmt': lambda n, env: eval_node(n.children[0], env),
    'var_stmt': lambda n, env: eval_var_stmt(n, env, eval_node),
    'assign_stmt': lambda n, env: eval_assign_stmt(n, env, eval_node),
    'return_stmt': lambda n, env: eval_return_stmt(n, env, eval_node),
    'for_stmt': lambda n, env: eval_for_stmt(n, env, eval_node),
    'if_expr': lambda n, env: eval_if_expr(n, env, eval_node),
    'fn_lit': eval_fn_lit,
    'call': lambda n, env: eval_call(n, env, eval_node),
    'index': lambda n, env: eval_index(n, env, eval_node),
    'infix': lambda n, env: eval_infix(n, env, eval_node),
    'prefix': lambda n, env: eval_prefix(n, env, eval_node),
    'array': _eval_array,
}

_TOKEN_DISPATCH: dict[str, Callable[[Token, Environment], KtValue]] = {
    'INT': token_int,
    'STRING': token_string,
    'TRUE': lambda _, __: TRUE,
    'FALSE': lambda _, __: FALSE,
    'IDENT': eval_identifier,
}
