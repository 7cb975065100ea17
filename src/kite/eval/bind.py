from __future__ import annotations

from lark import Token, Tree

from ..runtime import Environment, KtError, KtValue, NULL, lookup_builtin
from .common import EvalFunc, expect_ident

def eval_identifier(tok: Token, env: Environment) -> KtValue:
    name = str(tok.value)
    val = env.get(name)

    if val is not None:
        return val

    # user bindings shadow builtins of the same name
    builtin = lookup_builtin(name)
    if builtin is not None:
        return builtin

    return KtError(f"identifier not found: {name}")

def eval_var_stmt(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    name_tok, value_node = n.children
    return _bind(expect_ident(name_tok, "Variable name"), value_node, env, eval_func)

def eval_assign_stmt(n: Tree, env: Environment, eval_func: EvalFunc) -> KtValue:
    # same write path as `var`: the innermost scope, no "undeclared" failure
    name_tok, value_node = n.children
    return _bind(expect_ident(name_tok, "Assignment target"), value_node, env, eval_func)

def _bind(name: str, value_node, env: Environment, eval_func: EvalFunc) -> KtValue:
    val = eval_func(value_node, env)

    if isinstance(val, KtError):
        return val

    env.set(name, val)
    return NULL
