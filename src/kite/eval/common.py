from __future__ import annotations

from typing import Callable, List, Sequence, Union

from lark import Token

from ..runtime import Environment, KtError, KtInteger, KtString, KtValue, KiteRuntimeError
from ..tree import Node, ident_name, is_token
from ..utils import decimal_to_int

EvalFunc = Callable[[Node, Environment], KtValue]

def expect_ident(node: object, context: str) -> str:
    name = ident_name(node)

    if name is None:
        raise KiteRuntimeError(f"{context} must be an identifier")

    return name

def token_int(token: Token, _: Environment) -> KtInteger:
    return KtInteger(decimal_to_int(token.value))

def token_string(token: Token, _: Environment) -> KtString:
    # Prune already stripped the quotes and resolved escapes
    return KtString(str(token.value))

def eval_expressions(nodes: Sequence[Node], env: Environment, eval_func: EvalFunc) -> Union[List[KtValue], KtError]:
    """Evaluate left to right; the first Error wins and the rest are skipped."""
    values: List[KtValue] = []

    for node in nodes:
        val = eval_func(node, env)

        if isinstance(val, KtError):
            return val

        values.append(val)

    return values

def describe(node: object) -> str:
    if is_token(node):
        return f"{node.type}:{node.value}"

    return type(node).__name__
