from __future__ import annotations

from typing import List, Optional, Union

from lark import Tree

from ..runtime import Environment, KtError, KtFunction, KtValue, KiteRuntimeError
from ..tree import tree_children, tree_label
from .common import expect_ident

def extract_param_names(params_node: Optional[Tree]) -> Union[List[str], KtError]:
    if params_node is None:
        return []

    names: List[str] = []

    for p in tree_children(params_node):
        name = expect_ident(p, "Parameter")

        if name in names:
            return KtError(f"duplicate parameter: {name}")
        names.append(name)

    return names

def eval_fn_lit(n: Tree, env: Environment) -> KtValue:
    params_node, body = n.children

    if tree_label(body) != 'block':
        raise KiteRuntimeError("Function body must be a block")

    params = extract_param_names(params_node)
    if isinstance(params, KtError):
        return params

    # closes over the live defining scope, not a snapshot
    return KtFunction(params=params, body=body, env=env)
