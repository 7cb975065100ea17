"""Shared helpers for working with the lark Tree/Token nodes the parser produces."""
from __future__ import annotations
from typing import List, Optional, Union
from typing_extensions import TypeAlias, TypeGuard

from lark import Token, Tree

Node: TypeAlias = Union[Tree, Token]


def is_tree(node: object) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: object) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: object) -> Optional[str]:
    return str(node.data) if is_tree(node) else None

def tree_children(node: object) -> List[Node]:
    if not is_tree(node):
        return []

    return list(node.children)

def token_kind(node: object) -> Optional[str]:
    if not is_token(node):
        return None

    return str(node.type)

def ident_name(node: object) -> Optional[str]:
    if is_token(node) and token_kind(node) == 'IDENT':
        return str(node.value)

    return None
