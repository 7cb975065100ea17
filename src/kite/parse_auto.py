from __future__ import annotations

import logging
from typing import List, Optional

from lark import Lark, Token, Transformer, Tree, UnexpectedInput
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from .tree import Node, is_tree, tree_children, tree_label
from .types import KiteParseError

logger = logging.getLogger(__name__)

_ESCAPES = {
    'n': '\n',
    't': '\t',
    '"': '"',
    '\\': '\\',
}

def pretty_inline(t: Optional[Node], indent: str="") -> List[str]:
    lines = []

    if t is None:
        return [f"{indent}-"]

    if is_tree(t):
        lines.append(f"{indent}{tree_label(t)}")

        for c in tree_children(t):
            lines.extend(pretty_inline(c, indent + "  "))

        return lines

    return [f"{indent}{t.type.lower()}  {t.value}"]

def unescape_string(raw: str) -> str:
    body = raw[1:-1] if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"' else raw
    out: List[str] = []
    i = 0

    while i < len(body):
        ch = body[i]

        if ch == '\\' and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)

class Prune(Transformer):
    """Canonicalize the raw parse tree into the evaluator's node shapes.

    - `start`/`block` hold their statements directly (no `stmt_list` wrapper)
    - statement-level `if` becomes an `expr_stmt`
    - optional parts become fixed slots (`None` when absent) or empty `args`/`params`
    - STRING tokens carry their unescaped text
    """

    def start(self, c):
        return Tree('program', _statements(c))

    def block(self, c):
        return Tree('block', _statements(c))

    def if_stmt(self, c):
        return Tree('expr_stmt', c)

    def if_expr(self, c):
        cond, consequence, *rest = c
        alternative = rest[0] if rest else None
        return Tree('if_expr', [cond, consequence, alternative])

    def for_stmt(self, c):
        *names, body = c

        if len(names) == 3:
            element, index, source = names
        else:
            element, source = names
            index = None

        return Tree('for_stmt', [source, element, index, body])

    def call(self, c):
        callee, *rest = c
        return Tree('call', [callee, _as_args(rest)])

    def array(self, c):
        return Tree('array', list(_as_args(c).children))

    def fn_lit(self, c):
        *params, body = c
        names = list(params[0].children) if params else []
        return Tree('fn_lit', [Tree('params', names), body])

    def STRING(self, tok: Token) -> Token:
        return Token.new_borrow_pos('STRING', unescape_string(tok.value), tok)

def _statements(c) -> List[Node]:
    if c and is_tree(c[0]) and tree_label(c[0]) == 'stmt_list':
        return list(c[0].children)

    return list(c)

def _as_args(rest) -> Tree:
    if rest and is_tree(rest[0]) and tree_label(rest[0]) == 'arglist':
        return Tree('args', list(rest[0].children))

    return Tree('args', [])

def build_parser(grammar_text: str, parser_kind: str="lalr", start_sym: str="start") -> Lark:
    return Lark(
        grammar_text,
        parser=parser_kind,
        lexer="basic",
        start=start_sym,
        maybe_placeholders=False,
        propagate_positions=True,
    )

def to_parse_error(exc: UnexpectedInput) -> KiteParseError:
    line = _position(getattr(exc, "line", None))
    column = _position(getattr(exc, "column", None))
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    if isinstance(exc, UnexpectedToken):
        tok = exc.token

        if tok.type == '$END':
            message = "Unexpected end of input"
        else:
            message = f"Unexpected token {tok.value!r}"
            end_line = _position(getattr(tok, "end_line", None))
            end_column = _position(getattr(tok, "end_column", None))

        expected = sorted(exc.expected or ())
        if expected:
            message += f"; expected one of: {', '.join(expected)}"
    elif isinstance(exc, UnexpectedCharacters):
        message = f"Unexpected character {exc.char!r}"
    elif isinstance(exc, UnexpectedEOF):
        message = "Unexpected end of input"
    else:
        message = str(exc)

    if end_line is None and line is not None and column is not None:
        end_line, end_column = line, column + 1

    logger.debug("parse failed at %s:%s: %s", line, column, message)

    return KiteParseError(message, line, column, end_line, end_column)

def _position(value: Optional[int]) -> Optional[int]:
    if value is None or value < 0:
        return None

    return value
