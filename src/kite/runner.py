from __future__ import annotations

import logging
import sys
import traceback
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from lark import Lark, Tree, UnexpectedInput

from .parse_auto import Prune, build_parser, pretty_inline, to_parse_error
from .evaluator import evaluate
from .runtime import Environment, KtError, KtNull, KtValue, KiteError, init_stdlib
from .utils import debug_py_trace_enabled, log_level, recursion_limit

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

DEFAULT_RECURSION_LIMIT = 10000

def _read_grammar(grammar_path: Optional[str]) -> str:
    if grammar_path:
        p = Path(grammar_path)
        if p.exists():
            return p.read_text(encoding="utf-8")

    if GRAMMAR_PATH.exists():
        return GRAMMAR_PATH.read_text(encoding="utf-8")

    raise FileNotFoundError("grammar.lark not found. pass an explicit path")

@lru_cache(maxsize=None)
def make_parser(grammar_path: Optional[str]=None) -> Lark:
    return build_parser(_read_grammar(grammar_path), parser_kind="lalr", start_sym="start")

def parse_source(src: str, grammar_path: Optional[str]=None) -> Tree:
    """Parse and prune; raises KiteParseError, so a bad tree never reaches the evaluator."""
    parser = make_parser(grammar_path)

    try:
        tree = parser.parse(src)
    except UnexpectedInput as exc:
        raise to_parse_error(exc) from None

    return Prune().transform(tree)

def ensure_recursion_limit() -> None:
    limit = recursion_limit() or DEFAULT_RECURSION_LIMIT

    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)

def run(src: str, env: Optional[Environment]=None, grammar_path: Optional[str]=None) -> KtValue:
    init_stdlib()
    ast = parse_source(src, grammar_path)
    ensure_recursion_limit()

    return evaluate(ast, env if env is not None else Environment())

def repl_eval(src: str, env: Environment) -> KtValue:
    """Evaluate one REPL entry against the session's persistent environment."""
    return run(src, env)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def main(argv: Optional[List[str]]=None) -> int:
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")

    grammar_path = None
    show_ast = False
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token == "--ast":
            show_ast = True
            continue

        if token.startswith("--grammar="):
            grammar_path = token.split("=", 1)[1]
            continue

        if token == "--grammar":
            try:
                grammar_path = next(it)
            except StopIteration:
                raise SystemExit("--grammar flag requires a path") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    if arg is None and sys.stdin.isatty():
        from .repl import repl  # prompt_toolkit only needed interactively
        repl()
        return 0

    source = _load_source(arg)

    try:
        if show_ast:
            print("\n".join(pretty_inline(parse_source(source, grammar_path))))
            return 0

        result = run(source, grammar_path=grammar_path)
    except KiteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            traceback.print_exc()
        return 1

    if isinstance(result, KtError):
        print(result.render(), file=sys.stderr)
        return 1

    if not isinstance(result, KtNull):
        print(result.render())

    return 0

if __name__ == "__main__":
    sys.exit(main())
