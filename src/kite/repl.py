"""Interactive REPL for Kite, powered by prompt_toolkit."""

from __future__ import annotations

import logging
import re
import sys
import traceback
from pathlib import Path
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from lark import UnexpectedInput

from .runner import ensure_recursion_limit, make_parser, repl_eval
from .runtime import Environment, KiteError, KtNull, KtValue, init_stdlib
from .utils import debug_py_trace_enabled, parse_switch, set_debug_py_trace

logger = logging.getLogger(__name__)

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/load": ("Evaluate a source file in the current environment", "PATH"),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}

_OPENERS = {"LBRACE", "LPAR", "LSQB"}
_CLOSERS = {"RBRACE", "RPAR", "RSQB"}


def open_depth(text: str) -> int:
    """Return how many brackets *text* leaves open (0 when balanced or unlexable)."""
    depth = 0

    try:
        for tok in make_parser().lex(text):
            if tok.type in _OPENERS:
                depth += 1
            elif tok.type in _CLOSERS:
                depth = max(depth - 1, 0)
    except UnexpectedInput:
        # let the parser report it on submit
        return 0

    return depth


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=f"{desc} {hint}".rstrip(),
                )


def _handle_slash(line: str, env_box: list[Environment]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        # bare command toggles
        wanted = parse_switch(arg) if arg else not debug_py_trace_enabled()
        if wanted is None:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        set_debug_py_trace(wanted)
        state = "on" if wanted else "off"
        print(f"Python traceback: {state}")
        return True

    if cmd == "/reset":
        env_box[0] = Environment()
        logger.debug("repl environment reset")
        print("Environment reset.")
        return True

    if cmd == "/load":
        if not arg:
            print("Usage: /load PATH", file=sys.stderr)
            return True

        path = Path(arg).expanduser()
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read {path}: {exc.strerror}", file=sys.stderr)
            return True

        logger.debug("repl loading %s", path)
        _eval_and_echo(source, env_box[0])
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def _eval_and_echo(text: str, env: Environment) -> None:
    try:
        result: KtValue = repl_eval(text, env)
    except KiteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            print("\nPython traceback:", file=sys.stderr)
            traceback.print_exc()
        return

    if not isinstance(result, KtNull):
        print(result.render())


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    init_stdlib()
    ensure_recursion_limit()
    # Use a mutable box so /reset can swap the environment.
    env_box: list[Environment] = [Environment()]

    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer

        # keep reading lines while a block or call is still open
        if open_depth(buf.text) > 0:
            buf.insert_text("\n" + "    " * open_depth(buf.text))
            return

        buf.validate_and_handle()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation=".. ",
    )

    print("kite repl - `exit` or Ctrl-D to quit, / for commands")

    while True:
        try:
            text = session.prompt(">> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if text.strip() == "exit":
            break

        if _handle_slash(text, env_box):
            continue

        _eval_and_echo(text, env_box[0])
