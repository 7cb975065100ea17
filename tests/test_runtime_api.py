from __future__ import annotations

import sys

import pytest
from lark import Token, Tree

from kite import (
    Environment,
    Kind,
    KiteRuntimeError,
    KtArray,
    KtBool,
    KtBuiltin,
    KtError,
    KtFunction,
    KtInteger,
    KtNull,
    KtReturn,
    KtString,
    NULL,
    TRUE,
    apply_function,
    evaluate,
    new_enclosed_environment,
    new_environment,
    parse_source,
    run,
)
from kite.eval.expr import apply_infix_operator, apply_prefix_operator
from kite.eval.helpers import is_truthy


def _int(n: int) -> Token:
    return Token("INT", str(n))


def _ident(name: str) -> Token:
    return Token("IDENT", name)


def test_environment_get_set_and_missing() -> None:
    env = new_environment()
    env.set("a", KtInteger(1))

    assert env.get("a") == KtInteger(1)
    assert env.get("b") is None


def test_environment_shadowing_leaves_outer_untouched() -> None:
    outer = Environment()
    outer.set("x", KtInteger(1))
    inner = new_enclosed_environment(outer)

    assert inner.get("x") == KtInteger(1)

    inner.set("x", KtInteger(2))
    assert inner.get("x") == KtInteger(2)
    assert outer.get("x") == KtInteger(1)


def test_environment_sees_later_outer_writes() -> None:
    outer = Environment()
    inner = Environment(outer=outer)
    outer.set("late", KtString("v"))

    assert inner.get("late") == KtString("v")
    assert inner.has_local("late") is False


@pytest.mark.parametrize(
    "value, kind, rendered",
    [
        pytest.param(KtInteger(-3), Kind.INTEGER, "-3", id="integer"),
        pytest.param(KtString("hi"), Kind.STRING, "hi", id="string"),
        pytest.param(KtBool(True), Kind.BOOLEAN, "true", id="bool"),
        pytest.param(NULL, Kind.NULL, "null", id="null"),
        pytest.param(
            KtArray([KtInteger(1), KtString("a")]), Kind.ARRAY, '[1, "a"]', id="array"
        ),
        pytest.param(KtReturn(KtInteger(4)), Kind.RETURN_VALUE, "4", id="return"),
        pytest.param(KtError("boom"), Kind.ERROR, "ERROR: boom", id="error"),
    ],
)
def test_kind_and_render(value, kind, rendered) -> None:
    assert value.kind() is kind
    assert str(value.kind()) == kind.value
    assert value.render() == rendered


def test_function_and_builtin_kinds() -> None:
    fn = run("function(a) { a }")
    builtin = run("int.parse")

    assert isinstance(fn, KtFunction)
    assert fn.kind() is Kind.FUNCTION
    assert isinstance(builtin, KtBuiltin)
    assert builtin.kind() is Kind.BUILTIN
    assert builtin.render() == "builtin int.parse"


def test_evaluate_hand_built_tree() -> None:
    # var x = 5; x + 3
    program = Tree(
        "program",
        [
            Tree("var_stmt", [_ident("x"), _int(5)]),
            Tree("expr_stmt", [Tree("infix", [_ident("x"), Token("PLUS", "+"), _int(3)])]),
        ],
    )

    assert evaluate(program, Environment()) == KtInteger(8)


def test_evaluate_unwraps_return_signal() -> None:
    result = evaluate(Tree("return_stmt", [_int(9)]), Environment())

    assert result == KtInteger(9)
    assert not isinstance(result, KtReturn)


def test_evaluate_keeps_environment_between_calls() -> None:
    env = Environment()
    evaluate(parse_source("var n = 2;"), env)

    assert evaluate(parse_source("n * 21"), env) == KtInteger(42)


def test_evaluate_rejects_unknown_node() -> None:
    with pytest.raises(KiteRuntimeError):
        evaluate(Tree("while_stmt", []), Environment())


def test_evaluate_converts_runaway_recursion() -> None:
    env = Environment()
    tree = parse_source("var f = function(n) { f(n + 1) }; f(0)")
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(1000)
    try:
        result = evaluate(tree, env)
    finally:
        sys.setrecursionlimit(previous)

    assert isinstance(result, KtError)
    assert result.message == "maximum recursion depth exceeded"


def test_apply_function_user_function() -> None:
    env = Environment()
    fn = run("function(a, b) { a * b }", env)

    assert apply_function(fn, [KtInteger(6), KtInteger(7)]) == KtInteger(42)
    assert apply_function(fn, [KtInteger(6)]) == KtError(
        "wrong number of arguments: expected 2, got 1"
    )


def test_apply_function_activation_scope_is_fresh() -> None:
    env = Environment()
    fn = run("function(a) { var local = a; local }", env)
    apply_function(fn, [KtInteger(1)])

    assert env.get("local") is None
    assert env.get("a") is None


def test_apply_function_builtin_and_non_callable() -> None:
    length = run("length")

    assert apply_function(length, [KtString("abc")]) == KtInteger(3)
    assert apply_function(KtInteger(1), []) == KtError("not a function: INTEGER")


def test_apply_function_unwraps_return() -> None:
    fn = run("function() { return 5; 6 }")

    assert apply_function(fn, []) == KtInteger(5)


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(TRUE, True, id="true"),
        pytest.param(KtBool(False), False, id="false-copy"),
        pytest.param(KtNull(), False, id="null-copy"),
        pytest.param(KtInteger(0), True, id="zero"),
        pytest.param(KtString(""), True, id="empty-string"),
        pytest.param(KtArray([]), True, id="empty-array"),
    ],
)
def test_truthiness(value, expected) -> None:
    assert is_truthy(value) is expected
    assert apply_prefix_operator("!", value) == KtBool(not expected)


def test_equality_is_reflexive_for_plain_values() -> None:
    for value in (KtInteger(3), KtString("s"), KtBool(False), NULL, KtArray([KtInteger(1)])):
        assert apply_infix_operator("==", value, value) == KtBool(True)


def test_builtins_compare_equal_by_name() -> None:
    assert run("list.first") == run("first")
