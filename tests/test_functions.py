from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import KiteParseError, run_runtime_case

SCENARIOS = [
    pytest.param(
        "var f = function(a, b) { return a + b; }; f(2, 3)",
        ("int", 5),
        None,
        id="call-return",
    ),
    pytest.param(
        "var f = function(a, b) { a * b }; f(4, 5)",
        ("int", 20),
        None,
        id="implicit-result",
    ),
    pytest.param("function(x) { x }(7)", ("int", 7), None, id="immediate-call"),
    pytest.param("var f = function() { }; f()", ("null", None), None, id="empty-body"),
    pytest.param(
        "function(a, b) { a }",
        ("function", ["a", "b"]),
        None,
        id="fn-literal-value",
    ),
    pytest.param(
        "function(a, b) { a }",
        ("render", "function(a, b) { ... }"),
        None,
        id="fn-render",
    ),
    pytest.param(
        "function(a, a) { a }",
        ("error", "duplicate parameter: a"),
        None,
        id="fn-duplicate-param",
    ),
    pytest.param(
        "var f = function(a, b) { a }; f(1)",
        ("error", "wrong number of arguments: expected 2, got 1"),
        None,
        id="arity-too-few",
    ),
    pytest.param(
        "var f = function() { 1 }; f(1, 2)",
        ("error", "wrong number of arguments: expected 0, got 2"),
        None,
        id="arity-too-many",
    ),
    pytest.param("5(1)", ("error", "not a function: INTEGER"), None, id="call-non-function"),
    pytest.param('"f"()', ("error", "not a function: STRING"), None, id="call-string"),
    pytest.param(
        "missing(1)", ("error", "identifier not found: missing"), None, id="callee-error"
    ),
    pytest.param(
        "var f = function(a) { a }; f(1 / 0)",
        ("error", "division by zero"),
        None,
        id="argument-error",
    ),
    pytest.param(
        dedent(
            """\
            var f = function(x) {
              if (x > 0) { return 1; }
              return 2;
            };
            f(5)
        """
        ),
        ("int", 1),
        None,
        id="early-return",
    ),
    pytest.param(
        dedent(
            """\
            var f = function(x) {
              if (x > 0) {
                if (x > 10) { return "big"; }
                return "small";
              }
              "negative"
            };
            [f(50), f(3), f(-1)]
        """
        ),
        ("array", ["big", "small", "negative"]),
        None,
        id="nested-return",
    ),
    pytest.param(
        dedent(
            """\
            var inner = function() { return 1; };
            var outer = function() { inner(); 2 };
            outer()
        """
        ),
        ("int", 2),
        None,
        id="return-stops-at-call",
    ),
    pytest.param(
        dedent(
            """\
            var make = function(n) { function(x) { x + n } };
            var add2 = make(2);
            add2(40)
        """
        ),
        ("int", 42),
        None,
        id="closure",
    ),
    pytest.param(
        dedent(
            """\
            var counter = function() {
              var n = 0;
              var get = function() { n };
              n = 5;
              get
            };
            counter()()
        """
        ),
        ("int", 5),
        None,
        id="closure-sees-later-writes",
    ),
    pytest.param(
        dedent(
            """\
            var fact = function(n) {
              if (n < 2) { return 1; }
              n * fact(n - 1)
            };
            fact(20)
        """
        ),
        ("int", 2432902008176640000),
        None,
        id="recursion",
    ),
    pytest.param(
        dedent(
            """\
            var fib = function(n) {
              if (n < 2) { n } else { fib(n - 1) + fib(n - 2) }
            };
            fib(15)
        """
        ),
        ("int", 610),
        None,
        id="fib",
    ),
    pytest.param(
        dedent(
            """\
            var apply = function(f, x) { f(x) };
            apply(function(v) { v * 2 }, 21)
        """
        ),
        ("int", 42),
        None,
        id="higher-order",
    ),
    pytest.param(
        "var f = function() { return; }",
        None,
        KiteParseError,
        id="bare-return-is-syntax-error",
    ),
    pytest.param("return 3; 4", ("int", 3), None, id="top-level-return"),
    pytest.param(
        "var f = function() { return 1 / 0; }; f(); 5",
        ("error", "division by zero"),
        None,
        id="error-in-return-stops-program",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_functions(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
