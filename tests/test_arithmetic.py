import math

import pytest

from linecalc.environment import Environment
from linecalc.parser import BinaryOperator
from linecalc.runtime import (
    DIVISION_BY_ZERO,
    INTEGER_OVERFLOW,
    MATH_DOMAIN_ERROR,
    NUMERIC_OVERFLOW,
    PARSING_ERROR,
    UNSUPPORTED_OPERATION,
    UNSUPPORTED_RATIONAL,
    apply_operator,
    evaluate,
)
from linecalc.value import Error, Float, Info, InfoKind, Integer, Nil, Value


@pytest.fixture
def env() -> Environment:
    return Environment()


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", Integer(1)),
        pytest.param("-1", Integer(-1)),
        pytest.param("007", Integer(7)),
        pytest.param("-007", Integer(-7)),
        pytest.param("1+2", Integer(3)),
        pytest.param("(1 + 4)", Integer(5)),
        pytest.param("(((1)))", Integer(1)),
        pytest.param("5 -3", Integer(2)),
        pytest.param("1 - -1", Integer(2)),
        pytest.param("10 - 4 - 3", Integer(3)),
        pytest.param("100 / 10 / 5", Integer(2)),
        pytest.param("2 + 3 * 4", Integer(14)),
        pytest.param("1 * 4 + 5", Integer(9)),
        pytest.param("10 + 2 * (5 + 3 - 1)", Integer(24)),
        pytest.param("2 ^ 3 ^ 2", Integer(512)),
        pytest.param("(2 ^ 3) ^ 2", Integer(64)),
        pytest.param("8 / 2 ^ 1 / 2", Integer(2)),
        pytest.param("10 % 3 + 1", Integer(2)),
        pytest.param("2 * 3 % 2", Integer(2)),
        pytest.param("2 ^ 3 % 2", Integer(2)),
        pytest.param("2 + 3 * 4 ^ 2 % 3", Integer(50)),
        pytest.param("3 / 4", Integer(0)),
        pytest.param("7 / 2", Integer(3)),
        pytest.param("-7 / 2", Integer(-3)),
        pytest.param("-7 % 2", Integer(-1)),
        pytest.param("7 % -2", Integer(1)),
        pytest.param("2 ^ 126", Integer(2**126)),
        pytest.param("-2 ^ 127", Integer(-(2**127))),
        pytest.param("0" * 5000 + "1", Integer(1)),
        pytest.param("-" + "0" * 5000 + "7", Integer(-7)),
        pytest.param("00170141183460469231731687303715884105727", Integer(2**127 - 1)),
    ],
)
def test_eval_integer_arithmetic(env: Environment, code: str, expected_ret_val: Value) -> None:
    assert evaluate(env, code) == expected_ret_val


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1 + 2.5", Float(3.5)),
        pytest.param("2.5 + 1", Float(3.5)),
        pytest.param("0.5 * 4", Float(2.0)),
        pytest.param("7.0 / 2", Float(3.5)),
        pytest.param("7.5 % 2", Float(1.5)),
        pytest.param("-8829.5 + 0.5", Float(-8829.0)),
        pytest.param("1.5e3 * 2", Float(3000.0)),
        pytest.param("2.5E-1", Float(0.25)),
        pytest.param("4 ^ 0.5", Float(2.0)),
        pytest.param("2.0 ^ 3", Float(8.0)),
        pytest.param("2 ^ -1", Float(0.5)),
        pytest.param("pi", Float(math.pi)),
        pytest.param("π", Float(math.pi)),
        pytest.param("e", Float(math.e)),
    ],
)
def test_eval_float_arithmetic(env: Environment, code: str, expected_ret_val: Value) -> None:
    assert evaluate(env, code) == expected_ret_val


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1 / 0", Error(DIVISION_BY_ZERO)),
        pytest.param("1.0 / 0", Error(DIVISION_BY_ZERO)),
        pytest.param("1 % 0", Error(DIVISION_BY_ZERO)),
        pytest.param("1.5 % 0.0", Error(DIVISION_BY_ZERO)),
        pytest.param("0 ^ -1", Error(DIVISION_BY_ZERO)),
        pytest.param("0.0 ^ -1", Error(DIVISION_BY_ZERO)),
        pytest.param("0 ^ -0.5", Error(DIVISION_BY_ZERO)),
        pytest.param("0.0 ^ -1.5", Error(DIVISION_BY_ZERO)),
        pytest.param("2 ^ 127", Error(INTEGER_OVERFLOW)),
        pytest.param("3 ^ 100000000000", Error(INTEGER_OVERFLOW)),
        pytest.param("170141183460469231731687303715884105727 + 1", Error(INTEGER_OVERFLOW)),
        pytest.param("999999999999999999999999999999999999999999", Error(INTEGER_OVERFLOW)),
        pytest.param("1" * 5000, Error(INTEGER_OVERFLOW)),
        pytest.param("-" + "9" * 5000, Error(INTEGER_OVERFLOW)),
        pytest.param("2 + " + "1" * 5000, Error(INTEGER_OVERFLOW)),
        pytest.param("10.0 ^ 400", Error(NUMERIC_OVERFLOW)),
        pytest.param("(-8.0) ^ 0.5", Error(MATH_DOMAIN_ERROR)),
        pytest.param("3/4", Error(UNSUPPORTED_RATIONAL)),
        pytest.param("-1/9", Error(UNSUPPORTED_RATIONAL)),
        pytest.param("1 + 3/4", Error(UNSUPPORTED_RATIONAL)),
        pytest.param("y + 1", Error("no variable named y")),
        pytest.param("(1 / 0) + y", Error(DIVISION_BY_ZERO)),
        pytest.param("1 + y * z", Error("no variable named y")),
    ],
)
def test_eval_errors(env: Environment, code: str, expected_ret_val: Value) -> None:
    assert evaluate(env, code) == expected_ret_val


@pytest.mark.parametrize(
    "code",
    [
        "1 +",
        "(1 + 2",
        "1 + 2)",
        "()",
        "1 2",
        "-(1 + 2)",
        "- 3",
        "-x",
        "1.",
        ".5",
        "1e5",
        "1 $ 2",
        "help",
        "help ()",
        "help() + 1",
        "x = help()",
        "a = b = 10",
        "1 = 2",
        "x =",
    ],
)
def test_eval_parsing_error(env: Environment, code: str) -> None:
    assert evaluate(env, code) == Error(PARSING_ERROR)


@pytest.mark.parametrize("code", ["", "   ", "\t"])
def test_eval_empty_input(env: Environment, code: str) -> None:
    assert evaluate(env, code) == Error("")


def test_info_queries(env: Environment) -> None:
    assert evaluate(env, "help()") == Info(InfoKind.HELP)
    assert evaluate(env, "  about()  ") == Info(InfoKind.ABOUT)
    assert "ans" not in env.variables


def test_assignment_and_lookup(env: Environment) -> None:
    assert evaluate(env, "x = 5") == Nil()
    assert evaluate(env, "x + 1") == Integer(6)
    assert evaluate(env, "x_2 = x * 2.5") == Nil()
    assert evaluate(env, "x_2") == Float(12.5)


def test_assignment_stores_errors(env: Environment) -> None:
    assert evaluate(env, "x = y") == Nil()
    assert env.lookup("x") == Error("no variable named y")
    assert evaluate(env, "x + 1") == Error("no variable named y")


def test_constants_can_be_shadowed(env: Environment) -> None:
    assert evaluate(env, "pi = 1") == Nil()
    assert evaluate(env, "pi") == Integer(1)
    assert evaluate(env, "π") == Float(math.pi)


def test_reevaluation_is_idempotent(env: Environment) -> None:
    evaluate(env, "r = 2")
    first = evaluate(env, "pi * r ^ 2 + 1")
    assert evaluate(env, "pi * r ^ 2 + 1") == first


def test_non_numeric_operands_are_unsupported(env: Environment) -> None:
    env.assign("h", Info(InfoKind.HELP))
    assert evaluate(env, "h + 1") == Error(UNSUPPORTED_OPERATION)
    assert apply_operator(BinaryOperator.MUL, Integer(2), Nil()) == Error(UNSUPPORTED_OPERATION)


def test_error_operand_propagates() -> None:
    assert apply_operator(BinaryOperator.ADD, Error("boom"), Integer(1)) == Error("boom")
    assert apply_operator(BinaryOperator.POW, Float(1.0), Error("bang")) == Error("bang")


def test_deep_nesting_does_not_raise(env: Environment) -> None:
    code = "(" * 5000 + "1" + ")" * 5000
    assert isinstance(evaluate(env, code), Error)
