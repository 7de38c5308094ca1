import logging
import math
import operator
from typing import Callable, Type

from linecalc.environment import Environment
from linecalc.parser import (
    AboutQuery,
    Assignment,
    BinaryOperator,
    Expr,
    FloatLiteral,
    HelpQuery,
    IntLiteral,
    Node,
    ParserError,
    RationalLiteral,
    Symbol,
    parse,
)
from linecalc.tokenizer import TokenizerError, tokenize
from linecalc.value import BinaryOperationImpl, Error, Float, Info, InfoKind, Integer, Nil, Value

logger = logging.getLogger(__name__)

I128_MIN = -(2**127)
I128_MAX = 2**127 - 1

PARSING_ERROR = "parsing error"
UNSUPPORTED_OPERATION = "that operation isn't supported"
UNSUPPORTED_RATIONAL = "rational numbers aren't supported yet"
DIVISION_BY_ZERO = "division by zero"
INTEGER_OVERFLOW = "integer overflow"
NUMERIC_OVERFLOW = "numeric overflow"
MATH_DOMAIN_ERROR = "math domain error"
NESTED_TOO_DEEPLY = "expression is nested too deeply"


def evaluate(env: Environment, code: str) -> Value:
    """Evaluates one input line against ``env``. Never raises: every failure is an ``Error`` value."""
    try:
        tokens = tokenize(code)
        if not tokens:
            return Error("")
        statement = parse(tokens)
    except (TokenizerError, ParserError) as e:
        logger.debug("Rejected %r:\n%s", code, e)
        return Error(PARSING_ERROR)
    except RecursionError:
        logger.debug("Rejected %r: brackets nested too deeply", code)
        return Error(PARSING_ERROR)
    try:
        return evaluate_node(statement, env)
    except RecursionError:
        return Error(NESTED_TOO_DEEPLY)


def evaluate_node(node: Node, env: Environment) -> Value:
    if isinstance(node, Assignment):
        env.assign(node.target.name, evaluate_node(node.value, env))
        return Nil()
    elif isinstance(node, Expr):
        return climb(node, env)
    elif isinstance(node, Symbol):
        value = env.lookup(node.name)
        if value is None:
            return Error(f"no variable named {node.name}")
        return value
    elif isinstance(node, IntLiteral):
        return _integer_literal(node.text)
    elif isinstance(node, FloatLiteral):
        return Float(float(node.text))
    elif isinstance(node, RationalLiteral):
        return Error(UNSUPPORTED_RATIONAL)
    elif isinstance(node, HelpQuery):
        return Info(InfoKind.HELP)
    elif isinstance(node, AboutQuery):
        return Info(InfoKind.ABOUT)
    else:
        raise RuntimeError(f"Unexpected node type: {node}")


def get_op_precedence(op: BinaryOperator) -> int:
    return {
        BinaryOperator.ADD: 1,
        BinaryOperator.SUB: 1,
        BinaryOperator.MUL: 2,
        BinaryOperator.DIV: 2,
        BinaryOperator.POW: 3,
        BinaryOperator.REM: 4,
    }[op]


def is_rtl_op(op: BinaryOperator) -> bool:
    return op is BinaryOperator.POW


def _binds_tighter(next_op: BinaryOperator, op: BinaryOperator) -> bool:
    if get_op_precedence(next_op) == get_op_precedence(op):
        return is_rtl_op(next_op)
    return get_op_precedence(next_op) > get_op_precedence(op)


def climb(expr: Expr, env: Environment) -> Value:
    """Resolves the flat operand/operator chain of ``expr`` by operator precedence"""

    def primary(i: int) -> Value:
        return evaluate_node(expr.operands[i], env)

    result, _ = _climb(expr.operators, primary, primary(0), 0, min_precedence=0)
    return result


def _climb(
    operators: list[BinaryOperator],
    primary: Callable[[int], Value],
    lhs: Value,
    i: int,
    min_precedence: int,
) -> tuple[Value, int]:
    # operator i sits between operands i and i + 1
    while i < len(operators) and get_op_precedence(operators[i]) >= min_precedence:
        op = operators[i]
        i += 1
        rhs = primary(i)
        while i < len(operators) and _binds_tighter(operators[i], op):
            next_precedence = get_op_precedence(op) + (1 if get_op_precedence(operators[i]) > get_op_precedence(op) else 0)
            rhs, i = _climb(operators, primary, rhs, i, next_precedence)
        lhs = apply_operator(op, lhs, rhs)
    return lhs, i


def apply_operator(op: BinaryOperator, a: Value, b: Value) -> Value:
    if isinstance(a, Error):
        return a
    if isinstance(b, Error):
        return b
    table, op_name = OPERATION_TABLES[op]
    return eval_binary_operation(table=table, a=a, b=b, op_name=op_name)


BinaryOperationImplTable = list[tuple[tuple[Type[Value], Type[Value]], BinaryOperationImpl]]


def eval_binary_operation(table: BinaryOperationImplTable, a: Value, b: Value, op_name: str) -> Value:
    for (type_a, type_b), impl in table:
        if isinstance(a, type_a) and isinstance(b, type_b):
            try:
                result = impl(a, b)
            except ZeroDivisionError:
                return Error(DIVISION_BY_ZERO)
            except OverflowError as e:
                logger.debug("%s of %s and %s overflowed: %s", op_name, a, b, e)
                return Error(NUMERIC_OVERFLOW)
            except ValueError as e:
                logger.debug("%s of %s and %s is outside the domain: %s", op_name, a, b, e)
                return Error(MATH_DOMAIN_ERROR)
            if isinstance(result, Integer):
                return _checked_integer(result.v)
            return result
    else:
        logger.debug("%s is not defined for %s and %s", op_name, a.type_name(), b.type_name())
        return Error(UNSUPPORTED_OPERATION)


def _checked_integer(v: int) -> Value:
    if not I128_MIN <= v <= I128_MAX:
        return Error(INTEGER_OVERFLOW)
    return Integer(v)


def _integer_literal(text: str) -> Value:
    # 39 digits cover the whole 128-bit range; longer runs never reach int()
    digits = text.lstrip("-").lstrip("0")
    if len(digits) > len(str(I128_MAX)):
        return Error(INTEGER_OVERFLOW)
    v = int(digits or "0")
    return _checked_integer(-v if text.startswith("-") else v)


def _int_div(a: int, b: int) -> int:
    """Division truncating toward zero"""
    if b == 0:
        raise ZeroDivisionError
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _int_rem(a: int, b: int) -> int:
    return a - b * _int_div(a, b)


def _float_rem(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError
    return math.fmod(a, b)


def _float_pow(a: float, b: float) -> float:
    if a == 0 and b < 0:
        raise ZeroDivisionError
    return math.pow(a, b)


def _int_pow(a: Integer, b: Integer) -> Value:
    if b.v < 0:
        return Float(float(a.v) ** b.v)
    # anything but -1, 0 and 1 leaves the 128-bit range long before that
    if abs(a.v) > 1 and b.v > 127:
        return Error(INTEGER_OVERFLOW)
    return Integer(a.v**b.v)


def _numeric_impls(int_op: Callable[[int, int], int], float_op: Callable[[float, float], float]) -> BinaryOperationImplTable:
    return [
        ((Integer, Integer), lambda a, b: Integer(int_op(a.v, b.v))),  # type: ignore
        ((Float, Float), lambda a, b: Float(float_op(a.v, b.v))),  # type: ignore
        ((Integer, Float), lambda a, b: Float(float_op(float(a.v), b.v))),  # type: ignore
        ((Float, Integer), lambda a, b: Float(float_op(a.v, float(b.v)))),  # type: ignore
    ]


add_impls = _numeric_impls(operator.add, operator.add)
sub_impls = _numeric_impls(operator.sub, operator.sub)
mul_impls = _numeric_impls(operator.mul, operator.mul)
div_impls = _numeric_impls(_int_div, operator.truediv)
rem_impls = _numeric_impls(_int_rem, _float_rem)
pow_impls: BinaryOperationImplTable = [
    ((Integer, Integer), _int_pow),  # type: ignore
    ((Float, Float), lambda a, b: Float(_float_pow(a.v, b.v))),  # type: ignore
    ((Integer, Float), lambda a, b: Float(_float_pow(float(a.v), b.v))),  # type: ignore
    ((Float, Integer), lambda a, b: Float(_float_pow(a.v, float(b.v)))),  # type: ignore
]

OPERATION_TABLES: dict[BinaryOperator, tuple[BinaryOperationImplTable, str]] = {
    BinaryOperator.ADD: (add_impls, "Addition"),
    BinaryOperator.SUB: (sub_impls, "Subtraction"),
    BinaryOperator.MUL: (mul_impls, "Multiplication"),
    BinaryOperator.DIV: (div_impls, "Division"),
    BinaryOperator.POW: (pow_impls, "Power"),
    BinaryOperator.REM: (rem_impls, "Remainder"),
}
