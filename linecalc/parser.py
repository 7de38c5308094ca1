import enum
from dataclasses import dataclass, field

from linecalc.tokenizer import Token, TokenType, untokenize
from linecalc.utils import PrintableEnum, caret_under


@dataclass
class ParserError(Exception):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        offset = len(untokenize(parsed_tokens)) + 1 if parsed_tokens else 0
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), caret_under(offset)])


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    POW = enum.auto()
    REM = enum.auto()


BINARY_OPERATOR_TOKENS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
    TokenType.CARET: BinaryOperator.POW,
    TokenType.PERCENT: BinaryOperator.REM,
}


@dataclass
class Symbol:
    name: str


@dataclass
class IntLiteral:
    text: str


@dataclass
class FloatLiteral:
    text: str


@dataclass
class RationalLiteral:
    text: str


@dataclass
class HelpQuery:
    pass


@dataclass
class AboutQuery:
    pass


@dataclass
class Expr:
    """Flat ``term (operator term)*`` chain; nesting is resolved at evaluation time"""

    operands: list["Term"]
    operators: list[BinaryOperator] = field(default_factory=list)


@dataclass
class Assignment:
    target: Symbol
    value: Expr


Term = IntLiteral | FloatLiteral | RationalLiteral | Symbol | Expr
Statement = Assignment | Expr | HelpQuery | AboutQuery
Node = Statement | Term


def parse(tokens: list[Token]) -> Statement:
    """Parses a single statement, the token list must cover the whole input line"""
    if not tokens:
        raise ParserError("Empty statement", tokens=tokens, error_token_idx=0)
    statement, i = _consume_statement(tokens, 0)
    if tokens[i].type is not TokenType.EXPR_END:
        raise ParserError(f"Binary operator expected, found {tokens[i].type}", tokens=tokens, error_token_idx=i)
    return statement


def _consume_statement(tokens: list[Token], i: int) -> tuple[Statement, int]:
    first = tokens[i]
    if first.type is TokenType.HELP:
        return HelpQuery(), i + 1
    elif first.type is TokenType.ABOUT:
        return AboutQuery(), i + 1
    elif first.type is TokenType.IDENTIFIER and tokens[i + 1].type is TokenType.EQUAL:
        value, i = _consume_expression(tokens, i + 2)
        return Assignment(target=Symbol(first.lexeme), value=value), i
    else:
        return _consume_expression(tokens, i)


def _consume_expression(tokens: list[Token], i: int) -> tuple[Expr, int]:
    operand, i = _consume_operand(tokens, i)
    expr = Expr(operands=[operand])
    while tokens[i].type in BINARY_OPERATOR_TOKENS:
        expr.operators.append(BINARY_OPERATOR_TOKENS[tokens[i].type])
        operand, i = _consume_operand(tokens, i + 1)
        expr.operands.append(operand)
    return expr, i


def _consume_operand(tokens: list[Token], i: int) -> tuple[Term, int]:
    first = tokens[i]
    if first.type is TokenType.INTEGER:
        return IntLiteral(first.lexeme), i + 1
    elif first.type is TokenType.FLOAT:
        return FloatLiteral(first.lexeme), i + 1
    elif first.type is TokenType.RATIONAL:
        return RationalLiteral(first.lexeme), i + 1
    elif first.type is TokenType.IDENTIFIER:
        return Symbol(first.lexeme), i + 1
    elif first.type is TokenType.BRACKET_OPEN:
        if tokens[i + 1].type is TokenType.BRACKET_CLOSE:
            raise ParserError("Empty parenthesis", tokens=tokens, error_token_idx=i + 1)
        inner, j = _consume_expression(tokens, i + 1)
        if tokens[j].type is not TokenType.BRACKET_CLOSE:
            raise ParserError("Unclosed bracket", tokens=tokens, error_token_idx=j)
        return inner, j + 1
    else:
        raise ParserError(f"Operand expected, found {first.type}", tokens=tokens, error_token_idx=i)
