import enum
import re
from dataclasses import dataclass

from linecalc.utils import PrintableEnum, caret_under


@dataclass
class TokenizerError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    context_chars = 10

    def excerpt(self) -> tuple[str, int]:
        """The part of the line around the error and the error's column inside it"""
        start = max(0, self.error_char_idx - self.context_chars)
        end = min(len(self.code), self.error_char_idx + self.context_chars)
        head = "..." if start > 0 else ""
        tail = "..." if end < len(self.code) else ""
        return head + self.code[start:end] + tail, self.error_char_idx - start + len(head)

    def __str__(self) -> str:
        line, column = self.excerpt()
        return "\n".join([f"[Tokenizer error] {self.errmsg}", line, caret_under(column)])


class TokenType(PrintableEnum):
    INTEGER = enum.auto()
    FLOAT = enum.auto()
    RATIONAL = enum.auto()
    IDENTIFIER = enum.auto()
    HELP = enum.auto()
    ABOUT = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    PERCENT = enum.auto()
    EQUAL = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


# literals are atomic: no whitespace between sign, digits, "/" and "."
NUMBER_PATT = re.compile(r"-?[0-9]+(?:(?P<rational>/[0-9]+)|(?P<fraction>\.[0-9]+(?:[eE][+-]?[0-9]+)?))?")

# after one of these the parser wants an operator, so "-" cannot start a literal
OPERAND_END_TOKENS = {
    TokenType.INTEGER,
    TokenType.FLOAT,
    TokenType.RATIONAL,
    TokenType.IDENTIFIER,
    TokenType.HELP,
    TokenType.ABOUT,
    TokenType.BRACKET_CLOSE,
}

KEYWORD_TOKENS = {
    "help": TokenType.HELP,
    "about": TokenType.ABOUT,
}

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
    "=": TokenType.EQUAL,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


def _is_ascii_digit(s: str) -> bool:
    return "0" <= s <= "9"


def _is_valid_in_identifier(s: str) -> bool:
    # word characters, combining marks included
    return ("_" + s).isidentifier()


def _starts_number(code: str, i: int, tokens: list[Token]) -> bool:
    if _is_ascii_digit(code[i]):
        return True
    if code[i] != "-" or i + 1 >= len(code) or not _is_ascii_digit(code[i + 1]):
        return False
    return not tokens or tokens[-1].type not in OPERAND_END_TOKENS


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _starts_number(code, i, tokens):
            match = NUMBER_PATT.match(code, i)
            assert match is not None
            if match.group("rational"):
                token_type = TokenType.RATIONAL
            elif match.group("fraction"):
                token_type = TokenType.FLOAT
            else:
                token_type = TokenType.INTEGER
            tokens.append(Token(type=token_type, lexeme=match.group()))
            i = match.end()
            continue
        elif code[i].isalpha() or code[i] == "_":
            ident_end_idx = i + 1
            while ident_end_idx < len(code) and _is_valid_in_identifier(code[ident_end_idx]):
                ident_end_idx += 1
            ident = code[i:ident_end_idx]
            if ident in KEYWORD_TOKENS:
                if not code.startswith("()", ident_end_idx):
                    raise TokenizerError(f"{ident!r} is reserved, did you mean {ident + '()'!r}?", code, i)
                ident_end_idx += 2
                tokens.append(Token(type=KEYWORD_TOKENS[ident], lexeme=code[i:ident_end_idx]))
            else:
                tokens.append(Token(type=TokenType.IDENTIFIER, lexeme=ident))
            i = ident_end_idx
            continue
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i]))
        elif code[i].isspace():
            pass
        else:
            raise TokenizerError(f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i)
        i += 1

    if tokens:
        tokens.append(Token(type=TokenType.EXPR_END, lexeme=""))

    return tokens


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens).rstrip()

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)

    # 4 ^ 5 => 4^5
    result = re.sub(r"\s+\^\s+", "^", result)
    return result
