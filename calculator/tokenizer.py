import enum
import re
import string
from dataclasses import dataclass

from calculator.errors import CalculatorError, ErrorKind, caret_lines
from calculator.utils import PrintableEnum


@dataclass
class TokenizerError(CalculatorError):
    code: str = ""
    error_char_idx: int = 0
    lexeme: str = ""

    def __str__(self) -> str:
        if not self.code:
            return f"[Tokenizer error] {self.errmsg}"
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return caret_lines(
            f"[Tokenizer error] {self.errmsg}",
            (
                ("..." if print_ellipsis_pre else "")
                + f"{self.code[print_start_idx:print_end_idx]}"
                + ("..." if print_ellipsis_post else "")
            ),
            self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0),
        )


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

# precedence, associativity
OPERATOR_PROPERTIES: dict[TokenType, tuple[int, Associativity]] = {
    TokenType.PLUS: (2, Associativity.LEFT),
    TokenType.MINUS: (2, Associativity.LEFT),
    TokenType.STAR: (3, Associativity.LEFT),
    TokenType.SLASH: (3, Associativity.LEFT),
    TokenType.CARET: (4, Associativity.RIGHT),
}

NUMBER_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]*)?")


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    value: float = 0.0

    @property
    def precedence(self) -> int:
        return OPERATOR_PROPERTIES.get(self.type, (0, Associativity.RIGHT))[0]

    @property
    def associativity(self) -> Associativity:
        return OPERATOR_PROPERTIES.get(self.type, (0, Associativity.RIGHT))[1]

    def is_operator(self) -> bool:
        return self.type in OPERATOR_PROPERTIES

    def is_bracket(self) -> bool:
        return self.type is TokenType.BRACKET_OPEN or self.type is TokenType.BRACKET_CLOSE

    @classmethod
    def from_lexeme(cls, lexeme: str) -> "Token":
        if lexeme in SINGLE_CHAR_TOKENS:
            return cls(type=SINGLE_CHAR_TOKENS[lexeme], lexeme=lexeme)
        if NUMBER_PATTERN.fullmatch(lexeme):
            return cls(type=TokenType.NUMBER, lexeme=lexeme, value=float(lexeme))
        raise TokenizerError(ErrorKind.INVALID_LEXEME, f"Invalid lexeme: {lexeme!r}", lexeme=lexeme)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


class LexerState(PrintableEnum):
    START = enum.auto()
    SIGN = enum.auto()
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


class CharClass(PrintableEnum):
    DIGIT = enum.auto()
    POINT = enum.auto()
    MINUS = enum.auto()
    OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


class LexerAction(PrintableEnum):
    BUFFER = enum.auto()
    EMIT = enum.auto()


CHAR_CLASSES: dict[str, CharClass] = {
    **{digit: CharClass.DIGIT for digit in string.digits},
    ".": CharClass.POINT,
    "-": CharClass.MINUS,
    "+": CharClass.OPERATOR,
    "*": CharClass.OPERATOR,
    "/": CharClass.OPERATOR,
    "^": CharClass.OPERATOR,
    "(": CharClass.BRACKET_OPEN,
    ")": CharClass.BRACKET_CLOSE,
}


_OPERAND_EXPECTED = {
    CharClass.DIGIT: (LexerState.NUMBER, LexerAction.BUFFER),
    CharClass.MINUS: (LexerState.SIGN, LexerAction.BUFFER),
    CharClass.BRACKET_OPEN: (LexerState.BRACKET_OPEN, LexerAction.EMIT),
}

# a missing operand is reported by to_postfix or evaluate_postfix
_OPERAND_MISSING = {
    CharClass.OPERATOR: (LexerState.OPERATOR, LexerAction.EMIT),
    CharClass.BRACKET_CLOSE: (LexerState.BRACKET_CLOSE, LexerAction.EMIT),
}

_OPERATOR_EXPECTED = {
    CharClass.MINUS: (LexerState.OPERATOR, LexerAction.EMIT),
    CharClass.OPERATOR: (LexerState.OPERATOR, LexerAction.EMIT),
    CharClass.BRACKET_CLOSE: (LexerState.BRACKET_CLOSE, LexerAction.EMIT),
}

TRANSITIONS: dict[tuple[LexerState, CharClass], tuple[LexerState, LexerAction]] = {
    **{(LexerState.START, cc): t for cc, t in _OPERAND_EXPECTED.items()},
    **{(LexerState.OPERATOR, cc): t for cc, t in _OPERAND_EXPECTED.items()},
    **{(LexerState.BRACKET_OPEN, cc): t for cc, t in _OPERAND_EXPECTED.items()},
    **{(LexerState.OPERATOR, cc): t for cc, t in _OPERAND_MISSING.items()},
    **{(LexerState.BRACKET_OPEN, cc): t for cc, t in _OPERAND_MISSING.items()},
    (LexerState.SIGN, CharClass.DIGIT): (LexerState.NUMBER, LexerAction.BUFFER),
    (LexerState.NUMBER, CharClass.DIGIT): (LexerState.NUMBER, LexerAction.BUFFER),
    (LexerState.NUMBER, CharClass.POINT): (LexerState.NUMBER, LexerAction.BUFFER),
    (LexerState.NUMBER, CharClass.BRACKET_OPEN): (LexerState.BRACKET_OPEN, LexerAction.EMIT),
    **{(LexerState.NUMBER, cc): t for cc, t in _OPERATOR_EXPECTED.items()},
    **{(LexerState.BRACKET_CLOSE, cc): t for cc, t in _OPERATOR_EXPECTED.items()},
}

# states in which the input may end
FINAL_STATES = {LexerState.NUMBER, LexerState.BRACKET_OPEN, LexerState.BRACKET_CLOSE}


def tokenize(code: str) -> list[Token]:
    """Scans ``code`` left to right with the TRANSITIONS table.

    Digits, the point and a leading minus are buffered into a number literal; every
    other accepted character is a token on its own and closes the buffered literal.
    """
    tokens: list[Token] = []
    state = LexerState.START
    buffer = ""
    buffer_start_idx = 0

    def flush() -> None:
        nonlocal buffer
        if not buffer:
            return
        try:
            tokens.append(Token.from_lexeme(buffer))
        except TokenizerError as e:
            raise TokenizerError(
                e.kind, e.errmsg, code=code, error_char_idx=buffer_start_idx, lexeme=buffer
            ) from None
        buffer = ""

    for i, c in enumerate(code):
        char_class = CHAR_CLASSES.get(c)
        if char_class is None:
            raise TokenizerError(
                ErrorKind.INVALID_CHARACTER, f"Invalid character: {c!r}", code=code, error_char_idx=i, lexeme=c
            )
        transition = TRANSITIONS.get((state, char_class))
        if transition is None:
            raise TokenizerError(
                ErrorKind.INVALID_CHARACTER,
                f"Unexpected character: {c!r}",
                code=code,
                error_char_idx=i,
                lexeme=c,
            )
        state, action = transition
        if action is LexerAction.BUFFER:
            if not buffer:
                buffer_start_idx = i
            buffer += c
        else:
            flush()
            tokens.append(Token.from_lexeme(c))

    if state not in FINAL_STATES:
        raise TokenizerError(
            ErrorKind.UNEXPECTED_END, "Unexpected end of expression", code=code, error_char_idx=len(code)
        )
    flush()

    return tokens


def untokenize(tokens: list[Token]) -> str:
    return "".join(t.lexeme for t in tokens)
