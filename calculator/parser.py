import logging
from dataclasses import dataclass, field

from calculator.errors import CalculatorError, ErrorKind, caret_lines
from calculator.tokenizer import Associativity, Token, TokenType, untokenize

logger = logging.getLogger(__name__)


@dataclass
class ParserError(CalculatorError):
    tokens: list[Token] = field(default_factory=list)
    error_token_idx: int = 0

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        return caret_lines(
            f"Parser error: {self.errmsg}", untokenize(self.tokens), len(untokenize(parsed_tokens))
        )


def format_postfix(tokens: list[Token]) -> str:
    return " ".join(t.lexeme for t in tokens)


def _should_pop(top: Token, incoming: Token) -> bool:
    if top.is_bracket():
        return False
    return top.precedence > incoming.precedence or (
        top.precedence == incoming.precedence and top.associativity is Associativity.LEFT
    )


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Shunting-yard: reorders an infix token stream into Reverse Polish order.

    The operator stack holds indices into ``tokens`` so that bracket errors can
    point at the offending bracket.
    """
    output: list[Token] = []
    stack: list[int] = []
    for i, token in enumerate(tokens):
        if token.type is TokenType.NUMBER:
            output.append(token)
        elif token.type is TokenType.BRACKET_OPEN:
            stack.append(i)
        elif token.type is TokenType.BRACKET_CLOSE:
            while stack and tokens[stack[-1]].type is not TokenType.BRACKET_OPEN:
                output.append(tokens[stack.pop()])
            if not stack:
                raise ParserError(
                    ErrorKind.UNMATCHED_CLOSING_PAREN, "Unmatched closing bracket", tokens=tokens, error_token_idx=i
                )
            stack.pop()
        else:
            while stack and _should_pop(tokens[stack[-1]], token):
                output.append(tokens[stack.pop()])
            stack.append(i)

    while stack:
        i = stack.pop()
        if tokens[i].type is TokenType.BRACKET_OPEN:
            raise ParserError(
                ErrorKind.UNMATCHED_OPENING_PAREN, "Unclosed bracket", tokens=tokens, error_token_idx=i
            )
        output.append(tokens[i])

    logger.debug("postfix: %s", format_postfix(output))
    return output
