import logging
import math
import operator
from dataclasses import dataclass, field
from typing import Callable

from calculator.errors import CalculatorError, ErrorKind, caret_lines
from calculator.parser import format_postfix, to_postfix
from calculator.tokenizer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(CalculatorError):
    postfix: list[Token] = field(default_factory=list)
    error_token_idx: int = 0

    def __str__(self) -> str:
        evaluated = format_postfix(self.postfix[: self.error_token_idx])
        return caret_lines(
            f"Runtime error: {self.errmsg}",
            format_postfix(self.postfix),
            len(evaluated) + (1 if evaluated and self.error_token_idx < len(self.postfix) else 0),
        )


def _is_odd_integer(x: float) -> bool:
    return x % 2 == 1


def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def power(a: float, b: float) -> float:
    """IEEE pow: domain errors give nan, poles and overflow give a signed infinity"""
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


BinaryOperationImpl = Callable[[float, float], float]

BINARY_OPERATIONS: dict[TokenType, BinaryOperationImpl] = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
    TokenType.SLASH: divide,
    TokenType.CARET: power,
}


def evaluate_postfix(postfix: list[Token]) -> float:
    stack: list[float] = []
    for i, token in enumerate(postfix):
        if token.type is TokenType.NUMBER:
            stack.append(token.value)
            continue
        impl = BINARY_OPERATIONS.get(token.type)
        if impl is None:
            raise CalcRuntimeError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"Unexpected token in postfix expression: {token}",
                postfix=postfix,
                error_token_idx=i,
            )
        if len(stack) < 2:
            raise CalcRuntimeError(
                ErrorKind.INSUFFICIENT_OPERANDS,
                f"Operator {token.lexeme!r} needs two operands, found {len(stack)}",
                postfix=postfix,
                error_token_idx=i,
            )
        right = stack.pop()
        left = stack.pop()
        stack.append(impl(left, right))

    if len(stack) != 1:
        raise CalcRuntimeError(
            ErrorKind.MALFORMED_EXPRESSION,
            f"Expression leaves {len(stack)} values instead of one",
            postfix=postfix,
            error_token_idx=len(postfix),
        )
    return stack[0]


def evaluate(code: str) -> float:
    tokens = tokenize(code)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens: %s", " ".join(str(t) for t in tokens))
    result = evaluate_postfix(to_postfix(tokens))
    logger.debug("result of %r: %r", code, result)
    return result
