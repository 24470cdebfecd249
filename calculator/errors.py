import enum
from dataclasses import dataclass

from calculator.utils import PrintableEnum


class ErrorKind(PrintableEnum):
    INVALID_CHARACTER = enum.auto()
    INVALID_LEXEME = enum.auto()
    UNEXPECTED_END = enum.auto()
    UNMATCHED_CLOSING_PAREN = enum.auto()
    UNMATCHED_OPENING_PAREN = enum.auto()
    INSUFFICIENT_OPERANDS = enum.auto()
    MALFORMED_EXPRESSION = enum.auto()


@dataclass
class CalculatorError(Exception):
    """Base for every error the evaluation pipeline raises; the first one aborts the call"""

    kind: ErrorKind
    errmsg: str

    def __str__(self) -> str:
        return self.errmsg


def caret_lines(header: str, rendered: str, caret_idx: int) -> str:
    return "\n".join([header, rendered, " " * caret_idx + "^"])
