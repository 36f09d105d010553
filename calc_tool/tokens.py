"""Token types and the character classes the scanner works with."""

import re
from dataclasses import dataclass
from enum import Enum, auto

# locale-independent isspace(): no Unicode spaces
WHITESPACE = frozenset(" \t\n\r\f\v")

# digit+ ('.' digit*)?  -- at most one decimal point, no leading dot
LITERAL_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?")


class TokenType(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LITERAL = auto()


PUNCTUATION = {
    "+": TokenType.ADD,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    offset: int
    text: str
    value: float = 0.0
