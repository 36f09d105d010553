"""
Scanner: one source line -> token list.

scan(source) returns Ok([Token, ...]) or Err(INVALID_CHARACTER at offset).
The first bad character stops the scan; there is no resynchronization.
"""

import logging
from typing import List

from calc_tool.diagnostics import ErrorKind, Ok, Result, fail
from calc_tool.tokens import LITERAL_PATTERN, PUNCTUATION, WHITESPACE, Token, TokenType

logger = logging.getLogger(__name__)


def scan(source: str) -> Result[List[Token]]:
    if not isinstance(source, str):
        raise TypeError(f"source must be a string, not {type(source).__name__}")

    tokens: List[Token] = []
    position = 0
    while position < len(source):
        ch = source[position]
        if ch in WHITESPACE:
            position += 1
            continue

        kind = PUNCTUATION.get(ch)
        if kind is not None:
            tokens.append(Token(kind, position, ch))
            position += 1
            continue

        # ".234" never matches: a literal has to start with a digit
        match = LITERAL_PATTERN.match(source, position)
        if match is None:
            logger.debug("invalid character %r at offset %d", ch, position)
            return fail(ErrorKind.INVALID_CHARACTER, position)
        text = match.group()
        tokens.append(Token(TokenType.LITERAL, position, text, float(text)))
        position = match.end()

    return Ok(tokens)
