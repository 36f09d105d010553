"""
Recursive-descent parser.

    term    := factor (('+' | '-') factor)*
    factor  := primary (('*' | '/') primary)*
    primary := LITERAL | '(' term ')'

Every rule returns Ok(tree) or Err(diagnostic) and every caller checks before
going on; the first error aborts the parse and the partial tree goes with it.
"""

import logging
from typing import List, Optional, Sequence

from calc_tool.diagnostics import Err, ErrorKind, Ok, Result, fail
from calc_tool.tokens import Token, TokenType
from calc_tool.tree import Binary, Expression, Literal, Operator

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_OPERATORS = {
    TokenType.ADD: Operator.ADD,
    TokenType.SUB: Operator.SUB,
    TokenType.MUL: Operator.MUL,
    TokenType.DIV: Operator.DIV,
}


class Parser:
    def __init__(self, tokens: Sequence[Token], end_offset: int, max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens: List[Token] = list(tokens)
        self.end_offset = end_offset
        self.max_depth = max_depth
        self.position = 0
        self.depth = 0
        self.open_offset = 0

    def parse(self) -> Result[Expression]:
        try:
            result = self._term()
        except RecursionError:
            # a max_depth above what the interpreter stack holds
            return fail(ErrorKind.NESTING_TOO_DEEP, self.open_offset)
        if isinstance(result, Err):
            return result
        leftover = self._peek()
        if leftover is not None:
            return fail(ErrorKind.UNEXPECTED_TOKEN, leftover.offset)
        return result

    # ------------------- token cursor -------------------
    def _peek(self) -> Optional[Token]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _match(self, *types: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type in types

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _end_of_input(self) -> Err:
        return fail(ErrorKind.UNEXPECTED_END_OF_INPUT, self.end_offset)

    # ------------------- grammar -------------------
    def _term(self) -> Result[Expression]:
        result = self._factor()
        if isinstance(result, Err):
            return result
        expr = result.value

        while self._match(TokenType.ADD, TokenType.SUB):
            op = _OPERATORS[self._advance().type]
            rhs = self._factor()
            if isinstance(rhs, Err):
                return rhs
            expr = Binary(op, expr, rhs.value)

        return Ok(expr)

    def _factor(self) -> Result[Expression]:
        result = self._primary()
        if isinstance(result, Err):
            return result
        expr = result.value

        while self._match(TokenType.MUL, TokenType.DIV):
            op = _OPERATORS[self._advance().type]
            rhs = self._primary()
            if isinstance(rhs, Err):
                return rhs
            expr = Binary(op, expr, rhs.value)

        return Ok(expr)

    def _primary(self) -> Result[Expression]:
        token = self._peek()
        if token is None:
            return self._end_of_input()

        if token.type is TokenType.LITERAL:
            self._advance()
            return Ok(Literal(token.value))

        if token.type is TokenType.LEFT_PAREN:
            if self.depth >= self.max_depth:
                return fail(ErrorKind.NESTING_TOO_DEEP, token.offset)
            self._advance()
            self.open_offset = token.offset
            self.depth += 1
            inner = self._term()
            self.depth -= 1
            if isinstance(inner, Err):
                return inner

            closing = self._peek()
            if closing is None:
                return self._end_of_input()
            if closing.type is not TokenType.RIGHT_PAREN:
                return fail(ErrorKind.UNEXPECTED_TOKEN, closing.offset)
            self._advance()
            return inner

        return fail(ErrorKind.UNEXPECTED_TOKEN, token.offset)


def parse(tokens: Sequence[Token], end_offset: int, max_depth: int = DEFAULT_MAX_DEPTH) -> Result[Expression]:
    """Parse a whole token list; `end_offset` is where an exhausted stream is reported."""
    result = Parser(tokens, end_offset, max_depth).parse()
    if isinstance(result, Err):
        logger.debug("parse failed: %s at offset %d", result.kind.value, result.offset)
    return result
