"""
Diagnostic model shared by the scanner and the parser.

Public API:
- ErrorKind            -- what went wrong
- Diagnostic(kind, offset)
- Ok(value) / Err(diagnostic) and the Result alias
- render_diagnostic(diagnostic, source, indent=4) -> str

Malformed input is never raised; it comes back as an Err and the caller
decides how to show it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from calc_tool.tokens import LITERAL_PATTERN

T = TypeVar("T")

CARET_INDENT = 4
CARET_MARKER = "^---- Here"


class ErrorKind(Enum):
    INVALID_CHARACTER = "InvalidCharacter"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNEXPECTED_END_OF_INPUT = "UnexpectedEndOfInput"
    NESTING_TOO_DEEP = "NestingTooDeep"


@dataclass(frozen=True)
class Diagnostic:
    kind: ErrorKind
    offset: int

    def message(self, source: str) -> str:
        if self.kind is ErrorKind.INVALID_CHARACTER:
            return f"Unexpected Character: {_char_at(source, self.offset)!r}"
        if self.kind is ErrorKind.UNEXPECTED_TOKEN:
            return f"Unexpected Token: {_lexeme_at(source, self.offset)!r}"
        if self.kind is ErrorKind.NESTING_TOO_DEEP:
            return "Expression Nested Too Deeply"
        return "Unexpected End Of Input"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    diagnostic: Diagnostic

    @property
    def kind(self) -> ErrorKind:
        return self.diagnostic.kind

    @property
    def offset(self) -> int:
        return self.diagnostic.offset


Result = Union[Ok[T], Err]


def fail(kind: ErrorKind, offset: int) -> Err:
    return Err(Diagnostic(kind, offset))


def _char_at(source: str, offset: int) -> str:
    return source[offset] if 0 <= offset < len(source) else ""


def _lexeme_at(source: str, offset: int) -> str:
    match = LITERAL_PATTERN.match(source, offset)
    if match:
        return match.group()
    return _char_at(source, offset)


def render_diagnostic(diagnostic: Diagnostic, source: str, indent: int = CARET_INDENT) -> str:
    """Three lines: the message, the source line, and a caret under the offset."""
    # tabs are echoed so the caret lines up under tabbed input too
    lead = "".join("\t" if ch == "\t" else " " for ch in source[:diagnostic.offset])
    lead += " " * max(0, diagnostic.offset - len(source))
    pad = " " * indent
    return "\n".join([
        f"Error: {diagnostic.message(source)}",
        f"{pad}{source}",
        f"{pad}{lead}{CARET_MARKER}",
    ])
