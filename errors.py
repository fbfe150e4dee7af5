"""Errors raised while scanning or parsing an expression.

Every failure is reported through one exception hierarchy rooted at
`ExpressionError`, a `SyntaxError` subclass, so a caller can either catch
everything with `except SyntaxError` or dispatch on `error.kind`. Nothing in
the lexer or parser aborts the process; unsupported input is an ordinary
error like any other.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Optional

from tokens import Token, TokenType


class ErrorKind(Enum):
    INVALID_ENCODING = auto()
    INVALID_NUMERAL = auto()
    UNEXPECTED_TOKEN = auto()
    UNSUPPORTED_CONSTRUCT = auto()

    def __str__(self) -> str:
        return self.name


class ExpressionError(SyntaxError):
    """Base class for scan and parse failures.

    `position` is the byte offset in the source buffer where the problem
    was detected, or None when it is not known.
    """

    kind: ErrorKind

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class InvalidEncodingError(ExpressionError):
    kind = ErrorKind.INVALID_ENCODING


class InvalidNumeralError(ExpressionError):
    kind = ErrorKind.INVALID_NUMERAL


class UnexpectedTokenError(ExpressionError):
    """A specific token kind was required but another one was found."""

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, expected: TokenType, found: Token):
        super().__init__(f"expected {expected}, got {found.type}", found.start)
        self.expected = expected
        self.found = found


class UnsupportedConstructError(ExpressionError):
    """A token that cannot start an expression was found in lead position."""

    kind = ErrorKind.UNSUPPORTED_CONSTRUCT

    def __init__(self, token: Token, message: Optional[str] = None):
        super().__init__(
            message or f"{token.type} {token.lexeme!r} cannot start an expression",
            token.start,
        )
        self.token = token
