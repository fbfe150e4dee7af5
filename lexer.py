"""
Lexer for algebraic expressions.

Overview:
- This module implements a small hand-written scanner that turns an
    expression into a stream of `Token` objects defined in `tokens.py`.
- It recognizes single-character operators and punctuation
    (`( ) - + * / ^ % = ,`), the two-character comparisons `<=`, `>=` and
    `!=` (a bare `!` is factorial), integer and decimal numerals, and
    identifiers. Identifiers are mapped to builtin functions or special
    variables through `self.keywords`.

Examples:
    Input:  "3.3x^2 - sin(theta)"
    Tokens: [FLOAT(3.3), VARIABLE('x'), CARET, INTEGER(2), MINUS,
             BUILTIN_FUNCTION('sin'), LPAREN, SPECIAL_VARIABLE('theta'),
             RPAREN, END]

Implementation notes:
- The source is held as bytes. `self.start` marks the first byte of the
    token being scanned and `self.pos` the next unread byte; a token's
    lexeme is the slice between them, decoded as UTF-8.
- Tokens are produced on demand. Scanned but unconsumed tokens wait in a
    FIFO queue so the parser can peek arbitrarily far ahead with
    `peek_token(idx)` without losing anything.
- An identifier is any run of bytes up to the next delimiter, so `x2`,
    `f'` and `.5` are all single identifiers. Digits only start a numeral
    when they lead a token.
- Once the input is exhausted every further request yields an END token.
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Deque, List, Optional

from tokens import (
    DELIMITERS,
    KEYWORDS,
    MAX_INTEGER,
    WHITESPACE,
    Token,
    TokenType,
)
from errors import InvalidEncodingError, InvalidNumeralError

logger = logging.getLogger(__name__)


class Lexer:
    def __init__(self, text: str | bytes):
        self.source = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self.start = 0
        self.pos = 0
        self.tokens: Deque[Token] = deque()
        self.keywords = dict(KEYWORDS)

    @property
    def current_char(self) -> Optional[bytes]:
        """Next unread byte, or None at end of input."""
        return self.source[self.pos : self.pos + 1] or None

    def peek_char(self) -> Optional[bytes]:
        """Look one byte past the current one without consuming anything."""
        return self.source[self.pos + 1 : self.pos + 2] or None

    def advance(self) -> None:
        """Advance to next byte."""
        self.pos += 1

    def skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def is_digit(self) -> bool:
        return self.current_char is not None and self.current_char.isdigit()

    def lexeme(self) -> str:
        """Decode the bytes of the token currently being scanned."""
        try:
            return self.source[self.start : self.pos].decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                f"invalid utf-8 in token: {e.reason}", self.start
            ) from e

    def make_token(self, token_type: TokenType) -> Token:
        return Token(token_type, self.lexeme(), None, self.start, self.pos)

    def number(self) -> Token:
        """Scan an integer or a decimal numeral."""
        while self.is_digit():
            self.advance()

        if self.current_char != b".":
            text = self.lexeme()
            try:
                value = int(text)
            except ValueError as e:
                raise InvalidNumeralError(f"invalid integer {text!r}", self.start) from e
            if value > MAX_INTEGER:
                raise InvalidNumeralError(
                    f"integer {text} does not fit in 64 bits", self.start
                )
            return Token(TokenType.INTEGER, text, value, self.start, self.pos)

        # Consume the decimal point; at least one fractional digit must follow.
        self.advance()
        if not self.is_digit():
            raise InvalidNumeralError(
                f"expected digits after decimal point in {self.lexeme()!r}",
                self.start,
            )
        while self.is_digit():
            self.advance()

        text = self.lexeme()
        try:
            value = float(text)
        except ValueError as e:
            raise InvalidNumeralError(f"invalid number {text!r}", self.start) from e
        return Token(TokenType.FLOAT, text, value, self.start, self.pos)

    def identifier(self) -> Token:
        """Scan a name and classify it against the keyword table."""
        while self.current_char is not None and self.current_char not in DELIMITERS:
            self.advance()

        name = self.lexeme()
        token_type = self.keywords.get(name, TokenType.VARIABLE)
        return Token(token_type, name, None, self.start, self.pos)

    def scan_token(self) -> Token:
        """Scan exactly one token starting at the cursor."""
        self.skip_whitespace()
        self.start = self.pos

        char = self.current_char
        if char is None:
            return self.make_token(TokenType.END)

        # Handle two-character operators first so `<=` is not lexed as `<` `=`.
        if self.peek_char() == b"=":
            match char:
                case b"<":
                    token_type = TokenType.LTE
                case b">":
                    token_type = TokenType.GTE
                case b"!":
                    token_type = TokenType.NEQ
                case _:
                    token_type = None
            if token_type is not None:
                self.advance()
                self.advance()
                return self.make_token(token_type)

        match char:
            case b"(":
                token_type = TokenType.LPAREN
            case b")":
                token_type = TokenType.RPAREN
            case b"-":
                token_type = TokenType.MINUS
            case b"+":
                token_type = TokenType.PLUS
            case b"*":
                token_type = TokenType.STAR
            case b"/":
                token_type = TokenType.SLASH
            case b"^":
                token_type = TokenType.CARET
            case b"%":
                token_type = TokenType.PERCENT
            case b"=":
                token_type = TokenType.EQUAL
            case b",":
                token_type = TokenType.COMMA
            case b"<":
                token_type = TokenType.LT
            case b">":
                token_type = TokenType.GT
            case b"!":
                token_type = TokenType.FACTORIAL
            case _:
                token_type = None

        if token_type is not None:
            self.advance()
            return self.make_token(token_type)

        if char.isdigit():
            return self.number()

        return self.identifier()

    def next_token(self) -> Token:
        """Return and consume the next token."""
        if not self.tokens:
            self.tokens.append(self.scan_token())
        return self.tokens.popleft()

    def peek_token(self, idx: int = 0) -> Token:
        """Return the token `idx` places ahead without consuming anything.

        Looking past the end returns the queued END; at most one END is
        ever queued.
        """
        while len(self.tokens) <= idx:
            if self.tokens and self.tokens[-1].type == TokenType.END:
                return self.tokens[-1]
            self.tokens.append(self.scan_token())
        return self.tokens[idx]

    def scan_all(self) -> List[Token]:
        """Return all remaining tokens, ending with the END token."""
        while not self.tokens or self.tokens[-1].type != TokenType.END:
            self.tokens.append(self.scan_token())
        tokens = list(self.tokens)
        self.tokens.clear()
        logger.debug("scanned %d tokens from %d bytes", len(tokens), len(self.source))
        return tokens
