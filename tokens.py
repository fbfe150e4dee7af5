"""Token definitions for the expression lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the lexer and a small immutable `Token` dataclass that holds a token type,
the exact source lexeme and, for numerals, the parsed value. Tokens are the
atomic units produced by the lexer and consumed by the parser.

A token remembers where it came from through the byte offsets `start` and
`end` into the lexer's source buffer. Offsets do not take part in equality:
two tokens compare equal when their type, lexeme and value agree, which is
what lets two ASTs built from differently spaced input compare equal.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional


class TokenType(Enum):
    # Grouping and punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Arithmetic operators
    MINUS = auto()
    PLUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()
    PERCENT = auto()
    FACTORIAL = auto()

    # Equality and comparison operators
    EQUAL = auto()
    LT = auto()
    GT = auto()
    LTE = auto()
    GTE = auto()
    NEQ = auto()

    # Names
    VARIABLE = auto()
    SPECIAL_VARIABLE = auto()
    BUILTIN_FUNCTION = auto()

    # Literals
    INTEGER = auto()
    FLOAT = auto()

    # Special
    END = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str = ""
    value: Optional[int | float] = None
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)
    # Set only on the multiplication the parser infers from adjacency.
    implicit: bool = field(default=False, compare=False)

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type}, {self.lexeme!r})"
        return f"Token({self.type}, {self.lexeme!r}, {self.value!r})"

    @property
    def length(self) -> int:
        return self.end - self.start


BUILTIN_FUNCTIONS: FrozenSet[str] = frozenset(
    {"sin", "cos", "tan", "csc", "sec", "cot", "sigma", "ln", "log"}
)

SPECIAL_VARIABLES: FrozenSet[str] = frozenset({"theta", "dx", "dy", "dtheta"})

KEYWORDS: Dict[str, TokenType] = {
    **{name: TokenType.BUILTIN_FUNCTION for name in BUILTIN_FUNCTIONS},
    **{name: TokenType.SPECIAL_VARIABLE for name in SPECIAL_VARIABLES},
}

# Bytes the lexer treats as whitespace (ASCII only; vertical tab excluded).
WHITESPACE: FrozenSet[bytes] = frozenset({b" ", b"\t", b"\n", b"\r", b"\x0c"})

# Bytes that end an identifier.
DELIMITERS: FrozenSet[bytes] = WHITESPACE | frozenset(
    {b"(", b")", b"-", b"+", b"*", b"/", b"^", b"%", b",", b"!", b"<", b">", b"="}
)

# Largest value an INTEGER token may carry (unsigned 64-bit).
MAX_INTEGER = 2**64 - 1
