"""AST node definitions for algebraic expressions.

This module defines the AST node dataclasses produced by the parser. Each
node keeps the original `Token`s it was built from, so a consumer can
reproduce the exact source spelling of every literal and operator (`2.2`
stays `"2.2"`, never a re-serialized float). The `NodeType` enum identifies
node kinds so consumers can dispatch on `node.type`.

Conventions:
- All node dataclasses inherit from `ASTNode`, which records the node kind.
- Nodes are frozen: a tree is never mutated after the parser returns it,
    and each child has exactly one parent.
- Equality is structural. Token offsets are ignored, so the trees for
    `a^2b` and `a^2*b` compare equal.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple

from tokens import Token, TokenType


class NodeType(Enum):
    LITERAL = auto()
    VARIABLE = auto()
    SPECIAL_VARIABLE = auto()
    UNARY_OP = auto()
    BINARY_OP = auto()
    CALL = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeType


# Leaves
@dataclass(frozen=True)
class LiteralNode(ASTNode):
    type: NodeType = NodeType.LITERAL
    literal: Token = field(default_factory=lambda: Token(TokenType.INTEGER, "0", 0))

    @property
    def value(self) -> int | float:
        return self.literal.value


@dataclass(frozen=True)
class VariableNode(ASTNode):
    type: NodeType = NodeType.VARIABLE
    name: Token = field(default_factory=lambda: Token(TokenType.VARIABLE))


@dataclass(frozen=True)
class SpecialVariableNode(ASTNode):
    type: NodeType = NodeType.SPECIAL_VARIABLE
    name: Token = field(default_factory=lambda: Token(TokenType.SPECIAL_VARIABLE))


# Operators
@dataclass(frozen=True)
class UnaryOpNode(ASTNode):
    """Prefix negation or postfix factorial.

    The node does not store its position; it follows from the operator:
    MINUS is always prefix and FACTORIAL is always postfix.
    """

    type: NodeType = NodeType.UNARY_OP
    operator: Token = field(default_factory=lambda: Token(TokenType.MINUS, "-"))
    right: ASTNode = field(default_factory=lambda: LiteralNode())

    @property
    def is_prefix(self) -> bool:
        return self.operator.type == TokenType.MINUS

    @property
    def is_postfix(self) -> bool:
        return self.operator.type == TokenType.FACTORIAL


@dataclass(frozen=True)
class BinaryOpNode(ASTNode):
    type: NodeType = NodeType.BINARY_OP
    left: ASTNode = field(default_factory=lambda: LiteralNode())
    operator: Token = field(default_factory=lambda: Token(TokenType.STAR, "*"))
    right: ASTNode = field(default_factory=lambda: LiteralNode())

    @property
    def is_implicit(self) -> bool:
        """True when the multiplication was inferred from adjacency."""
        return self.operator.implicit


@dataclass(frozen=True)
class CallNode(ASTNode):
    type: NodeType = NodeType.CALL
    name: Token = field(default_factory=lambda: Token(TokenType.BUILTIN_FUNCTION))
    arguments: Tuple[ASTNode, ...] = field(default_factory=tuple)
