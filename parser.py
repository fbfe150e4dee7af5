"""
Parser for algebraic expressions.

Overview and approach:
- This parser is a small precedence-climbing (Pratt) parser that pulls
    tokens from a `Lexer` one at a time, peeking ahead when it needs to, and
    builds a single expression tree from `ast_nodes.py`.
- Binding powers live in the `BindingPower` enum and are looked up through
    `prefix_binding_power()`, `infix_binding_power()`,
    `postfix_binding_power()` and `right_binding_power()`, so the table can
    be checked without running the parsing loop.

Key points:
- `parse_expression(min_bp)` first consumes a lead token (a name, a numeral,
    a parenthesized group, a prefix `-` or a builtin call) and then loops:
    - a postfix `!` at or above `min_bp` wraps the current operand;
    - a token that starts another atom (`3x`, `(a)(b)`, `2sin(x)`) inserts
        an implicit multiplication at the multiplicative level;
    - an infix operator at or above `min_bp` is consumed and its right
        operand parsed recursively.
- The right operand of `^` is parsed at `POWER + 1`; the right operand of
    every other infix operator, and of implicit multiplication, is parsed at
    `MULTIPLICATIVE`. So `a-b-c` groups as `(a-b)-c`, `a^b^c` as
    `(a^b)^c`, `a*b*c` as `a*(b*c)` and `a=b+c` as `(a=b)+c`.
- A name followed by `(` is not a call unless the name is a builtin
    function: `f(x)` is `f*(x)`, while `sin(x)` is a `CallNode`.

Examples:
    - `3x^2` -> 3 * (x ^ 2)
    - `-3(x+2)` -> (-3) * (x + 2)
    - `sigma(i=0, 100, i^2)` -> call sigma with three arguments
"""

from __future__ import annotations
import logging
from enum import IntEnum
from typing import List, Optional

from tokens import Token, TokenType
from lexer import Lexer
from ast_nodes import *
from errors import UnexpectedTokenError, UnsupportedConstructError

logger = logging.getLogger(__name__)


class BindingPower(IntEnum):
    """Operator binding powers (higher = tighter binding)."""

    NONE = 0
    EQUALITY = 1  # = < > <= >= !=
    ADDITIVE = 2  # + -
    MULTIPLICATIVE = 3  # * / % and implicit adjacency
    POWER = 4  # ^
    PREFIX = 5  # -x
    POSTFIX = 6  # x!


INFIX_BINDING_POWERS = {
    TokenType.EQUAL: BindingPower.EQUALITY,
    TokenType.LT: BindingPower.EQUALITY,
    TokenType.GT: BindingPower.EQUALITY,
    TokenType.LTE: BindingPower.EQUALITY,
    TokenType.GTE: BindingPower.EQUALITY,
    TokenType.NEQ: BindingPower.EQUALITY,
    TokenType.PLUS: BindingPower.ADDITIVE,
    TokenType.MINUS: BindingPower.ADDITIVE,
    TokenType.STAR: BindingPower.MULTIPLICATIVE,
    TokenType.SLASH: BindingPower.MULTIPLICATIVE,
    TokenType.PERCENT: BindingPower.MULTIPLICATIVE,
    TokenType.CARET: BindingPower.POWER,
}

# Tokens that begin an operand; one of these right after an operand means
# an implicit multiplication.
ATOM_START = frozenset(
    {
        TokenType.VARIABLE,
        TokenType.SPECIAL_VARIABLE,
        TokenType.BUILTIN_FUNCTION,
        TokenType.INTEGER,
        TokenType.FLOAT,
        TokenType.LPAREN,
    }
)


def prefix_binding_power(token_type: TokenType) -> Optional[BindingPower]:
    if token_type == TokenType.MINUS:
        return BindingPower.PREFIX
    return None


def postfix_binding_power(token_type: TokenType) -> Optional[BindingPower]:
    if token_type == TokenType.FACTORIAL:
        return BindingPower.POSTFIX
    return None


def infix_binding_power(token_type: TokenType) -> Optional[BindingPower]:
    return INFIX_BINDING_POWERS.get(token_type)


def right_binding_power(token_type: TokenType) -> int:
    """Minimum binding power used to parse the right operand of an infix operator."""
    if token_type == TokenType.CARET:
        return BindingPower.POWER + 1
    return BindingPower.MULTIPLICATIVE


def starts_atom(token: Token) -> bool:
    return token.type in ATOM_START


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer

    def peek(self, idx: int = 0) -> Token:
        """Return a token ahead of the cursor without consuming it."""
        return self.lexer.peek_token(idx)

    def advance(self) -> Token:
        """Consume and return the next token."""
        return self.lexer.next_token()

    def expect(self, expected_type: TokenType) -> Token:
        """Expect and consume token of given type."""
        token = self.advance()
        if token.type != expected_type:
            raise UnexpectedTokenError(expected_type, token)
        return token

    def parse_call(self, name: Token) -> CallNode:
        """Parse a builtin call: name '(' expr (',' expr)* ')'"""
        self.expect(TokenType.LPAREN)
        args: List[ASTNode] = [self.parse_expression()]
        while self.peek().type == TokenType.COMMA:
            self.advance()
            args.append(self.parse_expression())
        self.expect(TokenType.RPAREN)
        logger.debug("call %s with %d argument(s)", name.lexeme, len(args))
        return CallNode(name=name, arguments=tuple(args))

    def parse_lead(self) -> ASTNode:
        """Parse the operand a (sub)expression starts with."""
        token = self.advance()

        match token.type:
            case TokenType.VARIABLE:
                return VariableNode(name=token)

            case TokenType.SPECIAL_VARIABLE:
                return SpecialVariableNode(name=token)

            case TokenType.INTEGER | TokenType.FLOAT:
                return LiteralNode(literal=token)

            case TokenType.LPAREN:
                expr = self.parse_expression()
                self.expect(TokenType.RPAREN)
                return expr

            case TokenType.BUILTIN_FUNCTION:
                return self.parse_call(token)

            case TokenType.MINUS:
                right = self.parse_expression(prefix_binding_power(token.type))
                return UnaryOpNode(operator=token, right=right)

            case TokenType.END:
                raise UnsupportedConstructError(token, "unexpected end of input")

            case _:
                raise UnsupportedConstructError(token)

    def parse_expression(self, min_bp: int = BindingPower.NONE) -> ASTNode:
        """Parse an expression whose operators all bind at least `min_bp`."""
        left = self.parse_lead()

        while True:
            token = self.peek()
            if token.type == TokenType.END:
                break

            lbp = postfix_binding_power(token.type)
            if lbp is not None:
                if lbp < min_bp:
                    break
                left = UnaryOpNode(operator=self.advance(), right=left)
                continue

            if starts_atom(token):
                if BindingPower.MULTIPLICATIVE < min_bp:
                    break
                operator = Token(
                    TokenType.STAR, "*", None, token.start, token.start, implicit=True
                )
                logger.debug("implicit multiplication before %r", token.lexeme)
                right = self.parse_expression(right_binding_power(TokenType.STAR))
                left = BinaryOpNode(left=left, operator=operator, right=right)
                continue

            lbp = infix_binding_power(token.type)
            if lbp is not None:
                if lbp < min_bp:
                    break
                operator = self.advance()
                right = self.parse_expression(right_binding_power(operator.type))
                left = BinaryOpNode(left=left, operator=operator, right=right)
                continue

            break

        return left

    def parse(self) -> ASTNode:
        """Parse one complete expression; the whole input must be consumed.

        Operands nest one stack frame per factor, so an input deeper than the
        interpreter's recursion limit is rejected as an unsupported construct.
        """
        try:
            expr = self.parse_expression()
        except RecursionError as e:
            at = self.lexer.start
            raise UnsupportedConstructError(
                Token(TokenType.END, "", None, at, at), "expression nested too deeply"
            ) from e
        self.expect(TokenType.END)
        return expr


def parse(lexer: Lexer) -> ASTNode:
    """Parse the expression held by `lexer`."""
    return Parser(lexer).parse()


def parse_text(text: str | bytes) -> ASTNode:
    """Convenience: lex+parse an expression string into an AST."""
    try:
        expr = parse(Lexer(text))
    except SyntaxError as e:
        logger.debug("failed to parse %r: %s", text, e)
        raise
    logger.debug("parsed %r", text)
    return expr
