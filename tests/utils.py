from lexer import Lexer
from parser import Parser
from tokens import Token, TokenType
from ast_nodes import *


def lex(text):
    """Return the full token list for the given expression."""
    return Lexer(text).scan_all()


def kinds(text):
    return [t.type for t in lex(text)]


def parse_text(text: str):
    """Convenience: lex+parse an expression into an AST."""
    return Parser(Lexer(text)).parse()


# Builders for expected trees. Token offsets are ignored by equality, so
# tokens built here compare equal to scanned ones.

OPERATORS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "^": TokenType.CARET,
    "=": TokenType.EQUAL,
    "<": TokenType.LT,
    "!": TokenType.FACTORIAL,
}


def var(name):
    return VariableNode(name=Token(TokenType.VARIABLE, name))


def lit(value):
    token_type = TokenType.FLOAT if isinstance(value, float) else TokenType.INTEGER
    return LiteralNode(literal=Token(token_type, str(value), value))


def binop(left, op, right):
    return BinaryOpNode(left=left, operator=Token(OPERATORS[op], op), right=right)


def unop(op, right):
    return UnaryOpNode(operator=Token(OPERATORS[op], op), right=right)
