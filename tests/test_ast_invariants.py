import dataclasses

import pytest

from ast_nodes import *
from tests.utils import parse_text


def _children(node):
    if isinstance(node, UnaryOpNode):
        return [node.right]
    if isinstance(node, BinaryOpNode):
        return [node.left, node.right]
    if isinstance(node, CallNode):
        return list(node.arguments)
    return []


def _walk(node):
    yield node
    for child in _children(node):
        yield from _walk(child)


def _tokens(node):
    for n in _walk(node):
        for f in ("literal", "name", "operator"):
            token = getattr(n, f, None)
            if token is not None:
                yield token


SOURCES = [
    "f(x)=3x^2-2x+1",
    "(x^2+1)(x^2-2)",
    "-3(x+2)!",
    "sigma(i=0, 100, i^2) + 2.25dtheta",
]


@pytest.mark.parametrize("src", SOURCES)
def test_every_node_has_a_single_parent(src):
    ast = parse_text(src)
    nodes = list(_walk(ast))
    assert len({id(n) for n in nodes}) == len(nodes)


@pytest.mark.parametrize("src", SOURCES)
def test_tokens_are_views_into_the_source(src):
    data = src.encode("utf-8")
    for token in _tokens(parse_text(src)):
        if token.implicit:
            assert token.start == token.end
            continue
        assert data[token.start : token.end].decode("utf-8") == token.lexeme


@pytest.mark.parametrize("src", SOURCES)
def test_node_type_matches_class(src):
    expected = {
        LiteralNode: NodeType.LITERAL,
        VariableNode: NodeType.VARIABLE,
        SpecialVariableNode: NodeType.SPECIAL_VARIABLE,
        UnaryOpNode: NodeType.UNARY_OP,
        BinaryOpNode: NodeType.BINARY_OP,
        CallNode: NodeType.CALL,
    }
    for node in _walk(parse_text(src)):
        assert node.type == expected[type(node)]


def test_tree_is_read_only():
    ast = parse_text("x+1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ast.left = ast.right
    with pytest.raises(dataclasses.FrozenInstanceError):
        ast.operator.lexeme = "-"

    call = parse_text("sigma(i=0, 100, i^2)")
    with pytest.raises(dataclasses.FrozenInstanceError):
        call.arguments = ()
    assert isinstance(call.arguments, tuple)
    with pytest.raises(AttributeError):
        call.arguments.append(call)
    assert len(call.arguments) == 3


def test_trees_are_hashable():
    first = parse_text("2sin(x) + sigma(i, 1, 3)")
    second = parse_text("2 sin( x )+sigma(i,1,3)")
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_equal_trees_from_differently_spaced_input():
    assert parse_text("3 x ^ 2") == parse_text("3x^2")
