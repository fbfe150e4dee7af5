import json

import pytest

from ast_json import ast_to_json
from ast_nodes import ASTNode, NodeType
from tests.utils import parse_text


def test_json_output_is_serializable():
    data = ast_to_json(parse_text("sigma(i=0, 10, i^2) - 3!"))
    assert json.loads(json.dumps(data)) == data


def test_literal_keeps_lexeme_and_value():
    data = ast_to_json(parse_text("2.20"))
    assert data == {
        "node_type": "Literal",
        "literal": {"kind": "FLOAT", "lexeme": "2.20", "value": 2.2},
    }


def test_implicit_multiplication_is_marked():
    data = ast_to_json(parse_text("3x"))
    assert data["node_type"] == "BinaryOp"
    assert data["operator"] == {"kind": "STAR", "lexeme": "*", "implicit": True}
    assert data["left"]["literal"]["value"] == 3
    assert data["right"] == {
        "node_type": "Variable",
        "name": {"kind": "VARIABLE", "lexeme": "x"},
    }
    assert "implicit" not in ast_to_json(parse_text("3*x"))["operator"]


def test_unary_position():
    assert ast_to_json(parse_text("-x"))["position"] == "prefix"
    assert ast_to_json(parse_text("x!"))["position"] == "postfix"


def test_call_and_special_variable():
    data = ast_to_json(parse_text("cos(theta)"))
    assert data["node_type"] == "Call"
    assert data["name"]["lexeme"] == "cos"
    assert data["arguments"] == [
        {
            "node_type": "SpecialVariable",
            "name": {"kind": "SPECIAL_VARIABLE", "lexeme": "theta"},
        }
    ]


def test_none_and_unknown_nodes():
    assert ast_to_json(None) is None
    with pytest.raises(TypeError):
        ast_to_json(ASTNode(NodeType.LITERAL))
