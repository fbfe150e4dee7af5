"""Convert expression AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the tree. Every token is exported with
its kind, its exact source lexeme and, for numerals, its value, so a
consumer never has to re-serialize a parsed float to recover its spelling.
"""

from typing import Any, Dict, Optional
from ast_nodes import *


def token_to_json(token: Token) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": token.type.name, "lexeme": token.lexeme}
    if token.value is not None:
        data["value"] = token.value
    if token.implicit:
        data["implicit"] = True
    return data


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    t = node.type
    # leaves
    if t == NodeType.LITERAL and isinstance(node, LiteralNode):
        return {"node_type": "Literal", "literal": token_to_json(node.literal)}
    if t == NodeType.VARIABLE and isinstance(node, VariableNode):
        return {"node_type": "Variable", "name": token_to_json(node.name)}
    if t == NodeType.SPECIAL_VARIABLE and isinstance(node, SpecialVariableNode):
        return {"node_type": "SpecialVariable", "name": token_to_json(node.name)}
    # operators
    if t == NodeType.UNARY_OP and isinstance(node, UnaryOpNode):
        return {
            "node_type": "UnaryOp",
            "operator": token_to_json(node.operator),
            "position": "prefix" if node.is_prefix else "postfix",
            "right": ast_to_json(node.right),
        }
    if t == NodeType.BINARY_OP and isinstance(node, BinaryOpNode):
        return {
            "node_type": "BinaryOp",
            "left": ast_to_json(node.left),
            "operator": token_to_json(node.operator),
            "right": ast_to_json(node.right),
        }
    if t == NodeType.CALL and isinstance(node, CallNode):
        return {
            "node_type": "Call",
            "name": token_to_json(node.name),
            "arguments": [ast_to_json(a) for a in node.arguments],
        }

    raise TypeError(f"cannot convert {type(node).__name__} to JSON")
