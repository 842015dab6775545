"""AST serialization: JSON round-trip for SmartScript AST nodes.

Converts typed AST nodes and their elements to/from JSON-compatible dicts.
Useful for:
- Caching parsed templates to disk
- Handing a parsed template to an executor in another process
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from smartscript import parse
    from smartscript.serialization import to_json, from_json

    doc = parse("{$ FOR i 1 3 $}{$= i $}{$END$}")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from smartscript.elements import (
    DoubleConstant,
    Element,
    FunctionRef,
    IntegerConstant,
    Operator,
    StringLiteral,
    Variable,
)
from smartscript.location import SourceLocation
from smartscript.nodes import Document, Echo, ForLoop, Node, Text

# Registry of type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Text": Text,
    "Echo": Echo,
    "ForLoop": ForLoop,
    "Variable": Variable,
    "FunctionRef": FunctionRef,
    "StringLiteral": StringLiteral,
    "IntegerConstant": IntegerConstant,
    "DoubleConstant": DoubleConstant,
    "Operator": Operator,
}


def to_dict(node: Node | Element) -> dict[str, Any]:
    """Convert an AST node or element to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, elements and SourceLocation objects.

    Args:
        node: Any SmartScript AST node or element.

    Returns:
        Dict with ``_type`` and all fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "source_file": value.source_file,
        }
    if type(value).__name__ in _NODE_TYPES:
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, None
    return value


def from_dict(data: dict[str, Any]) -> Node | Element:
    """Reconstruct a typed AST node or element from a dict.

    Uses the ``_type`` discriminator to determine the class.

    Args:
        data: Dict with ``_type`` and fields (as produced by to_dict).

    Returns:
        Typed AST node or element (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    if issubclass(node_cls, Node) and "location" not in kwargs:
        kwargs["location"] = SourceLocation.unknown()

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Document AST node.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
