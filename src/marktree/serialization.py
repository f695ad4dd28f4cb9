"""Tree serialization: JSON round-trip for marktree syntax trees.

Lets a parser written elsewhere hand a finished tree to marktree, and lets
trees be cached or inspected. A document is the source text plus its tree;
spans are only meaningful together with the source they point into.

Node encoding:
    {"_type": "CompositeNode", "type": "element:PARAGRAPH",
     "start": 0, "end": 5, "children": [...]}

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from marktree.serialization import from_json, to_json

    data = to_json(tree.source, tree.root)
    restored = from_json(data)
    assert restored.root == tree.root

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from marktree.builder import BuiltTree
from marktree.element_types import parse_type_name, type_name
from marktree.nodes import CompositeNode, LeafNode, Node


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node (and its subtree) to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    """
    result: dict[str, Any] = {
        "_type": type(node).__name__,
        "type": type_name(node.type),
        "start": node.start,
        "end": node.end,
    }
    if isinstance(node, CompositeNode):
        result["children"] = [to_dict(child) for child in node.children]
    return result


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a node from a dict produced by ``to_dict``.

    Raises:
        ValueError: If ``_type`` is missing or unknown, or the node type
            name is not a known element or token type.

    """
    kind = data.get("_type")
    if kind is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_type = parse_type_name(data["type"])
    if kind == "LeafNode":
        return LeafNode(node_type, data["start"], data["end"])
    if kind == "CompositeNode":
        children = tuple(from_dict(child) for child in data.get("children", ()))
        return CompositeNode(node_type, data["start"], data["end"], children)

    msg = f"Unknown node kind: {kind!r}"
    raise ValueError(msg)


def to_json(source: str, root: Node, *, indent: int | None = None) -> str:
    """Serialize a source text and its tree to a JSON string."""
    return json.dumps({"source": source, "root": to_dict(root)}, sort_keys=True, indent=indent)


def from_json(data: str) -> BuiltTree:
    """Deserialize a document produced by ``to_json``.

    Raises:
        ValueError: If the JSON is not a serialized document.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict) or "source" not in raw or "root" not in raw:
        msg = "Expected an object with 'source' and 'root'"
        raise ValueError(msg)
    return BuiltTree(raw["source"], from_dict(raw["root"]))


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
