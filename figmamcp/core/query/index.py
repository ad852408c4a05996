"""Visibility-filtered node index and the traversal helpers bound into queries."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

Node = dict[str, Any]


def build_node_index(root: Any) -> list[Node]:
    """Flatten a document tree into a pre-order list of visible nodes.

    A node is included iff neither it nor any ancestor has ``visible``
    explicitly set to ``False``. Hidden nodes are skipped together with
    their whole subtree.
    """
    if not isinstance(root, Mapping):
        return []

    collected: list[Node] = []
    stack: list[Any] = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, Mapping) or node.get("visible") is False:
            continue
        collected.append(node)  # type: ignore[arg-type]
        children = node.get("children")
        if isinstance(children, list):
            # Reversed so the first child is popped next.
            stack.extend(reversed(children))
    return collected


class NodeIndex:
    """Read-only helper library over one document's node index.

    Built once per query; never shared across requests.
    """

    def __init__(self, document: Any) -> None:
        self.document = document
        self._nodes = build_node_index(document)

    def __len__(self) -> int:
        return len(self._nodes)

    def find_by_id(self, node_id: str) -> Node | None:
        for node in self._nodes:
            if node.get("id") == node_id:
                return node
        return None

    def find_by_type(self, node_type: str) -> list[Node]:
        return [n for n in self._nodes if n.get("type") == node_type]

    def find_by_name(self, name: str) -> list[Node]:
        return [n for n in self._nodes if n.get("name") == name]

    def find_by_name_contains(self, substring: str) -> list[Node]:
        needle = str(substring).lower()
        return [n for n in self._nodes if needle in str(n.get("name") or "").lower()]

    def all_text(self) -> list[dict[str, Any]]:
        return [
            {"id": n.get("id"), "name": n.get("name"), "text": n["characters"]}
            for n in self._nodes
            if n.get("type") == "TEXT" and n.get("characters")
        ]

    def all_components(self) -> list[Node]:
        return self.find_by_type("COMPONENT")

    def all_instances(self) -> list[Node]:
        return self.find_by_type("INSTANCE")

    def all_frames(self) -> list[Node]:
        return self.find_by_type("FRAME")

    def children_of(self, node_id: str) -> list[Node]:
        """Direct children as stored on the node, hidden ones included."""
        node = self.find_by_id(node_id)
        if node is None:
            return []
        return list(node.get("children") or [])

    def search(self, predicate: Callable[[Node], Any]) -> list[Node]:
        return [n for n in self._nodes if predicate(n)]

    def all_nodes(self) -> list[Node]:
        return list(self._nodes)

    def bindings(self) -> dict[str, Any]:
        """Names exposed to query programs."""
        return {
            "document": self.document,
            "findById": self.find_by_id,
            "findByType": self.find_by_type,
            "findByName": self.find_by_name,
            "findByNameContains": self.find_by_name_contains,
            "getAllText": self.all_text,
            "getAllComponents": self.all_components,
            "getAllInstances": self.all_instances,
            "getAllFrames": self.all_frames,
            "getChildren": self.children_of,
            "search": self.search,
            "getAllNodes": self.all_nodes,
        }
