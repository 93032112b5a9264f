"""Node/link export of expression trees for force-directed renderers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

from lamviz.lam.ast import Expression, children, match_expr

NodeType = Literal["app", "lam", "var"]


@dataclass(frozen=True)
class GraphNode:
    id: str
    type: NodeType
    value: str | None = None


@dataclass(frozen=True)
class GraphLink:
    source: str
    target: str


@dataclass(frozen=True)
class GraphData:
    nodes: tuple[GraphNode, ...] = ()
    links: tuple[GraphLink, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "nodes": [asdict(n) for n in self.nodes],
            "links": [asdict(link) for link in self.links],
        }


def _node(node_id: str, expr: Expression) -> GraphNode:
    return match_expr(
        expr,
        lambda abs_: GraphNode(node_id, "lam", abs_.binder),
        lambda _: GraphNode(node_id, "app"),
        lambda var: GraphNode(node_id, "var", var.name),
    )


def to_graph(expr: Expression) -> GraphData:
    """Flatten ``expr`` into pre-order numbered nodes and parent-to-child links."""
    nodes: list[GraphNode] = []
    links: list[GraphLink] = []
    stack: list[tuple[Expression, str | None]] = [(expr, None)]
    while stack:
        current, parent = stack.pop()
        node_id = str(len(nodes))
        nodes.append(_node(node_id, current))
        if parent is not None:
            links.append(GraphLink(parent, node_id))
        stack.extend((child, node_id) for child in reversed(children(current)))
    return GraphData(tuple(nodes), tuple(links))
