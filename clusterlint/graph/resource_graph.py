"""In-memory typed directed multigraph over cluster objects.

The graph is built fresh for every diagnostic run. Edge builders write to it
during construction; once ``freeze()`` is called it is read-only and may be
shared by concurrently running analysis passes.

All queries return results in insertion order so that analysis output is
reproducible for reproducible input ordering.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from clusterlint.errors import GraphFrozenError
from clusterlint.graph.models import GraphEdge, GraphNode, freeze_metadata
from clusterlint.observability.logging import get_logger

if TYPE_CHECKING:
    from clusterlint.models.objects import ClusterObject

_logger = get_logger("graph")

_NodeKey = tuple[str, str, str]


class ResourceGraph:
    """Append-only multigraph keyed by ``(kind, namespace, name)``."""

    def __init__(self) -> None:
        self._nodes: dict[_NodeKey, GraphNode] = {}
        self._by_kind: dict[str, list[GraphNode]] = defaultdict(list)
        self._edges: dict[GraphEdge, None] = {}
        self._out: dict[_NodeKey, list[GraphEdge]] = defaultdict(list)
        self._in: dict[_NodeKey, list[GraphEdge]] = defaultdict(list)
        self._frozen = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, kind: str, namespace: str, name: str, payload: Any = None) -> GraphNode:
        """Insert a node if absent and return the stored node.

        Re-adding a known identity returns the existing node; the first
        payload wins.
        """
        self._check_writable()
        key = (str(kind), namespace, name)
        existing = self._nodes.get(key)
        if existing is not None:
            return existing
        node = GraphNode(kind=key[0], namespace=namespace, name=name, payload=payload)
        self._nodes[key] = node
        self._by_kind[node.kind].append(node)
        return node

    def add_object(self, obj: ClusterObject) -> GraphNode:
        """Insert *obj* under its identity triple."""
        kind, namespace, name = obj.identity
        return self.add_node(kind, namespace, name, payload=obj)

    def add_edge(
        self,
        kind: str,
        source: GraphNode,
        target: GraphNode,
        metadata: Mapping[str, Any] | None = None,
    ) -> GraphEdge | None:
        """Add a directed edge between two known nodes.

        Returns the stored edge, or ``None`` when either endpoint was never
        added. Adding an edge identical in kind, endpoints and metadata is a
        no-op.
        """
        self._check_writable()
        if not self.has_node(source) or not self.has_node(target):
            _logger.debug(
                "edge_endpoint_unknown",
                edge_kind=str(kind),
                source=source.key,
                target=target.key,
            )
            return None

        edge = GraphEdge(
            kind=str(kind),
            source=self._nodes[source.key],
            target=self._nodes[target.key],
            metadata=freeze_metadata(metadata),
        )
        if edge in self._edges:
            return edge
        self._edges[edge] = None
        self._out[source.key].append(edge)
        self._in[target.key].append(edge)
        return edge

    def freeze(self) -> None:
        """End the construction phase; later writes raise GraphFrozenError."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise GraphFrozenError("graph is frozen; analysis has already started")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_node(self, node: GraphNode) -> bool:
        return node.key in self._nodes

    def get_node(self, kind: str, namespace: str, name: str) -> GraphNode | None:
        return self._nodes.get((str(kind), namespace, name))

    def nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    def nodes_of_kind(self, kind: str) -> list[GraphNode]:
        return list(self._by_kind.get(str(kind), ()))

    def edges(self, kind: str | None = None) -> list[GraphEdge]:
        return [e for e in self._edges if kind is None or e.kind == kind]

    def edges_from(self, node: GraphNode, kind: str | None = None) -> list[GraphEdge]:
        """Edges originating at *node*, optionally filtered by edge kind."""
        return [e for e in self._out.get(node.key, ()) if kind is None or e.kind == kind]

    def edges_to(self, node: GraphNode, kind: str | None = None) -> list[GraphEdge]:
        """Edges terminating at *node*, optionally filtered by edge kind."""
        return [e for e in self._in.get(node.key, ()) if kind is None or e.kind == kind]

    def successors(self, node: GraphNode, kind: str | None = None) -> list[GraphNode]:
        """Distinct target nodes of edges leaving *node*, first-seen order."""
        return list(dict.fromkeys(e.target for e in self.edges_from(node, kind)))

    def predecessors(self, node: GraphNode, kind: str | None = None) -> list[GraphNode]:
        """Distinct source nodes of edges entering *node*, first-seen order."""
        return list(dict.fromkeys(e.source for e in self.edges_to(node, kind)))

    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(list(self._nodes.values()))

    def __contains__(self, node: object) -> bool:
        return isinstance(node, GraphNode) and self.has_node(node)
