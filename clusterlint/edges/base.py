"""Edge builder contract and sequential runner."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from clusterlint.graph.models import GraphNode
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.objects import ClusterObject
from clusterlint.observability.logging import get_logger

_logger = get_logger("edges")

# A builder inspects a batch of objects and adds typed edges between nodes
# that are already in the graph. Builders must be idempotent and purely
# additive, so running them in any order yields the same edge set.
EdgeBuilder = Callable[[ResourceGraph, Sequence[ClusterObject]], None]


def run_edge_builders(
    graph: ResourceGraph,
    objects: Sequence[ClusterObject],
    builders: Iterable[EdgeBuilder],
) -> None:
    """Run *builders* one after another against *graph*."""
    for builder in builders:
        before = graph.edge_count()
        builder(graph, objects)
        _logger.debug(
            "edge_builder_finished",
            builder=getattr(builder, "__name__", repr(builder)),
            edges_added=graph.edge_count() - before,
        )


def node_for(graph: ResourceGraph, obj: ClusterObject) -> GraphNode | None:
    """Return the graph node backing *obj*.

    Returns None when *obj* is not in the graph or when an earlier, different
    object of the same variant owns the node (first insertion wins, for edges
    too). Equal copies of the stored object, and nodes whose payload is some
    other opaque value, are backed by *obj*.
    """
    node = graph.get_node(*obj.identity)
    if node is None:
        return None
    if isinstance(node.payload, type(obj)) and node.payload != obj:
        return None
    return node
