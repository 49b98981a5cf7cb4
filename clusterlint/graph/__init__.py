"""Resource relationship graph.

Typed directed multigraph over cluster objects (Routes, Services, workloads)
plus the namers used to label its nodes.
"""

from clusterlint.graph.models import EdgeKind, GraphEdge, GraphNode
from clusterlint.graph.namer import DEFAULT_NAMER, DefaultNamer, Namer, ResourceNamer, namer_for
from clusterlint.graph.resource_graph import ResourceGraph

__all__ = [
    "DEFAULT_NAMER",
    "DefaultNamer",
    "EdgeKind",
    "GraphEdge",
    "GraphNode",
    "Namer",
    "ResourceGraph",
    "ResourceNamer",
    "namer_for",
]
