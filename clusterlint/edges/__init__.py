"""Edge builders deriving typed relationships between graph nodes."""

from clusterlint.edges.base import EdgeBuilder, run_edge_builders
from clusterlint.edges.routes import add_route_edges
from clusterlint.edges.services import add_service_workload_edges, selector_matches

__all__ = [
    "EdgeBuilder",
    "add_route_edges",
    "add_service_workload_edges",
    "run_edge_builders",
    "selector_matches",
]
