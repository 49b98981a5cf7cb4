"""Route -> Service edges."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from clusterlint.edges.base import node_for
from clusterlint.graph.models import EdgeKind, GraphNode
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.objects import ClusterObject, ObjectKind, Route, RouteBackend, Service
from clusterlint.observability.logging import get_logger

_logger = get_logger("edges.routes")

DEFAULT_BACKEND_WEIGHT = 100


def _edge_metadata(route: Route, backend: RouteBackend, service: Service | None) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "weight": DEFAULT_BACKEND_WEIGHT if backend.weight is None else backend.weight,
    }
    if route.target_port:
        metadata["target_port"] = route.target_port
    elif service is not None and len(service.distinct_ports()) > 1:
        metadata["ambiguous_port"] = True
    return metadata


def _add_backend_edges(graph: ResourceGraph, route: Route, route_node: GraphNode) -> None:
    for backend in route.backends:
        if backend.kind != ObjectKind.SERVICE:
            _logger.debug(
                "route_backend_kind_unsupported",
                route=route.name,
                namespace=route.namespace,
                backend_kind=backend.kind,
            )
            continue
        service_node = graph.get_node(ObjectKind.SERVICE, route.namespace, backend.name)
        if service_node is None:
            # Left without an edge; the missing-service pass reports it.
            continue
        service = service_node.payload if isinstance(service_node.payload, Service) else None
        graph.add_edge(
            EdgeKind.TARGETS_SERVICE,
            route_node,
            service_node,
            _edge_metadata(route, backend, service),
        )


def add_route_edges(graph: ResourceGraph, objects: Sequence[ClusterObject]) -> None:
    """Add a ``TargetsService`` edge from every Route to each Service backend it names.

    Edges carry the backend ``weight`` and either the route's explicit
    ``target_port`` or ``ambiguous_port=True`` when the Service exposes more
    than one distinct port and the route does not pick one. Backends whose
    Service is not in the graph get no edge.
    """
    for obj in objects:
        match obj:
            case Route():
                route_node = node_for(graph, obj)
                if route_node is None:
                    _logger.debug("route_not_owned_by_graph", route=obj.name, namespace=obj.namespace)
                    continue
                _add_backend_edges(graph, obj, route_node)
            case _:
                continue
