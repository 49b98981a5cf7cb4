"""Analysis passes over Route nodes.

Every pass takes the finished graph and a namer, never mutates the graph and
returns its markers in node insertion order.
"""

from __future__ import annotations

from clusterlint.graph.models import EdgeKind, GraphEdge, GraphNode
from clusterlint.graph.namer import Namer
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.markers import Marker, MarkerKey, Severity
from clusterlint.models.objects import ObjectKind, Route, Service, TLSTermination

# Paths that do not restrict routing; allowed with any termination.
_ROOT_PATHS = frozenset({"", "/"})


def _route_of(node: GraphNode) -> Route | None:
    return node.payload if isinstance(node.payload, Route) else None


def _service_ports(node: GraphNode) -> list[int]:
    if not isinstance(node.payload, Service):
        return []
    return sorted(node.payload.distinct_ports())


def _has_ambiguous_port(edge: GraphEdge) -> bool:
    if edge.get("target_port"):
        return False
    return bool(edge.get("ambiguous_port")) or len(_service_ports(edge.target)) > 1


def _missing_service_marker(route_node: GraphNode, namer: Namer) -> Marker:
    route = _route_of(route_node)
    route_name = namer.name(route_node)
    if route is None:
        message = f"{route_name} does not route traffic to any service."
        return Marker(
            key=MarkerKey.MISSING_SERVICE,
            severity=Severity.ERROR,
            message=message,
            node=route_node,
        )

    wanted = [b.name for b in route.backends if b.kind == ObjectKind.SERVICE]
    if wanted:
        missing = ", ".join(
            namer.name(GraphNode(kind=ObjectKind.SERVICE, namespace=route.namespace, name=n)) for n in wanted
        )
        message = f"{route_name} is supposed to route traffic to {missing} but no such service exists."
    else:
        message = f"{route_name} does not reference any service backend."
    return Marker(
        key=MarkerKey.MISSING_SERVICE,
        severity=Severity.ERROR,
        message=message,
        node=route_node,
        suggestion=(
            f"Create the service or point spec.to of route {route.name} "
            f"at an existing service in namespace {route.namespace}."
        ),
    )


def find_missing_port_mapping(graph: ResourceGraph, namer: Namer) -> list[Marker]:
    """Flag Routes without a backing Service and Routes with an ambiguous port.

    A Route with no ``TargetsService`` edge gets one ``MissingServiceWarning``
    (error). Otherwise every distinct target Service that exposes more than one
    port, reached by an edge without an explicit target port, gets one
    ``MissingRoutePortWarning`` (warning).
    """
    markers: list[Marker] = []
    for route_node in graph.nodes_of_kind(ObjectKind.ROUTE):
        edges = graph.edges_from(route_node, EdgeKind.TARGETS_SERVICE)
        if not edges:
            markers.append(_missing_service_marker(route_node, namer))
            continue

        reported: set[GraphNode] = set()
        for edge in edges:
            service_node = edge.target
            if service_node in reported or not _has_ambiguous_port(edge):
                continue
            reported.add(service_node)
            ports = ", ".join(str(p) for p in _service_ports(service_node))
            markers.append(
                Marker(
                    key=MarkerKey.MISSING_ROUTE_PORT,
                    severity=Severity.WARNING,
                    message=(
                        f"{namer.name(route_node)} doesn't have a port specified and is routing "
                        f"traffic to {namer.name(service_node)} which uses multiple ports."
                    ),
                    node=route_node,
                    related_nodes=(service_node,),
                    suggestion=f"Set spec.port.targetPort on the route to one of the service ports ({ports}).",
                )
            )
    return markers


def find_path_based_passthrough_routes(graph: ResourceGraph, namer: Namer) -> list[Marker]:
    """Flag passthrough Routes that declare a path.

    With passthrough termination the router forwards encrypted traffic
    untouched and cannot see the request path, so path-based routing is
    impossible.
    """
    markers: list[Marker] = []
    for route_node in graph.nodes_of_kind(ObjectKind.ROUTE):
        route = _route_of(route_node)
        if route is None or route.tls is None:
            continue
        if route.tls.termination != TLSTermination.PASSTHROUGH or route.path in _ROOT_PATHS:
            continue
        markers.append(
            Marker(
                key=MarkerKey.PATH_BASED_PASSTHROUGH,
                severity=Severity.ERROR,
                message=(
                    f"{namer.name(route_node)} is path-based ({route.path}) and uses passthrough "
                    "termination, which is an invalid combination."
                ),
                node=route_node,
                suggestion=(
                    "1. use spec.tls.termination=edge or "
                    "2. use spec.tls.termination=reencrypt and specify spec.tls.destinationCACertificate or "
                    "3. remove spec.path"
                ),
            )
        )
    return markers


def find_missing_tls_termination(graph: ResourceGraph, namer: Namer) -> list[Marker]:
    """Flag Routes with a TLS block that does not name a termination type."""
    markers: list[Marker] = []
    for route_node in graph.nodes_of_kind(ObjectKind.ROUTE):
        route = _route_of(route_node)
        if route is None or route.tls is None or route.tls.termination is not None:
            continue
        markers.append(
            Marker(
                key=MarkerKey.MISSING_TLS_TERMINATION,
                severity=Severity.ERROR,
                message=f"{namer.name(route_node)} has a TLS block but no termination type specified.",
                node=route_node,
                suggestion="Set spec.tls.termination to edge, passthrough or reencrypt, or remove spec.tls.",
            )
        )
    return markers
