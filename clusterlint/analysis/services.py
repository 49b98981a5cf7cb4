"""Analysis passes over Service nodes."""

from __future__ import annotations

from clusterlint.graph.models import EdgeKind
from clusterlint.graph.namer import Namer
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.markers import Marker, MarkerKey, Severity
from clusterlint.models.objects import ObjectKind, Service


def find_unselected_services(graph: ResourceGraph, namer: Namer) -> list[Marker]:
    """Flag Services whose selector matches no workload.

    Services without a selector are skipped; their endpoints are managed
    outside the cluster object model.
    """
    markers: list[Marker] = []
    for service_node in graph.nodes_of_kind(ObjectKind.SERVICE):
        service = service_node.payload
        if not isinstance(service, Service) or not service.selector:
            continue
        if graph.edges_from(service_node, EdgeKind.SELECTS_WORKLOAD):
            continue
        selector = ",".join(f"{k}={v}" for k, v in sorted(service.selector.items()))
        markers.append(
            Marker(
                key=MarkerKey.SERVICE_SELECTS_NOTHING,
                severity=Severity.WARNING,
                message=f"{namer.name(service_node)} selects {selector} but no workload has matching pod labels.",
                node=service_node,
                related_nodes=tuple(graph.predecessors(service_node, EdgeKind.TARGETS_SERVICE)),
                suggestion=f"Check the pod template labels of the workloads in namespace {service.namespace}.",
            )
        )
    return markers
