"""Service -> workload edges derived from label selectors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from clusterlint.edges.base import node_for
from clusterlint.graph.models import EdgeKind
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.objects import ClusterObject, Service, Workload


def selector_matches(selector: Mapping[str, str], labels: Mapping[str, str]) -> bool:
    """Return True when every selector pair is present in *labels*.

    An empty selector matches nothing: Services without a selector are
    backed by manually managed endpoints.
    """
    if not selector:
        return False
    return all(labels.get(k) == v for k, v in selector.items())


def add_service_workload_edges(graph: ResourceGraph, objects: Sequence[ClusterObject]) -> None:
    """Add a ``SelectsWorkload`` edge from each Service to the workloads it selects.

    Only workloads in the Service's namespace are considered.
    """
    services = [o for o in objects if isinstance(o, Service)]
    workloads = [o for o in objects if isinstance(o, Workload)]

    for service in services:
        service_node = node_for(graph, service)
        if service_node is None:
            continue
        for workload in workloads:
            if workload.namespace != service.namespace:
                continue
            if not selector_matches(service.selector, workload.template_labels):
                continue
            workload_node = node_for(graph, workload)
            if workload_node is None:
                continue
            graph.add_edge(EdgeKind.SELECTS_WORKLOAD, service_node, workload_node)
