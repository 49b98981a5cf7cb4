"""Diagnostic pipeline: ingest objects, build edges, run passes.

Callers choose which edge builders and analysis passes to run by handing in
plain sequences; the ``DEFAULT_*`` tuples below are just the full set.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from clusterlint.analysis.routes import (
    find_missing_port_mapping,
    find_missing_tls_termination,
    find_path_based_passthrough_routes,
)
from clusterlint.analysis.runner import AnalysisPass, run_analysis_passes
from clusterlint.analysis.services import find_unselected_services
from clusterlint.edges.base import EdgeBuilder, run_edge_builders
from clusterlint.edges.routes import add_route_edges
from clusterlint.edges.services import add_service_workload_edges
from clusterlint.graph.namer import DEFAULT_NAMER, Namer
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.loader import SkippedObject, load_objects
from clusterlint.models.markers import Marker
from clusterlint.models.objects import ClusterObject
from clusterlint.observability.logging import get_logger
from clusterlint.observability.metrics import diagnose_duration_seconds

_logger = get_logger("pipeline")

DEFAULT_EDGE_BUILDERS: tuple[EdgeBuilder, ...] = (
    add_route_edges,
    add_service_workload_edges,
)

DEFAULT_ANALYSIS_PASSES: tuple[AnalysisPass, ...] = (
    find_missing_port_mapping,
    find_path_based_passthrough_routes,
    find_missing_tls_termination,
    find_unselected_services,
)


@dataclass
class DiagnosticReport:
    """Everything one diagnostic run produced."""

    markers: list[Marker] = field(default_factory=list)
    skipped: list[SkippedObject] = field(default_factory=list)
    node_count: int = 0
    edge_count: int = 0
    duration_ms: float = 0.0


def build_graph(
    objects: Sequence[ClusterObject],
    builders: Iterable[EdgeBuilder] = DEFAULT_EDGE_BUILDERS,
) -> ResourceGraph:
    """Add every object as a node, then run *builders* over the batch."""
    graph = ResourceGraph()
    for obj in objects:
        node = graph.add_object(obj)
        if node.payload is not obj and node.payload != obj:
            _logger.debug("duplicate_object_ignored", kind=node.kind, namespace=node.namespace, name=node.name)
    run_edge_builders(graph, objects, builders)
    return graph


def diagnose(
    objects: Sequence[ClusterObject],
    builders: Iterable[EdgeBuilder] = DEFAULT_EDGE_BUILDERS,
    passes: Sequence[AnalysisPass] = DEFAULT_ANALYSIS_PASSES,
    namer: Namer = DEFAULT_NAMER,
    max_workers: int = 1,
) -> DiagnosticReport:
    """Build a fresh graph from *objects* and run *passes* over it."""
    t_start = time.monotonic()
    graph = build_graph(objects, builders)
    markers = run_analysis_passes(graph, passes, namer, max_workers=max_workers)
    elapsed = time.monotonic() - t_start
    diagnose_duration_seconds.observe(elapsed)

    _logger.info(
        "diagnose_complete",
        nodes=len(graph),
        edges=graph.edge_count(),
        markers=len(markers),
        duration_ms=round(elapsed * 1000.0, 3),
    )
    return DiagnosticReport(
        markers=markers,
        node_count=len(graph),
        edge_count=graph.edge_count(),
        duration_ms=elapsed * 1000.0,
    )


def diagnose_manifests(
    raw_items: Iterable[Any],
    builders: Iterable[EdgeBuilder] = DEFAULT_EDGE_BUILDERS,
    passes: Sequence[AnalysisPass] = DEFAULT_ANALYSIS_PASSES,
    namer: Namer = DEFAULT_NAMER,
    max_workers: int = 1,
) -> DiagnosticReport:
    """Decode raw manifest dicts and diagnose them; skipped objects are reported."""
    loaded = load_objects(raw_items)
    report = diagnose(loaded.objects, builders, passes, namer, max_workers)
    report.skipped = loaded.skipped
    return report
