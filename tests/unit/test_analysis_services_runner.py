"""Tests for the Service analysis pass and the pass runner."""

from __future__ import annotations

from clusterlint.analysis.routes import find_missing_port_mapping, find_path_based_passthrough_routes
from clusterlint.analysis.runner import dedupe_markers, group_by_key, run_analysis_passes, sort_markers
from clusterlint.analysis.services import find_unselected_services
from clusterlint.edges.routes import add_route_edges
from clusterlint.edges.services import add_service_workload_edges
from clusterlint.graph.models import GraphNode
from clusterlint.graph.namer import DEFAULT_NAMER
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.markers import Marker, MarkerKey, Severity
from clusterlint.models.objects import (
    ClusterObject,
    Route,
    RouteBackend,
    RouteTLS,
    Service,
    ServicePort,
    TLSTermination,
    Workload,
)

_NODE = GraphNode("Route", "shop", "web")


def _make_marker(
    key: MarkerKey = MarkerKey.MISSING_SERVICE,
    severity: Severity = Severity.ERROR,
    message: str = "msg",
    name: str = "web",
) -> Marker:
    return Marker(key=key, severity=severity, message=message, node=GraphNode("Route", "shop", name))


def _make_graph(*objects: ClusterObject) -> ResourceGraph:
    graph = ResourceGraph()
    for obj in objects:
        graph.add_object(obj)
    add_route_edges(graph, objects)
    add_service_workload_edges(graph, objects)
    return graph


def _mixed_graph() -> ResourceGraph:
    return _make_graph(
        Route(
            namespace="shop",
            name="api",
            to=RouteBackend(name="api"),
            path="/v1",
            tls=RouteTLS(termination=TLSTermination.PASSTHROUGH),
        ),
        Route(namespace="shop", name="lonely", to=RouteBackend(name="ghost")),
        Service(namespace="shop", name="api", selector={"app": "api"}, ports=(ServicePort(80), ServicePort(443))),
    )


# =====================================================================
# find_unselected_services
# =====================================================================


class TestUnselectedServices:
    """Tests for find_unselected_services()."""

    def test_selector_matching_nothing(self) -> None:
        route = Route(namespace="shop", name="web", to=RouteBackend(name="web"))
        service = Service(namespace="shop", name="web", selector={"app": "web", "tier": "front"})
        graph = _make_graph(route, service, Workload(namespace="shop", name="api", template_labels={"app": "api"}))

        markers = find_unselected_services(graph, DEFAULT_NAMER)

        assert len(markers) == 1
        marker = markers[0]
        assert marker.key == MarkerKey.SERVICE_SELECTS_NOTHING
        assert marker.severity == Severity.WARNING
        assert "app=web,tier=front" in marker.message
        assert [n.key for n in marker.related_nodes] == [("Route", "shop", "web")]

    def test_selected_service_is_clean(self) -> None:
        graph = _make_graph(
            Service(namespace="shop", name="web", selector={"app": "web"}),
            Workload(namespace="shop", name="web", template_labels={"app": "web"}),
        )
        assert find_unselected_services(graph, DEFAULT_NAMER) == []

    def test_service_without_selector_is_skipped(self) -> None:
        graph = _make_graph(Service(namespace="shop", name="external"))
        assert find_unselected_services(graph, DEFAULT_NAMER) == []


# =====================================================================
# Aggregation helpers
# =====================================================================


class TestAggregation:
    def test_sort_puts_errors_first_then_by_key(self) -> None:
        markers = [
            _make_marker(MarkerKey.MISSING_ROUTE_PORT, Severity.WARNING, name="a"),
            _make_marker(MarkerKey.PATH_BASED_PASSTHROUGH, Severity.ERROR, name="b"),
            _make_marker(MarkerKey.MISSING_SERVICE, Severity.ERROR, name="c"),
            _make_marker(MarkerKey.MISSING_SERVICE, Severity.ERROR, name="d"),
        ]
        assert [m.node.name for m in sort_markers(markers)] == ["c", "d", "b", "a"]

    def test_dedupe_keeps_first(self) -> None:
        a = _make_marker(name="a")
        b = _make_marker(name="b")
        assert dedupe_markers([a, b, _make_marker(name="a")]) == [a, b]

    def test_group_by_key(self) -> None:
        markers = [
            _make_marker(MarkerKey.PATH_BASED_PASSTHROUGH, name="x"),
            _make_marker(MarkerKey.MISSING_SERVICE, name="y"),
            _make_marker(MarkerKey.PATH_BASED_PASSTHROUGH, name="z"),
        ]
        groups = group_by_key(markers)
        assert list(groups) == [MarkerKey.MISSING_SERVICE, MarkerKey.PATH_BASED_PASSTHROUGH]
        assert [m.node.name for m in groups[MarkerKey.PATH_BASED_PASSTHROUGH]] == ["x", "z"]

    def test_marker_nodes(self) -> None:
        svc = GraphNode("Service", "shop", "web")
        marker = Marker(MarkerKey.MISSING_ROUTE_PORT, Severity.WARNING, "m", _NODE, (svc,))
        assert marker.nodes == (_NODE, svc)


# =====================================================================
# run_analysis_passes
# =====================================================================


class TestRunAnalysisPasses:
    """Tests for run_analysis_passes()."""

    def test_merges_and_sorts(self) -> None:
        markers = run_analysis_passes(
            _mixed_graph(),
            [find_missing_port_mapping, find_path_based_passthrough_routes],
            DEFAULT_NAMER,
        )
        assert [(m.key, m.node.name) for m in markers] == [
            (MarkerKey.MISSING_SERVICE, "lonely"),
            (MarkerKey.PATH_BASED_PASSTHROUGH, "api"),
            (MarkerKey.MISSING_ROUTE_PORT, "api"),
        ]

    def test_freezes_graph(self) -> None:
        graph = _mixed_graph()
        run_analysis_passes(graph, [], DEFAULT_NAMER)
        assert graph.frozen

    def test_no_passes_no_markers(self) -> None:
        assert run_analysis_passes(_mixed_graph(), [], DEFAULT_NAMER) == []

    def test_duplicate_pass_output_is_deduplicated(self) -> None:
        markers = run_analysis_passes(
            _mixed_graph(),
            [find_path_based_passthrough_routes, find_path_based_passthrough_routes],
            DEFAULT_NAMER,
        )
        assert len(markers) == 1

    def test_threaded_run_matches_sequential(self) -> None:
        passes = [find_unselected_services, find_missing_port_mapping, find_path_based_passthrough_routes]
        graph = _mixed_graph()
        sequential = run_analysis_passes(graph, passes, DEFAULT_NAMER)
        threaded = run_analysis_passes(graph, passes, DEFAULT_NAMER, max_workers=4)
        assert threaded == sequential
