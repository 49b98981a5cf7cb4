"""Run analysis passes and aggregate their markers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from clusterlint.graph.namer import Namer
from clusterlint.graph.resource_graph import ResourceGraph
from clusterlint.models.markers import Marker, MarkerKey
from clusterlint.observability.logging import get_logger
from clusterlint.observability.metrics import markers_emitted_total

_logger = get_logger("analysis.runner")

AnalysisPass = Callable[[ResourceGraph, Namer], list[Marker]]


def _pass_name(analysis_pass: AnalysisPass) -> str:
    return getattr(analysis_pass, "__name__", repr(analysis_pass))


def sort_markers(markers: Iterable[Marker]) -> list[Marker]:
    """Stable sort: most severe first, then by key.

    Markers of equal severity and key keep their production order.
    """
    return sorted(markers, key=lambda m: (-m.severity.rank, str(m.key)))


def dedupe_markers(markers: Iterable[Marker]) -> list[Marker]:
    """Drop exact duplicates, keeping the first occurrence."""
    seen: set[Marker] = set()
    unique: list[Marker] = []
    for marker in markers:
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(marker)
    return unique


def group_by_key(markers: Iterable[Marker]) -> dict[MarkerKey, list[Marker]]:
    """Group markers by key, keys in sorted order."""
    groups: dict[MarkerKey, list[Marker]] = {}
    for marker in sorted(markers, key=lambda m: str(m.key)):
        groups.setdefault(marker.key, []).append(marker)
    return groups


def run_analysis_passes(
    graph: ResourceGraph,
    passes: Sequence[AnalysisPass],
    namer: Namer,
    max_workers: int = 1,
) -> list[Marker]:
    """Run *passes* over *graph* and return the merged, sorted markers.

    The graph is frozen first. With ``max_workers > 1`` passes run in a
    thread pool; results are still merged in pass-list order so the output
    does not depend on scheduling.
    """
    graph.freeze()

    if max_workers > 1 and len(passes) > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="analysis") as pool:
            futures = [pool.submit(p, graph, namer) for p in passes]
            results = [f.result() for f in futures]
    else:
        results = [p(graph, namer) for p in passes]

    merged: list[Marker] = []
    for analysis_pass, found in zip(passes, results, strict=True):
        _logger.debug("analysis_pass_finished", analysis_pass=_pass_name(analysis_pass), markers=len(found))
        merged.extend(found)

    markers = sort_markers(dedupe_markers(merged))
    for marker in markers:
        markers_emitted_total.labels(key=str(marker.key), severity=str(marker.severity)).inc()
    return markers
