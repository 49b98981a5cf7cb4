"""Analysis passes emitting diagnostic markers."""

from clusterlint.analysis.routes import (
    find_missing_port_mapping,
    find_missing_tls_termination,
    find_path_based_passthrough_routes,
)
from clusterlint.analysis.runner import (
    AnalysisPass,
    dedupe_markers,
    group_by_key,
    run_analysis_passes,
    sort_markers,
)
from clusterlint.analysis.services import find_unselected_services

__all__ = [
    "AnalysisPass",
    "dedupe_markers",
    "find_missing_port_mapping",
    "find_missing_tls_termination",
    "find_path_based_passthrough_routes",
    "find_unselected_services",
    "group_by_key",
    "run_analysis_passes",
    "sort_markers",
]
