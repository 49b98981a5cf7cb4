"""Prometheus metrics emitted by the diagnostic pipeline."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

markers_emitted_total = Counter(
    "clusterlint_markers_emitted_total",
    "Markers produced by analysis passes.",
    ["key", "severity"],
)

objects_skipped_total = Counter(
    "clusterlint_objects_skipped_total",
    "Input objects skipped because they could not be decoded.",
    ["kind"],
)

diagnose_duration_seconds = Histogram(
    "clusterlint_diagnose_duration_seconds",
    "Wall time of one diagnose() run (graph build plus analysis).",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)
