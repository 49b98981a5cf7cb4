"""Presentation of markers as text, JSON-ready dicts and exit codes."""

from __future__ import annotations

import json
from collections.abc import Sequence

from clusterlint.analysis.runner import group_by_key
from clusterlint.graph.namer import Namer
from clusterlint.loader import SkippedObject
from clusterlint.models.markers import Marker, Severity
from clusterlint.pipeline import DiagnosticReport

_FAIL_THRESHOLDS = {
    "info": Severity.INFO.rank,
    "warning": Severity.WARNING.rank,
    "error": Severity.ERROR.rank,
}


def marker_to_dict(marker: Marker, namer: Namer) -> dict[str, object]:
    """Serialise *marker* to a plain dict for JSON encoding."""
    return {
        "key": str(marker.key),
        "severity": str(marker.severity),
        "message": marker.message,
        "node": namer.name(marker.node),
        "related_nodes": [namer.name(n) for n in marker.related_nodes],
        "suggestion": marker.suggestion,
    }


def skipped_to_dict(skipped: SkippedObject) -> dict[str, str]:
    return {
        "kind": skipped.kind,
        "namespace": skipped.namespace,
        "name": skipped.name,
        "reason": skipped.reason,
    }


def summarize(markers: Sequence[Marker]) -> dict[str, int]:
    counts = {str(s): 0 for s in Severity}
    for marker in markers:
        counts[str(marker.severity)] += 1
    return counts


def report_to_dict(report: DiagnosticReport, namer: Namer) -> dict[str, object]:
    return {
        "markers": [marker_to_dict(m, namer) for m in report.markers],
        "skipped": [skipped_to_dict(s) for s in report.skipped],
        "summary": {
            **summarize(report.markers),
            "nodes": report.node_count,
            "edges": report.edge_count,
        },
    }


def render_json(report: DiagnosticReport, namer: Namer) -> str:
    return json.dumps(report_to_dict(report, namer), indent=2)


def render_text(markers: Sequence[Marker], namer: Namer, skipped: Sequence[SkippedObject] = ()) -> str:
    """Render markers grouped by key, one block per marker."""
    if not markers and not skipped:
        return "No problems found."

    lines: list[str] = []
    for key, group in group_by_key(markers).items():
        lines.append(f"{key} ({len(group)}):")
        for marker in group:
            lines.append(f"  [{marker.severity}] {namer.name(marker.node)}: {marker.message}")
            if marker.suggestion:
                lines.append(f"    try: {marker.suggestion}")
        lines.append("")

    if skipped:
        lines.append(f"Skipped objects ({len(skipped)}):")
        for item in skipped:
            lines.append(f"  {item.kind} {item.namespace}/{item.name}: {item.reason}")
        lines.append("")

    counts = summarize(markers)
    lines.append(f"{counts['error']} errors, {counts['warning']} warnings, {counts['info']} info")
    return "\n".join(lines)


def exit_code(markers: Sequence[Marker], fail_on: str = "error") -> int:
    """Return 1 when any marker is at or above *fail_on*, else 0.

    ``fail_on="never"`` always returns 0.
    """
    if fail_on == "never":
        return 0
    try:
        threshold = _FAIL_THRESHOLDS[fail_on]
    except KeyError:
        raise ValueError(f"Invalid fail-on level: {fail_on}") from None
    return 1 if any(m.severity.rank >= threshold for m in markers) else 0
