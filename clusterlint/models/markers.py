"""Diagnostic marker data structures shared by all analysis passes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from clusterlint.graph.models import GraphNode


class Severity(StrEnum):
    """Marker severity level."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


class MarkerKey(StrEnum):
    """Stable diagnostic category identifiers.

    Consumers (renderers, tests, admission hooks) key off these values, so
    they must never be renamed.
    """

    MISSING_SERVICE = "MissingServiceWarning"
    MISSING_ROUTE_PORT = "MissingRoutePortWarning"
    PATH_BASED_PASSTHROUGH = "PathBasedPassthroughErr"
    MISSING_TLS_TERMINATION = "MissingTLSTerminationType"
    SERVICE_SELECTS_NOTHING = "ServiceSelectsNothingWarning"


@dataclass(frozen=True)
class Marker:
    """A structured diagnostic finding produced by an analysis pass.

    Immutable: passes build markers, consumers only read them.
    """

    key: MarkerKey
    severity: Severity
    message: str
    node: GraphNode
    related_nodes: tuple[GraphNode, ...] = ()
    suggestion: str = ""

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        """Primary node followed by the related nodes."""
        return (self.node, *self.related_nodes)
