"""Data structures for the resource relationship graph."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any


class EdgeKind(StrEnum):
    """Types of relationships between cluster objects."""

    TARGETS_SERVICE = "TargetsService"
    SELECTS_WORKLOAD = "SelectsWorkload"


@dataclass(frozen=True)
class GraphNode:
    """A node in the graph representing one cluster object.

    Equality and hashing use the identity triple only; ``payload`` is an
    opaque reference to the decoded object and never participates.
    """

    kind: str
    namespace: str
    name: str
    payload: Any = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, str, str]:
        """Return the unique key for this node."""
        return (self.kind, self.namespace, self.name)


def _freeze_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return tuple(sorted(((k, _freeze_value(v)) for k, v in value.items()), key=lambda item: str(item[0])))
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze_value(v) for v in value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    return value


def freeze_metadata(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return a read-only copy of *metadata* with keys in sorted order.

    Nested values are frozen too so every edge stays hashable: lists become
    tuples, sets become frozensets and mappings become sorted item tuples.
    """
    if not metadata:
        return MappingProxyType({})
    return MappingProxyType({k: _freeze_value(v) for k, v in sorted(metadata.items())})


@dataclass(frozen=True, eq=False)
class GraphEdge:
    """A typed, directed edge between two nodes.

    Parallel edges are allowed; two edges are the same edge only when kind,
    endpoints and metadata all match.
    """

    kind: str
    source: GraphNode
    target: GraphNode
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def key(self) -> tuple[str, tuple[str, str, str], tuple[str, str, str], tuple[tuple[str, Any], ...]]:
        """Return the deduplication key for this edge."""
        return (self.kind, self.source.key, self.target.key, tuple(sorted(self.metadata.items())))

    def get(self, name: str, default: Any = None) -> Any:
        return self.metadata.get(name, default)

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphEdge):
            return NotImplemented
        return self.key == other.key
