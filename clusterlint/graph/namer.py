"""Namers turn graph nodes into human-readable labels.

A namer is always passed explicitly to analysis passes and renderers so that
presentation can change without touching analysis logic.
"""

from __future__ import annotations

from typing import Protocol

from clusterlint.graph.models import GraphNode


class Namer(Protocol):
    """Anything that can label a node."""

    def name(self, node: GraphNode) -> str: ...


class DefaultNamer:
    """Renders ``<namespace>/<name> (<kind>)``."""

    def name(self, node: GraphNode) -> str:
        return f"{node.namespace}/{node.name} ({node.kind})"


class ResourceNamer:
    """Renders kubectl-style references, e.g. ``route/web -n shop``."""

    def name(self, node: GraphNode) -> str:
        return f"{node.kind.lower()}/{node.name} -n {node.namespace}"


DEFAULT_NAMER: Namer = DefaultNamer()

NAMERS: dict[str, Namer] = {
    "default": DEFAULT_NAMER,
    "resource": ResourceNamer(),
}


def namer_for(style: str) -> Namer:
    """Look up a namer by its configuration name."""
    try:
        return NAMERS[style]
    except KeyError:
        raise ValueError(f"Unknown namer: {style}. Must be one of {sorted(NAMERS)}") from None
