"""Exception hierarchy for clusterlint."""

from __future__ import annotations


class ClusterlintError(Exception):
    """Base class for all clusterlint errors."""


class MalformedObjectError(ClusterlintError):
    """Raised when an input manifest cannot be decoded into a cluster object."""

    def __init__(self, kind: str, namespace: str, name: str, reason: str) -> None:
        super().__init__(f"{kind} {namespace}/{name}: {reason}")
        self.kind = kind
        self.namespace = namespace
        self.name = name
        self.reason = reason


class GraphFrozenError(ClusterlintError):
    """Raised when a graph is written to after construction has finished."""


class ManifestReadError(ClusterlintError):
    """Raised when a manifest file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
