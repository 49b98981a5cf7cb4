"""Typed cluster object variants consumed by the edge builders.

Each variant carries only the fields its builders and passes need. Builders
dispatch on ``ObjectKind`` instead of probing attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ObjectKind(StrEnum):
    """Closed set of object kinds known to the graph."""

    ROUTE = "Route"
    SERVICE = "Service"
    WORKLOAD = "Workload"


class TLSTermination(StrEnum):
    """TLS termination modes a Route may declare."""

    EDGE = "edge"
    PASSTHROUGH = "passthrough"
    REENCRYPT = "reencrypt"


# Kinds whose pod template labels can be matched by a Service selector.
WORKLOAD_KINDS = frozenset(
    {
        "Pod",
        "Deployment",
        "StatefulSet",
        "DaemonSet",
        "ReplicaSet",
        "ReplicationController",
        "DeploymentConfig",
        "Job",
    }
)


@dataclass(frozen=True)
class ServicePort:
    """A single port exposed by a Service."""

    port: int
    name: str = ""
    target_port: str = ""
    protocol: str = "TCP"


@dataclass(frozen=True)
class RouteBackend:
    """A backend reference of a Route (``spec.to`` or an alternate backend)."""

    name: str
    kind: str = "Service"
    weight: int | None = None


@dataclass(frozen=True)
class RouteTLS:
    """TLS configuration of a Route."""

    termination: TLSTermination | None = None
    insecure_edge_termination_policy: str = ""


@dataclass(frozen=True)
class Route:
    """A rule exposing a Service externally."""

    namespace: str
    name: str
    to: RouteBackend
    host: str = ""
    path: str = ""
    tls: RouteTLS | None = None
    alternate_backends: tuple[RouteBackend, ...] = ()
    target_port: str | None = None
    kind: ObjectKind = field(default=ObjectKind.ROUTE, init=False)

    @property
    def identity(self) -> tuple[str, str, str]:
        return (str(self.kind), self.namespace, self.name)

    @property
    def backends(self) -> tuple[RouteBackend, ...]:
        """Primary backend followed by the alternates, in declaration order."""
        return (self.to, *self.alternate_backends)


@dataclass(frozen=True)
class Service:
    """A Service selecting workloads and exposing ports."""

    namespace: str
    name: str
    selector: dict[str, str] = field(default_factory=dict)
    ports: tuple[ServicePort, ...] = ()
    cluster_ip: str = ""
    kind: ObjectKind = field(default=ObjectKind.SERVICE, init=False)

    @property
    def identity(self) -> tuple[str, str, str]:
        return (str(self.kind), self.namespace, self.name)

    def distinct_ports(self) -> set[int]:
        return {p.port for p in self.ports}


@dataclass(frozen=True)
class Workload:
    """Anything that stamps out pods from a template (Deployment, Pod, ...)."""

    namespace: str
    name: str
    workload_kind: str = "Deployment"
    template_labels: dict[str, str] = field(default_factory=dict)
    kind: ObjectKind = field(default=ObjectKind.WORKLOAD, init=False)

    @property
    def identity(self) -> tuple[str, str, str]:
        # Workloads are keyed by their concrete kind so a Pod and a
        # Deployment sharing a name stay distinct nodes.
        return (self.workload_kind, self.namespace, self.name)


ClusterObject = Route | Service | Workload
