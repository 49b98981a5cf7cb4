"""Core data structures for clusterlint."""

from clusterlint.models.objects import (
    WORKLOAD_KINDS,
    ClusterObject,
    ObjectKind,
    Route,
    RouteBackend,
    RouteTLS,
    Service,
    ServicePort,
    TLSTermination,
    Workload,
)
from clusterlint.models.config import ClusterlintConfig
from clusterlint.models.markers import Marker, MarkerKey, Severity

__all__ = [
    "WORKLOAD_KINDS",
    "ClusterObject",
    "ClusterlintConfig",
    "Marker",
    "MarkerKey",
    "ObjectKind",
    "Route",
    "RouteBackend",
    "RouteTLS",
    "Service",
    "ServicePort",
    "Severity",
    "TLSTermination",
    "Workload",
]
