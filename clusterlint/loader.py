"""Decode Kubernetes-style manifests into typed cluster objects.

The loader is the ingestion boundary: it turns already-fetched manifest dicts
(from files, an API client or a request body) into ``Route``, ``Service`` and
``Workload`` values. Malformed objects are skipped and reported; they never
abort the batch.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from clusterlint.errors import MalformedObjectError, ManifestReadError
from clusterlint.models.objects import (
    WORKLOAD_KINDS,
    ClusterObject,
    Route,
    RouteBackend,
    RouteTLS,
    Service,
    ServicePort,
    TLSTermination,
    Workload,
)
from clusterlint.observability.logging import get_logger
from clusterlint.observability.metrics import objects_skipped_total

_logger = get_logger("loader")

DEFAULT_NAMESPACE = "default"
_MAX_ROUTE_WEIGHT = 256


@dataclass(frozen=True)
class SkippedObject:
    """An input object that could not be decoded."""

    kind: str
    namespace: str
    name: str
    reason: str


@dataclass
class LoadResult:
    """Decoded objects plus everything that was skipped."""

    objects: list[ClusterObject] = field(default_factory=list)
    skipped: list[SkippedObject] = field(default_factory=list)
    ignored: int = 0  # well-formed objects of kinds the graph does not model


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


class _Ctx:
    """Identity of the object being decoded, for error messages."""

    def __init__(self, kind: str, namespace: str, name: str) -> None:
        self.kind = kind
        self.namespace = namespace
        self.name = name

    def fail(self, reason: str) -> MalformedObjectError:
        return MalformedObjectError(self.kind, self.namespace, self.name, reason)


def _mapping(ctx: _Ctx, value: Any, path: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ctx.fail(f"{path} must be a mapping")
    return value


def _labels(ctx: _Ctx, value: Any, path: str) -> dict[str, str]:
    return {str(k): str(v) for k, v in _mapping(ctx, value, path).items()}


def _int(ctx: _Ctx, value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise ctx.fail(f"{path} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    raise ctx.fail(f"{path} must be an integer, got {value!r}")


def _port_ref(value: Any) -> str:
    """Normalize an int-or-string port reference to a string."""
    if value is None:
        return ""
    return str(value).strip()


# ---------------------------------------------------------------------------
# Per-kind decoders
# ---------------------------------------------------------------------------


def _backend(ctx: _Ctx, raw: Any, path: str) -> RouteBackend:
    data = _mapping(ctx, raw, path)
    name = data.get("name")
    if not name or not isinstance(name, str):
        raise ctx.fail(f"{path}.name is required")
    weight = None
    if data.get("weight") is not None:
        weight = _int(ctx, data["weight"], f"{path}.weight")
        if not 0 <= weight <= _MAX_ROUTE_WEIGHT:
            raise ctx.fail(f"{path}.weight must be between 0 and {_MAX_ROUTE_WEIGHT}")
    return RouteBackend(name=name, kind=str(data.get("kind") or "Service"), weight=weight)


def _tls(ctx: _Ctx, raw: Any) -> RouteTLS | None:
    if raw is None:
        return None
    data = _mapping(ctx, raw, "spec.tls")
    termination_raw = str(data.get("termination") or "").strip().lower()
    termination = None
    if termination_raw:
        try:
            termination = TLSTermination(termination_raw)
        except ValueError:
            raise ctx.fail(f"spec.tls.termination {termination_raw!r} is not supported") from None
    return RouteTLS(
        termination=termination,
        insecure_edge_termination_policy=str(data.get("insecureEdgeTerminationPolicy") or ""),
    )


def _decode_route(ctx: _Ctx, spec: Mapping[str, Any]) -> Route:
    if spec.get("to") is None:
        raise ctx.fail("spec.to is required")
    alternates = spec.get("alternateBackends") or []
    if not isinstance(alternates, list):
        raise ctx.fail("spec.alternateBackends must be a list")
    port = _mapping(ctx, spec.get("port"), "spec.port")
    return Route(
        namespace=ctx.namespace,
        name=ctx.name,
        to=_backend(ctx, spec["to"], "spec.to"),
        host=str(spec.get("host") or ""),
        path=str(spec.get("path") or ""),
        tls=_tls(ctx, spec.get("tls")),
        alternate_backends=tuple(
            _backend(ctx, b, f"spec.alternateBackends[{i}]") for i, b in enumerate(alternates)
        ),
        target_port=_port_ref(port.get("targetPort")) or None,
    )


def _decode_service(ctx: _Ctx, spec: Mapping[str, Any]) -> Service:
    raw_ports = spec.get("ports") or []
    if not isinstance(raw_ports, list):
        raise ctx.fail("spec.ports must be a list")
    ports = []
    for i, raw in enumerate(raw_ports):
        data = _mapping(ctx, raw, f"spec.ports[{i}]")
        if data.get("port") is None:
            raise ctx.fail(f"spec.ports[{i}].port is required")
        ports.append(
            ServicePort(
                port=_int(ctx, data["port"], f"spec.ports[{i}].port"),
                name=str(data.get("name") or ""),
                target_port=_port_ref(data.get("targetPort")),
                protocol=str(data.get("protocol") or "TCP"),
            )
        )
    return Service(
        namespace=ctx.namespace,
        name=ctx.name,
        selector=_labels(ctx, spec.get("selector"), "spec.selector"),
        ports=tuple(ports),
        cluster_ip=str(spec.get("clusterIP") or ""),
    )


def _decode_workload(ctx: _Ctx, metadata: Mapping[str, Any], spec: Mapping[str, Any]) -> Workload:
    if ctx.kind == "Pod":
        labels = _labels(ctx, metadata.get("labels"), "metadata.labels")
    else:
        template = _mapping(ctx, spec.get("template"), "spec.template")
        template_meta = _mapping(ctx, template.get("metadata"), "spec.template.metadata")
        labels = _labels(ctx, template_meta.get("labels"), "spec.template.metadata.labels")
    return Workload(
        namespace=ctx.namespace,
        name=ctx.name,
        workload_kind=ctx.kind,
        template_labels=labels,
    )


def parse_object(raw: Mapping[str, Any]) -> ClusterObject | None:
    """Decode one manifest dict.

    Returns None for kinds the graph does not model. Raises
    MalformedObjectError when a required field is missing or unreadable.
    """
    kind = str(raw.get("kind") or "")
    metadata_raw = raw.get("metadata")
    metadata = metadata_raw if isinstance(metadata_raw, Mapping) else {}
    namespace = str(metadata.get("namespace") or DEFAULT_NAMESPACE)
    name = str(metadata.get("name") or "")
    ctx = _Ctx(kind or "<unknown>", namespace, name or "<unnamed>")

    if not kind:
        raise ctx.fail("kind is required")
    if kind != "Route" and kind != "Service" and kind not in WORKLOAD_KINDS:
        return None
    if not isinstance(metadata_raw, Mapping):
        raise ctx.fail("metadata must be a mapping")
    if not name:
        raise ctx.fail("metadata.name is required")

    spec = _mapping(ctx, raw.get("spec"), "spec")
    match kind:
        case "Route":
            return _decode_route(ctx, spec)
        case "Service":
            return _decode_service(ctx, spec)
        case _:
            return _decode_workload(ctx, metadata, spec)


_EXHAUSTED = object()


def _flatten(items: Iterable[Any]) -> Iterator[Any]:
    # Explicit stack of iterators; nesting depth is caller-controlled.
    stack: list[Iterator[Any]] = [iter(items)]
    while stack:
        item = next(stack[-1], _EXHAUSTED)
        if item is _EXHAUSTED:
            stack.pop()
        elif (
            isinstance(item, Mapping)
            and str(item.get("kind") or "").endswith("List")
            and isinstance(item.get("items"), list)
        ):
            stack.append(iter(item["items"]))
        else:
            yield item


def load_objects(raw_items: Iterable[Any]) -> LoadResult:
    """Decode a batch of manifests, skipping the malformed ones.

    ``List`` wrappers (``kind: List`` or ``<Kind>List``) are flattened.
    """
    result = LoadResult()
    for raw in _flatten(raw_items):
        if not isinstance(raw, Mapping):
            result.skipped.append(SkippedObject("<unknown>", "", "", "manifest is not a mapping"))
            objects_skipped_total.labels(kind="<unknown>").inc()
            continue
        try:
            obj = parse_object(raw)
        except MalformedObjectError as exc:
            _logger.warning(
                "object_skipped",
                kind=exc.kind,
                namespace=exc.namespace,
                name=exc.name,
                reason=exc.reason,
            )
            result.skipped.append(SkippedObject(exc.kind, exc.namespace, exc.name, exc.reason))
            objects_skipped_total.labels(kind=exc.kind).inc()
            continue
        if obj is None:
            result.ignored += 1
            continue
        result.objects.append(obj)
    return result


def read_manifests(path: str | Path) -> list[Any]:
    """Read every document from a YAML or JSON manifest file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestReadError(str(path), exc.strerror or str(exc)) from exc

    try:
        if path.suffix.lower() == ".json":
            return [json.loads(text)]
        return [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ManifestReadError(str(path), f"parse error: {exc}") from exc


def load_files(paths: Iterable[str | Path]) -> LoadResult:
    """Read and decode all manifests in *paths*, in order."""
    docs: list[Any] = []
    for path in paths:
        docs.extend(read_manifests(path))
    return load_objects(docs)
