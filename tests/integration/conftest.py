"""Shared fixtures for clusterlint integration tests.

Provides decoded object sets loaded from the YAML/JSON manifests under
``tests/fixtures`` so the pipeline can be exercised end to end.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from clusterlint.loader import load_files
from clusterlint.models.objects import ClusterObject

_FIXTURES = Path(__file__).parent.parent / "fixtures"


def load_fixture(name: str) -> list[ClusterObject]:
    """Decode one fixture file; fails the test if anything was skipped."""
    result = load_files([_FIXTURES / name])
    assert result.skipped == [], result.skipped
    return result.objects


@pytest.fixture
def missing_route_port_objects() -> list[ClusterObject]:
    return load_fixture("missing-route-port.yaml")


@pytest.fixture
def lonely_route_objects() -> list[ClusterObject]:
    return load_fixture("lonely-route.yaml")


@pytest.fixture
def invalid_route_objects() -> list[ClusterObject]:
    return load_fixture("invalid-route.yaml")


@pytest.fixture
def healthy_objects() -> list[ClusterObject]:
    return load_fixture("healthy.json")


@pytest.fixture
def all_fixture_objects(
    missing_route_port_objects: list[ClusterObject],
    lonely_route_objects: list[ClusterObject],
    invalid_route_objects: list[ClusterObject],
    healthy_objects: list[ClusterObject],
) -> list[ClusterObject]:
    return [*missing_route_port_objects, *lonely_route_objects, *invalid_route_objects, *healthy_objects]
