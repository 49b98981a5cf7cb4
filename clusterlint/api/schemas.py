"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api/v1/analyze``."""

    objects: list[dict[str, Any]] = Field(..., max_length=5000)
    namer: Literal["default", "resource"] = "default"


class MarkerModel(BaseModel):
    key: str
    severity: str
    message: str
    node: str
    related_nodes: list[str] = Field(default_factory=list)
    suggestion: str = ""


class SkippedModel(BaseModel):
    kind: str
    namespace: str
    name: str
    reason: str


class SummaryModel(BaseModel):
    error: int = 0
    warning: int = 0
    info: int = 0
    nodes: int = 0
    edges: int = 0


class AnalyzeResponse(BaseModel):
    markers: list[MarkerModel] = Field(default_factory=list)
    skipped: list[SkippedModel] = Field(default_factory=list)
    summary: SummaryModel = Field(default_factory=SummaryModel)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response."""

    error: str
    detail: str
