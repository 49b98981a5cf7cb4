"""REST endpoints.

GET  /health   -- liveness plus version.
POST /analyze  -- diagnose the posted manifests and return the markers.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from clusterlint.api.schemas import AnalyzeRequest, AnalyzeResponse, HealthResponse
from clusterlint.graph.namer import namer_for
from clusterlint.pipeline import diagnose_manifests
from clusterlint.render import report_to_dict

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    from clusterlint import __version__

    return HealthResponse(version=__version__)


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    # Sync handler: diagnosis is CPU-bound and runs in the threadpool.
    namer = namer_for(body.namer)
    report = diagnose_manifests(
        body.objects,
        namer=namer,
        max_workers=request.app.state.max_workers,
    )
    return AnalyzeResponse.model_validate(report_to_dict(report, namer))
