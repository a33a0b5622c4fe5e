"""Provider self-test endpoint."""

import asyncio

from fastapi import APIRouter, Depends

from orchestrator.core import Resolver
from orchestrator.diagnostics import run_diagnostics
from server.dependencies import get_api_key, get_resolver
from server.schemas.responses import DiagnosticsResponseDTO

router = APIRouter(prefix="/v1", tags=["Diagnostics"])


@router.get("/diagnostics", response_model=DiagnosticsResponseDTO)
async def diagnostics(
    resolver: Resolver = Depends(get_resolver),
    api_key: str | None = Depends(get_api_key),
):
    """Check both providers and the summarizer; always answers 200."""
    report = await asyncio.to_thread(run_diagnostics, resolver)
    return DiagnosticsResponseDTO(ok=report.ok, lines=report.lines, report=report.render())
