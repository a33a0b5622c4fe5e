"""Raw search endpoint: provider content without condensation."""

import asyncio

from fastapi import APIRouter, Depends, Request

from orchestrator.core import Resolver
from server.dependencies import get_api_key, get_resolver
from server.schemas.requests import SearchRequest
from server.schemas.responses import SearchResponseDTO

router = APIRouter(prefix="/v1", tags=["Search"])


@router.post("/search", response_model=SearchResponseDTO)
async def search(
    request: SearchRequest,
    http_request: Request,
    resolver: Resolver = Depends(get_resolver),
    api_key: str | None = Depends(get_api_key),
):
    text = await asyncio.to_thread(resolver.quick_search, request.query)
    return SearchResponseDTO(
        request_id=getattr(http_request.state, "request_id", "unknown"), text=text
    )
