"""Answer endpoint: the voice front end posts a transcript and speaks the reply."""

import asyncio

from fastapi import APIRouter, Depends, Request

from orchestrator.core import Resolver
from server.dependencies import get_api_key, get_resolver
from server.schemas.requests import AskRequest
from server.schemas.responses import AskResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Ask"])


@router.post("/ask", response_model=AskResponseDTO)
async def ask(
    request: AskRequest,
    http_request: Request,
    resolver: Resolver = Depends(get_resolver),
    api_key: str | None = Depends(get_api_key),
):
    """Resolve a query to a condensed, attributed answer."""
    request_id = getattr(http_request.state, "request_id", "unknown")
    profile = "detailed" if request.detailed else "standard"

    logger.info(
        "Ask request received",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "profile": profile,
                "query_chars": len(request.query),
            }
        },
    )

    final_answer = await asyncio.to_thread(resolver.resolve, request.query, profile)
    return AskResponseDTO.from_final_answer(final_answer, request_id=request_id)
