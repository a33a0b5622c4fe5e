"""Health check endpoint."""

from datetime import datetime

from fastapi import APIRouter

from config.config import Config
from server.schemas.responses import API_VERSION, HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check():
    """
    Liveness plus the active provider selection.

    No provider is called; use /v1/diagnostics for that. Missing credentials
    are listed by name only.
    """
    config = Config()
    missing = config.missing_credentials()
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.utcnow().isoformat() + "Z",
        version=API_VERSION,
        fallback_provider=config.fallback_provider.value,
        routing_policy=config.routing_policy.value,
        configured=not missing,
        missing_credentials=missing,
    )
