"""Pydantic response models (DTOs) for FastAPI endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from models.provider_result import FinalAnswer

API_VERSION = "1.0.0"


class AskResponseDTO(BaseModel):
    request_id: str
    text: str  # rendered answer, attribution line included
    answer: str
    attribution: str | None = None
    source: str | None = None
    provider: str | None = None
    used_fallback: bool = False
    is_real_time: bool = False
    strategy: str | None = None
    timestamp: str

    @classmethod
    def from_final_answer(cls, fa: FinalAnswer, request_id: str):
        """Convert FinalAnswer to DTO."""
        md = fa.metadata or {}
        return cls(
            request_id=md.get("request_id") or request_id,
            text=fa.render(),
            answer=fa.text,
            attribution=fa.attribution,
            source=md.get("source"),
            provider=md.get("provider"),
            used_fallback=bool(md.get("used_fallback", False)),
            is_real_time=bool(md.get("is_real_time", False)),
            strategy=md.get("strategy"),
            timestamp=datetime.utcnow().isoformat() + "Z",
        )


class SearchResponseDTO(BaseModel):
    request_id: str
    text: str


class DiagnosticsResponseDTO(BaseModel):
    ok: bool
    lines: list[str] = Field(default_factory=list)
    report: str


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = API_VERSION
    fallback_provider: str
    routing_policy: str
    configured: bool
    missing_credentials: list[str] = Field(default_factory=list)
