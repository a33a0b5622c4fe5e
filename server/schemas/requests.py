"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, Field

MAX_QUERY_CHARS = 2000


class AskRequest(BaseModel):
    # Blank queries are allowed through: the resolver answers them with a prompt.
    query: str = Field(..., max_length=MAX_QUERY_CHARS)
    detailed: bool = False


class SearchRequest(BaseModel):
    query: str = Field(..., max_length=MAX_QUERY_CHARS)
