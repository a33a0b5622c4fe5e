"""
Models package for provider results and normalized completions.
"""

from .completion import CompletionResponse, NormalizedError, TokenUsage
from .provider_result import (
    FinalAnswer,
    ProviderErrorKind,
    ProviderResult,
    ResultKind,
    Source,
)

__all__ = [
    "CompletionResponse",
    "FinalAnswer",
    "NormalizedError",
    "ProviderErrorKind",
    "ProviderResult",
    "ResultKind",
    "Source",
    "TokenUsage",
]
