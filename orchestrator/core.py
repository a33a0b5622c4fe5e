"""
Resolver - query-resolution pipeline for VoxQuery.

Key guarantees:
- CLI/API layers stay thin (no provider imports there)
- Steps run strictly in order: first fetch, optional second fetch, optional condensation
- No exceptions bubble up from resolve() / answer() / quick_search() / run_diagnostics()
"""

import time
import uuid
from typing import Any

from api.base_provider import BaseProvider
from models import messages
from models.provider_result import FinalAnswer, ProviderResult
from orchestrator.condenser import Condenser
from orchestrator.fallback_manager import FallbackManager, FallbackPolicy
from orchestrator.query_router import QueryRouter
from orchestrator.response_validator import ResponseValidator
from orchestrator.routing_types import (
    PROFILES,
    STANDARD_PROFILE,
    AnswerProfile,
    NextAction,
    RoutePlan,
    SourceRole,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class Resolver:
    def __init__(
        self,
        primary: BaseProvider,
        fallback: BaseProvider,
        *,
        condenser: Condenser | None = None,
        router: QueryRouter | None = None,
        validator: ResponseValidator | None = None,
        fallback_manager: FallbackManager | None = None,
        fallback_policy: FallbackPolicy | None = None,
    ):
        self.primary = primary
        self.fallback = fallback
        self.condenser = condenser or Condenser()
        self.router = router or QueryRouter()
        self.validator = validator or ResponseValidator()
        self.fallback_manager = fallback_manager or FallbackManager()
        self.fallback_policy = fallback_policy or FallbackPolicy()

    # ---------- helpers ----------

    def _provider_for(self, role: SourceRole) -> BaseProvider:
        return self.primary if role == SourceRole.PRIMARY else self.fallback

    def _fetch_with_fallback(self, query: str, plan: RoutePlan) -> tuple[ProviderResult, dict[str, Any]]:
        first_provider = self._provider_for(plan.order[0])
        second_provider = self._provider_for(plan.order[1])

        first = first_provider.fetch(query)
        validation = self.validator.validate(first)
        decision = self.fallback_manager.decide(
            first=first, validation=validation, policy=self.fallback_policy
        )

        route: dict[str, Any] = {
            "plan": [role.value for role in plan.order],
            "plan_reason": plan.reason,
            "first": first.to_dict(),
            "validation": validation.reason,
            "used_fallback": False,
        }

        if decision.action == NextAction.ACCEPT:
            route["selection"] = decision.reason
            return first, route

        logger.info(
            "First source insufficient, trying second source",
            extra={
                "extra_fields": {
                    "first_provider": first_provider.name,
                    "second_provider": second_provider.name,
                    "reason": validation.reason,
                    "marker": validation.detail,
                }
            },
        )

        second = second_provider.fetch(query)
        selected, reason = self.fallback_manager.select(
            first=first, second=second, policy=self.fallback_policy
        )

        route["second"] = second.to_dict()
        route["used_fallback"] = True
        route["selection"] = reason
        return selected, route

    def _should_return_verbatim(self, result: ProviderResult, profile: AnswerProfile) -> bool:
        if result.is_error:
            return True
        if len(result.content.strip()) < profile.verbatim_below_chars:
            return True
        return messages.is_failure_sentinel(result.content)

    # ---------- entry points ----------

    def resolve(self, query: str, profile: str = STANDARD_PROFILE.name) -> FinalAnswer:
        """
        Turn a transcribed query into a final, speakable answer.

        Args:
            query: Free-text query from the caller
            profile: "standard" or "detailed" (longer summary, real-time source first)

        Returns:
            FinalAnswer; rendering and speech are the caller's job
        """
        request_id = f"ans_{uuid.uuid4().hex[:12]}"
        start_time = time.time()

        try:
            clean_query = (query or "").strip()
            if not clean_query:
                return FinalAnswer(
                    text=messages.EMPTY_QUERY,
                    metadata={"request_id": request_id, "strategy": "input_error"},
                )

            answer_profile = PROFILES.get(profile, STANDARD_PROFILE)
            plan = self.router.plan(clean_query, force_fallback_first=answer_profile.fallback_first)
            result, route = self._fetch_with_fallback(clean_query, plan)

            metadata: dict[str, Any] = {
                "request_id": request_id,
                "profile": answer_profile.name,
                "route": route,
                "used_fallback": route["used_fallback"],
                "provider": result.provider,
                "source": result.source.value,
                "is_real_time": result.is_real_time,
            }

            if self._should_return_verbatim(result, answer_profile):
                text = result.content
                metadata["strategy"] = "verbatim"
            else:
                condensed = self.condenser.condense(
                    result.content,
                    min_words=answer_profile.min_words,
                    max_words=answer_profile.max_words,
                    input_chars=answer_profile.input_chars,
                )
                text = condensed.text
                metadata["strategy"] = condensed.strategy

            metadata["latency_ms"] = int((time.time() - start_time) * 1000)
            logger.info(
                "Query resolved",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "profile": answer_profile.name,
                        "provider": result.provider,
                        "kind": result.kind.value,
                        "used_fallback": route["used_fallback"],
                        "strategy": metadata["strategy"],
                        "latency_ms": metadata["latency_ms"],
                    }
                },
            )
            return FinalAnswer(text=text, attribution=result.attribution, metadata=metadata)

        except Exception as e:
            logger.error(
                f"Unexpected error while resolving query: {e}",
                exc_info=True,
                extra={"extra_fields": {"request_id": request_id, "error_type": type(e).__name__}},
            )
            return FinalAnswer(
                text=messages.APOLOGY,
                metadata={"request_id": request_id, "strategy": "unexpected_error"},
            )

    def answer(self, query: str) -> str:
        """Finished answer string, attribution line included."""
        return self.resolve(query).render()

    def answer_detailed(self, query: str) -> str:
        return self.resolve(query, profile="detailed").render()

    def quick_search(self, query: str) -> str:
        """Raw, unsummarized content from the first sufficient source."""
        try:
            clean_query = (query or "").strip()
            if not clean_query:
                return messages.EMPTY_QUERY
            result, _ = self._fetch_with_fallback(clean_query, self.router.plan(clean_query))
            return result.content
        except Exception as e:
            logger.error(
                f"Quick search failed: {e}",
                exc_info=True,
                extra={"extra_fields": {"error_type": type(e).__name__}},
            )
            return messages.QUICK_SEARCH_FAILED

    def run_diagnostics(self) -> str:
        from orchestrator.diagnostics import run_diagnostics

        return run_diagnostics(self).render()
