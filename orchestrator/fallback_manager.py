from dataclasses import dataclass

from models.provider_result import ProviderResult, ResultKind
from orchestrator.routing_types import FallbackDecision, NextAction, ValidationResult


@dataclass(frozen=True)
class FallbackPolicy:
    allow_second_source: bool = True
    keep_stale_first_result: bool = True


class FallbackManager:
    def decide(
        self,
        *,
        first: ProviderResult,
        validation: ValidationResult,
        policy: FallbackPolicy,
    ) -> FallbackDecision:
        if first.kind == ResultKind.INPUT_ERROR:
            return FallbackDecision(action=NextAction.ACCEPT, reason="input_error")

        if validation.ok:
            return FallbackDecision(action=NextAction.ACCEPT, reason="sufficient")

        if not policy.allow_second_source:
            return FallbackDecision(action=NextAction.ACCEPT, reason="second_source_disabled")

        return FallbackDecision(action=NextAction.TRY_SECOND_SOURCE, reason=validation.reason)

    def select(
        self,
        *,
        first: ProviderResult,
        second: ProviderResult,
        policy: FallbackPolicy,
    ) -> tuple[ProviderResult, str]:
        """
        Pick the result to present after both sources ran.

        A usable second result wins. When it failed, stale content from the
        first source is still better than an error; when both failed the
        first failure is the one the user can act on.
        """
        if second.is_ok:
            return second, "second_source"
        if first.is_ok and policy.keep_stale_first_result:
            return first, "stale_first_source"
        if first.is_error:
            return first, "both_failed"
        return second, "second_source_failed"
