import re

from config.config import RoutingPolicy
from orchestrator.routing_types import QueryFeatures, RoutePlan, SourceRole

RECENCY_CUES = [
    "today",
    "tonight",
    "yesterday",
    "latest",
    "breaking",
    "recent",
    "recently",
    "current",
    "currently",
    "right now",
    "this week",
    "this month",
    "this year",
    "news",
    "headlines",
    "live",
    "score",
    "up to date",
]

_YEAR_PATTERN = re.compile(r"\b(19|20)\d{2}\b")

PRIMARY_ORDER = (SourceRole.PRIMARY, SourceRole.FALLBACK)
FALLBACK_ORDER = (SourceRole.FALLBACK, SourceRole.PRIMARY)


class QueryRouter:
    """Decides, once per request, which source is asked first."""

    def __init__(self, policy: RoutingPolicy = RoutingPolicy.PRIMARY_FIRST):
        self.policy = policy

    def analyze(self, query: str) -> QueryFeatures:
        text = query or ""
        cues = [cue for cue in RECENCY_CUES if self._contains_phrase(text, cue)]
        has_year = bool(_YEAR_PATTERN.search(text))
        return QueryFeatures(
            word_count=len(re.findall(r"\b[\w'-]+\b", text)),
            char_count=len(text),
            needs_latest_info=bool(cues) or has_year,
            has_year=has_year,
            recency_cues=cues,
        )

    def plan(self, query: str, *, force_fallback_first: bool = False) -> RoutePlan:
        if force_fallback_first:
            return RoutePlan(order=FALLBACK_ORDER, policy=self.policy, reason="profile_fallback_first")

        if self.policy == RoutingPolicy.PRIMARY_FIRST:
            return RoutePlan(order=PRIMARY_ORDER, policy=self.policy, reason="policy_primary_first")

        features = self.analyze(query)
        if features.needs_latest_info:
            cue = features.recency_cues[0] if features.recency_cues else "year"
            return RoutePlan(order=FALLBACK_ORDER, policy=self.policy, reason=f"recency_cue:{cue}")
        return RoutePlan(order=PRIMARY_ORDER, policy=self.policy, reason="no_recency_cue")

    def _contains_phrase(self, text: str, phrase: str) -> bool:
        return bool(re.search(rf"\b{re.escape(phrase)}\b", text, re.I))
