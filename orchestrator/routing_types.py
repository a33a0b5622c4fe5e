from dataclasses import dataclass, field
from enum import Enum

from config.config import RoutingPolicy


class SourceRole(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class QueryFeatures:
    word_count: int
    char_count: int
    needs_latest_info: bool
    has_year: bool
    recency_cues: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RoutePlan:
    order: tuple[SourceRole, SourceRole]
    policy: RoutingPolicy
    reason: str

    @property
    def fallback_first(self) -> bool:
        return self.order[0] == SourceRole.FALLBACK


@dataclass(frozen=True)
class AnswerProfile:
    """Condensation targets and thresholds for one style of answer."""

    name: str
    min_words: int
    max_words: int
    input_chars: int
    verbatim_below_chars: int
    fallback_first: bool = False


STANDARD_PROFILE = AnswerProfile(
    name="standard", min_words=40, max_words=120, input_chars=1500, verbatim_below_chars=150
)
DETAILED_PROFILE = AnswerProfile(
    name="detailed",
    min_words=60,
    max_words=180,
    input_chars=2000,
    verbatim_below_chars=200,
    fallback_first=True,
)

PROFILES = {profile.name: profile for profile in (STANDARD_PROFILE, DETAILED_PROFILE)}


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str = "ok"
    severity: str = "none"
    detail: str | None = None


class NextAction(str, Enum):
    TRY_SECOND_SOURCE = "try_second_source"
    ACCEPT = "accept"


@dataclass(frozen=True)
class FallbackDecision:
    action: NextAction
    reason: str
