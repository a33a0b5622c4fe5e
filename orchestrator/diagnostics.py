"""Configuration and connectivity self-test, reported as glyph-prefixed text lines."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from api.base_provider import BaseProvider
from models.provider_result import ResultKind
from orchestrator.condenser import Condenser
from utils.logger import get_logger

if TYPE_CHECKING:
    from orchestrator.core import Resolver

logger = get_logger(__name__)

PASS = "✅"
FAIL = "❌"
WARN = "⚠️"
INFO = "ℹ️"

SAMPLE_TEXT = (
    "The city council approved the new transit plan on Monday after a long debate. "
    "The plan adds three bus routes and extends service hours on weekends. "
    "Officials expect the first changes to take effect next spring. "
    "Residents who spoke at the meeting were mostly in favor of the proposal. "
    "Funding comes from a mix of state grants and the existing transit budget."
)


@dataclass
class DiagnosticReport:
    lines: list[str] = field(default_factory=list)
    ok: bool = True

    def add(self, glyph: str, text: str) -> None:
        self.lines.append(f"{glyph} {text}")
        if glyph == FAIL:
            self.ok = False

    def render(self) -> str:
        return "\n".join(self.lines)


def check_provider(report: DiagnosticReport, provider: BaseProvider, role: str) -> None:
    result = provider.check()
    label = f"{provider.display_name} ({role})"

    if result.kind == ResultKind.OK:
        report.add(PASS, f"{label} is working correctly!")
    elif result.kind == ResultKind.CONFIG_ERROR:
        report.add(FAIL, f"{label} configuration error: {result.content}")
    elif result.kind == ResultKind.EMPTY_RESULT:
        report.add(WARN, f"{label} responded but no results found.")
    else:
        detail = result.metadata.get("error") or result.content
        code = result.metadata.get("status_code")
        suffix = f" (Code: {code})" if code else ""
        report.add(FAIL, f"{label} error: {detail}{suffix}")


def check_summarizer(report: DiagnosticReport, condenser: Condenser) -> None:
    context = condenser.context
    if context is None or not context.init():
        reason = context.error if context is not None else "no summarizer context"
        report.add(INFO, f"Model summarizer unavailable ({reason}); extractive summarizer in use.")
        return

    summarizer = context.get()
    try:
        summarizer.summarize(SAMPLE_TEXT, 10, 30)
        report.add(PASS, f"Summarizer ({summarizer.name}) is working correctly!")
    except Exception as e:
        report.add(WARN, f"Summarizer ({summarizer.name}) failed: {e}. Extractive summarizer will be used.")


def run_diagnostics(resolver: "Resolver") -> DiagnosticReport:
    """
    Exercise both providers and the summarizer. Never raises.
    """
    report = DiagnosticReport()
    try:
        check_provider(report, resolver.primary, "primary")
        check_provider(report, resolver.fallback, "fallback")
        check_summarizer(report, resolver.condenser)
        report.add(INFO, f"Routing policy: {resolver.router.policy.value}")
    except Exception as e:
        logger.error("Diagnostics failed", exc_info=True)
        report.add(FAIL, f"Connection failed: {e}")

    logger.info(
        "Diagnostics complete",
        extra={"extra_fields": {"ok": report.ok, "lines": len(report.lines)}},
    )
    return report
