"""
Result View Model
Display-ready structures derived from a RiskAssessment.
"""

import locale
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from protocol_risk.core.tabs import ResultTab
from protocol_risk.utils.schema import RiskAssessment, RiskLevel, Severity

ACCENT_COLOR = "#6366f1"
MUTED_COLOR = "#71717a"

RISK_COLORS = {
    RiskLevel.LOW: "#22c55e",
    RiskLevel.MEDIUM: "#eab308",
    RiskLevel.HIGH: "#ef4444",
}

SEVERITY_COLORS = {
    Severity.CRITICAL: "#ef4444",
    Severity.WARNING: "#eab308",
    Severity.INFO: "#3b82f6",
}


def risk_color(level: Union[RiskLevel, str, None]) -> str:
    """Display color for a risk level; unknown levels get the accent color."""
    try:
        return RISK_COLORS[RiskLevel(level)]
    except ValueError:
        return ACCENT_COLOR


def severity_color(severity: Union[Severity, str, None]) -> str:
    try:
        return SEVERITY_COLORS[Severity(severity)]
    except ValueError:
        return MUTED_COLOR


def _grouping_separator() -> str:
    # The C locale has no separator; group with commas like en-US then
    return locale.localeconv().get("thousands_sep") or ","


def format_count(value: int, separator: Optional[str] = None) -> str:
    """Format an integer with thousands grouping, e.g. 12500 -> '12,500'."""
    sep = _grouping_separator() if separator is None else separator
    return f"{value:,}".replace(",", sep)


@dataclass(frozen=True)
class MetricTile:
    label: str
    value: str


@dataclass(frozen=True)
class FindingCard:
    id: str
    title: str
    description: str
    severity: str
    color: str


@dataclass(frozen=True)
class RecommendationCard:
    id: str
    title: str
    description: str


@dataclass(frozen=True)
class ResultViewModel:
    score: int
    level: str
    level_label: str
    level_color: str
    metrics: Tuple[MetricTile, ...]
    findings: Tuple[FindingCard, ...]
    recommendations: Tuple[RecommendationCard, ...]
    active_tab: ResultTab

    @property
    def visible_cards(self) -> Tuple[Union[FindingCard, RecommendationCard], ...]:
        if self.active_tab is ResultTab.RECOMMENDATIONS:
            return self.recommendations
        return self.findings


def build_view_model(
    assessment: RiskAssessment,
    active_tab: ResultTab = ResultTab.FINDINGS,
    separator: Optional[str] = None,
) -> ResultViewModel:
    """Derive the display structures for an assessment, preserving service order."""
    level = assessment.level.value
    metrics = assessment.metrics

    return ResultViewModel(
        score=assessment.score,
        level=level,
        level_label=f"{level.upper()} RISK",
        level_color=risk_color(assessment.level),
        metrics=(
            MetricTile("TVL", metrics.tvl),
            MetricTile("Holders", format_count(metrics.holders, separator)),
            MetricTile("Transactions", format_count(metrics.transactions, separator)),
            MetricTile("Age", metrics.age),
        ),
        findings=tuple(
            FindingCard(
                id=finding.id,
                title=finding.title,
                description=finding.description,
                severity=finding.severity.value,
                color=severity_color(finding.severity),
            )
            for finding in assessment.findings
        ),
        recommendations=tuple(
            RecommendationCard(id=rec.id, title=rec.title, description=rec.description)
            for rec in assessment.recommendations
        ),
        active_tab=ResultTab(active_tab),
    )
