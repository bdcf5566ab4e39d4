"""Projection metrics normalization.

Pure domain functions. Turns a raw projection row into the fixed six-field
metrics record shown on comparison cards.
"""

from dataclasses import asdict, dataclass
from typing import Any

from cockpit.domain.summary_parser import parse_summary_figures
from cockpit.schemas.comparison import ProjectionOut


@dataclass(frozen=True)
class ProjectionMetrics:
    irr: float | None = None
    npv: float | None = None
    payback_months: int | None = None
    schedule_months: int | None = None
    budget: float | None = None
    risk_score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


EMPTY_METRICS = ProjectionMetrics()


def _last_budget(series: Any) -> float | None:
    if not isinstance(series, list) or not series:
        return None
    last = series[-1]
    if not isinstance(last, dict):
        return None
    budget = last.get("budget")
    if isinstance(budget, bool) or not isinstance(budget, (int, float)):
        return None
    return budget


def extract_metrics(projection: ProjectionOut | None) -> ProjectionMetrics:
    """Normalize a projection into ProjectionMetrics.

    Pure function -- never raises; a missing projection yields all-null metrics.

    Sources:
        - schedule_months: projection.months
        - risk_score: projection.projection_risk_score
        - budget: "budget" of the last series snapshot
        - irr / npv / payback_months: mined from summary bullets
    """
    if projection is None:
        return EMPTY_METRICS

    figures = parse_summary_figures(projection.summary)
    return ProjectionMetrics(
        irr=figures.irr,
        npv=figures.npv,
        payback_months=figures.payback_months,
        schedule_months=projection.months,
        budget=_last_budget(projection.series),
        risk_score=projection.projection_risk_score,
    )
