"""Display formatting and Recommended-vs-Baseline deltas.

Pure domain functions. Absent values render as the absence marker and are
never coerced to zero.
"""

from dataclasses import dataclass

from cockpit.domain.metrics import ProjectionMetrics

ABSENT = "—"

Number = int | float


def group_number(n: Number) -> str:
    """Thousands-grouped rendering with at most three fraction digits.

    Integral floats lose their fraction: 2400000.0 -> "2,400,000".
    """
    if isinstance(n, float):
        if n.is_integer():
            return f"{int(n):,}"
        text = f"{n:,.3f}".rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text
    return f"{n:,}"


def fmt_number(n: Number | None, prefix: str = "", suffix: str = "") -> str:
    if n is None:
        return ABSENT
    return f"{prefix}{group_number(n)}{suffix}"


def delta(a: Number | None, b: Number | None) -> Number | None:
    if a is None or b is None:
        return None
    return a - b


def fmt_delta(a: Number | None, b: Number | None, suffix: str = "") -> str:
    """Format a - b with an explicit '+' on positive differences.

    Either side missing yields the absence marker.
    """
    d = delta(a, b)
    if d is None:
        return ABSENT
    sign = "+" if d > 0 else ""
    return f"{sign}{group_number(d)}{suffix}"


@dataclass(frozen=True)
class MetricDelta:
    label: str
    value: Number | None
    display: str


@dataclass(frozen=True)
class SideSnapshot:
    """Everything one side of the delta row needs."""

    metrics: ProjectionMetrics
    critical_drift: int | None = None
    fragility: float | None = None
    volatility: float | None = None


def compute_deltas(recommended: SideSnapshot, baseline: SideSnapshot) -> list[MetricDelta]:
    """Signed Recommended - Baseline deltas in display order."""
    rm, bm = recommended.metrics, baseline.metrics
    rows: list[tuple[str, Number | None, Number | None, str]] = [
        ("IRR Δ", rm.irr, bm.irr, "%"),
        ("Payback Δ", rm.payback_months, bm.payback_months, " mo"),
        ("Schedule Δ", rm.schedule_months, bm.schedule_months, " mo"),
        ("Risk Δ", rm.risk_score, bm.risk_score, ""),
        ("Drift Δ (crit)", recommended.critical_drift, baseline.critical_drift, ""),
        ("Fragility Δ", recommended.fragility, baseline.fragility, ""),
        ("Volatility Δ", recommended.volatility, baseline.volatility, ""),
    ]
    return [
        MetricDelta(label=label, value=delta(a, b), display=fmt_delta(a, b, suffix))
        for label, a, b, suffix in rows
    ]


def card_display(
    metrics: ProjectionMetrics,
    fragility: float | None,
    volatility: float | None,
) -> dict[str, str]:
    """Formatted card fields, each degrading to the absence marker on its own."""
    budget = round(metrics.budget) if metrics.budget else None
    return {
        "IRR": fmt_number(metrics.irr, "", "%"),
        "NPV": fmt_number(metrics.npv, "$"),
        "Payback": fmt_number(metrics.payback_months, "", " mo"),
        "Schedule": fmt_number(metrics.schedule_months, "", " mo"),
        "Budget": fmt_number(budget, "$"),
        "Risk Score": fmt_number(metrics.risk_score, "", "/100"),
        "Fragility": fmt_number(fragility, "", "/100"),
        "Volatility": fmt_number(volatility, "", "/100"),
    }
