"""Best-effort parser for figures embedded in projection summary bullets.

The projection service writes IRR, NPV and payback into free-text bullets
such as "Projected IRR: 18.5%". Their format is not guaranteed, so every
figure is optional and a miss is never an error.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

IRR_PATTERN = re.compile(r"IRR[:\s]+([0-9.]+)%", re.IGNORECASE)
NPV_PATTERN = re.compile(r"NPV[:\s]+\$?([0-9,.]+)", re.IGNORECASE)
PAYBACK_PATTERN = re.compile(r"payback[:\s]+(\d+)", re.IGNORECASE)

# Longest numeric prefix of a capture: "1.2.3" reads as 1.2
LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass(frozen=True)
class SummaryFigures:
    irr: float | None = None
    npv: float | None = None
    payback_months: int | None = None


def _parse_float(raw: str) -> float | None:
    match = LEADING_NUMBER.match(raw.replace(",", ""))
    return float(match.group(0)) if match else None


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _first_match(lines: list[str], pattern: re.Pattern, convert: Callable[[str], Any]) -> Any:
    for line in lines:
        match = pattern.search(line)
        if match is None:
            continue
        return convert(match.group(1))
    return None


def parse_summary_figures(summary: Any) -> SummaryFigures:
    """Scan summary bullets for IRR, NPV and payback months.

    Non-list summaries and non-string bullets are ignored. For each figure
    the first bullet that matches wins, even when its capture holds no
    readable number; later bullets never override it.
    """
    if not isinstance(summary, list):
        return SummaryFigures()

    lines = [line for line in summary if isinstance(line, str)]
    return SummaryFigures(
        irr=_first_match(lines, IRR_PATTERN, _parse_float),
        npv=_first_match(lines, NPV_PATTERN, _parse_float),
        payback_months=_first_match(lines, PAYBACK_PATTERN, _parse_int),
    )
