"""
Deterministic effort recalculation over a set of estimation lines.

Pure Python math. No I/O, no database. Every derived number is traceable to
one of four ordered passes:

    1. total Development sizing
    2. Support sizing = ceil(development_share / 100 × total Development)
    3. total Support sizing (from the pass-2 values)
    4. final estimate per line, keyed by category

Support effort is a percentage of Development effort, and Development's final
estimate is inflated by the Support/Development ratio, so the passes only
ever read outputs of an earlier pass.

Input: list of line dicts (activity_category, sizing, development_share, ...)
Output: (new list of line dicts, totals dict)
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from .categories import DEFAULT_LABELS, ActivityCategory, CategoryLabels

logger = logging.getLogger(__name__)


def _as_number(value) -> float:
    """Coerce a numeric input. Missing, malformed, non-finite or negative → 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (ValueError, TypeError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def _is_usable_total(value: float) -> bool:
    return not (math.isnan(value) or math.isinf(value) or value < 0)


# --- Aggregates ---

def _sum_sizing(resolved, category):
    # type: (List[Tuple[Optional[ActivityCategory], Dict]], ActivityCategory) -> float
    """Sum of sizing over the lines of one category, as they currently stand."""
    return sum(
        _as_number(line.get("sizing"))
        for line_category, line in resolved
        if line_category == category
    )


def total_project_hours(development_sizing: float, support_sizing: float) -> float:
    return development_sizing + support_sizing


def support_ratio(support_sizing: float, development_sizing: float) -> float:
    """
    Support sizing relative to Development sizing.
    0 when Development is zero, or when either total is negative, NaN or infinite.
    """
    if not (_is_usable_total(support_sizing) and _is_usable_total(development_sizing)):
        return 0.0
    if development_sizing == 0:
        return 0.0
    return support_sizing / development_sizing


# --- Per-line formulas ---

def support_sizing(development_share, development_sizing: float) -> int:
    """Support sizing: a percentage of total Development sizing, rounded up."""
    if not _is_usable_total(development_sizing):
        return 0
    return math.ceil(_as_number(development_share) / 100.0 * development_sizing)


def development_estimate(sizing, support_total: float, development_total: float) -> int:
    """Development sizing inflated by the support ratio, rounded up."""
    ratio = support_ratio(support_total, development_total)
    return math.ceil(_as_number(sizing) * (1 + ratio))


def process_estimate(sizing) -> float:
    """Process hours pass through unchanged."""
    number = _as_number(sizing)
    return int(number) if number.is_integer() else number


def support_estimate() -> int:
    """Support effort is folded into Development via the ratio."""
    return 0


def final_estimate(category, sizing, development_total: float, support_total: float):
    # type: (Optional[ActivityCategory], object, float, float) -> float
    if category == ActivityCategory.DEVELOPMENT:
        return development_estimate(sizing, support_total, development_total)
    if category == ActivityCategory.PROCESS:
        return process_estimate(sizing)
    if category == ActivityCategory.SUPPORT:
        return support_estimate()
    return 0


# --- The full pass ---

def recalculate(lines, category_labels=None):
    # type: (List[Dict], Optional[CategoryLabels]) -> Tuple[List[Dict], Dict[str, float]]
    """
    Recompute Support sizing, every line's final estimate, and the totals.

    Args:
        lines: Ordered line dicts. Keys read: activity_category, sizing,
               development_share. Every other key is copied through untouched.
        category_labels: The caller's Development/Process/Support vocabulary.
                         Defaults to the English labels.

    Returns:
        (updated_lines, totals) — updated_lines has the same length and order
        as the input; totals has total_development_sizing,
        total_support_sizing and total_project_hours.
    """
    labels = category_labels or DEFAULT_LABELS
    resolved = [(labels.resolve(line.get("activity_category")), dict(line)) for line in lines]

    # Pass 1: Development total. Support placeholders never count here.
    development_total = _sum_sizing(resolved, ActivityCategory.DEVELOPMENT)

    # Pass 2: derive Support sizing; caller-supplied values are discarded
    for category, line in resolved:
        if category == ActivityCategory.SUPPORT:
            line["sizing"] = support_sizing(line.get("development_share"), development_total)

    # Pass 3: Support total from the pass-2 values only
    support_total = _sum_sizing(resolved, ActivityCategory.SUPPORT)

    # Pass 4: final estimates
    for category, line in resolved:
        line["final_estimate"] = final_estimate(
            category, line.get("sizing"), development_total, support_total,
        )

    totals = {
        "total_development_sizing": development_total,
        "total_support_sizing": support_total,
        "total_project_hours": total_project_hours(development_total, support_total),
    }

    logger.info(
        "Recalculated %d lines: %.2f dev, %.2f support → %.2f project hrs",
        len(resolved), development_total, support_total, totals["total_project_hours"],
    )

    return [line for _, line in resolved], totals
