"""
Stored-estimation recalculation.

Snapshot the estimation's lines into plain dicts, run the engine, and write
the derived fields (Support sizing, every final estimate, the three totals)
back onto the rows. Called after every line mutation and after imports, so
stored lines never carry stale derived values.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .calculators.categories import CategoryLabels
from .calculators.recalculation import recalculate
from .vocabulary import load_category_labels

logger = logging.getLogger(__name__)


def line_snapshot(line: models.EstimationLine) -> dict:
    """The engine's view of a stored line."""
    return {
        "id": line.id,
        "activity_category": line.activity_type,
        "sizing": line.sizing,
        "development_share": line.development_share,
        "final_estimate": line.final_estimate,
    }


def recalculate_estimation(estimation: models.Estimation, db: Session, labels: Optional[CategoryLabels] = None) -> dict:
    """
    Recompute and persist derived fields for one estimation.

    Returns the totals dict produced by the engine.
    """
    if labels is None:
        labels = load_category_labels(db)

    db.flush()
    db.refresh(estimation)
    rows = list(estimation.lines)
    updated, totals = recalculate([line_snapshot(row) for row in rows], labels)

    # The engine preserves order, so rows and results pair up positionally
    for row, result in zip(rows, updated):
        row.sizing = result["sizing"] if result["sizing"] is not None else 0.0
        row.final_estimate = result["final_estimate"]

    estimation.total_development_hours = totals["total_development_sizing"]
    estimation.total_support_hours = totals["total_support_sizing"]
    estimation.total_project_hours = totals["total_project_hours"]

    db.commit()
    db.refresh(estimation)

    logger.info(
        "Estimation %s: %d lines, %.2f project hrs",
        estimation.number, len(rows), estimation.total_project_hours,
    )
    return totals
