"""
Import template line-sets into an estimation.

Each template line becomes a new estimation line appended after the
estimation's current last line, in template order. Derived fields start at
zero and are filled by the recalculation that follows the import.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models
from .estimation_totals import recalculate_estimation

logger = logging.getLogger(__name__)

# Fields copied verbatim from a template line
_COPIED_FIELDS = (
    "phase_id", "subphase_id", "development_type_id",
    "module", "customer_requirement", "functionality", "description",
    "technical_notes", "activity_type", "sizing", "development_share",
    "complexity",
)


def next_sort_order(estimation_id: int, db: Session) -> int:
    current = db.query(func.max(models.EstimationLine.sort_order)).filter(
        models.EstimationLine.estimation_id == estimation_id
    ).scalar()
    return 0 if current is None else current + 1


def import_templates(estimation: models.Estimation, template_ids: List[int], db: Session) -> List[models.EstimationLine]:
    """
    Copy the lines of each template (in the given order) into the estimation.

    Raises HTTPException 400 for an empty request and 404 if any template is
    missing; nothing is written in either case.
    """
    if not template_ids:
        raise HTTPException(status_code=400, detail="No templates selected for import")

    templates = []
    for template_id in template_ids:
        template = db.query(models.EstimationTemplate).filter(
            models.EstimationTemplate.id == template_id
        ).first()
        if not template:
            raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
        templates.append(template)

    order = next_sort_order(estimation.id, db)
    created = []
    for template in templates:
        for template_line in template.lines:
            data = {field: getattr(template_line, field) for field in _COPIED_FIELDS}
            line = models.EstimationLine(
                estimation_id=estimation.id,
                final_estimate=0.0,
                sort_order=order,
                **data,
            )
            db.add(line)
            created.append(line)
            order += 1
        estimation.template_id = template.id

    db.flush()
    logger.info(
        "Imported %d lines from %d templates into estimation %s",
        len(created), len(templates), estimation.number,
    )

    recalculate_estimation(estimation, db)
    for line in created:
        db.refresh(line)
    return created
