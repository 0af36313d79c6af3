from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
from .. import models, schemas
from ..config import settings
from ..database import get_db
from ..estimation_totals import recalculate_estimation
from ..template_importer import import_templates
from ..vocabulary import load_category_labels
from .lines import build_line

router = APIRouter(prefix="/estimations", tags=["estimations"])


def generate_estimation_number(db: Session) -> str:
    last_id = db.query(func.max(models.Estimation.id)).scalar() or 0
    year = datetime.utcnow().year
    return f"EST-{year}-{str(last_id + 1).zfill(4)}"


def _get_estimation(estimation_id: int, db: Session) -> models.Estimation:
    estimation = db.query(models.Estimation).filter(models.Estimation.id == estimation_id).first()
    if not estimation:
        raise HTTPException(status_code=404, detail="Estimation not found")
    return estimation


@router.post("/", response_model=schemas.Estimation)
def create_estimation(payload: schemas.EstimationCreate, db: Session = Depends(get_db)):
    estimation = models.Estimation(
        number=generate_estimation_number(db),
        name=payload.name,
        opportunity=payload.opportunity,
        estimated_start_date=payload.estimated_start_date,
    )
    db.add(estimation)
    db.flush()

    labels = load_category_labels(db)
    for order, line_payload in enumerate(payload.lines):
        db.add(build_line(line_payload, estimation, labels, db, order))
    db.flush()

    recalculate_estimation(estimation, db, labels)
    return estimation


@router.get("/", response_model=List[schemas.Estimation])
def list_estimations(skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    limit = min(limit, settings.MAX_PAGE_SIZE)
    return db.query(models.Estimation).order_by(
        models.Estimation.created_at.desc()
    ).offset(skip).limit(limit).all()


@router.get("/{estimation_id}", response_model=schemas.Estimation)
def get_estimation(estimation_id: int, db: Session = Depends(get_db)):
    return _get_estimation(estimation_id, db)


@router.patch("/{estimation_id}", response_model=schemas.Estimation)
def update_estimation(estimation_id: int, update: schemas.EstimationUpdate, db: Session = Depends(get_db)):
    estimation = _get_estimation(estimation_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(estimation, field, value)
    db.commit()
    db.refresh(estimation)
    return estimation


@router.delete("/{estimation_id}")
def delete_estimation(estimation_id: int, db: Session = Depends(get_db)):
    estimation = _get_estimation(estimation_id, db)
    db.delete(estimation)
    db.commit()
    return {"ok": True}


@router.post("/{estimation_id}/recalculate", response_model=schemas.Estimation)
def recalculate_stored_estimation(estimation_id: int, db: Session = Depends(get_db)):
    """Re-derive every line and the totals from the stored lines."""
    estimation = _get_estimation(estimation_id, db)
    recalculate_estimation(estimation, db)
    return estimation


@router.post("/{estimation_id}/import", response_model=schemas.Estimation)
def import_into_estimation(estimation_id: int, request: schemas.ImportRequest, db: Session = Depends(get_db)):
    """Append the lines of one or more templates, then recalculate."""
    estimation = _get_estimation(estimation_id, db)
    import_templates(estimation, request.template_ids, db)
    db.refresh(estimation)
    return estimation
