from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlalchemy.orm import Session
from .. import models, schemas
from ..calculators.categories import ActivityCategory, CategoryLabels
from ..database import get_db
from ..estimation_totals import recalculate_estimation
from ..template_importer import next_sort_order
from ..vocabulary import label_for_code, load_category_labels

router = APIRouter(tags=["lines"])

# Lines carrying the ratio every Development estimate depends on
UNDELETABLE_CATEGORIES = (ActivityCategory.PROCESS, ActivityCategory.SUPPORT)

NEW_LINE_CATEGORY = ActivityCategory.DEVELOPMENT


def _require(db: Session, model, object_id, name: str):
    obj = db.query(model).filter(model.id == object_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail=f"{name} not found")
    return obj


def resolve_activity_type(payload: schemas.LineBase, db: Session, fallback=None):
    """The label a line should store: explicit label, then code, then fallback."""
    if payload.activity_type is not None:
        return payload.activity_type
    if payload.activity_type_code is not None:
        try:
            return label_for_code(db, payload.activity_type_code)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return fallback


def _check_references(data: dict, db: Session):
    if data.get("phase_id") is not None:
        _require(db, models.Phase, data["phase_id"], "Phase")
    if data.get("subphase_id") is not None:
        _require(db, models.Subphase, data["subphase_id"], "Subphase")
    if data.get("development_type_id") is not None:
        _require(db, models.DevelopmentType, data["development_type_id"], "Development type")


def _apply_default_description(line, db: Session):
    """Choosing a development type replaces the description with the type's default text."""
    if line.development_type_id is None:
        return
    dev_type = db.query(models.DevelopmentType).filter(
        models.DevelopmentType.id == line.development_type_id
    ).first()
    if dev_type and dev_type.default_description:
        line.description = dev_type.default_description


def build_line(payload: schemas.LineBase, estimation: models.Estimation, labels: CategoryLabels,
               db: Session, sort_order: int) -> models.EstimationLine:
    """New, unsaved line. Lines sent without an activity type default to Development."""
    activity_type = resolve_activity_type(payload, db, fallback=labels.label_for(NEW_LINE_CATEGORY))
    category = labels.resolve(activity_type)
    data = schemas.category_fields(payload.model_dump(exclude_unset=True), category)
    data["activity_type"] = activity_type
    _check_references(data, db)

    line = models.EstimationLine(
        estimation_id=estimation.id,
        sort_order=sort_order,
        final_estimate=0.0,
        **data,
    )
    if line.sizing is None:
        line.sizing = 0.0
    if "description" not in data:
        _apply_default_description(line, db)
    return line


@router.post("/estimations/{estimation_id}/lines", response_model=schemas.Line)
def create_line(estimation_id: int, payload: schemas.LineCreate, db: Session = Depends(get_db)):
    estimation = _require(db, models.Estimation, estimation_id, "Estimation")
    labels = load_category_labels(db)
    line = build_line(payload, estimation, labels, db, next_sort_order(estimation.id, db))
    db.add(line)
    db.flush()
    recalculate_estimation(estimation, db, labels)
    db.refresh(line)
    return line


@router.get("/estimations/{estimation_id}/lines", response_model=List[schemas.Line])
def list_lines(estimation_id: int, db: Session = Depends(get_db)):
    estimation = _require(db, models.Estimation, estimation_id, "Estimation")
    return estimation.lines


@router.get("/lines/{line_id}", response_model=schemas.Line)
def get_line(line_id: int, db: Session = Depends(get_db)):
    return _require(db, models.EstimationLine, line_id, "Line")


@router.patch("/lines/{line_id}", response_model=schemas.Line)
def update_line(line_id: int, payload: schemas.LineUpdate, db: Session = Depends(get_db)):
    line = _require(db, models.EstimationLine, line_id, "Line")
    labels = load_category_labels(db)

    activity_type = resolve_activity_type(payload, db, fallback=line.activity_type)
    category = labels.resolve(activity_type)
    data = schemas.category_fields(payload.model_dump(exclude_unset=True), category)
    data["activity_type"] = activity_type
    _check_references(data, db)

    for field, value in data.items():
        setattr(line, field, value)
    if category != ActivityCategory.SUPPORT:
        line.development_share = None
    if line.sizing is None:
        line.sizing = 0.0
    if "development_type_id" in data and "description" not in data:
        _apply_default_description(line, db)

    recalculate_estimation(line.estimation, db, labels)
    db.refresh(line)
    return line


@router.delete("/lines/{line_id}")
def delete_line(line_id: int, db: Session = Depends(get_db)):
    line = _require(db, models.EstimationLine, line_id, "Line")
    labels = load_category_labels(db)
    if labels.resolve(line.activity_type) in UNDELETABLE_CATEGORIES:
        protected = " and ".join(labels.label_for(category) for category in UNDELETABLE_CATEGORIES)
        raise HTTPException(
            status_code=400,
            detail=f"{protected} lines cannot be deleted; they are required for estimation calculations",
        )
    estimation = line.estimation
    db.delete(line)
    db.flush()
    totals = recalculate_estimation(estimation, db, labels)
    return {"ok": True, "totals": totals}
