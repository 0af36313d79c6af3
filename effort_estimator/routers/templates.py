from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db
from ..vocabulary import load_category_labels
from .lines import NEW_LINE_CATEGORY, resolve_activity_type

router = APIRouter(prefix="/templates", tags=["templates"])


def _get_template(template_id: int, db: Session) -> models.EstimationTemplate:
    template = db.query(models.EstimationTemplate).filter(
        models.EstimationTemplate.id == template_id
    ).first()
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


def _build_template_line(payload: schemas.TemplateLineCreate, template_id: int, labels, db: Session,
                         sort_order: int) -> models.TemplateLine:
    activity_type = resolve_activity_type(payload, db, fallback=labels.label_for(NEW_LINE_CATEGORY))
    data = schemas.category_fields(payload.model_dump(exclude_unset=True), labels.resolve(activity_type))
    data["activity_type"] = activity_type
    line = models.TemplateLine(template_id=template_id, sort_order=sort_order, **data)
    if line.sizing is None:
        line.sizing = 0.0
    return line


@router.post("/", response_model=schemas.Template)
def create_template(payload: schemas.TemplateCreate, db: Session = Depends(get_db)):
    template = models.EstimationTemplate(name=payload.name)
    db.add(template)
    db.flush()

    labels = load_category_labels(db)
    for order, line_payload in enumerate(payload.lines):
        db.add(_build_template_line(line_payload, template.id, labels, db, order))
    db.commit()
    db.refresh(template)
    return template


@router.get("/", response_model=List[schemas.Template])
def list_templates(db: Session = Depends(get_db)):
    return db.query(models.EstimationTemplate).order_by(models.EstimationTemplate.name).all()


@router.get("/{template_id}", response_model=schemas.Template)
def get_template(template_id: int, db: Session = Depends(get_db)):
    return _get_template(template_id, db)


@router.delete("/{template_id}")
def delete_template(template_id: int, db: Session = Depends(get_db)):
    template = _get_template(template_id, db)
    # Estimations keep their imported lines; only the back-reference goes
    db.query(models.Estimation).filter(
        models.Estimation.template_id == template.id
    ).update({models.Estimation.template_id: None})
    db.delete(template)
    db.commit()
    return {"ok": True}


@router.post("/{template_id}/lines", response_model=schemas.TemplateLine)
def add_template_line(template_id: int, payload: schemas.TemplateLineCreate, db: Session = Depends(get_db)):
    template = _get_template(template_id, db)
    current = db.query(func.max(models.TemplateLine.sort_order)).filter(
        models.TemplateLine.template_id == template.id
    ).scalar()
    order = 0 if current is None else current + 1

    line = _build_template_line(payload, template.id, load_category_labels(db), db, order)
    db.add(line)
    db.commit()
    db.refresh(line)
    return line
