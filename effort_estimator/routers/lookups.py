from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(tags=["lookups"])


# --- Phases ---

@router.post("/phases/", response_model=schemas.Phase)
def create_phase(phase: schemas.PhaseCreate, db: Session = Depends(get_db)):
    db_phase = models.Phase(**phase.model_dump())
    db.add(db_phase)
    db.commit()
    db.refresh(db_phase)
    return db_phase

@router.get("/phases/", response_model=List[schemas.Phase])
def list_phases(db: Session = Depends(get_db)):
    return db.query(models.Phase).order_by(models.Phase.sort_order, models.Phase.id).all()


# --- Subphases ---

@router.post("/subphases/", response_model=schemas.Subphase)
def create_subphase(subphase: schemas.SubphaseCreate, db: Session = Depends(get_db)):
    if subphase.phase_id is not None:
        phase = db.query(models.Phase).filter(models.Phase.id == subphase.phase_id).first()
        if not phase:
            raise HTTPException(status_code=404, detail="Phase not found")
    db_subphase = models.Subphase(**subphase.model_dump())
    db.add(db_subphase)
    db.commit()
    db.refresh(db_subphase)
    return db_subphase

@router.get("/subphases/", response_model=List[schemas.Subphase])
def list_subphases(phase_id: int = None, db: Session = Depends(get_db)):
    query = db.query(models.Subphase)
    if phase_id is not None:
        query = query.filter(models.Subphase.phase_id == phase_id)
    return query.order_by(models.Subphase.sort_order, models.Subphase.id).all()


# --- Development types ---

@router.post("/development-types/", response_model=schemas.DevelopmentType)
def create_development_type(dev_type: schemas.DevelopmentTypeCreate, db: Session = Depends(get_db)):
    db_type = models.DevelopmentType(**dev_type.model_dump())
    db.add(db_type)
    db.commit()
    db.refresh(db_type)
    return db_type

@router.get("/development-types/", response_model=List[schemas.DevelopmentType])
def list_development_types(db: Session = Depends(get_db)):
    return db.query(models.DevelopmentType).order_by(models.DevelopmentType.name).all()

@router.get("/development-types/{type_id}", response_model=schemas.DevelopmentType)
def get_development_type(type_id: int, db: Session = Depends(get_db)):
    dev_type = db.query(models.DevelopmentType).filter(models.DevelopmentType.id == type_id).first()
    if not dev_type:
        raise HTTPException(status_code=404, detail="Development type not found")
    return dev_type


# --- Activity types ---

@router.get("/activity-types/", response_model=List[schemas.ActivityType])
def list_activity_types(db: Session = Depends(get_db)):
    return db.query(models.ActivityTypeOption).order_by(models.ActivityTypeOption.code).all()

@router.post("/activity-types/", response_model=schemas.ActivityType)
def create_activity_type(option: schemas.ActivityTypeCreate, db: Session = Depends(get_db)):
    """Register a label (e.g. a locale synonym) and the category it stands for."""
    existing = db.query(models.ActivityTypeOption).filter(
        (models.ActivityTypeOption.code == option.code)
        | (models.ActivityTypeOption.label == option.label)
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="Activity type code or label already registered")
    db_option = models.ActivityTypeOption(**option.model_dump())
    db.add(db_option)
    db.commit()
    db.refresh(db_option)
    return db_option
