from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from .. import schemas
from ..calculators.recalculation import recalculate
from ..database import get_db
from ..vocabulary import load_category_labels

router = APIRouter(tags=["recalculation"])


@router.post("/recalculate", response_model=schemas.RecalculateResponse)
def recalculate_lines(request: schemas.RecalculateRequest, db: Session = Depends(get_db)):
    """
    Stateless engine call — nothing is read from or written to the line store.

    Uses the caller's labels when given, otherwise the stored vocabulary.
    """
    labels = request.labels if request.labels is not None else load_category_labels(db)
    lines, totals = recalculate(request.lines, labels)
    return {"lines": lines, "totals": totals}
