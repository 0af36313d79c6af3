from pydantic import BaseModel, Field
from typing import Any, Dict, Optional, List
from datetime import date, datetime
from .models import Complexity
from .calculators.categories import ActivityCategory, CategoryLabels


# --- Lookups ---

class PhaseBase(BaseModel):
    name: str
    show_in_timeline: bool = True
    sort_order: int = 0
    color: Optional[str] = None

class PhaseCreate(PhaseBase):
    pass

class Phase(PhaseBase):
    id: int
    class Config:
        from_attributes = True

class SubphaseBase(BaseModel):
    name: str
    phase_id: Optional[int] = None
    sort_order: int = 0
    proposed_order: Optional[int] = None
    color: Optional[str] = None

class SubphaseCreate(SubphaseBase):
    pass

class Subphase(SubphaseBase):
    id: int
    class Config:
        from_attributes = True

class DevelopmentTypeBase(BaseModel):
    name: str
    default_description: Optional[str] = None

class DevelopmentTypeCreate(DevelopmentTypeBase):
    pass

class DevelopmentType(DevelopmentTypeBase):
    id: int
    class Config:
        from_attributes = True

class ActivityTypeBase(BaseModel):
    code: int
    label: str
    category: Optional[ActivityCategory] = None

class ActivityTypeCreate(ActivityTypeBase):
    pass

class ActivityType(ActivityTypeBase):
    id: int
    class Config:
        from_attributes = True


# --- Lines ---
# final_estimate is never accepted from a client; the engine owns it.

class LineBase(BaseModel):
    phase_id: Optional[int] = None
    subphase_id: Optional[int] = None
    development_type_id: Optional[int] = None
    module: Optional[str] = None
    customer_requirement: Optional[str] = None
    functionality: Optional[str] = None
    description: Optional[str] = None
    technical_notes: Optional[str] = None
    complexity: Optional[Complexity] = None
    activity_type: Optional[str] = None
    # Alternative to activity_type: the external system's option-set code
    activity_type_code: Optional[int] = None
    sizing: Optional[float] = Field(default=None, ge=0)
    development_share: Optional[float] = Field(default=None, ge=0)

class LineCreate(LineBase):
    pass

class LineUpdate(LineBase):
    pass

class TemplateLineCreate(LineBase):
    pass


def category_fields(data: dict, category: Optional[ActivityCategory]) -> dict:
    """
    Keep only the fields a line of this category may set.

    Support sizing is derived, so a client-sent value is dropped; the
    development share only means something on Support lines.
    """
    cleaned = {k: v for k, v in data.items() if k != "activity_type_code"}
    if category == ActivityCategory.SUPPORT:
        cleaned.pop("sizing", None)
    else:
        cleaned.pop("development_share", None)
    return cleaned


class Line(BaseModel):
    id: int
    estimation_id: int
    phase_id: Optional[int] = None
    subphase_id: Optional[int] = None
    development_type_id: Optional[int] = None
    module: Optional[str] = None
    customer_requirement: Optional[str] = None
    functionality: Optional[str] = None
    description: Optional[str] = None
    technical_notes: Optional[str] = None
    complexity: Optional[Complexity] = None
    activity_type: Optional[str] = None
    sizing: float = 0.0
    development_share: Optional[float] = None
    final_estimate: float = 0.0
    sort_order: int = 0
    class Config:
        from_attributes = True

class TemplateLine(BaseModel):
    id: int
    template_id: int
    phase_id: Optional[int] = None
    subphase_id: Optional[int] = None
    development_type_id: Optional[int] = None
    module: Optional[str] = None
    customer_requirement: Optional[str] = None
    functionality: Optional[str] = None
    description: Optional[str] = None
    technical_notes: Optional[str] = None
    complexity: Optional[Complexity] = None
    activity_type: Optional[str] = None
    sizing: Optional[float] = None
    development_share: Optional[float] = None
    sort_order: int = 0
    class Config:
        from_attributes = True


# --- Templates ---

class TemplateCreate(BaseModel):
    name: str
    lines: List[TemplateLineCreate] = []

class Template(BaseModel):
    id: int
    name: str
    created_at: datetime
    lines: List[TemplateLine] = []
    class Config:
        from_attributes = True


# --- Estimations ---

class EstimationBase(BaseModel):
    name: str
    opportunity: Optional[str] = None
    estimated_start_date: Optional[date] = None

class EstimationCreate(EstimationBase):
    lines: List[LineCreate] = []

class EstimationUpdate(BaseModel):
    name: Optional[str] = None
    opportunity: Optional[str] = None
    estimated_start_date: Optional[date] = None

class Estimation(EstimationBase):
    id: int
    number: str
    template_id: Optional[int] = None
    total_development_hours: float = 0.0
    total_support_hours: float = 0.0
    total_project_hours: float = 0.0
    created_at: datetime
    updated_at: datetime
    lines: List[Line] = []
    class Config:
        from_attributes = True

class ImportRequest(BaseModel):
    template_ids: List[int]


# --- Stateless recalculation ---

class RecalculateRequest(BaseModel):
    lines: List[Dict[str, Any]] = []
    labels: Optional[CategoryLabels] = None

class Totals(BaseModel):
    total_development_sizing: float
    total_support_sizing: float
    total_project_hours: float

class RecalculateResponse(BaseModel):
    lines: List[Dict[str, Any]]
    totals: Totals
