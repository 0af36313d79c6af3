from sqlalchemy import Column, Integer, String, Float, DateTime, Date, Text, ForeignKey, Enum, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
from .calculators.categories import ActivityCategory
import enum


class Complexity(str, enum.Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


# DECISION: activity_type is a VARCHAR label, not an enum; the vocabulary is
# locale/tenant specific and lives in activity_type_options. The engine maps
# labels onto ActivityCategory at call time.


# --- Lookups ---

class Phase(Base):
    __tablename__ = "phases"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    show_in_timeline = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    color = Column(String, nullable=True)  # hex, e.g. '#2E86C1'

    subphases = relationship("Subphase", back_populates="phase")


class Subphase(Base):
    __tablename__ = "subphases"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phase_id = Column(Integer, ForeignKey("phases.id"), nullable=True)
    sort_order = Column(Integer, default=0)
    proposed_order = Column(Integer, nullable=True)
    color = Column(String, nullable=True)

    phase = relationship("Phase", back_populates="subphases")


class DevelopmentType(Base):
    __tablename__ = "development_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    default_description = Column(Text, nullable=True)


class ActivityTypeOption(Base):
    """Activity type vocabulary — option-set code, display label, engine category."""
    __tablename__ = "activity_type_options"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(Integer, unique=True, nullable=False)
    label = Column(String, unique=True, nullable=False)
    category = Column(Enum(ActivityCategory, native_enum=False), nullable=True)  # NULL = not used by the engine


# --- Templates ---

class EstimationTemplate(Base):
    """Reusable line-set that can be imported into an estimation."""
    __tablename__ = "estimation_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    lines = relationship(
        "TemplateLine", back_populates="template",
        cascade="all, delete-orphan",
        order_by="[TemplateLine.sort_order, TemplateLine.id]",
    )


class TemplateLine(Base):
    __tablename__ = "template_lines"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("estimation_templates.id"), nullable=False)
    phase_id = Column(Integer, ForeignKey("phases.id"), nullable=True)
    subphase_id = Column(Integer, ForeignKey("subphases.id"), nullable=True)
    development_type_id = Column(Integer, ForeignKey("development_types.id"), nullable=True)
    module = Column(String, nullable=True)
    customer_requirement = Column(Text, nullable=True)
    functionality = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    technical_notes = Column(Text, nullable=True)
    activity_type = Column(String, nullable=True)
    sizing = Column(Float, default=0.0)
    development_share = Column(Float, nullable=True)  # Support lines only
    complexity = Column(Enum(Complexity, native_enum=False), nullable=True)
    sort_order = Column(Integer, default=0)

    template = relationship("EstimationTemplate", back_populates="lines")


# --- Estimations ---

class Estimation(Base):
    __tablename__ = "estimations"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    opportunity = Column(String, nullable=True)
    template_id = Column(Integer, ForeignKey("estimation_templates.id"), nullable=True)
    estimated_start_date = Column(Date, nullable=True)
    # Totals, written by the recalculation pass only
    total_development_hours = Column(Float, default=0.0)
    total_support_hours = Column(Float, default=0.0)
    total_project_hours = Column(Float, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    template = relationship("EstimationTemplate")
    lines = relationship(
        "EstimationLine", back_populates="estimation",
        cascade="all, delete-orphan",
        order_by="[EstimationLine.sort_order, EstimationLine.id]",
    )


class EstimationLine(Base):
    __tablename__ = "estimation_lines"

    id = Column(Integer, primary_key=True, index=True)
    estimation_id = Column(Integer, ForeignKey("estimations.id"), nullable=False)
    phase_id = Column(Integer, ForeignKey("phases.id"), nullable=True)
    subphase_id = Column(Integer, ForeignKey("subphases.id"), nullable=True)
    development_type_id = Column(Integer, ForeignKey("development_types.id"), nullable=True)

    # Descriptive payload, never read by the engine
    module = Column(String, nullable=True)
    customer_requirement = Column(Text, nullable=True)
    functionality = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    technical_notes = Column(Text, nullable=True)
    complexity = Column(Enum(Complexity, native_enum=False), nullable=True)

    activity_type = Column(String, nullable=True)
    sizing = Column(Float, default=0.0)  # derived for Support lines
    development_share = Column(Float, nullable=True)  # percentage, Support lines only
    final_estimate = Column(Float, default=0.0)  # always derived
    sort_order = Column(Integer, default=0)

    estimation = relationship("Estimation", back_populates="lines")
    phase = relationship("Phase")
    subphase = relationship("Subphase")
    development_type = relationship("DevelopmentType")
