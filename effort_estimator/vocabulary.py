"""
Activity type vocabulary provider.

The stored lines carry activity types as display labels. Which label means
Development, Process or Support (and which option-set code the external
system uses for it) comes from the activity_type_options table, seeded from
settings on startup.
"""

import logging

from sqlalchemy.orm import Session

from . import models
from .calculators.categories import ActivityCategory, CategoryLabels
from .config import settings

logger = logging.getLogger(__name__)


def default_activity_types():
    """Settings-driven defaults: {category: {"code": int, "label": str}}."""
    return {
        ActivityCategory.DEVELOPMENT: {"code": settings.DEVELOPMENT_CODE, "label": settings.DEVELOPMENT_LABEL},
        ActivityCategory.PROCESS: {"code": settings.PROCESS_CODE, "label": settings.PROCESS_LABEL},
        ActivityCategory.SUPPORT: {"code": settings.SUPPORT_CODE, "label": settings.SUPPORT_LABEL},
    }


def seed_activity_types(db: Session) -> int:
    """Insert the default options that are missing. Safe to run multiple times."""
    seeded = 0
    for category, data in default_activity_types().items():
        existing = db.query(models.ActivityTypeOption).filter(
            (models.ActivityTypeOption.code == data["code"])
            | (models.ActivityTypeOption.label == data["label"])
        ).first()
        if not existing:
            db.add(models.ActivityTypeOption(category=category, **data))
            seeded += 1
    db.commit()
    if seeded:
        logger.info("Seeded %d activity type options", seeded)
    return seeded


def load_category_labels(db: Session) -> CategoryLabels:
    """
    Build the engine's vocabulary from the option table.

    The first option (lowest code) mapped to a category supplies its label;
    a category with no option falls back to settings. Later options for the
    same category become aliases; every mapped option contributes its code.
    """
    defaults = default_activity_types()
    labels = {category: data["label"] for category, data in defaults.items()}
    codes = {}

    options = db.query(models.ActivityTypeOption).filter(
        models.ActivityTypeOption.category.isnot(None)
    ).order_by(models.ActivityTypeOption.code).all()

    aliases = {}
    seen = set()
    for option in options:
        codes[option.code] = option.category
        if option.category in seen:
            aliases[option.label] = option.category
        else:
            labels[option.category] = option.label
            seen.add(option.category)

    return CategoryLabels(
        development=labels[ActivityCategory.DEVELOPMENT],
        process=labels[ActivityCategory.PROCESS],
        support=labels[ActivityCategory.SUPPORT],
        codes=codes,
        aliases=aliases,
    )


def label_for_code(db: Session, code: int) -> str:
    """Resolve an option-set code to its stored label. Raises ValueError if unknown."""
    option = db.query(models.ActivityTypeOption).filter(
        models.ActivityTypeOption.code == code
    ).first()
    if not option:
        raise ValueError(f"No activity type registered for code: {code}")
    return option.label
