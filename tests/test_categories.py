"""
Tests for the activity category adapter and the stored vocabulary.

Tests:
1-4. CategoryLabels resolves labels, codes, aliases and members
5.   CategoryLabels maps back to labels
6-9. Vocabulary seeding and loading from activity_type_options
"""

import pytest

from effort_estimator import models
from effort_estimator.calculators.categories import ActivityCategory, CategoryLabels, DEFAULT_LABELS
from effort_estimator.config import settings
from effort_estimator.vocabulary import label_for_code, load_category_labels, seed_activity_types


def test_default_labels_resolve():
    assert DEFAULT_LABELS.resolve("Development") == ActivityCategory.DEVELOPMENT
    assert DEFAULT_LABELS.resolve("Process") == ActivityCategory.PROCESS
    assert DEFAULT_LABELS.resolve("Support") == ActivityCategory.SUPPORT


def test_unrecognized_values_resolve_to_none():
    for value in (None, "", "development", "Training", 42, True, 3.5, ["Development"]):
        assert DEFAULT_LABELS.resolve(value) is None, repr(value)


def test_codes_and_aliases_resolve():
    labels = CategoryLabels(
        development="Desenvolvimento", process="Processo", support="Apoio",
        codes={1: ActivityCategory.DEVELOPMENT},
        aliases={"Dev": ActivityCategory.DEVELOPMENT},
    )
    assert labels.resolve(1) == ActivityCategory.DEVELOPMENT
    assert labels.resolve(2) is None
    assert labels.resolve("Dev") == ActivityCategory.DEVELOPMENT
    assert labels.resolve("Apoio") == ActivityCategory.SUPPORT


def test_category_members_resolve_to_themselves():
    for category in ActivityCategory:
        assert DEFAULT_LABELS.resolve(category) == category


def test_label_for_round_trips():
    labels = CategoryLabels(development="Desenvolvimento", process="Processo", support="Apoio")
    for category in ActivityCategory:
        assert labels.resolve(labels.label_for(category)) == category


def test_seed_is_idempotent(db):
    # conftest already seeded once
    assert seed_activity_types(db) == 0
    assert db.query(models.ActivityTypeOption).count() == 3


def test_loaded_labels_match_settings(db):
    labels = load_category_labels(db)
    assert labels.development == settings.DEVELOPMENT_LABEL
    assert labels.support == settings.SUPPORT_LABEL
    assert labels.resolve(settings.PROCESS_CODE) == ActivityCategory.PROCESS


def test_extra_option_becomes_alias(db):
    db.add(models.ActivityTypeOption(
        code=settings.DEVELOPMENT_CODE + 10, label="Desenvolvimento",
        category=ActivityCategory.DEVELOPMENT,
    ))
    db.add(models.ActivityTypeOption(code=999, label="Training", category=None))
    db.commit()

    labels = load_category_labels(db)
    assert labels.development == settings.DEVELOPMENT_LABEL
    assert labels.resolve("Desenvolvimento") == ActivityCategory.DEVELOPMENT
    assert labels.resolve("Training") is None
    assert labels.resolve(999) is None


def test_label_for_code(db):
    assert label_for_code(db, settings.SUPPORT_CODE) == settings.SUPPORT_LABEL
    with pytest.raises(ValueError):
        label_for_code(db, 12345)
