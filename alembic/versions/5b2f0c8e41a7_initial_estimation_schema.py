"""initial estimation schema

Revision ID: 5b2f0c8e41a7
Revises:
Create Date: 2026-10-12 09:14:02.318554

Lookups (phases, subphases, development types, activity type options),
templates and estimations with their lines. Tables that already exist are
skipped, so databases created by Base.metadata.create_all() upgrade cleanly.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2f0c8e41a7'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


COMPLEXITY = sa.Enum("VERY_LOW", "LOW", "MEDIUM", "HIGH", "VERY_HIGH", name="complexity", native_enum=False)
ACTIVITY_CATEGORY = sa.Enum("DEVELOPMENT", "PROCESS", "SUPPORT", name="activitycategory", native_enum=False)


def _table_exists(table_name):
    bind = op.get_bind()
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def _line_columns():
    """Descriptive and sizing columns shared by template and estimation lines."""
    return [
        sa.Column("phase_id", sa.Integer(), sa.ForeignKey("phases.id"), nullable=True),
        sa.Column("subphase_id", sa.Integer(), sa.ForeignKey("subphases.id"), nullable=True),
        sa.Column("development_type_id", sa.Integer(), sa.ForeignKey("development_types.id"), nullable=True),
        sa.Column("module", sa.String(), nullable=True),
        sa.Column("customer_requirement", sa.Text(), nullable=True),
        sa.Column("functionality", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("technical_notes", sa.Text(), nullable=True),
        sa.Column("activity_type", sa.String(), nullable=True),
        sa.Column("sizing", sa.Float(), nullable=True),
        sa.Column("development_share", sa.Float(), nullable=True),
        sa.Column("complexity", COMPLEXITY, nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=True),
    ]


def upgrade() -> None:
    if not _table_exists("phases"):
        op.create_table(
            "phases",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("show_in_timeline", sa.Boolean(), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=True),
            sa.Column("color", sa.String(), nullable=True),
        )

    if not _table_exists("subphases"):
        op.create_table(
            "subphases",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("phase_id", sa.Integer(), sa.ForeignKey("phases.id"), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=True),
            sa.Column("proposed_order", sa.Integer(), nullable=True),
            sa.Column("color", sa.String(), nullable=True),
        )

    if not _table_exists("development_types"):
        op.create_table(
            "development_types",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("default_description", sa.Text(), nullable=True),
        )

    if not _table_exists("activity_type_options"):
        op.create_table(
            "activity_type_options",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("code", sa.Integer(), nullable=False, unique=True),
            sa.Column("label", sa.String(), nullable=False, unique=True),
            sa.Column("category", ACTIVITY_CATEGORY, nullable=True),
        )

    if not _table_exists("estimation_templates"):
        op.create_table(
            "estimation_templates",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )

    if not _table_exists("template_lines"):
        op.create_table(
            "template_lines",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("template_id", sa.Integer(), sa.ForeignKey("estimation_templates.id"), nullable=False),
            *_line_columns(),
        )

    if not _table_exists("estimations"):
        op.create_table(
            "estimations",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("number", sa.String(), nullable=False, unique=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("opportunity", sa.String(), nullable=True),
            sa.Column("template_id", sa.Integer(), sa.ForeignKey("estimation_templates.id"), nullable=True),
            sa.Column("estimated_start_date", sa.Date(), nullable=True),
            sa.Column("total_development_hours", sa.Float(), nullable=True),
            sa.Column("total_support_hours", sa.Float(), nullable=True),
            sa.Column("total_project_hours", sa.Float(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )

    if not _table_exists("estimation_lines"):
        op.create_table(
            "estimation_lines",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("estimation_id", sa.Integer(), sa.ForeignKey("estimations.id"), nullable=False),
            *_line_columns(),
            sa.Column("final_estimate", sa.Float(), nullable=True),
        )


def downgrade() -> None:
    for table_name in [
        "estimation_lines", "estimations", "template_lines", "estimation_templates",
        "activity_type_options", "development_types", "subphases", "phases",
    ]:
        if _table_exists(table_name):
            op.drop_table(table_name)
