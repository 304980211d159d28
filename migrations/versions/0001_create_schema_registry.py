"""create schema_registry table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

One row per registered schema version. (namespace, schema_name, version)
is unique; attributes are stored as JSON text.

The unique constraint is declared inline so the revision also runs on
SQLite, which cannot ALTER constraints.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    schema_state_enum = sa.Enum("CREATED", "APPROVED", "REJECTED", name="schema_state_enum")
    schema_type_enum = sa.Enum("JSON", "AVRO", "PROTO", name="schema_type_enum")
    validation_type_enum = sa.Enum("STRICT", "MATCHING", name="schema_validation_type_enum")

    op.create_table(
        "schema_registry",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("namespace", sa.String(128), nullable=False),
        sa.Column("schema_name", sa.String(128), nullable=False),
        sa.Column("version", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("schema_state", schema_state_enum, nullable=False),
        sa.Column("schema_type", schema_type_enum, nullable=False),
        sa.Column("validation_type", validation_type_enum, nullable=False),
        sa.Column("attributes", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_by", sa.String(128), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "namespace", "schema_name", "version", name="uq_schema_registry_key"
        ),
    )
    op.create_index("ix_schema_registry_id", "schema_registry", ["id"])
    op.create_index("ix_schema_registry_namespace", "schema_registry", ["namespace"])


def downgrade() -> None:
    op.drop_index("ix_schema_registry_namespace", table_name="schema_registry")
    op.drop_index("ix_schema_registry_id", table_name="schema_registry")
    op.drop_table("schema_registry")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        # Native enum types outlive the table on PostgreSQL
        for enum_name in (
            "schema_validation_type_enum",
            "schema_type_enum",
            "schema_state_enum",
        ):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
