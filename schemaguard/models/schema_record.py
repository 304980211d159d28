"""
SchemaRecord — one registered schema version.

(namespace, schema_name, version) is unique: a version is immutable once
registered apart from its lifecycle state.

attributes: JSON-encoded list of attribute objects stored as Text.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, Enum, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from schemaguard.db.base import Base
from schemaguard.schemas.schema import SchemaState, SchemaType, SchemaValidationType


class SchemaRecord(Base):
    __tablename__ = "schema_registry"
    __table_args__ = (
        UniqueConstraint("namespace", "schema_name", "version", name="uq_schema_registry_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    namespace: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    schema_name: Mapped[str] = mapped_column(String(128), nullable=False)
    version: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    schema_state: Mapped[str] = mapped_column(
        Enum(SchemaState, name="schema_state_enum"),
        nullable=False,
        default=SchemaState.CREATED,
    )
    schema_type: Mapped[str] = mapped_column(
        Enum(SchemaType, name="schema_type_enum"), nullable=False
    )
    validation_type: Mapped[str] = mapped_column(
        Enum(SchemaValidationType, name="schema_validation_type_enum"),
        nullable=False,
        default=SchemaValidationType.MATCHING,
    )
    attributes: Mapped[str] = mapped_column(
        Text, nullable=False,
        comment="JSON-encoded list of attribute objects",
    )
    created_by: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
