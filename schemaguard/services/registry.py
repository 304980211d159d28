"""
Registry service: persists SchemaDetails and drives their lifecycle.

Public API
----------
create_schema(db, request)                           → SchemaDetails
get_schema(db, key)                                  → SchemaDetails
list_schemas(db, namespace, state)                   → list[SchemaDetails]
approve_schema(db, key, updated_by)                  → SchemaDetails
reject_schema(db, key, updated_by)                   → SchemaDetails
validate_against(db, key, host_fields, fail_fast)    → ValidationResult

Lifecycle
---------
  CREATED ──approve──▶ APPROVED
  CREATED ──reject───▶ REJECTED
APPROVED and REJECTED are final.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schemaguard.core.errors import (
    InvalidStateTransitionError,
    SchemaAlreadyExistsError,
    SchemaNotFoundError,
)
from schemaguard.models.schema_record import SchemaRecord
from schemaguard.schemas.attributes import SchemaAttribute
from schemaguard.schemas.registry import CreateSchemaRequest
from schemaguard.schemas.schema import SchemaDetails, SchemaKey, SchemaState
from schemaguard.schemas.validation import HostField, ValidationResult
from schemaguard.services.validator import validate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _attributes_json(attributes: Iterable[SchemaAttribute]) -> str:
    return json.dumps([a.model_dump(mode="json") for a in attributes])


def _find(db: Session, key: SchemaKey) -> Optional[SchemaRecord]:
    return (
        db.query(SchemaRecord)
        .filter(
            SchemaRecord.namespace == key.namespace,
            SchemaRecord.schema_name == key.schema_name,
            SchemaRecord.version == key.version,
        )
        .first()
    )


def _require(db: Session, key: SchemaKey) -> SchemaRecord:
    record = _find(db, key)
    if record is None:
        raise SchemaNotFoundError(key.reference_id)
    return record


def to_details(record: SchemaRecord) -> SchemaDetails:
    """Rebuild the domain model from a stored row."""
    return SchemaDetails.model_validate({
        "schema_key": {
            "namespace": record.namespace,
            "schema_name": record.schema_name,
            "version": record.version,
        },
        "description": record.description,
        "schema_state": record.schema_state,
        "schema_type": record.schema_type,
        "validation_type": record.validation_type,
        "schema_meta": {
            "created_by": record.created_by,
            "created_at": record.created_at,
            "updated_by": record.updated_by,
            "updated_at": record.updated_at,
        },
        "attributes": json.loads(record.attributes),
    })


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def create_schema(db: Session, request: CreateSchemaRequest) -> SchemaDetails:
    key = request.schema_key
    if _find(db, key) is not None:
        raise SchemaAlreadyExistsError(key.reference_id)

    record = SchemaRecord(
        namespace=key.namespace,
        schema_name=key.schema_name,
        version=key.version,
        description=request.description,
        schema_state=SchemaState.CREATED,
        schema_type=request.schema_type,
        validation_type=request.validation_type,
        attributes=_attributes_json(request.attributes),
        created_by=request.created_by,
        created_at=_now(),
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        # Race: another writer registered the same key first
        db.rollback()
        raise SchemaAlreadyExistsError(key.reference_id) from exc
    db.refresh(record)

    logger.info("Registered schema %s by %s", key.reference_id, request.created_by)
    return to_details(record)


def get_schema(db: Session, key: SchemaKey) -> SchemaDetails:
    return to_details(_require(db, key))


def list_schemas(
    db: Session,
    namespace: Optional[str] = None,
    state: Optional[SchemaState] = None,
) -> list[SchemaDetails]:
    q = db.query(SchemaRecord)
    if namespace:
        q = q.filter(SchemaRecord.namespace == namespace)
    if state is not None:
        q = q.filter(SchemaRecord.schema_state == state)
    records = q.order_by(
        SchemaRecord.namespace, SchemaRecord.schema_name, SchemaRecord.version
    ).all()
    return [to_details(r) for r in records]


def _transition(
    db: Session,
    key: SchemaKey,
    target: SchemaState,
    updated_by: str,
) -> SchemaDetails:
    record = _require(db, key)

    # Conditional update: only one concurrent transition out of CREATED wins
    moved = (
        db.query(SchemaRecord)
        .filter(
            SchemaRecord.id == record.id,
            SchemaRecord.schema_state == SchemaState.CREATED,
        )
        .update(
            {
                SchemaRecord.schema_state: target,
                SchemaRecord.updated_by: updated_by,
                SchemaRecord.updated_at: _now(),
            },
            synchronize_session=False,
        )
    )
    if moved == 0:
        db.rollback()
        current = SchemaState(_require(db, key).schema_state)
        raise InvalidStateTransitionError(key.reference_id, current.value, target.value)

    db.commit()
    db.refresh(record)

    logger.info("Schema %s moved CREATED -> %s by %s", key.reference_id, target.value, updated_by)
    return to_details(record)


def approve_schema(db: Session, key: SchemaKey, updated_by: str) -> SchemaDetails:
    return _transition(db, key, SchemaState.APPROVED, updated_by)


def reject_schema(db: Session, key: SchemaKey, updated_by: str) -> SchemaDetails:
    return _transition(db, key, SchemaState.REJECTED, updated_by)


def validate_against(
    db: Session,
    key: SchemaKey,
    host_fields: Iterable[HostField],
    fail_fast: bool = False,
) -> ValidationResult:
    """Load the stored schema and check the host fields against it."""
    return validate(get_schema(db, key), host_fields, fail_fast=fail_fast)
