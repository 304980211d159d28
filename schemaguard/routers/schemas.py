"""
Schema registry router.

POST /schemas                                              — register a schema version
GET  /schemas                                              — list (filter by namespace / state)
GET  /schemas/{namespace}/{schema_name}/{version}          — fetch one
POST /schemas/{namespace}/{schema_name}/{version}/approve  — CREATED → APPROVED
POST /schemas/{namespace}/{schema_name}/{version}/reject   — CREATED → REJECTED
POST /schemas/{namespace}/{schema_name}/{version}/validate — structural check of a host type
"""
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from schemaguard.db.base import get_db
from schemaguard.schemas.registry import (
    CreateSchemaRequest,
    SchemaListResponse,
    StateChangeRequest,
)
from schemaguard.schemas.schema import SchemaDetails, SchemaKey, SchemaState
from schemaguard.schemas.validation import HostTypeRequest, ValidationResult
from schemaguard.services import registry

router = APIRouter(prefix="/schemas", tags=["schemas"])

_KEY_PATH = "/{namespace}/{schema_name}/{version}"


_Segment = Annotated[str, Path(min_length=1, max_length=128)]


def path_key(namespace: _Segment, schema_name: _Segment, version: _Segment) -> SchemaKey:
    """Build the SchemaKey addressed by the URL. Blank segments are a 422."""
    try:
        return SchemaKey(namespace=namespace, schema_name=schema_name, version=version)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


@router.post(
    "",
    response_model=SchemaDetails,
    status_code=status.HTTP_201_CREATED,
    summary="Register a schema version",
    responses={
        409: {"description": "A schema with the same namespace/name/version exists."},
        422: {"description": "Empty attribute set, duplicate attribute names, unknown attribute type."},
    },
)
def create(payload: CreateSchemaRequest, db: Session = Depends(get_db)):
    """Store a new schema version in the CREATED state."""
    return registry.create_schema(db, payload)


@router.get(
    "",
    response_model=SchemaListResponse,
    summary="List registered schemas",
)
def list_all(
    namespace: Optional[str] = Query(default=None, description="Only this namespace."),
    state: Optional[SchemaState] = Query(default=None, description="Only this lifecycle state."),
    db: Session = Depends(get_db),
):
    items = registry.list_schemas(db, namespace=namespace, state=state)
    return SchemaListResponse(total=len(items), items=items)


@router.get(
    _KEY_PATH,
    response_model=SchemaDetails,
    summary="Fetch one schema version",
    responses={404: {"description": "Unknown schema."}},
)
def get_one(key: SchemaKey = Depends(path_key), db: Session = Depends(get_db)):
    return registry.get_schema(db, key)


@router.post(
    _KEY_PATH + "/approve",
    response_model=SchemaDetails,
    summary="Approve a CREATED schema",
    responses={
        404: {"description": "Unknown schema."},
        409: {"description": "Schema is not in the CREATED state."},
    },
)
def approve(
    payload: StateChangeRequest,
    key: SchemaKey = Depends(path_key),
    db: Session = Depends(get_db),
):
    return registry.approve_schema(db, key, payload.updated_by)


@router.post(
    _KEY_PATH + "/reject",
    response_model=SchemaDetails,
    summary="Reject a CREATED schema",
    responses={
        404: {"description": "Unknown schema."},
        409: {"description": "Schema is not in the CREATED state."},
    },
)
def reject(
    payload: StateChangeRequest,
    key: SchemaKey = Depends(path_key),
    db: Session = Depends(get_db),
):
    return registry.reject_schema(db, key, payload.updated_by)


@router.post(
    _KEY_PATH + "/validate",
    response_model=ValidationResult,
    summary="Check a host type's fields against a schema",
    responses={
        200: {"description": "Validation ran. Inspect `passed` and `diagnostics`."},
        404: {"description": "Unknown schema."},
    },
)
def validate_host(
    payload: HostTypeRequest,
    key: SchemaKey = Depends(path_key),
    db: Session = Depends(get_db),
):
    """
    Run the structural validator against the stored schema.

    | Mode | Passes when |
    |---|---|
    | `STRICT`   | host field names == attribute names (ignoring case) |
    | `MATCHING` | every attribute name is a host field name |

    Then every attribute's host field must have a compatible category.
    A mismatch is a normal 200 response with `passed=false`.
    """
    return registry.validate_against(
        db,
        key,
        payload.fields,
        fail_fast=payload.fail_fast,
    )
