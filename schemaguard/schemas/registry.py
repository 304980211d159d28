"""
Registry request / response schemas.

Create:      POST /schemas                        → CreateSchemaRequest → SchemaDetails
List:        GET  /schemas                        → SchemaListResponse
Transition:  POST /schemas/{key}/approve|reject   → StateChangeRequest  → SchemaDetails
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemaguard.schemas.attributes import AnyAttribute
from schemaguard.schemas.schema import (
    SchemaDetails,
    SchemaKey,
    SchemaType,
    SchemaValidationType,
    ensure_unique_names,
)


class CreateSchemaRequest(BaseModel):
    """A new schema version to register. It starts in the CREATED state."""
    model_config = ConfigDict(extra="ignore")

    schema_key: SchemaKey
    description: Optional[str] = Field(default=None, max_length=2048)
    schema_type: SchemaType = SchemaType.JSON
    validation_type: SchemaValidationType = Field(
        default=SchemaValidationType.MATCHING,
        description="STRICT: host fields must equal the attributes. MATCHING: extra host fields allowed.",
    )
    attributes: Annotated[tuple[AnyAttribute, ...], Field(
        min_length=1,
        description="Declared attributes; names unique ignoring case.",
        examples=[[{"type": "STRING", "name": "name"}, {"type": "INTEGER", "name": "age"}]],
    )]
    created_by: Annotated[str, Field(min_length=1, max_length=128, examples=["alice"])]

    @field_validator("attributes")
    @classmethod
    def check_unique_names(cls, v: tuple) -> tuple:
        return ensure_unique_names(v)


class StateChangeRequest(BaseModel):
    updated_by: Annotated[str, Field(min_length=1, max_length=128, examples=["bob"])]


class SchemaListResponse(BaseModel):
    total: int
    items: list[SchemaDetails]
