"""
Schema records: identity, lifecycle metadata and the declared attribute set.

A SchemaDetails is built fully formed. Every invariant (non-empty attribute
set, unique attribute names, a validation type) is enforced at construction,
so a SchemaDetails that exists is always safe to hand to the validator.
Unknown JSON keys are ignored on input.
"""
from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemaguard.schemas.attributes import AnyAttribute, SchemaAttribute


class SchemaValidationType(str, enum.Enum):
    STRICT = "STRICT"       # host fields == schema attributes
    MATCHING = "MATCHING"   # schema attributes ⊆ host fields


class SchemaState(str, enum.Enum):
    CREATED = "CREATED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class SchemaType(str, enum.Enum):
    JSON = "JSON"
    AVRO = "AVRO"
    PROTO = "PROTO"


_Token = Annotated[str, Field(min_length=1, max_length=128)]


def ensure_unique_names(attributes: Sequence[SchemaAttribute]) -> Sequence[SchemaAttribute]:
    """Raise ValueError if two attributes share a name, ignoring case."""
    seen: set[str] = set()
    duplicates: set[str] = set()
    for attribute in attributes:
        folded = attribute.name.upper()
        if folded in seen:
            duplicates.add(folded)
        seen.add(folded)
    if duplicates:
        raise ValueError(
            "attribute names must be unique (case-insensitive): "
            + ", ".join(sorted(duplicates))
        )
    return attributes


class SchemaKey(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    namespace: _Token = Field(examples=["payments"])
    schema_name: _Token = Field(examples=["customer"])
    version: _Token = Field(examples=["V1"])

    @property
    def reference_id(self) -> str:
        return ":".join((self.namespace, self.schema_name, self.version))


class SchemaMeta(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    created_by: str
    created_at: datetime
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class SchemaDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    schema_key: SchemaKey
    description: Optional[str] = None
    schema_state: SchemaState
    schema_type: SchemaType
    validation_type: SchemaValidationType = SchemaValidationType.MATCHING
    schema_meta: SchemaMeta
    attributes: Annotated[tuple[AnyAttribute, ...], Field(min_length=1)]

    @field_validator("attributes")
    @classmethod
    def check_unique_names(cls, v: tuple) -> tuple:
        return ensure_unique_names(v)

    def match(self, that_key: SchemaKey) -> bool:
        return self.schema_key == that_key

    def has_attribute(self, name: str) -> bool:
        return any(each.name.upper() == name.upper() for each in self.attributes)

    def attribute_names(self) -> frozenset[str]:
        """Upper-cased attribute names."""
        return frozenset(each.name.upper() for each in self.attributes)

    @property
    def reference_id(self) -> str:
        return self.schema_key.reference_id
