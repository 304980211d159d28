"""
Validator input (host field inventory) and output (ValidationResult).

POST /schemas/{namespace}/{schema_name}/{version}/validate
    HostTypeRequest → ValidationResult
"""
from __future__ import annotations

import enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemaguard.schemas.attributes import FieldCategory


class HostField(BaseModel):
    """One field of the host type, already reduced to its category."""
    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(min_length=1, examples=["age"])]
    category: FieldCategory = Field(examples=["INTEGER"])


class HostTypeRequest(BaseModel):
    """Flattened field inventory of a host type, ancestors included."""
    fields: list[HostField] = Field(
        description="Every field of the host type. Extra fields are fine in MATCHING mode.",
    )
    fail_fast: bool = Field(
        default=False,
        description="Stop at the first incompatible attribute instead of reporting all.",
    )


class MismatchKind(str, enum.Enum):
    ATTRIBUTE_SET_MISMATCH = "ATTRIBUTE_SET_MISMATCH"
    MISSING_ATTRIBUTES = "MISSING_ATTRIBUTES"
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"
    TYPE_INCOMPATIBLE = "TYPE_INCOMPATIBLE"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: MismatchKind
    attributes: tuple[str, ...] = Field(description="Upper-cased names involved, sorted.")
    expected: Optional[FieldCategory] = None
    actual: Optional[FieldCategory] = None
    message: str


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    passed: bool
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def of(cls, diagnostics: list[Diagnostic]) -> ValidationResult:
        return cls(passed=not diagnostics, diagnostics=tuple(diagnostics))
