"""
Structural validator: does a host type satisfy a schema right now?

Public API
----------
validate(schema, host_fields, fail_fast)   → ValidationResult
validate_class(schema, klass, fail_fast)   → ValidationResult

Algorithm
---------
  1. Upper-case host field names (F) and schema attribute names (A).
  2. Shape check, chosen by schema.validation_type:
       STRICT   — F Δ A must be empty   → ATTRIBUTE_SET_MISMATCH
       MATCHING — A − F must be empty   → MISSING_ATTRIBUTES
  3. A failed shape check returns immediately; compatibility is not evaluated.
  4. Every attribute is matched to the first host field with the same
     case-folded name and its category checked by the compatibility oracle
     → FIELD_NOT_FOUND / TYPE_INCOMPATIBLE.

All incompatible attributes are reported unless fail_fast is set, in which
case the first one ends the run.

Pure: no I/O, no shared state. Mismatches are results, never exceptions.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from schemaguard.schemas.attributes import SchemaAttribute
from schemaguard.schemas.schema import SchemaDetails, SchemaValidationType
from schemaguard.schemas.validation import (
    Diagnostic,
    HostField,
    MismatchKind,
    ValidationResult,
)
from schemaguard.services.compatibility import compatible_category, is_compatible
from schemaguard.services.introspection import host_fields_of

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shape checks (one per validation type)
# ---------------------------------------------------------------------------

def _strict(field_names: frozenset[str], attribute_names: frozenset[str]) -> Optional[Diagnostic]:
    mismatched = field_names ^ attribute_names
    if not mismatched:
        return None
    return Diagnostic(
        kind=MismatchKind.ATTRIBUTE_SET_MISMATCH,
        attributes=tuple(sorted(mismatched)),
        message=(
            "Host fields and schema attributes differ: "
            + ", ".join(sorted(mismatched))
        ),
    )


def _matching(field_names: frozenset[str], attribute_names: frozenset[str]) -> Optional[Diagnostic]:
    missing = attribute_names - field_names
    if not missing:
        return None
    return Diagnostic(
        kind=MismatchKind.MISSING_ATTRIBUTES,
        attributes=tuple(sorted(missing)),
        message="Schema attributes missing from host type: " + ", ".join(sorted(missing)),
    )


_SHAPE_CHECKS: dict[
    SchemaValidationType,
    Callable[[frozenset[str], frozenset[str]], Optional[Diagnostic]],
] = {
    SchemaValidationType.STRICT: _strict,
    SchemaValidationType.MATCHING: _matching,
}


# ---------------------------------------------------------------------------
# Per-attribute compatibility
# ---------------------------------------------------------------------------

def _find_field(host_fields: Sequence[HostField], name: str) -> Optional[HostField]:
    folded = name.upper()
    return next((f for f in host_fields if f.name.upper() == folded), None)


def _check_attribute(
    attribute: SchemaAttribute,
    host_fields: Sequence[HostField],
) -> Optional[Diagnostic]:
    name = attribute.name.upper()
    field = _find_field(host_fields, attribute.name)
    if field is None:
        return Diagnostic(
            kind=MismatchKind.FIELD_NOT_FOUND,
            attributes=(name,),
            message=f"No host field named {name}",
        )
    if is_compatible(attribute, field.category):
        return None
    expected = compatible_category(attribute)
    return Diagnostic(
        kind=MismatchKind.TYPE_INCOMPATIBLE,
        attributes=(name,),
        expected=expected,
        actual=field.category,
        message=f"{name} needs a {expected.value} field, host declares {field.category.value}",
    )


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def validate(
    schema: SchemaDetails,
    host_fields: Iterable[HostField],
    *,
    fail_fast: bool = False,
) -> ValidationResult:
    host_fields = list(host_fields)
    field_names = frozenset(f.name.upper() for f in host_fields)

    shape = _SHAPE_CHECKS[schema.validation_type](field_names, schema.attribute_names())
    if shape is not None:
        logger.error(
            "Schema %s [Validation Failed] %s", schema.reference_id, shape.message,
        )
        return ValidationResult.of([shape])

    diagnostics: list[Diagnostic] = []
    for attribute in schema.attributes:
        diagnostic = _check_attribute(attribute, host_fields)
        if diagnostic is None:
            continue
        diagnostics.append(diagnostic)
        if fail_fast:
            break

    if diagnostics:
        logger.warning(
            "Schema %s [Validation Failed] %d incompatible attribute(s): %s",
            schema.reference_id,
            len(diagnostics),
            "; ".join(d.message for d in diagnostics),
        )
    return ValidationResult.of(diagnostics)


def validate_class(
    schema: SchemaDetails,
    klass: type,
    *,
    fail_fast: bool = False,
) -> ValidationResult:
    """Introspect `klass` and validate its fields against `schema`."""
    return validate(schema, host_fields_of(klass), fail_fast=fail_fast)
