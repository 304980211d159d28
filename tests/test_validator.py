"""
Tests for the structural validator.

Covered scenarios:
  A) STRICT, exact match                  → passed
  B) STRICT, extra host field             → ATTRIBUTE_SET_MISMATCH mentioning EMAIL
  C) MATCHING, extra host field           → passed
  D) MATCHING, missing attribute          → MISSING_ATTRIBUTES mentioning AGE
  E) type mismatch                        → TYPE_INCOMPATIBLE for AGE
  F) OBJECT attribute                     → any category accepted

Additional:
  - shape failure short-circuits the compatibility pass
  - all incompatible attributes reported; fail_fast stops at the first
  - idempotence, case-insensitivity, duplicate host names (first wins)
"""
import logging

import pytest

from schemaguard.schemas.attributes import (
    ArrayAttribute,
    BooleanAttribute,
    FieldCategory,
    IntegerAttribute,
    MapAttribute,
    ObjectAttribute,
    StringAttribute,
)
from schemaguard.schemas.schema import SchemaValidationType
from schemaguard.schemas.validation import HostField, MismatchKind
from schemaguard.services.validator import _check_attribute, validate

from conftest import make_schema

STRICT = SchemaValidationType.STRICT
MATCHING = SchemaValidationType.MATCHING


def hf(name: str, category: FieldCategory) -> HostField:
    return HostField(name=name, category=category)


PERSON_FIELDS = [hf("name", FieldCategory.STRING), hf("age", FieldCategory.INTEGER)]
PERSON_WITH_EMAIL = PERSON_FIELDS + [hf("email", FieldCategory.STRING)]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_a_strict_exact_match(self, person_attributes):
        result = validate(make_schema(person_attributes, STRICT), PERSON_FIELDS)
        assert result.passed
        assert result.diagnostics == ()

    def test_b_strict_extra_host_field(self, person_attributes):
        result = validate(make_schema(person_attributes, STRICT), PERSON_WITH_EMAIL)
        assert not result.passed
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind is MismatchKind.ATTRIBUTE_SET_MISMATCH
        assert diagnostic.attributes == ("EMAIL",)
        assert "EMAIL" in diagnostic.message

    def test_c_matching_extra_host_field(self, person_attributes):
        result = validate(make_schema(person_attributes, MATCHING), PERSON_WITH_EMAIL)
        assert result.passed

    def test_d_matching_missing_attribute(self, person_attributes):
        result = validate(
            make_schema(person_attributes, MATCHING),
            [hf("name", FieldCategory.STRING)],
        )
        assert not result.passed
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind is MismatchKind.MISSING_ATTRIBUTES
        assert diagnostic.attributes == ("AGE",)

    def test_e_type_mismatch(self):
        result = validate(
            make_schema([IntegerAttribute(name="AGE")]),
            [hf("age", FieldCategory.STRING)],
        )
        assert not result.passed
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind is MismatchKind.TYPE_INCOMPATIBLE
        assert diagnostic.attributes == ("AGE",)
        assert diagnostic.expected is FieldCategory.INTEGER
        assert diagnostic.actual is FieldCategory.STRING

    @pytest.mark.parametrize("category", list(FieldCategory))
    def test_f_object_accepts_any_category(self, category):
        result = validate(
            make_schema([ObjectAttribute(name="PAYLOAD")], STRICT),
            [hf("payload", category)],
        )
        assert result.passed


# ---------------------------------------------------------------------------
# Set-shape semantics
# ---------------------------------------------------------------------------

class TestShape:
    def test_strict_missing_attribute(self, person_attributes):
        result = validate(make_schema(person_attributes, STRICT), [hf("name", FieldCategory.STRING)])
        assert result.diagnostics[0].kind is MismatchKind.ATTRIBUTE_SET_MISMATCH
        assert result.diagnostics[0].attributes == ("AGE",)

    def test_strict_reports_both_directions_sorted(self, person_attributes):
        result = validate(
            make_schema(person_attributes, STRICT),
            [hf("name", FieldCategory.STRING), hf("email", FieldCategory.STRING)],
        )
        assert result.diagnostics[0].attributes == ("AGE", "EMAIL")

    def test_names_compared_ignoring_case(self):
        schema = make_schema([StringAttribute(name="firstName")], STRICT)
        assert validate(schema, [hf("FIRSTNAME", FieldCategory.STRING)]).passed

    def test_shape_failure_skips_compatibility(self, person_attributes):
        # AGE has the wrong type as well, but only the shape problem is reported
        result = validate(
            make_schema(person_attributes, STRICT),
            [
                hf("name", FieldCategory.STRING),
                hf("age", FieldCategory.BOOLEAN),
                hf("email", FieldCategory.STRING),
            ],
        )
        assert [d.kind for d in result.diagnostics] == [MismatchKind.ATTRIBUTE_SET_MISMATCH]

    def test_strict_pass_implies_equal_name_sets(self, person_attributes):
        schema = make_schema(person_attributes, STRICT)
        result = validate(schema, PERSON_FIELDS)
        assert result.passed
        assert {f.name.upper() for f in PERSON_FIELDS} == schema.attribute_names()

    def test_matching_pass_implies_subset(self, person_attributes):
        schema = make_schema(person_attributes, MATCHING)
        result = validate(schema, PERSON_WITH_EMAIL)
        assert result.passed
        assert schema.attribute_names() <= {f.name.upper() for f in PERSON_WITH_EMAIL}

    def test_accepts_generator_input(self, person_attributes):
        schema = make_schema(person_attributes, STRICT)
        assert validate(schema, (f for f in PERSON_FIELDS)).passed


# ---------------------------------------------------------------------------
# Compatibility pass
# ---------------------------------------------------------------------------

class TestCompatibilityPass:
    ATTRIBUTES = [
        StringAttribute(name="name"),
        IntegerAttribute(name="age"),
        BooleanAttribute(name="active"),
        ArrayAttribute(name="tags"),
        MapAttribute(name="labels"),
    ]

    def _fields(self, **overrides):
        categories = {
            "name": FieldCategory.STRING,
            "age": FieldCategory.INTEGER,
            "active": FieldCategory.BOOLEAN,
            "tags": FieldCategory.ARRAY_LIKE,
            "labels": FieldCategory.MAP_LIKE,
        }
        categories.update(overrides)
        return [hf(n, c) for n, c in categories.items()]

    def test_all_compatible(self):
        assert validate(make_schema(self.ATTRIBUTES, STRICT), self._fields()).passed

    def test_reports_every_incompatible_attribute(self):
        result = validate(
            make_schema(self.ATTRIBUTES, STRICT),
            self._fields(age=FieldCategory.STRING, tags=FieldCategory.MAP_LIKE),
        )
        assert not result.passed
        assert [d.attributes for d in result.diagnostics] == [("AGE",), ("TAGS",)]
        assert all(d.kind is MismatchKind.TYPE_INCOMPATIBLE for d in result.diagnostics)

    def test_fail_fast_stops_at_first(self):
        result = validate(
            make_schema(self.ATTRIBUTES, STRICT),
            self._fields(age=FieldCategory.STRING, tags=FieldCategory.MAP_LIKE),
            fail_fast=True,
        )
        assert not result.passed
        assert [d.attributes for d in result.diagnostics] == [("AGE",)]

    def test_object_field_does_not_satisfy_string(self):
        result = validate(
            make_schema([StringAttribute(name="name")]),
            [hf("name", FieldCategory.OBJECT)],
        )
        assert result.diagnostics[0].kind is MismatchKind.TYPE_INCOMPATIBLE

    def test_duplicate_host_names_first_wins(self):
        schema = make_schema([IntegerAttribute(name="age")])
        first_ok = [hf("age", FieldCategory.INTEGER), hf("AGE", FieldCategory.STRING)]
        first_bad = [hf("AGE", FieldCategory.STRING), hf("age", FieldCategory.INTEGER)]
        assert validate(schema, first_ok).passed
        assert not validate(schema, first_bad).passed

    def test_field_not_found_is_reported(self):
        diagnostic = _check_attribute(StringAttribute(name="email"), PERSON_FIELDS)
        assert diagnostic.kind is MismatchKind.FIELD_NOT_FOUND
        assert diagnostic.attributes == ("EMAIL",)


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------

class TestPurity:
    def test_idempotent(self, person_attributes):
        schema = make_schema(person_attributes, STRICT)
        first = validate(schema, PERSON_WITH_EMAIL)
        second = validate(schema, PERSON_WITH_EMAIL)
        assert first == second

    def test_shape_mismatch_logged_as_error(self, person_attributes, caplog):
        with caplog.at_level(logging.WARNING, logger="schemaguard.services.validator"):
            validate(make_schema(person_attributes, STRICT), PERSON_WITH_EMAIL)
        assert [r.levelno for r in caplog.records] == [logging.ERROR]
        assert "testing:person:V1" in caplog.text
        assert "EMAIL" in caplog.text

    def test_incompatible_type_logged_as_warning(self, person_attributes, caplog):
        host = [hf("name", FieldCategory.STRING), hf("age", FieldCategory.STRING)]
        with caplog.at_level(logging.WARNING, logger="schemaguard.services.validator"):
            validate(make_schema(person_attributes, STRICT), host)
        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "AGE" in caplog.text.upper()

    def test_pass_not_logged(self, person_attributes, caplog):
        with caplog.at_level(logging.WARNING, logger="schemaguard.services.validator"):
            validate(make_schema(person_attributes, STRICT), PERSON_FIELDS)
        assert caplog.records == []
