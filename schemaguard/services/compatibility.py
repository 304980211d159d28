"""
Compatibility oracle: which host-field categories can carry an attribute.

The rule lives on each attribute variant (`required_category`); these
helpers only read it, so there is no per-kind branching here.
"""
from __future__ import annotations

from schemaguard.schemas.attributes import FieldCategory, SchemaAttribute


def compatible_category(attribute: SchemaAttribute) -> FieldCategory:
    return attribute.required_category


def is_compatible(attribute: SchemaAttribute, category: FieldCategory) -> bool:
    """True if `category` equals, or specialises, the attribute's category."""
    return attribute.accepts(category)
