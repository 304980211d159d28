"""
Attribute kinds a schema can declare.

Each kind is its own frozen model carrying a `type` discriminator and the
host-field category it needs (`required_category`). Adding a kind means
adding one AttributeType member and one subclass here; importing this
module fails if the two ever drift apart.

JSON shape:  {"type": "INTEGER", "name": "age"}
"""
from __future__ import annotations

import enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AttributeType(str, enum.Enum):
    ARRAY = "ARRAY"
    BOOLEAN = "BOOLEAN"
    BYTE = "BYTE"
    DOUBLE = "DOUBLE"
    ENUM = "ENUM"
    FLOAT = "FLOAT"
    INTEGER = "INTEGER"
    LONG = "LONG"
    MAP = "MAP"
    OBJECT = "OBJECT"
    STRING = "STRING"


class FieldCategory(str, enum.Enum):
    """Runtime category of a host-type field."""
    ARRAY_LIKE = "ARRAY_LIKE"
    BOOLEAN = "BOOLEAN"
    BYTE = "BYTE"
    DOUBLE = "DOUBLE"
    ENUM = "ENUM"
    FLOAT = "FLOAT"
    INTEGER = "INTEGER"
    LONG = "LONG"
    MAP_LIKE = "MAP_LIKE"
    OBJECT = "OBJECT"
    STRING = "STRING"
    OTHER = "OTHER"

    def is_assignable_to(self, target: FieldCategory) -> bool:
        """True if a field of this category can carry a value of `target`.

        OBJECT sits above every other category; all others only accept
        themselves.
        """
        return target is FieldCategory.OBJECT or self is target


# ---------------------------------------------------------------------------
# Base variant
# ---------------------------------------------------------------------------

class SchemaAttribute(BaseModel):
    """One declared, named field of a schema."""
    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    required_category: ClassVar[FieldCategory]

    name: Annotated[str, Field(
        min_length=1,
        max_length=256,
        description="Attribute name. Matched case-insensitively against host fields.",
        examples=["age", "customerName"],
    )]
    description: Optional[str] = Field(default=None, max_length=1024)
    optional: bool = Field(
        default=False,
        description="Informational only; structural validation ignores it.",
    )

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not isinstance(getattr(cls, "required_category", None), FieldCategory):
            raise TypeError(f"{cls.__name__} must declare a required_category")

    def model_post_init(self, __context: Any) -> None:
        if type(self) is SchemaAttribute:
            raise TypeError("SchemaAttribute is abstract; instantiate one of its kinds")

    @property
    def kind(self) -> AttributeType:
        return AttributeType(self.type)

    def accepts(self, category: FieldCategory) -> bool:
        return category.is_assignable_to(self.required_category)


# ---------------------------------------------------------------------------
# Variants (one per AttributeType)
# ---------------------------------------------------------------------------

class ArrayAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.ARRAY_LIKE
    type: Literal["ARRAY"] = "ARRAY"


class BooleanAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.BOOLEAN
    type: Literal["BOOLEAN"] = "BOOLEAN"


class ByteAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.BYTE
    type: Literal["BYTE"] = "BYTE"


class DoubleAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.DOUBLE
    type: Literal["DOUBLE"] = "DOUBLE"


class EnumAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.ENUM
    type: Literal["ENUM"] = "ENUM"
    values: tuple[str, ...] = Field(
        default=(),
        description="Declared enum symbols. Not checked against host enum members.",
    )


class FloatAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.FLOAT
    type: Literal["FLOAT"] = "FLOAT"


class IntegerAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.INTEGER
    type: Literal["INTEGER"] = "INTEGER"


class LongAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.LONG
    type: Literal["LONG"] = "LONG"


class MapAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.MAP_LIKE
    type: Literal["MAP"] = "MAP"


class ObjectAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.OBJECT
    type: Literal["OBJECT"] = "OBJECT"


class StringAttribute(SchemaAttribute):
    required_category: ClassVar[FieldCategory] = FieldCategory.STRING
    type: Literal["STRING"] = "STRING"


# Discriminated union used for (de)serialization of schema attribute lists.
AnyAttribute = Annotated[
    Union[
        ArrayAttribute,
        BooleanAttribute,
        ByteAttribute,
        DoubleAttribute,
        EnumAttribute,
        FloatAttribute,
        IntegerAttribute,
        LongAttribute,
        MapAttribute,
        ObjectAttribute,
        StringAttribute,
    ],
    Field(discriminator="type"),
]


_VARIANTS: dict[AttributeType, type[SchemaAttribute]] = {
    AttributeType(cls.model_fields["type"].default): cls
    for cls in SchemaAttribute.__subclasses__()
}

_missing = set(AttributeType) - set(_VARIANTS)
if _missing:
    raise TypeError(
        "No attribute variant for: " + ", ".join(sorted(k.value for k in _missing))
    )


def attribute_class(kind: AttributeType | str) -> type[SchemaAttribute]:
    """Return the variant class declared for `kind`."""
    return _VARIANTS[AttributeType(kind)]
