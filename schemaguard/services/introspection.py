"""
Host-type introspection: turn a Python class into a HostField inventory.

Fields are read from class annotations along the MRO, most-derived class
first. When a subclass re-declares a field, the subclass declaration wins
and the ancestor's is dropped. Works for plain annotated classes,
dataclasses and pydantic models alike.

Category inference
------------------
  bool                      → BOOLEAN
  Enum subclass, Literal    → ENUM
  int                       → INTEGER
  float                     → DOUBLE
  str                       → STRING
  Mapping (dict, ...)       → MAP_LIKE
  Collection (list, set...) → ARRAY_LIKE   (str/bytes excluded)
  object, Any               → OBJECT
  Optional[X]               → category of X
  anything else             → OTHER

`Annotated[X, FieldCategory.Y]` overrides inference (see schemas/hints.py).
"""
from __future__ import annotations

import collections.abc
import enum
import inspect
import logging
import types
from typing import Annotated, Any, ClassVar, Literal, Union, get_args, get_origin

from schemaguard.core.errors import HostTypeResolutionError
from schemaguard.schemas.attributes import FieldCategory
from schemaguard.schemas.validation import HostField

logger = logging.getLogger(__name__)

# Bases whose annotations describe framework internals, not host fields.
_FRAMEWORK_PACKAGES = frozenset({"builtins", "abc", "typing", "enum", "pydantic"})

_UNION_ORIGINS = (Union, types.UnionType)


def _is_classvar(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def category_of(hint: Any) -> FieldCategory:
    """Map one evaluated type hint to a FieldCategory."""
    origin = get_origin(hint)

    if origin is Annotated:
        base, *metadata = get_args(hint)
        for meta in metadata:
            if isinstance(meta, FieldCategory):
                return meta
        return category_of(base)

    if hint is Any or hint is object:
        return FieldCategory.OBJECT

    if origin in _UNION_ORIGINS:
        options = [a for a in get_args(hint) if a is not type(None)]
        if len(options) == 1:
            return category_of(options[0])
        return FieldCategory.OTHER

    if origin is Literal:
        return FieldCategory.ENUM

    # typing.NewType
    supertype = getattr(hint, "__supertype__", None)
    if supertype is not None:
        return category_of(supertype)

    klass = origin if origin is not None else hint
    if not isinstance(klass, type):
        return FieldCategory.OTHER

    # Enum first: IntEnum / StrEnum are also int / str.
    if issubclass(klass, enum.Enum):
        return FieldCategory.ENUM
    if issubclass(klass, bool):
        return FieldCategory.BOOLEAN
    if issubclass(klass, int):
        return FieldCategory.INTEGER
    if issubclass(klass, float):
        return FieldCategory.DOUBLE
    if issubclass(klass, str):
        return FieldCategory.STRING
    if issubclass(klass, collections.abc.Mapping):
        return FieldCategory.MAP_LIKE
    if issubclass(klass, (bytes, bytearray, memoryview)):
        return FieldCategory.OTHER
    if issubclass(klass, collections.abc.Collection):
        return FieldCategory.ARRAY_LIKE
    return FieldCategory.OTHER


def _own_hints(klass: type, host: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except (NameError, SyntaxError, TypeError, AttributeError) as exc:
        raise HostTypeResolutionError(host.__qualname__, str(exc)) from exc


def host_fields_of(klass: type) -> list[HostField]:
    """
    Return the flattened field inventory of `klass`, ancestors included.
    Nearest-subtype declaration wins on name collisions.
    """
    if not isinstance(klass, type):
        raise HostTypeResolutionError(repr(klass), "not a class")

    fields: dict[str, HostField] = {}
    for current in klass.__mro__:
        if current.__module__.split(".")[0] in _FRAMEWORK_PACKAGES:
            continue
        for name, hint in _own_hints(current, klass).items():
            if name.startswith("_") or _is_classvar(hint):
                continue
            if name in fields:
                logger.debug(
                    "%s.%s shadowed by a subclass declaration of %s",
                    current.__qualname__, name, klass.__qualname__,
                )
                continue
            fields[name] = HostField(name=name, category=category_of(hint))

    return list(fields.values())
