"""
Annotation aliases for categories Python's builtins do not tell apart.

    class Reading:
        sensor_id: Long
        flags: Byte
        ratio: Float32

Host-type introspection reads the FieldCategory out of the Annotated
metadata instead of inferring it from the base type.
"""
from typing import Annotated

from schemaguard.schemas.attributes import FieldCategory

Byte = Annotated[int, FieldCategory.BYTE]
Long = Annotated[int, FieldCategory.LONG]
Float32 = Annotated[float, FieldCategory.FLOAT]
