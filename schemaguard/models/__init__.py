from .schema_record import SchemaRecord

__all__ = [
    "SchemaRecord",
]
