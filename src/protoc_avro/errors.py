from __future__ import annotations

from typing import Optional


class AvroSchemaError(Exception):
    """Base class for every failure raised while synthesizing a schema."""


class UnknownPrimitiveType(AvroSchemaError):
    """Raised when a field's type tag has no Avro primitive counterpart."""

    def __init__(self, type_tag: int, field_name: Optional[str] = None):
        self.type_tag = type_tag
        self.field_name = field_name
        where = f" on field '{field_name}'" if field_name else ""
        super().__init__(f"unknown primitive type {type_tag}{where}")


class UnknownFieldType(AvroSchemaError):
    """Raised when a field's type category is not one the classifier knows."""

    def __init__(self, field_name: str, type_tag: int):
        self.field_name = field_name
        self.type_tag = type_tag
        super().__init__(f"unknown type {type_tag} for field '{field_name}'")


class EnumNotFound(AvroSchemaError):
    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"enum '{type_name}' referenced by field '{field_name}' not found")


class CacheConsistencyError(AvroSchemaError):
    """Raised when the type cache holds an entry the traversal cannot handle."""

    def __init__(self, name: str, detail: str):
        self.name = name
        super().__init__(f"type cache entry '{name}': {detail}")


class DuplicateFieldName(AvroSchemaError):
    def __init__(self, record_name: str, field_name: str):
        self.record_name = record_name
        self.field_name = field_name
        super().__init__(f"field '{field_name}' appears twice in record '{record_name}'")


class ConfigError(ValueError):
    """Raised for malformed plugin parameters."""
