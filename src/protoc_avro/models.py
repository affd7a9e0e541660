from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union


@dataclass
class ScalarField:
    name: str
    avro_type: str


@dataclass
class EnumField:
    name: str
    type_name: str
    symbols: List[str] = field(default_factory=list)


@dataclass
class NestedRecordField:
    """A record-typed field. ``fields`` is never filled in after creation."""

    name: str
    type_name: str
    fields: Tuple[FieldNode, ...] = ()


@dataclass
class ArrayField:
    name: str
    # A primitive type name, or a composite node when repeated composites
    # are expanded.
    items: Union[str, EnumField, NestedRecordField]


FieldNode = Union[ScalarField, ArrayField, EnumField, NestedRecordField]


@dataclass
class RecordNode:
    """Top-level record (the envelope) synthesized for one message."""

    name: str
    namespace: str
    fields: List[FieldNode] = field(default_factory=list)


CacheEntry = Union[RecordNode, NestedRecordField]


@dataclass
class SchemaResult:
    message_name: str
    schema: str
