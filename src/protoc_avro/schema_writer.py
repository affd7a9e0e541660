"""Renders schema nodes into Avro schema text.

The layout, spacing included, is fixed: the same descriptors always give
byte-identical schema text.
"""

from __future__ import annotations

import json
from typing import Iterable, Union

from protoc_avro.models import (
    ArrayField,
    EnumField,
    FieldNode,
    NestedRecordField,
    RecordNode,
    ScalarField,
)


def _q(value: str) -> str:
    return json.dumps(value)


def _join(parts: Iterable[str]) -> str:
    return ", ".join(parts)


def _record_type(node: NestedRecordField) -> str:
    fields = _join(render_field(f) for f in node.fields)
    return f'{{ "name": {_q(node.type_name)}, "type": "record", "fields": [ {fields} ] }}'


def _enum_type(node: EnumField) -> str:
    symbols = _join(_q(s) for s in node.symbols)
    return f'{{"type": "enum", "name": {_q(node.type_name)}, "symbols": [ {symbols} ]}}'


def _items(items: Union[str, EnumField, NestedRecordField]) -> str:
    if isinstance(items, str):
        return _q(items)
    if isinstance(items, EnumField):
        return _enum_type(items)
    return _record_type(items)


def render_field(node: FieldNode) -> str:
    if isinstance(node, ScalarField):
        return f'{{"name": {_q(node.name)}, "type": {_q(node.avro_type)}}}'
    if isinstance(node, ArrayField):
        return f'{{"name": {_q(node.name)}, "type": {{"type": "array", "items": {_items(node.items)}}}}}'
    if isinstance(node, EnumField):
        return f'{{"name": {_q(node.name)}, "type": {_enum_type(node)}}}'
    if isinstance(node, NestedRecordField):
        return f'{{"name": {_q(node.name)}, "type": {_record_type(node)}}}'
    raise TypeError(f"not a field node: {node!r}")


def render_schema(record: RecordNode) -> str:
    fields = _join(render_field(f) for f in record.fields)
    return (
        f'{{"name": {_q(record.name)}, "type": "record", '
        f'"namespace": {_q(record.namespace)}, "fields": [ {fields} ]}}'
    )
