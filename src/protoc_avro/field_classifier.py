"""Turns one protobuf field into one Avro field node."""

from __future__ import annotations

from typing import Optional, Union

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from protoc_avro.errors import CacheConsistencyError, EnumNotFound, UnknownFieldType
from protoc_avro.models import (
    ArrayField,
    EnumField,
    FieldNode,
    NestedRecordField,
    RecordNode,
    ScalarField,
)
from protoc_avro.naming import camel_case, short_type_name
from protoc_avro.session import SynthesisSession
from protoc_avro.type_mapper import avro_type_for, is_primitive

_COMPOSITE_TYPES = (FieldDescriptorProto.TYPE_MESSAGE, FieldDescriptorProto.TYPE_ENUM)


def classify_field(
    session: SynthesisSession,
    record_name: str,
    proto_field: FieldDescriptorProto,
) -> Optional[FieldNode]:
    """Produce the field node for ``proto_field``, or None for group fields.

    Repeated fields always become arrays of a primitive; a repeated message or
    enum field raises UnknownPrimitiveType unless repeated composites are
    configured to expand.
    """
    if proto_field.label == FieldDescriptorProto.LABEL_REPEATED:
        return _array_field(session, record_name, proto_field)

    if is_primitive(proto_field.type):
        return ScalarField(
            name=session.field_name(proto_field),
            avro_type=avro_type_for(proto_field.type),
        )
    if proto_field.type == FieldDescriptorProto.TYPE_MESSAGE:
        return resolve_nested_record(session, proto_field)
    if proto_field.type == FieldDescriptorProto.TYPE_ENUM:
        return resolve_enum(session, proto_field)
    if proto_field.type == FieldDescriptorProto.TYPE_GROUP:
        # groups are deprecated
        return None
    raise UnknownFieldType(f"{record_name}.{proto_field.name}", proto_field.type)


def _array_field(
    session: SynthesisSession,
    record_name: str,
    proto_field: FieldDescriptorProto,
) -> Optional[ArrayField]:
    name = session.field_name(proto_field)
    if session.config.repeated_composites == "expand":
        if proto_field.type in _COMPOSITE_TYPES:
            items = _composite_items(session, proto_field)
            return ArrayField(name=name, items=items)
        if proto_field.type == FieldDescriptorProto.TYPE_GROUP:
            return None
    return ArrayField(name=name, items=avro_type_for(proto_field.type, f"{record_name}.{proto_field.name}"))


def _composite_items(
    session: SynthesisSession,
    proto_field: FieldDescriptorProto,
) -> Union[EnumField, NestedRecordField]:
    if proto_field.type == FieldDescriptorProto.TYPE_MESSAGE:
        return resolve_nested_record(session, proto_field)
    return resolve_enum(session, proto_field)


def resolve_nested_record(
    session: SynthesisSession,
    proto_field: FieldDescriptorProto,
) -> NestedRecordField:
    """Resolve a message-typed field through the session's type cache.

    The referenced message is never walked here. A type already synthesized
    as a top-level record lends its fields; a type first seen through another
    field reuses that node; otherwise an empty record is registered.

    A cached node reached through a field of another name comes back as a copy
    carrying this field's name. With ``shared_nested=identical`` the cached
    node itself is returned, keeping the name of the field that first cached it.
    """
    type_name = short_type_name(proto_field.type_name)
    field_name = session.field_name(proto_field)

    cached = session.cache.lookup(type_name)
    if cached is not None:
        if isinstance(cached, RecordNode):
            return NestedRecordField(
                name=field_name,
                type_name=type_name,
                fields=tuple(cached.fields),
            )
        if isinstance(cached, NestedRecordField):
            if cached.name == field_name or session.config.shared_nested == "identical":
                return cached
            return NestedRecordField(name=field_name, type_name=cached.type_name, fields=cached.fields)
        raise CacheConsistencyError(type_name, f"unexpected entry {type(cached).__name__}")

    node = NestedRecordField(name=field_name, type_name=type_name)
    if session.config.nested_cache_key == "type":
        key = type_name
    else:
        key = camel_case(proto_field.name)
    if key not in session.cache:
        session.cache.insert(key, node)
    return node


def resolve_enum(session: SynthesisSession, proto_field: FieldDescriptorProto) -> EnumField:
    enum = session.index.find_enum(proto_field.type_name)
    if enum is None:
        raise EnumNotFound(proto_field.type_name, proto_field.name)
    return EnumField(
        name=session.field_name(proto_field),
        type_name=proto_field.type_name.split(".")[-1],
        symbols=[v.name for v in enum.value],
    )
