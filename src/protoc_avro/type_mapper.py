from __future__ import annotations

from typing import Dict, Optional

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from protoc_avro.errors import UnknownPrimitiveType

# Protobuf scalar type -> Avro primitive type
PRIMITIVE_TYPE_MAP: Dict[int, str] = {
    FieldDescriptorProto.TYPE_DOUBLE: "double",
    FieldDescriptorProto.TYPE_FLOAT: "float",
    FieldDescriptorProto.TYPE_INT64: "long",
    FieldDescriptorProto.TYPE_UINT64: "long",
    FieldDescriptorProto.TYPE_FIXED64: "long",
    FieldDescriptorProto.TYPE_SFIXED64: "long",
    FieldDescriptorProto.TYPE_SINT64: "long",
    FieldDescriptorProto.TYPE_INT32: "int",
    FieldDescriptorProto.TYPE_UINT32: "int",
    FieldDescriptorProto.TYPE_FIXED32: "int",
    FieldDescriptorProto.TYPE_SFIXED32: "int",
    FieldDescriptorProto.TYPE_SINT32: "int",
    FieldDescriptorProto.TYPE_BOOL: "boolean",
    FieldDescriptorProto.TYPE_STRING: "string",
    FieldDescriptorProto.TYPE_BYTES: "bytes",
}


def is_primitive(proto_type: int) -> bool:
    return proto_type in PRIMITIVE_TYPE_MAP


def avro_type_for(proto_type: int, field_name: Optional[str] = None) -> str:
    """Return the Avro primitive type name for a protobuf scalar type tag."""
    try:
        return PRIMITIVE_TYPE_MAP[proto_type]
    except KeyError:
        raise UnknownPrimitiveType(proto_type, field_name) from None
