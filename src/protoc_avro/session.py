from __future__ import annotations

from dataclasses import dataclass, field

from google.protobuf.descriptor_pb2 import FieldDescriptorProto, FileDescriptorProto

from protoc_avro.config import PluginConfig
from protoc_avro.descriptor_index import DescriptorIndex
from protoc_avro.naming import camel_case, file_namespace
from protoc_avro.type_cache import TypeCache


@dataclass
class SynthesisSession:
    """Traversal state for one source file.

    The cache lives exactly as long as the session, so every message of the
    file shares it and nothing leaks into the next file.
    """

    file: FileDescriptorProto
    index: DescriptorIndex
    config: PluginConfig = field(default_factory=PluginConfig)
    cache: TypeCache = field(default_factory=TypeCache)

    @property
    def namespace(self) -> str:
        return file_namespace(self.file.name)

    def field_name(self, proto_field: FieldDescriptorProto) -> str:
        if self.config.field_naming == "camel":
            return camel_case(proto_field.name)
        return proto_field.name
