"""Avro schema generation for protobuf messages."""

from protoc_avro.message_walker import walk_file
from protoc_avro.models import SchemaResult

__version__ = "0.1.0"

__all__ = ["SchemaResult", "walk_file", "__version__"]
