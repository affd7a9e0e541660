from __future__ import annotations

from typing import Callable, List, Optional

from google.protobuf.descriptor_pb2 import FileDescriptorProto

from protoc_avro.config import PluginConfig
from protoc_avro.descriptor_index import DescriptorIndex
from protoc_avro.models import SchemaResult
from protoc_avro.opt_in import OptInPredicate, all_messages
from protoc_avro.record_assembler import assemble_record
from protoc_avro.schema_writer import render_schema
from protoc_avro.session import SynthesisSession

SchemaSink = Callable[[SchemaResult], None]


def walk_file(
    file: FileDescriptorProto,
    index: DescriptorIndex,
    opt_in: OptInPredicate = all_messages,
    config: Optional[PluginConfig] = None,
    sink: Optional[SchemaSink] = None,
) -> List[SchemaResult]:
    """Synthesize schemas for every opted-in message of one file.

    Messages are visited depth-first in declaration order with a single type
    cache for the whole file. A file yields schemas for all of its opted-in
    messages or none: ``sink`` receives the results only once every message
    has been synthesized.
    """
    session = SynthesisSession(file=file, index=index, config=config or PluginConfig())
    results: List[SchemaResult] = []

    for entry in index.messages_of(file):
        if entry.is_map_entry:
            continue
        if not opt_in(file, entry):
            continue
        record = assemble_record(session, entry)
        result = SchemaResult(message_name=record.name, schema=render_schema(record))
        results.append(result)

    if sink is not None:
        for result in results:
            sink(result)
    return results
