from __future__ import annotations

from typing import Set

from protoc_avro.descriptor_index import MessageEntry
from protoc_avro.errors import DuplicateFieldName
from protoc_avro.field_classifier import classify_field
from protoc_avro.models import RecordNode
from protoc_avro.naming import camel_case_slice
from protoc_avro.session import SynthesisSession


def record_name(entry: MessageEntry) -> str:
    """Record name for a message: Outer.Inner -> Outer_Inner"""
    return camel_case_slice(entry.type_path)


def assemble_record(session: SynthesisSession, entry: MessageEntry) -> RecordNode:
    """Build the record for one message.

    The record is registered in the cache before its fields are classified so
    that a field referring back to the message resolves to it. Any error from
    the classifier propagates; nothing is returned for a partial record.
    """
    record = RecordNode(name=record_name(entry), namespace=session.namespace)
    session.cache.register_record(record.name, record)

    seen: Set[str] = set()
    for proto_field in entry.descriptor.field:
        node = classify_field(session, record.name, proto_field)
        if node is None:
            continue
        if node.name in seen:
            raise DuplicateFieldName(record.name, node.name)
        seen.add(node.name)
        record.fields.append(node)

    return record
