"""Predicates deciding which messages get an Avro schema.

Opt-in is usually a custom boolean message option. This package does not link
any extension definitions, so such an option shows up as an unknown field on
``MessageOptions``/``FileOptions`` and is read from there by field number.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from google.protobuf.descriptor_pb2 import FileDescriptorProto
from google.protobuf.unknown_fields import UnknownFieldSet

from protoc_avro.config import PluginConfig
from protoc_avro.descriptor_index import MessageEntry
from protoc_avro.naming import camel_case_slice

OptInPredicate = Callable[[FileDescriptorProto, MessageEntry], bool]

_WIRETYPE_VARINT = 0


def all_messages(file: FileDescriptorProto, message: MessageEntry) -> bool:
    return True


def named_messages(names: Iterable[str]) -> OptInPredicate:
    """Opt in messages by name.

    A name may be the message's own name (Inner), its path inside the
    package (Outer.Inner), its fully qualified name (shop.Outer.Inner) or its
    record name (Outer_Inner).
    """
    wanted = {n.lstrip(".") for n in names}

    def predicate(file: FileDescriptorProto, message: MessageEntry) -> bool:
        candidates = (
            message.descriptor.name,
            ".".join(message.type_path),
            message.full_name.lstrip("."),
            camel_case_slice(message.type_path),
        )
        return any(c in wanted for c in candidates)

    return predicate


def _bool_option(options, field_number: int) -> Optional[bool]:
    """Read a boolean extension from an options message's unknown fields.

    Returns None when the option is not set. The last occurrence wins, as
    with any repeated scalar on the wire.
    """
    value = None
    for unknown in UnknownFieldSet(options):
        if unknown.field_number == field_number and unknown.wire_type == _WIRETYPE_VARINT:
            value = bool(unknown.data)
    return value


def message_option(
    field_number: int,
    file_field_number: Optional[int] = None,
) -> OptInPredicate:
    """Opt in messages carrying a boolean option with the given field number.

    When the message does not set it, the file-level option (if configured)
    supplies the default.
    """

    def predicate(file: FileDescriptorProto, message: MessageEntry) -> bool:
        default = False
        if file_field_number is not None:
            file_value = _bool_option(file.options, file_field_number)
            if file_value is not None:
                default = file_value
        value = _bool_option(message.descriptor.options, field_number)
        return default if value is None else value

    return predicate


def predicate_from_config(config: PluginConfig) -> OptInPredicate:
    if config.messages:
        return named_messages(config.messages)
    if config.avro_option is not None:
        return message_option(config.avro_option, config.avro_file_option)
    return all_messages
