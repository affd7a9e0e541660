"""Lookup tables over the FileDescriptorProtos handed to one generation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FileDescriptorProto,
)


@dataclass
class MessageEntry:
    """A message together with its position in the file's type tree."""

    descriptor: DescriptorProto
    type_path: Tuple[str, ...]
    full_name: str

    @property
    def is_map_entry(self) -> bool:
        return bool(self.descriptor.options.map_entry)


def _qualify(package: str, path: Iterable[str]) -> str:
    parts = [package] if package else []
    parts.extend(path)
    return "." + ".".join(parts)


def _walk_messages(
    messages: Iterable[DescriptorProto],
    package: str,
    parent: Tuple[str, ...],
) -> Iterator[MessageEntry]:
    for msg in messages:
        path = parent + (msg.name,)
        yield MessageEntry(descriptor=msg, type_path=path, full_name=_qualify(package, path))
        yield from _walk_messages(msg.nested_type, package, path)


class DescriptorIndex:
    """Resolves fully-qualified type references (".pkg.Outer.Inner")."""

    def __init__(self, files: Iterable[FileDescriptorProto]):
        self._files: Dict[str, FileDescriptorProto] = {}
        self._messages: Dict[str, MessageEntry] = {}
        self._enums: Dict[str, EnumDescriptorProto] = {}
        for f in files:
            self.add_file(f)

    def add_file(self, file: FileDescriptorProto) -> None:
        self._files[file.name] = file
        for enum in file.enum_type:
            self._enums[_qualify(file.package, (enum.name,))] = enum
        for entry in _walk_messages(file.message_type, file.package, ()):
            self._messages[entry.full_name] = entry
            for enum in entry.descriptor.enum_type:
                self._enums[_qualify(file.package, entry.type_path + (enum.name,))] = enum

    def file(self, name: str) -> Optional[FileDescriptorProto]:
        return self._files.get(name)

    def find_message(self, full_name: str) -> Optional[MessageEntry]:
        return self._messages.get(full_name)

    def find_enum(self, full_name: str) -> Optional[EnumDescriptorProto]:
        return self._enums.get(full_name)

    def messages_of(self, file: FileDescriptorProto) -> List[MessageEntry]:
        """All messages declared in a file, depth-first in declaration order."""
        return list(_walk_messages(file.message_type, file.package, ()))
