from __future__ import annotations

from typing import Dict, Iterator, Optional

from protoc_avro.errors import CacheConsistencyError
from protoc_avro.models import CacheEntry, NestedRecordField, RecordNode


class TypeCache:
    """Short type name -> schema node already synthesized during one run.

    Each name holds at most one entry. Once a name is present, later
    references reuse it instead of walking the source type again, which is
    what keeps shared types single and cyclic types finite.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}

    def lookup(self, name: str) -> Optional[CacheEntry]:
        return self._entries.get(name)

    def insert(self, name: str, entry: CacheEntry) -> None:
        if name in self._entries:
            raise CacheConsistencyError(name, "already registered")
        self._entries[name] = entry

    def register_record(self, name: str, record: RecordNode) -> None:
        """Register a top-level record, promoting a nested placeholder if any."""
        existing = self._entries.get(name)
        if existing is None:
            self._entries[name] = record
        elif isinstance(existing, NestedRecordField):
            self._entries[name] = record
        else:
            raise CacheConsistencyError(name, "record synthesized twice")

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
