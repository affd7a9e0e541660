"""Identifier conversions shared by the assembler and the emitters.

These follow protoc-gen-go's CamelCase rules so record names match the Go
type names generated for the same messages.
"""

from __future__ import annotations

import posixpath
from typing import Iterable


def camel_case(name: str) -> str:
    """Convert a protobuf identifier to CamelCase.

    A leading underscore becomes 'X', an underscore followed by a lowercase
    letter is dropped and the letter capitalized, and digits are kept as-is:
    foo_bar -> FooBar, _my_field -> XMyField, .pkg.my_msg -> .pkg.myMsg
    (the lowercase run after a dot is copied unchanged)
    """
    if not name:
        return ""
    out = []
    i = 0
    if name[0] == "_":
        out.append("X")
        i = 1
    while i < len(name):
        c = name[i]
        if c == "_" and i + 1 < len(name) and name[i + 1].islower():
            i += 1
            continue
        if c.isdigit():
            out.append(c)
            i += 1
            continue
        out.append(c.upper() if c.islower() else c)
        i += 1
        while i < len(name) and name[i].islower():
            out.append(name[i])
            i += 1
    return "".join(out)


def camel_case_slice(parts: Iterable[str]) -> str:
    """CamelCase each element of a type path and join with underscores."""
    return "_".join(camel_case(p) for p in parts)


def short_type_name(type_name: str) -> str:
    """Last dot-separated segment of a CamelCased type reference."""
    return camel_case(type_name).split(".")[-1]


def file_namespace(file_name: str) -> str:
    """Namespace for records of a file: order-service.proto -> OrderService"""
    base = posixpath.basename(file_name).replace(".proto", "")
    base = base.replace("-", "_").replace(".", "_")
    return camel_case(base)
