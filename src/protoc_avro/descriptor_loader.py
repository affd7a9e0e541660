"""Obtain FileDescriptorProtos for a .proto file by running protoc."""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import List, Optional, Sequence, Tuple

from google.protobuf import descriptor_pb2 as d2


class ProtocError(RuntimeError):
    """Raised when protoc is missing or rejects the input."""


def _include_args(proto_path: str, include_paths: Sequence[str]) -> List[str]:
    includes = [os.path.dirname(os.path.abspath(proto_path))]
    includes.extend(os.path.abspath(p) for p in include_paths)

    # de-dup while preserving order
    seen = set()
    inc_args: List[str] = []
    for inc in includes:
        if inc and inc not in seen:
            seen.add(inc)
            inc_args.extend(["-I", inc])
    return inc_args


def load_descriptor_set(
    proto_path: str,
    include_paths: Sequence[str] = (),
    protoc: str = "protoc",
) -> d2.FileDescriptorSet:
    with tempfile.TemporaryDirectory() as td:
        desc_path = os.path.join(td, "descriptor_set.pb")
        cmd = [protoc, "--include_imports", f"--descriptor_set_out={desc_path}"]
        cmd += _include_args(proto_path, include_paths) + [os.path.abspath(proto_path)]
        try:
            subprocess.run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise ProtocError(f"'{protoc}' not found. Please install the Protocol Buffers compiler and ensure it is in PATH.") from e
        except subprocess.CalledProcessError as e:
            raise ProtocError(f"protoc failed: {e.stderr.decode('utf-8', errors='ignore')}") from e

        fds = d2.FileDescriptorSet()
        with open(desc_path, "rb") as f:
            fds.ParseFromString(f.read())
    return fds


def find_target_file(fds: d2.FileDescriptorSet, proto_path: str) -> d2.FileDescriptorProto:
    """Pick the descriptor for ``proto_path`` out of a descriptor set."""
    base = os.path.basename(proto_path)
    target: Optional[d2.FileDescriptorProto] = None
    for f in fds.file:
        if os.path.basename(f.name) == base:
            target = f
    if target is None:
        # protoc lists the requested file last, after its imports
        if len(fds.file) == 1:
            return fds.file[0]
        names = ", ".join(ff.name for ff in fds.file)
        raise ProtocError(f"Could not locate target file '{base}' in descriptor set. Found: {names}")
    return target


def load_file_descriptors(
    proto_path: str,
    include_paths: Sequence[str] = (),
) -> Tuple[d2.FileDescriptorSet, d2.FileDescriptorProto]:
    fds = load_descriptor_set(proto_path, include_paths)
    return fds, find_target_file(fds, proto_path)
