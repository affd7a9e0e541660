from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from protoc_avro.config import LANGS, PluginConfig
from protoc_avro.descriptor_index import DescriptorIndex
from protoc_avro.descriptor_loader import ProtocError, load_file_descriptors
from protoc_avro.emitter import output_file_name, render_module
from protoc_avro.errors import AvroSchemaError
from protoc_avro.message_walker import walk_file
from protoc_avro.opt_in import predicate_from_config


def _find_proto_files(root: str) -> List[str]:
    """Recursively find .proto files under root, sorted for deterministic output."""
    return sorted(str(p) for p in Path(root).rglob("*.proto"))


def generate(
    proto_path: str,
    out_dir: str,
    config: PluginConfig,
    include_paths: Sequence[str] = (),
) -> Optional[str]:
    """Generate the schema module for one .proto file.

    Returns the written path, or None when no message in the file opted in.
    """
    fds, target = load_file_descriptors(proto_path, include_paths)
    index = DescriptorIndex(fds.file)
    results = walk_file(target, index, predicate_from_config(config), config)
    if not results:
        return None

    # Flat output directory: drop the import path of the file
    out_path = os.path.join(out_dir, os.path.basename(output_file_name(target, config.lang)))
    os.makedirs(out_dir, exist_ok=True)
    Path(out_path).write_text(render_module(target, results, config), encoding="utf-8")
    return out_path


def run(proto: str, out_dir: str, config: PluginConfig, include_paths: Sequence[str] = ()) -> List[str]:
    """Generate for a .proto file or every .proto file under a directory."""
    if os.path.isdir(proto):
        inputs = _find_proto_files(proto)
        if not inputs:
            print(f"No .proto files found under directory: {proto}")
            return []
    else:
        inputs = [proto]

    generated: List[str] = []
    for p in inputs:
        out_path = generate(p, out_dir, config, include_paths)
        if out_path is None:
            print(f"  Skipped {p}: no messages opted in")
            continue
        print(f"  Generated: {out_path}")
        generated.append(out_path)
    return generated


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(
        description="Generate Avro schemas for protobuf messages",
    )
    parser.add_argument("--proto", required=True, help="Path to a .proto file or a directory containing .proto files (recursively)")
    parser.add_argument("--out", required=True, help="Output directory for generated file(s)")
    parser.add_argument("-I", "--include", action="append", default=[], help="Additional protoc include path (repeatable)")
    parser.add_argument("--lang", choices=LANGS, default="py", help="Language of the generated accessor module")
    parser.add_argument("--message", action="append", default=[], help="Only generate for this message (repeatable)")
    parser.add_argument("--avro-option", type=int, help="Field number of a boolean MessageOptions extension that opts a message in")
    parser.add_argument("--avro-file-option", type=int, help="Field number of a boolean FileOptions extension giving the default for --avro-option")
    parser.add_argument("--field-naming", choices=("proto", "camel"), default="proto", help="Keep proto field names or CamelCase them")
    parser.add_argument("--nested-cache-key", choices=("field", "type"), default="field", help="Key under which first-seen nested records are cached")
    parser.add_argument("--repeated-composites", choices=("reject", "expand"), default="reject", help="How repeated message/enum fields are handled")
    parser.add_argument("--shared-nested", choices=("renamed", "identical"), default="renamed", help="Whether a cached nested record reached through another field takes that field's name")
    parser.add_argument("--go-package", help="Go package name for --lang go")
    args = parser.parse_args(argv)

    config = PluginConfig(
        lang=args.lang,
        messages=args.message,
        avro_option=args.avro_option,
        avro_file_option=args.avro_file_option,
        field_naming=args.field_naming,
        nested_cache_key=args.nested_cache_key,
        repeated_composites=args.repeated_composites,
        shared_nested=args.shared_nested,
        go_package=args.go_package,
    )

    try:
        generated = run(args.proto, args.out, config, args.include)
    except (AvroSchemaError, ProtocError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Generated {len(generated)} file(s)")


if __name__ == "__main__":
    main()
