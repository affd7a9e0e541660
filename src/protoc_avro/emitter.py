from __future__ import annotations

import json
import posixpath
from pathlib import Path
from typing import Dict, List

from google.protobuf.descriptor_pb2 import FileDescriptorProto
from jinja2 import Environment, FileSystemLoader

from protoc_avro.config import PluginConfig
from protoc_avro.models import SchemaResult

TEMPLATES = {
    "py": "avro_schema.py.j2",
    "go": "avro_schema.go.j2",
}


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _module_base(file: FileDescriptorProto) -> str:
    base = posixpath.basename(file.name)
    if base.endswith(".proto"):
        base = base[: -len(".proto")]
    return base


def output_file_name(file: FileDescriptorProto, lang: str) -> str:
    """Path of the generated file, relative to the plugin output directory.

    foo/order-service.proto -> foo/order_service_avro.py (py)
    foo/order-service.proto -> foo/order-service.avro.go (go)
    """
    directory = posixpath.dirname(file.name)
    base = _module_base(file)
    if lang == "go":
        name = f"{base}.avro.go"
    else:
        name = base.replace("-", "_").replace(".", "_") + "_avro.py"
    return posixpath.join(directory, name) if directory else name


def go_package_name(file: FileDescriptorProto, config: PluginConfig) -> str:
    """Go package clause for a file.

    Order of preference: go_package parameter, go_package file option
    ("path;name" or the last path element), proto package, file name.
    """
    if config.go_package:
        return config.go_package
    option = file.options.go_package
    if option:
        if ";" in option:
            return option.split(";", 1)[1]
        return posixpath.basename(option).replace("-", "_").replace(".", "_")
    if file.package:
        return file.package.replace(".", "_")
    return _module_base(file).replace("-", "_").replace(".", "_")


def _schema_entries(results: List[SchemaResult]) -> List[Dict[str, str]]:
    entries = []
    for result in results:
        entries.append({
            "message_name": result.message_name,
            "function": f"avro_schema_for_{result.message_name}",
            "py_literal": repr(result.schema),
            "go_literal": json.dumps(result.schema, ensure_ascii=False),
        })
    return entries


def render_module(
    file: FileDescriptorProto,
    results: List[SchemaResult],
    config: PluginConfig,
) -> str:
    """Render the generated source that exposes each schema at runtime."""
    env = _get_template_env()
    template = env.get_template(TEMPLATES[config.lang])
    return template.render(
        source=file.name,
        go_package=go_package_name(file, config),
        schemas=_schema_entries(results),
    )
