"""protoc plugin entry point (protoc-gen-avroschema).

protoc writes a CodeGeneratorRequest to stdin and reads a
CodeGeneratorResponse from stdout, so diagnostics must go to stderr.
"""

from __future__ import annotations

import sys
from typing import List, Tuple

from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse

from protoc_avro.config import PluginConfig, parse_parameter
from protoc_avro.descriptor_index import DescriptorIndex
from protoc_avro.emitter import output_file_name, render_module
from protoc_avro.errors import AvroSchemaError, ConfigError
from protoc_avro.message_walker import walk_file
from protoc_avro.opt_in import predicate_from_config

PLUGIN_NAME = "protoc-gen-avroschema"


def _log(config: PluginConfig, message: str) -> None:
    if config.verbose:
        print(f"{PLUGIN_NAME}: {message}", file=sys.stderr)


def generate(request: CodeGeneratorRequest) -> CodeGeneratorResponse:
    """Build the response for one protoc invocation.

    A failure in any file turns the whole response into an error with no
    generated files.
    """
    response = CodeGeneratorResponse()
    response.supported_features = CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        config = parse_parameter(request.parameter)
    except ConfigError as e:
        response.error = f"invalid parameter: {e}"
        return response

    index = DescriptorIndex(request.proto_file)
    opt_in = predicate_from_config(config)
    outputs: List[Tuple[str, str]] = []

    for file_name in request.file_to_generate:
        file = index.file(file_name)
        if file is None:
            response.error = f"{file_name}: descriptor missing from request"
            return response
        try:
            results = walk_file(file, index, opt_in, config)
        except AvroSchemaError as e:
            response.error = f"{file_name}: {e}"
            return response

        if not results:
            _log(config, f"{file_name}: no messages opted in")
            continue
        for result in results:
            _log(config, f"{file_name}: {result.message_name}")
        outputs.append((output_file_name(file, config.lang), render_module(file, results, config)))

    for name, content in outputs:
        generated = response.file.add()
        generated.name = name
        generated.content = content
    return response


def main():
    request = CodeGeneratorRequest.FromString(sys.stdin.buffer.read())
    response = generate(request)
    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
