import io
import sys

from google.protobuf import descriptor_pb2 as d2
from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest, CodeGeneratorResponse

from protoc_avro import plugin

FDP = d2.FieldDescriptorProto


def _make_field(name, field_type, number=1, repeated=False, type_name=""):
    f = FDP(
        name=name,
        number=number,
        type=field_type,
        label=FDP.LABEL_REPEATED if repeated else FDP.LABEL_OPTIONAL,
    )
    if type_name:
        f.type_name = type_name
    return f


def _common_file():
    money = d2.DescriptorProto(name="Money", field=[
        _make_field("currency", FDP.TYPE_STRING, 1),
        _make_field("units", FDP.TYPE_INT64, 2),
    ])
    return d2.FileDescriptorProto(name="common/money.proto", package="common", message_type=[money])


def _order_file():
    status = d2.EnumDescriptorProto(name="Status")
    status.value.add(name="NEW", number=0)
    status.value.add(name="SHIPPED", number=1)
    order = d2.DescriptorProto(name="Order", field=[
        _make_field("id", FDP.TYPE_INT64, 1),
        _make_field("tags", FDP.TYPE_STRING, 2, repeated=True),
        _make_field("status", FDP.TYPE_ENUM, 3, type_name=".shop.Status"),
        _make_field("total", FDP.TYPE_MESSAGE, 4, type_name=".common.Money"),
    ])
    return d2.FileDescriptorProto(
        name="shop/order.proto",
        package="shop",
        dependency=["common/money.proto"],
        message_type=[order],
        enum_type=[status],
    )


def _broken_file():
    cart = d2.DescriptorProto(name="Cart", field=[
        _make_field("orders", FDP.TYPE_MESSAGE, 1, repeated=True, type_name=".shop.Order"),
    ])
    return d2.FileDescriptorProto(name="shop/cart.proto", package="shop", message_type=[cart])


def _make_request(parameter="", files=None, generate=("shop/order.proto",)):
    request = CodeGeneratorRequest(parameter=parameter)
    request.proto_file.extend(files if files is not None else [_common_file(), _order_file()])
    request.file_to_generate.extend(generate)
    return request


class TestGenerate:
    def test_python_output(self):
        response = plugin.generate(_make_request())
        assert not response.error
        assert [f.name for f in response.file] == ["shop/order_avro.py"]

        namespace = {}
        exec(response.file[0].content, namespace)
        schema = namespace["AVRO_SCHEMAS"]["Order"]
        assert '"namespace": "Order"' in schema
        assert '{"name": "status", "type": {"type": "enum", "name": "Status", "symbols": [ "NEW", "SHIPPED" ]}}' in schema

    def test_go_output(self):
        response = plugin.generate(_make_request("lang=go"))
        assert [f.name for f in response.file] == ["shop/order.avro.go"]
        assert "func AvroSchemaForOrder() string {" in response.file[0].content

    def test_imported_files_are_not_generated(self):
        response = plugin.generate(_make_request())
        assert all("money" not in f.name for f in response.file)

    def test_file_without_opted_in_messages_is_skipped(self):
        response = plugin.generate(_make_request("messages=Nothing"))
        assert not response.error
        assert len(response.file) == 0

    def test_supports_proto3_optional(self):
        response = plugin.generate(_make_request())
        assert response.supported_features & CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL


class TestErrors:
    def test_failure_reports_file_and_emits_nothing(self):
        request = _make_request(
            files=[_common_file(), _order_file(), _broken_file()],
            generate=("shop/order.proto", "shop/cart.proto"),
        )
        response = plugin.generate(request)
        assert response.error.startswith("shop/cart.proto: ")
        assert "Cart.orders" in response.error
        assert len(response.file) == 0

    def test_expand_accepts_repeated_messages(self):
        request = _make_request(
            "repeated_composites=expand",
            files=[_common_file(), _order_file(), _broken_file()],
            generate=("shop/cart.proto",),
        )
        response = plugin.generate(request)
        assert not response.error
        assert '"items": { "name": "Order", "type": "record"' in response.file[0].content

    def test_bad_parameter(self):
        response = plugin.generate(_make_request("lang=cobol"))
        assert response.error.startswith("invalid parameter: ")
        assert len(response.file) == 0

    def test_missing_descriptor(self):
        response = plugin.generate(_make_request(generate=("nowhere.proto",)))
        assert "nowhere.proto" in response.error


class TestMain:
    def test_stdin_to_stdout(self, capsys, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO(_make_request("verbose=true").SerializeToString()))
        stdout = io.TextIOWrapper(io.BytesIO())
        monkeypatch.setattr(sys, "stdin", stdin)
        monkeypatch.setattr(sys, "stdout", stdout)

        plugin.main()

        response = CodeGeneratorResponse.FromString(stdout.buffer.getvalue())
        assert [f.name for f in response.file] == ["shop/order_avro.py"]
        assert "protoc-gen-avroschema: shop/order.proto: Order" in capsys.readouterr().err
