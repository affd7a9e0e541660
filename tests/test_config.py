import pytest

from protoc_avro.config import PluginConfig, parse_parameter
from protoc_avro.errors import ConfigError


class TestParseParameter:
    def test_empty_gives_defaults(self):
        assert parse_parameter("") == PluginConfig()

    def test_all_keys(self):
        config = parse_parameter(
            "lang=go,messages=Order+shop.Customer,avro_option=65020,avro_file_option=65021,"
            "field_naming=camel,nested_cache_key=type,repeated_composites=expand,shared_nested=identical,go_package=shoppb,verbose=true"
        )
        assert config.lang == "go"
        assert config.messages == ["Order", "shop.Customer"]
        assert config.avro_option == 65020
        assert config.avro_file_option == 65021
        assert config.field_naming == "camel"
        assert config.nested_cache_key == "type"
        assert config.repeated_composites == "expand"
        assert config.shared_nested == "identical"
        assert config.go_package == "shoppb"
        assert config.verbose is True

    def test_bare_verbose_and_whitespace(self):
        config = parse_parameter(" verbose , lang = py ")
        assert config.verbose is True
        assert config.lang == "py"


class TestInvalidParameters:
    @pytest.mark.parametrize("parameter", [
        "color=blue",
        "lang=rust",
        "field_naming=kebab",
        "shared_nested=copied",
        "avro_option=abc",
        "avro_option=-3",
        "verbose=maybe",
        "lang",
    ])
    def test_rejected(self, parameter):
        with pytest.raises(ConfigError):
            parse_parameter(parameter)

    def test_dataclass_validates(self):
        with pytest.raises(ConfigError):
            PluginConfig(nested_cache_key="namespace")
