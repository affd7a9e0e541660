"""Plugin parameters.

protoc passes everything after the plugin's ``--avroschema_out=`` up to the
colon as a single string, e.g.::

    protoc --avroschema_out=lang=go,messages=Order+Customer:gen foo.proto
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from protoc_avro.errors import ConfigError

LANGS = ("py", "go")
FIELD_NAMINGS = ("proto", "camel")
NESTED_CACHE_KEYS = ("field", "type")
REPEATED_COMPOSITES = ("reject", "expand")
SHARED_NESTED = ("renamed", "identical")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass
class PluginConfig:
    lang: str = "py"
    messages: List[str] = field(default_factory=list)
    avro_option: Optional[int] = None
    avro_file_option: Optional[int] = None
    field_naming: str = "proto"
    nested_cache_key: str = "field"
    repeated_composites: str = "reject"
    shared_nested: str = "renamed"
    go_package: Optional[str] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        _check_choice("lang", self.lang, LANGS)
        _check_choice("field_naming", self.field_naming, FIELD_NAMINGS)
        _check_choice("nested_cache_key", self.nested_cache_key, NESTED_CACHE_KEYS)
        _check_choice("repeated_composites", self.repeated_composites, REPEATED_COMPOSITES)
        _check_choice("shared_nested", self.shared_nested, SHARED_NESTED)


def _check_choice(key: str, value: str, allowed) -> None:
    if value not in allowed:
        raise ConfigError(f"invalid value '{value}' for '{key}' (expected one of: {', '.join(allowed)})")


def _parse_int(key: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"'{key}' expects a field number, got '{value}'") from None
    if number <= 0:
        raise ConfigError(f"'{key}' must be a positive field number, got {number}")
    return number


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"'{key}' expects a boolean, got '{value}'")


def parse_parameter(parameter: str) -> PluginConfig:
    """Parse a ``key=value,key=value`` plugin parameter string."""
    values: Dict[str, object] = {}
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        value = value.strip()
        if key == "verbose" and not sep:
            values["verbose"] = True
            continue
        if not sep:
            raise ConfigError(f"parameter '{item}' is not of the form key=value")

        if key == "messages":
            values["messages"] = [m for m in value.split("+") if m]
        elif key in ("avro_option", "avro_file_option"):
            values[key] = _parse_int(key, value)
        elif key == "verbose":
            values["verbose"] = _parse_bool(key, value)
        elif key in ("lang", "field_naming", "nested_cache_key", "repeated_composites", "shared_nested", "go_package"):
            values[key] = value
        else:
            raise ConfigError(f"unknown parameter '{key}'")

    return PluginConfig(**values)
