# ABOUTME: Field-level type checks and record building for config sections
# ABOUTME: Maps camelCase file keys onto dataclass fields and back again

import math
from collections.abc import Mapping
from dataclasses import MISSING, field, fields, is_dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import SchemaError

Check = Callable[[Any, str], Any]


def freeze(value: Any) -> Any:
    """Return a read-only copy of nested mappings and lists."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def empty_mapping() -> Mapping:
    return MappingProxyType({})


def type_name(value: Any) -> str:
    if value is None:
        return "null"
    # Report frozen values under the names used in the file
    if isinstance(value, tuple):
        return "list"
    if isinstance(value, Mapping):
        return "mapping"
    return type(value).__name__


def option(key: str, check: Check, default: Any = MISSING, default_factory: Any = MISSING):
    """
    Declare a dataclass field that is read from ``key`` in the config file.

    Args:
        key: Key used in the config file
        check: Callable validating and converting the raw value
        default: Default value when the key is absent
        default_factory: Factory for mutable defaults

    Returns:
        A dataclass field carrying the key and check in its metadata
    """
    metadata = {"key": key, "check": check}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def check_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(path, f"expected a string, got {type_name(value)}")
    return value


def check_nonempty_str(value: Any, path: str) -> str:
    value = check_str(value, path)
    if not value.strip():
        raise SchemaError(path, "must not be empty")
    return value


def check_optional_str(value: Any, path: str) -> Optional[str]:
    if value is None:
        return None
    return check_str(value, path)


def check_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SchemaError(path, f"expected a boolean, got {type_name(value)}")
    return value


def check_int(value: Any, path: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(path, f"expected an integer, got {type_name(value)}")
    return value


def check_number(value: Any, path: str):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(path, f"expected a number, got {type_name(value)}")
    return value


def check_duration(value: Any, path: str):
    value = check_number(value, path)
    if math.isnan(value) or value < 0:
        raise SchemaError(path, f"must be a non-negative number, got {value}")
    return value


def check_optional_duration(value: Any, path: str):
    if value is None:
        return None
    return check_duration(value, path)


def check_mapping(value: Any, path: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise SchemaError(path, f"expected a mapping, got {type_name(value)}")
    for key in value:
        if not isinstance(key, str):
            raise SchemaError(path, f"keys must be strings, got {type_name(key)}")
    return freeze(value)


def check_str_mapping(value: Any, path: str) -> Mapping:
    value = check_mapping(value, path)
    for key, item in value.items():
        check_str(item, f"{path}.{key}")
    return value


def check_sequence(value: Any, path: str) -> Tuple[Any, ...]:
    if not isinstance(value, (list, tuple)):
        raise SchemaError(path, f"expected a list, got {type_name(value)}")
    return tuple(value)


def check_str_sequence(value: Any, path: str) -> Tuple[str, ...]:
    items = check_sequence(value, path)
    for index, item in enumerate(items):
        check_str(item, f"{path}[{index}]")
    return items


def build_record(cls, options: Any, path: str, **values):
    """
    Build a dataclass record from a raw config mapping.

    Fields declared with ``option()`` are looked up by their file key and
    passed through their check. Keys the record does not declare are kept in
    its ``extra`` mapping.

    Args:
        cls: Dataclass to instantiate
        options: Raw mapping from the config file
        path: Dotted field path of ``options``, used in error messages
        **values: Constructor arguments supplied by the caller

    Returns:
        An instance of ``cls``

    Raises:
        SchemaError: If a required key is missing or a value is mistyped
    """
    remaining = dict(check_mapping(options, path))
    for record_field in fields(cls):
        key = record_field.metadata.get("key")
        if key is None:
            continue
        field_path = f"{path}.{key}" if path else key
        if key in remaining:
            values[record_field.name] = record_field.metadata["check"](
                remaining.pop(key), field_path
            )
        elif (
            record_field.default is MISSING
            and record_field.default_factory is MISSING
        ):
            raise SchemaError(field_path, "required field is missing")

    values["extra"] = MappingProxyType(remaining)
    return cls(**values)


def dump_value(value: Any) -> Any:
    """Convert a loaded value back into plain YAML-friendly data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value):
        return record_to_dict(value)
    if isinstance(value, (list, tuple)):
        return [dump_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: dump_value(item) for key, item in value.items()}
    return value


def record_to_dict(record) -> Dict[str, Any]:
    data = {}
    for record_field in fields(record):
        key = record_field.metadata.get("key")
        if key is not None:
            data[key] = dump_value(getattr(record, record_field.name))
    data.update(dump_value(getattr(record, "extra", {})))
    return data
