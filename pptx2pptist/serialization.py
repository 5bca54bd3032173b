import base64
import typing
from dataclasses import fields, is_dataclass
from enum import Enum

# Type marker key used for serialization
_TYPE_KEY = "_type"


def _bytes_to_base64(data: bytes | bytearray) -> str:
    return base64.b64encode(bytes(data)).decode("utf-8")


def _serialize_for_json(value: typing.Any, include_binary: bool = True) -> typing.Any:
    if isinstance(value, (bytes, bytearray)):
        if not include_binary:
            return None
        return {"_bytes": _bytes_to_base64(value)}
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        result = {
            _TYPE_KEY: type(value).__name__,
        }
        for item in fields(value):
            result[item.name] = _serialize_for_json(
                getattr(value, item.name), include_binary
            )
        return result
    if isinstance(value, dict):
        return {
            str(key): _serialize_for_json(val, include_binary)
            for key, val in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [_serialize_for_json(item, include_binary) for item in value]
    return value


def serialize_presentation(value: typing.Any, include_binary: bool = True) -> dict:
    """JSON-ready dict for an intermediate model object (Presentation, Slide...)."""
    serialized = _serialize_for_json(value, include_binary)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}
