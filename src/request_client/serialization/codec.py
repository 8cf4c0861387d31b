"""
Codec
Serializes request bodies and deserializes response bodies for a given
serialization format. Objects are reduced to plain data through pydantic
and rebuilt into the requested result type with a pydantic TypeAdapter.
"""

import dataclasses
import json
import logging
import typing
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

import bson
from bson.errors import BSONError
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from request_client.exceptions import CodecError
from request_client.models.media_type import SerializationFormat
from request_client.serialization import xml_codec

T = TypeVar("T")

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


def to_plain(obj: Any) -> Any:
    """
    Reduce an object to JSON-compatible data

    None-valued fields are dropped so absent values never reach the wire.

    Raises:
        CodecError: If the object has no plain-data representation
    """
    try:
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
        return to_jsonable_python(obj, exclude_none=True)
    except PydanticSerializationError as e:
        raise CodecError(
            f"Cannot serialize object of type {type(obj).__name__}",
            code="CODEC02",
            cause=e,
        ) from e


def _root_tag(obj: Any) -> str:
    if isinstance(obj, BaseModel) or dataclasses.is_dataclass(obj):
        return type(obj).__name__
    return xml_codec.DEFAULT_ROOT_TAG


def serialize(
    obj: Any,
    fmt: SerializationFormat,
    encoding: str = "utf-8",
) -> bytes:
    """
    Encode an object into wire bytes for the given format

    Args:
        obj: Body object (pydantic model, dataclass, mapping, sequence or scalar)
        fmt: Serialization format tag
        encoding: Text encoding for textual formats

    Returns:
        Encoded payload

    Raises:
        CodecError: If the object cannot be encoded
    """
    data = to_plain(obj)

    try:
        if fmt is SerializationFormat.XML:
            return xml_codec.dumps(data, root_tag=_root_tag(obj), encoding=encoding)

        if fmt is SerializationFormat.BSON:
            if not isinstance(data, Mapping):
                raise CodecError(
                    "BSON documents must be mappings at the top level",
                    code="CODEC03",
                )
            return bson.encode(data)

        return json.dumps(data, ensure_ascii=False).encode(encoding)
    except CodecError:
        raise
    except (TypeError, ValueError, LookupError, BSONError) as e:
        raise CodecError(f"Cannot encode body as {fmt.value}", cause=e) from e


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _expects_sequence(result_type: Any) -> bool:
    origin = typing.get_origin(result_type) or result_type
    return origin in _SEQUENCE_ORIGINS


def _decode_plain(content: bytes, fmt: SerializationFormat, encoding: str) -> Any:
    if fmt is SerializationFormat.BSON:
        return bson.decode(content)

    if fmt is SerializationFormat.XML and content.lstrip().startswith(b"<?xml"):
        # Let the parser honour the declared encoding
        return xml_codec.loads(content)

    text = content.decode(encoding)
    if not text.strip():
        return None

    if fmt is SerializationFormat.XML:
        return xml_codec.loads(text.encode("utf-8"))

    return json.loads(text)


def deserialize(
    content: bytes,
    result_type: Type[T],
    fmt: SerializationFormat,
    encoding: str = "utf-8",
) -> Optional[T]:
    """
    Decode wire bytes into an instance of result_type

    Args:
        content: Raw response body
        result_type: Target type (anything a pydantic TypeAdapter accepts)
        fmt: Serialization format tag
        encoding: Text encoding for textual formats

    Returns:
        Decoded value, or None when the body carries no payload

    Raises:
        CodecError: If the body cannot be decoded into result_type
    """
    if not content:
        return None

    try:
        data = _decode_plain(content, fmt, encoding)
        if data is None:
            return None

        if (
            fmt is SerializationFormat.XML
            and _expects_sequence(result_type)
            and isinstance(data, dict)
            and len(data) == 1
        ):
            # <root><item/>...</root> carries the sequence under its only key
            data = next(iter(data.values()))
            if not isinstance(data, list):
                data = [data]

        return _adapter(result_type).validate_python(data)
    except PydanticValidationError as e:
        raise CodecError(
            f"Response body does not match {getattr(result_type, '__name__', result_type)}",
            code="CODEC04",
            cause=e,
        ) from e
    except Exception as e:
        logger.debug(f"Failed to decode {fmt.value} payload: {e}")
        raise CodecError(f"Cannot decode body as {fmt.value}", cause=e) from e
