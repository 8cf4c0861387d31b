"""Media types and their serialization formats"""

from enum import Enum
from typing import Any, Dict, Tuple

from request_client.exceptions import InvalidArgumentError


class SerializationFormat(str, Enum):
    """Format tags understood by the codec"""
    DEFAULT = "default"
    JSON = "json"
    XML = "xml"
    BSON = "bson"


class MediaType(str, Enum):
    """Media types a client can negotiate"""
    NONE = "none"
    JSON = "application/json"
    XML = "application/xml"
    BSON = "application/bson"

    @classmethod
    def parse(cls, value: Any) -> "MediaType":
        """
        Resolve a media type from a member, content type or member name

        Raises:
            InvalidArgumentError: If value is not a known media type
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if text in (member.value, member.name.lower()):
                    return member

        raise InvalidArgumentError("media_type", f"media_type is invalid: {value!r}")


# Content type and codec format for every media type
MEDIA_TYPE_TABLE: Dict[MediaType, Tuple[str, SerializationFormat]] = {
    MediaType.NONE: ("none", SerializationFormat.DEFAULT),
    MediaType.JSON: ("application/json", SerializationFormat.JSON),
    MediaType.XML: ("application/xml", SerializationFormat.XML),
    MediaType.BSON: ("application/bson", SerializationFormat.BSON),
}

DEFAULT_MEDIA_TYPE = MediaType.JSON


def describe(media_type: MediaType) -> str:
    """Content type string sent as Accept and as the body content type"""
    return MEDIA_TYPE_TABLE[media_type][0]


def format_of(media_type: MediaType) -> SerializationFormat:
    """Codec format used to encode bodies and decode responses"""
    return MEDIA_TYPE_TABLE[media_type][1]


def is_binary(media_type: MediaType) -> bool:
    """Binary payloads carry no charset"""
    return format_of(media_type) is SerializationFormat.BSON
