"""Models module initialization"""

from http import HTTPStatus

from request_client.models.media_type import (
    DEFAULT_MEDIA_TYPE,
    MEDIA_TYPE_TABLE,
    MediaType,
    SerializationFormat,
    describe,
    format_of,
    is_binary,
)
from request_client.models.result import RequestResult, StatusCode, to_status

__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "MEDIA_TYPE_TABLE",
    "MediaType",
    "SerializationFormat",
    "describe",
    "format_of",
    "is_binary",
    "HTTPStatus",
    "RequestResult",
    "StatusCode",
    "to_status",
]
